from pydantic import BaseModel, Field
from datetime import datetime


class GameShare(BaseModel):
    code: str
    group_id: str = Field(alias="groupId")
    game_id: str = Field(alias="gameId")
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True

    @property
    def game_blob_path(self) -> str:
        return f"{self.group_id}/games/{self.game_id}.json"


class GameShareCreate(BaseModel):
    group_id: str = Field(default="", alias="groupId")
    game_id: str = Field(default="", alias="gameId")

    class Config:
        populate_by_name = True


class GameShareCreateResponse(BaseModel):
    share_code: str = Field(alias="shareCode")
    share_url: str = Field(alias="shareUrl")

    class Config:
        populate_by_name = True
