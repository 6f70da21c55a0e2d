from pydantic import BaseModel, Field
from typing import Literal

Team = Literal["1", "2", "noteam"]


class Player(BaseModel):
    id: int
    name: str
    team: Team = "1"
    active: bool = True
    points: int = Field(default=0, ge=0)


class PlayerMove(BaseModel):
    id: int
    team: Team


class PlayerAdd(BaseModel):
    name: str = ""
    team: Team = "noteam"


class PlayerDelete(BaseModel):
    id: int
