from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from app.config import settings
from app.modules.shares.schemas import GameShareCreate, GameShareCreateResponse
from app.modules.shares.service import GameShareService
from app.core.dependencies import get_share_service

router = APIRouter(tags=["shares"])


@router.post("/games/share", response_model=GameShareCreateResponse)
async def create_share(
    share_data: GameShareCreate,
    service: GameShareService = Depends(get_share_service)
):
    """Create a share link for one game of a group"""
    if not share_data.group_id.strip() or not share_data.game_id.strip():
        raise HTTPException(status_code=400, detail="groupId and gameId are required")

    share = service.create_share(share_data.group_id.strip(), share_data.game_id.strip())
    return GameShareCreateResponse(
        share_code=share.code,
        share_url=f"{settings.share_url_base}?s={share.code}"
    )


@router.get("/shares/{code}")
async def get_share(
    code: str,
    service: GameShareService = Depends(get_share_service)
):
    """Return the shared game's JSON exactly as stored"""
    share = service.get_share(code.strip())
    if share is None:
        raise HTTPException(status_code=404, detail="Share not found")

    game_json = service.get_game_json(share)
    if game_json is None:
        raise HTTPException(status_code=404, detail="Game data not found")

    return Response(content=game_json, media_type="application/json")
