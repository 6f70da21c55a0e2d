from fastapi import APIRouter, Depends, HTTPException
from app.modules.players.schemas import Player, PlayerMove, PlayerAdd, PlayerDelete
from app.modules.players.service import DefaultPlayersService
from app.core.dependencies import get_default_players_service
from typing import List

router = APIRouter(prefix="/default-players", tags=["default-players"])


@router.get("", response_model=List[Player])
async def get_default_players(
    service: DefaultPlayersService = Depends(get_default_players_service)
):
    return service.get_all()


@router.post("/move")
async def move_player(
    request: PlayerMove,
    service: DefaultPlayersService = Depends(get_default_players_service)
):
    if not service.move(request.id, request.team):
        raise HTTPException(status_code=404, detail="Player not found")
    return {"success": True}


@router.post("/add", response_model=Player)
async def add_player(
    request: PlayerAdd,
    service: DefaultPlayersService = Depends(get_default_players_service)
):
    if not request.name.strip():
        raise HTTPException(status_code=400, detail="Player name is required")
    return service.add(request.name.strip(), request.team)


@router.post("/delete")
async def delete_player(
    request: PlayerDelete,
    service: DefaultPlayersService = Depends(get_default_players_service)
):
    if not service.delete(request.id):
        raise HTTPException(status_code=404, detail="Player not found")
    return {"success": True}


@router.post("/save")
async def save_default_players(
    players: List[Player],
    service: DefaultPlayersService = Depends(get_default_players_service)
):
    """Replace the default roster with the posted list"""
    service.save_all(players)
    return {"success": True}
