import threading
import time
from typing import List, Optional

from app.modules.players.schemas import Player


def _initial_default_players() -> List[Player]:
    return [
        Player(id=1742075931014, name="Andrew", team="2", active=True),
        Player(id=1742075931914, name="Seth", team="2", active=True),
        Player(id=1742075933790, name="Jason", team="1", active=True),
        Player(id=1742075935050, name="Nate", team="2", active=True),
        Player(id=1742075939280, name="Joe", team="1", active=False),
        Player(id=1742075941065, name="Ryan", team="1", active=True),
        Player(id=1742075943344, name="JD", team="1", active=True),
        Player(id=1742075954745, name="Frank", team="2", active=True),
        Player(id=1742075979391, name="Ricardo", team="1", active=True),
        Player(id=1742075987612, name="Nick", team="2", active=True),
        Player(id=1742076001247, name="Loukas", team="1", active=True),
        Player(id=1742076029522, name="Adam", team="2", active=False),
        Player(id=1742267332075, name="Rodney", team="1", active=True),
        Player(id=1742267457728, name="Mark", team="2", active=True),
    ]


class DefaultPlayersService:
    """Thread-safe in-memory default roster. Nothing here is persisted."""

    def __init__(self, players: Optional[List[Player]] = None):
        self._players: List[Player] = list(players) if players is not None else _initial_default_players()
        self._lock = threading.Lock()
        self._last_id = 0

    def get_all(self) -> List[Player]:
        """Return copies so callers cannot mutate the roster"""
        with self._lock:
            return [p.model_copy() for p in self._players]

    def save_all(self, players: List[Player]) -> None:
        """Replace the whole roster"""
        with self._lock:
            self._players = [p.model_copy() for p in players]

    def add(self, name: str, team: str) -> Player:
        """Append a new active player whose id is the creation time in milliseconds"""
        with self._lock:
            # Bump past the last issued id when two adds land in the same millisecond
            player_id = max(int(time.time() * 1000), self._last_id + 1)
            self._last_id = player_id
            player = Player(id=player_id, name=name, team=team, active=True, points=0)
            self._players.append(player)
            return player.model_copy()

    def move(self, player_id: int, team: str) -> bool:
        with self._lock:
            for player in self._players:
                if player.id == player_id:
                    player.team = team
                    return True
            return False

    def delete(self, player_id: int) -> bool:
        with self._lock:
            for i, player in enumerate(self._players):
                if player.id == player_id:
                    del self._players[i]
                    return True
            return False
