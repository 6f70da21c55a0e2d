from datetime import datetime, timezone
from typing import Optional

from app.core.codes import generate_share_code
from app.modules.shares.schemas import GameShare
from app.storage.blob_store import BlobStore
import logging

logger = logging.getLogger(__name__)

SHARE_BLOB_PREFIX = "_shares/"


class GameShareService:
    """Share codes stored at _shares/{code}.json, each pointing at one game blob."""

    def __init__(self, store: BlobStore):
        self.store = store

    def create_share(self, group_id: str, game_id: str) -> GameShare:
        # Share codes are not checked against existing shares
        share = GameShare(
            code=generate_share_code(),
            group_id=group_id,
            game_id=game_id,
            created_at=datetime.now(timezone.utc),
        )
        data = share.model_dump_json(by_alias=True, indent=2)
        self.store.put(f"{SHARE_BLOB_PREFIX}{share.code}.json", data.encode("utf-8"))
        logger.info(f"Created share {share.code} for game {game_id} in group {group_id}")
        return share

    def get_share(self, code: str) -> Optional[GameShare]:
        """Resolve a share code. Missing and unreadable documents are both None"""
        try:
            return GameShare.model_validate_json(self.store.get(f"{SHARE_BLOB_PREFIX}{code}.json"))
        except Exception as e:
            logger.debug(f"Share {code} could not be resolved: {e}")
            return None

    def get_game_json(self, share: GameShare) -> Optional[str]:
        """Return the referenced game document verbatim"""
        try:
            return self.store.get(share.game_blob_path).decode("utf-8")
        except Exception as e:
            logger.debug(f"Game {share.game_blob_path} could not be read: {e}")
            return None
