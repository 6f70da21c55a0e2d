"""Custom exception classes raised by the storage-backed services."""


class ScoreboardError(Exception):
    """Base error for the scoreboard services."""


class GroupNotFoundError(ScoreboardError, KeyError):
    """Raised when an operation requires a group that does not exist."""

    def __init__(self, group_id: str):
        super().__init__(f"Group {group_id} not found")
        self.group_id = group_id

    def __str__(self) -> str:
        return f"Group {self.group_id} not found"


class StorageConfigurationError(ScoreboardError, RuntimeError):
    """Raised when the backing store is misconfigured or cannot sign delegation tokens."""


class InvalidHistoryError(ScoreboardError, ValueError):
    """Raised when an uploaded score history is too large or not JSON."""
