"""
Data models and type definitions for HN Leaderboard.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .config import MAX_NUMBER_OF_RETRIES, RETRY_DELAY, SLOW_WARNING_AFTER


@dataclass(frozen=True)
class HNItem:
    """Represents a Hacker News item (story or comment)."""
    id: int
    type: Optional[str] = None
    by: Optional[str] = None
    title: Optional[str] = None
    score: int = 0
    text: Optional[str] = None
    time: Optional[int] = None
    parent: Optional[int] = None
    kids: Tuple[int, ...] = ()
    deleted: bool = False
    dead: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "HNItem":
        """Build an item from the JSON object returned by the item endpoint."""
        return cls(
            id=data["id"],
            type=data.get("type"),
            by=data.get("by"),
            title=data.get("title"),
            score=data.get("score", 0),
            text=data.get("text"),
            time=data.get("time"),
            parent=data.get("parent"),
            kids=tuple(data.get("kids") or ()),
            deleted=bool(data.get("deleted", False)),
            dead=bool(data.get("dead", False)),
        )


class CommenterEntry(NamedTuple):
    """A ranked commenter and the number of comments they wrote."""
    author: str
    count: int


@dataclass
class LeaderboardReport:
    """Result of one aggregation run."""
    stories: List[HNItem]
    top_commenters: List[CommenterEntry]
    comment_count: int = 0


@dataclass
class RetryPolicy:
    """How the orchestrator reacts to transient failures and slow runs."""
    max_retries: int = MAX_NUMBER_OF_RETRIES
    retry_delay: float = RETRY_DELAY
    slow_warning_after: Optional[float] = SLOW_WARNING_AFTER
