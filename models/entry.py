"""Pool entry data model."""

from dataclasses import dataclass, field

IN_PROGRESS = "in_progress"
SUBMITTED = "submitted"


@dataclass
class Entry:
    """One user's bracket in the pool."""
    name: str
    picks: dict[str, str] = field(default_factory=dict)  # game_id -> team_id
    tie_breaker: int | None = None  # predicted combined score of the championship game
    status: str = IN_PROGRESS

    @property
    def is_submitted(self) -> bool:
        return self.status == SUBMITTED
