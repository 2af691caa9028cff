"""Data models for profiles, tiles and view state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

COMPLETED_FIELD = "firstplacechampions"


class SortMode(Enum):
    """How the tile grid is ordered."""
    ALPHABETICAL = "alphabetical"
    COMPLETION = "completion"


class SortDirection(Enum):
    """Direction applied on top of the sort mode."""
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


class ConfirmAction(Enum):
    """Action a pending toggle will perform once confirmed."""
    ADD = "add"
    REMOVE = "remove"


class ConnectionState(Enum):
    """Lifecycle of the connection to the table store."""
    TESTING = "testing"
    CONNECTED = "connected"
    FAILED = "failed"
    LOADING = "loading"
    READY = "ready"


class ChangeType(Enum):
    """Kind of row change pushed by a change feed."""
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def unique_keys(keys) -> list[str]:
    """Drop duplicate keys, keeping the first occurrence."""
    seen = set()
    result = []
    for key in keys or []:
        if key not in seen:
            seen.add(key)
            result.append(key)
    return result


@dataclass
class Profile:
    """A named tracking context holding one user's completed champions."""
    id: str
    name: str
    completed: list[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        self.completed = unique_keys(self.completed)

    def is_completed(self, key: str) -> bool:
        return key in self.completed

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        """Build a profile from a store row."""
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            completed=row.get(COMPLETED_FIELD) or [],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_row(self) -> dict:
        """Serialize to the store's column layout."""
        return {
            "id": self.id,
            "name": self.name,
            COMPLETED_FIELD: list(self.completed),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class Tile:
    """Catalog entry for a champion tile."""
    name: str
    image: Optional[str] = None


@dataclass
class ChampionProgress:
    """Per-champion progress record for one profile."""
    id: str
    profile_id: str
    champion_name: str
    is_completed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "ChampionProgress":
        return cls(
            id=str(row["id"]),
            profile_id=str(row["profile_id"]),
            champion_name=row["champion_name"],
            is_completed=bool(row.get("is_completed")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass(frozen=True)
class ChangeEvent:
    """Row change notification from a table store."""
    table: str
    type: ChangeType
    record: dict


@dataclass(frozen=True)
class PendingConfirmation:
    """Toggle waiting for an explicit confirm or cancel."""
    item: str
    action: ConfirmAction


@dataclass
class ViewState:
    """Per-session selection and view settings. Never persisted."""
    profile_id: Optional[str] = None
    search_text: str = ""
    sort_mode: SortMode = SortMode.ALPHABETICAL
    sort_direction: SortDirection = SortDirection.ASCENDING
    pending: Optional[PendingConfirmation] = None

    def toggle_direction(self):
        self.sort_direction = self.sort_direction.flipped()


@dataclass
class ProgressSummary:
    """Completed/total counts for the progress bar."""
    completed: int = 0
    total: int = 0
    missing: list[str] = field(default_factory=list)

    @property
    def percent(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total * 100
