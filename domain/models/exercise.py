"""
Exercise catalog records.

Exercises live in two namespaces: the shared global catalog and each
client's private custom catalog. Names are case-insensitively unique within
a namespace, compared through ``exercise_name_key``.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, Field


GLOBAL_SCOPE = "global"


def exercise_name_key(name: str) -> str:
    """
    Comparison key for an exercise name.

    Trims and case-folds; the persisted display name keeps its casing.

    Examples:
        >>> exercise_name_key("  Back Squat ")
        'back squat'
    """
    return name.strip().casefold()


class ExerciseRecord(BaseModel):
    """A resolved exercise in either the global or a client's catalog."""

    id: str
    name: str
    name_key: str
    owner_scope: str = Field(
        default=GLOBAL_SCOPE,
        description="'global' or the owning client user id",
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_global(self) -> bool:
        return self.owner_scope == GLOBAL_SCOPE

    @classmethod
    def from_row(cls, row: Dict[str, Any], owner_scope: str = GLOBAL_SCOPE) -> "ExerciseRecord":
        """Build a record from a repository row."""
        name = row.get("name") or ""
        return cls(
            id=str(row["id"]),
            name=name,
            name_key=row.get("name_key") or exercise_name_key(name),
            owner_scope=row.get("owner_id") or owner_scope,
            created_at=row.get("created_at") or datetime.now(timezone.utc),
        )
