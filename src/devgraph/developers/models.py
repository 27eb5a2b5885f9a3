"""Developer record shape shared by the storage and GraphQL layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Developer:
    """A developer profile.

    Zero values mark a field as unset: ``id == 0`` means the datastore has not
    assigned an id yet, and an empty string or list means "not supplied".
    """

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    github_url: str = ""
    stack: list[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Any) -> Developer:
        """Build a Developer from an ORM row or any object with matching attributes."""
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            github_url=record.github_url or "",
            stack=list(record.stack or []),
        )
