"""
Developer GraphQL type definitions
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...developers.models import Developer as DeveloperRecord


@strawberry.type
class Developer:
    """Developer type for GraphQL API."""

    id: int | None
    first_name: str | None
    last_name: str | None
    github_url: str | None
    stack: list[str | None] | None

    @classmethod
    def from_record(cls, developer: DeveloperRecord) -> Developer:
        return cls(
            id=developer.id,
            first_name=developer.first_name,
            last_name=developer.last_name,
            github_url=developer.github_url,
            stack=list(developer.stack),
        )
