from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import strawberry

from ...developers.coercion import coerce_developer
from ...errors import DeveloperError, OperationError
from ...logging import get_logger

if TYPE_CHECKING:
    from ...developers.repository import DeveloperRepository
    from ..types.developer import Developer

logger = get_logger(__name__)


def get_repository(info: strawberry.Info) -> DeveloperRepository:
    """Return the storage gateway bound to this request."""
    return info.context["repository"]


# Query resolvers
async def resolve_developers(
    info: strawberry.Info, id: int | None = None, name: str | None = None
) -> list[Developer]:
    """
    Resolve every developer.

    The ``id`` and ``name`` arguments are part of the published schema but
    do not filter the result.
    """
    if id is not None or name is not None:
        logger.debug("Ignoring developers filter arguments", id=id, name=name)

    try:
        developers = await get_repository(info).get_all()
    except DeveloperError as e:
        raise OperationError("getting all developers", e) from e

    from ..types.developer import Developer as DeveloperType

    return [DeveloperType.from_record(developer) for developer in developers]


async def resolve_developer_by_id(info: strawberry.Info, id: int | None) -> Developer | None:
    """Resolve a developer by its ID; null when no id was given."""
    if id is None:
        return None

    try:
        developer = await get_repository(info).get_by_id(id)
    except DeveloperError as e:
        raise OperationError(f"getting developer ID {id}", e) from e

    from ..types.developer import Developer as DeveloperType

    return DeveloperType.from_record(developer)


# Mutation resolvers
async def create_developer(info: strawberry.Info, raw_args: Mapping[str, Any]) -> Developer:
    """Create a new developer from the mutation arguments."""
    try:
        developer = coerce_developer(raw_args)
        created = await get_repository(info).create(developer)
    except DeveloperError as e:
        raise OperationError("creating new developer", e) from e

    from ..types.developer import Developer as DeveloperType

    return DeveloperType.from_record(created)


async def update_developer(info: strawberry.Info, raw_args: Mapping[str, Any]) -> Developer:
    """Apply a partial update from the mutation arguments."""
    try:
        developer = coerce_developer(raw_args)
        updated = await get_repository(info).update(developer)
    except DeveloperError as e:
        raise OperationError("updating developer", e) from e

    from ..types.developer import Developer as DeveloperType

    return DeveloperType.from_record(updated)
