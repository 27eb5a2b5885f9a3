"""Storage gateway for developer records."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from sqlalchemy import Update, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import Developers
from ..errors import NotFoundError, StorageError, ValidationError
from ..logging import get_logger
from .models import Developer

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

# Columns an update may touch, in SET-clause order
UPDATABLE_FIELDS = ("first_name", "last_name", "github_url", "stack")


def is_present(value: Any) -> bool:
    """A value is present when it is a non-empty string or a non-empty list."""
    if value is None:
        return False
    if isinstance(value, str | list | tuple):
        return len(value) > 0
    return True


def present_fields(developer: Developer) -> dict[str, Any]:
    """Return the updatable fields of ``developer`` that carry a present value."""
    fields: dict[str, Any] = {}
    for name in UPDATABLE_FIELDS:
        value = getattr(developer, name)
        if is_present(value):
            fields[name] = list(value) if name == "stack" else value
    return fields


def build_update_statement(developer: Developer) -> Update:
    """Build the partial UPDATE for ``developer``.

    The statement sets only the present fields, binds every value as a
    parameter and returns the full row, so the write and the read-back are a
    single round trip.

    Raises:
        ValidationError: if the id is unset or no field is present
    """
    if not developer.id:
        raise ValidationError("developer id is required")

    fields = present_fields(developer)
    if not fields:
        raise ValidationError("at least one field must be updated")

    return (
        update(Developers)
        .where(Developers.id == developer.id)
        .values(**fields)
        .returning(Developers)
    )


class DeveloperRepository:
    """Reads and writes developer rows.

    Holds nothing but the session factory, which hands out sessions from the
    shared connection pool; instances are safe to share across requests.
    """

    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session_factory = session_factory

    async def get_all(self) -> list[Developer]:
        """Return every developer ordered by id (empty list when there are none)."""
        stmt = select(Developers).order_by(Developers.id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [Developer.from_record(row) for row in result.scalars().all()]
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"querying all developers: {e}") from e

    async def get_by_id(self, developer_id: int) -> Developer:
        """Return the developer with ``developer_id``.

        Raises:
            NotFoundError: if no row has this id
            StorageError: if the query fails
        """
        stmt = select(Developers).where(Developers.id == developer_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.scalar_one_or_none()
                if row is None:
                    raise NotFoundError(developer_id)
                return Developer.from_record(row)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"querying developer ID {developer_id}: {e}") from e

    async def create(self, developer: Developer) -> Developer:
        """Insert a new developer and return it with its generated id.

        Any id set on ``developer`` is ignored.
        """
        stmt = (
            insert(Developers)
            .values(
                first_name=developer.first_name,
                last_name=developer.last_name,
                github_url=developer.github_url,
                stack=list(developer.stack),
            )
            .returning(Developers)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                created = Developer.from_record(result.scalar_one())
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"inserting developer: {e}") from e

        logger.info("Developer created", developer_id=created.id)
        return created

    async def update(self, developer: Developer) -> Developer:
        """Apply a partial update and return the resulting row.

        Only fields with a present value are written. Validation happens
        before any session is opened, so invalid input never reaches the
        datastore.

        Raises:
            ValidationError: if the id is unset or no field is present
            NotFoundError: if no row has this id
            StorageError: if the statement fails
        """
        stmt = build_update_statement(developer)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.scalar_one_or_none()
                if row is None:
                    raise NotFoundError(developer.id)
                updated = Developer.from_record(row)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"updating developer ID {developer.id}: {e}") from e

        logger.info(
            "Developer updated",
            developer_id=updated.id,
            updated_fields=list(present_fields(developer)),
        )
        return updated
