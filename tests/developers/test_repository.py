"""
Unit tests for the developer storage gateway
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from devgraph.dbmodels import Developers
from devgraph.developers.models import Developer
from devgraph.developers.repository import (
    DeveloperRepository,
    build_update_statement,
    is_present,
    present_fields,
)
from devgraph.errors import NotFoundError, StorageError, ValidationError


def compile_statement(stmt):
    compiled = stmt.compile(dialect=postgresql.dialect())
    return str(compiled), compiled.params


def developer_row(**overrides) -> Developers:
    values = {
        "id": 1,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "github_url": "",
        "stack": ["go"],
    }
    values.update(overrides)
    return Developers(**values)


@pytest.fixture
def session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def session_factory(session):
    @asynccontextmanager
    async def _factory():
        yield session

    return MagicMock(side_effect=_factory)


@pytest.fixture
def repository(session_factory):
    return DeveloperRepository(session_factory=session_factory)


class TestPresentFields:
    """Tests for field presence detection."""

    @pytest.mark.parametrize("value", ["", [], (), None])
    def test_empty_values_are_absent(self, value):
        assert is_present(value) is False

    @pytest.mark.parametrize("value", ["a", ["go"], ("go",)])
    def test_non_empty_values_are_present(self, value):
        assert is_present(value) is True

    def test_only_present_fields_in_column_order(self):
        developer = Developer(id=1, github_url="https://github.com/ada", first_name="Ada")

        assert list(present_fields(developer)) == ["first_name", "github_url"]

    def test_id_is_never_an_updatable_field(self):
        assert present_fields(Developer(id=5)) == {}


class TestBuildUpdateStatement:
    """Tests for the partial UPDATE builder."""

    def test_single_field(self):
        sql, params = compile_statement(build_update_statement(Developer(id=1, first_name="Ada")))

        set_clause = sql.split("WHERE")[0]
        assert set_clause.startswith("UPDATE developers SET")
        assert "first_name=%(first_name)s" in set_clause
        assert "last_name" not in set_clause
        assert "github_url" not in set_clause
        assert "stack" not in set_clause
        assert params["first_name"] == "Ada"

    def test_where_clause_targets_id(self):
        sql, params = compile_statement(build_update_statement(Developer(id=42, last_name="Byron")))

        assert "WHERE developers.id = %(id_1)s" in sql
        assert params["id_1"] == 42

    def test_returns_every_column(self):
        sql, _ = compile_statement(build_update_statement(Developer(id=1, stack=["go"])))

        returning = sql.split("RETURNING")[1]
        for column in ("id", "first_name", "last_name", "github_url", "stack"):
            assert f"developers.{column}" in returning

    def test_all_fields(self):
        developer = Developer(
            id=1,
            first_name="Ada",
            last_name="Lovelace",
            github_url="https://github.com/ada",
            stack=["go", "python"],
        )

        sql, params = compile_statement(build_update_statement(developer))

        set_clause = sql.split("WHERE")[0]
        for column in ("first_name", "last_name", "github_url", "stack"):
            assert f"{column}=%({column})s" in set_clause
        assert params["stack"] == ["go", "python"]

    def test_values_are_bound_not_interpolated(self):
        hostile = "x'; DROP TABLE developers; --"

        sql, params = compile_statement(build_update_statement(Developer(id=1, last_name=hostile)))

        assert hostile not in sql
        assert params["last_name"] == hostile

    def test_missing_id(self):
        with pytest.raises(ValidationError, match="developer id is required"):
            build_update_statement(Developer(first_name="Ada"))

    def test_no_present_fields(self):
        with pytest.raises(ValidationError, match="at least one field must be updated"):
            build_update_statement(Developer(id=1, first_name="", stack=[]))


class TestGetAll:
    """Tests for DeveloperRepository.get_all."""

    @pytest.mark.asyncio
    async def test_returns_developers(self, repository, session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            developer_row(),
            developer_row(id=2, first_name="Grace", last_name="Hopper", stack=None),
        ]
        session.execute.return_value = result

        developers = await repository.get_all()

        assert [d.id for d in developers] == [1, 2]
        assert developers[0].stack == ["go"]
        assert developers[1].stack == []

    @pytest.mark.asyncio
    async def test_empty_table_is_empty_list(self, repository, session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        session.execute.return_value = result

        assert await repository.get_all() == []

    @pytest.mark.asyncio
    async def test_database_failure_is_storage_error(self, repository, session):
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))

        with pytest.raises(StorageError, match="querying all developers"):
            await repository.get_all()


class TestGetById:
    """Tests for DeveloperRepository.get_by_id."""

    @pytest.mark.asyncio
    async def test_returns_scanned_record(self, repository, session, ada):
        result = MagicMock()
        result.scalar_one_or_none.return_value = developer_row()
        session.execute.return_value = result

        assert await repository.get_by_id(1) == ada

    @pytest.mark.asyncio
    async def test_missing_row_is_not_found(self, repository, session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        with pytest.raises(NotFoundError) as exc_info:
            await repository.get_by_id(99)

        assert exc_info.value.developer_id == 99

    @pytest.mark.asyncio
    async def test_query_failure_is_not_reported_as_not_found(self, repository, session):
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))

        with pytest.raises(StorageError) as exc_info:
            await repository.get_by_id(1)

        assert not isinstance(exc_info.value, NotFoundError)
        assert "querying developer ID 1" in str(exc_info.value)


class TestCreate:
    """Tests for DeveloperRepository.create."""

    @pytest.mark.asyncio
    async def test_returns_generated_id(self, repository, session, ada):
        result = MagicMock()
        result.scalar_one.return_value = developer_row(id=1)
        session.execute.return_value = result

        created = await repository.create(
            Developer(first_name="Ada", last_name="Lovelace", stack=["go"])
        )

        assert created == ada

    @pytest.mark.asyncio
    async def test_ignores_client_supplied_id(self, repository, session):
        result = MagicMock()
        result.scalar_one.return_value = developer_row(id=7)
        session.execute.return_value = result

        await repository.create(Developer(id=500, first_name="Ada", last_name="Lovelace"))

        stmt = session.execute.call_args.args[0]
        sql, params = compile_statement(stmt)
        assert sql.startswith("INSERT INTO developers (first_name, last_name, github_url, stack)")
        assert 500 not in params.values()

    @pytest.mark.asyncio
    async def test_constraint_violation_is_storage_error(self, repository, session):
        session.execute.side_effect = IntegrityError("INSERT", {}, Exception("null value"))

        with pytest.raises(StorageError, match="inserting developer"):
            await repository.create(Developer(first_name="Ada"))


class TestUpdate:
    """Tests for DeveloperRepository.update."""

    @pytest.mark.asyncio
    async def test_returns_updated_row(self, repository, session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = developer_row(last_name="Byron")
        session.execute.return_value = result

        updated = await repository.update(Developer(id=1, last_name="Byron"))

        assert updated.last_name == "Byron"
        assert updated.first_name == "Ada"
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_id_issues_no_statement(self, repository, session_factory, session):
        with pytest.raises(ValidationError):
            await repository.update(Developer(first_name="Ada"))

        session_factory.assert_not_called()
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_fields_issues_no_statement(self, repository, session_factory, session):
        with pytest.raises(ValidationError, match="at least one field"):
            await repository.update(Developer(id=1))

        session_factory.assert_not_called()
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_id_is_storage_error(self, repository, session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        with pytest.raises(StorageError) as exc_info:
            await repository.update(Developer(id=99, first_name="Ada"))

        assert isinstance(exc_info.value, NotFoundError)

    @pytest.mark.asyncio
    async def test_database_failure_is_storage_error(self, repository, session):
        session.execute.side_effect = OSError("connection refused")

        with pytest.raises(StorageError, match="updating developer ID 1"):
            await repository.update(Developer(id=1, first_name="Ada"))
