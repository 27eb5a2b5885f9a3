"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import shutil
import subprocess
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from devgraph.developers.models import Developer  # noqa: E402


def postgres_available() -> bool:
    """pytest-postgresql needs the PostgreSQL server binaries and a non-root user."""
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        return False
    if shutil.which("pg_ctl"):
        return True
    pg_config = shutil.which("pg_config")
    if not pg_config:
        return False
    try:
        bindir = subprocess.run(
            [pg_config, "--bindir"], capture_output=True, text=True, check=True
        ).stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return False
    return (Path(bindir) / "pg_ctl").exists()


@pytest.fixture(scope="function")
def test_database(postgresql: Any) -> Generator[tuple[str, str], None, None]:
    """Return the DSN for the running pytest-postgresql database."""
    info = postgresql.info
    dsn = (
        f"postgresql://{info.user}:{getattr(info, 'password', '') or ''}"
        f"@{info.host}:{info.port}/{info.dbname}"
    )
    yield dsn, info.dbname


@pytest.fixture(scope="function")
def alembic_migrate(test_database: tuple[str, str]) -> Generator[None, None, None]:
    """Run Alembic upgrade to head against the pytest-postgresql instance."""
    from alembic import command
    from devgraph.database.cli import get_alembic_config

    dsn, _ = test_database
    os.environ["DEVGRAPH_DATABASE_URL"] = dsn
    cfg = get_alembic_config()
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest_asyncio.fixture(scope="function")
async def reset_shared_db_connections(
    test_database: tuple[str, str],
) -> Any:
    """Reset and configure shared database connections for the test database."""
    from devgraph.database.connection import dispose_database, init_database, reset_database

    dsn, _ = test_database

    reset_database()
    init_database(dsn, force_reinit=True)

    yield

    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(
    alembic_migrate: None, reset_shared_db_connections: None, test_database: tuple[str, str]
) -> Any:
    """Provide an async SQLAlchemy session for testing."""
    _ = alembic_migrate, reset_shared_db_connections

    from devgraph.database.connection import get_test_db_session

    dsn, _ = test_database
    async with get_test_db_session(dsn) as session:
        yield session


@pytest.fixture
def ada() -> Developer:
    """A developer as returned by the datastore."""
    return Developer(
        id=1,
        first_name="Ada",
        last_name="Lovelace",
        github_url="",
        stack=["go"],
    )


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "requires_db: mark test as requiring database connection")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config: Any, items: list[pytest.Item]) -> None:
    """Skip database tests when PostgreSQL is not installed."""
    _ = config
    if postgres_available():
        return
    skip_db = pytest.mark.skip(
        reason="PostgreSQL server cannot be started here (no pg_ctl or running as root)"
    )
    for item in items:
        if "requires_db" in item.keywords:
            item.add_marker(skip_db)
