"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from tripstate.db.engine import create_schema
from tripstate.db.inmemory import InMemoryKeyValueSlot
from tripstate.db.repositories import PersistenceReadError, PersistenceWriteError


class FlakySlot(InMemoryKeyValueSlot):
    """In-memory slot whose reads or writes can be made to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise PersistenceReadError(f"read of {key!r} failed")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceWriteError(f"write of {key!r} failed")
        self.writes.append((key, value))
        await super().set(key, value)


@pytest.fixture
def slot() -> FlakySlot:
    """Durable slot shared by a test (survives store 'restarts')."""
    return FlakySlot()


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine over a single in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    await create_schema(engine)

    yield engine

    await engine.dispose()
