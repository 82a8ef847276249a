"""Durable slot protocol and persistence errors."""

from typing import Protocol


class PersistenceError(Exception):
    """Durable storage operation failed."""

    pass


class PersistenceReadError(PersistenceError):
    """Durable slot could not be read or its content could not be decoded."""

    pass


class PersistenceWriteError(PersistenceError):
    """Durable slot write failed; nothing was committed."""

    pass


class KeyValueSlot(Protocol):
    """Named text entries in durable local storage."""

    async def get(self, key: str) -> str | None:
        """Read an entry.

        Args:
            key: Entry name

        Returns:
            Stored text or None if the entry is absent

        Raises:
            PersistenceReadError: Backend failed to read
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Write an entry, replacing any previous value.

        Args:
            key: Entry name
            value: Text to store

        Raises:
            PersistenceWriteError: Backend failed to write
        """
        ...
