"""In-memory implementation of the durable slot."""


class InMemoryKeyValueSlot:
    """In-memory implementation of KeyValueSlot.

    Entries live as long as the instance, so sharing one instance between
    two stores simulates a process restart.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        """Read an entry."""
        return self._entries.get(key)

    async def set(self, key: str, value: str) -> None:
        """Write an entry."""
        self._entries[key] = value
