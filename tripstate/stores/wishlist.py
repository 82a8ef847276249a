"""Wishlist manager - session-only list of saved destinations."""

import logging
from collections.abc import Awaitable, Callable

from tripstate.models.common import LoadState
from tripstate.models.wishlist import WishlistItem

logger = logging.getLogger(__name__)

WishlistFetch = Callable[[], Awaitable[list[WishlistItem] | None]]


class WishlistManager:
    """Owns the saved-destination list for one session."""

    def __init__(self, fetch: WishlistFetch) -> None:
        """Initialize manager in the loading state.

        Args:
            fetch: Upstream source returning the saved destinations
        """
        self._fetch = fetch
        self._items: list[WishlistItem] = []
        self._state = LoadState.loading

    @property
    def state(self) -> LoadState:
        """Current lifecycle state."""
        return self._state

    @property
    def items(self) -> list[WishlistItem]:
        """Copy of the saved destinations."""
        return list(self._items)

    async def load_wishlist(self) -> list[WishlistItem]:
        """Fetch and replace the list."""
        self._state = LoadState.loading
        try:
            items = await self._fetch() or []
        except Exception as e:
            logger.error(f"Error loading wishlist: {e}", exc_info=True)
            items = []

        self._items = list(items)
        self._state = LoadState.loaded if self._items else LoadState.empty
        return self.items

    def remove(self, item_id: str) -> list[WishlistItem]:
        """Drop the entry with ``item_id``; a miss changes nothing."""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return self.items

        self._items = remaining
        if not remaining:
            self._state = LoadState.empty
        return self.items
