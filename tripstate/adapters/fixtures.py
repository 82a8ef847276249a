"""Fixture-based upstream sources for the itinerary and wishlist."""

import asyncio
import json
from pathlib import Path

from pydantic import TypeAdapter

from tripstate.config import get_settings
from tripstate.models.itinerary import Itinerary
from tripstate.models.wishlist import WishlistItem

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

_wishlist_adapter = TypeAdapter(list[WishlistItem])


async def _simulate_latency(delay_ms: int | None) -> None:
    """Sleep for the upstream delay (settings default when None)."""
    if delay_ms is None:
        delay_ms = get_settings().fetch_delay_ms
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)


async def fetch_itinerary(delay_ms: int | None = None) -> Itinerary:
    """Fetch the trip itinerary from fixtures.

    Args:
        delay_ms: Simulated upstream latency (default from settings)

    Returns:
        Full itinerary document
    """
    await _simulate_latency(delay_ms)

    fixtures_path = FIXTURES_DIR / "itinerary.json"
    with open(fixtures_path) as f:
        data = json.load(f)

    return Itinerary.model_validate(data)


async def fetch_wishlist(delay_ms: int | None = None) -> list[WishlistItem]:
    """Fetch saved destinations from fixtures.

    Args:
        delay_ms: Simulated upstream latency (default from settings)

    Returns:
        Saved destinations in display order
    """
    await _simulate_latency(delay_ms)

    fixtures_path = FIXTURES_DIR / "wishlist.json"
    with open(fixtures_path) as f:
        data = json.load(f)

    return _wishlist_adapter.validate_python(data)


async def fetch_nothing(delay_ms: int | None = None) -> None:
    """Upstream that has no document for this user."""
    await _simulate_latency(delay_ms)
    return None
