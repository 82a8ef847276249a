"""Composition root - builds the stores shared by UI collaborators."""

import logging
from dataclasses import dataclass
from functools import partial

import redis.asyncio

from tripstate.adapters.fixtures import fetch_itinerary, fetch_wishlist
from tripstate.config import Settings, get_settings
from tripstate.db.engine import create_async_engine_from_settings, create_session_factory
from tripstate.db.inmemory import InMemoryKeyValueSlot
from tripstate.db.redis_store import RedisKeyValueSlot
from tripstate.db.repositories import KeyValueSlot
from tripstate.db.sql_repositories import SqlKeyValueSlot
from tripstate.stores.itinerary import ItineraryManager
from tripstate.stores.preferences import PreferenceStore
from tripstate.stores.wishlist import WishlistManager
from tripstate.utils.logging import StructuredStoreLogger
from tripstate.utils.metrics import PrometheusItineraryMetrics, PrometheusStoreMetrics

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Stores owned by the top-level composition and handed to consumers."""

    settings: Settings
    preferences: PreferenceStore
    itinerary: ItineraryManager
    wishlist: WishlistManager


def create_slot_from_settings(settings: Settings) -> KeyValueSlot:
    """Create the durable slot selected by ``preferences_backend``.

    Raises:
        ValueError: If the selected backend has no connection URL.
    """
    if settings.preferences_backend == "sql":
        engine = create_async_engine_from_settings(settings)
        return SqlKeyValueSlot(create_session_factory(engine))

    if settings.preferences_backend == "redis":
        if not settings.redis_url:
            raise ValueError(
                "REDIS_URL must be set when preferences_backend is 'redis'. "
                "Please configure the redis_url setting."
            )
        return RedisKeyValueSlot(redis.asyncio.from_url(settings.redis_url))

    return InMemoryKeyValueSlot()


def create_services(
    settings: Settings | None = None, slot: KeyValueSlot | None = None
) -> Services:
    """Wire the preference store, itinerary manager and wishlist manager.

    Args:
        settings: Settings (default: cached environment settings)
        slot: Durable slot override (default: from settings)

    Returns:
        Services container; call start() before reading preferences
    """
    settings = settings or get_settings()
    slot = slot or create_slot_from_settings(settings)

    preferences = PreferenceStore(
        slot,
        settings.preferences_key,
        serialize_writes=settings.serialize_preference_writes,
        metrics=PrometheusStoreMetrics(),
        write_logger=StructuredStoreLogger(),
    )
    itinerary = ItineraryManager(
        partial(fetch_itinerary, settings.fetch_delay_ms),
        metrics=PrometheusItineraryMetrics(),
    )
    wishlist = WishlistManager(partial(fetch_wishlist, settings.fetch_delay_ms))

    logger.info(f"Services created with {settings.preferences_backend} preference backend")
    return Services(
        settings=settings,
        preferences=preferences,
        itinerary=itinerary,
        wishlist=wishlist,
    )


async def start(services: Services) -> None:
    """Run the initial preference load."""
    await services.preferences.load()
