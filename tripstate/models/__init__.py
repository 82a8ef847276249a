"""Models package - re-exports for convenience."""

from tripstate.models.common import CamelModel, Currency, LoadState
from tripstate.models.itinerary import Activity, ActivityFields, Day, Itinerary
from tripstate.models.preferences import (
    DEFAULT_PREFERENCES,
    DisplayPreferences,
    Filters,
    NotificationSettings,
    Preferences,
)
from tripstate.models.wishlist import WishlistItem

__all__ = [
    # Common
    "CamelModel",
    "Currency",
    "LoadState",
    # Preferences
    "Preferences",
    "Filters",
    "NotificationSettings",
    "DisplayPreferences",
    "DEFAULT_PREFERENCES",
    # Itinerary
    "Itinerary",
    "Day",
    "Activity",
    "ActivityFields",
    # Wishlist
    "WishlistItem",
]
