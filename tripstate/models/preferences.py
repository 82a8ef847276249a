"""Preference models - the durable settings document."""

from pydantic import ConfigDict, Field

from tripstate.models.common import CamelModel, Currency


class Filters(CamelModel):
    """Destination search filters."""

    model_config = ConfigDict(frozen=True)

    climate: tuple[str, ...] = ()
    activity_types: tuple[str, ...] = ()
    max_distance: float | None = None
    safety_rating: float = 0
    visa_required: bool | None = None  # None = no preference


class NotificationSettings(CamelModel):
    """Push notification toggles."""

    model_config = ConfigDict(frozen=True)

    price_alerts: bool = True
    trip_reminders: bool = True
    deals: bool = True


class DisplayPreferences(CamelModel):
    """Accessibility and theme flags."""

    model_config = ConfigDict(frozen=True)

    dark_mode: bool = False
    high_contrast: bool = False


class Preferences(CamelModel):
    """Complete preferences document.

    Every top-level field always has a value; a payload missing one is
    completed from the defaults when validated.
    """

    model_config = ConfigDict(frozen=True)

    currency: Currency = Currency.USD
    language: str = "en"
    filters: Filters = Field(default_factory=Filters)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    display_preferences: DisplayPreferences = Field(default_factory=DisplayPreferences)

    def to_storage(self) -> str:
        """Encode for the durable slot (camelCase JSON)."""
        return self.model_dump_json(by_alias=True)


DEFAULT_PREFERENCES = Preferences()
