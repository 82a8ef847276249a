"""Preference store - durable settings document with write-then-commit updates.

Every mutating operation builds the merged document from the current
snapshot, writes it to the durable slot and only then swaps it in. A failed
write leaves the in-memory document untouched and raises
PersistenceWriteError.

Mutations are not serialized against each other unless ``serialize_writes``
is set: two overlapping calls merge against the same snapshot and the last
write to finish wins.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from tripstate.db.repositories import KeyValueSlot, PersistenceReadError, PersistenceWriteError
from tripstate.models.common import CamelModel
from tripstate.models.preferences import (
    DEFAULT_PREFERENCES,
    Filters,
    NotificationSettings,
    Preferences,
)

logger = logging.getLogger(__name__)


# Metrics interface (to be implemented by actual metrics system)
class PreferenceMetrics:
    """Interface for preference store metrics."""

    def record_write(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record a durable write attempt."""
        pass

    def inc_load_fallback(self, reason: str) -> None:
        """Increment load fallback counter."""
        pass


# Logging interface
class PreferenceLogger:
    """Interface for structured write logging."""

    def log_write(
        self,
        operation: str,
        key: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log a durable write attempt."""
        pass


class PreferenceStore:
    """Owns the canonical preferences document for one user/session."""

    def __init__(
        self,
        slot: KeyValueSlot,
        key: str = "preferences",
        *,
        serialize_writes: bool = False,
        metrics: PreferenceMetrics | None = None,
        write_logger: PreferenceLogger | None = None,
    ) -> None:
        """Initialize store at the default document.

        Args:
            slot: Durable key-value slot
            key: Entry name holding the encoded document
            serialize_writes: Run mutators one at a time (single-writer queue)
            metrics: Metrics recorder (optional, defaults to no-op)
            write_logger: Structured logger (optional, defaults to no-op)
        """
        self._slot = slot
        self._key = key
        self._preferences = DEFAULT_PREFERENCES
        self._loading = True
        self._write_lock = asyncio.Lock() if serialize_writes else None
        self._metrics = metrics or PreferenceMetrics()
        self._write_logger = write_logger or PreferenceLogger()

    @property
    def preferences(self) -> Preferences:
        """Current committed document."""
        return self._preferences

    @property
    def loading(self) -> bool:
        """True until the initial load() has finished."""
        return self._loading

    async def load(self) -> None:
        """Read the durable slot into memory.

        An absent entry keeps the defaults. An unreadable or undecodable entry
        is logged and the current document is kept; nothing is raised.
        """
        try:
            raw = await self._slot.get(self._key)
            if raw is None:
                logger.info(f"No stored preferences under {self._key!r}, using defaults")
                return
            self._preferences = Preferences.model_validate_json(raw)
        except PersistenceReadError as e:
            logger.error(f"Error loading preferences: {e}", exc_info=True)
            self._metrics.inc_load_fallback("read_error")
        except ValidationError as e:
            logger.error(f"Stored preferences are not decodable, using defaults: {e}")
            self._metrics.inc_load_fallback("corrupt")
        except Exception as e:
            logger.error(f"Unexpected error loading preferences: {e}", exc_info=True)
            self._metrics.inc_load_fallback("read_error")
        finally:
            self._loading = False

    async def update_preferences(self, partial: Mapping[str, Any]) -> Preferences:
        """Shallow-merge top-level keys; nested documents are replaced wholesale.

        Keys whose values do not fit the document shape are dropped with a
        warning; the remaining keys are still applied.

        Args:
            partial: Top-level keys to replace (attribute or camelCase names)

        Returns:
            Committed document

        Raises:
            PersistenceWriteError: Durable write failed; memory unchanged
        """
        updates = self._known_keys(Preferences, partial, "update_preferences")

        def build(current: Preferences) -> Preferences:
            base = current.model_dump()
            valid = self._valid_updates(Preferences, base, updates, "update_preferences")
            return Preferences.model_validate({**base, **valid})

        return await self._commit("update_preferences", build)

    async def update_filters(self, partial: Mapping[str, Any]) -> Preferences:
        """Merge keys into ``filters`` only, keeping sibling filter values.

        Raises:
            PersistenceWriteError: Durable write failed; memory unchanged
        """
        updates = self._known_keys(Filters, partial, "update_filters")

        def build(current: Preferences) -> Preferences:
            base = current.filters.model_dump()
            valid = self._valid_updates(Filters, base, updates, "update_filters")
            filters = Filters.model_validate({**base, **valid})
            return current.model_copy(update={"filters": filters})

        return await self._commit("update_filters", build)

    async def update_notification_settings(self, partial: Mapping[str, Any]) -> Preferences:
        """Merge keys into ``notifications`` only, keeping sibling flags.

        Raises:
            PersistenceWriteError: Durable write failed; memory unchanged
        """
        updates = self._known_keys(NotificationSettings, partial, "update_notification_settings")

        def build(current: Preferences) -> Preferences:
            base = current.notifications.model_dump()
            valid = self._valid_updates(
                NotificationSettings, base, updates, "update_notification_settings"
            )
            notifications = NotificationSettings.model_validate({**base, **valid})
            return current.model_copy(update={"notifications": notifications})

        return await self._commit("update_notification_settings", build)

    async def toggle_notification(self, name: str) -> Preferences:
        """Flip a single notification flag.

        An unknown flag name is logged and ignored; nothing is written.

        Args:
            name: Flag name, e.g. "deals" or "priceAlerts"

        Raises:
            PersistenceWriteError: Durable write failed; memory unchanged
        """
        normalized, unknown = NotificationSettings.normalize_keys({name: None})
        if unknown:
            logger.warning(f"[toggle_notification] ignoring unknown setting: {name!r}")
            return self._preferences
        (field_name,) = normalized

        def build(current: Preferences) -> Preferences:
            flipped = not getattr(current.notifications, field_name)
            notifications = current.notifications.model_copy(update={field_name: flipped})
            return current.model_copy(update={"notifications": notifications})

        return await self._commit("toggle_notification", build)

    async def set_currency(self, currency: str) -> Preferences:
        """Select the display currency."""
        return await self.update_preferences({"currency": currency})

    async def reset_preferences(self) -> Preferences:
        """Persist the default document, then adopt it.

        Raises:
            PersistenceWriteError: Durable write failed; memory unchanged
        """
        return await self._commit("reset_preferences", lambda current: DEFAULT_PREFERENCES)

    async def _commit(
        self, operation: str, build: Callable[[Preferences], Preferences]
    ) -> Preferences:
        """Build the next document, write it, then swap it in."""
        async with self._write_lock or contextlib.nullcontext():
            merged = build(self._preferences)

            start_time = time.monotonic()
            try:
                await self._slot.set(self._key, merged.to_storage())
            except Exception as e:
                elapsed_ms = (time.monotonic() - start_time) * 1000
                self._metrics.record_write(operation, "failed", elapsed_ms)
                self._write_logger.log_write(
                    operation, self._key, "failed", elapsed_ms, error_reason=type(e).__name__
                )
                logger.error(f"Error saving preferences ({operation}): {e}")
                if isinstance(e, PersistenceWriteError):
                    raise
                raise PersistenceWriteError(f"{operation} failed: {e}") from e

            elapsed_ms = (time.monotonic() - start_time) * 1000
            self._metrics.record_write(operation, "committed", elapsed_ms)
            self._write_logger.log_write(operation, self._key, "committed", elapsed_ms)

            self._preferences = merged
            return merged

    @staticmethod
    def _known_keys(
        model: type[CamelModel], partial: Mapping[str, Any], operation: str
    ) -> dict[str, Any]:
        """Normalize partial keys, dropping those the model does not define."""
        normalized, unknown = model.normalize_keys(dict(partial))
        if unknown:
            logger.warning(f"[{operation}] ignoring unknown keys: {sorted(unknown)}")
        return normalized

    @staticmethod
    def _valid_updates(
        model: type[CamelModel],
        base: dict[str, Any],
        updates: dict[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        """Keep only the updates that validate on their own against ``base``."""
        valid = {}
        for name, value in updates.items():
            try:
                model.model_validate({**base, name: value})
            except ValidationError as e:
                logger.warning(
                    f"[{operation}] ignoring invalid value for {name!r}: {e.error_count()} error(s)"
                )
                continue
            valid[name] = value
        return valid
