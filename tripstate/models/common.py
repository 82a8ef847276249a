"""Common types and enums shared across all models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Currency(str, Enum):
    """Display currency offered on the profile screen."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    AUD = "AUD"


class LoadState(str, Enum):
    """Lifecycle of a session document fetched from upstream."""

    loading = "loading"
    loaded = "loaded"
    empty = "empty"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys.

    Attributes use snake_case; the durable and upstream encodings use the
    camelCase aliases. Both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def normalize_keys(cls, partial: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Map alias or attribute names in a partial payload to attribute names.

        Args:
            partial: Caller-supplied keys and values

        Returns:
            Tuple of (payload keyed by attribute name, keys that match no field)
        """
        by_alias = {
            (info.alias or name): name for name, info in cls.model_fields.items()
        }

        normalized: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in partial.items():
            if key in cls.model_fields:
                normalized[key] = value
            elif key in by_alias:
                normalized[by_alias[key]] = value
            else:
                unknown.append(key)

        return normalized, unknown
