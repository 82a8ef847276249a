"""Wishlist models."""

from pydantic import Field

from tripstate.models.common import CamelModel


class WishlistItem(CamelModel):
    """Saved destination."""

    id: str
    name: str
    image: str | None = None
    total_cost: float = 0
    climate: str | None = None
    activities: list[str] = Field(default_factory=list)
    rating: float | None = None
