"""
models/property.py
------------------
Domain model for rental property listings.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

# Columns supplied by the owner when listing a property, in insert order.
WRITABLE_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)


@dataclass
class Property:
    """
    Represents a row of the properties table.

    Attributes:
        owner_id: The user who lists the property.
        title: Listing headline.
        cost_per_night: Nightly price in minor currency units (cents).
        average_rating: Mean review rating; only populated by searches.
        active: Whether the listing is bookable.
        id: Database primary key (None for new records).
    """
    owner_id: int
    title: str
    cost_per_night: int
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None
    country: Optional[str] = None
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    active: bool = True
    average_rating: Optional[float] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Property":
        """Build a Property from a dict row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in row.items() if k in known}
        # avg() comes back from PostgreSQL as Decimal
        if data.get("average_rating") is not None:
            data["average_rating"] = float(data["average_rating"])
        return cls(**data)

    def insert_values(self) -> tuple:
        """Values for WRITABLE_COLUMNS, in order."""
        return tuple(getattr(self, col) for col in WRITABLE_COLUMNS)

    @property
    def price_per_night(self) -> float:
        """Nightly price in major currency units."""
        return self.cost_per_night / 100

    def __str__(self) -> str:
        return f"{self.title} ({self.city}) - {self.price_per_night:.2f}/night"
