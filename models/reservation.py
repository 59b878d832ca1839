"""
models/reservation.py
---------------------
Domain model for a guest's booking of a property.
"""

from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Mapping, Optional


@dataclass
class Reservation:
    """
    Represents a row of the reservations table.

    Attributes:
        guest_id: The user who made the booking.
        property_id: The booked property.
        start_date: First night of the stay.
        end_date: Day of departure.
        id: Database primary key (None for new records).
    """
    guest_id: int
    property_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Reservation":
        """Build a Reservation from a dict row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})
