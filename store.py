"""
store.py
--------
The data-access surface used by the LightBnB web server.

Wraps one Database handle and the repositories built on it, exposing one
method per operation the server calls.
"""

from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property
from models.reservation import Reservation
from models.user import User
from repositories.property_query import FilterOptions
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository


class LightBnbStore:
    """Users, reservations and properties backed by a single pool."""

    def __init__(self, db: Database):
        self.db = db
        self.users = UserRepository(db)
        self.reservations = ReservationRepository(db)
        self.properties = PropertyRepository(db)

    @classmethod
    def connect(cls, dsn: Optional[str] = None) -> "LightBnbStore":
        """Open a pool from config (or `dsn`) and return a store using it."""
        db = Database(dsn) if dsn else Database()
        db.open()
        return cls(db)

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "LightBnbStore":
        self.db.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── Users ─────────────────────────────────────────────

    def get_user_with_email(self, email: str) -> Optional[User]:
        return self.users.get_by_email(email)

    def get_user_with_id(self, user_id) -> Optional[User]:
        return self.users.get_by_id(user_id)

    def add_user(self, user: Union[User, Mapping[str, Any]]) -> User:
        return self.users.add(user)

    # ── Reservations ──────────────────────────────────────

    def get_all_reservations(self, guest_id, limit: int = DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        return self.reservations.get_all_for_guest(guest_id, limit)

    # ── Properties ────────────────────────────────────────

    def get_all_properties(
        self,
        options: Union[FilterOptions, Mapping[str, Any], None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """Search properties; `options` may be FilterOptions, a dict or None."""
        if not isinstance(options, FilterOptions):
            options = FilterOptions.from_mapping(options)
        return self.properties.search(options, limit)

    def add_property(self, prop: Union[Property, Mapping[str, Any]]) -> Property:
        return self.properties.add(prop)
