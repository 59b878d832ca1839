"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
"""

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.reservation import Reservation


class ReservationRepository:
    """Read access to the reservations table."""

    def __init__(self, db: Database):
        self.db = db

    def get_all_for_guest(self, guest_id, limit: int = DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """
        Fetch the reservations made by one guest.

        Args:
            guest_id: The user who made the bookings.
            limit: Maximum number of reservations returned.

        Returns:
            List of Reservation objects; empty when the guest has none.
        """
        sql = """
            SELECT *
            FROM reservations
            WHERE reservations.guest_id = %s
            LIMIT %s;
        """
        rows = self.db.execute("get_all_reservations", sql, (guest_id, limit), fetch="all")
        return [Reservation.from_row(r) for r in rows]
