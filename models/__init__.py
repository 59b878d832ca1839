"""
models/ - Domain Models
=======================
Plain dataclasses mirroring the rows of the LightBnB tables.
"""

from models.property import Property
from models.reservation import Reservation
from models.user import User

__all__ = ["Property", "Reservation", "User"]
