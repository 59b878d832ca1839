"""
models/user.py
--------------
Domain model for registered users (guests and property owners).
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class User:
    """
    Represents a row of the users table.

    Attributes:
        name: Display name.
        email: Login email address.
        password: Stored password hash.
        id: Database primary key (None for new records).
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        """Build a User from a dict row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})
