"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Any, Mapping, Optional, Union

from db.connection import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: Union[User, Mapping[str, Any]]) -> User:
        """
        Insert a new user.

        Args:
            user: A User (without id) or a mapping with name, email, password.

        Returns:
            The created User with its `id` populated.

        Raises:
            DuplicateRecordError: If the email is already registered and the
                schema declares it unique.
        """
        if not isinstance(user, User):
            user = User(name=user["name"], email=user["email"], password=user["password"])
        sql = """
            INSERT INTO users (name, email, password)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        row = self.db.execute("add_user", sql, (user.name, user.email, user.password))
        created = User.from_row(row)
        logger.info(f"Added user #{created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by their email address.

        Returns:
            User or None.
        """
        sql = "SELECT * FROM users WHERE users.email = %s;"
        row = self.db.execute("get_user_with_email", sql, (email,))
        return User.from_row(row) if row else None

    def get_by_id(self, user_id) -> Optional[User]:
        """Fetch a user by primary key, or None."""
        sql = "SELECT * FROM users WHERE users.id = %s;"
        row = self.db.execute("get_user_with_id", sql, (user_id,))
        return User.from_row(row) if row else None
