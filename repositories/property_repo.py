"""
repositories/property_repo.py
------------------------------
Data access layer for property listings.
All SQL queries related to the `properties` table live here.
"""

from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from db.errors import QueryError
from models.property import Property, WRITABLE_COLUMNS
from repositories.property_query import FilterOptions, build_property_query
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyRepository:
    """Repository for searching and listing properties."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Union[Property, Mapping[str, Any]]) -> Property:
        """
        Insert a new property listing.

        Args:
            prop: A Property or a mapping holding every writable column.

        Returns:
            The created Property as stored by the database.
        """
        if isinstance(prop, Property):
            values = prop.insert_values()
        else:
            values = tuple(prop[col] for col in WRITABLE_COLUMNS)
        columns = ", ".join(WRITABLE_COLUMNS)
        placeholders = ", ".join(["%s"] * len(WRITABLE_COLUMNS))
        sql = f"""
            INSERT INTO properties ({columns})
            VALUES ({placeholders})
            RETURNING *;
        """
        row = self.db.execute("add_property", sql, values)
        created = Property.from_row(row)
        logger.info(f"Added property #{created.id} for owner {created.owner_id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def search(
        self,
        options: Optional[FilterOptions] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        List properties matching the filter, cheapest first.

        Args:
            options: Optional criteria; None lists every reviewed property.
            limit: Maximum number of properties returned.

        Returns:
            List of Property objects with `average_rating` set.

        Raises:
            QueryError: If a price is not a number, or the query fails.
        """
        try:
            query = build_property_query(options, limit)
        except ValueError as e:
            logger.error(f"get_all_properties failed: {e}")
            raise QueryError("get_all_properties", str(e)) from e
        logger.debug(f"Property search: {query.sql} {query.params}")
        sql, params = query.to_driver()
        rows = self.db.execute("get_all_properties", sql, params, fetch="all")
        return [Property.from_row(r) for r in rows]
