"""
main.py
-------
Command-line entry point for the LightBnB data-access layer.

Responsibilities:
    - Open the database connection pool at start-up.
    - Run a property search from `key=value` arguments, e.g.
          python main.py city=Vancouver minimum_rating=4 limit=5
    - Close the pool on shutdown.
"""

import sys

from config import DEFAULT_RESULT_LIMIT
from db.errors import DataAccessError
from store import LightBnbStore
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str]) -> tuple[dict, int]:
    """Split `key=value` arguments into filter options and a limit."""
    options: dict = {}
    limit = DEFAULT_RESULT_LIMIT
    for arg in argv:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {arg!r}")
        if key == "limit":
            limit = int(value)
        else:
            options[key] = value
    return options, limit


def main(argv: list[str] | None = None) -> int:
    """Run one property search and log the results."""
    options, limit = parse_args(sys.argv[1:] if argv is None else argv)

    logger.info("Initializing database...")
    store = LightBnbStore.connect()
    try:
        properties = store.get_all_properties(options, limit)
    except DataAccessError as e:
        logger.error(f"Property search failed: {e}")
        return 1
    finally:
        store.close()

    logger.info(f"Found {len(properties)} properties")
    for prop in properties:
        rating = f"{prop.average_rating:.2f}" if prop.average_rating is not None else "-"
        logger.info(f"#{prop.id} {prop} | rating {rating}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
