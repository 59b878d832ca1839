"""
repositories/property_query.py
-------------------------------
Builds the property search statement from optional filter criteria.

Each filter field contributes one Fragment made of Predicates. A Predicate
refers to its value by the slot the value was bound to, so the order in
which predicates are written never has to match the order of the
parameter list.
"""

import re
from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT

BASE_QUERY = """
SELECT properties.*, avg(property_reviews.rating) as average_rating
FROM properties
JOIN property_reviews ON properties.id = property_id
"""

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


@dataclass
class FilterOptions:
    """
    Optional property search criteria. A falsy field means no constraint.

    Prices are in major currency units; they are scaled to cents when bound.
    """
    city: Optional[str] = None
    owner_id: Optional[Union[int, str]] = None
    minimum_price_per_night: Optional[Union[float, str]] = None
    maximum_price_per_night: Optional[Union[float, str]] = None
    minimum_rating: Optional[Union[float, str]] = None

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "FilterOptions":
        """Build options from a dict (e.g. a query string), dropping unknown keys."""
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in mapping.items() if k in known})


class QueryParams:
    """Ordered list of bound values."""

    def __init__(self):
        self.values: list = []

    def bind(self, value: Any) -> int:
        """Append a value and return its 1-based placeholder slot."""
        self.values.append(value)
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Predicate:
    column: str
    operator: str
    slot: int

    def render(self) -> str:
        return f"{self.column} {self.operator} ${self.slot}"


@dataclass(frozen=True)
class Fragment:
    """The predicates contributed by a single filter field."""
    predicates: tuple

    def render(self) -> str:
        return " AND ".join(p.render() for p in self.predicates)


@dataclass
class PropertyQuery:
    """A rendered search statement with numbered ($n) placeholders."""
    sql: str
    params: list
    fragments: list = field(default_factory=list)

    def to_driver(self) -> tuple:
        """
        Rewrite the statement for psycopg2.

        Returns:
            (sql, params) where every `$n` becomes `%(pn)s` and params is a
            dict keyed by those names.
        """
        sql = _PLACEHOLDER_RE.sub(lambda m: f"%(p{m.group(1)})s", self.sql)
        named = {f"p{i}": value for i, value in enumerate(self.params, start=1)}
        return sql, named


def to_minor_units(amount: Union[float, str]) -> int:
    """
    Convert a price in currency units to cents, rounding halves up.

    Raises:
        ValueError: If `amount` is not a finite number.
    """
    try:
        cents = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return int(cents)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid price: {amount!r}") from e


def build_fragments(options: FilterOptions, params: QueryParams) -> list:
    """
    Bind the values of every present filter field and return its fragments.

    Fields are visited in a fixed order: city, owner_id, price range,
    minimum_rating.
    """
    fragments = []

    if options.city:
        slot = params.bind(f"%{options.city}%")
        fragments.append(Fragment((Predicate("city", "LIKE", slot),)))

    if options.owner_id:
        slot = params.bind(options.owner_id)
        fragments.append(Fragment((Predicate("owner_id", "=", slot),)))

    minimum = options.minimum_price_per_night
    maximum = options.maximum_price_per_night
    if minimum and maximum:
        min_slot = params.bind(to_minor_units(minimum))
        max_slot = params.bind(to_minor_units(maximum))
        fragments.append(Fragment((
            Predicate("cost_per_night", "<=", max_slot),
            Predicate("cost_per_night", ">=", min_slot),
        )))
    elif minimum:
        slot = params.bind(to_minor_units(minimum))
        fragments.append(Fragment((Predicate("cost_per_night", ">=", slot),)))
    elif maximum:
        slot = params.bind(to_minor_units(maximum))
        fragments.append(Fragment((Predicate("cost_per_night", "<=", slot),)))

    if options.minimum_rating:
        slot = params.bind(options.minimum_rating)
        fragments.append(Fragment((Predicate("property_reviews.rating", ">=", slot),)))

    return fragments


def build_property_query(
    options: Optional[FilterOptions] = None,
    limit: int = DEFAULT_RESULT_LIMIT,
) -> PropertyQuery:
    """
    Build the property search statement.

    Args:
        options: Filter criteria; None searches every property.
        limit: Maximum number of rows returned.

    Returns:
        PropertyQuery whose params end with the limit.
    """
    options = options or FilterOptions()
    params = QueryParams()
    fragments = build_fragments(options, params)

    sql = BASE_QUERY
    if fragments:
        sql += "WHERE " + " AND ".join(f.render() for f in fragments) + "\n"

    limit_slot = params.bind(limit)
    sql += (
        "GROUP BY properties.id\n"
        "ORDER BY cost_per_night\n"
        f"LIMIT ${limit_slot};"
    )
    return PropertyQuery(sql=sql, params=params.values, fragments=fragments)
