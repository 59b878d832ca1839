"""Tests for the property search query builder."""

import pytest

from repositories.property_query import (
    FilterOptions,
    Fragment,
    Predicate,
    PropertyQuery,
    QueryParams,
    build_property_query,
    to_minor_units,
)


class TestNoFilters:
    def test_no_where_clause(self) -> None:
        query = build_property_query(FilterOptions(), 10)
        assert "WHERE" not in query.sql

    def test_only_limit_is_bound(self) -> None:
        query = build_property_query(FilterOptions(), 7)
        assert query.params == [7]
        assert "LIMIT $1;" in query.sql

    def test_none_options_default_limit(self) -> None:
        query = build_property_query()
        assert query.params == [10]
        assert query.fragments == []

    def test_blank_and_zero_values_are_ignored(self) -> None:
        options = FilterOptions(city="", owner_id=None, minimum_price_per_night=0, minimum_rating=0)
        query = build_property_query(options, 10)
        assert "WHERE" not in query.sql
        assert query.params == [10]

    def test_grouping_and_ordering(self) -> None:
        sql = build_property_query().sql
        assert "avg(property_reviews.rating) as average_rating" in sql
        assert "JOIN property_reviews ON properties.id = property_id" in sql
        assert sql.index("GROUP BY properties.id") < sql.index("ORDER BY cost_per_night")
        assert sql.index("ORDER BY cost_per_night") < sql.index("LIMIT")


class TestSingleFilter:
    @pytest.mark.parametrize(
        "options, expected",
        [
            (FilterOptions(city="van"), "city LIKE $1"),
            (FilterOptions(owner_id=3), "owner_id = $1"),
            (FilterOptions(minimum_price_per_night=50), "cost_per_night >= $1"),
            (FilterOptions(maximum_price_per_night=150), "cost_per_night <= $1"),
            (FilterOptions(minimum_rating=4), "property_reviews.rating >= $1"),
        ],
    )
    def test_one_fragment_one_extra_param(self, options: FilterOptions, expected: str) -> None:
        query = build_property_query(options, 10)
        assert len(query.fragments) == 1
        assert len(query.params) == 2
        assert f"WHERE {expected}" in query.sql
        assert "LIMIT $2;" in query.sql

    def test_city_example(self) -> None:
        query = build_property_query(FilterOptions(city="van"), 5)
        assert query.params == ["%van%", 5]
        assert "city LIKE $1" in query.sql
        assert "LIMIT $2" in query.sql

    def test_owner_id_bound_unchanged(self) -> None:
        query = build_property_query(FilterOptions(owner_id="42"), 10)
        assert query.params == ["42", 10]

    def test_rating_bound_unchanged(self) -> None:
        query = build_property_query(FilterOptions(minimum_rating=3.5), 10)
        assert query.params == [3.5, 10]


class TestPriceRange:
    def test_both_bounds_param_order(self) -> None:
        options = FilterOptions(minimum_price_per_night=50, maximum_price_per_night=150)
        query = build_property_query(options, 10)
        assert query.params == [5000, 15000, 10]

    def test_both_bounds_single_fragment(self) -> None:
        options = FilterOptions(minimum_price_per_night=50, maximum_price_per_night=150)
        query = build_property_query(options, 10)
        assert len(query.fragments) == 1
        assert "WHERE cost_per_night <= $2 AND cost_per_night >= $1" in query.sql
        assert query.sql.index("$2") < query.sql.index("$1")

    def test_prices_scaled_by_100(self) -> None:
        query = build_property_query(FilterOptions(maximum_price_per_night="99.99"), 10)
        assert query.params == [9999, 10]

    def test_to_minor_units(self) -> None:
        assert to_minor_units(50) == 5000
        assert to_minor_units("12.5") == 1250

    def test_to_minor_units_rounds_half_up(self) -> None:
        assert to_minor_units(0.125) == 13
        assert to_minor_units("0.005") == 1
        assert to_minor_units(99.99) == 9999

    @pytest.mark.parametrize("price", ["abc", "nan", "inf", ""])
    def test_to_minor_units_rejects_non_numbers(self, price) -> None:
        with pytest.raises(ValueError):
            to_minor_units(price)


class TestCombinedFilters:
    def test_fixed_field_order(self) -> None:
        options = FilterOptions(
            minimum_rating=4,
            maximum_price_per_night=200,
            owner_id=7,
            city="Van",
        )
        query = build_property_query(options, 3)
        assert query.params == ["%Van%", 7, 20000, 4, 3]
        assert (
            "WHERE city LIKE $1 AND owner_id = $2 AND cost_per_night <= $3 "
            "AND property_reviews.rating >= $4"
        ) in query.sql
        assert "LIMIT $5;" in query.sql

    def test_every_field(self) -> None:
        options = FilterOptions(
            city="Van",
            owner_id=7,
            minimum_price_per_night=10,
            maximum_price_per_night=20,
            minimum_rating=2,
        )
        query = build_property_query(options, 10)
        assert len(query.fragments) == 4
        assert query.params == ["%Van%", 7, 1000, 2000, 2, 10]
        assert "cost_per_night <= $4 AND cost_per_night >= $3" in query.sql


class TestFilterOptions:
    def test_from_mapping_ignores_unknown_keys(self) -> None:
        options = FilterOptions.from_mapping({"city": "Van", "sort": "desc"})
        assert options == FilterOptions(city="Van")

    def test_from_empty_mapping(self) -> None:
        assert FilterOptions.from_mapping(None) == FilterOptions()
        assert FilterOptions.from_mapping({}) == FilterOptions()


class TestRendering:
    def test_query_params_slots(self) -> None:
        params = QueryParams()
        assert params.bind("a") == 1
        assert params.bind("b") == 2
        assert len(params) == 2

    def test_fragment_render(self) -> None:
        fragment = Fragment((Predicate("a", "<=", 2), Predicate("a", ">=", 1)))
        assert fragment.render() == "a <= $2 AND a >= $1"

    def test_to_driver_uses_named_placeholders(self) -> None:
        query = PropertyQuery(sql="x <= $2 AND x >= $1 LIMIT $3;", params=[100, 200, 5])
        sql, params = query.to_driver()
        assert sql == "x <= %(p2)s AND x >= %(p1)s LIMIT %(p3)s;"
        assert params == {"p1": 100, "p2": 200, "p3": 5}

    def test_to_driver_handles_double_digit_slots(self) -> None:
        query = PropertyQuery(sql="a = $1 AND b = $12", params=list(range(12)))
        sql, params = query.to_driver()
        assert sql == "a = %(p1)s AND b = %(p12)s"
        assert params["p12"] == 11
