"""
Unit tests for the property search query builder.
Statements are compiled against the asyncpg PostgreSQL dialect; no database needed.
"""

import pytest
from decimal import Decimal

from lightbnb.queries.property_search import (
    PropertySearchQuery,
    CityContains,
    OwnerEquals,
    MinimumCost,
    MaximumCost,
    MinimumAverageRating,
    to_cents
)
from lightbnb.schemas.property import PropertySearchFilters


def render(limit: int = 10, **filters):
    """Render a query built from keyword filters."""
    query = PropertySearchQuery.from_filters(PropertySearchFilters(**filters), limit=limit)
    return query.render()


class TestPredicates:
    """Each predicate binds one value and renders one clause."""
    
    def test_city_wildcards_are_in_the_value(self):
        predicate = CityContains("Vancouver")
        
        assert predicate.value == "%Vancouver%"
        assert "%" not in str(predicate.clause())
    
    def test_owner_equality(self):
        assert OwnerEquals(7).value == 7
        assert "owner_id =" in str(OwnerEquals(7).clause())
    
    def test_cost_bounds_scale_to_cents(self):
        assert MinimumCost(Decimal("12")).value == 1200
        assert MaximumCost(Decimal("250.50")).value == 25050
        assert ">=" in str(MinimumCost(Decimal("1")).clause())
        assert "<=" in str(MaximumCost(Decimal("1")).clause())
    
    def test_rating_is_post_aggregation(self):
        predicate = MinimumAverageRating(4.0)
        
        assert predicate.stage == "having"
        assert CityContains("x").stage == "where"
        assert "avg(property_reviews.rating)" in str(predicate.clause())
    
    def test_to_cents(self):
        assert to_cents(12) == 1200
        assert to_cents(12.5) == 1250
        assert to_cents(Decimal("0")) == 0


class TestFromFilters:
    """Filter fields become predicates in a fixed order."""
    
    def test_no_filters(self):
        query = PropertySearchQuery.from_filters(None, limit=5)
        
        assert query.where == []
        assert query.having == []
        assert query.parameters() == [5]
    
    def test_all_filters_in_order(self):
        filters = PropertySearchFilters(
            minimum_rating=3,
            maximum_price_per_night=300,
            minimum_price_per_night=100,
            owner_id=4,
            city="Van"
        )
        query = PropertySearchQuery.from_filters(filters, limit=20)
        
        assert [type(p) for p in query.predicates] == [
            CityContains, OwnerEquals, MinimumCost, MaximumCost, MinimumAverageRating
        ]
        assert query.parameters() == ["%Van%", 4, 10000, 30000, 3.0, 20]
    
    def test_zero_values_are_constraints(self):
        filters = PropertySearchFilters(
            minimum_price_per_night=0,
            maximum_price_per_night=0,
            minimum_rating=0
        )
        query = PropertySearchQuery.from_filters(filters)
        
        assert len(query.where) == 2
        assert len(query.having) == 1
        assert query.parameters() == [0, 0, 0.0, 10]
    
    def test_add_routes_by_stage(self):
        query = PropertySearchQuery(limit=3)
        query.add(MinimumAverageRating(4)).add(OwnerEquals(1))
        
        assert query.where == [OwnerEquals(1)]
        assert query.having == [MinimumAverageRating(4)]


class TestRender:
    """Rendered SQL and positional parameters."""
    
    def test_empty_filter_has_no_where(self):
        sql, params = render(limit=10)
        
        assert "WHERE" not in sql
        assert "HAVING" not in sql
        assert "LEFT OUTER JOIN property_reviews" in sql
        assert "GROUP BY properties.id" in sql
        assert "ORDER BY properties.cost_per_night ASC" in sql
        assert "LIMIT $1" in sql
        assert params == [10]
    
    def test_minimum_price_binds_cents(self):
        sql, params = render(minimum_price_per_night=12)
        
        assert "properties.cost_per_night >= $1" in sql
        assert params == [1200, 10]
    
    def test_minimum_price_of_zero_still_constrains(self):
        sql, params = render(minimum_price_per_night=0)
        
        assert "WHERE" in sql
        assert "properties.cost_per_night >= $1" in sql
        assert params == [0, 10]
    
    def test_rating_only_skips_where(self):
        sql, params = render(minimum_rating=4)
        
        assert "WHERE" not in sql
        assert "HAVING avg(property_reviews.rating) >= $1" in sql
        assert params == [4.0, 10]
    
    def test_where_precedes_having(self):
        sql, _ = render(city="Van", minimum_rating=4)
        
        assert sql.index("WHERE") < sql.index("GROUP BY") < sql.index("HAVING") < sql.index("LIMIT")
    
    @pytest.mark.parametrize("filters, expected", [
        ({"city": "Van"}, ["%Van%"]),
        ({"owner_id": 2, "maximum_price_per_night": 50}, [2, 5000]),
        ({"city": "Van", "minimum_rating": 4}, ["%Van%", 4.0]),
        (
            {"city": "Van", "owner_id": 2, "minimum_price_per_night": 10,
             "maximum_price_per_night": 50, "minimum_rating": 4},
            ["%Van%", 2, 1000, 5000, 4.0]
        ),
    ])
    def test_parameter_count_and_order(self, filters, expected):
        sql, params = render(limit=7, **filters)
        
        assert params == expected + [7]
        for position in range(1, len(params) + 1):
            assert f"${position}" in sql
        assert f"${len(params) + 1}" not in sql
    
    def test_render_matches_parameters(self):
        query = PropertySearchQuery.from_filters(
            PropertySearchFilters(city="Van", owner_id=1, minimum_rating=2), limit=4
        )
        
        _, params = query.render()
        assert params == query.parameters()
