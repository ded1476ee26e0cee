"""
Query builders for composite read statements.
"""

from lightbnb.queries.property_search import (
    PropertySearchQuery,
    Predicate,
    CityContains,
    OwnerEquals,
    MinimumCost,
    MaximumCost,
    MinimumAverageRating,
    average_rating,
    to_cents
)

__all__ = [
    "PropertySearchQuery",
    "Predicate",
    "CityContains",
    "OwnerEquals",
    "MinimumCost",
    "MaximumCost",
    "MinimumAverageRating",
    "average_rating",
    "to_cents",
]
