"""
Property search query builder.

Search filters become an ordered list of typed predicates in two stages:

* pre-aggregation predicates on raw ``properties`` columns (``WHERE``)
* post-aggregation predicates on the per-property review average (``HAVING``)

Each predicate renders to a single SQLAlchemy boolean clause. Clauses within a
stage are ANDed, and both stages must hold for a row to be returned. The
statement always groups by property, sorts by nightly cost ascending and ends
with ``LIMIT``, so the limit is the last bind parameter.

Usage:
    query = PropertySearchQuery.from_filters(filters, limit=10)
    rows = (await session.execute(query.statement())).all()
    sql, params = query.render()
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Tuple, Union

from sqlalchemy import Select, asc, func, select
from sqlalchemy.engine import Dialect
from sqlalchemy.dialects.postgresql import asyncpg as pg_asyncpg
from sqlalchemy.sql import ColumnElement

from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertySearchFilters

# Prices are stored in cents; filters arrive in whole units
CENTS_PER_UNIT = 100

WHERE = "where"
HAVING = "having"


def average_rating() -> ColumnElement:
    """Mean review rating for the current group."""
    return func.avg(PropertyReview.rating)


def to_cents(amount: Union[int, float, Decimal]) -> int:
    """Scale a whole-unit price to integer cents."""
    return int((Decimal(str(amount)) * CENTS_PER_UNIT).to_integral_value())


class Predicate:
    """A single search constraint bound to one parameter."""

    stage = WHERE

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def clause(self) -> ColumnElement:
        raise NotImplementedError


@dataclass(frozen=True)
class CityContains(Predicate):
    """Case-insensitive substring match on city. Wildcards live in the value."""

    city: str

    @property
    def value(self) -> str:
        return f"%{self.city}%"

    def clause(self) -> ColumnElement:
        return Property.city.ilike(self.value)


@dataclass(frozen=True)
class OwnerEquals(Predicate):
    """Exact match on the owning user."""

    owner_id: int

    @property
    def value(self) -> int:
        return self.owner_id

    def clause(self) -> ColumnElement:
        return Property.owner_id == self.value


@dataclass(frozen=True)
class MinimumCost(Predicate):
    """Nightly cost at or above a whole-unit price."""

    price: Decimal

    @property
    def value(self) -> int:
        return to_cents(self.price)

    def clause(self) -> ColumnElement:
        return Property.cost_per_night >= self.value


@dataclass(frozen=True)
class MaximumCost(Predicate):
    """Nightly cost at or below a whole-unit price."""

    price: Decimal

    @property
    def value(self) -> int:
        return to_cents(self.price)

    def clause(self) -> ColumnElement:
        return Property.cost_per_night <= self.value


@dataclass(frozen=True)
class MinimumAverageRating(Predicate):
    """Average review rating at or above a threshold. Evaluated after grouping."""

    stage = HAVING

    rating: float

    @property
    def value(self) -> float:
        return self.rating

    def clause(self) -> ColumnElement:
        return average_rating() >= self.value


@dataclass
class PropertySearchQuery:
    """Ordered WHERE and HAVING predicates plus a result limit."""

    limit: int = 10
    where: List[Predicate] = field(default_factory=list)
    having: List[Predicate] = field(default_factory=list)

    def add(self, predicate: Predicate) -> "PropertySearchQuery":
        """Append a predicate to the stage it belongs to."""
        if predicate.stage == HAVING:
            self.having.append(predicate)
        else:
            self.where.append(predicate)
        return self

    @classmethod
    def from_filters(cls, filters: Optional[PropertySearchFilters], limit: int = 10) -> "PropertySearchQuery":
        """
        Build a query from search filters.

        Predicates are appended in a fixed order: city, owner, minimum price,
        maximum price, minimum rating. A filter counts as present when it is
        not None, so zero values still constrain the search.
        """
        query = cls(limit=limit)
        if filters is None:
            return query

        if filters.city is not None:
            query.add(CityContains(filters.city))
        if filters.owner_id is not None:
            query.add(OwnerEquals(filters.owner_id))
        if filters.minimum_price_per_night is not None:
            query.add(MinimumCost(filters.minimum_price_per_night))
        if filters.maximum_price_per_night is not None:
            query.add(MaximumCost(filters.maximum_price_per_night))
        if filters.minimum_rating is not None:
            query.add(MinimumAverageRating(filters.minimum_rating))

        return query

    @property
    def predicates(self) -> List[Predicate]:
        """All predicates in placeholder order."""
        return self.where + self.having

    def parameters(self) -> List[Any]:
        """Bind values in placeholder order, ending with the limit."""
        return [predicate.value for predicate in self.predicates] + [self.limit]

    def statement(self) -> Select:
        """Build the SELECT returning (Property, average_rating) rows."""
        stmt = (
            select(Property, average_rating().label("average_rating"))
            .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
        )

        if self.where:
            stmt = stmt.where(*[predicate.clause() for predicate in self.where])

        stmt = stmt.group_by(Property.id)

        if self.having:
            stmt = stmt.having(*[predicate.clause() for predicate in self.having])

        return stmt.order_by(asc(Property.cost_per_night), asc(Property.id)).limit(self.limit)

    def render(self, dialect: Optional[Dialect] = None) -> Tuple[str, List[Any]]:
        """
        Compile to SQL text and positional bind values.

        Defaults to the asyncpg PostgreSQL dialect, which numbers its
        placeholders ``$1 .. $n`` in the order the values are returned.
        """
        dialect = dialect or pg_asyncpg.dialect()
        compiled = self.statement().compile(dialect=dialect)
        bound = compiled.construct_params()

        if compiled.positiontup is None:
            return str(compiled), list(bound.values())

        return str(compiled), [bound[name] for name in compiled.positiontup]
