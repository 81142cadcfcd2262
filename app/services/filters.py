"""Translate a sparse PropertyFilter into one SQLAlchemy predicate.

Each present filter field becomes an explicit constraint; the constraints are
ANDed in a fixed order. The same predicate drives both the page query and the
count query so the two always agree on which rows match.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Union

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from app.models.property import Property
from app.schemas.property import PropertyFilter

@dataclass(frozen=True)
class Contains:
    """Case-insensitive, unanchored substring match."""

    column: str
    value: str

    def clause(self) -> ColumnElement:
        return getattr(Property, self.column).ilike(f"%{escape_like(self.value)}%", escape="\\")

@dataclass(frozen=True)
class Equals:
    column: str
    value: str

    def clause(self) -> ColumnElement:
        return getattr(Property, self.column) == self.value

@dataclass(frozen=True)
class AtLeast:
    column: str
    value: Decimal

    def clause(self) -> ColumnElement:
        return getattr(Property, self.column) >= self.value

@dataclass(frozen=True)
class AtMost:
    column: str
    value: Decimal

    def clause(self) -> ColumnElement:
        return getattr(Property, self.column) <= self.value

Constraint = Union[Contains, Equals, AtLeast, AtMost]

def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True

def build_constraints(filters: PropertyFilter) -> List[Constraint]:
    constraints: List[Constraint] = []
    if _present(filters.name):
        constraints.append(Contains("name", filters.name))
    if _present(filters.address):
        constraints.append(Contains("address", filters.address))
    if _present(filters.id_owner):
        constraints.append(Equals("id_owner", filters.id_owner))
    if _present(filters.min_price):
        constraints.append(AtLeast("price", filters.min_price))
    if _present(filters.max_price):
        constraints.append(AtMost("price", filters.max_price))
    return constraints

def to_predicate(filters: PropertyFilter | None) -> ColumnElement:
    if filters is None:
        return true()
    clauses = [c.clause() for c in build_constraints(filters)]
    if not clauses:
        return true()
    return and_(*clauses)
