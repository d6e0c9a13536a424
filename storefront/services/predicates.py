from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match of ``value`` inside a text column."""

    field: str
    value: str


@dataclass(frozen=True)
class GreaterThan:
    field: str
    value: int | float


@dataclass(frozen=True)
class AnyOf:
    """Disjunction; an empty clause list matches nothing."""

    clauses: tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    """Conjunction; an empty clause list matches everything."""

    clauses: tuple["Predicate", ...]


Predicate = Union[Contains, GreaterThan, AnyOf, AllOf]


def contains_any(fields: tuple[str, ...], value: str) -> list[Contains]:
    return [Contains(field=field, value=value) for field in fields]
