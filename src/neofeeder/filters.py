"""neofeeder.filters

Small typed builder for feeder filter strings.

A filter is a list of clauses joined by ``and`` (:class:`Where`) or ``or``
(:class:`AnyOf`). Every clause that interpolates a caller value names the
sanitizer it runs the value through, so each named query can be checked for
injection safety by reading its table entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple

from .utils import strict_token

__all__ = [
    "Clause",
    "Where",
    "AnyOf",
    "eq",
    "num_eq",
    "like",
    "ilike",
    "fixed",
]

Sanitizer = Callable[[Any], str]


@dataclass(frozen=True)
class Clause:
    field: str
    op: str = "="
    arg: Optional[str] = None
    sanitizer: Optional[Sanitizer] = None
    value: Optional[str] = None
    quoted: bool = True
    wildcard: bool = False

    @property
    def args(self) -> Tuple[str, ...]:
        return (self.arg,) if self.arg else ()

    def render(self, params: Mapping[str, Any]) -> str:
        if self.arg is None:
            text = self.value or ""
        else:
            raw = params[self.arg]
            text = self.sanitizer(raw) if self.sanitizer else str(raw)
        if self.wildcard:
            text = f"%{text}%"
        if self.quoted:
            text = f"'{text}'"
        return f"{self.field} {self.op} {text}"


class Where:
    """Clauses joined with ``and``."""

    joiner = "and"

    def __init__(self, *clauses: Clause) -> None:
        self.clauses: Tuple[Clause, ...] = tuple(clauses)

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.clauses!r}"

    @property
    def args(self) -> Tuple[str, ...]:
        seen = []
        for clause in self.clauses:
            for name in clause.args:
                if name not in seen:
                    seen.append(name)
        return tuple(seen)

    def render(self, params: Mapping[str, Any]) -> str:
        return f" {self.joiner} ".join(c.render(params) for c in self.clauses)


class AnyOf(Where):
    """Clauses joined with ``or``."""

    joiner = "or"


def eq(field: str, arg: str, sanitizer: Sanitizer = strict_token) -> Clause:
    """``field = '<value>'``"""
    return Clause(field, "=", arg, sanitizer)


def num_eq(field: str, arg: str, sanitizer: Sanitizer = strict_token) -> Clause:
    """``field = <value>`` without quotes (e.g. ``id_tahun_ajaran``)."""
    return Clause(field, "=", arg, sanitizer, quoted=False)


def like(field: str, arg: str, sanitizer: Sanitizer) -> Clause:
    """``field like '%<value>%'``"""
    return Clause(field, "like", arg, sanitizer, wildcard=True)


def ilike(field: str, arg: str, sanitizer: Sanitizer) -> Clause:
    """``field ilike '%<value>%'``"""
    return Clause(field, "ilike", arg, sanitizer, wildcard=True)


def fixed(field: str, value: str) -> Clause:
    """``field = '<value>'`` with a constant value."""
    return Clause(field, "=", value=value)
