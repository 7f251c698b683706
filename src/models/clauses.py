"""Clause-set types for requirement reasoning.

Both shapes are plain ``frozenset[str]`` at runtime. They are kept as
distinct named types so AND and OR sets cannot be passed for one another:

- ``Conjunctive``: every member is selected together (a candidate
  selection, a finished requirement resolution, a completion).
- ``Disjunctive``: at least one member must be selected (one clause of an
  option's requirements).

``Requirements`` is the conjunction of disjunctive clauses an option
declares: every clause must be satisfied.
"""

from typing import NewType

Conjunctive = NewType("Conjunctive", frozenset[str])
Disjunctive = NewType("Disjunctive", frozenset[str])

Requirements = frozenset[Disjunctive]


def conjunctive(*names: str) -> Conjunctive:
    """Build a conjunctive set from identifiers."""
    return Conjunctive(frozenset(names))


def disjunctive(*names: str) -> Disjunctive:
    """Build a disjunctive clause from identifiers."""
    return Disjunctive(frozenset(names))


def requirements(*clauses: frozenset[str]) -> Requirements:
    """Build a requirements conjunction from clause sets."""
    return frozenset(Disjunctive(frozenset(c)) for c in clauses)
