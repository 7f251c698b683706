"""Catalog option: one selectable item in exactly one category."""

from collections.abc import Iterable

from pydantic import Field, field_validator, model_validator

from src.models.clauses import Disjunctive, Requirements
from src.models.common import (
    BOOKKEEPING_CATEGORIES,
    BUDGETED_CATEGORIES,
    EmpireRulesBase,
    OptionCategory,
)


class Option(EmpireRulesBase, frozen=True):
    """Immutable catalog entry.

    ``requires`` is a conjunction of disjunctive clauses: every clause must
    have at least one member selected. ``prohibits`` may name options or
    content packs. ``dlc`` lists the content packs the option depends on.
    """

    name: str = Field(..., min_length=1)
    category: OptionCategory
    cost: int = Field(default=0, ge=0)
    requires: frozenset[frozenset[str]] = Field(default_factory=frozenset)
    prohibits: frozenset[str] = Field(default_factory=frozenset)
    dlc: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("requires")
    @classmethod
    def _no_empty_clause(
        cls, value: frozenset[frozenset[str]],
    ) -> frozenset[frozenset[str]]:
        if any(not clause for clause in value):
            raise ValueError("requires must not contain an empty clause.")
        return value

    @model_validator(mode="after")
    def _validate_cost(self) -> "Option":
        """Only budgeted categories may carry a weighted cost."""
        if self.cost and self.category not in BUDGETED_CATEGORIES:
            raise ValueError(
                f"Option '{self.name}' ({self.category.value}) cannot carry "
                f"a cost; only budgeted categories are weighted."
            )
        return self

    @property
    def weighted_cost(self) -> int | None:
        """Cost counted against the budget, or None for unbudgeted categories."""
        if self.category in BUDGETED_CATEGORIES:
            return self.cost
        return None

    @property
    def requirements(self) -> Requirements:
        """The requires clauses as disjunctive sets."""
        return frozenset(Disjunctive(clause) for clause in self.requires)

    @property
    def is_bookkeeping(self) -> bool:
        """Whether this option is recorded only, never checked."""
        return self.category in BOOKKEEPING_CATEGORIES

    def is_allowed(self, active_packs: Iterable[str]) -> bool:
        """Content-pack gating.

        Allowed when every pack the option depends on is active and none of
        its prohibited identifiers is an active pack.
        """
        active = frozenset(active_packs)
        if not self.prohibits.isdisjoint(active):
            return False
        return self.dlc <= active
