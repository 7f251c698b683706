"""Rules engine configuration.

Hard-rule limits plus the search bounds that keep the requirement
resolver and the availability scan finite. Defaults are the enforced game
rules. The civic cap is 2: older notes mention three, but the bound the
game enforces is the contract.

Deterministic -- no I/O.
"""

from __future__ import annotations

from pydantic import Field

from src.models.common import EmpireRulesBase


class RulesConfig(EmpireRulesBase, frozen=True):
    """Limits applied by the rule checker and search components."""

    ethic_budget: int = Field(default=3, ge=0)
    max_authorities: int = Field(default=1, ge=0)
    max_origins: int = Field(default=1, ge=0)
    max_civics: int = Field(default=2, ge=0)

    # Longest chain of nested requirements the resolver will follow
    max_requirement_depth: int = Field(default=32, ge=1)

    # >1 fans independent work out over a thread pool
    max_workers: int = Field(default=1, ge=1)

    # Cap on options hypothesised per availability scan (None = all)
    max_candidates: int | None = Field(default=None, ge=1)
