"""Shared enums and base model used across the empire-rules domain models."""

from enum import StrEnum

from pydantic import BaseModel


# --- Shared enums ---


class OptionCategory(StrEnum):
    """Catalog categories. The category decides slot cardinality and which rules apply."""

    ORIGIN = "ORIGIN"
    AUTHORITY = "AUTHORITY"
    ETHIC = "ETHIC"                        # Budgeted (weighted cost)
    CIVIC = "CIVIC"                        # Secondary traits, capped count
    TRAIT = "TRAIT"                        # Bookkeeping only
    HABITAT = "HABITAT"                    # Bookkeeping only
    SPECIES_ARCHETYPE = "SPECIES_ARCHETYPE"  # Bookkeeping only


# Categories whose options carry a weighted cost counted against the budget
BUDGETED_CATEGORIES: frozenset[OptionCategory] = frozenset({
    OptionCategory.ETHIC,
})

# Categories counted against the secondary-trait cap
SECONDARY_CATEGORIES: frozenset[OptionCategory] = frozenset({
    OptionCategory.CIVIC,
})

# Categories that take part in legality checks and availability hypotheses
SLOTTED_CATEGORIES: frozenset[OptionCategory] = frozenset({
    OptionCategory.ORIGIN,
    OptionCategory.AUTHORITY,
    OptionCategory.ETHIC,
    OptionCategory.CIVIC,
})

# Recorded on a selection but never part of its effective options
BOOKKEEPING_CATEGORIES: frozenset[OptionCategory] = frozenset({
    OptionCategory.TRAIT,
    OptionCategory.HABITAT,
    OptionCategory.SPECIES_ARCHETYPE,
})


# --- Base model ---


class EmpireRulesBase(BaseModel):
    """Base model with common configuration for all empire-rules Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
