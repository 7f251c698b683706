"""Rule checker — hard rules over a complete candidate set of identifiers.

Rules, applied in order:
1. Mutual exclusion: no member's own prohibition list names another member.
   Only each member's own list is consulted, so a prohibition declared on
   one side is enough for the pair to be exclusive.
2. At most ``max_authorities`` authorities.
3. At most ``max_origins`` origins.
4. At most ``max_civics`` civics.
5. Summed weighted cost of budgeted options <= ``ethic_budget`` (inclusive).

``is_legal`` stops at the first failed rule. ``violations`` reports every
failed rule for explanation surfaces.

Pure and deterministic. Unknown identifiers raise UnknownIdentifierError.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from src.catalog.catalog import OptionSource
from src.engine.rules.config import RulesConfig
from src.models.common import SECONDARY_CATEGORIES, OptionCategory
from src.models.option import Option


class RuleKind(StrEnum):
    """Hard rules, in evaluation order."""

    PROHIBITION = "PROHIBITION"
    AUTHORITY_LIMIT = "AUTHORITY_LIMIT"
    ORIGIN_LIMIT = "ORIGIN_LIMIT"
    CIVIC_LIMIT = "CIVIC_LIMIT"
    ETHIC_BUDGET = "ETHIC_BUDGET"


@dataclass(frozen=True)
class RuleViolation:
    """One failed hard rule and the identifiers responsible."""

    rule: RuleKind
    message: str
    identifiers: tuple[str, ...]


class RuleChecker:
    """Validates candidate sets against the hard rules."""

    def __init__(self, source: OptionSource, config: RulesConfig | None = None) -> None:
        self._source = source
        self._config = config or RulesConfig()

    def is_legal(self, candidate: Iterable[str]) -> bool:
        """Whether ``candidate`` passes every hard rule."""
        return next(self._iter_violations(candidate), None) is None

    def violations(self, candidate: Iterable[str]) -> list[RuleViolation]:
        """Every hard rule ``candidate`` fails, in evaluation order."""
        return list(self._iter_violations(candidate))

    def _iter_violations(self, candidate: Iterable[str]) -> Iterator[RuleViolation]:
        names = frozenset(candidate)
        # Resolve everything up front: an unknown identifier is a fault even
        # when an earlier rule would already fail.
        options = [self._source.lookup(name) for name in sorted(names)]
        cfg = self._config

        # 1. Mutual exclusion, from each member's own list
        clashes = [
            (o.name, banned)
            for o in options
            for banned in sorted(o.prohibits & names)
        ]
        if clashes:
            yield RuleViolation(
                rule=RuleKind.PROHIBITION,
                message="; ".join(f"{a} prohibits {b}" for a, b in clashes),
                identifiers=tuple(sorted({n for pair in clashes for n in pair})),
            )

        # 2-4. Slot cardinality
        for kind, category, limit in (
            (RuleKind.AUTHORITY_LIMIT, OptionCategory.AUTHORITY, cfg.max_authorities),
            (RuleKind.ORIGIN_LIMIT, OptionCategory.ORIGIN, cfg.max_origins),
        ):
            members = _names_in(options, {category})
            if len(members) > limit:
                yield RuleViolation(
                    rule=kind,
                    message=f"{len(members)} {category.value.lower()} options selected (max {limit})",
                    identifiers=members,
                )

        civics = _names_in(options, SECONDARY_CATEGORIES)
        if len(civics) > cfg.max_civics:
            yield RuleViolation(
                rule=RuleKind.CIVIC_LIMIT,
                message=f"{len(civics)} civics selected (max {cfg.max_civics})",
                identifiers=civics,
            )

        # 5. Budget
        weighted = [o for o in options if o.weighted_cost is not None]
        spent = sum(o.weighted_cost or 0 for o in weighted)
        if spent > cfg.ethic_budget:
            yield RuleViolation(
                rule=RuleKind.ETHIC_BUDGET,
                message=f"ethic cost {spent} exceeds budget {cfg.ethic_budget}",
                identifiers=tuple(o.name for o in weighted),
            )


def _names_in(options: list[Option], categories: Iterable[OptionCategory]) -> tuple[str, ...]:
    wanted = frozenset(categories)
    return tuple(o.name for o in options if o.category in wanted)
