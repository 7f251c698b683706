"""Selection rules service — the engine's upward-facing interface.

Wires RuleChecker, RequirementResolver, CompletionSearch and
AvailabilityDeriver around one explicitly passed option source and one
RulesConfig. UI and HTTP callers talk to this class only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.catalog.catalog import OptionSource
from src.engine.rules.availability import AvailabilityDeriver
from src.engine.rules.checker import RuleChecker, RuleViolation
from src.engine.rules.config import RulesConfig
from src.engine.rules.resolver import RequirementResolver
from src.engine.rules.search import CompletionSearch
from src.models.clauses import Conjunctive
from src.models.selection import Selection

logger = logging.getLogger(__name__)


class SelectionRulesService:
    """Answers legality, completability and availability questions."""

    def __init__(self, source: OptionSource, config: RulesConfig | None = None) -> None:
        self._config = config or RulesConfig()
        self._source = source
        self._checker = RuleChecker(source, self._config)
        self._resolver = RequirementResolver(source, self._config)
        self._search = CompletionSearch(
            source, self._checker, self._resolver, self._config,
        )
        self._availability = AvailabilityDeriver(source, self._search, self._config)

    @property
    def config(self) -> RulesConfig:
        return self._config

    @property
    def source(self) -> OptionSource:
        return self._source

    def validate(self, candidate: Iterable[str]) -> bool:
        """Whether a complete candidate set passes the hard rules."""
        names = frozenset(candidate)
        legal = self._checker.is_legal(names)
        logger.debug("validate: %d options -> %s", len(names), legal)
        return legal

    def violations(self, candidate: Iterable[str]) -> list[RuleViolation]:
        """Every hard rule the candidate set fails."""
        return self._checker.violations(candidate)

    def is_completable(self, selection: Selection) -> bool:
        """Legal as-is with at least one legal completion."""
        completable = self._search.is_completable(selection)
        logger.debug(
            "is_completable: %d options -> %s",
            len(selection.effective_options), completable,
        )
        return completable

    def completions(self, selection: Selection) -> frozenset[Conjunctive]:
        """Every legal completion, for diagnostics and explanations."""
        return self._search.find_completions(selection)

    def unavailable_options(self, selection: Selection) -> frozenset[str]:
        """Options that cannot currently be added."""
        return self._availability.unavailable_options(selection)

    def available_options(self, selection: Selection) -> frozenset[str]:
        """Options that can still be added."""
        return self._availability.available_options(selection)

    def availability(self, selection: Selection) -> tuple[frozenset[str], frozenset[str]]:
        """(unavailable, available) option identifiers for the selection."""
        return self._availability.partition(selection)
