"""Completion search — can a selection be finished legally, and how.

Step 1: for every effective option with requirements, resolve them and
        keep the candidates that are legal on their own.
Step 2: Cartesian product across those per-option candidate sets, each
        combination unioned with the base effective options.
Step 3: keep the combinations that pass the rule checker.

An option whose requirements have no legal candidate empties the product,
so the selection has no completions: an unsatisfiable requirement makes
the whole selection infeasible rather than being dropped.

Deterministic -- no I/O. Step 1 is independent per option and may run on a
thread pool (``RulesConfig.max_workers``); it only reads immutable data.
"""

import itertools
import logging
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor

from src.catalog.catalog import OptionSource
from src.engine.rules.checker import RuleChecker
from src.engine.rules.config import RulesConfig
from src.engine.rules.resolver import RequirementResolver
from src.models.clauses import Conjunctive
from src.models.option import Option
from src.models.selection import Selection

logger = logging.getLogger(__name__)


class CompletionSearch:
    """Finds legal completions of a (possibly partial) selection."""

    def __init__(
        self,
        source: OptionSource,
        checker: RuleChecker,
        resolver: RequirementResolver,
        config: RulesConfig | None = None,
    ) -> None:
        self._source = source
        self._checker = checker
        self._resolver = resolver
        self._config = config or RulesConfig()

    def find_completions(self, selection: Selection) -> frozenset[Conjunctive]:
        """Every legal completion of ``selection``."""
        completions = frozenset(self._iter_legal_combinations(selection))
        logger.debug(
            "Selection of %d options has %d legal completions",
            len(selection.effective_options), len(completions),
        )
        return completions

    def is_completable(self, selection: Selection) -> bool:
        """Legal as-is and at least one legal completion exists.

        Stops at the first legal combination.
        """
        if not self._checker.is_legal(selection.effective_options):
            return False
        return next(self._iter_legal_combinations(selection), None) is not None

    def candidates_for(self, option: Option) -> frozenset[Conjunctive]:
        """Resolutions of one option's requirements that are legal standalone."""
        resolved = self._resolver.resolve(option.requirements, owner=option.name)
        return frozenset(c for c in resolved if self._checker.is_legal(c))

    def _iter_legal_combinations(self, selection: Selection) -> Iterator[Conjunctive]:
        base = selection.effective_options
        requiring = [
            option
            for option in (self._source.lookup(name) for name in sorted(base))
            if option.requires
        ]

        # Step 1
        per_option = self._map(self.candidates_for, requiring)
        for option, candidates in zip(requiring, per_option):
            if not candidates:
                logger.debug("Requirements of %s have no legal resolution", option.name)

        # Step 2 + 3; product() of no iterables yields one empty combination
        for combination in itertools.product(*(sorted(c, key=sorted) for c in per_option)):
            merged = Conjunctive(base.union(*combination))
            if self._checker.is_legal(merged):
                yield merged

    def _map(
        self,
        fn: Callable[[Option], frozenset[Conjunctive]],
        options: list[Option],
    ) -> list[frozenset[Conjunctive]]:
        if self._config.max_workers <= 1 or len(options) <= 1:
            return [fn(o) for o in options]
        with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
            return list(pool.map(fn, options))
