"""Availability deriver — which not-yet-chosen options would break the selection.

For each option allowed by the active content packs and not already
effective, a hypothetical selection is built with that option placed in
its slot (single-valued slots overwritten, set slots gain a member). If
the hypothesis is not completable, the option is currently unavailable.

Options gated out by content packs are filtered before any hypothesis and
are never reported. Bookkeeping categories (traits, habitat, species
archetype) have no effect on legality and are never hypothesised.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from src.catalog.catalog import OptionSource
from src.engine.rules.config import RulesConfig
from src.engine.rules.search import CompletionSearch
from src.models.option import Option
from src.models.selection import Selection

logger = logging.getLogger(__name__)


class AvailabilityDeriver:
    """Derives the options a caller should disable for a selection."""

    def __init__(
        self,
        source: OptionSource,
        search: CompletionSearch,
        config: RulesConfig | None = None,
    ) -> None:
        self._source = source
        self._search = search
        self._config = config or RulesConfig()

    def candidates(self, selection: Selection) -> list[Option]:
        """Allowed, slotted options not yet in the selection's effective options."""
        chosen = selection.effective_options
        scan = [
            option
            for option in self._source.all_options()
            if option.is_allowed(selection.active_packs)
            and not option.is_bookkeeping
            and option.name not in chosen
        ]
        cap = self._config.max_candidates
        if cap is not None and len(scan) > cap:
            logger.warning(
                "Availability scan capped at %d of %d candidates", cap, len(scan),
            )
            scan = scan[:cap]
        return scan

    def unavailable_options(self, selection: Selection) -> frozenset[str]:
        """Identifiers whose addition leaves the selection uncompletable."""
        return self._unavailable(selection, self.candidates(selection))

    def partition(self, selection: Selection) -> tuple[frozenset[str], frozenset[str]]:
        """(unavailable, available) over one scan of the candidates."""
        scan = self.candidates(selection)
        unavailable = self._unavailable(selection, scan)
        return unavailable, frozenset(o.name for o in scan) - unavailable

    def available_options(self, selection: Selection) -> frozenset[str]:
        """Scanned candidates that remain choosable."""
        return self.partition(selection)[1]

    def _unavailable(self, selection: Selection, scan: list[Option]) -> frozenset[str]:
        def _blocked(option: Option) -> bool:
            return not self._search.is_completable(selection.with_option(option))

        if self._config.max_workers > 1 and len(scan) > 1:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
                verdicts = list(pool.map(_blocked, scan))
        else:
            verdicts = [_blocked(o) for o in scan]

        unavailable = frozenset(o.name for o, blocked in zip(scan, verdicts) if blocked)
        logger.debug(
            "Scanned %d candidates, %d unavailable", len(scan), len(unavailable),
        )
        return unavailable
