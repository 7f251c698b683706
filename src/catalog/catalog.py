"""Option catalog — immutable, explicitly passed lookup of every known option.

The engine never reaches for a global catalog: each component receives an
``OptionSource`` (this ``Catalog`` or any object with the same two
methods) at construction time.

Load-time hardening: requirement references must resolve and the
requirement graph must be acyclic, so the resolver's search always
terminates on a catalog built here.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from src.engine.rules.errors import (
    DuplicateIdentifierError,
    MalformedClauseGraphError,
    UnknownIdentifierError,
)
from src.models.common import OptionCategory
from src.models.option import Option

logger = logging.getLogger(__name__)


class OptionSource(Protocol):
    """Capabilities the engine needs from a catalog."""

    def lookup(self, name: str) -> Option:
        """Return the option named ``name``; raise UnknownIdentifierError if absent."""
        ...

    def all_options(self) -> Sequence[Option]:
        """Return every known option."""
        ...


class Catalog:
    """Immutable in-memory catalog keyed by globally unique identifier."""

    def __init__(self, options: Iterable[Option], *, version: str = "") -> None:
        by_name: dict[str, Option] = {}
        for option in options:
            if option.name in by_name:
                raise DuplicateIdentifierError(option.name)
            by_name[option.name] = option

        self._options = by_name
        self._ordered = tuple(by_name[name] for name in sorted(by_name))
        self.version = version

        self._check_references()
        self._check_acyclic()
        logger.info(
            "Catalog %s loaded: %d options", version or "<unversioned>", len(by_name),
        )

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def lookup(self, name: str) -> Option:
        """Return the option named ``name``.

        Raises:
            UnknownIdentifierError: If no option has that identifier.
        """
        try:
            return self._options[name]
        except KeyError:
            raise UnknownIdentifierError(name) from None

    def all_options(self) -> Sequence[Option]:
        """Every option, ordered by identifier."""
        return self._ordered

    def by_category(self, category: OptionCategory) -> list[Option]:
        """All options in one category, ordered by identifier."""
        return [o for o in self._ordered if o.category == category]

    def allowed_options(self, active_packs: Iterable[str]) -> list[Option]:
        """Options whose content-pack gating passes for ``active_packs``."""
        active = frozenset(active_packs)
        return [o for o in self._ordered if o.is_allowed(active)]

    def asymmetric_prohibitions(self) -> list[tuple[str, str]]:
        """Pairs (a, b) where option a prohibits option b but b does not list a.

        The rule checker reads each selected option's own prohibition list,
        so a one-directional declaration is enough for the pair to be
        exclusive. This report lets catalog authors see where they rely on it.
        Content-pack identifiers in prohibition lists are ignored.
        """
        pairs: list[tuple[str, str]] = []
        for option in self._ordered:
            for other_name in sorted(option.prohibits):
                other = self._options.get(other_name)
                if other is not None and option.name not in other.prohibits:
                    pairs.append((option.name, other_name))
        return pairs

    # ------------------------------------------------------------------
    # Load-time validation
    # ------------------------------------------------------------------

    def _check_references(self) -> None:
        for option in self._ordered:
            for clause in option.requires:
                for name in clause:
                    if name not in self._options:
                        logger.error(
                            "Option %s requires unknown identifier %s",
                            option.name, name,
                        )
                        raise UnknownIdentifierError(name)

    def _check_acyclic(self) -> None:
        """Reject a requirement graph with a cycle (iterative DFS, three colours)."""
        done: set[str] = set()
        for root in self._options:
            if root in done:
                continue
            path: list[str] = [root]
            on_path: set[str] = {root}
            stack = [iter(self._successors(root))]
            while stack:
                nxt = next(stack[-1], None)
                if nxt is None:
                    stack.pop()
                    finished = path.pop()
                    on_path.discard(finished)
                    done.add(finished)
                    continue
                if nxt in on_path:
                    cycle = path[path.index(nxt):] + [nxt]
                    raise MalformedClauseGraphError(
                        f"Cyclic requirement chain: {' -> '.join(cycle)}",
                        chain=cycle,
                    )
                if nxt in done:
                    continue
                path.append(nxt)
                on_path.add(nxt)
                stack.append(iter(self._successors(nxt)))

    def _successors(self, name: str) -> list[str]:
        option = self._options[name]
        return sorted({member for clause in option.requires for member in clause})
