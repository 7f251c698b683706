"""Requirement resolver — every way to satisfy a conjunction of OR-clauses.

Picks exactly one identifier from each clause. When a picked identifier
carries requirements of its own, those clauses are folded into the same
branch's remaining work before the branch continues, so one pass yields
fully expanded candidates.

The search is an explicit stack of frames rather than recursion. Each
frame owns its pending clauses, so prerequisites folded in one branch
never leak into a sibling branch. Every pending clause remembers the chain
of options that introduced it; picking an option already on that chain is
a cycle and raises MalformedClauseGraphError, as does a chain longer than
``max_requirement_depth``.

Deterministic -- no I/O.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from src.catalog.catalog import OptionSource
from src.engine.rules.config import RulesConfig
from src.engine.rules.errors import MalformedClauseGraphError
from src.models.clauses import Conjunctive, Disjunctive, Requirements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PendingClause:
    members: Disjunctive
    chain: tuple[str, ...]   # options whose requirements introduced this clause


@dataclass(frozen=True)
class _Frame:
    pending: tuple[_PendingClause, ...]
    picked: frozenset[str]
    folded: frozenset[str]   # picks whose requirements are already in the work


class RequirementResolver:
    """Expands requirement clauses into conjunctive candidate sets."""

    def __init__(self, source: OptionSource, config: RulesConfig | None = None) -> None:
        self._source = source
        self._config = config or RulesConfig()

    def resolve(
        self,
        requirements: Requirements,
        *,
        owner: str | None = None,
    ) -> frozenset[Conjunctive]:
        """Return every combinatorially distinct way to satisfy ``requirements``.

        Args:
            requirements: Conjunction of disjunctive clauses.
            owner: Option the requirements belong to, if any. It starts every
                chain, so an option that (transitively) requires itself is
                reported as a cycle.

        Returns:
            Set of conjunctive candidates. Empty requirements yield a single
            empty candidate.

        Raises:
            UnknownIdentifierError: A clause names an unknown identifier.
            MalformedClauseGraphError: Cyclic or over-deep requirement chain.
        """
        root_chain = (owner,) if owner is not None else ()
        stack = [
            _Frame(
                pending=_pending(requirements, root_chain, ()),
                picked=frozenset(),
                folded=frozenset({owner}) if owner is not None else frozenset(),
            ),
        ]
        results: set[Conjunctive] = set()

        while stack:
            frame = stack.pop()
            if not frame.pending:
                results.add(Conjunctive(frame.picked))
                continue

            clause, rest = frame.pending[0], frame.pending[1:]
            for name in sorted(clause.members):
                option = self._source.lookup(name)
                if name in clause.chain:
                    cycle = clause.chain[clause.chain.index(name):] + (name,)
                    raise MalformedClauseGraphError(
                        f"Cyclic requirement chain: {' -> '.join(cycle)}",
                        chain=cycle,
                    )

                pending = rest
                folded = frame.folded
                if option.requires and name not in folded:
                    chain = clause.chain + (name,)
                    if len(chain) > self._config.max_requirement_depth:
                        raise MalformedClauseGraphError(
                            f"Requirement chain deeper than "
                            f"{self._config.max_requirement_depth}: {' -> '.join(chain)}",
                            chain=chain,
                        )
                    pending = rest + _pending(option.requirements, chain, rest)
                    folded = folded | {name}

                stack.append(
                    _Frame(pending=pending, picked=frame.picked | {name}, folded=folded),
                )

        logger.debug(
            "Resolved %d clauses (owner=%s) into %d candidates",
            len(requirements), owner, len(results),
        )
        return frozenset(results)


def _pending(
    clauses: Iterable[Disjunctive],
    chain: tuple[str, ...],
    existing: tuple[_PendingClause, ...],
) -> tuple[_PendingClause, ...]:
    """New pending clauses in a stable order, skipping ones already queued."""
    queued = {p.members for p in existing}
    return tuple(
        _PendingClause(members=c, chain=chain)
        for c in sorted(clauses, key=sorted)
        if c not in queued
    )
