"""Fault conditions raised by the rules engine.

Rule failures are never raised: an illegal selection is reported as data
(``False`` or a list of violations). Only faults in the inputs or the
catalog itself surface as exceptions, and they fail the whole operation.
"""

from collections.abc import Sequence


class RulesEngineError(Exception):
    """Base class for rules engine faults."""


class UnknownIdentifierError(RulesEngineError, KeyError):
    """A candidate or requirement references an identifier absent from the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown option identifier '{self.name}'."


class MalformedClauseGraphError(RulesEngineError, ValueError):
    """The requirement graph is cyclic or nests deeper than allowed."""

    def __init__(self, message: str, chain: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.chain = tuple(chain)


class DuplicateIdentifierError(RulesEngineError, ValueError):
    """Two catalog entries share one identifier."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate option identifier '{name}'.")
        self.name = name
