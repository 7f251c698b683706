"""Tests for the requirement resolver.

Covers: single and multiple clauses, transitive expansion, branch
isolation of folded prerequisites, duplicate clause folding, cycle and
depth detection on unvalidated sources, unknown identifiers.
"""

from collections.abc import Callable, Sequence

import pytest

from src.catalog.catalog import Catalog
from src.engine.rules.config import RulesConfig
from src.engine.rules.errors import MalformedClauseGraphError, UnknownIdentifierError
from src.engine.rules.resolver import RequirementResolver
from src.models.clauses import conjunctive, requirements
from src.models.common import OptionCategory
from src.models.option import Option

CIVIC = OptionCategory.CIVIC


class _DictSource:
    """Unvalidated option source: lets tests feed graphs a Catalog would reject."""

    def __init__(self, *options: Option) -> None:
        self._options = {o.name: o for o in options}

    def lookup(self, name: str) -> Option:
        if name not in self._options:
            raise UnknownIdentifierError(name)
        return self._options[name]

    def all_options(self) -> Sequence[Option]:
        return list(self._options.values())


@pytest.fixture
def resolver(scenario_catalog: Catalog) -> RequirementResolver:
    return RequirementResolver(scenario_catalog)


class TestResolveScenario:

    def test_empty_requirements(self, resolver: RequirementResolver) -> None:
        assert resolver.resolve(frozenset()) == {conjunctive()}

    def test_single_clause_branches(
        self, resolver: RequirementResolver, scenario_catalog: Catalog,
    ) -> None:
        """Scenario B: O1 requires one of A/B."""
        result = resolver.resolve(scenario_catalog.lookup("O1").requirements)
        assert result == {conjunctive("A"), conjunctive("B")}

    def test_two_clauses_pick_one_each(
        self, resolver: RequirementResolver, scenario_catalog: Catalog,
    ) -> None:
        result = resolver.resolve(scenario_catalog.lookup("CI").requirements)
        assert result == {conjunctive("B", "C")}

    def test_cartesian_over_clauses(self, resolver: RequirementResolver) -> None:
        result = resolver.resolve(requirements({"A", "D"}, {"AU1"}))
        assert result == {conjunctive("A", "AU1"), conjunctive("D", "AU1")}

    def test_nested_requirements_folded(
        self, resolver: RequirementResolver, scenario_catalog: Catalog,
    ) -> None:
        """N requires AU1|AU3, and AU3 requires E."""
        result = resolver.resolve(scenario_catalog.lookup("N").requirements, owner="N")
        assert result == {conjunctive("AU1"), conjunctive("AU3", "E")}

    def test_result_ignores_legality(self, resolver: RequirementResolver) -> None:
        """The resolver enumerates; the rule checker filters."""
        result = resolver.resolve(requirements({"AU1"}, {"AU2"}))
        assert result == {conjunctive("AU1", "AU2")}


class TestBranchIsolation:

    def test_prerequisite_does_not_leak_into_sibling(
        self,
        make_option: Callable[..., Option],
        build_catalog: Callable[..., Catalog],
    ) -> None:
        catalog = build_catalog(
            make_option("P", CIVIC, requires=[["R"]]),
            make_option("Q", CIVIC),
            make_option("R", CIVIC),
        )
        result = RequirementResolver(catalog).resolve(requirements({"P", "Q"}))
        assert result == {conjunctive("P", "R"), conjunctive("Q")}

    def test_deep_chain(
        self,
        make_option: Callable[..., Option],
        build_catalog: Callable[..., Catalog],
    ) -> None:
        catalog = build_catalog(
            make_option("L1", CIVIC, requires=[["L2"]]),
            make_option("L2", CIVIC, requires=[["L3"]]),
            make_option("L3", CIVIC, requires=[["L4"]]),
            make_option("L4", CIVIC),
        )
        result = RequirementResolver(catalog).resolve(
            catalog.lookup("L1").requirements, owner="L1",
        )
        assert result == {conjunctive("L2", "L3", "L4")}

    def test_identical_clause_folded_once(
        self,
        make_option: Callable[..., Option],
        build_catalog: Callable[..., Catalog],
    ) -> None:
        """P's own clause {R, S} is already queued, so it is not picked twice."""
        catalog = build_catalog(
            make_option("P", CIVIC, requires=[["R", "S"]]),
            make_option("R", CIVIC),
            make_option("S", CIVIC),
        )
        result = RequirementResolver(catalog).resolve(requirements({"P"}, {"R", "S"}))
        assert result == {conjunctive("P", "R"), conjunctive("P", "S")}

    def test_diamond(
        self,
        make_option: Callable[..., Option],
        build_catalog: Callable[..., Catalog],
    ) -> None:
        catalog = build_catalog(
            make_option("L", CIVIC, requires=[["BASE"]]),
            make_option("R", CIVIC, requires=[["BASE"]]),
            make_option("BASE", CIVIC),
        )
        result = RequirementResolver(catalog).resolve(requirements({"L"}, {"R"}))
        assert result == {conjunctive("L", "R", "BASE")}


class TestMalformedGraphs:

    def test_two_cycle_detected(self, make_option: Callable[..., Option]) -> None:
        source = _DictSource(
            make_option("X", CIVIC, requires=[["Y"]]),
            make_option("Y", CIVIC, requires=[["X"]]),
        )
        resolver = RequirementResolver(source)
        with pytest.raises(MalformedClauseGraphError) as exc_info:
            resolver.resolve(source.lookup("X").requirements, owner="X")
        assert exc_info.value.chain == ("X", "Y", "X")

    def test_cycle_detected_without_owner(
        self, make_option: Callable[..., Option],
    ) -> None:
        source = _DictSource(
            make_option("X", CIVIC, requires=[["Y"]]),
            make_option("Y", CIVIC, requires=[["X"]]),
        )
        with pytest.raises(MalformedClauseGraphError):
            RequirementResolver(source).resolve(requirements({"Y"}))

    def test_self_requirement_detected(self, make_option: Callable[..., Option]) -> None:
        source = _DictSource(make_option("X", CIVIC, requires=[["X"]]))
        with pytest.raises(MalformedClauseGraphError, match="X -> X"):
            RequirementResolver(source).resolve(
                source.lookup("X").requirements, owner="X",
            )

    def test_depth_limit(
        self,
        make_option: Callable[..., Option],
        build_catalog: Callable[..., Catalog],
    ) -> None:
        catalog = build_catalog(
            make_option("L1", CIVIC, requires=[["L2"]]),
            make_option("L2", CIVIC, requires=[["L3"]]),
            make_option("L3", CIVIC, requires=[["L4"]]),
            make_option("L4", CIVIC),
        )
        resolver = RequirementResolver(catalog, RulesConfig(max_requirement_depth=2))
        with pytest.raises(MalformedClauseGraphError, match="deeper than 2") as exc_info:
            resolver.resolve(catalog.lookup("L1").requirements, owner="L1")
        assert exc_info.value.chain == ("L1", "L2", "L3")

    def test_unknown_identifier(self, make_option: Callable[..., Option]) -> None:
        source = _DictSource(make_option("X", CIVIC, requires=[["ghost"]]))
        with pytest.raises(UnknownIdentifierError):
            RequirementResolver(source).resolve(source.lookup("X").requirements)
