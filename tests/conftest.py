"""Shared pytest fixtures for the empire-rules test suite.

Provides:
- make_option / build_catalog: factories for small inline catalogs
- scenario_catalog: the shared catalog most engine and API tests run against
- rules_service: SelectionRulesService over scenario_catalog
- client: AsyncClient with get_catalog overridden to scenario_catalog

scenario_catalog contents:

    Ethics       A(1)  B(2)  C(2, prohibits B)  D(1)  E(3)
    Authorities  AU1   AU2(prohibits A)  AU3(requires E)
    Origins      O1(requires A|B)  O2  O3(requires C)
                 O4(dlc pack1, requires B and C)  O5(prohibits pack1)
    Civics       C1 C2 C3  C4(requires AU1)  N(requires AU1|AU3)
                 CI(requires B and C)  CP(prohibits D)
    Bookkeeping  T1 (trait)  H1 (habitat)  S1 (species archetype)
"""

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.catalog.catalog import Catalog
from src.engine.rules.service import SelectionRulesService
from src.models.common import OptionCategory
from src.models.option import Option

ETHIC = OptionCategory.ETHIC
AUTHORITY = OptionCategory.AUTHORITY
ORIGIN = OptionCategory.ORIGIN
CIVIC = OptionCategory.CIVIC


def _option(name: str, category: OptionCategory, **fields: object) -> Option:
    return Option(name=name, category=category, **fields)


@pytest.fixture
def make_option() -> Callable[..., Option]:
    """Factory: make_option(name, category, cost=..., requires=[[...]], ...)."""
    return _option


@pytest.fixture
def build_catalog() -> Callable[..., Catalog]:
    """Factory: build_catalog(*options) -> validated Catalog."""

    def _build(*options: Option) -> Catalog:
        return Catalog(options, version="test")

    return _build


@pytest.fixture
def scenario_catalog() -> Catalog:
    return Catalog(
        [
            _option("A", ETHIC, cost=1),
            _option("B", ETHIC, cost=2),
            _option("C", ETHIC, cost=2, prohibits={"B"}),
            _option("D", ETHIC, cost=1),
            _option("E", ETHIC, cost=3),
            _option("AU1", AUTHORITY),
            _option("AU2", AUTHORITY, prohibits={"A"}),
            _option("AU3", AUTHORITY, requires=[["E"]]),
            _option("O1", ORIGIN, requires=[["A", "B"]]),
            _option("O2", ORIGIN),
            _option("O3", ORIGIN, requires=[["C"]]),
            _option("O4", ORIGIN, dlc={"pack1"}, requires=[["B"], ["C"]]),
            _option("O5", ORIGIN, prohibits={"pack1"}),
            _option("C1", CIVIC),
            _option("C2", CIVIC),
            _option("C3", CIVIC),
            _option("C4", CIVIC, requires=[["AU1"]]),
            _option("N", CIVIC, requires=[["AU1", "AU3"]]),
            _option("CI", CIVIC, requires=[["B"], ["C"]]),
            _option("CP", CIVIC, prohibits={"D"}),
            _option("T1", OptionCategory.TRAIT),
            _option("H1", OptionCategory.HABITAT),
            _option("S1", OptionCategory.SPECIES_ARCHETYPE),
        ],
        version="scenario",
    )


@pytest.fixture
def rules_service(scenario_catalog: Catalog) -> SelectionRulesService:
    return SelectionRulesService(scenario_catalog)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def client(scenario_catalog: Catalog):
    """AsyncClient with get_catalog overridden to the scenario catalog."""
    from src.api.dependencies import get_catalog
    from src.api.main import app

    app.dependency_overrides[get_catalog] = lambda: scenario_catalog

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
