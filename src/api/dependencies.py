"""FastAPI dependency injection factories for the catalog and rules service.

The catalog is immutable for the process lifetime, so it is loaded once per
path and shared. Tests override ``get_catalog`` with an in-memory catalog.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.catalog.catalog import Catalog
from src.catalog.loader import load_catalog
from src.config.settings import Settings, get_settings
from src.engine.rules.service import SelectionRulesService


@lru_cache(maxsize=4)
def _load_catalog_cached(path: Path) -> Catalog:
    return load_catalog(path)


def get_catalog() -> Catalog:
    return _load_catalog_cached(get_settings().CATALOG_PATH)


def get_rules_service(
    catalog: Catalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> SelectionRulesService:
    return SelectionRulesService(catalog, settings.rules_config())
