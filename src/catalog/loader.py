"""Catalog loading from a versioned JSON document.

Document shape::

    {
      "version": "3.10",
      "options": [
        {"name": "ethic_xenophile", "category": "ETHIC", "cost": 1,
         "prohibits": ["ethic_xenophobe", "ethic_fanatic_xenophobe"]},
        ...
      ]
    }

Schema problems surface as ``pydantic.ValidationError``; graph problems
(unknown requirement references, cycles, duplicates) as the rules engine
errors raised by ``Catalog``.
"""

import logging
from pathlib import Path

from pydantic import Field

from src.catalog.catalog import Catalog
from src.models.common import EmpireRulesBase
from src.models.option import Option

logger = logging.getLogger(__name__)


class CatalogDocument(EmpireRulesBase):
    """Serialised catalog: a version label plus every option."""

    version: str = Field(..., min_length=1)
    options: list[Option] = Field(default_factory=list)

    def to_catalog(self) -> Catalog:
        """Build the immutable, validated catalog."""
        return Catalog(self.options, version=self.version)


def load_catalog(path: str | Path) -> Catalog:
    """Load and validate a catalog document from ``path``."""
    path = Path(path)
    logger.info("Loading catalog from %s", path)
    document = CatalogDocument.model_validate_json(path.read_text(encoding="utf-8"))
    return document.to_catalog()
