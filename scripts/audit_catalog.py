"""Audit an option catalog document.

Loads the catalog (which rejects duplicate identifiers, unknown
requirement references and cyclic requirement chains), then reports
option counts per category and every one-directional prohibition.

The rule checker reads each selected option's own prohibition list, so a
prohibition declared on one side already makes the pair exclusive. The
listing is for catalog authors who want both sides declared.

Usage:
    python -m scripts.audit_catalog [path/to/catalog.json] [--strict]

Exit codes: 0 ok, 1 load failure, 2 asymmetric prohibitions with --strict.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from src.catalog.catalog import Catalog
from src.catalog.loader import load_catalog
from src.config.settings import get_settings
from src.engine.rules.errors import RulesEngineError
from src.models.common import OptionCategory


def _report(catalog: Catalog) -> list[tuple[str, str]]:
    print(f"Catalog {catalog.version}: {len(catalog)} options")
    for category in OptionCategory:
        print(f"  {category.value:<18} {len(catalog.by_category(category)):>4}")

    pairs = catalog.asymmetric_prohibitions()
    if pairs:
        print(f"\n{len(pairs)} one-directional prohibitions:")
        for source, target in pairs:
            print(f"  {source} prohibits {target} (not declared back)")
    else:
        print("\nAll option prohibitions are declared in both directions.")
    return pairs


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="Catalog JSON document (default: CATALOG_PATH setting).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when any prohibition is declared on one side only.",
    )
    args = parser.parse_args(argv)
    path = args.path or get_settings().CATALOG_PATH

    try:
        catalog = load_catalog(path)
    except (OSError, ValidationError, RulesEngineError) as exc:
        print(f"FAILED to load {path}: {exc}", file=sys.stderr)
        return 1

    pairs = _report(catalog)
    if args.strict and pairs:
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
