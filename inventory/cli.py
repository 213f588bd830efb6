from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from inventory.config.loader import ConfigLoader
from inventory.config.schemas import AnalyticsMode, AppConfig
from inventory.config.validation import RuntimeValidator
from inventory.core.aggregation import AggregationEngine, FilterCriteria, headline
from inventory.core.search import SearchField, search_assets
from inventory.core.store import InventoryStore, StoreError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Asset inventory analytics")
    parser.add_argument("--config", default="config/inventory.yaml", help="Path to inventory.yaml")
    parser.add_argument("--store", help="Override the store file from the config")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    summary = commands.add_parser("summary", help="Print the analytics tables")
    summary.add_argument("--location", help="Filter by office location")
    summary.add_argument("--type", dest="asset_type", help="Filter by asset type")
    summary.add_argument("--model", help="Filter by model")
    summary.add_argument(
        "--select",
        nargs="+",
        type=int,
        metavar="ID",
        help="Aggregate only these asset ids (selection mode; filters are ignored)",
    )
    summary.add_argument("--json", action="store_true", help="Output result as JSON")

    search = commands.add_parser("search", help="Case-insensitive search over assets")
    search.add_argument("--field", choices=[f.value for f in SearchField if f != SearchField.QUANTITY], default="model")
    search.add_argument("--query", required=True)

    seed = commands.add_parser("seed", help="Import rows from a seed YAML into the store")
    seed.add_argument("--file", required=True, help="Path to seed YAML")

    commands.add_parser("validate", help="Check assets against the reference tables")
    return parser


def run_summary(args: argparse.Namespace, config: AppConfig, store: InventoryStore) -> int:
    assets = store.load_assets()
    if args.select:
        mode = AnalyticsMode.SELECTION
        selection = frozenset(args.select)
    else:
        mode = AnalyticsMode.FILTER
        selection = frozenset()
    criteria = FilterCriteria(location=args.location, asset_type=args.asset_type, model=args.model)

    result = AggregationEngine(config.analytics).aggregate(assets, mode, criteria, selection)
    stat = headline(assets, mode, criteria, selection)
    logger.debug("Aggregated %d assets in %s mode", len(assets), mode.value)

    if args.json:
        print(
            json.dumps(
                {"headline": {"label": stat.label, "count": stat.count}, **result.as_dict()},
                ensure_ascii=False,
                indent=2,
            )
        )
        return 0

    print(f"{stat.label}: {stat.count}")
    for title, rows in result.as_dict().items():
        if title == "statuses" or not rows:
            continue
        print(f"\n{title}")
        for row in rows:
            extra = ", ".join(f"{k}={v}" for k, v in row.items() if k not in ("name", "count"))
            print(f"  {row['name'] or '(blank)'}: {row['count']}" + (f" [{extra}]" if extra else ""))
    return 0


def run_search(args: argparse.Namespace, store: InventoryStore) -> int:
    for asset in search_assets(store.load_assets(), args.query, args.field):
        print(
            f"{asset.id}\t{asset.model}\t{asset.office_location}\t{asset.asset_type}\t"
            f"{asset.status}\t{asset.quantity if asset.quantity is not None else ''}"
        )
    return 0


def run_seed(args: argparse.Namespace, store: InventoryStore) -> int:
    seed = ConfigLoader.load_seed(args.file)
    for table, rows in seed.tables.items():
        if rows:
            store.insert(table, rows)
    return 0


def run_validate(store: InventoryStore) -> int:
    report = RuntimeValidator.validate_references(store.load_assets(), store.load_reference_names())
    for warning in report.warnings:
        print(f"warning: {warning}")
    for error in report.errors:
        print(f"error: {error}")
    return 0 if report.ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ConfigLoader.load_app_config(args.config)
        store = InventoryStore(args.store or config.store.path)

        if args.command == "summary":
            return run_summary(args, config, store)
        if args.command == "search":
            return run_search(args, store)
        if args.command == "seed":
            return run_seed(args, store)
        return run_validate(store)
    except (StoreError, ValueError) as exc:
        logger.error("%s", exc)
        print(f"error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
