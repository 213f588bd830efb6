from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from inventory.config.schemas import REFERENCE_RECORDS, Asset, ReferenceNames, StoreTable

logger = logging.getLogger(__name__)

IMMUTABLE_COLUMNS = frozenset({"id", "Date Added"})


class StoreError(RuntimeError):
    pass


class InventoryStore:
    """Five inventory tables persisted as one JSON document.

    Rows are plain dicts keyed by store column names. Every table gets an
    integer ``id`` assigned on insert.
    """

    def __init__(self, path: Path | str = "data/inventory.json") -> None:
        self.path = Path(path)

    def select_all(self, table: StoreTable | str) -> list[dict[str, Any]]:
        return [dict(row) for row in self._load()[self._table(table).value]]

    def select_column(self, table: StoreTable | str, column: str) -> list[Any]:
        return [row.get(column) for row in self.select_all(table)]

    def insert(self, table: StoreTable | str, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        table = self._table(table)
        payload = self._load()
        existing = payload[table.value]
        next_id = max((int(row["id"]) for row in existing if "id" in row), default=0) + 1

        inserted: list[dict[str, Any]] = []
        for row in rows:
            record = {key: value for key, value in row.items() if key != "id"}
            record["id"] = next_id
            if table == StoreTable.ASSETS:
                record["Date Added"] = datetime.now(timezone.utc).isoformat()
            next_id += 1
            existing.append(record)
            inserted.append(dict(record))

        self._save(payload)
        logger.info("Inserted %d row(s) into %s", len(inserted), table.value)
        return inserted

    def update(self, table: StoreTable | str, key: str, value: Any, changes: dict[str, Any]) -> int:
        table = self._table(table)
        blocked = IMMUTABLE_COLUMNS.intersection(changes)
        if blocked:
            raise StoreError(f"Columns cannot be modified: {', '.join(sorted(blocked))}")

        payload = self._load()
        matched = [row for row in payload[table.value] if row.get(key) == value]
        if not matched:
            raise StoreError(f"No row in '{table.value}' where {key}={value!r}")
        for row in matched:
            row.update(changes)

        self._save(payload)
        logger.info("Updated %d row(s) in %s where %s=%r", len(matched), table.value, key, value)
        return len(matched)

    def delete(self, table: StoreTable | str, key: str, value: Any) -> int:
        table = self._table(table)
        payload = self._load()
        remaining = [row for row in payload[table.value] if row.get(key) != value]
        removed = len(payload[table.value]) - len(remaining)
        if not removed:
            raise StoreError(f"No row in '{table.value}' where {key}={value!r}")

        payload[table.value] = remaining
        self._save(payload)
        logger.info("Deleted %d row(s) from %s where %s=%r", removed, table.value, key, value)
        return removed

    def load_assets(self) -> list[Asset]:
        assets: list[Asset] = []
        for row in self.select_all(StoreTable.ASSETS):
            try:
                assets.append(Asset.model_validate(row))
            except ValidationError as error:
                raise StoreError(f"Malformed asset row id={row.get('id')!r}: {error}") from error
        return assets

    def add_asset(self, asset: Asset) -> Asset:
        row = asset.to_row()
        row.pop("Date Added", None)
        return Asset.model_validate(self.insert(StoreTable.ASSETS, [row])[0])

    def change_quantity(self, asset_id: int | str, delta: int) -> int:
        rows = [row for row in self.select_all(StoreTable.ASSETS) if row.get("id") == asset_id]
        if not rows:
            raise StoreError(f"Asset not found: {asset_id}")
        quantity = max(1, (rows[0].get("Quantity") or 0) + delta)
        self.update(StoreTable.ASSETS, "id", asset_id, {"Quantity": quantity})
        return quantity

    def load_reference_names(self) -> ReferenceNames:
        def names(table: StoreTable) -> list[str]:
            record_type = REFERENCE_RECORDS[table]
            records = []
            for row in self.select_all(table):
                try:
                    records.append(record_type.model_validate(row))
                except ValidationError as error:
                    raise StoreError(f"Malformed row in '{table.value}' id={row.get('id')!r}: {error}") from error
            return [record.name for record in records if record.name]

        return ReferenceNames(
            models=names(StoreTable.MODELS),
            locations=names(StoreTable.OFFICE_LOCATIONS),
            types=names(StoreTable.ASSET_TYPES),
            statuses=names(StoreTable.ASSET_STATUS),
        )

    @staticmethod
    def _table(table: StoreTable | str) -> StoreTable:
        try:
            return StoreTable(table)
        except ValueError as error:
            raise StoreError(f"Unknown table: {table}") from error

    def _load(self) -> dict[str, list[dict[str, Any]]]:
        payload: dict[str, Any] = {}
        if self.path.exists():
            try:
                payload = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as error:
                raise StoreError(f"Failed to decode store file {self.path}: {error}") from error
            if not isinstance(payload, dict):
                raise StoreError(f"Store root must be an object: {self.path}")

        for table in StoreTable:
            rows = payload.setdefault(table.value, [])
            if not isinstance(rows, list):
                raise StoreError(f"Table '{table.value}' must be a list in {self.path}")
        return payload

    def _save(self, payload: dict[str, list[dict[str, Any]]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(self.path.name + ".tmp")
        staging.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        staging.replace(self.path)
