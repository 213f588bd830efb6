from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from inventory.config.schemas import Asset


class SearchField(str, Enum):
    MODEL = "model"
    LOCATION = "location"
    TYPE = "type"
    STATUS = "status"
    NOTES = "notes"
    COMPANY_ID = "company_id"
    QUANTITY = "quantity"


_ATTRIBUTES: dict[SearchField, str] = {
    SearchField.MODEL: "model",
    SearchField.LOCATION: "office_location",
    SearchField.TYPE: "asset_type",
    SearchField.STATUS: "status",
    SearchField.NOTES: "assigned_notes",
    SearchField.COMPANY_ID: "company_id",
    SearchField.QUANTITY: "quantity",
}

_TEXT_FIELDS = (SearchField.MODEL, SearchField.LOCATION, SearchField.TYPE, SearchField.STATUS)


def field_value(asset: Asset, field: SearchField | str):
    return getattr(asset, _ATTRIBUTES[SearchField(field)])


def _contains(value: object, needle: str) -> bool:
    return isinstance(value, str) and needle in value.lower()


def search_assets(assets: Iterable[Asset], query: str, field: SearchField | str = SearchField.MODEL) -> list[Asset]:
    field = SearchField(field)
    if field == SearchField.QUANTITY:
        raise ValueError("Quantity is not a searchable text field")
    needle = query.lower()
    return [asset for asset in assets if _contains(field_value(asset, field), needle)]


def search_any(assets: Iterable[Asset], query: str) -> list[Asset]:
    needle = query.lower()
    return [
        asset
        for asset in assets
        if any(_contains(field_value(asset, field), needle) for field in _TEXT_FIELDS)
    ]


def filter_names(names: Iterable[str], query: str) -> list[str]:
    needle = query.lower()
    return [name for name in names if needle in name.lower()]


def group_assets(assets: Iterable[Asset], field: SearchField | str) -> list[tuple[str, list[Asset]]]:
    field = SearchField(field)
    if field not in _TEXT_FIELDS:
        raise ValueError(f"Cannot group assets by '{field.value}'")

    grouped: dict[str, list[Asset]] = {}
    for asset in assets:
        grouped.setdefault(field_value(asset, field), []).append(asset)
    return sorted(grouped.items(), key=lambda item: (item[0].lower(), item[0]))


def sort_assets(assets: Sequence[Asset], column: SearchField | str | None, descending: bool = False) -> list[Asset]:
    if column is None:
        return list(assets)

    column = SearchField(column)
    if column == SearchField.QUANTITY:
        return sorted(assets, key=lambda asset: asset.quantity or 0, reverse=descending)
    return sorted(assets, key=lambda asset: (field_value(asset, column) or "").lower(), reverse=descending)
