import pytest

from inventory.config.schemas import Asset
from inventory.core.search import filter_names, group_assets, search_any, search_assets, sort_assets


def _assets() -> list[Asset]:
    return [
        Asset(id=1, model="Latitude 5440", office_location="Head Office", asset_type="Laptop", status="Deployed", quantity=12),
        Asset(id=2, model="ThinkPad T14", office_location="Head Office", asset_type="Laptop", status="Stock"),
        Asset(
            id=3,
            model="U2723QE",
            office_location="Warehouse",
            asset_type="Monitor",
            status="Stock",
            quantity=30,
            company_id="MON-0042",
        ),
    ]


def test_search_is_case_insensitive_substring() -> None:
    assert [a.id for a in search_assets(_assets(), "latitude", "model")] == [1]
    assert [a.id for a in search_assets(_assets(), "HOUSE", "location")] == [3]


def test_search_skips_missing_optional_fields() -> None:
    assert [a.id for a in search_assets(_assets(), "mon-", "company_id")] == [3]
    assert search_assets(_assets(), "", "notes") == []


def test_empty_query_matches_everything() -> None:
    assert len(search_assets(_assets(), "", "status")) == 3


def test_quantity_is_not_searchable() -> None:
    with pytest.raises(ValueError):
        search_assets(_assets(), "1", "quantity")


def test_search_any_checks_all_text_fields() -> None:
    assert [a.id for a in search_any(_assets(), "stock")] == [2, 3]
    assert [a.id for a in search_any(_assets(), "monitor")] == [3]


def test_group_assets_sorts_groups_by_name() -> None:
    groups = group_assets(_assets(), "status")
    assert [name for name, _ in groups] == ["Deployed", "Stock"]
    assert [a.id for a in groups[1][1]] == [2, 3]


def test_sort_assets_by_quantity_treats_missing_as_zero() -> None:
    ordered = sort_assets(_assets(), "quantity", descending=True)
    assert [a.id for a in ordered] == [3, 1, 2]


def test_sort_assets_by_text_ignores_case() -> None:
    assets = _assets() + [Asset(id=4, model="latitude 7440")]
    assert [a.id for a in sort_assets(assets, "model")] == [1, 4, 2, 3]
    assert sort_assets(assets, None) == assets


def test_filter_names() -> None:
    assert filter_names(["Head Office", "Warehouse"], "office") == ["Head Office"]
