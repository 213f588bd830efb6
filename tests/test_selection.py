from inventory.config.schemas import AnalyticsMode, Asset
from inventory.core import selection as sel
from inventory.core.aggregation import AggregationEngine


def _assets() -> list[Asset]:
    return [
        Asset(id=1, model="X", office_location="A", asset_type="Laptop", status="Stock", quantity=2),
        Asset(id=2, model="X", office_location="B", asset_type="Laptop", status="Deployed"),
        Asset(id=3, model="Y", office_location="A", asset_type="Monitor", status="Stock", quantity=5),
    ]


def test_toggle_flips_membership() -> None:
    selected = sel.toggle(frozenset({1}), 2)
    assert selected == {1, 2}
    assert sel.toggle(selected, 1) == {2}


def test_toggle_returns_new_set() -> None:
    original = frozenset({1})
    sel.toggle(original, 2)
    assert original == {1}


def test_toggle_feeds_selected_models() -> None:
    assets = _assets()
    selected = sel.toggle(frozenset({1}), 2)
    result = AggregationEngine().aggregate(assets, AnalyticsMode.SELECTION, selection=selected)

    assert [row.as_dict() for row in result.selected_models] == [
        {"name": "X", "count": 3, "Stock": 2, "Deployed": 1}
    ]


def test_select_and_deselect_all() -> None:
    assets = _assets()
    assert sel.select_all(asset.id for asset in assets) == {1, 2, 3}
    assert sel.deselect_all() == frozenset()


def test_group_operations_leave_other_members_alone() -> None:
    assets = _assets()

    selected = sel.select_all_matching(frozenset({3}), assets, sel.same_model("X"))
    assert selected == {1, 2, 3}

    selected = sel.deselect_all_matching(selected, assets, sel.same_location("A"))
    assert selected == {2}

    selected = sel.select_all_matching(selected, assets, sel.same_type("Monitor"))
    assert selected == {2, 3}

    selected = sel.deselect_all_matching(selected, assets, sel.same_status("Deployed"))
    assert selected == {3}


def test_group_operations_with_no_match_are_noops() -> None:
    assets = _assets()
    assert sel.select_all_matching(frozenset({1}), assets, sel.same_model("Z")) == {1}
    assert sel.deselect_all_matching(frozenset({1}), assets, sel.same_status("Retired")) == {1}
