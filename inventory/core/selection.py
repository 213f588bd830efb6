from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Set

from inventory.config.schemas import Asset

AssetPredicate = Callable[[Asset], bool]


def toggle(selection: Set[Hashable], asset_id: Hashable) -> frozenset:
    if asset_id in selection:
        return frozenset(selection - {asset_id})
    return frozenset(selection | {asset_id})


def select_all(ids: Iterable[Hashable]) -> frozenset:
    return frozenset(ids)


def deselect_all() -> frozenset:
    return frozenset()


def select_all_matching(selection: Set[Hashable], assets: Iterable[Asset], predicate: AssetPredicate) -> frozenset:
    return frozenset(selection) | {asset.id for asset in assets if predicate(asset)}


def deselect_all_matching(selection: Set[Hashable], assets: Iterable[Asset], predicate: AssetPredicate) -> frozenset:
    return frozenset(selection) - {asset.id for asset in assets if predicate(asset)}


def same_model(name: str) -> AssetPredicate:
    return lambda asset: asset.model == name


def same_location(name: str) -> AssetPredicate:
    return lambda asset: asset.office_location == name


def same_type(name: str) -> AssetPredicate:
    return lambda asset: asset.asset_type == name


def same_status(name: str) -> AssetPredicate:
    return lambda asset: asset.status == name
