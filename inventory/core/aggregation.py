from __future__ import annotations

import math
from collections.abc import Callable, Hashable, Iterable, Sequence, Set
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any

from inventory.config.schemas import AnalyticsConfig, AnalyticsMode, Asset

by_location = attrgetter("office_location")
by_type = attrgetter("asset_type")
by_model = attrgetter("model")
by_status = attrgetter("status")

RESERVED_ROW_KEYS = frozenset({"name", "count"})


def item_count(asset: Asset) -> float:
    """Units an asset contributes to a count chart: a missing quantity is one unit."""
    return asset.quantity or 1


def quantity_sum(asset: Asset) -> float:
    """Units an asset contributes to a quantity total: a missing quantity adds nothing."""
    return asset.quantity or 0


@dataclass(frozen=True)
class FilterCriteria:
    location: str | None = None
    asset_type: str | None = None
    model: str | None = None

    @property
    def active(self) -> bool:
        return bool(self.location or self.asset_type or self.model)

    def matches(self, asset: Asset) -> bool:
        if self.location and asset.office_location != self.location:
            return False
        if self.asset_type and asset.asset_type != self.asset_type:
            return False
        if self.model and asset.model != self.model:
            return False
        return True


@dataclass
class ChartRow:
    name: str
    count: int
    statuses: dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {"name": self.name, "count": self.count}
        for status, value in self.statuses.items():
            # a status literally called "name" or "count" must not shadow the row fields
            row[f"{status} (status)" if status in RESERVED_ROW_KEYS else status] = value
        return row


@dataclass
class AggregationResult:
    by_location: list[ChartRow] = field(default_factory=list)
    by_type: list[ChartRow] = field(default_factory=list)
    by_model: list[ChartRow] = field(default_factory=list)
    by_status: list[ChartRow] = field(default_factory=list)
    by_location_and_type: list[ChartRow] = field(default_factory=list)
    by_location_and_model: list[ChartRow] = field(default_factory=list)
    filtered_breakdown: list[ChartRow] = field(default_factory=list)
    filtered_status: list[ChartRow] = field(default_factory=list)
    filtered_quantity: list[ChartRow] = field(default_factory=list)
    selected_models: list[ChartRow] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        tables = {
            "byLocation": self.by_location,
            "byType": self.by_type,
            "byModel": self.by_model,
            "byStatus": self.by_status,
            "byLocationAndType": self.by_location_and_type,
            "byLocationAndModel": self.by_location_and_model,
            "filteredBreakdown": self.filtered_breakdown,
            "filteredStatus": self.filtered_status,
            "filteredQuantity": self.filtered_quantity,
            "selectedModels": self.selected_models,
        }
        payload: dict[str, Any] = {key: [row.as_dict() for row in rows] for key, rows in tables.items()}
        payload["statuses"] = list(self.statuses)
        return payload


@dataclass
class Headline:
    count: int
    label: str


def group_rows(
    assets: Iterable[Asset],
    key: Callable[[Asset], str],
    weight: Callable[[Asset], float] = item_count,
    split_by_status: bool = True,
) -> list[ChartRow]:
    """Group assets by ``key`` in first-occurrence order.

    Each row carries the summed ``weight`` of its group and, unless
    ``split_by_status`` is off, the same sum broken down per status value.
    Sums are floored once, after accumulation.
    """
    totals: dict[str, float] = {}
    status_totals: dict[str, dict[str, float]] = {}

    for asset in assets:
        name = key(asset)
        amount = weight(asset)
        totals[name] = totals.get(name, 0) + amount
        # zero contributions (null quantities in a quantity sum) add no status segment
        if split_by_status and amount:
            bucket = status_totals.setdefault(name, {})
            bucket[asset.status] = bucket.get(asset.status, 0) + amount

    return [
        ChartRow(
            name=name,
            count=math.floor(total),
            statuses={status: math.floor(value) for status, value in status_totals.get(name, {}).items()},
        )
        for name, total in totals.items()
    ]


def ranked(rows: list[ChartRow], limit: int | None = None) -> list[ChartRow]:
    # sorted() is stable, so equal counts keep first-occurrence order
    ordered = sorted(rows, key=lambda row: -row.count)
    return ordered if limit is None else ordered[:limit]


def distinct_statuses(assets: Iterable[Asset]) -> list[str]:
    return list(dict.fromkeys(asset.status for asset in assets if asset.status))


class AggregationEngine:
    """Derives every analytics chart table from the asset list and the view state.

    ``aggregate`` is a pure function of its arguments: the asset list, the
    mode, the filter criteria (read only in filter mode) and the selected ids
    (read only in selection mode). Base tables are always computed over the
    unfiltered source so they stay stable while filters are explored; the
    drill-down tables use the filtered set.
    """

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        self.config = config or AnalyticsConfig()

    def aggregate(
        self,
        assets: Sequence[Asset],
        mode: AnalyticsMode | str,
        criteria: FilterCriteria | None = None,
        selection: Set[Hashable] = frozenset(),
    ) -> AggregationResult:
        mode = AnalyticsMode(mode)
        criteria = criteria or FilterCriteria()

        if mode == AnalyticsMode.SELECTION:
            data_source = [asset for asset in assets if asset.id in selection]
        else:
            data_source = list(assets)

        result = AggregationResult(
            by_location=ranked(group_rows(data_source, by_location)),
            by_type=ranked(group_rows(data_source, by_type)),
            by_model=ranked(group_rows(data_source, by_model), limit=self.config.top_models),
            by_status=group_rows(data_source, by_status, split_by_status=False),
            statuses=distinct_statuses(data_source),
        )

        if mode == AnalyticsMode.SELECTION:
            if selection:
                result.selected_models = ranked(group_rows(data_source, by_model))
            return result

        filtered = [asset for asset in data_source if criteria.matches(asset)]

        if criteria.location and not (criteria.asset_type or criteria.model):
            at_location = [asset for asset in data_source if asset.office_location == criteria.location]
            result.by_location_and_type = ranked(group_rows(at_location, by_type, split_by_status=False))
            result.by_location_and_model = ranked(
                group_rows(at_location, by_model, split_by_status=False),
                limit=self.config.location_top_models,
            )

        if criteria.asset_type or criteria.model:
            result.filtered_breakdown = ranked(group_rows(filtered, by_location))

        if criteria.active:
            result.filtered_status = group_rows(filtered, by_status, split_by_status=False)
            result.filtered_quantity = ranked(group_rows(filtered, by_model, weight=quantity_sum))

        return result


def headline(
    assets: Sequence[Asset],
    mode: AnalyticsMode | str,
    criteria: FilterCriteria | None = None,
    selection: Set[Hashable] = frozenset(),
) -> Headline:
    """Stat shown above the charts: record counts, not unit quantities."""
    criteria = criteria or FilterCriteria()

    if AnalyticsMode(mode) == AnalyticsMode.SELECTION:
        size = len(selection)
        return Headline(count=size, label="Selected Asset" if size == 1 else "Selected Assets")
    if criteria.model:
        count = sum(1 for asset in assets if asset.model == criteria.model)
        return Headline(count=count, label=f"{criteria.model} (Model)")
    if criteria.asset_type:
        count = sum(1 for asset in assets if asset.asset_type == criteria.asset_type)
        return Headline(count=count, label=f"{criteria.asset_type} (Type)")
    if criteria.location:
        count = sum(1 for asset in assets if asset.office_location == criteria.location)
        return Headline(count=count, label=f"{criteria.location} (Location)")
    return Headline(count=len(assets), label="Total Assets")
