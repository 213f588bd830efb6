from __future__ import annotations

from pathlib import Path

import streamlit as st

from inventory.config.loader import ConfigLoader
from inventory.config.schemas import AnalyticsMode, AppConfig, Asset, ReferenceNames
from inventory.config.validation import RuntimeValidator
from inventory.core import selection as sel
from inventory.core.aggregation import AggregationEngine, AggregationResult, ChartRow, FilterCriteria, headline
from inventory.core.search import SearchField, group_assets, search_any, search_assets, sort_assets
from inventory.core.store import InventoryStore, StoreError


CONFIG_PATH = Path("config") / "inventory.yaml"

GROUP_PREDICATES = {
    SearchField.MODEL: sel.same_model,
    SearchField.LOCATION: sel.same_location,
    SearchField.TYPE: sel.same_type,
    SearchField.STATUS: sel.same_status,
}


@st.cache_data(show_spinner=False)
def load_config() -> tuple[AppConfig, list[str]]:
    warnings: list[str] = []
    try:
        return ConfigLoader.load_app_config(CONFIG_PATH), warnings
    except Exception as exc:  # noqa: BLE001
        warnings.append(f"inventory.yaml error: {exc}")
        return AppConfig(), warnings


def load_inventory(store: InventoryStore) -> tuple[list[Asset], ReferenceNames]:
    return store.load_assets(), store.load_reference_names()


def render_sidebar(config: AppConfig, warnings: list[str], assets: list[Asset], references: ReferenceNames) -> None:
    with st.sidebar:
        st.title("⚙️ Settings")

        if st.button("🔄 Reload"):
            st.cache_data.clear()
            st.rerun()

        st.caption(f"Store: {config.store.path}")
        st.success(f"✅ Assets loaded: {len(assets)}")

        for warning in warnings:
            st.warning(f"⚠️ {warning}")

        report = RuntimeValidator.validate_references(assets, references)
        for error in report.errors:
            st.error(error)
        if report.warnings:
            with st.expander(f"⚠️ {len(report.warnings)} unknown references"):
                for warning in report.warnings:
                    st.write(f"- {warning}")


def render_chart(title: str, rows: list[ChartRow], stacked: bool = True) -> None:
    if not rows:
        return
    st.markdown(f"**{title}**")
    data = [row.as_dict() for row in rows]
    if stacked and any(row.statuses for row in rows):
        columns = list(dict.fromkeys(key for item in data for key in item if key not in ("name", "count")))
        data = [{"name": item["name"], **{column: item.get(column, 0) for column in columns}} for item in data]
        st.bar_chart(data, x="name", y=columns)
    else:
        st.bar_chart(data, x="name", y="count")


def render_filters(references: ReferenceNames) -> FilterCriteria:
    col1, col2, col3 = st.columns(3)
    with col1:
        location = st.selectbox("Office location", ["", *references.locations], key="f_location")
    with col2:
        asset_type = st.selectbox("Asset type", ["", *references.types], key="f_type")
    with col3:
        model_query = st.text_input("Search models", key="f_model_query")
        models = [name for name in references.models if model_query.lower() in name.lower()]
        model = st.selectbox("Model", ["", *models], key="f_model")
    return FilterCriteria(location=location or None, asset_type=asset_type or None, model=model or None)


def checkbox_key(asset: Asset) -> str:
    return f"s_asset_{asset.id}"


def store_selection(selected: frozenset, assets: list[Asset]) -> None:
    # checkbox widget state must follow every bulk change or the next rerun reverts it
    st.session_state["selected_assets"] = selected
    for asset in assets:
        st.session_state[checkbox_key(asset)] = asset.id in selected


def _toggle_asset(asset_id) -> None:
    st.session_state["selected_assets"] = sel.toggle(st.session_state["selected_assets"], asset_id)


def _select_matching(assets: list[Asset], predicate, select: bool) -> None:
    operation = sel.select_all_matching if select else sel.deselect_all_matching
    store_selection(operation(st.session_state["selected_assets"], assets, predicate), assets)


def render_selection(assets: list[Asset]) -> frozenset:
    st.session_state.setdefault("selected_assets", frozenset())

    btn_col1, btn_col2 = st.columns(2)
    with btn_col1:
        st.button(
            "Select all",
            use_container_width=True,
            on_click=lambda: store_selection(sel.select_all(asset.id for asset in assets), assets),
        )
    with btn_col2:
        st.button(
            "Deselect all",
            use_container_width=True,
            on_click=lambda: store_selection(sel.deselect_all(), assets),
        )

    query = st.text_input("Search assets", key="s_query")
    view = st.radio(
        "View",
        ["list", *[field.value for field in GROUP_PREDICATES]],
        horizontal=True,
        key="s_view",
    )
    visible = search_any(assets, query)
    selected: frozenset = st.session_state["selected_assets"]

    if view == "list":
        for asset in visible:
            st.session_state.setdefault(checkbox_key(asset), asset.id in selected)
            st.checkbox(
                f"{asset.model} | {asset.office_location} | {asset.asset_type} | {asset.status}",
                key=checkbox_key(asset),
                on_change=_toggle_asset,
                args=(asset.id,),
            )
    else:
        field = SearchField(view)
        predicate = GROUP_PREDICATES[field]
        for name, members in group_assets(visible, field):
            chosen = sum(1 for asset in members if asset.id in selected)
            with st.expander(f"{name or '(blank)'} ({chosen}/{len(members)} selected)"):
                col1, col2 = st.columns(2)
                with col1:
                    st.button(
                        "Select group",
                        key=f"s_add_{view}_{name}",
                        on_click=_select_matching,
                        args=(assets, predicate(name), True),
                    )
                with col2:
                    st.button(
                        "Deselect group",
                        key=f"s_del_{view}_{name}",
                        on_click=_select_matching,
                        args=(assets, predicate(name), False),
                    )

    return st.session_state["selected_assets"]


def render_results(result: AggregationResult, mode: AnalyticsMode) -> None:
    col1, col2 = st.columns(2)
    with col1:
        render_chart("Assets by location", result.by_location)
        render_chart("Top models", result.by_model)
    with col2:
        render_chart("Assets by type", result.by_type)
        render_chart("Assets by status", result.by_status, stacked=False)

    if mode == AnalyticsMode.SELECTION:
        render_chart("Selected assets by model", result.selected_models)
        return

    render_chart("Types at location", result.by_location_and_type, stacked=False)
    render_chart("Top models at location", result.by_location_and_model, stacked=False)
    render_chart("Distribution by location", result.filtered_breakdown)
    render_chart("Status breakdown", result.filtered_status, stacked=False)
    render_chart("Quantity by model", result.filtered_quantity)


def render_analytics_tab(config: AppConfig, assets: list[Asset], references: ReferenceNames) -> None:
    st.header("Analytics")
    st.session_state.setdefault("selected_assets", frozenset())
    st.session_state.setdefault("analytics_mode", AnalyticsMode.FILTER.value)

    mode_value = st.radio(
        "Mode",
        [item.value for item in AnalyticsMode],
        format_func=lambda value: "Filter" if value == AnalyticsMode.FILTER.value else "Manual selection",
        horizontal=True,
    )
    if mode_value != st.session_state["analytics_mode"]:
        st.session_state["analytics_mode"] = mode_value
        store_selection(sel.deselect_all(), assets)
    mode = AnalyticsMode(mode_value)

    criteria = FilterCriteria()
    selected: frozenset = frozenset()
    if mode == AnalyticsMode.FILTER:
        criteria = render_filters(references)
    else:
        selected = render_selection(assets)

    stat = headline(assets, mode, criteria, selected)
    st.metric(stat.label, stat.count)

    result = AggregationEngine(config.analytics).aggregate(assets, mode, criteria, selected)
    render_results(result, mode)


def render_inventory_tab(store: InventoryStore, assets: list[Asset]) -> None:
    st.header("Inventory")

    col1, col2, col3 = st.columns([2, 3, 2])
    with col1:
        field = st.selectbox("Search in", [f.value for f in SearchField if f != SearchField.QUANTITY])
    with col2:
        query = st.text_input("Search", key="inv_query")
    with col3:
        column = st.selectbox("Sort by", ["", *[f.value for f in SearchField if f != SearchField.NOTES]])
        descending = st.toggle("Descending")

    rows = sort_assets(search_assets(assets, query, field), column or None, descending)
    for asset in rows:
        col1, col2, col3 = st.columns([6, 1, 1])
        with col1:
            st.write(
                f"**{asset.model}** | {asset.office_location} | {asset.asset_type} | "
                f"{asset.status} | qty: {asset.quantity if asset.quantity is not None else '-'}"
            )
        for delta, target in ((-1, col2), (1, col3)):
            with target:
                if st.button("➖" if delta < 0 else "➕", key=f"inv_qty_{asset.id}_{delta}"):
                    try:
                        store.change_quantity(asset.id, delta)
                        st.rerun()
                    except StoreError as exc:
                        st.error(f"Error updating quantity: {exc}")


def main() -> None:
    st.set_page_config(
        page_title="Asset Inventory",
        page_icon="📦",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("📦 Asset Inventory")
    config, warnings = load_config()
    store = InventoryStore(config.store.path)
    try:
        assets, references = load_inventory(store)
    except StoreError as exc:
        st.error(f"Failed to load inventory: {exc}")
        return

    render_sidebar(config, warnings, assets, references)

    tab_analytics, tab_inventory = st.tabs(["📊 Analytics", "🗂 Inventory"])

    with tab_analytics:
        render_analytics_tab(config, assets, references)

    with tab_inventory:
        render_inventory_tab(store, assets)


if __name__ == "__main__":
    main()
