from streamlit.testing.v1 import AppTest


def _selection_app() -> None:
    from inventory.config.schemas import Asset
    from inventory.ui import render_selection

    assets = [
        Asset(id=1, model="X", office_location="A", asset_type="Laptop", status="Stock"),
        Asset(id=2, model="X", office_location="B", asset_type="Laptop", status="Deployed"),
        Asset(id=3, model="Y", office_location="A", asset_type="Monitor", status="Stock"),
    ]
    render_selection(assets)


def _app() -> AppTest:
    at = AppTest.from_function(_selection_app)
    at.run()
    assert not at.exception
    assert at.session_state["selected_assets"] == frozenset()
    return at


def test_select_all_then_deselect_all_in_list_view() -> None:
    at = _app()

    at.button[0].click().run()
    assert at.session_state["selected_assets"] == {1, 2, 3}
    assert all(at.checkbox(key=f"s_asset_{asset_id}").value for asset_id in (1, 2, 3))

    at.button[1].click().run()
    assert at.session_state["selected_assets"] == frozenset()
    assert not any(at.checkbox(key=f"s_asset_{asset_id}").value for asset_id in (1, 2, 3))


def test_select_all_survives_following_reruns() -> None:
    at = _app()

    at.button[0].click().run()
    at.run()
    assert at.session_state["selected_assets"] == {1, 2, 3}


def test_checkbox_toggles_single_asset() -> None:
    at = _app()

    at.checkbox(key="s_asset_2").check().run()
    assert at.session_state["selected_assets"] == {2}

    at.button[0].click().run()
    at.checkbox(key="s_asset_1").uncheck().run()
    assert at.session_state["selected_assets"] == {2, 3}


def test_group_buttons_select_and_deselect_by_model() -> None:
    at = _app()
    at.radio(key="s_view").set_value("model").run()

    at.button(key="s_add_model_X").click().run()
    assert at.session_state["selected_assets"] == {1, 2}

    at.button(key="s_add_model_Y").click().run()
    at.button(key="s_del_model_X").click().run()
    assert at.session_state["selected_assets"] == {3}


def test_list_view_reflects_group_selection() -> None:
    at = _app()
    at.radio(key="s_view").set_value("location").run()
    at.button(key="s_add_location_A").click().run()

    at.radio(key="s_view").set_value("list").run()
    assert at.checkbox(key="s_asset_1").value
    assert not at.checkbox(key="s_asset_2").value
    assert at.checkbox(key="s_asset_3").value
    assert at.session_state["selected_assets"] == {1, 3}
