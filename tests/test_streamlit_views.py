"""Streamlit-level tests: scripts run through AppTest without a browser."""

from __future__ import annotations

from streamlit.testing.v1 import AppTest

from eyesentry.auth import USER_STATE_KEY, AuthUser


def _tables_app():
    from eyesentry.ui.components.data_table import ColumnSpec, render_data_table

    columns = [ColumnSpec("Name", accessor_key="name"), ColumnSpec("Age", accessor_key="age")]
    rows = [{"id": 1, "name": "Alice", "age": 30}, {"id": 2, "name": "Bob", "age": 25}]

    render_data_table(columns, rows, key="es_x", search_column="name")
    render_data_table(columns, rows, key="es_y", search_column="name")
    render_data_table(columns, rows, key="es_plain")


def _shell_app():
    from types import SimpleNamespace

    import streamlit as st

    from eyesentry.auth import AuthSession
    from eyesentry.ui.layout import AppShell, NavGroup, NavItem, render_shell

    class _Auth:
        def sign_out(self):
            if st.session_state.get("fail_sign_out"):
                raise RuntimeError("network down")

    auth = AuthSession(SimpleNamespace(auth=_Auth()), st.session_state)
    shell = AppShell(
        title="Admin",
        navigation=[NavGroup("Admin", [NavItem("Users", "users"), NavItem("Questions", "questions")])],
    )
    route = render_shell(shell, auth)
    st.write(f"route={route}")


def _markdown(at: AppTest) -> list[str]:
    return [element.value for element in at.markdown]


def _tables(at: AppTest) -> list[str]:
    return [value for value in _markdown(at) if "es-data-table" in value]


def _signed_in_shell(fail_sign_out: bool = False) -> AppTest:
    at = AppTest.from_function(_shell_app, default_timeout=30)
    at.session_state[USER_STATE_KEY] = AuthUser(id="user-1", email="brown@example.com")
    at.session_state["fail_sign_out"] = fail_sign_out
    return at.run()


def test_search_box_only_for_tables_with_a_filter_field() -> None:
    at = AppTest.from_function(_tables_app, default_timeout=30).run()

    assert not at.exception
    assert sorted(box.key for box in at.text_input) == ["es_x_search", "es_y_search"]
    assert len(_tables(at)) == 3


def test_typing_filters_only_its_own_table() -> None:
    at = AppTest.from_function(_tables_app, default_timeout=30).run()

    at.text_input(key="es_x_search").input("al").run()

    first, second, plain = _tables(at)
    assert "Alice" in first and "Bob" not in first
    assert "Alice" in second and "Bob" in second
    assert "Alice" in plain and "Bob" in plain


def test_no_match_shows_placeholder_row() -> None:
    at = AppTest.from_function(_tables_app, default_timeout=30).run()

    at.text_input(key="es_y_search").input("zzz").run()

    second = _tables(at)[1]
    assert "No results found." in second
    assert 'colspan="2"' in second


def test_shell_without_user_shows_login() -> None:
    at = AppTest.from_function(_shell_app, default_timeout=30).run()

    assert not at.exception
    assert "route=None" in _markdown(at)
    assert len(at.text_input) == 2


def test_shell_navigation_switches_route() -> None:
    at = _signed_in_shell()
    assert "route=users" in _markdown(at)

    at.button(key="es_nav_questions").click().run()

    assert not at.exception
    assert "route=questions" in _markdown(at)


def test_logout_returns_to_login() -> None:
    at = _signed_in_shell()

    at.button(key="es_logout").click().run()

    assert not at.exception
    assert "route=None" in _markdown(at)
    assert USER_STATE_KEY not in at.session_state


def test_failed_logout_keeps_user_on_page() -> None:
    at = _signed_in_shell(fail_sign_out=True)

    at.button(key="es_logout").click().run()

    assert not at.exception
    assert "route=users" in _markdown(at)
    assert at.session_state[USER_STATE_KEY].email == "brown@example.com"
    assert [toast.value for toast in at.toast] == ["Failed to logout"]
