"""
Layout helpers for the Streamlit application (page setup, sidebar shell, login gate).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import streamlit as st

from eyesentry.auth import AuthSession
from eyesentry.config import TABS
from eyesentry.data.loader import clear_cache

logger = logging.getLogger(__name__)

ROUTE_STATE_KEY = "es_active_route"


@dataclass(frozen=True)
class NavItem:
    label: str
    route: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class NavGroup:
    label: str
    items: List[NavItem] = field(default_factory=list)


@dataclass
class AppShell:
    title: str
    navigation: Sequence[NavGroup]
    subtitle: Optional[str] = None
    show_profile: bool = True
    show_settings: bool = False


def default_navigation() -> List[NavGroup]:
    return [NavGroup("Administration", [NavItem(tab.label, tab.key, tab.icon or None) for tab in TABS])]


def resolve_route(navigation: Sequence[NavGroup], requested: Optional[str]) -> Optional[str]:
    """Return `requested` if some item owns it, else the first route, else None."""
    routes = [item.route for group in navigation for item in group.items]
    if requested in routes:
        return requested
    return routes[0] if routes else None


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="EyeSentry Admin",
        layout="wide",
        page_icon=":eye:",
    )


def render_login(auth: AuthSession) -> None:
    st.title("EyeSentry Admin")
    st.caption("Sign in with an administrator account to continue.")
    with st.form("es_login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")
    if not submitted:
        return
    if not email or not password:
        st.warning("Enter both email and password.")
        return
    try:
        auth.login(email, password)
    except Exception as exc:
        logger.warning("Login failed for %s: %s", email, exc)
        st.error("Invalid email or password.")
        return
    st.rerun()


def _handle_logout(auth: AuthSession) -> None:
    try:
        auth.logout()
    except Exception:
        logger.exception("Error logging out")
        st.toast("Failed to logout", icon=":material/error:")
        return
    st.session_state.pop(ROUTE_STATE_KEY, None)
    st.rerun()


def _render_navigation(navigation: Sequence[NavGroup], active: str) -> None:
    for group in navigation:
        st.sidebar.caption(group.label.upper())
        for item in group.items:
            if st.sidebar.button(
                item.label,
                key=f"es_nav_{item.route}",
                icon=item.icon,
                type="primary" if item.route == active else "secondary",
                use_container_width=True,
            ):
                st.session_state[ROUTE_STATE_KEY] = item.route
                st.rerun()


def render_shell(shell: AppShell, auth: AuthSession) -> Optional[str]:
    """
    Draw the sidebar and page header for a signed-in user and return the
    active route. Without a user the login form is shown and None returned.
    """
    if auth.user is None:
        render_login(auth)
        return None

    active = resolve_route(shell.navigation, st.session_state.get(ROUTE_STATE_KEY))
    if active is None:
        st.warning("No pages configured.")
        return None
    st.session_state[ROUTE_STATE_KEY] = active

    st.sidebar.markdown(f"### {shell.title}")
    _render_navigation(shell.navigation, active)

    st.sidebar.divider()
    if shell.show_profile:
        st.sidebar.markdown(f"**{auth.user.display_name}**")
        st.sidebar.caption(auth.user.email)
    if shell.show_settings:
        with st.sidebar.expander("Settings", icon=":material/settings:"):
            if st.button("Refresh data", key="es_refresh", use_container_width=True):
                clear_cache()
                st.toast("Data reloaded", icon=":material/refresh:")
    if st.sidebar.button("Log out", key="es_logout", icon=":material/logout:", use_container_width=True):
        _handle_logout(auth)
        if auth.user is None:
            return None

    st.title(shell.title)
    if shell.subtitle:
        st.caption(shell.subtitle)
    return active
