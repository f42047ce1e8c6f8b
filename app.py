import streamlit as st

from eyesentry.auth import AuthSession, is_admin
from eyesentry.bootstrap_env import ensure_env
from eyesentry.config import ConfigError, Settings, configure_logging
from eyesentry.data.client import create_supabase_client
from eyesentry.ui.layout import AppShell, default_navigation, render_shell, setup_page
from eyesentry.ui.pages import analytics, patients, questions, users
from eyesentry.ui.pages.context import PageContext

CLIENT_STATE_KEY = "es_supabase_client"

PAGE_RENDERERS = {
    "analytics": analytics.render,
    "patients": patients.render,
    "questions": questions.render,
    "users": users.render,
}


def get_client(settings: Settings):
    """One Supabase client per browser session; its auth state belongs to that user."""
    if CLIENT_STATE_KEY not in st.session_state:
        st.session_state[CLIENT_STATE_KEY] = create_supabase_client(settings)
    return st.session_state[CLIENT_STATE_KEY]


def main() -> None:
    setup_page()
    ensure_env()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    try:
        client = get_client(settings)
    except ConfigError as exc:
        st.error(f"{exc}. Set them in .env or Streamlit secrets.")
        st.stop()

    auth = AuthSession(client, st.session_state)
    shell = AppShell(
        title="EyeSentry Admin",
        subtitle="Manage users, questionnaires and patient data",
        navigation=default_navigation(),
        show_settings=True,
    )
    route = render_shell(shell, auth)
    if route is None:
        return

    profile = auth.fetch_profile()
    if not is_admin(auth.user, profile):
        st.warning("Your account does not have administrator access.")
        return

    renderer = PAGE_RENDERERS.get(route)
    if renderer is None:
        st.info("Page not found.")
        return
    renderer(PageContext(client=client, auth=auth, profile=profile))


if __name__ == "__main__":
    main()
