"""
Session-scoped wrapper over Supabase Auth: current user, login, logout and
the admin check used to gate the console.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

USER_STATE_KEY = "es_auth_user"


@dataclass
class AuthUser:
    id: str
    email: str
    app_metadata: Dict[str, Any] = field(default_factory=dict)
    user_metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return str(self.user_metadata.get("name") or self.email)

    @classmethod
    def from_supabase(cls, user) -> "AuthUser":
        return cls(
            id=str(user.id),
            email=user.email or "",
            app_metadata=dict(user.app_metadata or {}),
            user_metadata=dict(user.user_metadata or {}),
        )


def is_admin(user: AuthUser, profile: Optional[Dict[str, Any]] = None) -> bool:
    """Admin by role in app_metadata, or by the is_admin flag on the profile row."""
    if user.app_metadata.get("role") == "admin":
        return True
    return bool(profile and profile.get("is_admin"))


class AuthSession:
    """Holds the signed-in user in a session-state mapping (st.session_state in the app)."""

    def __init__(self, client, state: MutableMapping[str, Any]):
        self._client = client
        self._state = state

    @property
    def user(self) -> Optional[AuthUser]:
        return self._state.get(USER_STATE_KEY)

    def login(self, email: str, password: str) -> AuthUser:
        response = self._client.auth.sign_in_with_password({"email": email, "password": password})
        user = AuthUser.from_supabase(response.user)
        self._state[USER_STATE_KEY] = user
        logger.info("Signed in %s", user.email)
        return user

    def logout(self) -> None:
        # Local user is only dropped once the remote sign-out succeeded
        self._client.auth.sign_out()
        self._state.pop(USER_STATE_KEY, None)
        logger.info("Signed out")

    def fetch_profile(self) -> Optional[Dict[str, Any]]:
        user = self.user
        if user is None:
            return None
        response = (
            self._client.table("profiles").select("id, email, name, is_admin").eq("id", user.id).limit(1).execute()
        )
        rows = response.data or []
        return rows[0] if rows else None
