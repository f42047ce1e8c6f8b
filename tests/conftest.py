"""Shared fakes for the Supabase client so tests never touch the network."""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table = table
        self.calls: List[tuple] = []

    def __getattr__(self, name: str):
        def _chain(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return _chain

    def execute(self):
        self.client.queries.append(self)
        error = self.client.table_errors.get(self.table)
        if error is not None:
            raise APIError(error)
        return SimpleNamespace(data=self.client.table_data.get(self.table, []))


class FakeRpc:
    def __init__(self, client: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append(self.name)
        error = self.client.rpc_errors.get(self.name)
        if error is not None:
            raise APIError(error)
        return SimpleNamespace(data=None)


class FakeAuth:
    def __init__(self):
        self.sign_out_calls = 0
        self.sign_out_error: Optional[Exception] = None
        self.sign_in_error: Optional[Exception] = None
        self.signed_in_with: Optional[Dict[str, str]] = None

    def sign_in_with_password(self, credentials: Dict[str, str]):
        if self.sign_in_error is not None:
            raise self.sign_in_error
        self.signed_in_with = credentials
        user = SimpleNamespace(
            id="user-1",
            email=credentials["email"],
            app_metadata={"role": "admin"},
            user_metadata={"name": "Dr. Brown"},
        )
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token="token"))

    def sign_out(self):
        self.sign_out_calls += 1
        if self.sign_out_error is not None:
            raise self.sign_out_error


class FakeSupabase:
    def __init__(self):
        self.auth = FakeAuth()
        self.rpc_calls: List[str] = []
        self.rpc_errors: Dict[str, Dict[str, Any]] = {}
        self.table_data: Dict[str, List[Dict[str, Any]]] = {}
        self.table_errors: Dict[str, Dict[str, Any]] = {}
        self.queries: List[FakeQuery] = []

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None):
        return FakeRpc(self, name, params or {})

    def table(self, name: str):
        return FakeQuery(self, name)


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()
