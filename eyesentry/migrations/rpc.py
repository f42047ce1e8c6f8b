"""
Helpers for one-off schema migrations that run named Postgres functions
through the Supabase RPC endpoint.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# PostgREST code for "column not found in the schema cache"
SCHEMA_CACHE_MISS = "PGRST204"
SENTINEL_ID = "00000000-0000-0000-0000-000000000000"


class RemoteProcedureFailure(RuntimeError):
    def __init__(self, procedure: str, error: Any):
        message = getattr(error, "message", None) or str(error)
        super().__init__(f"{procedure} failed: {message}")
        self.procedure = procedure
        self.error = error


@dataclass(frozen=True)
class MigrationStep:
    procedure: str
    description: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MigrationResult:
    completed: List[str] = field(default_factory=list)
    failure: Optional[RemoteProcedureFailure] = None
    verified: Optional[bool] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@contextmanager
def signed_out_on_exit(client) -> Iterator[Any]:
    """Yield the client and sign its session out whatever happens inside."""
    try:
        yield client
    finally:
        try:
            client.auth.sign_out()
        except Exception:
            logger.exception("Sign-out after migration failed")
        else:
            logger.info("Signed out migration session")


def call_procedure(client, step: MigrationStep) -> Any:
    try:
        response = client.rpc(step.procedure, step.params or {}).execute()
    except APIError as exc:
        raise RemoteProcedureFailure(step.procedure, exc) from exc
    return response.data


def run_steps(client, steps: Sequence[MigrationStep]) -> MigrationResult:
    """Run steps in order, stopping at the first failure."""
    result = MigrationResult()
    for step in steps:
        logger.info("Running %s: %s", step.procedure, step.description)
        try:
            call_procedure(client, step)
        except RemoteProcedureFailure as exc:
            logger.error("Migration aborted: %s", exc)
            result.failure = exc
            break
        result.completed.append(step.procedure)
    return result


def run_migration(
    client,
    steps: Sequence[MigrationStep],
    verify: Optional[Callable[[Any], bool]] = None,
) -> MigrationResult:
    """Run `steps`, then `verify` if they all succeeded. The session is always signed out."""
    with signed_out_on_exit(client):
        result = run_steps(client, steps)
        if result.ok and verify is not None:
            result.verified = verify(client)
    return result


def column_is_exposed(client, table: str, column: str, value: Any) -> bool:
    """Check whether PostgREST knows `column` by updating a row that cannot exist."""
    try:
        client.table(table).update({column: value}).eq("id", SENTINEL_ID).execute()
    except APIError as exc:
        if exc.code == SCHEMA_CACHE_MISS:
            return False
        raise
    return True
