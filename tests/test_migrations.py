from __future__ import annotations

import pytest

from eyesentry.migrations.rpc import (
    MigrationStep,
    RemoteProcedureFailure,
    call_procedure,
    column_is_exposed,
    run_migration,
    signed_out_on_exit,
)
from eyesentry.migrations.tooltips import TOOLTIP_STEPS, add_tooltip_column, main


def test_all_steps_run_in_order_then_sign_out(supabase) -> None:
    result = add_tooltip_column(supabase)

    assert result.ok
    assert supabase.rpc_calls == ["add_tooltip_column", "add_tooltip_comment", "update_existing_tooltips"]
    assert result.completed == supabase.rpc_calls
    assert supabase.auth.sign_out_calls == 1


def test_failure_aborts_remaining_steps_but_still_signs_out(supabase) -> None:
    supabase.rpc_errors["add_tooltip_comment"] = {"message": "permission denied", "code": "42501"}

    result = run_migration(supabase, TOOLTIP_STEPS)

    assert not result.ok
    assert supabase.rpc_calls == ["add_tooltip_column", "add_tooltip_comment"]
    assert result.completed == ["add_tooltip_column"]
    assert result.failure.procedure == "add_tooltip_comment"
    assert "permission denied" in str(result.failure)
    assert supabase.auth.sign_out_calls == 1


def test_call_procedure_wraps_api_errors(supabase) -> None:
    supabase.rpc_errors["missing_fn"] = {"message": "function not found", "code": "PGRST202"}

    with pytest.raises(RemoteProcedureFailure) as excinfo:
        call_procedure(supabase, MigrationStep("missing_fn", "does not exist"))

    assert excinfo.value.procedure == "missing_fn"


def test_sign_out_runs_when_body_raises(supabase) -> None:
    with pytest.raises(KeyError):
        with signed_out_on_exit(supabase):
            raise KeyError("boom")

    assert supabase.auth.sign_out_calls == 1


def test_sign_out_error_does_not_mask_result(supabase) -> None:
    supabase.auth.sign_out_error = RuntimeError("network down")

    result = run_migration(supabase, TOOLTIP_STEPS)

    assert result.ok
    assert supabase.auth.sign_out_calls == 1


def test_column_check_reports_schema_cache_miss(supabase) -> None:
    assert column_is_exposed(supabase, "questions", "tooltip", "") is True

    supabase.table_errors["questions"] = {"message": "Could not find the 'tooltip' column", "code": "PGRST204"}
    assert column_is_exposed(supabase, "questions", "tooltip", "") is False


def test_verify_runs_inside_session_only_after_success(supabase) -> None:
    result = add_tooltip_column(supabase, verify=True)

    assert result.verified is True
    assert supabase.queries[-1].table == "questions"

    failing = type(supabase)()
    failing.rpc_errors["add_tooltip_column"] = {"message": "boom", "code": "XX000"}
    failed = add_tooltip_column(failing, verify=True)

    assert failed.verified is None
    assert failing.queries == []


def test_main_exit_codes(supabase) -> None:
    assert main([], client=supabase) == 0

    supabase.rpc_errors["update_existing_tooltips"] = {"message": "boom", "code": "XX000"}
    assert main(["--verify"], client=supabase) == 1
    assert supabase.auth.sign_out_calls == 2


def test_main_without_credentials_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SUPABASE_URL", "VITE_SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "VITE_SUPABASE_SERVICE_ROLE_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("eyesentry.migrations.tooltips.load_dotenv", lambda: None)

    assert main([]) == 1
