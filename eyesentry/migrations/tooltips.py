"""Add the `tooltip` column to `questions` and backfill existing rows.

Run with `python scripts/add_tooltip_column.py [--verify]`. Needs
SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in the environment or `.env`.
"""

from __future__ import annotations

import argparse
import logging
from functools import partial
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from eyesentry.config import ConfigError, Settings, configure_logging
from eyesentry.data.client import create_supabase_client
from eyesentry.migrations.rpc import MigrationResult, MigrationStep, column_is_exposed, run_migration

logger = logging.getLogger(__name__)

TOOLTIP_STEPS: List[MigrationStep] = [
    MigrationStep("add_tooltip_column", "add tooltip column to questions"),
    MigrationStep("add_tooltip_comment", "describe the tooltip column"),
    MigrationStep("update_existing_tooltips", "backfill tooltips on existing questions"),
]


def add_tooltip_column(client, verify: bool = False) -> MigrationResult:
    check = partial(column_is_exposed, table="questions", column="tooltip", value="") if verify else None
    result = run_migration(client, TOOLTIP_STEPS, verify=check)
    if result.ok:
        logger.info("Successfully added tooltip column to questions table")
    if result.verified is False:
        logger.warning("tooltip column is not visible to the API yet; reload the PostgREST schema cache")
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Add the tooltip column to the questions table.")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Query the API afterwards to confirm the column is exposed.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, client=None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)
    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if client is None:
        try:
            client = create_supabase_client(settings, service_role=True)
        except ConfigError as exc:
            logger.error("%s", exc)
            return 1

    result = add_tooltip_column(client, verify=args.verify)
    return 0 if result.ok else 1
