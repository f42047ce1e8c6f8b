"""One-off migration: add and backfill `questions.tooltip`.

Run with `python scripts/add_tooltip_column.py` from the repository root.
"""

from __future__ import annotations

from eyesentry.migrations.tooltips import main

if __name__ == "__main__":
    raise SystemExit(main())
