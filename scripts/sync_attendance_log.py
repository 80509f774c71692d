"""Rebuild the attendance log (registrations_done) from the roster flags."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.checkin_system.checkin_system.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    report = container.reconciler.reconcile()
    stats = container.dashboard_service.stats()

    print(f"Added: {report.added}")
    print(f"Updated: {report.updated}")
    print(f"Marked absent: {report.marked_absent}")
    print(f"Already in sync: {report.unchanged}")
    print(f"Teams checked in (roster): {stats.checked_in}/{stats.total}")


if __name__ == "__main__":
    main()
