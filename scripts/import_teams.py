"""Import the selected-teams roster from an Excel sheet.

Usage: python scripts/import_teams.py [path/to/SelectedTeams.xlsx] [--append]

Without --append the roster and the attendance log are cleared first.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.checkin_system.checkin_system.container import build_container

MAX_ERRORS_SHOWN = 10


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", nargs="?", default=getattr(settings, "ROSTER_FILE", "data/SelectedTeams.xlsx"))
    parser.add_argument("--append", action="store_true", help="keep existing teams, only add new ids")
    args = parser.parse_args()

    path = Path(args.path)
    if not path.is_absolute():
        path = REPO_ROOT / path
    if not path.exists():
        raise SystemExit(f"Roster file not found: {path}")

    container = build_container(
        db_config=settings.DB_CONFIG,
        default_college=getattr(settings, "DEFAULT_COLLEGE", "Malnad College of Engineering"),
    )
    result = container.roster_import_service.import_file(path, replace=not args.append)

    print("=" * 60)
    print("IMPORT SUMMARY")
    print("=" * 60)
    print(f"Imported: {result.imported} teams")
    print(f"Rejected rows: {len(result.errors)}")
    print(f"Total teams in roster: {result.total_in_roster}")

    for err in result.errors[:MAX_ERRORS_SHOWN]:
        suffix = f" (Team ID: {err.team_id})" if err.team_id else ""
        print(f"  Row {err.row}: {err.error}{suffix}")
    if len(result.errors) > MAX_ERRORS_SHOWN:
        print(f"  ... and {len(result.errors) - MAX_ERRORS_SHOWN} more")


if __name__ == "__main__":
    main()
