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


def main(limit: int = 10) -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    teams = container.teams_repo.list_all(limit=limit)
    if not teams:
        print("No teams found in selected_teams")
        return

    for i, t in enumerate(teams, start=1):
        print(f"\nSample {i}:")
        print(f"  teamId: {t.team_id}")
        print(f"  teamName: {t.team_name}")
        print(f"  members ({len(t.members)}): {', '.join(t.members)}")
        print(f"  checkedIn: {t.is_checked_in} at {t.check_in_time or '-'}")


if __name__ == "__main__":
    main()
