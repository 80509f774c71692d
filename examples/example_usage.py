"""Example: drive the service layer without Flask.

Controllers are a thin layer; the check-in rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.checkin_system.checkin_system.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.dashboard_service.stats().to_dict())
    for team in container.dashboard_service.list_teams_ui()[:5]:
        print(team)


if __name__ == "__main__":
    main()
