"""Event check-in system.

This package is organized by feature modules (teams, registrations, checkin,
admin, health) with a thin Flask controller layer over service/repository
layers.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
