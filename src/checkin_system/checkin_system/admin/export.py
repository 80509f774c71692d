from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import pandas as pd

from ..common.datetime_utils import format_check_in_time, now_local
from ..core.constants import EXPORT_MIMETYPE, EXPORT_SHEET_NAME
from ..core.enums import RegistrationStatus
from ..core.exceptions import NoDataError
from ..registrations.repository import RegistrationRepository

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["S.No", "Team ID", "Team Name", "Check-in Time", "Status"]


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = EXPORT_MIMETYPE


class AttendanceExportService:
    """Writes the present entries of the Attendance Log to an .xlsx workbook."""

    def __init__(self, registrations: RegistrationRepository, *, clock: Callable[[], datetime] = now_local):
        self._registrations = registrations
        self._clock = clock

    def build_rows(self) -> list[dict]:
        entries = self._registrations.list_all(status=RegistrationStatus.PRESENT)
        entries = sorted(entries, key=lambda e: (e.check_in_time, e.team_id))
        return [
            {
                "S.No": i,
                "Team ID": e.team_id,
                "Team Name": e.team_name,
                "Check-in Time": format_check_in_time(e.check_in_time),
                "Status": e.status.value,
            }
            for i, e in enumerate(entries, start=1)
        ]

    def export(self) -> ExportFile:
        rows = self.build_rows()
        if not rows:
            raise NoDataError()

        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)

        filename = f"attendance_{self._clock().strftime('%Y%m%d_%H%M%S')}.xlsx"
        logger.info("Exported %d attendance rows to %s", len(rows), filename)
        return ExportFile(filename=filename, content=out.getvalue())
