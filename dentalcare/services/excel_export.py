from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from dentalcare.schemas.report import ReportModel


def _title(key: str) -> str:
    # sheet titles are capped at 31 chars by Excel
    return key[:31]


def _autosize(ws, ncols: int) -> None:
    for col in range(1, ncols + 1):
        ws.column_dimensions[get_column_letter(col)].width = 20


def _write_rows(ws, rows: List[Dict[str, Any]]) -> None:
    if not rows:
        ws.append(["No data"])
        return
    headers = list(rows[0].keys())
    ws.append(headers)
    for r in rows:
        ws.append([r.get(h) for h in headers])
    _autosize(ws, len(headers))


def build_report_excel(fp, report: ReportModel) -> None:
    """
    One workbook per report:
    - "Summary" holds every scalar metric
    - every list / mapping metric gets its own sheet
    """
    data = report.model_dump(by_alias=True)

    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"
    ws.append(["Metric", "Value"])

    for key, value in data.items():
        if isinstance(value, list):
            _write_rows(wb.create_sheet(_title(key)), value)
        elif isinstance(value, dict):
            sheet = wb.create_sheet(_title(key))
            sheet.append(["Key", "Count"])
            for k, v in value.items():
                sheet.append([k, v])
            _autosize(sheet, 2)
        else:
            ws.append([key, value.isoformat() if isinstance(value, date) else value])

    _autosize(ws, 2)
    wb.save(fp)
