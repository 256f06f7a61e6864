from __future__ import annotations

import io

import pandas as pd

from .service import ReportData

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ROW_COLUMNS = {
    "work_date": "Date",
    "subject_id": "Subject ID",
    "name": "Name",
    "check_in": "Check In",
    "check_out": "Check Out",
    "status": "Status",
    "work": "Work",
    "break": "Break",
    "breaks_taken": "Breaks",
}

SUMMARY_COLUMNS = {
    "subject_id": "Subject ID",
    "name": "Name",
    "days": "Days Present",
    "late_days": "Late Days",
    "total_work": "Total Work",
    "total_break": "Total Break",
}


def report_to_xlsx(report: ReportData) -> io.BytesIO:
    """Write the report into an in-memory workbook (Attendance + Summary sheets)."""

    rows = pd.DataFrame(report.rows, columns=list(ROW_COLUMNS)).rename(columns=ROW_COLUMNS)
    summary = pd.DataFrame(report.summary, columns=list(SUMMARY_COLUMNS)).rename(columns=SUMMARY_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        rows.to_excel(writer, index=False, sheet_name="Attendance")
        summary.to_excel(writer, index=False, sheet_name="Summary")

    output.seek(0)
    return output
