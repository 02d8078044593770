"""Contoh: memakai service layer tanpa Flask.

Controller hanya lapisan tipis; perhitungan rekap ada di ReportService dan
fungsi-fungsi murni di bawahnya.

    python examples/example_usage.py <NIK>

NIK juga bisa diberikan lewat variabel lingkungan EMPLOYEE_ID.
"""

import importlib
import os
import sys
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_reconciliation.attendance_reconciliation.container import build_container
from src.attendance_reconciliation.attendance_reconciliation.core.constants import DEFAULT_TOP_N
from src.attendance_reconciliation.attendance_reconciliation.reports.query import ReportQuery


def main(argv=None):
    load_dotenv(override=False)
    args = sys.argv[1:] if argv is None else argv
    employee_id = args[0] if args else os.getenv("EMPLOYEE_ID")
    if not employee_id:
        sys.exit("Usage: example_usage.py <NIK> (atau set EMPLOYEE_ID)")

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        top_n=int(getattr(settings, "DEFAULT_TOP_N", DEFAULT_TOP_N)),
    )

    today = date.today()
    query = ReportQuery.for_month(employee_id, today.year, today.month)
    report = container.report_service.build_period_report(query)
    print(report.summary)
    print(container.report_service.top_overtime(start=None, end=None))


if __name__ == "__main__":
    main()
