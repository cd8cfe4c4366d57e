"""Excel export of a session report.

One worksheet: client header, summary, result rows in display order with
next due dates, and the compliance line.
"""

from datetime import date
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter

from .due_dates import calculate_next_due_date, frequency_label
from .pdf_report import compliance_statement
from .session_aggregator import ReportData

RESULT_COLUMNS = [
    ('Asset #', 8),
    ('Item Name', 20),
    ('Location', 15),
    ('Classification', 12),
    ('Result', 8),
    ('Frequency', 12),
    ('Next Due Date', 12),
    ('Failure Reason', 15),
    ('Action Taken', 12),
    ('Notes', 20),
]


def _style_header(ws, row_num, col_count):
    """Apply header styling to a row."""
    header_font = Font(bold=True, color='FFFFFF')
    header_fill = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')

    for col in range(1, col_count + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal='center')


def _value(enum_or_str):
    return getattr(enum_or_str, "value", enum_or_str)


def export_report_to_excel(data: ReportData, generated_on: Optional[date] = None) -> BytesIO:
    """Export one session's report data to an Excel workbook.

    Returns:
        BytesIO buffer containing the .xlsx file
    """
    session = data.session
    summary = data.summary
    generated_on = generated_on or date.today()

    wb = Workbook()
    ws = wb.active
    ws.title = 'Test Report'

    header_rows = [
        ['TEST & TAG REPORT'],
        [],
        ['Client Information'],
        ['Business Name:', session.client_name],
        ['Site Contact:', session.site_contact],
        ['Address:', session.address],
        ['Technician:', session.technician_name],
        ['Test Date:', session.test_date],
        [],
        ['Report Summary'],
        ['Total Items:', summary.total_items],
        ['Passed Items:', summary.passed_items],
        ['Failed Items:', summary.failed_items],
        ['Pass Rate:', f"{summary.pass_rate}%"],
        [],
        ['Test Results'],
    ]
    for row in header_rows:
        ws.append(row)

    ws['A1'].font = Font(bold=True, size=14)
    for label_cell in ('A3', 'A10', 'A16'):
        ws[label_cell].font = Font(bold=True)

    ws.append([title for title, _ in RESULT_COLUMNS])
    _style_header(ws, ws.max_row, len(RESULT_COLUMNS))

    for result in data.results:
        ws.append([
            result.asset_number,
            result.item_name,
            result.location,
            result.classification.upper(),
            _value(result.result).upper(),
            frequency_label(result.frequency),
            calculate_next_due_date(session.test_date, result.frequency, result.result).isoformat(),
            result.failure_reason or '',
            result.action_taken or '',
            result.notes or '',
        ])

    ws.append([])
    ws.append(['Report Generated:', generated_on.isoformat()])
    ws.append(['Compliance:', compliance_statement(_value(session.service_type), _value(session.country))])

    for index, (_, width) in enumerate(RESULT_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
