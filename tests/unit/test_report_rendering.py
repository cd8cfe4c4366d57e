"""Unit tests for PDF and Excel report rendering."""

from datetime import date

import pytest
from openpyxl import load_workbook

from tagreport.services.excel_report import export_report_to_excel
from tagreport.services.pdf_report import (
    PdfReportRenderer,
    compliance_statement,
    render_pdf_report,
)
from tagreport.services.session_aggregator import FullSessionData, build_report_data

from conftest import make_result, make_session


def _report(service_type="electrical", country="australia", results=None):
    if results is None:
        results = [
            make_result(id=1, asset_number="10000", frequency="fiveyearly"),
            make_result(
                id=2,
                asset_number="1",
                result="fail",
                item_name="Toaster <4 slice>",
                failure_reason="Frayed cord & exposed wire",
                action_taken="Removed from service",
                notes="Tagged out",
            ),
        ]
    session = make_session(service_type=service_type, country=country)
    return build_report_data(FullSessionData(session=session, results=results))


@pytest.mark.parametrize("service_type,country,standard", [
    ("electrical", "australia", "AS/NZS 3760"),
    ("electrical", "newzealand", "AS/NZS 3760"),
    ("emergency_exit_light", "australia", "AS 2293.2:2019"),
    ("fire_testing", "australia", "AS 1851"),
    ("fire_testing", "newzealand", "NZS 4503:2005"),
])
def test_compliance_statement(service_type, country, standard):
    assert standard in compliance_statement(service_type, country)


@pytest.mark.parametrize("service_type", ["electrical", "emergency_exit_light", "fire_testing"])
def test_pdf_renders_for_each_service_type(service_type):
    pdf_bytes = render_pdf_report(_report(service_type=service_type), generated_on=date(2024, 1, 16))
    assert pdf_bytes.startswith(b"%PDF")
    assert len(pdf_bytes) > 1000


def test_pdf_renders_empty_session():
    pdf_bytes = render_pdf_report(_report(results=[]))
    assert pdf_bytes.startswith(b"%PDF")


def test_pdf_result_rows_match_header_width():
    for service_type in ("electrical", "emergency_exit_light", "fire_testing"):
        renderer = PdfReportRenderer(_report(service_type=service_type))
        header = renderer._results_header()
        for result in renderer.data.results:
            assert len(renderer._result_row(result)) == len(header)


def test_pdf_due_dates_follow_result():
    renderer = PdfReportRenderer(_report())
    passed, failed = [r for r in renderer.data.results if r.result == "pass"], [
        r for r in renderer.data.results if r.result == "fail"
    ]
    assert renderer._due(passed[0]) == "2029-01-15"
    assert renderer._due(failed[0]) == "2024-01-15"


def test_pdf_failed_items_section_only_with_details():
    renderer = PdfReportRenderer(_report())
    assert renderer._build_failed_items()

    plain = PdfReportRenderer(_report(results=[make_result(id=1, result="fail")]))
    assert plain._build_failed_items() == []


def test_excel_export_contents():
    buffer = export_report_to_excel(_report(), generated_on=date(2024, 1, 16))
    ws = load_workbook(buffer).active

    assert ws.title == 'Test Report'
    assert ws['A1'].value == 'TEST & TAG REPORT'
    assert ws['B4'].value == 'Acme Pty Ltd'
    assert ws['B11'].value == 2
    assert ws['B14'].value == '50%'

    assert ws['A17'].value == 'Asset #'
    # Display order: monthly band before five-yearly
    assert ws['A18'].value == '1'
    assert ws['E18'].value == 'FAIL'
    assert ws['G18'].value == '2024-01-15'
    assert ws['A19'].value == '10000'
    assert ws['F19'].value == '5 Yearly'
    assert ws['G19'].value == '2029-01-15'

    values = [cell.value for row in ws.iter_rows() for cell in row if cell.value]
    assert any('AS/NZS 3760' in str(v) for v in values)
