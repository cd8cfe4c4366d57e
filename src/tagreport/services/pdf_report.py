"""
PDF compliance report rendering.

Lays out one session's report data onto A4 pages with a template chosen by
service type. Purely presentational: all numbers come from ReportData.
"""

import io
import logging
from datetime import date
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak

from ..schemas.enums import Country, ServiceType
from .due_dates import calculate_next_due_date, frequency_label
from .session_aggregator import ReportData

logger = logging.getLogger(__name__)

REPORT_TITLES = {
    ServiceType.ELECTRICAL.value: "Electrical Safety Testing Report",
    ServiceType.EMERGENCY_EXIT_LIGHT.value: "Emergency Exit Light Testing Report",
    ServiceType.FIRE_TESTING.value: "Fire Equipment Testing Report",
}

HEADER_TABLE_STYLE = [
    ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('FONTSIZE', (0, 0), (-1, -1), 8),
    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
]


def compliance_statement(service_type: str, country: str) -> str:
    if service_type == ServiceType.EMERGENCY_EXIT_LIGHT.value:
        return "This report complies with AS 2293.2:2019 emergency lighting standards."
    if service_type == ServiceType.FIRE_TESTING.value:
        standard = "NZS 4503:2005" if country == Country.NEW_ZEALAND.value else "AS 1851"
        return f"This report complies with {standard} fire equipment standards."
    return "This report complies with AS/NZS 3760 electrical safety standards."


def _yes_no(value: Optional[bool]) -> str:
    if value is None:
        return "N/A"
    return "Yes" if value else "No"


def _pass_fail(value: Optional[bool]) -> str:
    return "PASS" if value else "FAIL"


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


class PdfReportRenderer:
    """Builds the PDF for one session"""

    def __init__(self, data: ReportData, generated_on: Optional[date] = None):
        self.data = data
        self.generated_on = generated_on or date.today()
        self.styles = getSampleStyleSheet()
        self.cell_style = ParagraphStyle(
            'Cell',
            parent=self.styles['Normal'],
            fontSize=7,
            leading=8,
        )

    @property
    def service_type(self) -> str:
        return _value(self.data.session.service_type) or ServiceType.ELECTRICAL.value

    def render(self) -> bytes:
        session = self.data.session
        logger.info(
            f"Rendering PDF for session {session.id} "
            f"({self.service_type}, {len(self.data.results)} results)"
        )

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=REPORT_TITLES.get(self.service_type, REPORT_TITLES[ServiceType.ELECTRICAL.value]),
        )

        story = []
        story.extend(self._build_header())
        story.extend(self._build_client_info())
        story.extend(self._build_summary())
        story.extend(self._build_results_table())

        if self.service_type == ServiceType.EMERGENCY_EXIT_LIGHT.value:
            story.extend(self._build_emergency_criteria())

        story.append(Spacer(1, 12))
        story.append(Paragraph(
            compliance_statement(self.service_type, _value(session.country)),
            self.styles['Italic']
        ))

        failed_details = self._build_failed_items()
        if failed_details:
            story.append(PageBreak())
            story.extend(failed_details)

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()

    def _build_header(self) -> List:
        title_style = ParagraphStyle(
            'ReportTitle',
            parent=self.styles['Title'],
            fontSize=18,
            alignment=TA_CENTER,
        )
        title = REPORT_TITLES.get(self.service_type, REPORT_TITLES[ServiceType.ELECTRICAL.value])
        session = self.data.session
        return [
            Paragraph(title, title_style),
            Paragraph(
                f"Test Date: {session.test_date} &nbsp;&nbsp;&nbsp; "
                f"Report Generated: {self.generated_on.isoformat()}",
                self.styles['Normal']
            ),
            Spacer(1, 10),
        ]

    def _build_client_info(self) -> List:
        session = self.data.session
        rows = [
            ["Client Information", ""],
            ["Business Name", session.client_name],
            ["Site Contact", session.site_contact],
            ["Address", session.address],
            ["Technician", session.technician_name],
        ]
        if session.compliance_standard:
            rows.append(["Standard", session.compliance_standard])

        table = Table(rows, colWidths=[45 * mm, 120 * mm])
        table.setStyle(TableStyle(HEADER_TABLE_STYLE + [('SPAN', (0, 0), (-1, 0))]))
        return [table, Spacer(1, 10)]

    def _build_summary(self) -> List:
        summary = self.data.summary
        rows = [
            ["Total Items Tested", "Items Passed", "Items Failed", "Pass Rate"],
            [
                str(summary.total_items),
                str(summary.passed_items),
                str(summary.failed_items),
                f"{summary.pass_rate}%",
            ],
        ]
        table = Table(rows, colWidths=[40 * mm] * 4)
        table.setStyle(TableStyle(HEADER_TABLE_STYLE + [('ALIGN', (0, 0), (-1, -1), 'CENTER')]))
        return [Paragraph("Test Summary", self.styles['Heading2']), table, Spacer(1, 10)]

    def _cell(self, text) -> Paragraph:
        return Paragraph(escape(str(text)) if text not in (None, "") else "-", self.cell_style)

    def _due(self, result) -> str:
        return calculate_next_due_date(
            self.data.session.test_date, result.frequency, result.result
        ).isoformat()

    def _result_row(self, result) -> list:
        outcome = _value(result.result).upper()
        if self.service_type == ServiceType.EMERGENCY_EXIT_LIGHT.value:
            return [
                result.asset_number,
                self._cell(result.item_name),
                self._cell(result.location),
                self._cell(result.item_type),
                outcome,
                self._cell(result.manufacturer_info or "N/A"),
                frequency_label(result.frequency),
                self._due(result),
                self._cell(result.failure_reason),
            ]
        if self.service_type == ServiceType.FIRE_TESTING.value:
            return [
                result.asset_number,
                self._cell(result.item_name),
                self._cell(result.location),
                self._cell(result.equipment_type or result.item_type),
                outcome,
                _yes_no(result.push_button_test),
                _yes_no(result.injection_timed_test),
                self._due(result),
                self._cell(result.notes),
            ]
        return [
            result.asset_number,
            self._cell(result.item_name),
            self._cell(result.location),
            self._cell(result.classification.upper()),
            outcome,
            "Y" if result.vision_inspection is not False else "N",
            "Y" if result.electrical_test is not False else "N",
            frequency_label(result.frequency),
            self._due(result),
            self._cell(result.failure_reason),
            self._cell(result.action_taken),
        ]

    def _results_header(self) -> list:
        if self.service_type == ServiceType.EMERGENCY_EXIT_LIGHT.value:
            return ["Asset#", "Item", "Location", "Type", "Result", "Manufacturer",
                    "Frequency", "Due Date", "Failure Reason"]
        if self.service_type == ServiceType.FIRE_TESTING.value:
            return ["Asset#", "Item", "Location", "Equipment Type", "Result",
                    "Push Button (6 monthly)", "Timed Test (12 monthly)", "Due Date", "Notes"]
        return ["Asset#", "Item", "Location", "Class", "Result", "V", "E",
                "Frequency", "Due Date", "Failure Reason", "Action Taken"]

    def _build_results_table(self) -> List:
        rows = [self._results_header()]
        rows.extend(self._result_row(result) for result in self.data.results)

        table = Table(rows, repeatRows=1)
        style = list(HEADER_TABLE_STYLE)
        for index, result in enumerate(self.data.results, start=1):
            if _value(result.result) == "fail":
                style.append(('TEXTCOLOR', (4, index), (4, index), colors.red))
            else:
                style.append(('TEXTCOLOR', (4, index), (4, index), colors.green))
        table.setStyle(TableStyle(style))
        return [Paragraph("Test Results", self.styles['Heading2']), table]

    def _build_emergency_criteria(self) -> List:
        content = [
            Spacer(1, 12),
            Paragraph("Test Criteria Summary (AS 2293.2:2019)", self.styles['Heading2']),
        ]
        for result in self.data.results:
            lines = [
                f"Visual Inspection: {_pass_fail(result.vision_inspection)}",
                f"90-Minute Discharge Test: {_pass_fail(result.discharge_test)}",
                f"Automatic Switching Test: {_pass_fail(result.switching_test)}",
                f"Charging Circuit Test: {_pass_fail(result.charging_test)}",
            ]
            if result.lux_test:
                status = "PASS" if result.lux_compliant else "FAIL"
                lines.append(f"Lux Level Test: {status} - Reading: {escape(result.lux_reading or 'N/A')}")
            if result.maintenance_type:
                lines.append(
                    "Maintenance Type: "
                    + _value(result.maintenance_type).replace("_", "-").title()
                )
            if result.globe_type:
                lines.append(f"Globe Type: {escape(result.globe_type)}")

            content.append(Paragraph(
                f"<b>Asset #{escape(result.asset_number)} - {escape(result.item_name)} ({escape(result.location)})</b>",
                self.styles['Normal']
            ))
            for line in lines:
                content.append(Paragraph(f"&bull; {line}", self.cell_style))
            content.append(Spacer(1, 4))
        return content

    def _build_failed_items(self) -> List:
        failed = [
            r for r in self.data.results
            if _value(r.result) == "fail" and (r.notes or r.photo_data)
        ]
        if not failed:
            return []

        content = [Paragraph("Failed Items - Additional Details", self.styles['Heading1'])]
        for result in failed:
            content.append(Paragraph(
                f"<b>Asset #{escape(result.asset_number)} - {escape(result.item_name)}</b>",
                self.styles['Heading3']
            ))
            content.append(Paragraph(f"Location: {escape(result.location)}", self.styles['Normal']))
            if result.failure_reason:
                content.append(Paragraph(f"Failure Reason: {escape(result.failure_reason)}", self.styles['Normal']))
            if result.action_taken:
                content.append(Paragraph(f"Action Taken: {escape(result.action_taken)}", self.styles['Normal']))
            if result.notes:
                content.append(Paragraph(f"Comments: {escape(result.notes)}", self.styles['Normal']))
            if result.photo_data:
                content.append(Paragraph("Photo on file", self.styles['Italic']))
            content.append(Spacer(1, 8))
        return content


def render_pdf_report(data: ReportData, generated_on: Optional[date] = None) -> bytes:
    return PdfReportRenderer(data, generated_on=generated_on).render()
