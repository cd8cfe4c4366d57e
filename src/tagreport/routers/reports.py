"""
Reports API Router
Downloadable PDF and Excel compliance reports for a session
"""

import io
import logging
import re
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.core import get_db
from ..dependencies import get_current_active_user
from ..schemas.auth import TokenPayload
from ..services.excel_report import export_report_to_excel
from ..services.pdf_report import render_pdf_report
from ..services.session_aggregator import ReportData, build_report_data, get_full_session_data
from .test_sessions import get_authorized_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def report_filename(data: ReportData, extension: str) -> str:
    """e.g. electrical_report_Acme_Pty_Ltd_2024-01-15.pdf"""
    session = data.session
    client = re.sub(r'[^A-Za-z0-9]+', '_', session.client_name or '').strip('_') or 'client'
    service = getattr(session.service_type, "value", session.service_type) or 'electrical'
    return f"{service}_report_{client}_{session.test_date}.{extension}"


async def _load_report(db: AsyncSession, session_id: int, current_user: TokenPayload) -> ReportData:
    await get_authorized_session(db, session_id, current_user)
    return build_report_data(await get_full_session_data(db, session_id))


@router.get("/{session_id}/report.pdf")
async def download_pdf_report(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(get_current_active_user)
):
    data = await _load_report(db, session_id, current_user)
    pdf_bytes = render_pdf_report(data, generated_on=date.today())

    logger.info(f"User {current_user.user_id} downloaded PDF for session {session_id} ({len(pdf_bytes)} bytes)")
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(data, "pdf")}"'}
    )


@router.get("/{session_id}/report.xlsx")
async def download_excel_report(
    session_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(get_current_active_user)
):
    data = await _load_report(db, session_id, current_user)
    buffer = export_report_to_excel(data, generated_on=date.today())

    logger.info(f"User {current_user.user_id} downloaded spreadsheet for session {session_id}")
    return StreamingResponse(
        buffer,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{report_filename(data, "xlsx")}"'}
    )
