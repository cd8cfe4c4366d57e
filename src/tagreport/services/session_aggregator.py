"""
Session/result aggregation for display and reporting
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.test_results import TestResult
from ..models.test_sessions import TestSession
from ..schemas.enums import ResultValue
from ..schemas.report import ReportSummary
from ..utils.errors import SessionNotFound
from .asset_numbers import parse_asset_number

logger = logging.getLogger(__name__)


@dataclass
class FullSessionData:
    session: TestSession
    results: List[TestResult] = field(default_factory=list)


@dataclass
class ReportData:
    """Everything a renderer needs: session, results in display order, summary"""
    session: TestSession
    results: List[TestResult]
    summary: ReportSummary


def _result_value(result) -> str:
    return getattr(result.result, "value", result.result)


def summarize(results: Sequence) -> ReportSummary:
    total = len(results)
    passed = sum(1 for r in results if _result_value(r) == ResultValue.PASS.value)
    failed = sum(1 for r in results if _result_value(r) == ResultValue.FAIL.value)
    # Half-up rounding; round() would send 62.5 to 62
    pass_rate = int(passed * 100 / total + 0.5) if total else 0
    return ReportSummary(
        total_items=total,
        passed_items=passed,
        failed_items=failed,
        pass_rate=pass_rate,
    )


def display_sort_key(result) -> int:
    return parse_asset_number(result.asset_number) or 0


def sort_results_by_asset_number(results: Sequence) -> list:
    """Ascending numeric order, so monthly-band items (1, 2, ...) come before
    five-yearly items (10000, ...). Non-numeric asset numbers sort as 0."""
    return sorted(results, key=display_sort_key)


async def get_full_session_data(db: AsyncSession, session_id: int) -> FullSessionData:
    """Session plus its results in storage order.

    Raises:
        SessionNotFound: if no session has this id
    """
    session_result = await db.execute(
        select(TestSession).where(TestSession.id == session_id)
    )
    session = session_result.scalar_one_or_none()
    if session is None:
        raise SessionNotFound(session_id)

    results = await db.execute(
        select(TestResult)
        .where(TestResult.session_id == session_id)
        .order_by(TestResult.id)
    )
    return FullSessionData(session=session, results=list(results.scalars().all()))


def build_report_data(full: FullSessionData) -> ReportData:
    return ReportData(
        session=full.session,
        results=sort_results_by_asset_number(full.results),
        summary=summarize(full.results),
    )
