"""
Report data shapes shared by the JSON report endpoint and the renderers
"""

from typing import List

from pydantic import BaseModel, Field

from .test_session import TestSessionRead
from .test_result import TestResultRead


class ReportSummary(BaseModel):
    total_items: int = 0
    passed_items: int = 0
    failed_items: int = 0
    pass_rate: int = Field(0, ge=0, le=100, description="Whole percent of passed items")


class FullSessionDataResponse(BaseModel):
    session: TestSessionRead
    results: List[TestResultRead]


class ReportDataResponse(BaseModel):
    session: TestSessionRead
    results: List[TestResultRead] = Field(..., description="Results in display order")
    summary: ReportSummary
