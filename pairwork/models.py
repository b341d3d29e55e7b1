from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ProjectOverlapOut(BaseModel):
    employee_id_low: int
    employee_id_high: int
    project_id: int
    days_worked: int
    overlap_start: date
    overlap_end: date


class AnalysisSummary(BaseModel):
    rows: int
    records: int
    dropped_rows: int = 0
    header_skipped: bool = False
    encoding: Optional[str] = Field(default=None, examples=["utf-8"])
    delimiter: Optional[str] = Field(default=None, examples=[","])


class LongestPairResponse(BaseModel):
    employee_id_low: int
    employee_id_high: int
    total_days_worked: int
    projects: List[ProjectOverlapOut] = Field(default_factory=list)
    summary: AnalysisSummary
    intake: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: str
    message: str
    status: int
    path: str
    timestamp: str = Field(examples=["2024-01-31 12:00:00"])


class HealthResponse(BaseModel):
    ok: bool = True
