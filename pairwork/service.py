"""
Top-level pipeline: rows -> records -> longest working pair.

All-or-nothing: either a result is returned or one of EmptyInput,
NoValidRecords, NoOverlap is raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from .errors import EmptyInput, FileTooLarge, NoOverlap, NoValidRecords
from .intake import IntakeResult, read_rows
from .overlap import PairAggregate, find_longest_working_pair
from .records import NormalizationStats, looks_like_header, normalize_rows

logger = logging.getLogger(__name__)


@dataclass
class PairAnalysis:
    pair: PairAggregate
    stats: NormalizationStats
    intake: Optional[IntakeResult] = None


def analyze_rows(rows: Sequence[Sequence[str]], today: Optional[date] = None) -> PairAnalysis:
    if not rows or (len(rows) == 1 and looks_like_header(rows[0])):
        raise EmptyInput()

    stats = NormalizationStats()
    records = normalize_rows(rows, stats)
    if not records:
        raise NoValidRecords()

    pair = find_longest_working_pair(records, today=today)
    if pair is None:
        raise NoOverlap()

    return PairAnalysis(pair=pair, stats=stats)


def analyze_csv_bytes(raw: bytes, today: Optional[date] = None, max_bytes: Optional[int] = None) -> PairAnalysis:
    if max_bytes is not None and len(raw) > max_bytes:
        raise FileTooLarge(max_bytes)
    if not raw.strip():
        raise EmptyInput("The uploaded file is empty. Please upload a valid CSV file.")

    intake = read_rows(raw)
    analysis = analyze_rows(intake.rows, today=today)
    analysis.intake = intake
    return analysis
