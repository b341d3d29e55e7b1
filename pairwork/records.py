"""
Record normalization: raw text rows -> typed assignment records.

Responsibilities:
- header detection (first row only)
- integer id parsing
- strict multi-format date parsing
- open-ended end dates (missing, empty or NULL)

Malformed rows are dropped, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Sequence

from .rules import DATE_FORMATS, MIN_FIELDS, NULL_TOKEN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentRecord:
    employee_id: int
    project_id: int
    date_from: date
    date_to: Optional[date] = None  # None means still active

    @property
    def is_open(self) -> bool:
        return self.date_to is None

    def effective_end(self, today: date) -> date:
        return today if self.is_open else self.date_to


@dataclass
class NormalizationStats:
    rows: int = 0
    records: int = 0
    header_skipped: bool = False
    dropped_rows: List[int] = field(default_factory=list)


def parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None


def parse_date(value: str) -> Optional[date]:
    """
    Parse a calendar date using the fixed format list.

    Strict: the string must match a format's exact shape (two-digit day and
    month, four-digit year) and name a real calendar day. The first format
    that succeeds wins.
    """
    text = value.strip()
    for shape, fmt in DATE_FORMATS:
        if not shape.fullmatch(text):
            continue
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_open_end(value: Optional[str]) -> bool:
    if value is None:
        return True
    text = value.strip()
    return text == "" or text.upper() == NULL_TOKEN


def looks_like_header(row: Sequence[str]) -> bool:
    if len(row) < 2:
        return False
    return parse_int(row[0]) is None or parse_int(row[1]) is None


def parse_row(row: Sequence[str]) -> Optional[AssignmentRecord]:
    if len(row) < MIN_FIELDS:
        return None

    employee_id = parse_int(row[0])
    project_id = parse_int(row[1])
    date_from = parse_date(row[2])
    if employee_id is None or project_id is None or date_from is None:
        return None

    raw_to = row[3] if len(row) > 3 else None
    # An unparseable end date is treated like a missing one.
    date_to = None if is_open_end(raw_to) else parse_date(raw_to)

    return AssignmentRecord(employee_id, project_id, date_from, date_to)


def normalize_rows(rows: Sequence[Sequence[str]], stats: Optional[NormalizationStats] = None) -> List[AssignmentRecord]:
    """
    Convert raw rows into assignment records, in input order.

    Only the first row is examined for a header. Pass a NormalizationStats to
    collect counts and the 1-based numbers of dropped rows.
    """
    if stats is None:
        stats = NormalizationStats()
    stats.rows = len(rows)

    start = 0
    if rows and looks_like_header(rows[0]):
        stats.header_skipped = True
        start = 1

    records: List[AssignmentRecord] = []
    for i in range(start, len(rows)):
        record = parse_row(rows[i])
        if record is None:
            stats.dropped_rows.append(i + 1)
            continue
        records.append(record)

    stats.records = len(records)
    logger.info(
        "normalized %d rows: %d records, %d dropped, header=%s",
        stats.rows, stats.records, len(stats.dropped_rows), stats.header_skipped,
    )
    return records
