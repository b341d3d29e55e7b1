"""
Pair-overlap aggregation.

Every two assignments held by different employees on the same project are
intersected; the resulting day counts are summed per unordered employee pair
and the pair with the largest total is returned.

Ordering guarantees:
- record pairs are visited as (i, j) with i < j over the input order
- entries under a pair keep discovery order
- pairs are ranked in the order their keys were first created, and a later
  pair only replaces the leader with a strictly larger total
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .records import AssignmentRecord

logger = logging.getLogger(__name__)


class PairKey(NamedTuple):
    low: int
    high: int

    @classmethod
    def of(cls, a: int, b: int) -> "PairKey":
        return cls(a, b) if a <= b else cls(b, a)


@dataclass(frozen=True)
class ProjectOverlap:
    employee_id_low: int
    employee_id_high: int
    project_id: int
    days_worked: int
    overlap_start: date
    overlap_end: date

    @property
    def key(self) -> PairKey:
        return PairKey(self.employee_id_low, self.employee_id_high)


@dataclass
class PairAggregate:
    key: PairKey
    entries: List[ProjectOverlap] = field(default_factory=list)
    total_days_worked: int = 0

    def add(self, overlap: ProjectOverlap) -> None:
        self.entries.append(overlap)
        self.total_days_worked += overlap.days_worked


def overlap_between(a: AssignmentRecord, b: AssignmentRecord, today: date) -> Optional[ProjectOverlap]:
    """
    Intersect two assignments on the same project.

    Open-ended assignments run through `today`. Returns None when the
    intersection is empty. A same-day intersection is 0 days and is returned.
    """
    start = max(a.date_from, b.date_from)
    end = min(a.effective_end(today), b.effective_end(today))
    if start > end:
        return None

    key = PairKey.of(a.employee_id, b.employee_id)
    return ProjectOverlap(
        employee_id_low=key.low,
        employee_id_high=key.high,
        project_id=a.project_id,
        days_worked=(end - start).days,
        overlap_start=start,
        overlap_end=end,
    )


def candidate_pairs(records: Sequence[AssignmentRecord]) -> List[Tuple[int, int]]:
    """
    Index pairs (i, j), i < j, of records on the same project held by
    different employees, sorted so they match a plain double loop.
    """
    by_project: Dict[int, List[int]] = defaultdict(list)
    for idx, record in enumerate(records):
        by_project[record.project_id].append(idx)

    pairs: List[Tuple[int, int]] = []
    for indices in by_project.values():
        for a in range(len(indices)):
            first = records[indices[a]]
            for b in range(a + 1, len(indices)):
                if records[indices[b]].employee_id != first.employee_id:
                    pairs.append((indices[a], indices[b]))
    pairs.sort()
    return pairs


def iter_overlaps(records: Sequence[AssignmentRecord], today: date) -> Iterator[ProjectOverlap]:
    for i, j in candidate_pairs(records):
        overlap = overlap_between(records[i], records[j], today)
        if overlap is not None:
            yield overlap


def aggregate_pairs(records: Sequence[AssignmentRecord], today: Optional[date] = None) -> Dict[PairKey, PairAggregate]:
    """Group every overlap by employee pair. Dict order is key creation order."""
    if today is None:
        today = date.today()

    aggregates: Dict[PairKey, PairAggregate] = {}
    for overlap in iter_overlaps(records, today):
        aggregate = aggregates.get(overlap.key)
        if aggregate is None:
            aggregate = aggregates[overlap.key] = PairAggregate(overlap.key)
        aggregate.add(overlap)
    return aggregates


def select_longest(aggregates: Dict[PairKey, PairAggregate]) -> Optional[PairAggregate]:
    best: Optional[PairAggregate] = None
    for aggregate in aggregates.values():
        if best is None or aggregate.total_days_worked > best.total_days_worked:
            best = aggregate
    return best


def find_longest_working_pair(records: Sequence[AssignmentRecord], today: Optional[date] = None) -> Optional[PairAggregate]:
    """
    Return the employee pair with the most overlapping days across all shared
    projects, or None if no two employees ever overlapped.
    """
    aggregates = aggregate_pairs(records, today)
    best = select_longest(aggregates)
    if best is None:
        logger.info("no overlapping pairs among %d records", len(records))
    else:
        logger.info(
            "longest pair %d-%d: %d days over %d project(s), %d pair(s) considered",
            best.key.low, best.key.high, best.total_days_worked, len(best.entries), len(aggregates),
        )
    return best
