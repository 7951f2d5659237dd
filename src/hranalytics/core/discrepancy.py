"\"\"\"AI versus human score discrepancy statistics.\"\"\""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..schemas import CandidateRecord

HISTOGRAM_RANGE: tuple[int, int] = (-5, 5)


@dataclass(frozen=True, slots=True)
class DiscrepancyStats:
    """Statistics over a multiset of signed discrepancies."""

    count: int = 0
    average: float = 0.0
    average_absolute: float = 0.0
    maximum: float = 0.0
    minimum: float = 0.0
    ai_higher_count: int = 0
    human_higher_count: int = 0
    equal_count: int = 0
    within_tolerance_pct: float = 0.0


@dataclass(frozen=True, slots=True)
class ScoreAnalysisSummary:
    """Pipeline-wide discrepancy summary.

    ``total_candidates`` counts scored records only, not the pipeline size.
    """

    average_discrepancy: float
    max_discrepancy: float
    min_discrepancy: float
    total_candidates: int
    ai_higher_count: int
    human_higher_count: int
    equal_scores_count: int


def scored_discrepancies(records: Iterable[CandidateRecord]) -> list[float]:
    """Signed discrepancies for records carrying both scores, in input order."""
    return [
        record.ai_score - record.human_score
        for record in records
        if record.ai_score > 0 and record.human_score > 0
    ]


def summarize_discrepancies(
    values: Sequence[float],
    *,
    alignment_tolerance: float = 1.0,
) -> DiscrepancyStats:
    """Reduce signed discrepancies to summary statistics.

    Sign buckets use exact comparison against zero, so fractional scores are
    compared as-is.
    """
    if not values:
        return DiscrepancyStats()

    count = len(values)
    within = sum(1 for value in values if abs(value) <= alignment_tolerance)
    return DiscrepancyStats(
        count=count,
        average=sum(values) / count,
        average_absolute=sum(abs(value) for value in values) / count,
        maximum=max(values),
        minimum=min(values),
        ai_higher_count=sum(1 for value in values if value > 0),
        human_higher_count=sum(1 for value in values if value < 0),
        equal_count=sum(1 for value in values if value == 0),
        within_tolerance_pct=within / count * 100,
    )


def discrepancy_histogram(records: Iterable[CandidateRecord]) -> dict[int, int]:
    """Count scored records per ``floor(discrepancy)`` bucket from -5 to 5."""
    low, high = HISTOGRAM_RANGE
    histogram = {bucket: 0 for bucket in range(low, high + 1)}
    for value in scored_discrepancies(records):
        bucket = math.floor(value)
        if bucket in histogram:
            histogram[bucket] += 1
    return histogram


class ScoreDiscrepancyCalculator:
    """Reduce a candidate list to a single score-analysis summary."""

    def compute(self, records: Iterable[CandidateRecord]) -> ScoreAnalysisSummary:
        stats = summarize_discrepancies(scored_discrepancies(records))
        return ScoreAnalysisSummary(
            average_discrepancy=stats.average,
            max_discrepancy=stats.maximum,
            min_discrepancy=stats.minimum,
            total_candidates=stats.count,
            ai_higher_count=stats.ai_higher_count,
            human_higher_count=stats.human_higher_count,
            equal_scores_count=stats.equal_count,
        )
