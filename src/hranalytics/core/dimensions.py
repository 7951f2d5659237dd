"\"\"\"Per-dimension breakdowns (role, source, status, interview stage).\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from ..schemas import CandidateRecord

KeyFunction = Callable[[CandidateRecord], Optional[str]]

_SOURCE_ALIASES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("join",), "Join"),
    (("wellfound",), "Wellfound"),
    (("linkedin",), "LinkedIn"),
    (("company website", "website"), "Company Website"),
    (("referral",), "Referral"),
    (("outbound",), "Outbound"),
)

INTERVIEW_STAGES: dict[str, str] = {
    "To be scheduled": "exploratory",
    "Scheduled": "exploratory",
    "Rescheduling": "exploratory",
    "Awaits feedback from HM after Exp": "tech",
    "Followed up": "tech",
    "Completed": "ceo",
}


@dataclass(frozen=True, slots=True)
class DimensionStats:
    """Volume and score averages for one dimension value."""

    total: int
    scored_count: int
    avg_ai_score: float
    avg_human_score: float
    avg_abs_discrepancy: float
    ai_scored_count: int = 0
    human_scored_count: int = 0
    avg_discrepancy: float = 0.0
    ai_processing_rate: float = 0.0
    human_review_rate: float = 0.0
    scored_rate: float = 0.0


def role_key(record: CandidateRecord) -> str | None:
    return record.role_name or None


def source_key(record: CandidateRecord) -> str | None:
    return normalize_source(record.source)


def status_key(record: CandidateRecord) -> str | None:
    return record.status or None


def interview_stage_key(record: CandidateRecord) -> str | None:
    return INTERVIEW_STAGES.get(record.interview_status)


def normalize_source(source: str | None) -> str | None:
    """Collapse free-text lead sources onto their canonical names."""
    if not source or not source.strip():
        return None
    normalized = source.strip().lower()
    for needles, canonical in _SOURCE_ALIASES:
        if any(needle in normalized for needle in needles):
            return canonical
    return source


def partition(
    records: Iterable[CandidateRecord],
    key_fn: KeyFunction,
) -> dict[str, list[CandidateRecord]]:
    """Group records by key; blank keys are left out entirely."""
    groups: dict[str, list[CandidateRecord]] = {}
    for record in records:
        key = key_fn(record)
        if key is None or not str(key).strip():
            continue
        groups.setdefault(key, []).append(record)
    return groups


def derive_stats(group: Sequence[CandidateRecord]) -> DimensionStats:
    """Averages use only records with a non-zero score for that numerator."""
    ai_scores = [record.ai_score for record in group if record.ai_score > 0]
    human_scores = [record.human_score for record in group if record.human_score > 0]
    discrepancies = [
        record.ai_score - record.human_score for record in group if record.is_scored
    ]
    total = len(group)
    scored = len(discrepancies)

    return DimensionStats(
        total=total,
        scored_count=scored,
        avg_ai_score=_mean(ai_scores),
        avg_human_score=_mean(human_scores),
        avg_abs_discrepancy=_mean([abs(value) for value in discrepancies]),
        ai_scored_count=len(ai_scores),
        human_scored_count=len(human_scores),
        avg_discrepancy=_mean(discrepancies),
        ai_processing_rate=_rate(len(ai_scores), total),
        human_review_rate=_rate(scored, len(ai_scores)),
        scored_rate=_rate(scored, total),
    )


class DimensionAggregator:
    """Fold candidates into per-key stats, ordered by volume."""

    def group_by(
        self,
        records: Iterable[CandidateRecord],
        key_fn: KeyFunction,
    ) -> dict[str, DimensionStats]:
        stats = {key: derive_stats(group) for key, group in partition(records, key_fn).items()}
        ordered = sorted(stats.items(), key=lambda item: (-item[1].total, item[0]))
        return dict(ordered)

    def breakdowns(self, records: Sequence[CandidateRecord]) -> dict[str, dict[str, DimensionStats]]:
        return {
            "role": self.group_by(records, role_key),
            "source": self.group_by(records, source_key),
            "interview_stage": self.group_by(records, interview_stage_key),
        }


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _rate(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100
