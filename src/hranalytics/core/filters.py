"\"\"\"Shared candidate filters used by review queues and dashboards.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..schemas import CandidateRecord


@dataclass
class FilterConfig:
    """Thresholds for quality and discrepancy filters."""

    high_quality_min_ai_score: float = 5.0
    high_discrepancy_threshold: float = 3.0


class CandidateFilters:
    """Consistent candidate subsets, each narrowing the previous one."""

    def __init__(self, *, config: FilterConfig | None = None) -> None:
        self._config = config or FilterConfig()

    def valid(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [
            record
            for record in records
            if record.name and record.date_added and record.role_name
        ]

    def with_ai_score(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [record for record in self.valid(records) if record.ai_score > 0]

    def fully_reviewed(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [record for record in self.valid(records) if record.is_scored]

    def high_quality(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [
            record
            for record in self.with_ai_score(records)
            if record.ai_score >= self._config.high_quality_min_ai_score
        ]

    def pending_human_review(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        # AI-approved candidates still waiting on a human score.
        return [record for record in self.high_quality(records) if record.human_score == 0]

    def high_discrepancy(self, records: Iterable[CandidateRecord]) -> list[CandidateRecord]:
        return [
            record
            for record in self.fully_reviewed(records)
            if abs(record.ai_score - record.human_score)
            >= self._config.high_discrepancy_threshold
        ]
