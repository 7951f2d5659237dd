"\"\"\"Interview pipeline funnel.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..schemas import CandidateRecord

_EXPLORATORY_STATUSES = frozenset(
    {
        "To be scheduled",
        "Scheduled",
        "Rescheduling",
        "Awaits feedback from HM after Exp",
        "Followed up",
        "Completed",
    }
)
_TECH_STATUSES = frozenset({"Awaits feedback from HM after Exp", "Followed up", "Completed"})
_CEO_STATUSES = frozenset({"Completed"})
_HIRE_MARKERS: tuple[str, ...] = ("hired", "offer", "accepted")


@dataclass(frozen=True, slots=True)
class PipelineFunnel:
    total: int = 0
    exploratory: int = 0
    tech: int = 0
    ceo: int = 0
    hired: int = 0


class PipelineFunnelCalculator:
    """Count how far candidates have progressed through interviews.

    Stages are cumulative: a completed process also counts towards the
    exploratory and tech stages.
    """

    def compute(self, records: Iterable[CandidateRecord]) -> PipelineFunnel:
        total = exploratory = tech = ceo = hired = 0
        for record in records:
            total += 1
            stage = record.interview_status
            if stage in _EXPLORATORY_STATUSES:
                exploratory += 1
            if stage in _TECH_STATUSES:
                tech += 1
            if stage in _CEO_STATUSES:
                ceo += 1
            status = record.status.lower()
            if any(marker in status for marker in _HIRE_MARKERS):
                hired += 1
        return PipelineFunnel(total=total, exploratory=exploratory, tech=tech, ceo=ceo, hired=hired)
