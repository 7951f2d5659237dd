"\"\"\"Weekly lead KPIs (L / QL / QC / H) and trend comparison.\"\"\""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from ..schemas import CandidateRecord
from .weekly import WeekPartition

TrendDirection = Literal["up", "down", "stable"]


@dataclass
class KPIConfig:
    """Thresholds for lead quality classification."""

    quality_lead_min_ai_score: float = 7.0
    hire_markers: tuple[str, ...] = ("hired", "offer")
    significance_pct: float = 5.0


@dataclass(frozen=True, slots=True)
class KPICounts:
    leads: int = 0
    quality_leads: int = 0
    quality_candidates: int = 0
    hires: int = 0


@dataclass(frozen=True, slots=True)
class WeeklyKPI:
    """Lead funnel counts for one week window."""

    week_key: str
    leads: int
    quality_leads: int
    quality_candidates: int
    hires: int
    conversion_rate: float
    close_rate: float
    role_breakdown: dict[str, KPICounts] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TrendComparison:
    current: float
    previous: float
    change: float
    percentage: float
    is_positive: bool
    is_significant: bool


@dataclass(frozen=True, slots=True)
class KPITrend:
    """Latest week against the one before it for a single KPI."""

    direction: TrendDirection
    comparison: TrendComparison


class WeeklyKPICalculator:
    """Compute L / QL / QC / H counts per week window."""

    def __init__(self, *, config: KPIConfig | None = None) -> None:
        self._config = config or KPIConfig()

    def compute(self, partition: WeekPartition) -> list[WeeklyKPI]:
        results: list[WeeklyKPI] = []
        for window, group in partition:
            counts = self._count(group)
            roles: dict[str, list[CandidateRecord]] = {}
            for record in group:
                if not record.role:
                    continue
                roles.setdefault(record.role, []).append(record)
            results.append(
                WeeklyKPI(
                    week_key=window.key,
                    leads=counts.leads,
                    quality_leads=counts.quality_leads,
                    quality_candidates=counts.quality_candidates,
                    hires=counts.hires,
                    conversion_rate=_pct(counts.quality_leads, counts.leads),
                    close_rate=_pct(counts.hires, counts.quality_leads),
                    role_breakdown={role: self._count(members) for role, members in roles.items()},
                )
            )
        return results

    def is_quality_lead(self, record: CandidateRecord) -> bool:
        return record.passed_ai_filter or record.ai_score >= self._config.quality_lead_min_ai_score

    def is_hire(self, record: CandidateRecord) -> bool:
        status = record.status.lower()
        return any(marker in status for marker in self._config.hire_markers)

    def compare(
        self,
        current: float,
        previous: float,
        *,
        reverse_good: bool = False,
    ) -> TrendComparison:
        return compare_trend(
            current,
            previous,
            reverse_good=reverse_good,
            significance_pct=self._config.significance_pct,
        )

    def trends(self, kpis: Sequence[WeeklyKPI]) -> dict[str, KPITrend]:
        """Week-over-week movement of each count KPI, latest week last."""
        if len(kpis) < 2:
            return {}
        previous, current = kpis[-2], kpis[-1]
        result: dict[str, KPITrend] = {}
        for metric in ("leads", "quality_leads", "quality_candidates", "hires"):
            values = [getattr(kpi, metric) for kpi in kpis]
            result[metric] = KPITrend(
                direction=trend_direction(values),
                comparison=self.compare(getattr(current, metric), getattr(previous, metric)),
            )
        return result

    def _count(self, records: Sequence[CandidateRecord]) -> KPICounts:
        return KPICounts(
            leads=len(records),
            quality_leads=sum(1 for record in records if self.is_quality_lead(record)),
            quality_candidates=sum(
                1 for record in records if record.passed_ai_filter and record.passed_human_filter
            ),
            hires=sum(1 for record in records if self.is_hire(record)),
        )


def trend_direction(values: Sequence[float]) -> TrendDirection:
    """Direction of the last week-over-week change; moves under 1 are stable."""
    if len(values) < 2:
        return "stable"
    change = values[-1] - values[-2]
    if abs(change) < 1:
        return "stable"
    return "up" if change > 0 else "down"


def compare_trend(
    current: float,
    previous: float,
    *,
    reverse_good: bool = False,
    significance_pct: float = 5.0,
) -> TrendComparison:
    """Compare two readings; ``reverse_good`` marks metrics where lower is better."""
    if previous == 0:
        return TrendComparison(
            current=current,
            previous=previous,
            change=0.0,
            percentage=0.0,
            is_positive=True,
            is_significant=False,
        )
    change = current - previous
    percentage = change / previous * 100
    return TrendComparison(
        current=current,
        previous=previous,
        change=change,
        percentage=percentage,
        is_positive=change < 0 if reverse_good else change > 0,
        is_significant=abs(percentage) >= significance_pct,
    )


def _pct(numerator: int, denominator: int) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0
