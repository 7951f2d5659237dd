"\"\"\"Core analytics engine components.\"\"\""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .discrepancy import (
    DiscrepancyStats,
    ScoreAnalysisSummary,
    ScoreDiscrepancyCalculator,
    discrepancy_histogram,
    summarize_discrepancies,
)
from .dimensions import (
    DimensionAggregator,
    DimensionStats,
    interview_stage_key,
    normalize_source,
    role_key,
    source_key,
    status_key,
)
from .filters import CandidateFilters, FilterConfig
from .funnel import PipelineFunnel, PipelineFunnelCalculator
from .kpis import (
    KPIConfig,
    KPITrend,
    WeeklyKPI,
    WeeklyKPICalculator,
    compare_trend,
    trend_direction,
)
from .weekly import (
    TrendConfig,
    WeekPartition,
    WeekWindow,
    WeeklyTrendBucket,
    WeeklyTrendBucketer,
    week_start_for,
    week_windows,
)

__all__ = [
    "ScoreDiscrepancyCalculator",
    "ScoreAnalysisSummary",
    "DiscrepancyStats",
    "summarize_discrepancies",
    "discrepancy_histogram",
    "WeeklyTrendBucketer",
    "WeeklyTrendBucket",
    "WeekWindow",
    "WeekPartition",
    "TrendConfig",
    "week_start_for",
    "week_windows",
    "DimensionAggregator",
    "DimensionStats",
    "role_key",
    "source_key",
    "status_key",
    "interview_stage_key",
    "normalize_source",
    "CandidateFilters",
    "FilterConfig",
    "WeeklyKPICalculator",
    "WeeklyKPI",
    "KPITrend",
    "KPIConfig",
    "compare_trend",
    "trend_direction",
    "PipelineFunnelCalculator",
    "PipelineFunnel",
]
