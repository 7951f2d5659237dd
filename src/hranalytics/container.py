"\"\"\"Dependency injection container for the analytics engine.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import DashboardAdapter, NotionAdapter
from .core import (
    CandidateFilters,
    DimensionAggregator,
    FilterConfig,
    KPIConfig,
    PipelineFunnelCalculator,
    ScoreDiscrepancyCalculator,
    TrendConfig,
    WeeklyKPICalculator,
    WeeklyTrendBucketer,
)
from .pipeline import AdapterRegistry, AnalyticsPipeline


class AnalyticsContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    notion_adapter = providers.Singleton(NotionAdapter)
    dashboard_adapter = providers.Singleton(DashboardAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(notion_adapter, dashboard_adapter),
    )

    discrepancy_calculator = providers.Singleton(ScoreDiscrepancyCalculator)
    trend_bucketer = providers.Singleton(WeeklyTrendBucketer)
    dimension_aggregator = providers.Singleton(DimensionAggregator)
    kpi_calculator = providers.Singleton(WeeklyKPICalculator)
    funnel_calculator = providers.Singleton(PipelineFunnelCalculator)
    candidate_filters = providers.Singleton(CandidateFilters)

    pipeline = providers.Factory(
        AnalyticsPipeline,
        calculator=discrepancy_calculator,
        bucketer=trend_bucketer,
        aggregator=dimension_aggregator,
        kpis=kpi_calculator,
        funnel=funnel_calculator,
        filters=candidate_filters,
        registry=adapter_registry,
    )


def create_container(*, settings: dict | None = None) -> AnalyticsContainer:
    """Instantiate container with optional overrides."""

    container = AnalyticsContainer()

    if not settings:
        return container

    trend_settings = dict(settings.get("trends", {}))
    if settings.get("timezone"):
        trend_settings["timezone"] = settings["timezone"]
    if trend_settings:
        trend_config = TrendConfig(**trend_settings)
        container.trend_bucketer.override(
            providers.Singleton(WeeklyTrendBucketer, config=trend_config)
        )

    if "filters" in settings:
        filter_config = FilterConfig(**settings["filters"])
        container.candidate_filters.override(
            providers.Singleton(CandidateFilters, config=filter_config)
        )

    if "kpis" in settings:
        kpi_config = KPIConfig(**settings["kpis"])
        container.kpi_calculator.override(
            providers.Singleton(WeeklyKPICalculator, config=kpi_config)
        )

    return container
