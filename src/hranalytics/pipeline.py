"\"\"\"Analytics pipeline assembly and execution.\"\"\""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable, List

import pendulum
import structlog

from .adapters import DashboardAdapter, NotionAdapter, RecordAdapter
from .core import (
    CandidateFilters,
    DimensionAggregator,
    PipelineFunnelCalculator,
    ScoreDiscrepancyCalculator,
    WeeklyKPICalculator,
    WeeklyTrendBucketer,
    discrepancy_histogram,
)
from .schemas import CandidateRecord
from . import __version__


class AdapterRegistry:
    """Registry mapping providers to record adapters."""

    def __init__(self, adapters: Iterable[RecordAdapter]):
        self._adapters = {adapter.provider: adapter for adapter in adapters}

    def get(self, provider: str) -> RecordAdapter:
        try:
            return self._adapters[provider]
        except KeyError as exc:
            raise KeyError(f"Unsupported provider: {provider!r}") from exc

    def providers(self) -> List[str]:
        return list(self._adapters.keys())


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[CandidateRecord]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class CandidateLoader:
    """Load candidate records through adapters."""

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    def load(self, path: Path) -> list[CandidateRecord]:
        candidates: list[CandidateRecord] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: expected a JSON object")
                    continue
                provider = record.get("provider")
                if not provider:
                    errors.append(f"line {idx}: missing provider field")
                    continue
                try:
                    adapter = self._registry.get(provider)
                except KeyError:
                    errors.append(f"line {idx}: unsupported provider '{provider}'")
                    continue
                payload = record.get("payload", record)
                try:
                    for section in adapter.split_candidates(json.dumps(payload, ensure_ascii=False)):
                        candidate_dict = adapter.parse_candidate(section)
                        candidates.append(CandidateRecord.model_validate(candidate_dict))
                except Exception as exc:  # noqa: BLE001
                    errors.append(f"line {idx}: {exc}")
                    continue
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class OutputWriter:
    """Persist analytics results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AnalyticsPipeline:
    """End-to-end analytics orchestrator."""

    def __init__(
        self,
        *,
        calculator: ScoreDiscrepancyCalculator,
        bucketer: WeeklyTrendBucketer,
        aggregator: DimensionAggregator,
        kpis: WeeklyKPICalculator,
        funnel: PipelineFunnelCalculator,
        filters: CandidateFilters,
        registry: AdapterRegistry,
        candidate_loader: CandidateLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._calculator = calculator
        self._bucketer = bucketer
        self._aggregator = aggregator
        self._kpis = kpis
        self._funnel = funnel
        self._filters = filters
        self._registry = registry
        self._candidates = candidate_loader or CandidateLoader(registry)
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        candidates_path: Path,
        output_path: Path,
        as_of: str | pendulum.DateTime | None = None,
        audit_logger: "AuditLogger | None" = None,
    ) -> dict[str, Any]:
        load_errors: list[str] = []
        try:
            candidates = self._candidates.load(candidates_path)
        except CandidateLoadError as exc:
            candidates = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("candidates.partial_load", errors=exc.errors)

        payload = self.analyze(candidates, as_of=as_of)
        payload["metadata"]["errors"] = load_errors

        serialized = json.loads(json.dumps(payload, default=_json_default, ensure_ascii=False))
        self._writer.write(output_path, serialized)

        if audit_logger:
            audit_logger.append(
                {
                    "timestamp": serialized["metadata"]["timestamp"],
                    "reference_now": serialized["metadata"]["reference_now"],
                    "candidate_count": len(candidates),
                    "error_count": len(load_errors),
                    "score_analysis": serialized["score_analysis"],
                }
            )
        return serialized

    def analyze(
        self,
        candidates: list[CandidateRecord],
        *,
        as_of: str | pendulum.DateTime | None = None,
    ) -> dict[str, Any]:
        reference_now = self._bucketer.resolve_reference(as_of)
        summary = self._calculator.compute(candidates)
        partition = self._bucketer.partition(candidates, reference_now)
        weekly_trends = self._bucketer.summarize(partition)
        weekly_kpis = self._kpis.compute(partition)

        with structlog.contextvars.bound_contextvars(
            reference_now=reference_now.to_iso8601_string()
        ):
            self._logger.debug(
                "trends.bucketed",
                weeks={bucket.week_key: bucket.total_candidates for bucket in weekly_trends},
                scored={bucket.week_key: bucket.scored_candidates for bucket in weekly_trends},
                undated=partition.undated_count,
                outside=partition.outside_count,
            )
            self._logger.info(
                "analytics.summary",
                candidate_count=len(candidates),
                scored_count=summary.total_candidates,
                average_discrepancy=summary.average_discrepancy,
            )

        return {
            "metadata": {
                "candidate_count": len(candidates),
                "undated_count": partition.undated_count,
                "out_of_window_count": partition.outside_count,
                "errors": [],
                "reference_now": reference_now,
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "score_analysis": asdict(summary),
            "discrepancy_histogram": {
                str(bucket): count for bucket, count in discrepancy_histogram(candidates).items()
            },
            "weekly_trends": [asdict(bucket) for bucket in weekly_trends],
            "weekly_kpis": [asdict(kpi) for kpi in weekly_kpis],
            "kpi_trends": {
                metric: asdict(trend) for metric, trend in self._kpis.trends(weekly_kpis).items()
            },
            "breakdowns": {
                dimension: {key: asdict(stats) for key, stats in groups.items()}
                for dimension, groups in self._aggregator.breakdowns(candidates).items()
            },
            "funnel": asdict(self._funnel.compute(candidates)),
            "review_queues": {
                "pending_human_review": [
                    record.id for record in self._filters.pending_human_review(candidates)
                ],
                "high_discrepancy": [
                    record.id for record in self._filters.high_discrepancy(candidates)
                ],
            },
        }


def default_registry() -> AdapterRegistry:
    """Return the default adapter registry."""
    return AdapterRegistry(adapters=[NotionAdapter(), DashboardAdapter()])


def _json_default(value):  # type: ignore[override]
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
