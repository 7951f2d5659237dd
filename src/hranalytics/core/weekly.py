"\"\"\"Rolling four-week trend bucketing.\"\"\""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable

import pendulum

from ..schemas import CandidateRecord
from .discrepancy import scored_discrepancies, summarize_discrepancies

WEEKS_IN_VIEW = 4


@dataclass
class TrendConfig:
    """Configuration for weekly trend metrics."""

    alignment_tolerance: float = 1.0
    timezone: str | None = None


@dataclass(frozen=True, slots=True)
class WeekWindow:
    """Monday-to-Sunday calendar window, both ends inclusive."""

    start: pendulum.DateTime
    end: pendulum.DateTime

    @property
    def key(self) -> str:
        return self.start.to_date_string()

    def contains(self, moment: pendulum.DateTime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True, slots=True)
class WeekPartition:
    """Records assigned to week windows, oldest window first."""

    windows: tuple[WeekWindow, ...]
    groups: tuple[tuple[CandidateRecord, ...], ...]
    undated_count: int = 0
    outside_count: int = 0

    def __iter__(self):
        return iter(zip(self.windows, self.groups))


@dataclass(frozen=True, slots=True)
class WeeklyTrendBucket:
    """Volume, quality and alignment metrics for one calendar week."""

    week_key: str
    week_start: pendulum.DateTime
    week_end: pendulum.DateTime
    total_candidates: int
    scored_candidates: int
    average_discrepancy: float
    average_absolute_discrepancy: float
    ai_higher_count: int
    human_higher_count: int
    equal_count: int
    max_discrepancy: float
    min_discrepancy: float
    ai_accuracy: float


def week_start_for(moment: pendulum.DateTime) -> pendulum.DateTime:
    """Return midnight of the Monday on or before ``moment``.

    Sunday belongs to the week that started six days earlier.
    """
    return moment.subtract(days=moment.weekday()).start_of("day")


def week_windows(
    reference_now: pendulum.DateTime,
    weeks: int = WEEKS_IN_VIEW,
) -> tuple[WeekWindow, ...]:
    """Contiguous Monday-aligned windows ending with the week of ``reference_now``."""
    windows: list[WeekWindow] = []
    for offset in range(weeks - 1, -1, -1):
        start = week_start_for(reference_now.subtract(days=offset * 7))
        end = start.add(days=6).end_of("day")
        windows.append(WeekWindow(start=start, end=end))
    return tuple(windows)


def parse_record_date(
    value: str | datetime | None,
    tz: Any = None,
) -> pendulum.DateTime | None:
    """Parse ``date_added``; offset-less values are read in ``tz``.

    Relative keywords such as ``"now"`` are not timestamps and count as
    unparseable.
    """
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=tz or pendulum.UTC)
    if not value or value.strip().lower() == "now":
        return None
    try:
        parsed = pendulum.parse(value, tz=tz or pendulum.UTC)
    except (ValueError, TypeError, pendulum.parsing.exceptions.ParserError):
        return None
    if not isinstance(parsed, pendulum.DateTime):
        return None
    return parsed


class WeeklyTrendBucketer:
    """Partition candidates into the four most recent calendar weeks."""

    def __init__(
        self,
        *,
        config: TrendConfig | None = None,
        now_provider: Callable[..., pendulum.DateTime] | None = None,
    ) -> None:
        self._config = config or TrendConfig()
        self._now_provider = now_provider or pendulum.now

    def compute(
        self,
        records: Iterable[CandidateRecord],
        reference_now: pendulum.DateTime | datetime | str | None = None,
    ) -> list[WeeklyTrendBucket]:
        return self.summarize(self.partition(records, reference_now))

    def summarize(self, partition: WeekPartition) -> list[WeeklyTrendBucket]:
        return [self._build_bucket(window, group) for window, group in partition]

    def partition(
        self,
        records: Iterable[CandidateRecord],
        reference_now: pendulum.DateTime | datetime | str | None = None,
    ) -> WeekPartition:
        reference = self.resolve_reference(reference_now)
        windows = week_windows(reference)
        groups: list[list[CandidateRecord]] = [[] for _ in windows]
        undated = 0
        outside = 0

        for record in records:
            moment = parse_record_date(record.date_added, reference.tzinfo)
            if moment is None:
                undated += 1
                continue
            index = _window_index(windows, moment)
            if index is None:
                outside += 1
                continue
            groups[index].append(record)

        return WeekPartition(
            windows=windows,
            groups=tuple(tuple(group) for group in groups),
            undated_count=undated,
            outside_count=outside,
        )

    def resolve_reference(
        self,
        reference_now: pendulum.DateTime | datetime | str | None,
    ) -> pendulum.DateTime:
        if reference_now is None:
            if self._config.timezone:
                return self._now_provider(self._config.timezone)
            return self._now_provider()
        if isinstance(reference_now, str):
            parsed = parse_record_date(reference_now, self._config.timezone)
            if parsed is None:
                raise ValueError(f"Invalid reference time: {reference_now!r}")
            return parsed
        if not isinstance(reference_now, pendulum.DateTime) or reference_now.tzinfo is None:
            return pendulum.instance(reference_now)
        return reference_now

    def _build_bucket(
        self,
        window: WeekWindow,
        group: tuple[CandidateRecord, ...],
    ) -> WeeklyTrendBucket:
        stats = summarize_discrepancies(
            scored_discrepancies(group),
            alignment_tolerance=self._config.alignment_tolerance,
        )
        return WeeklyTrendBucket(
            week_key=window.key,
            week_start=window.start,
            week_end=window.end,
            total_candidates=len(group),
            scored_candidates=stats.count,
            average_discrepancy=stats.average,
            average_absolute_discrepancy=stats.average_absolute,
            ai_higher_count=stats.ai_higher_count,
            human_higher_count=stats.human_higher_count,
            equal_count=stats.equal_count,
            max_discrepancy=stats.maximum,
            min_discrepancy=stats.minimum,
            ai_accuracy=stats.within_tolerance_pct,
        )


def _window_index(windows: tuple[WeekWindow, ...], moment: pendulum.DateTime) -> int | None:
    for index, window in enumerate(windows):
        if window.contains(moment):
            return index
    return None
