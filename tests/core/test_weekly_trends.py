from __future__ import annotations

from datetime import datetime

import pendulum
import pytest

from hranalytics.core import (
    TrendConfig,
    WeeklyTrendBucketer,
    week_start_for,
    week_windows,
)
from hranalytics.schemas import CandidateRecord

# Saturday
REFERENCE = pendulum.datetime(2026, 10, 17, 12, 0, tz="UTC")


def build_record(date_added: str | None, ai: float = 0, human: float = 0, **kwargs) -> CandidateRecord:
    defaults = {
        "id": kwargs.pop("id", f"C-{date_added}-{ai}-{human}"),
        "date_added": date_added,
        "ai_score": ai,
        "human_score": human,
    }
    defaults.update(kwargs)
    return CandidateRecord(**defaults)


def test_week_start_rolls_back_to_monday():
    assert week_start_for(REFERENCE) == pendulum.datetime(2026, 10, 12, tz="UTC")
    sunday = pendulum.datetime(2026, 10, 18, 22, 15, tz="UTC")
    assert week_start_for(sunday) == pendulum.datetime(2026, 10, 12, tz="UTC")
    monday = pendulum.datetime(2026, 10, 12, 0, 0, tz="UTC")
    assert week_start_for(monday) == monday


@pytest.mark.parametrize(
    "reference",
    [
        pendulum.datetime(2026, 10, 12, 0, 0, tz="UTC"),
        pendulum.datetime(2026, 10, 14, 9, 30, tz="UTC"),
        REFERENCE,
        pendulum.datetime(2026, 10, 18, 23, 59, 59, tz="UTC"),
    ],
)
def test_windows_are_monday_aligned_contiguous_and_ordered(reference):
    windows = week_windows(reference)

    assert len(windows) == 4
    assert [window.key for window in windows] == [
        "2026-09-21",
        "2026-09-28",
        "2026-10-05",
        "2026-10-12",
    ]
    for window in windows:
        assert window.start.weekday() == 0
        assert window.start.hour == 0 and window.start.minute == 0
        assert window.end == window.start.add(days=6).end_of("day")
    for earlier, later in zip(windows, windows[1:]):
        assert later.start == earlier.start.add(days=7)
        assert earlier.end < later.start


def test_compute_always_returns_four_buckets():
    buckets = WeeklyTrendBucketer().compute([], REFERENCE)

    assert len(buckets) == 4
    assert all(bucket.total_candidates == 0 for bucket in buckets)
    assert all(bucket.ai_accuracy == 0 for bucket in buckets)
    assert buckets[0].week_start < buckets[-1].week_start


def test_bucket_metrics_for_current_week():
    records = [
        build_record("2026-10-13T09:00:00+00:00", 8, 6),
        build_record("2026-10-14", 6, 8),
        build_record("2026-10-17T08:00:00Z", 7, 7.5),
        build_record("2026-10-15", 9, 0),
    ]

    current = WeeklyTrendBucketer().compute(records, REFERENCE)[-1]

    assert current.week_key == "2026-10-12"
    assert current.total_candidates == 4
    assert current.scored_candidates == 3
    assert current.average_discrepancy == pytest.approx(-0.5 / 3)
    assert current.average_absolute_discrepancy == pytest.approx(4.5 / 3)
    assert current.ai_higher_count == 1
    assert current.human_higher_count == 2
    assert current.equal_count == 0
    assert current.max_discrepancy == 2
    assert current.min_discrepancy == -2
    assert current.ai_accuracy == pytest.approx(100 / 3)


def test_unscored_week_keeps_volume_and_zero_stats():
    records = [build_record("2026-09-22", 5, 0), build_record("2026-09-23")]

    oldest = WeeklyTrendBucketer().compute(records, REFERENCE)[0]

    assert oldest.total_candidates == 2
    assert oldest.scored_candidates == 0
    assert oldest.average_discrepancy == 0
    assert oldest.max_discrepancy == 0
    assert oldest.ai_accuracy == 0


def test_sunday_belongs_to_preceding_monday_week():
    records = [build_record("2026-10-11T15:00:00+00:00", 6, 6)]

    buckets = WeeklyTrendBucketer().compute(records, REFERENCE)

    assert [bucket.total_candidates for bucket in buckets] == [0, 0, 1, 0]
    assert buckets[2].week_key == "2026-10-05"


def test_week_end_boundary_is_inclusive():
    records = [
        build_record("2026-10-11T23:59:59.999+00:00", id="end"),
        build_record("2026-10-12T00:00:00+00:00", id="start"),
    ]

    buckets = WeeklyTrendBucketer().compute(records, REFERENCE)

    assert buckets[2].total_candidates == 1
    assert buckets[3].total_candidates == 1


def test_records_outside_or_unparseable_are_dropped():
    records = [
        build_record("2026-09-20T23:59:59+00:00"),
        build_record("2026-10-19T00:00:00+00:00"),
        build_record("not a date"),
        build_record(None),
        build_record("2026-09-21T00:00:00+00:00"),
    ]
    bucketer = WeeklyTrendBucketer()

    buckets = bucketer.compute(records, REFERENCE)
    partition = bucketer.partition(records, REFERENCE)

    assert sum(bucket.total_candidates for bucket in buckets) == 1
    assert buckets[0].total_candidates == 1
    assert partition.undated_count == 2
    assert partition.outside_count == 2


def test_relative_keyword_dates_are_dropped():
    records = [
        build_record("now", 8, 6, id="lower"),
        build_record(" NOW ", 8, 6, id="padded"),
    ]

    partition = WeeklyTrendBucketer().partition(records, pendulum.now("UTC"))

    assert [len(group) for group in partition.groups] == [0, 0, 0, 0]
    assert partition.undated_count == 2


def test_datetime_dates_are_bucketed():
    reference = pendulum.datetime(2026, 10, 12, 1, 0, tz="Asia/Tokyo")
    records = [
        build_record(datetime(2026, 10, 11, 23, 30), 8, 6, id="naive"),
        build_record(pendulum.datetime(2026, 10, 11, 20, 0, tz="UTC"), 6, 6, id="aware"),
    ]

    partition = WeeklyTrendBucketer().partition(records, reference)
    buckets = WeeklyTrendBucketer().compute(records, reference)

    assert [record.id for record in partition.groups[2]] == ["naive"]
    assert [record.id for record in partition.groups[3]] == ["aware"]
    assert partition.undated_count == 0
    assert buckets[2].ai_higher_count == 1
    assert buckets[3].equal_count == 1


def test_each_record_lands_in_exactly_one_bucket():
    dates = [REFERENCE.subtract(days=offset).to_iso8601_string() for offset in range(0, 26)]
    records = [build_record(value, id=str(idx)) for idx, value in enumerate(dates)]

    partition = WeeklyTrendBucketer().partition(records, REFERENCE)

    ids = [record.id for group in partition.groups for record in group]
    assert len(ids) == len(set(ids)) == len(records)


def test_naive_dates_use_reference_timezone():
    reference = pendulum.datetime(2026, 10, 12, 1, 0, tz="Asia/Tokyo")
    records = [
        build_record("2026-10-11T23:30:00", id="naive"),
        build_record("2026-10-11T20:00:00Z", id="utc"),
    ]

    partition = WeeklyTrendBucketer().partition(records, reference)

    assert [record.id for record in partition.groups[2]] == ["naive"]
    assert [record.id for record in partition.groups[3]] == ["utc"]


def test_compute_is_idempotent():
    records = [
        build_record("2026-10-13", 8, 6),
        build_record("2026-10-01", 4, 7),
        build_record("2026-09-25", 9, 9),
    ]
    bucketer = WeeklyTrendBucketer()

    assert bucketer.compute(records, REFERENCE) == bucketer.compute(records, REFERENCE)


def test_reference_defaults_to_now_provider():
    bucketer = WeeklyTrendBucketer(now_provider=lambda *args: REFERENCE)

    buckets = bucketer.compute([build_record("2026-10-13", 8, 6)])

    assert buckets[-1].week_key == "2026-10-12"
    assert buckets[-1].scored_candidates == 1


def test_reference_accepts_strings_and_naive_datetimes():
    bucketer = WeeklyTrendBucketer()

    from_string = bucketer.compute([], "2026-10-17T12:00:00+00:00")
    from_naive = bucketer.compute([], datetime(2026, 10, 17, 12, 0))

    assert [b.week_key for b in from_string] == [b.week_key for b in from_naive]
    with pytest.raises(ValueError):
        bucketer.compute([], "yesterday-ish")


def test_alignment_tolerance_is_configurable():
    records = [build_record("2026-10-13", 8, 6), build_record("2026-10-14", 7, 6)]
    bucketer = WeeklyTrendBucketer(config=TrendConfig(alignment_tolerance=2.0))

    current = bucketer.compute(records, REFERENCE)[-1]

    assert current.ai_accuracy == pytest.approx(100.0)
