from __future__ import annotations

import pendulum
import pytest
from pydantic import ValidationError

from hranalytics.schemas import CandidateRecord


def test_candidate_record_accepts_camel_case_aliases():
    record = CandidateRecord.model_validate(
        {
            "id": "page-1",
            "name": "Ada",
            "dateAdded": "2026-10-13",
            "aiScore": 8,
            "humanScore": 6,
            "jobRole": "Engineer",
            "interviewStatus": "Scheduled",
            "passedAiFilter": True,
            "location": "Berlin",
        }
    )

    assert record.date_added == "2026-10-13"
    assert record.ai_score == 8.0
    assert record.job_role == "Engineer"
    assert record.passed_ai_filter is True
    assert record.is_scored is True
    assert record.discrepancy == pytest.approx(2.0)
    assert record.role_name == "Engineer"
    assert record.model_extra == {"location": "Berlin"}


def test_missing_scores_use_zero_sentinel():
    record = CandidateRecord(id="x", ai_score=None, human_score=7, role=None, date_added="  ")

    assert record.ai_score == 0.0
    assert record.is_scored is False
    assert record.discrepancy is None
    assert record.role == ""
    assert record.date_added is None


def test_scores_outside_scale_are_rejected():
    with pytest.raises(ValidationError):
        CandidateRecord(id="x", ai_score=11)
    with pytest.raises(ValidationError):
        CandidateRecord(id="x", human_score=-1)


def test_candidate_record_is_immutable():
    record = CandidateRecord(id="x", ai_score=5)

    with pytest.raises(ValidationError):
        record.ai_score = 6


def test_date_added_accepts_datetimes():
    added = pendulum.datetime(2026, 10, 13, 9, 30, tz="UTC")

    record = CandidateRecord(id="x", date_added=added, ai_score=8, human_score=6)

    assert record.date_added == added
    assert CandidateRecord(id="y", date_added="2026-10-13").date_added == "2026-10-13"
