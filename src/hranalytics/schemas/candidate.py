from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CandidateRecord(BaseModel):
    """Provider-neutral candidate record consumed by the analytics engine.

    A score of ``0`` means "not yet scored". A record counts as scored only
    when both ``ai_score`` and ``human_score`` are greater than zero.
    """

    id: str
    name: str = ""
    date_added: str | datetime | None = None
    ai_score: float = Field(default=0.0, ge=0.0, le=10.0)
    human_score: float = Field(default=0.0, ge=0.0, le=10.0)
    role: str = ""
    job_role: str = ""
    source: str = ""
    status: str = ""
    interview_status: str = ""
    passed_ai_filter: bool = False
    passed_human_filter: bool = False
    hot_candidate: bool = False

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("ai_score", "human_score", mode="before")
    @classmethod
    def _unscored_as_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator(
        "name", "role", "job_role", "source", "status", "interview_status", mode="before"
    )
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date_added", mode="before")
    @classmethod
    def _blank_date_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_scored(self) -> bool:
        return self.ai_score > 0 and self.human_score > 0

    @property
    def discrepancy(self) -> float | None:
        """Signed ``ai_score - human_score`` for scored records."""
        if not self.is_scored:
            return None
        return self.ai_score - self.human_score

    @property
    def role_name(self) -> str:
        return self.job_role or self.role
