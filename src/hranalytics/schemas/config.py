"\"\"\"Pydantic configuration schema for CLI YAML input.\"\"\""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class TrendSettings(BaseModel):
    alignment_tolerance: float | None = Field(default=None, ge=0.0)


class FilterSettings(BaseModel):
    high_quality_min_ai_score: float | None = None
    high_discrepancy_threshold: float | None = None


class KPISettings(BaseModel):
    quality_lead_min_ai_score: float | None = None


class AppConfig(BaseModel):
    trends: TrendSettings = Field(default_factory=TrendSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)
    kpis: KPISettings = Field(default_factory=KPISettings)
    timezone: str | None = None

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("trends", "filters", "kpis"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        if self.timezone:
            settings["timezone"] = self.timezone
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [
                {
                    "type": "dict_type",
                    "loc": ("config",),
                    "input": raw,
                }
            ],
        )
    return AppConfig.model_validate(raw)
