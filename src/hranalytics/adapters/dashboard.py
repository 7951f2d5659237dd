"\"\"\"Adapter for flat dashboard-export candidate records.\"\"\""

from __future__ import annotations

import json
from typing import Any

from ..schemas import CandidateRecord


class DashboardAdapter:
    """Adapter for camelCase records as served by the dashboard API."""

    provider = "dashboard"

    def can_handle(self, blob: bytes | str, metadata: dict[str, Any]) -> bool:
        provider = metadata.get("provider")
        if provider and provider.lower() == self.provider:
            return True
        try:
            data = self._load(blob)
        except ValueError:
            return False
        return "id" in data and ("aiScore" in data or "humanScore" in data)

    def split_candidates(self, text: str) -> list[str]:
        data = json.loads(text)
        if isinstance(data, dict) and isinstance(data.get("candidates"), list):
            return [json.dumps(item, ensure_ascii=False) for item in data["candidates"]]
        return [text]

    def parse_candidate(self, section: str) -> dict[str, Any]:
        record = CandidateRecord.model_validate(self._load(section))
        return record.model_dump(mode="python")

    @staticmethod
    def _load(blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        if isinstance(blob, dict):
            return blob
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid dashboard payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Dashboard payload must be a JSON object")
        return data
