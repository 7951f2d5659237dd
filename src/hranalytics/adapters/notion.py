"\"\"\"Notion database page adapter.\"\"\""

from __future__ import annotations

import json
from typing import Any

from ..schemas import CandidateRecord

# (field, Notion property name, property type)
_PROPERTY_MAP: tuple[tuple[str, str, str], ...] = (
    ("name", "Name", "title"),
    ("date_added", "Date Added", "date"),
    ("status", "Status", "select"),
    ("source", "Source", "select"),
    ("job_role", "Job Role", "select"),
    ("role", "Role", "select"),
    ("ai_score", "AI Score", "number"),
    ("human_score", "Human Score", "number"),
    ("passed_ai_filter", "Passed AI Filter", "checkbox"),
    ("passed_human_filter", "Passed Human Filter", "checkbox"),
    ("hot_candidate", "Hot Candidate?", "checkbox"),
    ("interview_status", "Interview Status", "select"),
    ("location", "Location", "rich_text"),
    ("priority", "Priority", "select"),
    ("ai_status", "AI Status", "select"),
)


class NotionAdapter:
    """Adapter converting Notion database pages into CandidateRecord dicts."""

    provider = "notion"

    def can_handle(self, blob: bytes | str, metadata: dict[str, Any]) -> bool:
        provider = metadata.get("provider")
        if provider and provider.lower() == self.provider:
            return True
        try:
            data = self._load(blob)
        except ValueError:
            return False
        return data.get("object") == "page" and isinstance(data.get("properties"), dict)

    def split_candidates(self, text: str) -> list[str]:
        data = self._load(text)
        # Database query responses wrap pages in "results".
        if isinstance(data.get("results"), list):
            return [json.dumps(page, ensure_ascii=False) for page in data["results"]]
        return [text]

    def parse_candidate(self, section: str) -> dict[str, Any]:
        page = self._load(section)
        properties = page.get("properties") or {}

        fields = {
            name: _property_value(properties, prop, kind)
            for name, prop, kind in _PROPERTY_MAP
        }
        if not fields["date_added"]:
            fields["date_added"] = page.get("created_time")

        record = CandidateRecord(id=str(page.get("id", "")), **fields)
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
            raise ValueError("Invalid Notion payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Notion payload must be a JSON object")
        return data


def _property_value(properties: dict[str, Any], name: str, kind: str) -> Any:
    prop = properties.get(name)
    if not prop:
        return False if kind == "checkbox" else None

    if kind in ("title", "rich_text"):
        items = prop.get(kind) or []
        return items[0].get("plain_text", "") if items else ""
    if kind == "number":
        return prop.get("number") or 0
    if kind == "select":
        return (prop.get("select") or {}).get("name", "")
    if kind == "date":
        return (prop.get("date") or {}).get("start", "")
    if kind == "checkbox":
        return bool(prop.get("checkbox"))
    return None
