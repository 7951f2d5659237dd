"\"\"\"Data-source adapters producing candidate records.\"\"\""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .dashboard import DashboardAdapter
from .notion import NotionAdapter


@runtime_checkable
class RecordAdapter(Protocol):
    """Data-source adapter contract.

    Implementations transform source-native exports into provider-neutral
    candidate dictionaries that conform to ``CandidateRecord``.
    """

    provider: str

    def can_handle(self, blob: bytes | str, metadata: dict) -> bool:
        """Return True when the adapter can parse the given payload."""

    def split_candidates(self, text: str) -> list[str]:
        """Split a multi-record payload into per-candidate chunks."""

    def parse_candidate(self, section: str) -> dict:
        """Parse a single candidate chunk and return a record dictionary."""


__all__ = ["RecordAdapter", "NotionAdapter", "DashboardAdapter"]
