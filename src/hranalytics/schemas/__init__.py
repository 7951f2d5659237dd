"\"\"\"Pydantic schema definitions for candidate records and configuration.\"\"\""

from __future__ import annotations

from .candidate import CandidateRecord
from .config import AppConfig, load_config

__all__ = [
    "CandidateRecord",
    "AppConfig",
    "load_config",
]
