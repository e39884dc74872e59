"\"\"\"Pydantic schema definitions for reports, history rows and configuration.\"\"\""

from __future__ import annotations

from .history import HistoryEntry
from .report import EvaluationReport

__all__ = [
    "EvaluationReport",
    "HistoryEntry",
]
