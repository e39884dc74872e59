from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HistoryEntry(BaseModel):
    """Persisted summary of one evaluation."""

    id: int
    filename: str
    score: int
    top_job: str
    tier: str | None = None
    target_role: str | None = None
    created_at: str

    model_config = ConfigDict(extra="forbid", from_attributes=True)
