from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EvaluationReport(BaseModel):
    """JSON report returned to callers and written by ``--report``."""

    filename: str
    target_role: str
    score: int = Field(ge=0, le=100)
    tier: str
    top_job: str
    breakdown: dict[str, int]
    flags: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    feedback: list[str] = Field(default_factory=list)
    similarity: int | None = None
    history_id: int | None = None
    created_at: str
    app_version: str

    model_config = ConfigDict(extra="forbid")
