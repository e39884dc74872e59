"\"\"\"Pydantic configuration schema for CLI YAML input.\"\"\""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

_CATEGORIES = ("keywords", "github", "fundamentals", "formatting", "alignment")


class EvaluatorSettings(BaseModel):
    weights: dict[str, float] | None = None
    flag_thresholds: dict[str, int] | None = None
    tier_thresholds: dict[str, int] | None = None
    alignment_default: int | None = Field(default=None, ge=0, le=100)
    min_jd_token_length: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_weights(self) -> "EvaluatorSettings":
        if self.weights is None:
            return self
        missing = [name for name in _CATEGORIES if name not in self.weights]
        if missing:
            raise ValueError(f"weights missing categories: {', '.join(missing)}")
        negative = [name for name, value in self.weights.items() if value < 0]
        if negative:
            raise ValueError(f"weights must be non-negative: {', '.join(negative)}")
        total = sum(self.weights[name] for name in _CATEGORIES)
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"weights must sum to 1.0 (got {total})")
        return self


class RoleEntry(BaseModel):
    keywords: list[str] = Field(default_factory=list)
    description: str = ""

    model_config = ConfigDict(extra="forbid")


class ValidationSettings(BaseModel):
    min_length: int | None = Field(default=None, ge=0)
    require_email: bool | None = None
    required_sections: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class HistorySettings(BaseModel):
    database_url: str | None = None

    model_config = ConfigDict(extra="forbid")


class SimilaritySettings(BaseModel):
    backend: Literal["tfidf", "http"] = "tfidf"
    endpoint: str | None = None
    api_key: str | None = None
    model: str | None = None
    timeout: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_endpoint(self) -> "SimilaritySettings":
        if self.backend == "http" and not self.endpoint:
            raise ValueError("similarity.endpoint is required for the http backend")
        return self


class AppConfig(BaseModel):
    evaluator: EvaluatorSettings = Field(default_factory=EvaluatorSettings)
    roles_file: Path | None = None
    roles: dict[str, RoleEntry] | None = None
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    similarity: SimilaritySettings | None = None

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        evaluator_settings = self.evaluator.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluator"] = evaluator_settings
        if self.roles_file is not None:
            settings["roles_file"] = str(self.roles_file)
        if self.roles is not None:
            settings["roles"] = {name: entry.model_dump() for name, entry in self.roles.items()}
        validation_settings = self.validation.model_dump(exclude_none=True)
        if validation_settings:
            settings["validation"] = validation_settings
        history_settings = self.history.model_dump(exclude_none=True)
        if history_settings:
            settings["history"] = history_settings
        if self.similarity is not None:
            settings["similarity"] = self.similarity.model_dump(exclude_none=True)
        return settings


def load_config(raw: Any) -> AppConfig:
    return AppConfig.model_validate(raw if raw is not None else {})
