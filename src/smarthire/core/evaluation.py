"""Deterministic resume evaluator.

Scores resume text against a target role and an optional job description.
Five independent sub-scores (0-100) are combined with fixed weights into a
composite score, which is then bucketed into a tier. Every category that
falls below its threshold contributes one flag and one suggestion, in a
fixed category order.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from .roles import RoleCatalog
from .similarity import SimilarityScorer
from .utils import clamp_percent, percent, round_half_up

Tier = Literal["Tier 1", "Tier 2", "Tier 3", "Tier 4"]
Category = Literal["keywords", "github", "fundamentals", "formatting", "alignment"]

CATEGORIES: tuple[Category, ...] = ("keywords", "github", "fundamentals", "formatting", "alignment")
BREAKDOWN_ORDER: tuple[Category, ...] = ("keywords", "formatting", "alignment", "github", "fundamentals")

FUNDAMENTALS: tuple[str, ...] = (
    "object oriented programming",
    "data structures",
    "algorithms",
    "systems",
    "cs fundamentals",
)
SECTION_MARKERS: tuple[str, ...] = ("experience", "education", "skills", "projects", "certifications")
GITHUB_MARKER = "github.com"

FLAG_MESSAGES: dict[Category, tuple[str, str]] = {
    "keywords": (
        "Low keyword match",
        "Use more keywords relevant to the target role.",
    ),
    "github": (
        "No GitHub or project links",
        "Include GitHub links next to your projects.",
    ),
    "fundamentals": (
        "Missing CS fundamentals",
        "Mention coursework like OOP, Data Structures, or Algorithms.",
    ),
    "formatting": (
        "Poor formatting or missing sections",
        "Use clear sections like 'Experience', 'Projects', and 'Skills'.",
    ),
    "alignment": (
        "Low job description alignment",
        "Add more keywords from the job description.",
    ),
}

# JavaScript-style \W: anything outside [A-Za-z0-9_].
_NON_WORD = re.compile(r"\W+", re.ASCII)


@dataclass(frozen=True)
class EvaluatorConfig:
    """Weights and thresholds for the composite score."""

    weights: Mapping[str, float] = field(
        default_factory=lambda: {
            "keywords": 0.25,
            "github": 0.15,
            "fundamentals": 0.20,
            "formatting": 0.20,
            "alignment": 0.20,
        }
    )
    flag_thresholds: Mapping[str, int] = field(
        default_factory=lambda: {
            "keywords": 50,
            "github": 100,
            "fundamentals": 50,
            "formatting": 60,
            "alignment": 50,
        }
    )
    tier_thresholds: Mapping[str, int] = field(
        default_factory=lambda: {"Tier 1": 90, "Tier 2": 75, "Tier 3": 50}
    )
    alignment_default: int = 70
    min_jd_token_length: int = 5

    def __post_init__(self) -> None:
        missing = [name for name in CATEGORIES if name not in self.weights]
        if missing:
            raise ValueError(f"Missing weights for: {', '.join(missing)}")
        total = sum(float(self.weights[name]) for name in CATEGORIES)
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Score weights must sum to 1.0, got {total}")
        if any(float(value) < 0 for value in self.weights.values()):
            raise ValueError("Score weights must be non-negative")


@dataclass(frozen=True)
class EvaluationInput:
    """Request-scoped evaluator input."""

    resume_text: str
    target_role: str
    job_description: str | None = None


@dataclass(slots=True)
class EvaluationResult:
    """Composite score, tier, per-category breakdown and remediation hints."""

    score: int
    tier: Tier
    breakdown: dict[str, int]
    flags: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    similarity: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "tier": self.tier,
            "breakdown": dict(self.breakdown),
            "flags": list(self.flags),
            "suggestions": list(self.suggestions),
            "similarity": self.similarity,
        }


class ResumeEvaluator:
    """Rule-based resume scorer.

    The evaluator holds only read-only configuration, so a single instance can
    be shared across concurrent requests.
    """

    def __init__(
        self,
        catalog: RoleCatalog | None = None,
        *,
        config: EvaluatorConfig | None = None,
        similarity_scorer: SimilarityScorer | None = None,
    ) -> None:
        self._catalog = catalog or RoleCatalog.default()
        self._config = config or EvaluatorConfig()
        self._similarity = similarity_scorer

    @property
    def catalog(self) -> RoleCatalog:
        return self._catalog

    def evaluate(
        self,
        resume_text: str,
        target_role: str,
        job_description: str | None = None,
    ) -> EvaluationResult:
        lower_text = (resume_text or "").lower()
        has_jd = bool(job_description)

        scores: dict[str, int] = {
            "keywords": self._catalog.keyword_score(lower_text, target_role),
            "github": 100 if GITHUB_MARKER in lower_text else 0,
            "fundamentals": percent(_count_present(lower_text, FUNDAMENTALS), len(FUNDAMENTALS)),
            "formatting": clamp_percent(20 * _count_present(lower_text, SECTION_MARKERS)),
            "alignment": (
                self._alignment_score(lower_text, job_description)
                if has_jd
                else self._config.alignment_default
            ),
        }

        flags: list[str] = []
        suggestions: list[str] = []
        for category in CATEGORIES:
            if scores[category] < self._config.flag_thresholds[category]:
                flag, suggestion = FLAG_MESSAGES[category]
                flags.append(flag)
                suggestions.append(suggestion)

        score = self.composite(scores)
        return EvaluationResult(
            score=score,
            tier=self.tier_for(score),
            breakdown={name: scores[name] for name in BREAKDOWN_ORDER},
            flags=flags,
            suggestions=suggestions,
            similarity=self._similarity_score(
                resume_text or "",
                job_description if has_jd else self._catalog.description_for(target_role),
            ),
        )

    def evaluate_input(self, payload: EvaluationInput) -> EvaluationResult:
        return self.evaluate(payload.resume_text, payload.target_role, payload.job_description)

    def composite(self, breakdown: Mapping[str, int]) -> int:
        weighted = sum(
            breakdown[name] * self._config.weights[name] for name in CATEGORIES
        )
        return clamp_percent(round_half_up(weighted))

    def tier_for(self, score: int) -> Tier:
        thresholds = self._config.tier_thresholds
        if score >= thresholds["Tier 1"]:
            return "Tier 1"
        if score >= thresholds["Tier 2"]:
            return "Tier 2"
        if score >= thresholds["Tier 3"]:
            return "Tier 3"
        return "Tier 4"

    def _alignment_score(self, lower_text: str, job_description: str) -> int:
        tokens = [
            token
            for token in _NON_WORD.split(job_description.lower())
            if len(token) >= self._config.min_jd_token_length
        ]
        matched = sum(1 for token in tokens if token in lower_text)
        return percent(matched, len(tokens))

    def _similarity_score(self, resume_text: str, reference_text: str | None) -> int | None:
        if self._similarity is None or not reference_text:
            return None
        value = self._similarity.similarity(resume_text, reference_text)
        if value is None:
            return None
        return clamp_percent(round_half_up(100 * value))


def _count_present(lower_text: str, phrases: tuple[str, ...]) -> int:
    return sum(1 for phrase in phrases if phrase in lower_text)


__all__ = [
    "BREAKDOWN_ORDER",
    "CATEGORIES",
    "EvaluationInput",
    "EvaluationResult",
    "EvaluatorConfig",
    "FLAG_MESSAGES",
    "FUNDAMENTALS",
    "ResumeEvaluator",
    "SECTION_MARKERS",
    "Tier",
]
