"""Core scoring engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .evaluation import (
    CATEGORIES,
    EvaluationInput,
    EvaluationResult,
    EvaluatorConfig,
    ResumeEvaluator,
    Tier,
)
from .feedback import generate_feedback
from .roles import UNKNOWN_ROLE, RoleCatalog, RoleProfile
from .similarity import HTTPSimilarityScorer, SimilarityScorer, TfidfSimilarityScorer

__all__ = [
    "CATEGORIES",
    "EvaluationInput",
    "EvaluationResult",
    "EvaluatorConfig",
    "HTTPSimilarityScorer",
    "ResumeEvaluator",
    "RoleCatalog",
    "RoleProfile",
    "SimilarityScorer",
    "TfidfSimilarityScorer",
    "Tier",
    "UNKNOWN_ROLE",
    "generate_feedback",
]
