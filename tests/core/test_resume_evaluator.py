from __future__ import annotations

import math

import pytest

from smarthire.core import EvaluatorConfig, ResumeEvaluator, RoleCatalog
from smarthire.core.evaluation import CATEGORIES, EvaluationInput

STRONG_RESUME = """Jane Doe
jane.doe@example.com | github.com/janedoe

Experience
Backend developer building api services in python and java with typescript frontend work.

Education
B.Sc. Computer Science: data structures, algorithms, object oriented programming (oop).

Skills
Python, Java, TypeScript, distributed systems, cs fundamentals

Projects
github.com/janedoe/scheduler

Certifications
AWS Certified Developer
"""

WEAK_RESUME = (
    "John Smith\njohn@example.com\n\nExperience\n"
    "Worked at a neighbourhood bakery for five years, managing inventory, "
    "opening the shop every morning and handling customer orders.\n"
)

WEIGHTS = {"keywords": 0.25, "github": 0.15, "fundamentals": 0.20, "formatting": 0.20, "alignment": 0.20}


@pytest.fixture(scope="module")
def evaluator() -> ResumeEvaluator:
    return ResumeEvaluator(RoleCatalog.default())


def expected_score(breakdown: dict[str, int]) -> int:
    weighted = (
        breakdown["keywords"] * WEIGHTS["keywords"]
        + breakdown["github"] * WEIGHTS["github"]
        + breakdown["fundamentals"] * WEIGHTS["fundamentals"]
        + breakdown["formatting"] * WEIGHTS["formatting"]
        + breakdown["alignment"] * WEIGHTS["alignment"]
    )
    return math.floor(weighted + 0.5)


def test_strong_resume_reaches_tier_one_without_flags(evaluator: ResumeEvaluator):
    result = evaluator.evaluate(STRONG_RESUME, "Software Engineer")

    assert result.breakdown == {
        "keywords": 100,
        "formatting": 100,
        "alignment": 70,
        "github": 100,
        "fundamentals": 100,
    }
    assert result.score == 94
    assert result.tier == "Tier 1"
    assert result.flags == []
    assert result.suggestions == []
    assert result.similarity is None


def test_weak_resume_collects_flags_in_category_order(evaluator: ResumeEvaluator):
    result = evaluator.evaluate(WEAK_RESUME, "Software Engineer")

    assert result.breakdown["keywords"] == 0
    assert result.breakdown["github"] == 0
    assert result.breakdown["fundamentals"] == 0
    assert result.breakdown["formatting"] == 20
    assert result.breakdown["alignment"] == 70
    assert result.score == 18
    assert result.tier == "Tier 4"
    assert result.flags == [
        "Low keyword match",
        "No GitHub or project links",
        "Missing CS fundamentals",
        "Poor formatting or missing sections",
    ]
    assert result.suggestions == [
        "Use more keywords relevant to the target role.",
        "Include GitHub links next to your projects.",
        "Mention coursework like OOP, Data Structures, or Algorithms.",
        "Use clear sections like 'Experience', 'Projects', and 'Skills'.",
    ]


def test_job_description_alignment_is_scored_and_flagged(evaluator: ResumeEvaluator):
    job_description = "Looking for a Python engineer with strong algorithms background"

    result = evaluator.evaluate(STRONG_RESUME, "Software Engineer", job_description)

    # looking, python, engineer, strong, algorithms, background -> python, algorithms
    assert result.breakdown["alignment"] == 33
    assert result.score == 87
    assert result.tier == "Tier 2"
    assert result.flags == ["Low job description alignment"]
    assert result.suggestions == ["Add more keywords from the job description."]


def test_alignment_is_full_when_every_long_token_is_present(evaluator: ResumeEvaluator):
    resume = "Python developer, experienced with Kubernetes."
    job_description = "Python developer: experienced, Kubernetes!"

    result = evaluator.evaluate(resume, "DevOps Engineer", job_description)

    assert result.breakdown["alignment"] == 100
    assert "Low job description alignment" not in result.flags


def test_alignment_counts_repeated_tokens(evaluator: ResumeEvaluator):
    result = evaluator.evaluate("python only", "Software Engineer", "python python kubernetes")

    assert result.breakdown["alignment"] == 67


def test_job_description_without_long_tokens_scores_zero(evaluator: ResumeEvaluator):
    result = evaluator.evaluate(STRONG_RESUME, "Software Engineer", "go c++ sql")

    assert result.breakdown["alignment"] == 0
    assert result.flags == ["Low job description alignment"]


def test_whitespace_job_description_is_scored_not_defaulted(evaluator: ResumeEvaluator):
    result = evaluator.evaluate("python", "Software Engineer", "   \n")

    assert result.breakdown["alignment"] == 0
    assert "Low job description alignment" in result.flags
    assert result.flags[-1] == "Low job description alignment"


@pytest.mark.parametrize("job_description", [None, ""])
def test_missing_job_description_uses_neutral_alignment(evaluator: ResumeEvaluator, job_description):
    result = evaluator.evaluate("", "Software Engineer", job_description)

    assert result.breakdown["alignment"] == 70
    assert "Low job description alignment" not in result.flags


def test_empty_resume_scores_low_without_error(evaluator: ResumeEvaluator):
    result = evaluator.evaluate("", "Software Engineer")

    assert result.score == 14
    assert result.tier == "Tier 4"
    assert len(result.flags) == len(result.suggestions) == 4


def test_unrecognized_role_has_zero_keyword_score(evaluator: ResumeEvaluator):
    result = evaluator.evaluate(STRONG_RESUME, "Pastry Chef")

    assert result.breakdown["keywords"] == 0
    assert result.flags[0] == "Low keyword match"


@pytest.mark.parametrize("role", ["software engineer", "  Software Engineer", "SOFTWARE ENGINEER"])
def test_role_lookup_requires_exact_name(evaluator: ResumeEvaluator, role: str):
    assert evaluator.evaluate("python java", "Software Engineer").breakdown["keywords"] == 25

    result = evaluator.evaluate("python java", role)

    assert result.breakdown["keywords"] == 0
    assert result.flags[0] == "Low keyword match"


def test_keyword_score_rounds_half_up(evaluator: ResumeEvaluator):
    # 1 of 8 Software Engineer keywords -> 12.5
    result = evaluator.evaluate("python", "Software Engineer")

    assert result.breakdown["keywords"] == 13


def test_composite_rounds_half_up():
    evaluator = ResumeEvaluator(RoleCatalog.default())

    # 4 of 8 keywords -> 50 * 0.25 == 12.5, everything else 0.
    result = evaluator.evaluate("python java typescript api", "Software Engineer", "kubernetes terraform")

    assert result.breakdown == {
        "keywords": 50,
        "formatting": 0,
        "alignment": 0,
        "github": 0,
        "fundamentals": 0,
    }
    assert result.score == 13
    assert result.flags == [
        "No GitHub or project links",
        "Missing CS fundamentals",
        "Poor formatting or missing sections",
        "Low job description alignment",
    ]


def test_all_section_markers_give_full_formatting(evaluator: ResumeEvaluator):
    text = "EXPERIENCE\nEducation\nSkills\nProjects\nCertifications"

    result = evaluator.evaluate(text, "Web Developer")

    assert result.breakdown["formatting"] == 100
    assert "Poor formatting or missing sections" not in result.flags


def test_github_link_detection(evaluator: ResumeEvaluator):
    with_link = evaluator.evaluate("see https://GitHub.com/someuser", "Web Developer")
    without_link = evaluator.evaluate("see https://gitlab.com/someuser", "Web Developer")

    assert with_link.breakdown["github"] == 100
    assert "No GitHub or project links" not in with_link.flags
    assert without_link.breakdown["github"] == 0
    assert "No GitHub or project links" in without_link.flags


def test_fundamentals_partial_coverage(evaluator: ResumeEvaluator):
    result = evaluator.evaluate("data structures and algorithms", "Software Engineer")

    assert result.breakdown["fundamentals"] == 40
    assert "Missing CS fundamentals" in result.flags


@pytest.mark.parametrize(
    ("score", "tier"),
    [
        (0, "Tier 4"),
        (49, "Tier 4"),
        (50, "Tier 3"),
        (74, "Tier 3"),
        (75, "Tier 2"),
        (89, "Tier 2"),
        (90, "Tier 1"),
        (100, "Tier 1"),
    ],
)
def test_tier_boundaries(evaluator: ResumeEvaluator, score: int, tier: str):
    assert evaluator.tier_for(score) == tier


@pytest.mark.parametrize(
    ("text", "role", "job_description"),
    [
        (STRONG_RESUME, "Software Engineer", None),
        (STRONG_RESUME, "Data Analyst", "sql dashboards and reporting for finance"),
        (WEAK_RESUME, "ML Engineer", "pytorch models"),
        ("", "Unknown Role", ""),
    ],
)
def test_score_is_weighted_sum_of_bounded_breakdown(evaluator, text, role, job_description):
    result = evaluator.evaluate(text, role, job_description)

    assert list(result.breakdown) == ["keywords", "formatting", "alignment", "github", "fundamentals"]
    assert all(0 <= value <= 100 for value in result.breakdown.values())
    assert 0 <= result.score <= 100
    assert result.score == expected_score(result.breakdown)
    assert len(result.flags) == len(result.suggestions)


def test_evaluation_is_repeatable(evaluator: ResumeEvaluator):
    first = evaluator.evaluate(STRONG_RESUME, "Backend Engineer", "node express docker")
    second = evaluator.evaluate(STRONG_RESUME, "Backend Engineer", "node express docker")

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_evaluate_input_matches_positional_call(evaluator: ResumeEvaluator):
    payload = EvaluationInput(resume_text=STRONG_RESUME, target_role="Software Engineer")

    assert evaluator.evaluate_input(payload) == evaluator.evaluate(STRONG_RESUME, "Software Engineer")


def test_custom_weights_change_composite():
    config = EvaluatorConfig(
        weights={"keywords": 1.0, "github": 0.0, "fundamentals": 0.0, "formatting": 0.0, "alignment": 0.0}
    )
    evaluator = ResumeEvaluator(RoleCatalog.default(), config=config)

    result = evaluator.evaluate("python", "Software Engineer")

    assert result.score == result.breakdown["keywords"] == 13


def test_weights_must_sum_to_one():
    with pytest.raises(ValueError, match="sum to 1.0"):
        EvaluatorConfig(
            weights={"keywords": 0.5, "github": 0.1, "fundamentals": 0.1, "formatting": 0.1, "alignment": 0.1}
        )


def test_default_weights_cover_every_category():
    config = EvaluatorConfig()

    assert set(config.weights) == set(CATEGORIES)
    assert math.isclose(sum(config.weights.values()), 1.0)
