from __future__ import annotations

from smarthire.core import generate_feedback


def test_low_score_gets_tailoring_tips_and_role_hint():
    tips = generate_feedback(42, "Data Analyst")

    assert tips == [
        "Consider tailoring your resume more to the role's keywords.",
        "Try adding measurable achievements related to the position.",
        "Add tools like SQL, Excel, Python, or Tableau if relevant.",
    ]


def test_mid_score_gets_single_tip_and_software_hint():
    tips = generate_feedback(79, "Software Engineer")

    assert tips == [
        "Good job! You can improve it further with more industry-specific terms.",
        "Mention projects with specific tech stacks or languages.",
    ]


def test_high_score_without_role_family_hint():
    assert generate_feedback(80, "Full Stack Developer") == [
        "Excellent match! Keep this version for applying.",
    ]


def test_web_roles_get_framework_hint():
    assert generate_feedback(95, "Web Developer")[-1] == (
        "Include frontend/backend frameworks like React, Node.js, or Next.js."
    )
