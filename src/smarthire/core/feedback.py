"""Score-band coaching tips shown next to the evaluation breakdown."""

from __future__ import annotations

_ROLE_HINTS: tuple[tuple[str, str], ...] = (
    ("data", "Add tools like SQL, Excel, Python, or Tableau if relevant."),
    ("software", "Mention projects with specific tech stacks or languages."),
    ("web", "Include frontend/backend frameworks like React, Node.js, or Next.js."),
)


def generate_feedback(score: int, role: str) -> list[str]:
    """Return general tips for ``score`` plus at most one role-family hint."""
    tips: list[str] = []

    if score < 50:
        tips.append("Consider tailoring your resume more to the role's keywords.")
        tips.append("Try adding measurable achievements related to the position.")
    elif score < 80:
        tips.append("Good job! You can improve it further with more industry-specific terms.")
    else:
        tips.append("Excellent match! Keep this version for applying.")

    lowered = role.lower()
    for fragment, hint in _ROLE_HINTS:
        if fragment in lowered:
            tips.append(hint)
            break

    return tips


__all__ = ["generate_feedback"]
