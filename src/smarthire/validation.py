"""Pre-scoring checks on extracted resume text."""

from __future__ import annotations

import re
from dataclasses import dataclass

_EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")


@dataclass
class ValidationConfig:
    """Thresholds for accepting a document as a resume."""

    min_length: int = 100
    require_email: bool = True
    required_sections: tuple[str, ...] = ("experience", "education", "skills")


class ResumeValidationError(ValueError):
    """Raised when extracted text does not look like a resume."""

    def __init__(self, errors: list[str]):
        super().__init__("Resume validation failed")
        self.errors = errors

    def __str__(self) -> str:
        return f"Resume validation failed: {'; '.join(self.errors)}"


class ResumeValidator:
    """Check length, contact email and section markers of resume text."""

    def __init__(self, *, config: ValidationConfig | None = None) -> None:
        self._config = config or ValidationConfig()

    def validate(self, text: str) -> str:
        """Return ``text`` unchanged, or raise listing every failed check."""
        errors: list[str] = []
        stripped = (text or "").strip()
        lowered = stripped.lower()

        if len(stripped) < self._config.min_length:
            errors.append(
                f"text too short ({len(stripped)} characters, minimum {self._config.min_length})"
            )
        if self._config.require_email and not _EMAIL_PATTERN.search(stripped):
            errors.append("no contact email found")
        sections = self._config.required_sections
        if sections and not any(section in lowered for section in sections):
            errors.append(f"none of the expected sections found ({', '.join(sections)})")

        if errors:
            raise ResumeValidationError(errors)
        return text


__all__ = ["ResumeValidationError", "ResumeValidator", "ValidationConfig"]
