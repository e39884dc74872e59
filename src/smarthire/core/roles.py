"""Role catalog: recognized target roles and their keyword tables."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from rapidfuzz import fuzz, process

from ..config import ConfigManager, load_yaml
from .utils import percent

UNKNOWN_ROLE = "Unknown"


@dataclass(frozen=True, slots=True)
class RoleProfile:
    """Keyword list and free-text description for a single role."""

    name: str
    keywords: tuple[str, ...]
    description: str = ""


class RoleCatalog:
    """Read-only mapping of role name to keywords and description.

    Lookups match the exact role name only. Unrecognized roles resolve to an
    empty keyword tuple rather than raising; case- and spacing-insensitive
    matching is reserved for the ``suggest`` hint.
    """

    def __init__(self, profiles: Mapping[str, RoleProfile], *, suggest_cutoff: float = 80.0) -> None:
        self._profiles = MappingProxyType(dict(profiles))
        self._suggest_cutoff = suggest_cutoff

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **kwargs: Any) -> "RoleCatalog":
        profiles: dict[str, RoleProfile] = {}
        for name, entry in data.items():
            if isinstance(entry, Mapping):
                keywords = entry.get("keywords") or []
                description = entry.get("description") or ""
            else:
                keywords, description = entry or [], ""
            profiles[str(name)] = RoleProfile(
                name=str(name),
                keywords=tuple(str(kw).strip().lower() for kw in keywords if str(kw).strip()),
                description=str(description).strip(),
            )
        return cls(profiles, **kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path, **kwargs: Any) -> "RoleCatalog":
        return cls.from_mapping(load_yaml(path), **kwargs)

    @classmethod
    def default(cls, **kwargs: Any) -> "RoleCatalog":
        """Catalog built from the packaged ``roles.yaml``."""
        return cls.from_mapping(ConfigManager().load("roles"), **kwargs)

    def roles(self) -> list[str]:
        return list(self._profiles)

    def get(self, role: str) -> RoleProfile | None:
        return self._profiles.get(role)

    def is_recognized(self, role: str) -> bool:
        return self.get(role) is not None

    def keywords_for(self, role: str) -> tuple[str, ...]:
        profile = self.get(role)
        return profile.keywords if profile else ()

    def description_for(self, role: str) -> str:
        profile = self.get(role)
        return profile.description if profile else ""

    def keyword_score(self, text: str, role: str) -> int:
        """Percentage of the role's keywords found in ``text`` (0 if none)."""
        keywords = self.keywords_for(role)
        if not keywords:
            return 0
        lowered = text.lower()
        matches = sum(1 for keyword in keywords if keyword in lowered)
        return percent(matches, len(keywords))

    def top_role(self, text: str) -> str:
        """Role whose keywords best match ``text``; earlier roles win ties."""
        best_role = UNKNOWN_ROLE
        best_score = -1
        for role in self._profiles:
            score = self.keyword_score(text, role)
            if score > best_score:
                best_role, best_score = role, score
        return best_role

    def suggest(self, role: str) -> str | None:
        """Closest recognized role name for a misspelled one, if any."""
        if not role or not self._profiles:
            return None
        match = process.extractOne(
            role,
            list(self._profiles),
            scorer=fuzz.WRatio,
            processor=_normalize,
            score_cutoff=self._suggest_cutoff,
        )
        return match[0] if match else None


def _normalize(name: str) -> str:
    return " ".join(str(name).split()).casefold()


__all__ = ["RoleCatalog", "RoleProfile", "UNKNOWN_ROLE"]
