"\"\"\"Dependency injection container for the resume scorer.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import (
    EvaluatorConfig,
    HTTPSimilarityScorer,
    ResumeEvaluator,
    RoleCatalog,
    TfidfSimilarityScorer,
)
from .history import DEFAULT_DATABASE_URL, HistoryStore
from .pipeline import EvaluationPipeline
from .validation import ResumeValidator, ValidationConfig


class ScoringContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(
        default={"history": {"database_url": DEFAULT_DATABASE_URL}},
    )

    role_catalog = providers.Singleton(RoleCatalog.default)
    evaluator_config = providers.Singleton(EvaluatorConfig)
    similarity_scorer = providers.Object(None)

    evaluator = providers.Singleton(
        ResumeEvaluator,
        catalog=role_catalog,
        config=evaluator_config,
        similarity_scorer=similarity_scorer,
    )

    validator = providers.Singleton(ResumeValidator)

    history_store = providers.Singleton(
        HistoryStore,
        database_url=config.history.database_url,
    )

    pipeline = providers.Factory(
        EvaluationPipeline,
        evaluator=evaluator,
        validator=validator,
        history=history_store,
    )


def create_container(
    *,
    settings: dict | None = None,
    database_url: str | None = None,
) -> ScoringContainer:
    """Instantiate container with optional overrides.

    ``database_url`` takes precedence over ``settings["history"]``.
    """

    container = ScoringContainer()
    settings = settings if isinstance(settings, dict) else {}

    history_settings = settings.get("history") or {}
    url = database_url or history_settings.get("database_url")
    if url:
        container.config.from_dict({"history": {"database_url": url}})

    if "evaluator" in settings:
        evaluator_config = _evaluator_config(settings["evaluator"])
        container.evaluator_config.override(providers.Object(evaluator_config))

    if settings.get("roles"):
        container.role_catalog.override(
            providers.Singleton(RoleCatalog.from_mapping, settings["roles"])
        )
    elif settings.get("roles_file"):
        container.role_catalog.override(
            providers.Singleton(RoleCatalog.from_yaml, settings["roles_file"])
        )

    if "validation" in settings:
        validation = dict(settings["validation"])
        if "required_sections" in validation:
            validation["required_sections"] = tuple(validation["required_sections"])
        container.validator.override(
            providers.Singleton(ResumeValidator, config=ValidationConfig(**validation))
        )

    similarity = settings.get("similarity")
    if similarity is not None:
        container.similarity_scorer.override(_similarity_provider(similarity))

    return container


def _evaluator_config(raw: dict) -> EvaluatorConfig:
    defaults = EvaluatorConfig()
    return EvaluatorConfig(
        weights={**defaults.weights, **(raw.get("weights") or {})},
        flag_thresholds={**defaults.flag_thresholds, **(raw.get("flag_thresholds") or {})},
        tier_thresholds={**defaults.tier_thresholds, **(raw.get("tier_thresholds") or {})},
        alignment_default=raw.get("alignment_default", defaults.alignment_default),
        min_jd_token_length=raw.get("min_jd_token_length", defaults.min_jd_token_length),
    )


def _similarity_provider(raw: dict) -> providers.Provider:
    backend = raw.get("backend", "tfidf")
    if backend == "http":
        kwargs = {key: raw[key] for key in ("model", "timeout") if raw.get(key) is not None}
        return providers.Singleton(
            HTTPSimilarityScorer,
            raw["endpoint"],
            raw.get("api_key"),
            **kwargs,
        )
    if backend == "tfidf":
        return providers.Singleton(TfidfSimilarityScorer)
    raise ValueError(f"Unknown similarity backend: {backend!r}")
