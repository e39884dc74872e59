"\"\"\"Evaluation pipeline assembly and execution.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pendulum
import structlog

from . import __version__
from .core import ResumeEvaluator, generate_feedback
from .extraction import extract_text
from .history import HistoryStore
from .schemas import EvaluationReport
from .validation import ResumeValidator


class OutputWriter:
    """Persist evaluation reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class EvaluationPipeline:
    """Extract, validate, score and record a single resume."""

    def __init__(
        self,
        *,
        evaluator: ResumeEvaluator,
        validator: ResumeValidator | None = None,
        history: HistoryStore | None = None,
        writer: OutputWriter | None = None,
        extractor: Callable[[Path], str] = extract_text,
    ) -> None:
        self._evaluator = evaluator
        self._validator = validator or ResumeValidator()
        self._history = history
        self._writer = writer or OutputWriter()
        self._extract = extractor
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        resume_path: Path,
        target_role: str,
        job_description: str | None = None,
        report_path: Path | None = None,
        persist: bool = True,
    ) -> dict:
        text = self._extract(resume_path)
        return self.evaluate_text(
            text,
            filename=resume_path.name,
            target_role=target_role,
            job_description=job_description,
            report_path=report_path,
            persist=persist,
        )

    def evaluate_text(
        self,
        text: str,
        *,
        filename: str,
        target_role: str,
        job_description: str | None = None,
        report_path: Path | None = None,
        persist: bool = True,
    ) -> dict:
        self._validator.validate(text)

        catalog = self._evaluator.catalog
        if not catalog.is_recognized(target_role):
            self._logger.warning(
                "roles.unrecognized",
                role=target_role,
                suggestion=catalog.suggest(target_role),
            )

        result = self._evaluator.evaluate(text, target_role, job_description)
        top_job = catalog.top_role(text)
        created_at = pendulum.now("UTC").to_iso8601_string()

        history_id = None
        if persist and self._history is not None:
            entry = self._history.add(
                filename=filename,
                score=result.score,
                top_job=top_job,
                tier=result.tier,
                target_role=target_role,
                created_at=created_at,
            )
            history_id = entry.id

        report = EvaluationReport(
            filename=filename,
            target_role=target_role,
            top_job=top_job,
            feedback=generate_feedback(result.score, target_role),
            history_id=history_id,
            created_at=created_at,
            app_version=__version__,
            **result.to_dict(),
        )
        payload = report.model_dump(mode="json")

        if report_path is not None:
            self._writer.write(report_path, payload)

        self._logger.info(
            "evaluation.result",
            filename=filename,
            target_role=target_role,
            score=result.score,
            tier=result.tier,
            top_job=top_job,
            flags=result.flags,
            history_id=history_id,
        )
        return payload


__all__ = ["EvaluationPipeline", "OutputWriter"]
