"""Optional text similarity signal between a resume and a reference text.

The evaluator never folds this signal into the composite score; it is
reported alongside the breakdown when a scorer is injected.
"""

from __future__ import annotations

import json
import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Sequence, runtime_checkable
from urllib import error, request

import structlog

_TOKEN_PATTERN = re.compile(r"[a-z0-9][a-z0-9+#.\-]*[a-z0-9+#]|[a-z0-9]")


@runtime_checkable
class SimilarityScorer(Protocol):
    """Capability interface for an external or local similarity model."""

    name: str

    def similarity(self, resume_text: str, reference_text: str) -> float | None:
        """Return similarity in [0, 1], or None when unavailable."""


@dataclass
class TfidfSimilarityConfig:
    """Configuration for the local TF-IDF scorer."""

    min_token_length: int = 2
    stop_words: frozenset[str] = frozenset(
        {"and", "the", "with", "for", "from", "into", "such", "as", "of", "or", "to", "in", "on", "a", "an"}
    )


class TfidfSimilarityScorer:
    """Cosine similarity of TF-IDF vectors built from the two texts."""

    name = "tfidf-cosine-lite"

    def __init__(self, *, config: TfidfSimilarityConfig | None = None) -> None:
        self._config = config or TfidfSimilarityConfig()

    def similarity(self, resume_text: str, reference_text: str) -> float | None:
        resume_tokens = self._tokenize(resume_text)
        reference_tokens = self._tokenize(reference_text)
        if not resume_tokens or not reference_tokens:
            return 0.0

        idf = self._compute_idf(
            [resume_tokens, reference_tokens, *self._chunk(resume_tokens)]
        )
        resume_vector = self._tfidf_vector(resume_tokens, idf)
        reference_vector = self._tfidf_vector(reference_tokens, idf)
        return min(1.0, max(0.0, cosine_similarity_sparse(resume_vector, reference_vector)))

    def _tokenize(self, text: str) -> list[str]:
        tokens = _TOKEN_PATTERN.findall(text.lower())
        return [
            token
            for token in tokens
            if len(token) >= self._config.min_token_length and token not in self._config.stop_words
        ]

    @staticmethod
    def _chunk(tokens: list[str], size: int = 50) -> list[list[str]]:
        # Resume chunks count as extra idf documents.
        return [tokens[i : i + size] for i in range(0, len(tokens), size)]

    @staticmethod
    def _compute_idf(documents: Iterable[list[str]]) -> dict[str, float]:
        doc_freq: dict[str, int] = {}
        total_docs = 0
        for tokens in documents:
            if not tokens:
                continue
            total_docs += 1
            for token in set(tokens):
                doc_freq[token] = doc_freq.get(token, 0) + 1
        return {
            token: math.log((1 + total_docs) / (1 + freq)) + 1
            for token, freq in doc_freq.items()
        }

    @staticmethod
    def _tfidf_vector(tokens: list[str], idf: dict[str, float]) -> dict[str, float]:
        tf = Counter(tokens)
        total = sum(tf.values())
        vector: dict[str, float] = {}
        for token, count in tf.items():
            weight = (count / total) * idf.get(token, 0.0)
            if weight > 0:
                vector[token] = weight
        return vector


class HTTPSimilarityScorer:
    """Embedding-service client speaking the OpenAI-style embeddings API.

    Sends ``{"model": ..., "input": [resume, reference]}`` and compares the two
    returned vectors. Any transport or payload problem yields ``None``.
    """

    name = "http-embedding"

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        *,
        model: str = "text-embedding-3-small",
        timeout: float = 10.0,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def similarity(self, resume_text: str, reference_text: str) -> float | None:
        payload = {"model": self._model, "input": [resume_text, reference_text]}
        body = self._post(payload)
        if body is None:
            return None
        try:
            vectors = [item["embedding"] for item in body["data"]]
            first, second = vectors[0], vectors[1]
        except (KeyError, IndexError, TypeError) as exc:
            self._logger.warning("similarity.bad_response", error=str(exc))
            return None
        return min(1.0, max(0.0, cosine_similarity_dense(first, second)))

    def _post(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        req = request.Request(self._endpoint, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read().decode("utf-8")
        except (error.URLError, TimeoutError) as exc:
            self._logger.warning("similarity.request_failed", endpoint=self._endpoint, error=str(exc))
            return None
        try:
            return json.loads(raw) if raw else None
        except json.JSONDecodeError as exc:
            self._logger.warning("similarity.bad_response", error=str(exc))
            return None


def cosine_similarity_sparse(vec_a: dict[str, float], vec_b: dict[str, float]) -> float:
    if not vec_a or not vec_b:
        return 0.0
    dot = sum(value * vec_b.get(token, 0.0) for token, value in vec_a.items())
    if dot == 0:
        return 0.0
    norm_a = math.sqrt(sum(value * value for value in vec_a.values()))
    norm_b = math.sqrt(sum(value * value for value in vec_b.values()))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def cosine_similarity_dense(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    if not vec_a or not vec_b or len(vec_a) != len(vec_b):
        return 0.0
    dot = sum(a * b for a, b in zip(vec_a, vec_b))
    norm_a = math.sqrt(sum(a * a for a in vec_a))
    norm_b = math.sqrt(sum(b * b for b in vec_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


__all__ = [
    "HTTPSimilarityScorer",
    "SimilarityScorer",
    "TfidfSimilarityConfig",
    "TfidfSimilarityScorer",
    "cosine_similarity_dense",
    "cosine_similarity_sparse",
]
