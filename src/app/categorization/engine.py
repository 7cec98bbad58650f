"""Hybrid auto-categorization.

Combines the user's history, the keyword rules and the lexical scorer under a
fixed priority:

1. History (most specific to the user), accepted above 0.7
2. Keywords, accepted above 0.8
3. Lexical scoring, accepted above 0.6
4. The most confident of the uncertain results, tagged ``<method>_uncertain``
5. The fallback category

Every public operation is total: failures are logged and degrade to a
low-confidence result instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Sequence

from app.categorization.categories import DEFAULT_CONFIG, FALLBACK_CATEGORY, CategoryConfig
from app.categorization.classifiers import (
    Classifier,
    HistoryClassifier,
    KeywordClassifier,
    ScoringClassifier,
)
from app.categorization.history import (
    PatternProvider,
    categorize_by_history,
    get_history_scores,
    has_enough_history_data,
)
from app.categorization.scorer import get_best_category, get_category_scores
from app.categorization.similarity import calculate_similarity
from app.schemas.categorization import (
    CategorizationStats,
    CategoryScore,
    ClassificationResult,
    Suggestion,
)

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.3
ERROR_CONFIDENCE = 0.2
MAX_SUGGESTIONS = 3
REVIEW_CONFIDENCE = 0.5
REVIEW_FALLBACK_CONFIDENCE = 0.7
NEAR_TIE_RATIO = 0.85
UNCERTAIN_SUFFIX = "_uncertain"


def needs_manual_review(
    result: ClassificationResult | None, fallback_category: str = FALLBACK_CATEGORY
) -> bool:
    """Whether a categorization is too weak or ambiguous to apply silently."""
    if result is None:
        return True

    if result.confidence < REVIEW_CONFIDENCE:
        return True

    if result.category == fallback_category and result.confidence < REVIEW_FALLBACK_CONFIDENCE:
        return True

    if result.method in ("fallback", "error"):
        return True

    if result.method and result.method.endswith(UNCERTAIN_SUFFIX):
        return True

    # Runner-up too close to the winner
    if result.alternatives:
        runner_up = result.alternatives[0]
        best = result.score or result.confidence * 100
        second = runner_up.score or runner_up.confidence * 100
        if best > 0 and second / best > NEAR_TIE_RATIO:
            return True

    return False


def get_categorization_stats(
    results: Iterable[ClassificationResult] | None, fallback_category: str = FALLBACK_CATEGORY
) -> CategorizationStats:
    """Aggregate method usage, mean confidence and review count."""
    results = list(results or [])
    if not results:
        return CategorizationStats()

    by_method: dict[str, int] = {}
    total_confidence = 0.0
    review = 0

    for result in results:
        method = result.method or "unknown"
        by_method[method] = by_method.get(method, 0) + 1
        total_confidence += result.confidence or 0
        if needs_manual_review(result, fallback_category):
            review += 1

    return CategorizationStats(
        total=len(results),
        by_method=by_method,
        avg_confidence=total_confidence / len(results),
        needs_review=review,
    )


class HybridCategorizer:
    """Cascades the classifiers for a description and a user.

    Args:
        provider: Source of the user's word -> category vote table.
        config: Shared category constants (fallback name, keyword table).
        batch_max_concurrency: Upper bound on concurrently categorized batch rows.
    """

    def __init__(
        self,
        provider: PatternProvider,
        config: CategoryConfig = DEFAULT_CONFIG,
        batch_max_concurrency: int = 10,
    ):
        self.provider = provider
        self.config = config
        self.batch_max_concurrency = max(1, batch_max_concurrency)

        self.history = HistoryClassifier(provider)
        self.keyword = KeywordClassifier(config)
        self.scoring = ScoringClassifier(config)
        self.classifiers: list[Classifier] = [self.history, self.keyword, self.scoring]

    def _fallback(self) -> ClassificationResult:
        return ClassificationResult(
            category=self.config.fallback_category,
            confidence=FALLBACK_CONFIDENCE,
            method="fallback",
        )

    def _error(self, exc: BaseException) -> ClassificationResult:
        return ClassificationResult(
            category=self.config.fallback_category,
            confidence=ERROR_CONFIDENCE,
            method="error",
            error=str(exc),
        )

    async def auto_categorize(
        self, description: str | None, user_id: str | None
    ) -> ClassificationResult:
        """Return the single best category for a description."""
        if not description or not isinstance(description, str):
            return self._fallback()

        try:
            uncertain: list[ClassificationResult] = []

            for classifier in self.classifiers:
                result = await classifier.classify(description, user_id)
                if result is None:
                    continue
                if result.confidence > classifier.threshold:
                    return result.model_copy(update={"method": classifier.name})
                uncertain.append(result)

            if uncertain:
                best = uncertain[0]
                for result in uncertain[1:]:
                    if result.confidence > best.confidence:
                        best = result

                return ClassificationResult(
                    category=best.category,
                    confidence=best.confidence,
                    method=f"{best.method}{UNCERTAIN_SUFFIX}",
                )

            return self._fallback()
        except Exception as exc:
            logger.error(
                "Auto-categorization failed",
                extra={"user_id": user_id, "error_type": type(exc).__name__},
            )
            return self._error(exc)

    async def suggest_categories(
        self, description: str | None, user_id: str | None
    ) -> list[Suggestion]:
        """Return up to three distinct categories, most confident first."""
        if not description or not isinstance(description, str):
            return []

        try:
            suggestions: list[Suggestion] = []

            history_result = await self.history.classify(description, user_id)
            if history_result is not None:
                suggestions.append(
                    Suggestion(
                        category=history_result.category,
                        confidence=history_result.confidence,
                        source="history",
                        votes=history_result.votes,
                    )
                )

            keyword_result = await self.keyword.classify(description, user_id)
            if keyword_result is not None and keyword_result.category != self.config.fallback_category:
                suggestions.append(
                    Suggestion(
                        category=keyword_result.category,
                        confidence=keyword_result.confidence,
                        source="keyword",
                    )
                )

            scored = [item for item in get_category_scores(description, self.config) if item.score > 0]
            for item in scored[:MAX_SUGGESTIONS]:
                suggestions.append(
                    Suggestion(
                        category=item.category,
                        confidence=item.confidence,
                        source="scoring",
                        score=item.score,
                    )
                )

            # One entry per category, keeping the most confident one.
            unique: dict[str, Suggestion] = {}
            for suggestion in suggestions:
                current = unique.get(suggestion.category)
                if current is None or suggestion.confidence > current.confidence:
                    unique[suggestion.category] = suggestion

            ranked = sorted(unique.values(), key=lambda s: s.confidence, reverse=True)
            return ranked[:MAX_SUGGESTIONS]
        except Exception as exc:
            logger.error(
                "Category suggestion failed",
                extra={"user_id": user_id, "error_type": type(exc).__name__},
            )
            return []

    async def categorize_batch(
        self, transactions: Sequence[Mapping[str, Any]] | None, user_id: str | None
    ) -> list[dict[str, Any]]:
        """Categorize every transaction concurrently, preserving input order.

        Each output row is the input row plus ``suggested_category``,
        ``confidence`` and ``categorization_method``. A failing row degrades to
        the error fallback on its own; cancelling the batch cancels the rows
        still running.
        """
        if not transactions or not isinstance(transactions, (list, tuple)):
            return []

        semaphore = asyncio.Semaphore(self.batch_max_concurrency)

        async def categorize_one(transaction: Mapping[str, Any]) -> dict[str, Any]:
            row = dict(transaction) if isinstance(transaction, Mapping) else {}
            async with semaphore:
                try:
                    result = await self.auto_categorize(row.get("description"), user_id)
                except Exception as exc:
                    logger.error(
                        "Batch row categorization failed",
                        extra={"user_id": user_id, "error_type": type(exc).__name__},
                    )
                    result = self._error(exc)
            return self._annotate(row, result)

        try:
            return list(await asyncio.gather(*(categorize_one(t) for t in transactions)))
        except Exception as exc:
            logger.error(
                "Batch categorization failed",
                extra={"user_id": user_id, "error_type": type(exc).__name__},
            )
            error = self._error(exc)
            return [
                self._annotate(dict(t) if isinstance(t, Mapping) else {}, error)
                for t in transactions
            ]

    @staticmethod
    def _annotate(row: dict[str, Any], result: ClassificationResult) -> dict[str, Any]:
        return {
            **row,
            "suggested_category": result.category,
            "confidence": result.confidence,
            "categorization_method": result.method,
        }

    def needs_manual_review(self, result: ClassificationResult | None) -> bool:
        return needs_manual_review(result, self.config.fallback_category)

    def get_categorization_stats(
        self, results: Iterable[ClassificationResult] | None
    ) -> CategorizationStats:
        return get_categorization_stats(results, self.config.fallback_category)

    # Building blocks exposed to the application as-is.

    def get_category_scores(self, description: str | None) -> list[CategoryScore]:
        return get_category_scores(description, self.config)

    def get_best_category(self, description: str | None) -> ClassificationResult:
        return get_best_category(description, self.config)

    async def categorize_by_history(
        self, description: str | None, user_id: str | None
    ) -> ClassificationResult | None:
        try:
            return await categorize_by_history(description, user_id, self.provider)
        except Exception as exc:
            logger.error(
                "History categorization failed",
                extra={"user_id": user_id, "error_type": type(exc).__name__},
            )
            return None

    async def get_history_scores(
        self, description: str | None, user_id: str | None
    ) -> list[CategoryScore]:
        return await get_history_scores(description, user_id, self.provider)

    async def has_enough_history_data(self, user_id: str | None) -> bool:
        return await has_enough_history_data(user_id, self.provider)

    @staticmethod
    def calculate_similarity(first: str | None, second: str | None) -> float:
        return calculate_similarity(first, second)
