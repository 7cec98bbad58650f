"""Keyword classifier: a strict policy on top of the lexical scorer."""

from __future__ import annotations

from app.categorization.categories import DEFAULT_CONFIG, CategoryConfig
from app.categorization.scorer import get_best_category
from app.schemas.categorization import ClassificationResult

KEYWORD_CONFIDENCE_FLOOR = 0.8


def categorize_by_keywords(
    description: str | None,
    config: CategoryConfig = DEFAULT_CONFIG,
    floor: float = KEYWORD_CONFIDENCE_FLOOR,
) -> ClassificationResult | None:
    """Return the scorer's best category only when it is a strong keyword hit.

    Returns None for the fallback override and for anything at or below
    ``floor``.
    """
    best = get_best_category(description, config)

    if best.method != "scoring" or best.category == config.fallback_category:
        return None
    if best.confidence <= floor:
        return None

    return ClassificationResult(
        category=best.category,
        confidence=best.confidence,
        method="keyword",
        score=best.score,
    )
