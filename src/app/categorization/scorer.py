"""Lexical scoring of descriptions against the keyword table.

Every keyword is scored on its own and scores add up. For each keyword only the
strongest matching tier counts:

- EXACT: the keyword is one of the description's tokens
- STARTS_WITH: the description starts with the keyword
- CONTAINS: the keyword appears anywhere in the description
- PARTIAL: a token contains the keyword, or the keyword contains a token
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from app.categorization.categories import DEFAULT_CONFIG, CategoryConfig
from app.schemas.categorization import CategoryScore, ClassificationResult

DEFAULT_CONFIDENCE = 0.3
MAX_ALTERNATIVES = 3


class ScoreValue(IntEnum):
    EXACT_MATCH = 100
    STARTS_WITH = 75
    CONTAINS = 50
    PARTIAL = 30


def _tokenize(description: str) -> tuple[str, list[str]]:
    text = description.lower().strip()
    return text, text.split()


def score_match(description: str | None, category: str, keywords: Iterable[str] | None) -> int:
    """Score how well ``description`` matches one category's keywords.

    Args:
        description: Raw transaction description.
        category: Category being scored (kept for symmetry with callers/logs).
        keywords: Keywords of that category.

    Returns:
        Sum of the per-keyword tier values, 0 when nothing matches.
    """
    if not description or not isinstance(description, str):
        return 0
    if not keywords:
        return 0

    text, words = _tokenize(description)
    total = 0

    for keyword in keywords:
        needle = keyword.lower()

        if needle in words:
            total += ScoreValue.EXACT_MATCH
        elif text.startswith(needle):
            total += ScoreValue.STARTS_WITH
        elif needle in text:
            total += ScoreValue.CONTAINS
        elif any(needle in word or word in needle for word in words):
            total += ScoreValue.PARTIAL

    return int(total)


def get_category_scores(
    description: str | None, config: CategoryConfig = DEFAULT_CONFIG
) -> list[CategoryScore]:
    """Score every category of the keyword table, best first.

    Ties keep keyword-table order.
    """
    if not description or not isinstance(description, str):
        return []

    scores = []
    for category, keywords in config.keyword_rules.items():
        score = score_match(description, category, keywords)
        scores.append(
            CategoryScore(category=category, score=score, confidence=min(score / 100, 1.0))
        )

    return sorted(scores, key=lambda item: item.score, reverse=True)


def get_best_category(
    description: str | None, config: CategoryConfig = DEFAULT_CONFIG
) -> ClassificationResult:
    """Pick the highest-scoring category.

    When the best score is below the PARTIAL tier the description is treated as
    unmatched: the fallback category is returned with the default confidence,
    while the runner-up categories are still reported as alternatives.
    """
    scores = get_category_scores(description, config)

    if not scores:
        return ClassificationResult(
            category=config.fallback_category,
            confidence=DEFAULT_CONFIDENCE,
            method="default",
        )

    best = scores[0]
    alternatives = [item for item in scores[1 : MAX_ALTERNATIVES + 1] if item.score > 0]

    if best.score < ScoreValue.PARTIAL:
        return ClassificationResult(
            category=config.fallback_category,
            confidence=DEFAULT_CONFIDENCE,
            method="default",
            alternatives=alternatives,
        )

    return ClassificationResult(
        category=best.category,
        confidence=best.confidence,
        method="scoring",
        score=best.score,
        alternatives=alternatives,
    )
