"""Categorization based on the user's own past choices.

Every confirmed categorization leaves a vote for each meaningful word of its
description. A new description is categorized by summing, per category, the
votes of the words it shares with that history.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Iterable, Mapping, Protocol

from app.schemas.categorization import CategoryScore, ClassificationResult

logger = logging.getLogger(__name__)

UserPatterns = Mapping[str, Mapping[str, int]]

MIN_WORD_LENGTH = 3
MAX_VOTES_BONUS = 0.2
SIGNIFICANT_WORD_VOTES = 3
ENOUGH_SIGNIFICANT_WORDS = 20

_NON_LETTERS = re.compile(r"[^a-záàâãéèêíïóôõöúçñ]")
_DIGITS_ONLY = re.compile(r"^\d+$")


class PatternProvider(Protocol):
    """Read side of the categorization history store."""

    async def get_user_patterns(self, user_id: str) -> UserPatterns | None:
        ...


def clean_word(word: str) -> str:
    return _NON_LETTERS.sub("", word.lower())


def normalize_words(description: str | None) -> list[str]:
    """Split a description into the words history votes are keyed by."""
    if not description or not isinstance(description, str):
        return []

    words = []
    for raw in description.lower().strip().split():
        if _DIGITS_ONLY.match(raw):
            continue
        word = clean_word(raw)
        if len(word) >= MIN_WORD_LENGTH:
            words.append(word)
    return words


def build_user_patterns(
    records: Iterable[tuple[str | None, str | None]], fallback_category: str = "Outros"
) -> dict[str, dict[str, int]]:
    """Build the word -> category -> votes table from (description, category) pairs."""
    patterns: dict[str, dict[str, int]] = {}

    for description, category in records:
        final_category = category or fallback_category
        for word in normalize_words(description or ""):
            votes = patterns.setdefault(word, {})
            votes[final_category] = votes.get(final_category, 0) + 1

    return patterns


def _accumulate_votes(description: str, patterns: UserPatterns) -> dict[str, int]:
    category_votes: dict[str, int] = defaultdict(int)
    for word in normalize_words(description):
        for category, count in patterns.get(word, {}).items():
            category_votes[category] += count
    return dict(category_votes)


def _rank(category_votes: Mapping[str, int]) -> list[tuple[str, int]]:
    # Most votes first; equal votes fall back to category name order.
    return sorted(category_votes.items(), key=lambda item: (-item[1], item[0]))


async def categorize_by_history(
    description: str | None, user_id: str | None, provider: PatternProvider
) -> ClassificationResult | None:
    """Categorize from the user's history.

    Returns:
        The winning category, or None when there is no usable history (no
        patterns for the user, or no word of the description was seen before).

    Raises:
        Whatever the provider raises; callers decide how to degrade.
    """
    if not description or not isinstance(description, str) or not user_id:
        return None

    patterns = await provider.get_user_patterns(user_id)
    if not patterns:
        return None

    category_votes = _accumulate_votes(description, patterns)
    if not category_votes:
        return None

    best_category, votes = _rank(category_votes)[0]
    total_votes = sum(category_votes.values())

    proportion = votes / total_votes
    votes_bonus = min(votes / 10, MAX_VOTES_BONUS)

    return ClassificationResult(
        category=best_category,
        confidence=min(proportion + votes_bonus, 1.0),
        method="history",
        votes=votes,
        total_votes=total_votes,
    )


async def get_history_scores(
    description: str | None, user_id: str | None, provider: PatternProvider
) -> list[CategoryScore]:
    """Per-category vote totals for a description, best first."""
    if not description or not isinstance(description, str) or not user_id:
        return []

    try:
        patterns = await provider.get_user_patterns(user_id)
    except Exception:
        logger.exception("Failed to load history patterns", extra={"user_id": user_id})
        return []

    if not patterns:
        return []

    return [
        CategoryScore(category=category, score=votes, confidence=min(votes / 100, 1.0))
        for category, votes in _rank(_accumulate_votes(description, patterns))
    ]


async def has_enough_history_data(user_id: str | None, provider: PatternProvider) -> bool:
    """True when at least 20 words carry 3 or more votes each."""
    if not user_id:
        return False

    try:
        patterns = await provider.get_user_patterns(user_id)
    except Exception:
        logger.exception("Failed to load history patterns", extra={"user_id": user_id})
        return False

    if not patterns:
        return False

    significant = [
        word for word, votes in patterns.items() if sum(votes.values()) >= SIGNIFICANT_WORD_VOTES
    ]
    return len(significant) >= ENOUGH_SIGNIFICANT_WORDS
