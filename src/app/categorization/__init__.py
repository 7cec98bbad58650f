"""Transaction categorization.

Suggests a spending category for a free-text description by combining the
user's own categorization history, a static keyword table and a lexical scorer.
Everything here runs locally; the only I/O is reading the user's history through
a ``PatternProvider``.
"""

from .categories import DEFAULT_CONFIG, FALLBACK_CATEGORY, CategoryConfig
from .engine import HybridCategorizer, get_categorization_stats, needs_manual_review
from .scorer import get_best_category, get_category_scores, score_match
from .similarity import calculate_similarity

__all__ = [
    "DEFAULT_CONFIG",
    "FALLBACK_CATEGORY",
    "CategoryConfig",
    "HybridCategorizer",
    "calculate_similarity",
    "get_best_category",
    "get_categorization_stats",
    "get_category_scores",
    "needs_manual_review",
    "score_match",
]
