"""Categorization history repository: outcome log and the queries derived from it."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.categories import FALLBACK_CATEGORY
from app.categorization.history import build_user_patterns, clean_word
from app.models.categorization_history import CategorizationHistory
from app.repositories.base import BaseRepository
from app.schemas.history import (
    AccuracyStats,
    CategorizationOutcomeCreate,
    MethodAccuracy,
    WordCategoryFrequency,
)


class CategorizationHistoryRepository(BaseRepository[CategorizationHistory]):
    """Repository for CategorizationHistory rows, always scoped to one user."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, CategorizationHistory)

    def _live(self, user_id: str):
        return (
            CategorizationHistory.user_id == user_id,
            CategorizationHistory.deleted_at.is_(None),
        )

    async def record_outcome(self, outcome: CategorizationOutcomeCreate) -> CategorizationHistory:
        """Append a categorization outcome."""
        return await self.create(
            CategorizationHistory(
                user_id=outcome.user_id,
                description=outcome.description or "",
                suggested_category=outcome.suggested_category or FALLBACK_CATEGORY,
                final_category=outcome.final_category or FALLBACK_CATEGORY,
                was_corrected=outcome.was_corrected,
                confidence=outcome.confidence or 0.0,
                method=outcome.method or "unknown",
            )
        )

    async def get_history(self, user_id: str, limit: int = 100) -> list[CategorizationHistory]:
        """Latest outcomes for a user, newest first."""
        result = await self.db.execute(
            select(CategorizationHistory)
            .where(*self._live(user_id))
            .order_by(CategorizationHistory.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_user_patterns(self, user_id: str, limit: int = 500) -> dict[str, dict[str, int]]:
        """Word -> category -> votes table built from the user's latest outcomes.

        Votes go to the category the user finally chose, not the suggestion.
        """
        result = await self.db.execute(
            select(CategorizationHistory.description, CategorizationHistory.final_category)
            .where(*self._live(user_id))
            .order_by(CategorizationHistory.created_at.desc())
            .limit(limit)
        )
        return build_user_patterns(
            ((description, category) for description, category in result.all()),
            fallback_category=FALLBACK_CATEGORY,
        )

    async def get_accuracy_stats(self, user_id: str, limit: int = 1000) -> AccuracyStats:
        """Share of suggestions accepted without correction, overall and per method."""
        result = await self.db.execute(
            select(CategorizationHistory.was_corrected, CategorizationHistory.method)
            .where(*self._live(user_id))
            .order_by(CategorizationHistory.created_at.desc())
            .limit(limit)
        )
        rows = result.all()
        if not rows:
            return AccuracyStats()

        stats = AccuracyStats(total=len(rows))
        for was_corrected, method in rows:
            per_method = stats.by_method.setdefault(method or "unknown", MethodAccuracy())
            per_method.total += 1
            if was_corrected:
                stats.corrected += 1
            else:
                stats.correct += 1
                per_method.correct += 1

        stats.accuracy = stats.correct / stats.total
        for per_method in stats.by_method.values():
            per_method.accuracy = per_method.correct / per_method.total if per_method.total else 0.0

        return stats

    async def get_category_frequency_for_word(
        self, user_id: str, word: str, limit: int = 500
    ) -> list[WordCategoryFrequency]:
        """Categories the user associated with ``word``, most frequent first."""
        patterns = await self.get_user_patterns(user_id, limit)
        votes = patterns.get(clean_word((word or "").strip()), {})
        ranked = sorted(votes.items(), key=lambda item: (-item[1], item[0]))
        return [WordCategoryFrequency(category=category, count=count) for category, count in ranked]
