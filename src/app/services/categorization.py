"""Categorization service: the engine plus the outcome log it learns from."""

import logging
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.categorization.categories import DEFAULT_CONFIG, CategoryConfig
from app.categorization.duplicates import DuplicateReport, find_duplicates
from app.categorization.engine import HybridCategorizer
from app.categorization.history import PatternProvider
from app.config import settings
from app.core.exceptions import InvalidCategoryError, PatternStoreError
from app.models.categorization_history import CategorizationHistory
from app.repositories.categorization_history import CategorizationHistoryRepository
from app.schemas.categorization import CategorizationStats, ClassificationResult, Suggestion
from app.schemas.history import (
    AccuracyStats,
    CategorizationOutcomeCreate,
    WordCategoryFrequency,
)

logger = logging.getLogger(__name__)


class CategorizationService:
    """Service layer for categorization operations."""

    def __init__(
        self,
        db: AsyncSession,
        provider: PatternProvider,
        config: CategoryConfig = DEFAULT_CONFIG,
    ):
        """Initialize the service.

        Args:
            db: Database session for the outcome log
            provider: Pattern source used by the history classifier
            config: Shared category constants
        """
        self.db = db
        self.config = config
        self.history_repo = CategorizationHistoryRepository(db)
        self.engine = HybridCategorizer(
            provider, config, batch_max_concurrency=settings.batch_max_concurrency
        )

    async def auto_categorize(self, description: str | None, user_id: str | None) -> ClassificationResult:
        return await self.engine.auto_categorize(description, user_id)

    async def suggest_categories(self, description: str | None, user_id: str | None) -> list[Suggestion]:
        return await self.engine.suggest_categories(description, user_id)

    async def categorize_batch(
        self, transactions: Sequence[Mapping[str, Any]], user_id: str | None
    ) -> list[dict[str, Any]]:
        return await self.engine.categorize_batch(transactions, user_id)

    def needs_manual_review(self, result: ClassificationResult | None) -> bool:
        return self.engine.needs_manual_review(result)

    def get_categorization_stats(self, results: Iterable[ClassificationResult]) -> CategorizationStats:
        return self.engine.get_categorization_stats(results)

    def calculate_similarity(self, first: str, second: str) -> float:
        return self.engine.calculate_similarity(first, second)

    def find_duplicates(
        self, transactions: Iterable[Mapping[str, Any]], existing: Iterable[Mapping[str, Any]]
    ) -> DuplicateReport:
        return find_duplicates(transactions, existing)

    async def record_outcome(self, outcome: CategorizationOutcomeCreate) -> CategorizationHistory:
        """Append the user's final choice to the history.

        Raises:
            InvalidCategoryError: If the final category is not in the registry
            PatternStoreError: If the outcome cannot be persisted
        """
        if outcome.final_category is not None and not self.config.is_known(outcome.final_category):
            raise InvalidCategoryError(
                "CAT_002", details={"category": outcome.final_category}, http_status=400
            )

        try:
            record = await self.history_repo.record_outcome(outcome)
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Failed to save categorization outcome",
                extra={"user_id": outcome.user_id, "error_type": type(exc).__name__},
            )
            raise PatternStoreError(
                "CAT_003", details={"user_id": outcome.user_id}, http_status=503
            ) from exc

        logger.info(
            "Categorization outcome recorded",
            extra={
                "user_id": outcome.user_id,
                "method": record.method,
                "was_corrected": record.was_corrected,
            },
        )
        return record

    async def get_history(self, user_id: str, limit: int = 100) -> list[CategorizationHistory]:
        return await self.history_repo.get_history(user_id, limit)

    async def get_accuracy_stats(self, user_id: str) -> AccuracyStats:
        return await self.history_repo.get_accuracy_stats(user_id, settings.history_stats_limit)

    async def get_category_frequency_for_word(
        self, user_id: str, word: str
    ) -> list[WordCategoryFrequency]:
        return await self.history_repo.get_category_frequency_for_word(
            user_id, word, settings.history_pattern_limit
        )

    async def has_enough_history_data(self, user_id: str) -> bool:
        return await self.engine.has_enough_history_data(user_id)
