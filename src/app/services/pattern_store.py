"""Database-backed pattern provider for the history classifier."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.core.exceptions import PatternStoreError
from app.repositories.categorization_history import CategorizationHistoryRepository

logger = logging.getLogger(__name__)


class PatternStore:
    """Serves each user's word -> category votes from the outcome log.

    Every call opens its own session, so any number of concurrent
    categorizations can read patterns without sharing a connection.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        limit: int = settings.history_pattern_limit,
    ):
        self.session_factory = session_factory
        self.limit = limit

    async def get_user_patterns(self, user_id: str) -> dict[str, dict[str, int]]:
        """Return the user's vote table; an empty dict when there is no history.

        Raises:
            PatternStoreError: If the history cannot be read
        """
        try:
            async with self.session_factory() as session:
                repo = CategorizationHistoryRepository(session)
                return await repo.get_user_patterns(user_id, self.limit)
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to read categorization patterns",
                extra={"user_id": user_id, "error_type": type(exc).__name__},
            )
            raise PatternStoreError(
                "CAT_001", details={"user_id": user_id}, http_status=503
            ) from exc
