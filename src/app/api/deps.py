"""FastAPI dependency injection for the categorization service."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import AsyncSessionLocal, get_db
from app.services.categorization import CategorizationService
from app.services.pattern_store import PatternStore


def get_pattern_store() -> PatternStore:
    """
    Get the pattern provider used by the history classifier.

    Returns:
        PatternStore opening one session per read
    """
    return PatternStore(AsyncSessionLocal)


async def get_categorization_service(
    db: AsyncSession = Depends(get_db),
    store: PatternStore = Depends(get_pattern_store),
) -> CategorizationService:
    """
    Get categorization service instance.

    Args:
        db: Database session for the outcome log
        store: Pattern provider

    Returns:
        CategorizationService instance
    """
    return CategorizationService(db, store)
