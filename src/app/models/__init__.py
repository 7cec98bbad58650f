"""Database models."""
from app.models.categorization_history import CategorizationHistory

__all__ = ["CategorizationHistory"]
