"""Append-only log of categorization outcomes.

Each row records what the engine suggested for a description and what the user
finally chose. The user's word -> category votes are derived from these rows.
"""

from sqlalchemy import Boolean, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class CategorizationHistory(BaseModel):
    """A confirmed (or corrected) categorization for a user."""

    __tablename__ = "categorization_history"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    suggested_category: Mapped[str] = mapped_column(String(100), nullable=False)
    final_category: Mapped[str] = mapped_column(String(100), nullable=False)
    was_corrected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    method: Mapped[str] = mapped_column(String(50), default="unknown", nullable=False)

    __table_args__ = (
        Index("ix_categorization_history_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CategorizationHistory(id={self.id}, user_id={self.user_id}, "
            f"final_category={self.final_category}, method={self.method})>"
        )
