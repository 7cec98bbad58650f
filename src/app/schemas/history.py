"""Schemas for the categorization history (outcomes recorded after user confirmation)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CategorizationOutcomeCreate(BaseModel):
    """Outcome recorded once the user confirms or corrects a suggestion."""

    user_id: str = Field(min_length=1, max_length=128)
    description: str = Field("", max_length=500)
    suggested_category: str | None = Field(None, description="Category the engine suggested")
    final_category: str | None = Field(None, description="Category the user kept")
    was_corrected: bool = False
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    method: str | None = None


class CategorizationHistoryResponse(BaseModel):
    id: UUID
    user_id: str
    description: str
    suggested_category: str
    final_category: str
    was_corrected: bool
    confidence: float
    method: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategorizationHistoryListResult(BaseModel):
    history: list[CategorizationHistoryResponse]
    total: int


class MethodAccuracy(BaseModel):
    total: int = 0
    correct: int = 0
    accuracy: float = 0.0


class AccuracyStats(BaseModel):
    """How often suggestions were accepted without correction."""

    total: int = 0
    correct: int = 0
    corrected: int = 0
    accuracy: float = 0.0
    by_method: dict[str, MethodAccuracy] = Field(default_factory=dict)


class WordCategoryFrequency(BaseModel):
    category: str
    count: int


class HistoryReadinessResponse(BaseModel):
    user_id: str
    ready: bool
