"""Pydantic schemas for categorization results and API payloads.

The result models are value objects: they are created fresh for every call and
frozen, so a result handed to a caller can never change underneath it.
"""

import datetime as dt
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _clamp(value: float) -> float:
    return max(0.0, min(float(value), 1.0))


Confidence = Annotated[float, AfterValidator(_clamp)]


# Value objects


class CategoryScore(BaseModel):
    """Score of one category for a description."""

    model_config = ConfigDict(frozen=True)

    category: str
    score: int = Field(ge=0)
    confidence: Confidence = Field(description="Normalized score in [0, 1]")


class ClassificationResult(BaseModel):
    """Outcome of a single categorization."""

    model_config = ConfigDict(frozen=True)

    category: str
    confidence: Confidence = Field(description="Certainty in [0, 1]")
    method: str | None = Field(
        None,
        description="history, keyword, scoring, default, fallback, error or <method>_uncertain",
    )
    score: int | None = None
    votes: int | None = None
    total_votes: int | None = None
    alternatives: list[CategoryScore] = Field(default_factory=list)
    error: str | None = None


class Suggestion(BaseModel):
    """One entry of the ranked multi-choice list."""

    model_config = ConfigDict(frozen=True)

    category: str
    confidence: Confidence
    source: Literal["history", "keyword", "scoring"]
    votes: int | None = None
    score: int | None = None


class CategorizationStats(BaseModel):
    """Aggregate over a list of previous results."""

    total: int = 0
    by_method: dict[str, int] = Field(default_factory=dict)
    avg_confidence: float = 0.0
    needs_review: int = 0


# Request schemas


class CategorizeRequest(BaseModel):
    """Description to categorize for a user."""

    description: str | None = Field(None, description="Free-text transaction description")
    user_id: str | None = Field(None, description="Owner of the categorization history")


class BatchTransaction(BaseModel):
    """A transaction row to categorize; unknown fields are passed through."""

    model_config = ConfigDict(extra="allow")

    description: str | None = None


class BatchCategorizeRequest(BaseModel):
    transactions: list[BatchTransaction] = Field(default_factory=list)
    user_id: str | None = None


class ReviewRequest(BaseModel):
    result: ClassificationResult | None = None


class StatsRequest(BaseModel):
    results: list[ClassificationResult] = Field(default_factory=list)


class SimilarityRequest(BaseModel):
    first: str
    second: str


class DuplicateCandidate(BaseModel):
    """Transaction compared during duplicate detection."""

    model_config = ConfigDict(extra="allow")

    description: str | None = None
    amount: float
    date: dt.date
    type: str = "expense"


class DuplicateCheckRequest(BaseModel):
    transactions: list[DuplicateCandidate] = Field(default_factory=list)
    existing: list[DuplicateCandidate] = Field(default_factory=list)


# Response schemas


class SuggestionsResponse(BaseModel):
    suggestions: list[Suggestion]


class BatchCategorizeResponse(BaseModel):
    transactions: list[dict[str, Any]]


class ReviewResponse(BaseModel):
    needs_review: bool


class SimilarityResponse(BaseModel):
    similarity: float


class DuplicateCheckResponse(BaseModel):
    duplicates: list[dict[str, Any]]
    unique: list[dict[str, Any]]


class CategoryResponse(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    keywords: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
