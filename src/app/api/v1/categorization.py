"""Categorization endpoints: suggestions, batch, review and history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.deps import get_categorization_service
from app.categorization.categories import DEFAULT_CONFIG
from app.schemas.categorization import (
    BatchCategorizeRequest,
    BatchCategorizeResponse,
    CategorizationStats,
    CategorizeRequest,
    CategoryResponse,
    ClassificationResult,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    ReviewRequest,
    ReviewResponse,
    SimilarityRequest,
    SimilarityResponse,
    StatsRequest,
    SuggestionsResponse,
)
from app.schemas.history import (
    AccuracyStats,
    CategorizationHistoryListResult,
    CategorizationHistoryResponse,
    CategorizationOutcomeCreate,
    HistoryReadinessResponse,
    WordCategoryFrequency,
)
from app.services.categorization import CategorizationService

router = APIRouter(prefix="/categorization", tags=["categorization"])

UserId = Annotated[str, Path(min_length=1, max_length=128, description="User identifier")]


@router.get(
    "/categories",
    response_model=list[CategoryResponse],
    summary="List categories and their keywords",
)
async def list_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(
            id=category.id,
            name=category.name,
            icon=category.icon,
            color=category.color,
            keywords=list(DEFAULT_CONFIG.keyword_rules.get(category.name, ())),
        )
        for category in DEFAULT_CONFIG.categories
    ]


@router.post(
    "/auto",
    response_model=ClassificationResult,
    summary="Categorize a description",
    description="""
    Pick the single best category for a transaction description.

    Priority: user history (> 0.7), keyword rules (> 0.8), lexical scoring (> 0.6),
    then the most confident uncertain result, then the fallback category.
    Failures never surface as errors: they come back as a low-confidence
    `error` result.
    """,
)
async def auto_categorize(
    payload: CategorizeRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> ClassificationResult:
    return await service.auto_categorize(payload.description, payload.user_id)


@router.post(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Suggest up to three categories",
)
async def suggest_categories(
    payload: CategorizeRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> SuggestionsResponse:
    suggestions = await service.suggest_categories(payload.description, payload.user_id)
    return SuggestionsResponse(suggestions=suggestions)


@router.post(
    "/batch",
    response_model=BatchCategorizeResponse,
    summary="Categorize many transactions",
    description="""
    Categorize every transaction concurrently. The response keeps the input
    order and echoes each transaction with `suggested_category`, `confidence`
    and `categorization_method` added.
    """,
)
async def categorize_batch(
    payload: BatchCategorizeRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> BatchCategorizeResponse:
    rows = [transaction.model_dump(exclude_unset=True) for transaction in payload.transactions]
    categorized = await service.categorize_batch(rows, payload.user_id)
    return BatchCategorizeResponse(transactions=categorized)


@router.post("/review", response_model=ReviewResponse, summary="Check if a result needs review")
async def needs_manual_review(
    payload: ReviewRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> ReviewResponse:
    return ReviewResponse(needs_review=service.needs_manual_review(payload.result))


@router.post("/stats", response_model=CategorizationStats, summary="Aggregate results")
async def categorization_stats(
    payload: StatsRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> CategorizationStats:
    return service.get_categorization_stats(payload.results)


@router.post("/similarity", response_model=SimilarityResponse, summary="Compare two descriptions")
async def similarity(
    payload: SimilarityRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> SimilarityResponse:
    return SimilarityResponse(similarity=service.calculate_similarity(payload.first, payload.second))


@router.post(
    "/duplicates",
    response_model=DuplicateCheckResponse,
    summary="Flag near-duplicate transactions",
)
async def find_duplicates(
    payload: DuplicateCheckRequest,
    service: CategorizationService = Depends(get_categorization_service),
) -> DuplicateCheckResponse:
    report = service.find_duplicates(
        [t.model_dump() for t in payload.transactions],
        [t.model_dump() for t in payload.existing],
    )
    return DuplicateCheckResponse(duplicates=report.duplicates, unique=report.unique)


@router.post(
    "/history",
    response_model=CategorizationHistoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record the category the user kept",
    responses={
        201: {"description": "Outcome recorded"},
        400: {"description": "Unknown category"},
        503: {"description": "History store unavailable"},
    },
)
async def record_outcome(
    payload: CategorizationOutcomeCreate,
    service: CategorizationService = Depends(get_categorization_service),
) -> CategorizationHistoryResponse:
    record = await service.record_outcome(payload)
    return CategorizationHistoryResponse.model_validate(record)


@router.get(
    "/history/{user_id}",
    response_model=CategorizationHistoryListResult,
    summary="List recent outcomes for a user",
)
async def list_history(
    user_id: UserId,
    limit: Annotated[int, Query(ge=1, le=500, description="Maximum number of outcomes")] = 100,
    service: CategorizationService = Depends(get_categorization_service),
) -> CategorizationHistoryListResult:
    history = await service.get_history(user_id, limit)
    return CategorizationHistoryListResult(
        history=[CategorizationHistoryResponse.model_validate(h) for h in history],
        total=len(history),
    )


@router.get(
    "/history/{user_id}/accuracy",
    response_model=AccuracyStats,
    summary="Suggestion acceptance rate",
)
async def accuracy(
    user_id: UserId,
    service: CategorizationService = Depends(get_categorization_service),
) -> AccuracyStats:
    return await service.get_accuracy_stats(user_id)


@router.get(
    "/history/{user_id}/ready",
    response_model=HistoryReadinessResponse,
    summary="Whether the user's history is rich enough to rely on",
)
async def history_ready(
    user_id: UserId,
    service: CategorizationService = Depends(get_categorization_service),
) -> HistoryReadinessResponse:
    return HistoryReadinessResponse(
        user_id=user_id, ready=await service.has_enough_history_data(user_id)
    )


@router.get(
    "/history/{user_id}/words/{word}",
    response_model=list[WordCategoryFrequency],
    summary="Categories the user associated with a word",
)
async def word_frequency(
    user_id: UserId,
    word: Annotated[str, Path(min_length=1, max_length=100)],
    service: CategorizationService = Depends(get_categorization_service),
) -> list[WordCategoryFrequency]:
    return await service.get_category_frequency_for_word(user_id, word)
