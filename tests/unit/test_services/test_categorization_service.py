"""Unit tests for CategorizationService."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import InvalidCategoryError, PatternStoreError
from app.schemas.categorization import ClassificationResult
from app.schemas.history import CategorizationOutcomeCreate
from app.services.categorization import CategorizationService


@pytest.fixture
def service(mock_db, provider):
    return CategorizationService(mock_db, provider)


class TestRecordOutcome:
    @pytest.mark.asyncio
    async def test_records_confirmed_outcome(self, service, mock_db):
        record = await service.record_outcome(
            CategorizationOutcomeCreate(
                user_id="user-1",
                description="Uber centro",
                suggested_category="Transporte",
                final_category="Transporte",
                confidence=1.0,
                method="keyword",
            )
        )

        assert record.final_category == "Transporte"
        assert record.id is not None
        mock_db.commit.assert_awaited_once()
        mock_db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_category_is_rejected(self, service, mock_db):
        with pytest.raises(InvalidCategoryError) as exc_info:
            await service.record_outcome(
                CategorizationOutcomeCreate(user_id="user-1", final_category="Pets")
            )

        assert exc_info.value.error_code == "CAT_002"
        assert exc_info.value.http_status == 400
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_failure_rolls_back(self, service, mock_db):
        mock_db.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))

        with pytest.raises(PatternStoreError) as exc_info:
            await service.record_outcome(
                CategorizationOutcomeCreate(user_id="user-1", final_category="Lazer")
            )

        assert exc_info.value.error_code == "CAT_003"
        assert exc_info.value.http_status == 503
        mock_db.rollback.assert_awaited_once()


class TestEngineDelegation:
    @pytest.mark.asyncio
    async def test_auto_categorize_uses_provider(self, service, provider):
        result = await service.auto_categorize("mercado extra", "user-1")

        assert result.method == "history"
        assert provider.calls == ["user-1"]

    @pytest.mark.asyncio
    async def test_batch_and_suggestions(self, service):
        rows = await service.categorize_batch([{"description": "Uber 23/04"}], "user-2")
        assert rows[0]["categorization_method"] == "keyword"

        suggestions = await service.suggest_categories("Uber 23/04", "user-2")
        assert suggestions[0].category == "Transporte"

    def test_review_and_stats(self, service):
        result = ClassificationResult(category="Outros", confidence=0.3, method="fallback")

        assert service.needs_manual_review(result) is True
        assert service.get_categorization_stats([result]).needs_review == 1

    def test_duplicates_and_similarity(self, service):
        report = service.find_duplicates(
            [{"description": "Uber", "amount": 10, "date": "2024-01-01"}],
            [{"description": "uber", "amount": 10, "date": "2024-01-02"}],
        )

        assert len(report.duplicates) == 1
        assert service.calculate_similarity("Uber", "uber") == 1.0

    @pytest.mark.asyncio
    async def test_history_readiness(self, service):
        assert await service.has_enough_history_data("user-1") is False
