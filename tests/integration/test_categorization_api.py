"""API tests for the categorization endpoints, with the store replaced by fakes."""

import pytest
from httpx import AsyncClient

BASE = "/api/v1/categorization"


class TestCategorize:
    @pytest.mark.asyncio
    async def test_list_categories(self, client: AsyncClient):
        response = await client.get(f"{BASE}/categories")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 8
        assert data[0]["name"] == "Moradia"
        assert "aluguel" in data[0]["keywords"]
        assert data[-1]["name"] == "Outros"
        assert data[-1]["keywords"] == []

    @pytest.mark.asyncio
    async def test_auto_keyword(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/auto", json={"description": "Uber 23/04", "user_id": "user-2"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Transporte"
        assert data["method"] == "keyword"
        assert data["confidence"] == 1.0

    @pytest.mark.asyncio
    async def test_auto_history(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/auto", json={"description": "mercado extra", "user_id": "user-1"}
        )

        data = response.json()
        assert data["category"] == "Alimentação"
        assert data["method"] == "history"
        assert data["votes"] == 5

    @pytest.mark.asyncio
    async def test_auto_empty_description(self, client: AsyncClient):
        response = await client.post(f"{BASE}/auto", json={"description": ""})

        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Outros"
        assert data["method"] == "fallback"
        assert data["confidence"] == 0.3

    @pytest.mark.asyncio
    async def test_suggestions(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/suggestions", json={"description": "mercado extra", "user_id": "user-1"}
        )

        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        assert len(suggestions) == 1
        assert suggestions[0]["category"] == "Alimentação"
        assert suggestions[0]["source"] == "history"

    @pytest.mark.asyncio
    async def test_batch_keeps_order_and_extra_fields(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/batch",
            json={
                "user_id": "user-2",
                "transactions": [
                    {"id": "t1", "description": "Uber 23/04", "amount": 23.5},
                    {"id": "t2", "description": "xyz qwerty"},
                ],
            },
        )

        assert response.status_code == 200
        rows = response.json()["transactions"]
        assert [row["id"] for row in rows] == ["t1", "t2"]
        assert rows[0]["amount"] == 23.5
        assert rows[0]["suggested_category"] == "Transporte"
        assert rows[1]["categorization_method"] == "default_uncertain"

    @pytest.mark.asyncio
    async def test_batch_rows_gain_only_categorization_fields(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/batch",
            json={"user_id": "user-1", "transactions": [{"id": 1, "amount": 2}]},
        )

        assert response.status_code == 200
        row = response.json()["transactions"][0]
        assert set(row) == {
            "id",
            "amount",
            "suggested_category",
            "confidence",
            "categorization_method",
        }


class TestReviewAndStats:
    @pytest.mark.asyncio
    async def test_review(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/review",
            json={"result": {"category": "Outros", "confidence": 0.3, "method": "fallback"}},
        )

        assert response.status_code == 200
        assert response.json() == {"needs_review": True}

    @pytest.mark.asyncio
    async def test_review_without_result(self, client: AsyncClient):
        response = await client.post(f"{BASE}/review", json={})
        assert response.json() == {"needs_review": True}

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/stats",
            json={
                "results": [
                    {"category": "Lazer", "confidence": 0.9, "method": "history"},
                    {"category": "Outros", "confidence": 0.3, "method": "fallback"},
                ]
            },
        )

        data = response.json()
        assert data["total"] == 2
        assert data["by_method"] == {"history": 1, "fallback": 1}
        assert data["avg_confidence"] == pytest.approx(0.6)
        assert data["needs_review"] == 1

    @pytest.mark.asyncio
    async def test_stats_counts_missing_method_as_unknown(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/stats",
            json={"results": [{"category": "Lazer", "confidence": 0.9}]},
        )

        assert response.status_code == 200
        assert response.json()["by_method"] == {"unknown": 1}

    @pytest.mark.asyncio
    async def test_review_accepts_result_without_method(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/review",
            json={"result": {"category": "Lazer", "confidence": 0.9}},
        )

        assert response.status_code == 200
        assert response.json() == {"needs_review": False}

    @pytest.mark.asyncio
    async def test_similarity(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/similarity", json={"first": "kitten", "second": "sitting"}
        )

        assert response.json()["similarity"] == pytest.approx(1 - 3 / 7)

    @pytest.mark.asyncio
    async def test_duplicates(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/duplicates",
            json={
                "transactions": [
                    {"id": "n1", "description": "Padaria Real", "amount": 12.5, "date": "2024-03-11"},
                    {"id": "n2", "description": "Cinema", "amount": 40, "date": "2024-03-11"},
                ],
                "existing": [
                    {"description": "PADARIA REAL", "amount": 12.5, "date": "2024-03-10"},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert [row["id"] for row in data["duplicates"]] == ["n1"]
        assert [row["id"] for row in data["unique"]] == ["n2"]


class TestHistoryEndpoints:
    @pytest.mark.asyncio
    async def test_record_outcome(self, client: AsyncClient, mock_db):
        response = await client.post(
            f"{BASE}/history",
            json={
                "user_id": "user-1",
                "description": "Padaria Real",
                "suggested_category": "Outros",
                "final_category": "Alimentação",
                "was_corrected": True,
                "confidence": 0.3,
                "method": "default_uncertain",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["final_category"] == "Alimentação"
        assert data["was_corrected"] is True
        assert "id" in data
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_record_outcome_unknown_category(self, client: AsyncClient):
        response = await client.post(
            f"{BASE}/history", json={"user_id": "user-1", "final_category": "Pets"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CAT_002"

    @pytest.mark.asyncio
    async def test_record_outcome_validation(self, client: AsyncClient):
        response = await client.post(f"{BASE}/history", json={"final_category": "Lazer"})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VAL_001"
        assert "user_id" in data["message"]

    @pytest.mark.asyncio
    async def test_list_history_empty(self, client: AsyncClient):
        response = await client.get(f"{BASE}/history/user-1", params={"limit": 10})

        assert response.status_code == 200
        assert response.json() == {"history": [], "total": 0}

    @pytest.mark.asyncio
    async def test_list_history_limit_validation(self, client: AsyncClient):
        response = await client.get(f"{BASE}/history/user-1", params={"limit": 0})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_accuracy_empty(self, client: AsyncClient):
        response = await client.get(f"{BASE}/history/user-1/accuracy")

        assert response.status_code == 200
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_ready(self, client: AsyncClient):
        response = await client.get(f"{BASE}/history/user-1/ready")
        assert response.json() == {"user_id": "user-1", "ready": False}

    @pytest.mark.asyncio
    async def test_word_frequency(self, client: AsyncClient, mock_db):
        mock_db.execute.return_value.all.return_value = [
            ("Uber Centro", "Transporte"),
            ("Uber", "Transporte"),
            ("uber eats", "Alimentação"),
        ]

        response = await client.get(f"{BASE}/history/user-1/words/uber")

        assert response.json() == [
            {"category": "Transporte", "count": 2},
            {"category": "Alimentação", "count": 1},
        ]
