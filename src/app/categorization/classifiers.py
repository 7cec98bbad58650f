"""The classifiers the hybrid engine cascades through."""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.categorization.categories import DEFAULT_CONFIG, CategoryConfig
from app.categorization.history import PatternProvider, categorize_by_history
from app.categorization.keywords import KEYWORD_CONFIDENCE_FLOOR, categorize_by_keywords
from app.categorization.scorer import get_best_category
from app.schemas.categorization import ClassificationResult


class Classifier(ABC):
    """One categorization strategy.

    ``threshold`` is the confidence a result must exceed for the engine to
    accept it without consulting the next classifier.
    """

    name: str
    threshold: float

    @abstractmethod
    async def classify(
        self, description: str, user_id: str | None
    ) -> ClassificationResult | None:
        """Attempt to categorize the description, None when there is no signal."""


class HistoryClassifier(Classifier):
    name = "history"
    threshold = 0.7

    def __init__(self, provider: PatternProvider):
        self.provider = provider

    async def classify(self, description, user_id):
        return await categorize_by_history(description, user_id, self.provider)


class KeywordClassifier(Classifier):
    name = "keyword"
    threshold = KEYWORD_CONFIDENCE_FLOOR

    def __init__(self, config: CategoryConfig = DEFAULT_CONFIG):
        self.config = config

    async def classify(self, description, user_id):
        return categorize_by_keywords(description, self.config, self.threshold)


class ScoringClassifier(Classifier):
    name = "scoring"
    threshold = 0.6

    def __init__(self, config: CategoryConfig = DEFAULT_CONFIG):
        self.config = config

    async def classify(self, description, user_id):
        return get_best_category(description, self.config)
