"""Category registry and the shared categorization configuration.

The registry (name, icon, color) exists for display. The engine itself only
needs the fallback name and the keyword table, which travel together in a
single immutable ``CategoryConfig`` so the scorer and the arbiter always agree
on what "fallback" means.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from app.categorization.keyword_rules import KEYWORD_RULES

FALLBACK_CATEGORY = "Outros"


@dataclass(frozen=True)
class Category:
    """A category as shown to the user."""

    id: str
    name: str
    icon: str
    color: str


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="moradia", name="Moradia", icon="🏠", color="#3B82F6"),
    Category(id="alimentacao", name="Alimentação", icon="🍔", color="#10B981"),
    Category(id="transporte", name="Transporte", icon="🚗", color="#F59E0B"),
    Category(id="contas", name="Contas", icon="⚡", color="#EF4444"),
    Category(id="lazer", name="Lazer", icon="🎮", color="#8B5CF6"),
    Category(id="saude", name="Saúde", icon="💊", color="#EC4899"),
    Category(id="educacao", name="Educação", icon="📚", color="#14B8A6"),
    Category(id="outros", name=FALLBACK_CATEGORY, icon="📦", color="#6B7280"),
)


def get_category_by_id(category_id: str | None) -> Category:
    """Look up a category by id, defaulting to the fallback category."""
    for category in DEFAULT_CATEGORIES:
        if category.id == category_id:
            return category
    return DEFAULT_CATEGORIES[-1]


def get_category_by_name(name: str | None) -> Category | None:
    for category in DEFAULT_CATEGORIES:
        if category.name == name:
            return category
    return None


@dataclass(frozen=True)
class CategoryConfig:
    """Immutable categorization constants shared by every classifier."""

    fallback_category: str = FALLBACK_CATEGORY
    keyword_rules: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: KEYWORD_RULES
    )
    categories: tuple[Category, ...] = DEFAULT_CATEGORIES

    def __post_init__(self) -> None:
        # Freeze caller-supplied tables as well.
        if not isinstance(self.keyword_rules, MappingProxyType):
            frozen = MappingProxyType(
                {name: tuple(words) for name, words in self.keyword_rules.items()}
            )
            object.__setattr__(self, "keyword_rules", frozen)

    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    def is_known(self, name: str | None) -> bool:
        return name == self.fallback_category or name in self.category_names


DEFAULT_CONFIG = CategoryConfig()
