from app.categorization.categories import CategoryConfig
from app.categorization.keywords import categorize_by_keywords


def test_strong_keyword_hit():
    result = categorize_by_keywords("Uber 23/04")

    assert result is not None
    assert result.category == "Transporte"
    assert result.confidence == 1.0
    assert result.method == "keyword"
    assert result.score == 100


def test_prefix_hit_is_not_strong_enough():
    # STARTS_WITH scores 75, i.e. confidence 0.75
    assert categorize_by_keywords("uberx centro") is None


def test_no_match_returns_none():
    assert categorize_by_keywords("xyz qwerty") is None


def test_invalid_description_returns_none():
    assert categorize_by_keywords("") is None
    assert categorize_by_keywords(None) is None


def test_floor_is_exclusive():
    config = CategoryConfig(keyword_rules={"Alpha": ["alpha"]})
    assert categorize_by_keywords("alpha", config, floor=1.0) is None
    assert categorize_by_keywords("alpha", config, floor=0.99) is not None


def test_never_returns_fallback_category():
    config = CategoryConfig(keyword_rules={"Outros": ["diversos"]})
    assert categorize_by_keywords("diversos", config) is None
