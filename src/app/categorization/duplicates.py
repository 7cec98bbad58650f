"""Near-duplicate detection for imported transactions.

A new transaction duplicates an existing one when both have the same type, fall
within a day of each other, carry the same amount and have descriptions that
are more than 80% similar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from app.categorization.similarity import calculate_similarity

SIMILARITY_THRESHOLD = 0.8
TOLERANCE_DAYS = 1
AMOUNT_TOLERANCE = 0.01


@dataclass
class DuplicateReport:
    duplicates: list[dict[str, Any]] = field(default_factory=list)
    unique: list[dict[str, Any]] = field(default_factory=list)


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def is_same_day(first: Any, second: Any, tolerance_days: int = TOLERANCE_DAYS) -> bool:
    a, b = _as_date(first), _as_date(second)
    if a is None or b is None:
        return False
    return abs((a - b).days) <= tolerance_days


def is_duplicate(
    candidate: Mapping[str, Any],
    existing: Mapping[str, Any],
    similarity_threshold: float = SIMILARITY_THRESHOLD,
    tolerance_days: int = TOLERANCE_DAYS,
    amount_tolerance: float = AMOUNT_TOLERANCE,
) -> bool:
    if candidate.get("type", "expense") != existing.get("type", "expense"):
        return False

    if not is_same_day(candidate.get("date"), existing.get("date"), tolerance_days):
        return False

    try:
        amount_gap = abs(float(candidate.get("amount")) - float(existing.get("amount")))
    except (TypeError, ValueError):
        return False
    if amount_gap >= amount_tolerance:
        return False

    similarity = calculate_similarity(
        candidate.get("description") or "", existing.get("description") or ""
    )
    return similarity > similarity_threshold


def find_duplicates(
    transactions: Iterable[Mapping[str, Any]],
    existing: Iterable[Mapping[str, Any]],
    *,
    similarity_threshold: float = SIMILARITY_THRESHOLD,
    tolerance_days: int = TOLERANCE_DAYS,
    amount_tolerance: float = AMOUNT_TOLERANCE,
) -> DuplicateReport:
    """Split new transactions into duplicates of ``existing`` and unique ones."""
    known = list(existing or [])
    report = DuplicateReport()

    for transaction in transactions or []:
        row = dict(transaction)
        duplicated = any(
            is_duplicate(row, other, similarity_threshold, tolerance_days, amount_tolerance)
            for other in known
        )
        row["is_duplicate"] = duplicated
        (report.duplicates if duplicated else report.unique).append(row)

    return report


def mark_duplicates(
    transactions: Iterable[Mapping[str, Any]], existing: Iterable[Mapping[str, Any]]
) -> list[dict[str, Any]]:
    """Flag every transaction, duplicates first."""
    report = find_duplicates(transactions, existing)
    return report.duplicates + report.unique
