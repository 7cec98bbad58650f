"""Custom exception classes for the categorization service.

Each exception carries an error_code from the catalog in errors.py. The engine
itself never lets these escape its public operations; they surface at the
store and API boundaries.
"""

from typing import Any


class CategorizationError(Exception):
    """Base exception for all categorization service errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CAT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class PatternStoreError(CategorizationError):
    """Raised when the categorization history cannot be read or written.

    Maps to CAT_001 (read) and CAT_003 (write).
    """

    pass


class InvalidCategoryError(CategorizationError):
    """Raised when an outcome names a category outside the registry (CAT_002)."""

    pass
