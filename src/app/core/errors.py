"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "CAT_001": {
        "code": "CAT_001",
        "message": "Categorization history could not be read",
        "user_message": "We couldn't load your categorization history.",
        "suggestion": "Suggestions are still available; please try again in a few moments.",
        "retry_allowed": True,
    },
    "CAT_002": {
        "code": "CAT_002",
        "message": "Invalid category",
        "user_message": "That category isn't supported.",
        "suggestion": "Please choose a category from the available list.",
        "retry_allowed": False,
    },
    "CAT_003": {
        "code": "CAT_003",
        "message": "Categorization outcome could not be saved",
        "user_message": "We couldn't save your category choice.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def _unknown(error_code: str) -> dict:
    return {
        "code": "UNKNOWN",
        "message": f"Unknown error code: {error_code}",
        "user_message": "An unexpected error occurred.",
        "suggestion": "Please try again. Contact support if the problem persists.",
        "retry_allowed": True,
    }


def get_error(error_code: str) -> dict:
    """Catalog entry for a code; unknown codes get a generic entry."""
    return ERROR_CATALOG.get(error_code) or _unknown(error_code)


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]


def error_payload(error_code: str, message: str | None = None) -> dict:
    """JSON body returned for an error code.

    ``message`` overrides the catalog's technical message (e.g. with the list
    of invalid fields); user-facing fields always come from the catalog.
    """
    entry = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or entry["message"],
        "user_message": entry["user_message"],
        "suggestion": entry["suggestion"],
        "retry_allowed": entry["retry_allowed"],
    }
