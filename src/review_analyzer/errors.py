"""Error types for the review analyzer.

Every error carries a message that is shown as-is in the page error region,
so messages are written for the person using the page.
"""

from __future__ import annotations

from typing import Optional


class ReviewAppError(Exception):
    """Base class for all user-facing failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---- Dataset ----

class DatasetError(ReviewAppError):
    status_code = 503


class LoadError(DatasetError):
    """The dataset resource could not be fetched or read."""


class ParseError(DatasetError):
    """The TSV parser rejected the dataset."""


class EmptyDatasetError(DatasetError):
    """No non-blank `text` rows were left after parsing."""


# ---- Page actions ----

class NoReviewsError(ReviewAppError):
    status_code = 400


class NoReviewSelectedError(ReviewAppError):
    status_code = 400


class BusyError(ReviewAppError):
    status_code = 409


# ---- Inference ----

class InferenceError(ReviewAppError):
    status_code = 502


class ApiError(InferenceError):
    """Non-success HTTP status from the inference API."""

    def __init__(self, status: int, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class ModelLoadingError(ApiError):
    pass


class RateLimitedError(ApiError):
    pass


class MalformedResponseError(InferenceError):
    """The API answered 2xx but with an unexpected JSON shape."""


class InferenceUnavailableError(InferenceError):
    """Timeout or network failure before any HTTP status was received."""
