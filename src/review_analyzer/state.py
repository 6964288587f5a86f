from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Literal, Optional

from .errors import BusyError, NoReviewSelectedError
from .selector import ReviewSelector

LoadStatus = Literal["loading", "ready", "failed"]


@dataclass
class PageState:
    """Server-side mirror of what the page displays.

    There is one page per app. The busy flag is only touched from the event
    loop, so check-and-set in `busy()` cannot interleave with another action.
    """
    selector: ReviewSelector = field(default_factory=ReviewSelector)
    load_status: LoadStatus = "loading"
    is_busy: bool = False
    error: Optional[str] = None
    result: Optional[Dict[str, Any]] = None

    @property
    def select_label(self) -> str:
        if self.load_status == "ready":
            return "Select Random Review"
        if self.load_status == "failed":
            return "Failed to Load Reviews"
        return "Loading Reviews..."

    @property
    def current_review(self) -> Optional[str]:
        return self.selector.current

    def mark_loaded(self, reviews: List[str]) -> None:
        self.selector.reviews = list(reviews)
        self.selector.current = None
        self.load_status = "ready"

    def mark_load_failed(self, message: str) -> None:
        self.load_status = "failed"
        self.show_error(message)

    def show_error(self, message: str) -> None:
        self.error = message

    def show_result(self, kind: str, payload: Dict[str, Any]) -> None:
        self.result = {"kind": kind, **payload}

    def clear_panels(self) -> None:
        self.error = None
        self.result = None

    def ensure_idle(self) -> None:
        if self.is_busy:
            raise BusyError("Another request is still running. Please wait for it to finish.")

    def require_review(self) -> str:
        if not self.selector.current:
            raise NoReviewSelectedError("Select a review before running an analysis.")
        return self.selector.current

    @contextmanager
    def busy(self) -> Iterator["PageState"]:
        """Hold the page in the busy state for one action.

        Clears the error and result panels on entry and always returns to
        idle on exit, whether or not the action failed.
        """
        self.ensure_idle()
        self.is_busy = True
        self.clear_panels()
        try:
            yield self
        finally:
            self.is_busy = False

    def select_review(self) -> str:
        self.ensure_idle()
        self.clear_panels()
        return self.selector.pick()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "load_status": self.load_status,
            "select_label": self.select_label,
            "review_count": len(self.selector.reviews),
            "current_review": self.current_review,
            "busy": self.is_busy,
            "error": self.error,
            "result": self.result,
        }
