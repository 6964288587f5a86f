import random

import pytest

from review_analyzer.errors import BusyError, NoReviewSelectedError, NoReviewsError
from review_analyzer.selector import ReviewSelector
from review_analyzer.state import PageState


def test_pick_is_always_a_member():
    reviews = ["a", "b", "c", "d"]
    selector = ReviewSelector(reviews, rng=random.Random(0))
    seen = set()
    for _ in range(200):
        pick = selector.pick()
        assert pick in reviews
        assert selector.current == pick
        seen.add(pick)
    # uniform over 4 items; 200 draws hit all of them
    assert seen == set(reviews)


def test_pick_from_empty_list():
    with pytest.raises(NoReviewsError) as exc:
        ReviewSelector([]).pick()
    assert exc.value.message == "No reviews available for analysis"


def test_load_status_labels():
    page = PageState()
    assert page.select_label == "Loading Reviews..."
    page.mark_loaded(["one"])
    assert page.select_label == "Select Random Review"
    assert page.snapshot()["review_count"] == 1

    failed = PageState()
    failed.mark_load_failed("Could not load reviews file: Not Found")
    assert failed.select_label == "Failed to Load Reviews"
    assert failed.error == "Could not load reviews file: Not Found"


def test_busy_clears_panels_and_returns_to_idle():
    page = PageState()
    page.show_error("old error")
    page.show_result("nouns", {"noun_count": 1})

    with page.busy():
        assert page.is_busy
        assert page.error is None
        assert page.result is None

    assert not page.is_busy


def test_busy_returns_to_idle_after_failure():
    page = PageState()
    with pytest.raises(RuntimeError):
        with page.busy():
            raise RuntimeError("request failed")
    assert not page.is_busy


def test_no_second_action_while_busy():
    page = PageState()
    page.mark_loaded(["one"])
    with page.busy():
        with pytest.raises(BusyError):
            with page.busy():
                pass
        with pytest.raises(BusyError):
            page.select_review()
        # the outer action still owns the busy flag
        assert page.is_busy
    assert not page.is_busy


def test_select_review_resets_result():
    page = PageState(selector=ReviewSelector(rng=random.Random(1)))
    page.mark_loaded(["only review"])
    page.show_result("sentiment", {"label": "Positive"})
    assert page.select_review() == "only review"
    assert page.result is None
    assert page.current_review == "only review"


def test_require_review():
    page = PageState()
    page.mark_loaded(["x"])
    with pytest.raises(NoReviewSelectedError):
        page.require_review()
