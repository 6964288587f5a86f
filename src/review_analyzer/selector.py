from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .errors import NoReviewsError


class ReviewSelector:
    """Uniform random pick over the loaded reviews.

    Repeats are allowed; every pick is independent of the previous one.
    """

    def __init__(self, reviews: Sequence[str] = (), rng: Optional[random.Random] = None) -> None:
        self.reviews: List[str] = list(reviews)
        self.rng = rng or random.Random()
        self.current: Optional[str] = None

    def pick(self) -> str:
        if not self.reviews:
            raise NoReviewsError("No reviews available for analysis")
        self.current = self.reviews[self.rng.randrange(len(self.reviews))]
        return self.current
