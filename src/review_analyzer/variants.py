from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Variant:
    """Display and request flavour of the page.

    Parameters
    ----------
    name : str
        Preset name, used in configuration.
    confidence_decimals : int
        Decimals shown for the sentiment confidence percentage.
    neutral_threshold : float | None
        If set, a label is only trusted when its score is strictly above this
        value; otherwise the sentiment is shown as "Neutral".
    friendly_errors : bool
        Give HTTP 503 (model loading) and 429 (rate limited) their own messages.
    wait_for_model : bool
        Send ``options.wait_for_model`` so the API blocks while a cold model loads.
    """

    name: str
    confidence_decimals: int = 1
    neutral_threshold: Optional[float] = None
    friendly_errors: bool = False
    wait_for_model: bool = True


VARIANTS: Dict[str, Variant] = {
    "classic": Variant(name="classic"),
    "resilient": Variant(name="resilient", confidence_decimals=2, friendly_errors=True),
    "thresholded": Variant(
        name="thresholded",
        confidence_decimals=2,
        neutral_threshold=0.5,
        friendly_errors=True,
        wait_for_model=False,
    ),
}


def get_variant(name: str) -> Variant:
    """Look up a preset by name.

    >>> get_variant("classic").confidence_decimals
    1
    """
    try:
        return VARIANTS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(VARIANTS))
        raise ValueError(f"Unknown variant {name!r}. Expected one of: {known}") from None
