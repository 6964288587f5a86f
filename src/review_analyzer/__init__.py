from .config import Settings
from .dataset import load_reviews, parse_reviews
from .inference import InferenceClient
from .render import count_nouns, render_noun_count, render_sentiment
from .selector import ReviewSelector
from .variants import VARIANTS, Variant, get_variant

__version__ = "1.0.0"
__all__ = [
    "Settings",
    "load_reviews",
    "parse_reviews",
    "InferenceClient",
    "count_nouns",
    "render_noun_count",
    "render_sentiment",
    "ReviewSelector",
    "VARIANTS",
    "Variant",
    "get_variant",
]
