from dataclasses import dataclass, field
import os

from .variants import Variant, get_variant


@dataclass
class Settings:

    # Local path or http(s) URL of the TSV file
    dataset_source: str = field(default_factory=lambda: os.getenv("REVIEW_APP_DATASET", "reviews_test.tsv"))

    api_base_url: str = field(
        default_factory=lambda: os.getenv(
            "REVIEW_APP_API_BASE_URL", "https://api-inference.huggingface.co/models"
        )
    )
    sentiment_model: str = field(
        default_factory=lambda: os.getenv(
            "REVIEW_APP_SENTIMENT_MODEL", "siebert/sentiment-roberta-large-english"
        )
    )
    pos_model: str = field(
        default_factory=lambda: os.getenv(
            "REVIEW_APP_POS_MODEL", "vblagoje/bert-english-uncased-finetuned-pos"
        )
    )

    variant_name: str = field(default_factory=lambda: os.getenv("REVIEW_APP_VARIANT", "classic"))

    # Seconds; wait_for_model can keep a request open while a cold model loads
    request_timeout: float = field(default_factory=lambda: float(os.getenv("REVIEW_APP_TIMEOUT", "60")))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("REVIEW_APP_LOG_LEVEL", "INFO"))

    # Server
    host: str = field(default_factory=lambda: os.getenv("REVIEW_APP_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("REVIEW_APP_PORT", "8001")))

    @property
    def variant(self) -> Variant:
        return get_variant(self.variant_name)
