"""
Pytest fixtures. The inference API and remote datasets are faked with
httpx.MockTransport; the app runs under FastAPI's TestClient.
"""

from __future__ import annotations

import json
import random

import httpx
import pytest

API_BASE = "https://api.test/models"
SENTIMENT_MODEL = "siebert/sentiment-roberta-large-english"
POS_MODEL = "vblagoje/bert-english-uncased-finetuned-pos"

REVIEWS_TSV = (
    "id\ttext\n"
    "1\tThe battery lasts all day.\n"
    "2\t   \n"
    "3\tScreen cracked after a week.\n"
    "4\t\n"
    "5\t  Shipping was fast and the box was intact.  \n"
)
REVIEWS = [
    "The battery lasts all day.",
    "Screen cracked after a week.",
    "Shipping was fast and the box was intact.",
]


class FakeInferenceApi:
    """Routes requests by model and records what was sent."""

    def __init__(self):
        self.requests = []
        self.responses = {
            SENTIMENT_MODEL: (200, {"json": [[{"label": "POSITIVE", "score": 0.93}, {"label": "NEGATIVE", "score": 0.07}]]}),
            POS_MODEL: (
                200,
                {"json": [[{"entity_group": "NOUN"}, {"entity_group": "VERB"}, {"entity_group": "NOUN"}]]},
            ),
        }

    def respond(self, model, status_code, **kwargs):
        self.responses[model] = (status_code, kwargs)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        model = request.url.path.split("/models/", 1)[1]
        status_code, kwargs = self.responses[model]
        return httpx.Response(status_code, **kwargs)

    def last_body(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_api():
    return FakeInferenceApi()


@pytest.fixture
def reviews_file(tmp_path):
    path = tmp_path / "reviews_test.tsv"
    path.write_text(REVIEWS_TSV, encoding="utf-8")
    return path


@pytest.fixture
def make_client(reviews_file, fake_api):
    """Factory for a started TestClient; pass Settings overrides as kwargs."""
    from fastapi.testclient import TestClient

    from review_analyzer.app import create_app
    from review_analyzer.config import Settings

    clients = []

    def _make(**overrides):
        values = {"dataset_source": str(reviews_file), "api_base_url": API_BASE}
        values.update(overrides)
        app = create_app(Settings(**values), transport=httpx.MockTransport(fake_api), rng=random.Random(7))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.__exit__(None, None, None)
