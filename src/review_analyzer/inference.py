"""Client for the hosted inference API.

One POST per action, no retries. The request shape is::

    POST {base_url}/{model}
    Content-Type: application/json
    Authorization: Bearer <token>            (only if a token was given)

    {"inputs": "<review>", "options": {"wait_for_model": true}}

``options`` is only sent by variants that wait for cold models.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .errors import (
    ApiError,
    InferenceUnavailableError,
    MalformedResponseError,
    ModelLoadingError,
    RateLimitedError,
)
from .metrics import Metrics
from .schemas import PosToken, SentimentResult
from .variants import Variant

logger = logging.getLogger(__name__)

SENTIMENT_FORMAT_ERROR = "Invalid response format from Sentiment API."
POS_FORMAT_ERROR = "Invalid response format from POS Tagging API."


def error_detail(response: httpx.Response) -> str:
    """Best-effort message from an error response.

    Uses the ``error`` field of a JSON body, else the HTTP reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        err = body["error"]
        if isinstance(err, list):
            return "; ".join(str(x) for x in err)
        return str(err)
    return response.reason_phrase or "Unknown API error"


class InferenceClient:
    def __init__(
        self,
        base_url: str,
        variant: Variant,
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.variant = variant
        self.timeout = timeout
        self.transport = transport
        self.metrics = metrics or Metrics()

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{model.strip('/')}"

    def build_request(self, model: str, text: str, token: Optional[str] = None) -> httpx.Request:
        headers = {"Content-Type": "application/json"}
        token = (token or "").strip()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        payload: Dict[str, Any] = {"inputs": text}
        if self.variant.wait_for_model:
            payload["options"] = {"wait_for_model": True}

        return httpx.Request("POST", self.endpoint(model), headers=headers, json=payload)

    def raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        status = response.status_code
        detail = error_detail(response)

        if self.variant.friendly_errors:
            if status == 503:
                raise ModelLoadingError(
                    status,
                    "The model is still loading on the inference API (HTTP 503). "
                    "Please try again in a few seconds.",
                    detail,
                )
            if status == 429:
                raise RateLimitedError(
                    status,
                    "Rate limit reached on the inference API (HTTP 429). "
                    "Wait a moment before trying again, or provide an API token.",
                    detail,
                )
        raise ApiError(status, f"API Error ({status}): {detail}", detail)

    async def query(self, model: str, text: str, token: Optional[str] = None) -> Any:
        """Send ``text`` to ``model`` and return the decoded JSON body."""
        request = self.build_request(model, text, token)
        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.send(request)
        except httpx.TimeoutException as e:
            self._record(model, False, t0)
            logger.warning("Inference call to %s timed out", model)
            raise InferenceUnavailableError(
                f"Timed out after {self.timeout}s waiting for the inference API."
            ) from e
        except httpx.RequestError as e:
            self._record(model, False, t0)
            logger.warning("Inference call to %s failed: %s", model, type(e).__name__)
            raise InferenceUnavailableError(
                f"Could not reach the inference API. Details: {type(e).__name__}: {e}"
            ) from e

        latency_ms = self._record(model, r.is_success, t0)
        logger.info("POST %s -> %d (%.1f ms)", model, r.status_code, latency_ms)
        self.raise_for_status(r)

        try:
            return r.json()
        except ValueError as e:
            raise MalformedResponseError("Inference API returned a response that is not JSON.") from e

    async def classify_sentiment(self, model: str, text: str, token: Optional[str] = None) -> SentimentResult:
        data = await self.query(model, text, token)
        if not (isinstance(data, list) and data and isinstance(data[0], list) and data[0]):
            raise MalformedResponseError(SENTIMENT_FORMAT_ERROR)
        try:
            return SentimentResult.model_validate(data[0][0])
        except ValidationError as e:
            raise MalformedResponseError(SENTIMENT_FORMAT_ERROR) from e

    async def tag_parts_of_speech(self, model: str, text: str, token: Optional[str] = None) -> List[PosToken]:
        data = await self.query(model, text, token)
        if not isinstance(data, list):
            raise MalformedResponseError(POS_FORMAT_ERROR)
        # Some deployments wrap single inputs in a batch list
        if data and isinstance(data[0], list):
            data = data[0]
        try:
            return [PosToken.model_validate(item) for item in data]
        except ValidationError as e:
            raise MalformedResponseError(POS_FORMAT_ERROR) from e

    def _record(self, model: str, ok: bool, t0: float) -> float:
        latency_ms = (time.perf_counter() - t0) * 1000.0
        self.metrics.record(model, ok=ok, latency_ms=latency_ms)
        return latency_ms
