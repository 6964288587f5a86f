"""
Review Analyzer (FastAPI)

A small web app that loads a tab-separated review dataset, lets the user pick a
random review, and asks the Hugging Face hosted inference API to either
classify its sentiment or tag its parts of speech (to count nouns).

The backend owns the outbound calls:
- POST {api_base_url}/{sentiment_model} for sentiment
- POST {api_base_url}/{pos_model} for POS tagging
- Input JSON: {"inputs": "<review>", "options": {"wait_for_model": true}}

The page:
- Takes an optional API token (kept in the page, sent with each analysis).
- Disables every button while a request is running.
- Shows plain-text errors; the page stays usable after any failure.

Run the application:
- uvicorn review_analyzer.app:app --reload --port 8001
- or: python -m review_analyzer
"""

from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse

from .config import Settings
from .dataset import load_reviews
from .errors import BusyError, DatasetError, ReviewAppError
from .inference import InferenceClient
from .metrics import Metrics
from .render import render_noun_count, render_sentiment
from .schemas import AnalyzeRequest
from .selector import ReviewSelector
from .state import PageState

logger = logging.getLogger(__name__)


def error_response(page: PageState, e: ReviewAppError) -> JSONResponse:
    # A rejected overlapping click must not clobber the running action's panels
    if not isinstance(e, BusyError):
        logger.warning("%s: %s", type(e).__name__, e.message)
        page.show_error(e.message)
    return JSONResponse(status_code=e.status_code, content={"detail": e.message})


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """Build the app.

    Parameters
    ----------
    settings : Settings, optional
        Defaults to ``Settings()``, i.e. environment variables.
    transport : httpx.AsyncBaseTransport, optional
        Used for the dataset fetch and the inference calls; tests pass an
        ``httpx.MockTransport``.
    rng : random.Random, optional
        Source for review selection.
    """
    settings = settings or Settings()
    variant = settings.variant
    metrics = Metrics()
    page = PageState(selector=ReviewSelector(rng=rng))
    client = InferenceClient(
        settings.api_base_url,
        variant,
        timeout=settings.request_timeout,
        transport=transport,
        metrics=metrics,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            reviews = await load_reviews(settings.dataset_source, transport=transport)
        except DatasetError as e:
            logger.error("Dataset load failed: %s", e.message)
            page.mark_load_failed(e.message)
        else:
            page.mark_loaded(reviews)
        yield

    app = FastAPI(title="Review Analyzer", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.page = page
    app.state.metrics = metrics

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return INDEX_HTML.replace("__VARIANT__", variant.name)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "variant": variant.name, "load_status": page.load_status}

    @app.get("/api/state")
    async def api_state() -> JSONResponse:
        return JSONResponse(content=page.snapshot())

    @app.post("/api/reviews/random")
    async def api_random_review() -> JSONResponse:
        """Pick a new review and reset the result panels."""
        try:
            review = page.select_review()
        except ReviewAppError as e:
            return error_response(page, e)
        return JSONResponse(content={"review": review})

    @app.post("/api/sentiment")
    async def api_sentiment(req: AnalyzeRequest) -> JSONResponse:
        try:
            review = page.require_review()
            with page.busy():
                result = await client.classify_sentiment(settings.sentiment_model, review, req.api_token)
        except ReviewAppError as e:
            return error_response(page, e)

        view = render_sentiment(result, variant).to_dict()
        page.show_result("sentiment", view)
        return JSONResponse(content=view)

    @app.post("/api/nouns")
    async def api_nouns(req: AnalyzeRequest) -> JSONResponse:
        try:
            review = page.require_review()
            with page.busy():
                tokens = await client.tag_parts_of_speech(settings.pos_model, review, req.api_token)
        except ReviewAppError as e:
            return error_response(page, e)

        view = render_noun_count(tokens).to_dict()
        page.show_result("nouns", view)
        return JSONResponse(content=view)

    @app.get("/api/metrics")
    async def api_metrics() -> JSONResponse:
        """Return a snapshot of in-memory metrics."""
        return JSONResponse(content=metrics.snapshot())

    return app


INDEX_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Review Analyzer</title>
  <style>
    :root {
      --accent: #2b6cb0;
      --bg: #ffffff;
      --fg: #111111;
      --muted: #666666;
      --card: #f6f6f6;
      --border: #dddddd;
    }
    body {
      margin: 0;
      font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif;
      color: var(--fg);
      background: var(--bg);
    }
    header {
      background: var(--accent);
      color: white;
      padding: 14px 18px;
    }
    header h1 { font-size: 18px; margin: 0; font-weight: 700; }
    header p { margin: 6px 0 0 0; font-size: 13px; opacity: 0.9; }
    main {
      max-width: 800px;
      margin: 18px auto;
      padding: 0 14px 30px 14px;
    }
    .card {
      background: var(--card);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 14px;
      margin-bottom: 14px;
    }
    label {
      display: block;
      font-size: 12px;
      color: var(--muted);
      margin-bottom: 6px;
    }
    input[type="password"] {
      width: 100%;
      box-sizing: border-box;
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 10px;
      font-size: 14px;
    }
    .buttons { display: flex; flex-wrap: wrap; gap: 10px; margin-top: 10px; }
    button {
      border: 0;
      border-radius: 10px;
      padding: 10px 12px;
      font-weight: 700;
      cursor: pointer;
      background: var(--accent);
      color: white;
    }
    button:disabled { opacity: 0.5; cursor: not-allowed; }
    button.secondary { background: #2b2b2b; }
    .small { font-size: 12px; color: var(--muted); margin-top: 8px; line-height: 1.35; }
    .result {
      margin-top: 12px;
      background: white;
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 10px;
    }
    .review { font-style: italic; white-space: pre-wrap; }
    .icon { font-size: 28px; margin-right: 10px; vertical-align: middle; }
    .pill {
      display: inline-block;
      padding: 4px 10px;
      border-radius: 999px;
      font-size: 12px;
      font-weight: 700;
      border: 1px solid var(--border);
      background: #fff;
      margin-right: 8px;
    }
    .error {
      border: 1px solid rgba(153,0,0,0.35);
      background: rgba(153,0,0,0.06);
      color: #4a0000;
      padding: 10px;
      border-radius: 12px;
      margin-top: 10px;
    }
  </style>
</head>
<body>
  <header>
    <h1>Review Analyzer</h1>
    <p>Pick a random review and analyze it with the hosted inference API (variant: <b>__VARIANT__</b>).</p>
  </header>

  <main>
    <div class="card">
      <label for="apiToken">API token (optional)</label>
      <input id="apiToken" type="password" placeholder="hf_..." autocomplete="off" />
      <div class="small">Sent with each analysis request as a bearer token. Not stored.</div>

      <div class="buttons">
        <button id="selectReviewBtn" disabled>Loading Reviews...</button>
      </div>
    </div>

    <div id="reviewDisplay" class="card" style="display:none;">
      <label>Selected review</label>
      <div id="reviewText" class="review"></div>
      <div id="actionButtons" class="buttons">
        <button id="analyzeBtn">Analyze Sentiment</button>
        <button id="countNounsBtn" class="secondary">Count Nouns</button>
      </div>
    </div>

    <div id="loading" class="small" style="display:none;">Analyzing...</div>
    <div id="error" class="error" style="display:none;"></div>

    <div id="sentimentResultArea" class="result" style="display:none;">
      <span id="sentimentIcon" class="icon"></span>
      <span id="sentimentDetails"></span>
    </div>
    <div id="nounResultArea" class="result" style="display:none;">
      <span id="nounCountDetails"></span>
    </div>

    <div class="card" style="margin-top: 14px;">
      <label>Operational metrics</label>
      <div id="metricsBox" class="small">No requests yet.</div>
    </div>
  </main>

  <script>
    const ids = ["selectReviewBtn", "analyzeBtn", "countNounsBtn"];

    function escapeHtml(s) {
      s = String(s);
      return s.replaceAll("&","&amp;").replaceAll("<","&lt;").replaceAll(">","&gt;").replaceAll('"',"&quot;");
    }

    function setVisible(id, visible) {
      document.getElementById(id).style.display = visible ? "" : "none";
    }

    function showError(msg) {
      const box = document.getElementById("error");
      box.textContent = msg;
      setVisible("error", true);
    }

    function hideError() {
      const box = document.getElementById("error");
      box.textContent = "";
      setVisible("error", false);
    }

    function hideResults() {
      setVisible("sentimentResultArea", false);
      setVisible("nounResultArea", false);
    }

    function setLoadingState(isLoading) {
      setVisible("loading", isLoading);
      ids.forEach(id => { document.getElementById(id).disabled = isLoading; });
      if (isLoading) {
        hideError();
        hideResults();
      }
    }

    async function postJson(url, body) {
      const r = await fetch(url, {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: JSON.stringify(body || {})
      });
      const data = await r.json().catch(() => ({ detail: "Unexpected response from the server." }));
      if (!r.ok) throw new Error(data.detail || "Unknown error.");
      return data;
    }

    async function refreshMetrics() {
      const r = await fetch("/api/metrics");
      const m = await r.json();
      const avg = (m.avg_latency_ms == null) ? "-" : m.avg_latency_ms.toFixed(1);
      document.getElementById("metricsBox").innerHTML = `
        <span class="pill">Total: ${m.total_requests}</span>
        <span class="pill">Success: ${m.success_requests}</span>
        <span class="pill">Failed: ${m.failed_requests}</span>
        <span class="pill">Avg latency: ${avg} ms</span>
      `;
    }

    function token() {
      return document.getElementById("apiToken").value.trim() || null;
    }

    async function selectReview() {
      hideError();
      hideResults();
      try {
        const data = await postJson("/api/reviews/random");
        document.getElementById("reviewText").textContent = data.review;
        setVisible("reviewDisplay", true);
      } catch (e) {
        showError(e.message);
      }
    }

    async function analyzeSentiment() {
      setLoadingState(true);
      try {
        const v = await postJson("/api/sentiment", { api_token: token() });
        document.getElementById("sentimentIcon").innerHTML = `<span style="color:${escapeHtml(v.color)}">${escapeHtml(v.icon)}</span>`;
        document.getElementById("sentimentDetails").innerHTML =
          `<strong>${escapeHtml(v.label)}</strong> with ${escapeHtml(v.confidence)} confidence.`;
        setVisible("sentimentResultArea", true);
      } catch (e) {
        showError(e.message);
      } finally {
        setLoadingState(false);
        refreshMetrics();
      }
    }

    async function countNouns() {
      setLoadingState(true);
      try {
        const v = await postJson("/api/nouns", { api_token: token() });
        document.getElementById("nounCountDetails").textContent = v.summary;
        setVisible("nounResultArea", true);
      } catch (e) {
        showError(e.message);
      } finally {
        setLoadingState(false);
        refreshMetrics();
      }
    }

    async function boot() {
      const r = await fetch("/api/state");
      const s = await r.json();
      const btn = document.getElementById("selectReviewBtn");
      btn.textContent = s.select_label;
      btn.disabled = s.load_status !== "ready";
      if (s.error) showError(s.error);
      refreshMetrics();
    }

    document.getElementById("selectReviewBtn").addEventListener("click", selectReview);
    document.getElementById("analyzeBtn").addEventListener("click", analyzeSentiment);
    document.getElementById("countNounsBtn").addEventListener("click", countNouns);

    boot();
  </script>
</body>
</html>
"""


app = create_app()
