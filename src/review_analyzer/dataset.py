"""Load the review dataset.

The dataset is a tab-separated file with a header row that includes a
``text`` column. Other columns are ignored. The source may be a local path or
an http(s) URL.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional

import httpx
import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from .errors import EmptyDatasetError, LoadError, ParseError

logger = logging.getLogger(__name__)

TEXT_COLUMN = "text"


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch_dataset(source: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    """Return the raw TSV text behind ``source``."""
    if is_remote(source):
        try:
            async with httpx.AsyncClient(transport=transport) as client:
                r = await client.get(source)
        except httpx.RequestError as e:
            raise LoadError(f"Could not load reviews file: {type(e).__name__}: {e}") from e
        if not r.is_success:
            raise LoadError(f"Could not load reviews file: {r.reason_phrase or r.status_code}")
        return r.text

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not load reviews file: {path} ({e.__class__.__name__})") from e


def parse_reviews(tsv_text: str) -> List[str]:
    """Parse TSV text into trimmed, non-blank reviews.

    Examples
    --------
    >>> parse_reviews("id\\ttext\\n1\\t  Great phone \\n2\\t \\n")
    ['Great phone']
    """
    try:
        df = pd.read_csv(
            io.StringIO(tsv_text),
            sep="\t",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except EmptyDataError:
        raise EmptyDatasetError("No valid reviews found in the TSV file") from None
    except ParserError as e:
        raise ParseError(f"Error parsing TSV file: {e}") from e

    if TEXT_COLUMN not in df.columns:
        raise EmptyDatasetError("No valid reviews found in the TSV file")

    texts = df[TEXT_COLUMN].fillna("").astype(str).str.strip()
    reviews = texts[texts != ""].tolist()
    if not reviews:
        raise EmptyDatasetError("No valid reviews found in the TSV file")
    return reviews


async def load_reviews(source: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> List[str]:
    tsv_text = await fetch_dataset(source, transport=transport)
    reviews = parse_reviews(tsv_text)
    logger.info("Loaded %d reviews from %s", len(reviews), source)
    return reviews
