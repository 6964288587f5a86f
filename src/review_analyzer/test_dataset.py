import asyncio

import httpx
import pytest

from review_analyzer.conftest import REVIEWS, REVIEWS_TSV
from review_analyzer.dataset import load_reviews, parse_reviews
from review_analyzer.errors import EmptyDatasetError, LoadError, ParseError


def test_parse_drops_blank_rows_and_trims():
    assert parse_reviews(REVIEWS_TSV) == REVIEWS


@pytest.mark.parametrize(
    "texts",
    [
        ["only one"],
        ["a", "", "b", "   ", "c"],
        ["", "", "last one standing"],
        [f"review number {i}" if i % 3 else " " for i in range(1, 40)],
    ],
)
def test_review_count_matches_non_blank_rows(texts):
    tsv = "id\ttext\n" + "".join(f"{i}\t{t}\n" for i, t in enumerate(texts))
    expected = [t.strip() for t in texts if t.strip()]
    assert parse_reviews(tsv) == expected


def test_single_column_file_skips_empty_lines():
    assert parse_reviews("text\nhello\n\nworld\n") == ["hello", "world"]


def test_other_columns_are_ignored():
    tsv = "text\tlabel\tsource\nLoved it\t1\tweb\nHated it\t0\tapp\n"
    assert parse_reviews(tsv) == ["Loved it", "Hated it"]


@pytest.mark.parametrize(
    "tsv",
    [
        "",
        "id\ttext\n",
        "id\ttext\n1\t \n2\t\n",
        "id\treview\n1\tno text column here\n",
    ],
)
def test_empty_dataset(tsv):
    with pytest.raises(EmptyDatasetError) as exc:
        parse_reviews(tsv)
    assert exc.value.message == "No valid reviews found in the TSV file"


def test_parse_error_on_ragged_row():
    tsv = "id\ttext\n1\tfine\n2\ttoo\tmany\tfields\n"
    with pytest.raises(ParseError) as exc:
        parse_reviews(tsv)
    assert exc.value.message.startswith("Error parsing TSV file:")


def test_load_from_file(reviews_file):
    assert asyncio.run(load_reviews(str(reviews_file))) == REVIEWS


def test_load_missing_file(tmp_path):
    with pytest.raises(LoadError) as exc:
        asyncio.run(load_reviews(str(tmp_path / "nope.tsv")))
    assert "Could not load reviews file" in exc.value.message


def test_load_from_url():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text=REVIEWS_TSV))
    reviews = asyncio.run(load_reviews("https://data.test/reviews_test.tsv", transport=transport))
    assert reviews == REVIEWS


def test_load_from_url_not_found():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with pytest.raises(LoadError) as exc:
        asyncio.run(load_reviews("https://data.test/reviews_test.tsv", transport=transport))
    assert exc.value.message == "Could not load reviews file: Not Found"
