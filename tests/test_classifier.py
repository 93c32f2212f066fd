"""Tests for the keyword-bucket business category classifier."""
import pytest

from quote_autopilot.core.models import (
    CATEGORY_CONSTRUCTION,
    CATEGORY_DESIGN,
    CATEGORY_IT,
    CATEGORY_MARKETING,
    CATEGORY_OTHER,
)
from quote_autopilot.processing.classifier import classify


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Webアプリケーション開発一式", CATEGORY_IT),
        ("ロゴデザイン制作", CATEGORY_DESIGN),
        ("リフォーム工事", CATEGORY_CONSTRUCTION),
        ("IT支援サービス", CATEGORY_OTHER),
    ],
)
def test_classify_picks_matching_category(text, expected):
    assert classify(text) == expected


def test_first_category_in_order_wins():
    """Text touching several buckets resolves to the earliest one."""

    assert classify("システム開発とデザイン") == CATEGORY_IT


def test_services_are_considered():
    assert classify("", ["広告運用"]) == CATEGORY_MARKETING


@pytest.mark.parametrize("text", ["UI改修", "SEO", "DX推進", "it support", "community unit"])
def test_upper_case_keywords_never_match(text):
    """Upper-case entries are compared as written against lower-cased text."""

    assert classify(text) == CATEGORY_OTHER


def test_matching_ignores_case_of_the_text():
    assert classify("Custom PYTHON tooling") == CATEGORY_IT


def test_empty_input_is_other():
    assert classify("") == CATEGORY_OTHER
    assert classify(None, None) == CATEGORY_OTHER
