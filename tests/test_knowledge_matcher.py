"""Tests for normalization, keyword scoring and local matching."""

from __future__ import annotations

import re

import pytest

from aarya.models.schemas import KnowledgeEntry
from aarya.services.knowledge_matcher import (
    DEFAULT_RESPONSES,
    find_best_response,
    normalize,
    random_default_response,
    score_keywords,
)


def _entry(topic, keywords, response, **kw):
    return KnowledgeEntry(topic=topic, keywords=keywords, response=response, **kw)


class TestNormalize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Hi there!", "hi there"),
            ("  What's   the PRICING?? ", "what s the pricing"),
            ("snake_case stays", "snake_case stays"),
            ("tabs\tand\nnewlines", "tabs and newlines"),
            ("", ""),
            ("?!...", ""),
            ("नमस्ते", ""),
        ],
    )
    def test_examples(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["Hello, World!", "  a  --  b  ", "Ünïcödé façade", "x　y", "123-456_789", "Ça va? नमस्ते 😀"],
    )
    def test_alphabet_and_idempotence(self, raw):
        once = normalize(raw)
        assert re.fullmatch(r"[a-z0-9_ ]*", once)
        assert "  " not in once
        assert once == once.strip()
        assert normalize(once) == once


class TestScoreKeywords:
    def test_exact_match_short_circuits(self):
        assert score_keywords("pricing", ["pricing"]) == 100
        assert score_keywords("pricing", ["a much longer pricing phrase", "pricing", "pric"]) == 100

    def test_exact_match_ignores_keyword_punctuation(self):
        assert score_keywords("what can you do", ["What can you do?"]) == 100

    def test_word_boundary_match(self):
        assert score_keywords("hi there", ["hi"]) == 22

    def test_no_word_boundary_inside_longer_word(self):
        # "hi" inside "hike" is only a plain substring hit, never 20 + len
        assert score_keywords("hike up the hill", ["hi"]) == 12

    def test_plain_substring(self):
        assert score_keywords("subscriptions please", ["subscription"]) == 10 + len("subscription")

    def test_token_set_for_multi_word_keyword(self):
        score = score_keywords("what is the subscription price", ["price subscription"])
        assert score == 5 + len("price subscription")

    def test_token_set_requires_every_token(self):
        assert score_keywords("what is the price", ["price subscription"]) == 0

    def test_single_word_keyword_has_no_token_tier(self):
        assert score_keywords("what is the price", ["refund"]) == 0

    def test_maximum_not_sum(self):
        # "hello" -> 25, "hi" -> 22
        assert score_keywords("hi hello friend", ["hi", "hello"]) == 25

    def test_longer_phrase_wins_within_tier(self):
        short = score_keywords("what can you do for me", ["do"])
        long = score_keywords("what can you do for me", ["what can you do"])
        assert long > short

    def test_empty_keywords_are_skipped(self):
        assert score_keywords("hello", ["", "   ", "!!"]) == 0
        assert score_keywords("hello", []) == 0


class TestFindBestResponse:
    def test_welcome_scenario(self, welcome_kb):
        assert find_best_response("Hi there!", welcome_kb) == "Hello! I am Aarya AI."

    def test_no_match(self, welcome_kb):
        assert find_best_response("what is your refund policy", welcome_kb) is None

    @pytest.mark.parametrize("query", ["", "   ", "?!?", "नमस्ते"])
    def test_empty_normalized_input(self, welcome_kb, query):
        assert find_best_response(query, welcome_kb) is None

    def test_empty_knowledge_base(self):
        assert find_best_response("hello", []) is None

    def test_highest_score_wins(self):
        kb = [
            _entry("Generic", ["price"], "generic"),
            _entry("Specific", ["subscription price"], "specific"),
        ]
        assert find_best_response("what is the subscription price", kb) == "specific"

    def test_tie_keeps_first_entry(self):
        kb = [
            _entry("A", ["refund"], "first"),
            _entry("B", ["refund"], "second"),
        ]
        for _ in range(5):
            assert find_best_response("refund please", kb) == "first"
        assert find_best_response("refund please", list(reversed(kb))) == "second"

    def test_match_count_is_not_touched(self):
        entry = _entry("Welcome", ["hello"], "hey", match_count=3)
        find_best_response("hello", [entry])
        assert entry.match_count == 3

    def test_accepts_any_sequence(self, welcome_kb):
        assert find_best_response("hello", tuple(welcome_kb)) == "Hello! I am Aarya AI."


def test_random_default_response_is_from_fixed_set():
    seen = {random_default_response() for _ in range(50)}
    assert seen <= set(DEFAULT_RESPONSES)
    assert len(DEFAULT_RESPONSES) == 4
