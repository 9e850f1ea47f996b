"""
Local keyword matcher over the curated knowledge base.

Every entry is scored against the normalized utterance and the best one wins.
Scoring per keyword, first tier that fires:

    exact phrase          -> 100 (ends the whole scan for that entry)
    whole-word substring  -> 20 + len(keyword)
    plain substring       -> 10 + len(keyword)
    all tokens present    -> 5 + len(keyword)   (multi-word keywords only)

An entry scores the maximum over its keywords. Longer phrases win within a
tier because they are more specific.
"""

import random
import re
from typing import Optional, Sequence

from aarya.models.schemas import KnowledgeEntry

EXACT_MATCH_SCORE = 100
WORD_BOUNDARY_BASE = 20
SUBSTRING_BASE = 10
TOKEN_SET_BASE = 5

_NON_WORD = re.compile(r"[^a-z0-9_\s]")
_SPACES = re.compile(r"\s+")

DEFAULT_RESPONSES = [
    "I'm not sure I understand. Can you teach me about that by adding it to my knowledge base?",
    "That's outside my current knowledge. Try adding it to my database!",
    "I don't have a record for that yet. Please rephrase or update my training.",
    "My database doesn't contain a match for that query.",
]


def normalize(text: str) -> str:
    """Lowercase, turn punctuation into spaces, collapse whitespace, trim."""
    lowered = _NON_WORD.sub(" ", text.lower())
    return _SPACES.sub(" ", lowered).strip()


def _wb(key: str) -> re.Pattern:
    """Compile a whole-word regex pattern for an already-normalized keyword."""
    return re.compile(r"\b" + re.escape(key) + r"\b")


def score_keywords(normalized_input: str, keywords: Sequence[str]) -> int:
    max_score = 0
    input_tokens = None

    for keyword in keywords:
        norm_keyword = normalize(keyword)
        if not norm_keyword:
            continue

        if normalized_input == norm_keyword:
            return EXACT_MATCH_SCORE

        if _wb(norm_keyword).search(normalized_input):
            score = WORD_BOUNDARY_BASE + len(norm_keyword)
        elif norm_keyword in normalized_input:
            score = SUBSTRING_BASE + len(norm_keyword)
        else:
            keyword_tokens = norm_keyword.split(" ")
            if len(keyword_tokens) < 2:
                continue
            if input_tokens is None:
                input_tokens = set(normalized_input.split(" "))
            if not all(token in input_tokens for token in keyword_tokens):
                continue
            score = TOKEN_SET_BASE + len(norm_keyword)

        max_score = max(max_score, score)

    return max_score


def find_best_response(user_input: str, entries: Sequence[KnowledgeEntry]) -> Optional[str]:
    """
    Return the response of the best-scoring entry, or None when nothing scores.

    Ties go to the entry that comes first in `entries`, so callers should pass
    a stably ordered snapshot.
    """
    normalized_input = normalize(user_input)
    if not normalized_input:
        return None

    best_score = 0
    best_response: Optional[str] = None
    for entry in entries:
        score = score_keywords(normalized_input, entry.keywords)
        if score > best_score:
            best_score = score
            best_response = entry.response

    return best_response if best_score > 0 else None


def random_default_response() -> str:
    return random.choice(DEFAULT_RESPONSES)
