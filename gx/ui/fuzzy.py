"""
Fuzzy matching utilities for pickers and list filtering.
"""

import sys
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

# Beats every fuzzy score; scores are "lower is better"
EXACT_MATCH_SCORE = -sys.maxsize


def fuzzy_match(pattern: str, text: str) -> tuple[bool, int]:
    """
    Check if pattern fuzzy-matches text.

    Returns (matched, score) where score is lower for better matches.
    Score considers:
    - Position of first match (earlier is better)
    - Gaps between matched characters (fewer gaps is better)
    - Consecutive matches (bonus)
    - Word boundary matches (bonus)
    """
    pattern = pattern.lower()
    text_lower = text.lower()

    if not pattern:
        return True, 0

    # Exact substring match gets best score
    if pattern in text_lower:
        return True, text_lower.index(pattern)

    # Fuzzy match: all pattern chars must appear in order
    pattern_idx = 0
    text_idx = 0
    score = 0
    last_match_idx = -1
    first_match_idx = -1

    while pattern_idx < len(pattern) and text_idx < len(text_lower):
        if pattern[pattern_idx] == text_lower[text_idx]:
            if first_match_idx == -1:
                first_match_idx = text_idx

            # Bonus for consecutive matches
            if last_match_idx == text_idx - 1:
                score -= 5  # Consecutive bonus
            else:
                # Penalty for gaps
                if last_match_idx >= 0:
                    score += (text_idx - last_match_idx - 1) * 2

            last_match_idx = text_idx
            pattern_idx += 1
        text_idx += 1

    if pattern_idx < len(pattern):
        # Not all pattern characters matched
        return False, 999999

    # Add penalty for late first match
    score += first_match_idx * 2

    # Bonus for matching at word boundaries (after a branch separator)
    if first_match_idx == 0 or (first_match_idx > 0 and text_lower[first_match_idx - 1] in "/_-"):
        score -= 10

    # Bonus for shorter text (prefer exact-ish matches)
    score += len(text) // 10

    return True, score


def match_score(query: str, candidate: str) -> int | None:
    """Score a candidate against a query, or None if it does not match at all"""
    if candidate.lower() == query.lower():
        return EXACT_MATCH_SCORE
    matched, score = fuzzy_match(query, candidate)
    return score if matched else None


def rank(query: str, candidates: Iterable[T], key: Callable[[T], str] = str) -> list[T]:
    """
    Return the matching candidates, best first.

    Equal scores keep their input order. An empty query matches everything
    in input order.
    """
    scored: list[tuple[int, T]] = []
    for candidate in candidates:
        score = match_score(query, key(candidate))
        if score is not None:
            scored.append((score, candidate))
    scored.sort(key=lambda x: x[0])
    return [candidate for _score, candidate in scored]


def filter_matches(query: str, candidates: Iterable[T], key: Callable[[T], str] = str) -> list[T]:
    """Return the matching candidates in input order"""
    return [c for c in candidates if match_score(query, key(c)) is not None]


def best_match(query: str, candidates: Iterable[str]) -> str | None:
    """Pick the single best candidate for a typed query"""
    if not query:
        return None
    ranked = rank(query, candidates)
    return ranked[0] if ranked else None
