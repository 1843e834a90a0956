"""
Sub-score calculations for lab submissions.

A submission's score out of 100 is the sum of four weighted parts:

    keyword coverage   40  share of expected keywords present
    length             20  linear up to 100 characters
    structure          20  20 if split into several sentences, else 10
    specificity        20  example phrases, digits and quotes

All functions expect text that has already gone through normalize_submission().
"""

import math
import re
from typing import Optional, Sequence

from .models import ScoreBreakdown

KEYWORD_WEIGHT = 40
LENGTH_WEIGHT = 20
STRUCTURE_WEIGHT = 20
SPECIFICITY_WEIGHT = 20

# Characters at which the length score saturates
FULL_LENGTH = 100

# Awarded when the answer reads as a single block
UNSTRUCTURED_SCORE = 10

SPECIFIC_INDICATORS = (
    'for example',
    'such as',
    'specifically',
    'in particular',
    'namely',
    'like',
    'including',
)
INDICATOR_POINTS = 3
DIGIT_POINTS = 3
QUOTE_POINTS = 2

_SENTENCE_DELIMITERS = re.compile(r'[.!?]')
_DIGIT = re.compile(r'[0-9]')


def normalize_submission(submission: str) -> str:
    """Lower-case and trim a submission."""
    return submission.lower().strip()


def count_keyword_matches(text: str, expected_keywords: Sequence[str]) -> int:
    """Count keywords that appear as literal substrings of the text."""
    return sum(1 for keyword in expected_keywords if keyword.lower() in text)


def keyword_score(keyword_matches: int, total_keywords: int) -> float:
    """Keyword coverage, or 0 when the rubric lists no keywords."""
    if total_keywords == 0:
        return 0.0
    return keyword_matches / total_keywords * KEYWORD_WEIGHT


def length_score(text_length: int) -> float:
    return min(text_length / FULL_LENGTH * LENGTH_WEIGHT, LENGTH_WEIGHT)


def has_good_structure(text: str) -> bool:
    """True when the text splits into more than two pieces on . ! or ?"""
    return len(_SENTENCE_DELIMITERS.split(text)) > 2


def structure_score(good_structure: bool) -> float:
    return float(STRUCTURE_WEIGHT if good_structure else UNSTRUCTURED_SCORE)


def specificity_score(text: str) -> float:
    """Points for concrete detail: example phrases, numbers and quotations."""
    score = sum(INDICATOR_POINTS for indicator in SPECIFIC_INDICATORS if indicator in text)

    if _DIGIT.search(text):
        score += DIGIT_POINTS

    if '"' in text or "'" in text:
        score += QUOTE_POINTS

    return float(min(score, SPECIFICITY_WEIGHT))


def score_breakdown(text: str, expected_keywords: Sequence[str],
                    keyword_matches: Optional[int] = None) -> ScoreBreakdown:
    """
    Compute all four sub-scores for normalized text.

    Pass keyword_matches when the caller has already counted them.
    """
    if keyword_matches is None:
        keyword_matches = count_keyword_matches(text, expected_keywords)
    return ScoreBreakdown(
        keyword=keyword_score(keyword_matches, len(expected_keywords)),
        length=length_score(len(text)),
        structure=structure_score(has_good_structure(text)),
        specificity=specificity_score(text),
    )


def round_score(value: float) -> int:
    """Round half up and clamp to 0..100."""
    return max(0, min(100, int(math.floor(value + 0.5))))
