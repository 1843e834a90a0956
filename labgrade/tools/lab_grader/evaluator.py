"""Rule-based evaluation of free-text lab submissions."""

import logging
from typing import Sequence

from .feedback import (
    SHORT_SUBMISSION_FEEDBACK,
    SHORT_SUBMISSION_IMPROVEMENTS,
    generate_feedback,
    generate_hint_template,
    identify_improvements,
    identify_strengths,
)
from .models import DEFAULT_PASSING_SCORE, EvaluationResult, Rubric
from .scoring import (
    count_keyword_matches,
    has_good_structure,
    normalize_submission,
    round_score,
    score_breakdown,
)

LOG = logging.getLogger(__name__)

# Normalized submissions shorter than this score zero without further analysis
MIN_SUBMISSION_LENGTH = 10


def evaluate(submission: str, expected_keywords: Sequence[str],
             passing_score: int = DEFAULT_PASSING_SCORE) -> EvaluationResult:
    """
    Grade a lab submission against its expected keywords.

    Args:
        submission: The learner's answer
        expected_keywords: Concepts the answer should mention (case-insensitive)
        passing_score: Minimum score, inclusive, needed to pass (0-100)

    Returns:
        EvaluationResult with score, feedback, strengths and improvements

    Raises:
        ValueError: If passing_score is outside 0-100
    """
    rubric = Rubric(expected_keywords=list(expected_keywords), passing_score=passing_score)
    return evaluate_rubric(submission, rubric)


def evaluate_rubric(submission: str, rubric: Rubric) -> EvaluationResult:
    """Grade a submission against a Rubric."""
    keywords = rubric.expected_keywords
    total_keywords = len(keywords)
    text = normalize_submission(submission)

    if len(text) < MIN_SUBMISSION_LENGTH:
        LOG.debug("Submission too short to grade (%d chars)", len(text))
        return EvaluationResult(
            score=0,
            passed=False,
            feedback=SHORT_SUBMISSION_FEEDBACK,
            strengths=(),
            improvements=SHORT_SUBMISSION_IMPROVEMENTS,
            keyword_matches=0,
            total_keywords=total_keywords,
        )

    matches = count_keyword_matches(text, keywords)
    good_structure = has_good_structure(text)

    total = round_score(score_breakdown(text, keywords, keyword_matches=matches).total)
    LOG.debug("Scored submission: %d/100 (%d/%d keywords)", total, matches, total_keywords)

    return EvaluationResult(
        score=total,
        passed=total >= rubric.passing_score,
        feedback=generate_feedback(total, matches, total_keywords, len(text)),
        strengths=identify_strengths(matches, total_keywords, text, good_structure),
        improvements=identify_improvements(matches, total_keywords, text, good_structure),
        keyword_matches=matches,
        total_keywords=total_keywords,
    )


def evaluate_via_external_service(submission: str, lab_prompt: str,
                                  expected_keywords: Sequence[str],
                                  passing_score: int = DEFAULT_PASSING_SCORE) -> EvaluationResult:
    """
    Entry point reserved for a model-backed evaluator.

    No external service is wired in, so this grades with the rule-based
    evaluator and makes no network calls.
    """
    LOG.debug("No external evaluator configured; using rule-based evaluation (prompt: %.40r)", lab_prompt)
    return evaluate(submission, expected_keywords, passing_score)


__all__ = [
    'MIN_SUBMISSION_LENGTH',
    'evaluate',
    'evaluate_rubric',
    'evaluate_via_external_service',
    'generate_hint_template',
]
