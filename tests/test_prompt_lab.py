"""Tests for the practice-lab prompt checker."""

import pytest

from labgrade.tools.lab_grader.prompt_lab import evaluate_prompt_attempt

DETAILED_PROMPT = "Write a friendly social media post announcing the opening of a new coffee shop downtown."


@pytest.mark.parametrize("user_prompt,expected_output,actual_output,score", [
    ("Hi there", "coffee", "coffee", 30),
    ("Write a post about coffee", "coffee", "coffee", 60),
    (DETAILED_PROMPT, "Grand opening coffee", "Come try our COFFEE today!", 90),
    (DETAILED_PROMPT, "Grand opening", "Nothing relevant here", 70),
])
def test_prompt_scores(user_prompt, expected_output, actual_output, score):
    result = evaluate_prompt_attempt(user_prompt, expected_output, actual_output)
    assert result.score == score
    assert result.passed == (score >= 70)


def test_short_prompt_feedback():
    result = evaluate_prompt_attempt("Hi", "", "")
    assert result.passed is False
    assert "too short" in result.feedback


def test_empty_expected_output_matches_any_output():
    result = evaluate_prompt_attempt(DETAILED_PROMPT, "", "anything at all")
    assert result.score == 90
    assert result.passed is True


def test_double_space_in_expected_output_matches_any_output():
    result = evaluate_prompt_attempt(DETAILED_PROMPT, "grand  opening", "Nothing relevant here")
    assert result.score == 90
