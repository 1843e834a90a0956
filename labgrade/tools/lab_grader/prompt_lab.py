"""Quick checks for practice-lab prompt attempts.

A practice lab asks the learner to write a prompt, runs it, and compares the
output with what the lab expected. The check is deliberately coarse: prompt
length decides most of the score and a word overlap between expected and
actual output decides the rest.
"""

import logging

from .models import PromptLabResult

LOG = logging.getLogger(__name__)

PROMPT_PASSING_SCORE = 70

_TOO_SHORT = 10
_BRIEF = 50


def _outputs_overlap(expected_output: str, actual_output: str) -> bool:
    # Split on single spaces: an empty expected output, or a double space,
    # yields an empty word, which matches any output
    actual = actual_output.lower()
    return any(word in actual for word in expected_output.lower().split(' '))


def evaluate_prompt_attempt(user_prompt: str, expected_output: str, actual_output: str) -> PromptLabResult:
    """
    Score a practice-lab prompt.

    Args:
        user_prompt: The prompt the learner wrote
        expected_output: Reference output for the lab
        actual_output: Output the learner's prompt produced

    Returns:
        PromptLabResult; passes at 70 or above
    """
    prompt_length = len(user_prompt)

    if prompt_length < _TOO_SHORT:
        score, feedback = 30, 'Your prompt is too short. Try to be more descriptive.'
    elif prompt_length < _BRIEF:
        score, feedback = 60, 'Good start! Try adding more context and specific instructions.'
    elif _outputs_overlap(expected_output, actual_output):
        score, feedback = 90, 'Excellent! Your prompt produced relevant output.'
    else:
        score, feedback = 70, 'Good effort! Your prompt is detailed but could be more specific.'

    LOG.debug("Prompt attempt scored %d (prompt length %d)", score, prompt_length)
    return PromptLabResult(score=score, passed=score >= PROMPT_PASSING_SCORE, feedback=feedback)
