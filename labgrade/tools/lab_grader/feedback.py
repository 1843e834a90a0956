"""Feedback text, strengths and improvement suggestions for lab submissions."""

from typing import List, Sequence

SHORT_SUBMISSION_FEEDBACK = 'Your submission is too short. Please provide a more detailed answer.'
SHORT_SUBMISSION_IMPROVEMENTS = ('Provide more detail', 'Explain your reasoning')

# (minimum score, message), checked from the top
FEEDBACK_BANDS = (
    (90, 'Excellent work! Your submission demonstrates a strong understanding of the concept '
         'and includes all key elements. Your explanation is clear, specific, and well-structured.'),
    (80, 'Great job! Your submission shows good understanding and covers most key points. '
         'With minor improvements, this could be perfect.'),
    (70, 'Good effort! Your submission meets the basic requirements. Consider adding more '
         'specific details and examples to strengthen your answer.'),
    (50, 'Your submission shows some understanding but needs improvement. Make sure to address '
         'all key concepts and provide more detailed explanations.'),
)
LOW_SCORE_FEEDBACK = (
    'Your submission needs significant improvement. Please review the lab instructions carefully '
    'and ensure you address all required elements with specific details.'
)

DETAILED_LENGTH = 150
BRIEF_LENGTH = 100
COMPREHENSIVE_WORDS = 50
SHORT_WORDS = 30
MOST_CONCEPTS_RATIO = 0.7

HINT_TIPS = (
    'Address the main question directly',
    'Include specific examples',
    'Explain your reasoning',
    'Use clear and concise language',
    'Demonstrate understanding of the concept',
)


def _mentions_examples(text: str) -> bool:
    return 'example' in text or 'such as' in text


def generate_feedback(score: int, keyword_matches: int, total_keywords: int, text_length: int) -> str:
    """
    Pick the overall feedback message for a score.

    Only the score band decides the message; the keyword and length figures are
    accepted so richer feedback can be added without changing callers.
    """
    for minimum, message in FEEDBACK_BANDS:
        if score >= minimum:
            return message
    return LOW_SCORE_FEEDBACK


def identify_strengths(keyword_matches: int, total_keywords: int, text: str,
                       good_structure: bool) -> List[str]:
    """List what the submission does well, in a fixed order."""
    strengths = []

    if keyword_matches == total_keywords:
        strengths.append('Includes all key concepts')
    elif keyword_matches >= total_keywords * MOST_CONCEPTS_RATIO:
        strengths.append('Covers most important concepts')

    if len(text) > DETAILED_LENGTH:
        strengths.append('Provides detailed explanation')

    if good_structure:
        strengths.append('Well-structured response')

    if _mentions_examples(text):
        strengths.append('Includes examples')

    if len(text.split()) > COMPREHENSIVE_WORDS:
        strengths.append('Comprehensive answer')

    return strengths


def identify_improvements(keyword_matches: int, total_keywords: int, text: str,
                          good_structure: bool) -> List[str]:
    """List suggested improvements, in a fixed order."""
    improvements = []

    if keyword_matches < total_keywords:
        improvements.append(f'Include {total_keywords - keyword_matches} more key concept(s)')

    if len(text) < BRIEF_LENGTH:
        improvements.append('Provide more detailed explanation')

    if not good_structure:
        improvements.append('Organize your answer into clear sentences')

    if not _mentions_examples(text):
        improvements.append('Add specific examples to illustrate your points')

    if len(text.split()) < SHORT_WORDS:
        improvements.append('Expand your answer with more details')

    return improvements


def generate_hint_template(expected_keywords: Sequence[str]) -> str:
    """Build the generic hint shown to learners who ask what a good answer needs."""
    tips = '\n'.join(f'- {tip}' for tip in HINT_TIPS)
    return (
        f"A good answer should include these key concepts: {', '.join(expected_keywords)}.\n"
        f"\n"
        f"Make sure to:\n"
        f"{tips}"
    )
