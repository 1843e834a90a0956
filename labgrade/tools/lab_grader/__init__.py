"""Rule-based grading of free-text lab submissions."""

from .evaluator import evaluate, evaluate_rubric, evaluate_via_external_service, generate_hint_template
from .grader import LabGrader
from .rubric_parser import RubricParser
from .models import EvaluationResult, PromptLabResult, Rubric, ScoreBreakdown
from .batch_grader import BatchGrader, BatchGradingResult
from .prompt_lab import evaluate_prompt_attempt

__all__ = [
    'evaluate',
    'evaluate_rubric',
    'evaluate_via_external_service',
    'generate_hint_template',
    'LabGrader',
    'RubricParser',
    'EvaluationResult',
    'PromptLabResult',
    'Rubric',
    'ScoreBreakdown',
    'BatchGrader',
    'BatchGradingResult',
    'evaluate_prompt_attempt',
]
