"""Config-driven grader for lab submissions."""

import logging
from pathlib import Path
from typing import Optional

from labgrade.libs.config_loader import ConfigType, get_config
from .evaluator import evaluate_rubric, generate_hint_template
from .models import DEFAULT_PASSING_SCORE, EvaluationResult, Rubric
from .rubric_parser import RubricParser

LOG = logging.getLogger(__name__)


class LabGrader:
    """Grade lab submissions with the rule-based evaluator."""

    def __init__(self, configs: ConfigType, passing_score: Optional[int] = None):
        """
        Initialize the grader.

        Args:
            configs: Configuration dictionary (required)
            passing_score: Pass threshold for rubrics that don't set one (overrides config value)
        """
        self.configs = configs
        if passing_score is None:
            passing_score = get_config(
                "grading.default_passing_score", configs, default=DEFAULT_PASSING_SCORE
            )
        # Validate through the model so a bad config value fails early
        self.default_passing_score = Rubric(passing_score=passing_score).passing_score

    def resolve_rubric(self, rubric: Rubric) -> Rubric:
        """Apply the default passing score when the rubric didn't set one explicitly."""
        if 'passing_score' in rubric.model_fields_set:
            return rubric
        return rubric.model_copy(update={'passing_score': self.default_passing_score})

    def grade(self, submission: str, rubric: Rubric) -> EvaluationResult:
        """
        Grade a submission synchronously.

        Args:
            submission: The learner's answer
            rubric: Expected keywords and pass threshold

        Returns:
            EvaluationResult with score and feedback
        """
        return evaluate_rubric(submission, self.resolve_rubric(rubric))

    async def grade_async(self, submission: str, rubric: Rubric) -> EvaluationResult:
        """Grade a submission from async code; evaluation itself never blocks."""
        return self.grade(submission, rubric)

    def hint(self, rubric: Rubric) -> str:
        return generate_hint_template(rubric.expected_keywords)

    def grade_submission_file(self, submission_path: Path, rubric_path: Path) -> EvaluationResult:
        """
        Grade a submission file against a rubric file.

        Args:
            submission_path: Path to the learner's answer
            rubric_path: Path to a YAML or markdown rubric

        Returns:
            EvaluationResult with score and feedback
        """
        return self.grade_file(submission_path, RubricParser().parse_file(rubric_path))

    def grade_file(self, submission_path: Path, rubric: Rubric) -> EvaluationResult:
        """Grade a submission file against an already parsed rubric."""
        try:
            submission = submission_path.read_text(encoding='utf-8', errors='ignore')
        except Exception as e:
            LOG.error(f"Error reading submission file: {e}")
            return self._create_error_result(rubric, f"Could not read submission: {e}")

        return self.grade(submission, rubric)

    def _create_error_result(self, rubric: Rubric, error_msg: str) -> EvaluationResult:
        """Create a zero-score result when a submission can't be graded."""
        return EvaluationResult(
            score=0,
            passed=False,
            feedback=f"Grading error occurred: {error_msg}",
            strengths=(),
            improvements=(),
            keyword_matches=0,
            total_keywords=len(rubric.expected_keywords),
        )
