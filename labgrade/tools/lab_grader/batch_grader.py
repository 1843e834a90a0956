"""Batch grader for processing many lab submissions concurrently using async/await."""

import asyncio
import logging
import yaml
from pathlib import Path
from typing import List, Dict, Any, Optional
from dataclasses import dataclass
from datetime import datetime

from tqdm.asyncio import tqdm

from labgrade.libs.config_loader import ConfigType, get_config
from .grader import LabGrader
from .models import EvaluationResult, Rubric
from .rubric_parser import RubricParser
from .submission_utils import find_submission_files, read_submission_text

LOG = logging.getLogger(__name__)

DEFAULT_FEEDBACK_FILENAME = "lab_feedback.yaml"


@dataclass
class BatchGradingResult:
    """Result from grading one submission directory."""
    submission_dir: str
    learner_id: str
    score: int
    passed: bool
    success: bool
    error_message: Optional[str] = None
    evaluation: Optional[EvaluationResult] = None
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        data = {
            'submission_dir': self.submission_dir,
            'learner_id': self.learner_id,
            'score': self.score,
            'passed': self.passed,
            'success': self.success,
            'timestamp': self.timestamp
        }
        if self.error_message:
            data['error_message'] = self.error_message
        if self.evaluation:
            data['evaluation'] = self.evaluation.to_yaml_dict()
        return data


class BatchGrader:
    """Grade every submission directory under a parent directory."""

    def __init__(self, configs: ConfigType, passing_score: Optional[int] = None,
                 max_concurrent: Optional[int] = None):
        """
        Initialize the batch grader.

        Args:
            configs: Configuration dictionary
            passing_score: Optional default pass threshold override
            max_concurrent: Maximum number of concurrent grading tasks (overrides config)
        """
        self.configs = configs
        self.passing_score = passing_score

        if max_concurrent is not None:
            self.max_concurrent = max_concurrent
        else:
            self.max_concurrent = get_config("tools.max_threads", configs, default=4)

        LOG.info(f"BatchGrader initialized with max_concurrent={self.max_concurrent}")

    def find_submission_directories(self, submissions_dir: Path) -> List[Path]:
        """
        Find all submission directories.

        Args:
            submissions_dir: Parent directory containing submissions

        Returns:
            Sorted list of directories holding at least one answer file
        """
        submission_dirs = []

        for item in submissions_dir.iterdir():
            if not item.is_dir() or item.name.startswith('.'):
                continue
            if item.name.lower() in ['__pycache__', 'node_modules', 'venv']:
                continue

            if find_submission_files(item):
                submission_dirs.append(item)
                LOG.debug(f"Found submission directory: {item.name}")

        submission_dirs.sort()
        return submission_dirs

    async def _grade_single_submission_async(self, submission_dir: Path, rubric: Rubric,
                                             feedback_filename: str = DEFAULT_FEEDBACK_FILENAME
                                             ) -> BatchGradingResult:
        """
        Grade a single submission directory and write its feedback file.

        Args:
            submission_dir: Path to submission directory
            rubric: Parsed lab rubric
            feedback_filename: Name of feedback file to create

        Returns:
            BatchGradingResult with grading outcome
        """
        learner_id = submission_dir.name
        LOG.debug(f"Grading submission: {learner_id}")

        try:
            grader = LabGrader(configs=self.configs, passing_score=self.passing_score)
            submission = read_submission_text(submission_dir)
            evaluation = await grader.grade_async(submission, rubric)

            feedback_path = submission_dir / feedback_filename
            with open(feedback_path, 'w') as f:
                yaml.dump(evaluation.to_yaml_dict(), f, default_flow_style=False, sort_keys=False)

            LOG.debug(f"Graded {learner_id}: {evaluation.score}/100")

            return BatchGradingResult(
                submission_dir=str(submission_dir),
                learner_id=learner_id,
                score=evaluation.score,
                passed=evaluation.passed,
                success=True,
                evaluation=evaluation
            )

        except Exception as e:
            LOG.error(f"Error grading {learner_id}: {e}")
            return BatchGradingResult(
                submission_dir=str(submission_dir),
                learner_id=learner_id,
                score=0,
                passed=False,
                success=False,
                error_message=str(e)
            )

    async def grade_all_submissions_async(self, submissions_dir: Path, rubric_path: Path,
                                          feedback_filename: str = DEFAULT_FEEDBACK_FILENAME,
                                          continue_on_error: bool = True) -> List[BatchGradingResult]:
        """
        Grade all submissions with bounded concurrency.

        Args:
            submissions_dir: Parent directory containing all submissions
            rubric_path: Path to rubric file
            feedback_filename: Name of feedback file to create in each directory
            continue_on_error: Whether to continue if a submission fails

        Returns:
            List of BatchGradingResult objects sorted by learner id
        """
        rubric = RubricParser().parse_file(rubric_path)
        LOG.info(f"Parsed rubric with {len(rubric.expected_keywords)} expected keywords")

        submission_dirs = self.find_submission_directories(submissions_dir)
        if not submission_dirs:
            LOG.error(f"No submission directories found in {submissions_dir}")
            return []

        LOG.info(f"Found {len(submission_dirs)} submission directories")

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def grade_with_semaphore(submission_dir: Path) -> BatchGradingResult:
            async with semaphore:
                return await self._grade_single_submission_async(
                    submission_dir, rubric, feedback_filename
                )

        tasks = [asyncio.ensure_future(grade_with_semaphore(d)) for d in submission_dirs]

        results = []
        for coro in tqdm.as_completed(tasks, total=len(tasks), desc="Grading submissions"):
            grading_result = await coro
            results.append(grading_result)

            if grading_result.success:
                LOG.debug(f"Completed: {grading_result.learner_id} - {grading_result.score}/100")
            else:
                LOG.warning(f"Failed: {grading_result.learner_id} - {grading_result.error_message}")
                if not continue_on_error:
                    for task in tasks:
                        if not task.done():
                            task.cancel()
                    raise RuntimeError(
                        f"Grading failed for {grading_result.learner_id}: {grading_result.error_message}"
                    )

        results.sort(key=lambda r: r.learner_id)
        return results

    def grade_all_submissions(self, submissions_dir: Path, rubric_path: Path,
                              feedback_filename: str = DEFAULT_FEEDBACK_FILENAME,
                              continue_on_error: bool = True) -> List[BatchGradingResult]:
        """Synchronous wrapper for grade_all_submissions_async."""
        return asyncio.run(self.grade_all_submissions_async(
            submissions_dir, rubric_path, feedback_filename, continue_on_error
        ))

    def save_summary(self, results: List[BatchGradingResult], output_path: Path):
        """
        Save grading summary to YAML file.

        Args:
            results: List of grading results
            output_path: Path to save summary file
        """
        successful = [r for r in results if r.success]
        failed = [r for r in results if not r.success]

        summary = {
            'grading_summary': {
                'timestamp': datetime.now().isoformat(),
                'total_submissions': len(results),
                'successful': len(successful),
                'failed': len(failed),
                'passed': sum(1 for r in successful if r.passed),
                'average_score': sum(r.score for r in successful) / len(successful) if successful else 0,
            },
            'submissions': [r.to_dict() for r in results]
        }

        with open(output_path, 'w') as f:
            yaml.dump(summary, f, default_flow_style=False, sort_keys=False)

        LOG.info(f"Summary saved to {output_path}")
