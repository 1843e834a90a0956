"""Tests for batch grading functionality."""

import pytest
import tempfile
import yaml
from pathlib import Path
from unittest.mock import AsyncMock, patch

from labgrade.tools.lab_grader.batch_grader import BatchGrader, BatchGradingResult
from labgrade.tools.lab_grader.models import EvaluationResult, Rubric

PASSING_ANSWER = (
    'For example, a prompt should state the audience. '
    'Specifically, ask for 3 bullet points! '
    'Wrap the topic in "quotes" too.'
)


@pytest.fixture
def sample_config():
    """Create sample configuration."""
    return {
        'tools': {
            'max_threads': 2
        },
        'grading': {
            'default_passing_score': 70
        }
    }


@pytest.fixture
def sample_rubric():
    return Rubric(expected_keywords=["example", "specifically"], passing_score=70)


@pytest.fixture
def sample_evaluation():
    return EvaluationResult(
        score=91,
        passed=True,
        feedback="Excellent work!",
        strengths=["Includes all key concepts"],
        improvements=[],
        keyword_matches=2,
        total_keywords=2,
    )


def _make_submissions(root: Path):
    (root / "learner1").mkdir()
    (root / "learner1" / "answer.txt").write_text(PASSING_ANSWER)
    (root / "learner2").mkdir()
    (root / "learner2" / "answer.md").write_text("too short")
    rubric_path = root / "rubric.yaml"
    rubric_path.write_text("expected_keywords: [example, specifically]\npassing_score: 70\n")
    return rubric_path


def test_batch_grader_initialization(sample_config):
    grader = BatchGrader(configs=sample_config, max_concurrent=4)
    assert grader.max_concurrent == 4
    assert grader.configs == sample_config


def test_batch_grader_uses_config_threads(sample_config):
    grader = BatchGrader(configs=sample_config)
    assert grader.max_concurrent == 2


def test_batch_grader_default_threads():
    assert BatchGrader(configs={}).max_concurrent == 4


def test_find_submission_directories():
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)

        (tmpdir / "learner1").mkdir()
        (tmpdir / "learner1" / "answer.txt").write_text("my answer")
        (tmpdir / "learner2").mkdir()
        (tmpdir / "learner2" / "notes.md").write_text("my notes")

        (tmpdir / "__pycache__").mkdir()
        (tmpdir / ".git").mkdir()
        (tmpdir / "empty_dir").mkdir()
        (tmpdir / "feedback_only").mkdir()
        (tmpdir / "feedback_only" / "lab_feedback.yaml").write_text("score: 0")

        dirs = BatchGrader(configs={'tools': {'max_threads': 1}}).find_submission_directories(tmpdir)

        assert dirs == [tmpdir / "learner1", tmpdir / "learner2"]


def test_batch_grading_result_to_dict(sample_evaluation):
    result = BatchGradingResult(
        submission_dir="/path/to/learner1",
        learner_id="learner1",
        score=91,
        passed=True,
        success=True,
        evaluation=sample_evaluation
    )

    data = result.to_dict()
    assert data['submission_dir'] == "/path/to/learner1"
    assert data['learner_id'] == "learner1"
    assert data['score'] == 91
    assert data['passed'] is True
    assert data['success'] is True
    assert data['evaluation']['feedback'] == "Excellent work!"
    assert 'error_message' not in data


def test_batch_grading_result_with_error():
    result = BatchGradingResult(
        submission_dir="/path/to/learner1",
        learner_id="learner1",
        score=0,
        passed=False,
        success=False,
        error_message="Failed to grade"
    )

    data = result.to_dict()
    assert data['success'] is False
    assert data['error_message'] == "Failed to grade"
    assert 'evaluation' not in data


@pytest.mark.asyncio
async def test_grade_single_submission_async(sample_config, sample_rubric):
    with tempfile.TemporaryDirectory() as tmpdir:
        submission_dir = Path(tmpdir) / "learner1"
        submission_dir.mkdir()
        (submission_dir / "answer.txt").write_text(PASSING_ANSWER)

        batch_grader = BatchGrader(configs=sample_config)
        result = await batch_grader._grade_single_submission_async(
            submission_dir, sample_rubric, "feedback.yaml"
        )

        assert result.success is True
        assert result.learner_id == "learner1"
        assert result.score == 91
        assert result.passed is True

        feedback_file = submission_dir / "feedback.yaml"
        assert feedback_file.exists()
        with open(feedback_file) as f:
            feedback_data = yaml.safe_load(f)
        assert feedback_data['score'] == 91
        assert feedback_data['keyword_matches'] == 2


@pytest.mark.asyncio
@patch('labgrade.tools.lab_grader.batch_grader.LabGrader')
async def test_grade_single_submission_error_async(mock_grader_class, sample_config, sample_rubric):
    with tempfile.TemporaryDirectory() as tmpdir:
        submission_dir = Path(tmpdir) / "learner1"
        submission_dir.mkdir()
        (submission_dir / "answer.txt").write_text(PASSING_ANSWER)

        mock_grader = AsyncMock()
        mock_grader.grade_async.side_effect = Exception("disk error")
        mock_grader_class.return_value = mock_grader

        batch_grader = BatchGrader(configs=sample_config)
        result = await batch_grader._grade_single_submission_async(submission_dir, sample_rubric)

        assert result.success is False
        assert result.score == 0
        assert result.error_message == "disk error"
        assert not (submission_dir / "lab_feedback.yaml").exists()


def test_grade_all_submissions(sample_config):
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        rubric_path = _make_submissions(tmpdir)

        results = BatchGrader(configs=sample_config).grade_all_submissions(tmpdir, rubric_path)

        assert [r.learner_id for r in results] == ["learner1", "learner2"]
        assert all(r.success for r in results)
        assert results[0].score == 91 and results[0].passed is True
        assert results[1].score == 0 and results[1].passed is False
        assert (tmpdir / "learner1" / "lab_feedback.yaml").exists()
        assert (tmpdir / "learner2" / "lab_feedback.yaml").exists()


def test_grade_all_submissions_empty_directory(sample_config):
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        rubric_path = tmpdir / "rubric.yaml"
        rubric_path.write_text("expected_keywords: [a]\n")

        assert BatchGrader(configs=sample_config).grade_all_submissions(tmpdir, rubric_path) == []


def test_save_summary(sample_config):
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        rubric_path = _make_submissions(tmpdir)
        batch_grader = BatchGrader(configs=sample_config)
        results = batch_grader.grade_all_submissions(tmpdir, rubric_path)

        summary_path = tmpdir / "summary.yaml"
        batch_grader.save_summary(results, summary_path)

        with open(summary_path) as f:
            summary = yaml.safe_load(f)
        assert summary['grading_summary']['total_submissions'] == 2
        assert summary['grading_summary']['successful'] == 2
        assert summary['grading_summary']['passed'] == 1
        assert summary['grading_summary']['average_score'] == 45.5
        assert len(summary['submissions']) == 2
