#!/usr/bin/env python3
"""Command-line interface for batch grading lab submissions."""

import argparse
import logging
import sys
from pathlib import Path
from datetime import datetime

from labgrade.libs.config_loader import apply_logging_config, get_config, load_all_configs
from .batch_grader import BatchGrader, DEFAULT_FEEDBACK_FILENAME

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
LOG = logging.getLogger(__name__)


def main():
    """Main entry point for grade-labs command."""
    parser = argparse.ArgumentParser(
        description='Grade every lab submission in a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Grade all submissions in a directory
  grade-labs --submissions-dir lab1/submissions/ --rubric lab1.yaml

  # Raise the pass threshold for rubrics that don't set one
  grade-labs --submissions-dir lab1/submissions/ --rubric lab1.md --passing-score 75

  # Save summary to specific location
  grade-labs --submissions-dir lab1/submissions/ --rubric lab1.yaml --summary lab1_results.yaml
        """
    )

    parser.add_argument(
        '--submissions-dir', '-s',
        type=Path,
        required=True,
        help='Directory containing one subdirectory per learner'
    )
    parser.add_argument(
        '--rubric', '-r',
        type=Path,
        required=True,
        help='Path to the lab rubric (YAML or markdown)'
    )
    parser.add_argument(
        '--feedback-file', '-f',
        type=str,
        default=None,
        help=f'Feedback filename to create in each submission directory (default: {DEFAULT_FEEDBACK_FILENAME})'
    )
    parser.add_argument(
        '--summary', '-o',
        type=Path,
        default=None,
        help='Path to save summary YAML file (default: lab_summary_TIMESTAMP.yaml in submissions dir)'
    )
    parser.add_argument(
        '--passing-score', '-p',
        type=int,
        default=None,
        help='Pass threshold 0-100 for rubrics that do not set one (overrides config value)'
    )
    parser.add_argument(
        '--max-threads', '-t',
        type=int,
        default=None,
        help='Maximum number of concurrent grading tasks (overrides config value)'
    )
    parser.add_argument(
        '--continue-on-error',
        action='store_true',
        help='Continue grading even if some submissions fail'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.submissions_dir.is_dir():
        LOG.error(f"Submissions directory does not exist: {args.submissions_dir}")
        sys.exit(1)

    if not args.rubric.is_file():
        LOG.error(f"Rubric file does not exist: {args.rubric}")
        sys.exit(1)

    try:
        config = load_all_configs()
        apply_logging_config(config, verbose=args.verbose)
    except Exception as e:
        LOG.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    feedback_file = args.feedback_file or get_config(
        "grading.feedback_filename", config, default=DEFAULT_FEEDBACK_FILENAME
    )

    batch_grader = BatchGrader(
        configs=config,
        passing_score=args.passing_score,
        max_concurrent=args.max_threads
    )

    LOG.info(f"Starting batch grading of submissions in {args.submissions_dir}")
    LOG.info(f"Using rubric: {args.rubric}")

    try:
        results = batch_grader.grade_all_submissions(
            submissions_dir=args.submissions_dir,
            rubric_path=args.rubric,
            feedback_filename=feedback_file,
            continue_on_error=args.continue_on_error
        )
    except Exception as e:
        LOG.error(f"Batch grading failed: {e}")
        sys.exit(1)

    if not results:
        LOG.error("No submissions were graded")
        sys.exit(1)

    if args.summary is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        summary_path = args.submissions_dir / f"lab_summary_{timestamp}.yaml"
    else:
        summary_path = args.summary

    try:
        batch_grader.save_summary(results, summary_path)
    except Exception as e:
        LOG.error(f"Failed to save summary: {e}")

    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print(f"\n{'='*60}")
    print("Batch Grading Complete")
    print(f"{'='*60}")
    print(f"Total submissions: {len(results)}")
    print(f"Successfully graded: {len(successful)}")
    print(f"Passed: {sum(1 for r in successful if r.passed)}")
    print(f"Failed to grade: {len(failed)}")

    if successful:
        avg_score = sum(r.score for r in successful) / len(successful)
        print(f"Average score: {avg_score:.1f}/100")

        print("\nScores:")
        for result in successful:
            status = 'pass' if result.passed else 'fail'
            print(f"  {result.learner_id}: {result.score}/100 ({status})")

    if failed:
        print("\nFailed submissions:")
        for result in failed:
            print(f"  {result.learner_id}: {result.error_message}")

    print(f"\nFeedback files saved in each submission directory as: {feedback_file}")
    print(f"Summary saved to: {summary_path}")

    if failed and not args.continue_on_error:
        sys.exit(1)


if __name__ == "__main__":
    main()
