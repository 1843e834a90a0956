#!/usr/bin/env python3
"""Command-line interface for grading a single lab submission."""

import argparse
import logging
import sys
import yaml
from pathlib import Path

from labgrade.libs.config_loader import apply_logging_config, load_all_configs
from .grader import LabGrader
from .rubric_parser import RubricParser
from .scoring import normalize_submission, score_breakdown

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
LOG = logging.getLogger(__name__)


def main():
    """Main entry point for grade-lab command."""
    parser = argparse.ArgumentParser(
        description='Grade a lab submission against its expected keywords',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Grade an answer with the rubric's passing score
  grade-lab --submission answer.txt --rubric lab1.yaml

  # Require a higher score to pass
  grade-lab --submission answer.txt --rubric lab1.md --passing-score 80

  # Save the evaluation as YAML
  grade-lab --submission answer.txt --rubric lab1.yaml --output lab_feedback.yaml

  # Show the hint learners see before answering
  grade-lab --rubric lab1.yaml --hint
        """
    )

    parser.add_argument(
        '--rubric', '-r',
        type=Path,
        required=True,
        help='Path to the lab rubric (YAML or markdown)'
    )
    parser.add_argument(
        '--submission', '-s',
        type=Path,
        default=None,
        help='Path to the learner\'s answer'
    )
    parser.add_argument(
        '--passing-score', '-p',
        type=int,
        default=None,
        help='Pass threshold 0-100 for rubrics that do not set one (overrides config value)'
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=None,
        help='Write the evaluation to this YAML file'
    )
    parser.add_argument(
        '--hint',
        action='store_true',
        help='Print the hint template for the rubric and exit'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.rubric.is_file():
        LOG.error(f"Rubric file does not exist: {args.rubric}")
        sys.exit(1)

    try:
        config = load_all_configs()
        apply_logging_config(config, verbose=args.verbose)
    except Exception as e:
        LOG.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    try:
        grader = LabGrader(configs=config, passing_score=args.passing_score)
        rubric = RubricParser().parse_file(args.rubric)
    except ValueError as e:
        LOG.error(f"Invalid rubric or passing score: {e}")
        sys.exit(1)

    if args.hint:
        print(grader.hint(rubric))
        return

    if args.submission is None or not args.submission.is_file():
        LOG.error(f"Submission file does not exist: {args.submission}")
        sys.exit(1)

    result = grader.grade_file(args.submission, rubric)

    if args.verbose:
        text = normalize_submission(args.submission.read_text(encoding='utf-8', errors='ignore'))
        breakdown = score_breakdown(text, rubric.expected_keywords)
        LOG.debug(
            "Sub-scores: keywords=%.1f length=%.1f structure=%.1f specificity=%.1f",
            breakdown.keyword, breakdown.length, breakdown.structure, breakdown.specificity
        )

    print(f"\n{'='*60}")
    print(f"Score: {result.score}/100 ({'PASSED' if result.passed else 'NOT PASSED'})")
    print(f"Keywords matched: {result.keyword_matches}/{result.total_keywords}")
    print(f"{'='*60}")
    print(result.feedback)
    if result.strengths:
        print("\nStrengths:")
        for strength in result.strengths:
            print(f"  + {strength}")
    if result.improvements:
        print("\nImprovements:")
        for improvement in result.improvements:
            print(f"  - {improvement}")

    if args.output:
        with open(args.output, 'w') as f:
            yaml.dump(result.to_yaml_dict(), f, default_flow_style=False, sort_keys=False)
        LOG.info(f"Evaluation saved to: {args.output}")


if __name__ == "__main__":
    main()
