"""Shared utilities for reading lab submission directories."""

import logging
from pathlib import Path
from typing import List

LOG = logging.getLogger(__name__)

# Lab answers are free text
SUBMISSION_EXTENSIONS = ['*.txt', '*.md']

# Files to skip during discovery
SKIP_PATTERNS = ['feedback', 'grading', 'rubric', '.git']


def _is_submission_file(path: Path) -> bool:
    if path.name.startswith('.'):
        return False
    return not any(skip in path.name.lower() for skip in SKIP_PATTERNS)


def find_submission_files(submission_dir: Path) -> List[Path]:
    """
    Find answer files in a submission directory and its immediate subdirectories.

    Args:
        submission_dir: Directory to search

    Returns:
        Matching files sorted by path
    """
    submission_files = []

    search_dirs = [submission_dir] + sorted(
        d for d in submission_dir.iterdir() if d.is_dir() and not d.name.startswith('.')
    )
    for directory in search_dirs:
        for ext in SUBMISSION_EXTENSIONS:
            for file in directory.glob(ext):
                if _is_submission_file(file):
                    submission_files.append(file)
                else:
                    LOG.debug(f"Skipping non-submission file: {file.name}")

    submission_files.sort()
    return submission_files


def read_submission_text(submission_dir: Path) -> str:
    """
    Read all answer files in a submission directory as one text.

    Files are joined with blank lines in path order. Unreadable files are
    logged and skipped.
    """
    parts = []
    for file_path in find_submission_files(submission_dir):
        try:
            parts.append(file_path.read_text(encoding='utf-8', errors='ignore'))
        except Exception as e:
            LOG.warning(f"Could not read submission file {file_path}: {e}")
    return '\n\n'.join(parts)
