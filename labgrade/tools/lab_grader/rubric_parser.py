"""Parser for lab rubric files in YAML or markdown."""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .models import Rubric

_HEADER = re.compile(r'^(#{1,3})\s+(.+?)\s*$')
_BULLET = re.compile(r'^[-*+]\s+(.+)$')
_INLINE_KEYWORDS = re.compile(r'^\**(?:expected\s+)?keywords\**\s*:\**\s*(.+)$', re.IGNORECASE)
_PASSING_SCORE = re.compile(r'^\**passing[\s_-]*score\**\s*:\**\s*(\d+)', re.IGNORECASE)
_POINTS = re.compile(r'^\**points\**\s*:\**\s*(\d+)', re.IGNORECASE)


class RubricParser:
    """Parse lab rubric files into Rubric objects."""

    def parse_file(self, rubric_path: Path) -> Rubric:
        """Parse a rubric file, choosing the format from its extension."""
        try:
            content = rubric_path.read_text(encoding='utf-8')
        except Exception as e:
            raise ValueError(f"Could not read rubric file: {e}")

        if rubric_path.suffix.lower() in ('.yaml', '.yml'):
            return self.parse_yaml(content)
        return self.parse(content)

    def parse_yaml(self, content: str) -> Rubric:
        """
        Parse a YAML rubric.

        Expected layout:
            title: Explain quantum physics
            lab_prompt: Write a prompt that ...
            expected_keywords: [simple, child, explain]
            passing_score: 70
            points: 50
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse rubric: invalid YAML ({e})")

        if not isinstance(data, dict):
            raise ValueError("Could not parse rubric: YAML rubric must be a mapping")

        keywords = data.get('expected_keywords', data.get('keywords'))
        if keywords is None:
            raise ValueError("Could not parse rubric: no expected_keywords found")
        if isinstance(keywords, str):
            keywords = _split_keywords(keywords)

        fields: Dict[str, Any] = {
            'expected_keywords': [str(k) for k in keywords],
            'lab_prompt': data.get('lab_prompt', data.get('prompt')),
            'title': data.get('title'),
            'points': data.get('points'),
        }
        if data.get('passing_score') is not None:
            fields['passing_score'] = data['passing_score']
        return Rubric(**fields)

    def parse(self, content: str) -> Rubric:
        """
        Parse markdown content into a rubric.

        Supports:
        1. A '## Keywords' or '## Expected Keywords' section of bullet points
        2. An inline 'Keywords: a, b, c' line
        3. 'Passing score: N' and 'Points: N' lines anywhere
        4. A '## Prompt' section whose text becomes the lab prompt
        """
        title: Optional[str] = None
        section: Optional[str] = None
        keywords: List[str] = []
        prompt_lines: List[str] = []
        passing_score: Optional[int] = None
        points: Optional[int] = None
        found_keywords = False

        for raw_line in content.split('\n'):
            line = raw_line.strip()
            if not line:
                continue

            header = _HEADER.match(line)
            if header:
                name = header.group(2).lower()
                if len(header.group(1)) == 1 and title is None:
                    title = header.group(2)
                    section = None
                elif 'keyword' in name:
                    section = 'keywords'
                    found_keywords = True
                elif 'prompt' in name or 'instruction' in name:
                    section = 'prompt'
                else:
                    section = None
                continue

            score_match = _PASSING_SCORE.match(line)
            if score_match:
                passing_score = int(score_match.group(1))
                continue

            points_match = _POINTS.match(line)
            if points_match:
                points = int(points_match.group(1))
                continue

            inline = _INLINE_KEYWORDS.match(line)
            if inline:
                keywords.extend(_split_keywords(inline.group(1)))
                found_keywords = True
                continue

            if section == 'keywords':
                bullet = _BULLET.match(line)
                if bullet:
                    keywords.append(bullet.group(1).strip().strip('`'))
                else:
                    keywords.extend(_split_keywords(line))
            elif section == 'prompt':
                prompt_lines.append(line)

        if not found_keywords:
            raise ValueError(
                "Could not parse rubric. Ensure it contains a '## Expected Keywords' section "
                "or a 'Keywords: a, b, c' line"
            )

        fields: Dict[str, Any] = {
            'expected_keywords': keywords,
            'lab_prompt': ' '.join(prompt_lines) or None,
            'title': title,
            'points': points,
        }
        if passing_score is not None:
            fields['passing_score'] = passing_score
        return Rubric(**fields)


def _split_keywords(text: str) -> List[str]:
    return [k.strip().strip('`') for k in text.split(',') if k.strip()]
