"""Tests for lab rubric parsing."""

import tempfile
from pathlib import Path

import pytest

from labgrade.tools.lab_grader.rubric_parser import RubricParser


class TestMarkdownRubrics:
    """Test markdown rubric formats."""

    def test_parse_keyword_section(self):
        rubric_content = """
# Explain Quantum Physics to a Child

## Prompt
Write a prompt that asks AI to explain quantum physics to a 10-year-old child.
Make sure your prompt includes the target audience.

## Expected Keywords
- 10-year-old
- simple
- quantum physics
- child

Passing score: 75
Points: 50
"""
        rubric = RubricParser().parse(rubric_content)

        assert rubric.title == "Explain Quantum Physics to a Child"
        assert rubric.expected_keywords == ["10-year-old", "simple", "quantum physics", "child"]
        assert rubric.passing_score == 75
        assert rubric.points == 50
        assert rubric.lab_prompt.startswith("Write a prompt that asks AI")
        assert rubric.lab_prompt.endswith("includes the target audience.")

    def test_parse_inline_keywords(self):
        rubric_content = """
**Keywords:** social media, coffee shop, post, tone
**Passing score:** 70
"""
        rubric = RubricParser().parse(rubric_content)

        assert rubric.expected_keywords == ["social media", "coffee shop", "post", "tone"]
        assert rubric.passing_score == 70
        assert 'passing_score' in rubric.model_fields_set

    def test_default_passing_score_when_missing(self):
        rubric = RubricParser().parse("Keywords: step, reasoning")
        assert rubric.passing_score == 70
        assert 'passing_score' not in rubric.model_fields_set

    def test_comma_separated_keyword_section(self):
        rubric_content = """
## Keywords
step, calculate, reasoning
"""
        rubric = RubricParser().parse(rubric_content)
        assert rubric.expected_keywords == ["step", "calculate", "reasoning"]

    def test_parse_invalid_format_raises_error(self):
        rubric_content = """
This is not a valid rubric format.
No keyword section at all.
"""
        with pytest.raises(ValueError, match="Could not parse rubric"):
            RubricParser().parse(rubric_content)

    def test_out_of_range_passing_score(self):
        with pytest.raises(ValueError):
            RubricParser().parse("Keywords: a, b\nPassing score: 150")


class TestYamlRubrics:
    """Test YAML rubric files."""

    def test_parse_yaml(self):
        rubric = RubricParser().parse_yaml("""
title: Chain of thought
prompt: Ask for step-by-step reasoning.
expected_keywords: [step, calculate, reasoning]
passing_score: 75
points: 100
""")
        assert rubric.title == "Chain of thought"
        assert rubric.lab_prompt == "Ask for step-by-step reasoning."
        assert rubric.expected_keywords == ["step", "calculate", "reasoning"]
        assert rubric.passing_score == 75
        assert rubric.points == 100

    def test_parse_yaml_keyword_string(self):
        rubric = RubricParser().parse_yaml("keywords: context, format")
        assert rubric.expected_keywords == ["context", "format"]

    def test_parse_yaml_requires_keywords(self):
        with pytest.raises(ValueError, match="no expected_keywords"):
            RubricParser().parse_yaml("title: Missing keywords")

    def test_parse_yaml_requires_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            RubricParser().parse_yaml("- just\n- a list")

    def test_parse_file_dispatches_on_extension(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir = Path(tmpdir)
            yaml_path = tmpdir / "lab.yaml"
            yaml_path.write_text("expected_keywords: [a, b]\n")
            md_path = tmpdir / "lab.md"
            md_path.write_text("Keywords: c, d\n")

            parser = RubricParser()
            assert parser.parse_file(yaml_path).expected_keywords == ["a", "b"]
            assert parser.parse_file(md_path).expected_keywords == ["c", "d"]

    def test_parse_missing_file(self):
        with pytest.raises(ValueError, match="Could not read rubric file"):
            RubricParser().parse_file(Path("does/not/exist.yaml"))
