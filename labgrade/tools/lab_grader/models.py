"""Pydantic models for lab rubrics and evaluation results."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Tuple

DEFAULT_PASSING_SCORE = 70


class Rubric(BaseModel):
    """Expected keywords and pass threshold for one lab exercise."""
    expected_keywords: List[str] = Field(
        default_factory=list,
        description="Concepts the answer should mention, matched case-insensitively"
    )
    passing_score: int = Field(
        default=DEFAULT_PASSING_SCORE, ge=0, le=100,
        description="Minimum score (inclusive) needed to pass"
    )
    lab_prompt: Optional[str] = Field(default=None, description="Instructions shown to the learner")
    title: Optional[str] = Field(default=None, description="Lab title")
    points: Optional[int] = Field(default=None, ge=0, description="Points awarded on a pass")


class ScoreBreakdown(BaseModel):
    """Unrounded sub-scores that make up a submission's total."""
    model_config = ConfigDict(frozen=True)

    keyword: float
    length: float
    structure: float
    specificity: float

    @property
    def total(self) -> float:
        return self.keyword + self.length + self.structure + self.specificity


class EvaluationResult(BaseModel):
    """Graded outcome of a single lab submission."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Overall score out of 100")
    passed: bool = Field(description="Whether score reached the passing threshold")
    feedback: str = Field(description="Overall feedback message for the learner")
    strengths: Tuple[str, ...] = Field(default=(), description="What the answer did well, in order")
    improvements: Tuple[str, ...] = Field(default=(), description="Suggested improvements, in order")
    keyword_matches: int = Field(ge=0, description="Number of expected keywords found")
    total_keywords: int = Field(ge=0, description="Number of expected keywords in the rubric")

    @model_validator(mode='after')
    def _check_keyword_counts(self) -> 'EvaluationResult':
        if self.keyword_matches > self.total_keywords:
            raise ValueError(
                f"keyword_matches ({self.keyword_matches}) exceeds total_keywords ({self.total_keywords})"
            )
        return self

    def to_yaml_dict(self) -> dict:
        """Convert to dictionary suitable for YAML serialization."""
        return {
            'score': self.score,
            'passed': self.passed,
            'feedback': self.feedback,
            'strengths': list(self.strengths),
            'improvements': list(self.improvements),
            'keyword_matches': self.keyword_matches,
            'total_keywords': self.total_keywords,
        }


class PromptLabResult(BaseModel):
    """Outcome of a practice-lab prompt attempt."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    passed: bool
    feedback: str
