"""
Question Set Loading

Reads YAML or JSON question-set files (an answer key plus sample answers)
and validates them before evaluation.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, field_validator, ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError
from ..types import Question, SkillArea
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class QuestionEntry(BaseModel):
    """One question of a question-set file."""

    id: Optional[Union[int, str]] = None
    type: str = "multiple_choice"
    correct_answers: List[str]
    skill_area: Optional[str] = None

    @field_validator('correct_answers', mode='before')
    @classmethod
    def coerce_answers(cls, v):
        """Accept a single answer or numbers written without quotes."""
        if v is None:
            return []
        if isinstance(v, (str, int, float)):
            v = [v]
        return [str(item) for item in v if item is not None]

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        if not v or not v.strip():
            raise ValueError("Question type cannot be empty")
        return v.strip()


class QuestionSetFile(BaseModel):
    """A section's questions and the answers to check against them."""

    skill: str = SkillArea.READING.value
    questions: List[QuestionEntry]
    answers: List[Optional[str]] = []

    @field_validator('skill')
    @classmethod
    def validate_skill(cls, v):
        if SkillArea.parse(v) is None:
            valid = [skill.value for skill in SkillArea]
            raise ValueError(f"Skill must be one of: {valid}")
        return v.strip().lower()

    @field_validator('answers', mode='before')
    @classmethod
    def coerce_answer_list(cls, v):
        if v is None:
            return []
        return [_to_text(item) for item in v]


def load_question_set(path: Union[str, Path]) -> Tuple[SkillArea, List[Question], List[Optional[str]]]:
    """
    Load and validate a question-set file.

    Args:
        path: YAML (.yaml/.yml) or JSON file

    Returns:
        Tuple of (skill, questions, answers)

    Raises:
        ValidationError: If the file cannot be parsed or fails validation
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Cannot read question set {path}: {e}", field_name="file") from e

    if not isinstance(raw, dict):
        raise ValidationError(f"Question set {path} must be a mapping", field_name="file",
                              invalid_value=type(raw).__name__)

    try:
        question_set = QuestionSetFile(**raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first.get('loc', ()))
        raise ValidationError(f"Invalid question set {path}: {first.get('msg')}",
                              field_name=field_name, invalid_value=first.get('input')) from e

    skill = SkillArea.parse(question_set.skill, default=SkillArea.READING)
    questions = [
        Question(
            question_type=entry.type,
            correct_answers=entry.correct_answers,
            skill_area=SkillArea.parse(entry.skill_area, default=skill),
            question_id=entry.id if entry.id is not None else index + 1,
        )
        for index, entry in enumerate(question_set.questions)
    ]

    logger.debug(f"Loaded {len(questions)} {skill.value} questions from {path}")
    return skill, questions, question_set.answers
