"""
Evaluation Types

Value types shared by the matchers, the evaluator and the band scorer.
Every instance is immutable; evaluation never mutates its inputs.
"""

from typing import Any, Dict, Iterable, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum


class QuestionType(str, Enum):
    """Question formats with a dedicated matching rule."""
    MULTIPLE_CHOICE = "multiple_choice"
    FILL_BLANK = "fill_blank"
    SHORT_ANSWER = "short_answer"
    TRUE_FALSE_NOT_GIVEN = "true_false_not_given"
    MATCHING = "matching"
    SENTENCE_COMPLETION = "sentence_completion"
    FORM_COMPLETION = "form_completion"
    NOTE_COMPLETION = "note_completion"
    MAP_LABELING = "map_labeling"
    DIAGRAM_LABELING = "diagram_labeling"
    TABLE_COMPLETION = "table_completion"

    @classmethod
    def parse(cls, value: Union["QuestionType", str, None]) -> Union["QuestionType", str]:
        """Return the enum member for known values and the raw string otherwise."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.MULTIPLE_CHOICE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return str(value)


class SkillArea(str, Enum):
    """Objectively scored exam modules."""
    READING = "reading"
    LISTENING = "listening"

    @classmethod
    def parse(cls, value: Union["SkillArea", str, None],
              default: "SkillArea" = None) -> Optional["SkillArea"]:
        """Return the matching member, or ``default`` for unknown values."""
        if isinstance(value, cls):
            return value
        if value is None:
            return default
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default


def _type_value(question_type: Union[QuestionType, str]) -> str:
    return question_type.value if isinstance(question_type, QuestionType) else question_type


@dataclass(frozen=True)
class Question:
    """A question as seen by the evaluator: its format, answer key and skill."""
    question_type: Union[QuestionType, str]
    correct_answers: Tuple[str, ...]
    skill_area: SkillArea = SkillArea.READING
    question_id: Optional[Any] = None

    def __post_init__(self):
        object.__setattr__(self, 'question_type', QuestionType.parse(self.question_type))
        object.__setattr__(self, 'skill_area',
                           SkillArea.parse(self.skill_area, default=SkillArea.READING))
        object.__setattr__(self, 'correct_answers', _as_answer_tuple(self.correct_answers))

    @property
    def type_name(self) -> str:
        return _type_value(self.question_type)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], skill_area: Union[SkillArea, str, None] = None) -> "Question":
        """
        Build a question from a mapping such as a stored question row.

        Args:
            data: Mapping with ``type``, ``correct_answers`` and optionally
                ``skill_area`` (or ``skill``) and ``id``
            skill_area: Skill used when the mapping does not name one

        Returns:
            Question instance
        """
        skill = data.get('skill_area', data.get('skill', skill_area))
        return cls(
            question_type=data.get('type', data.get('question_type')),
            correct_answers=data.get('correct_answers', ()),
            skill_area=SkillArea.parse(skill, default=SkillArea.parse(skill_area, SkillArea.READING)),
            question_id=data.get('id', data.get('question_id')),
        )


def _as_answer_tuple(answers: Any) -> Tuple[str, ...]:
    if answers is None:
        return ()
    if isinstance(answers, (str, int, float)):
        answers = [answers]
    return tuple(str(answer) for answer in answers if answer is not None)


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one answer against one question."""
    is_correct: bool
    user_answer: str
    correct_answers: Tuple[str, ...]
    explanation: str
    question_id: Optional[Any] = None
    question_type: str = QuestionType.MULTIPLE_CHOICE.value
    match_type: str = "none"
    matched_answer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'question_id': self.question_id,
            'user_answer': self.user_answer,
            'correct_answers': list(self.correct_answers),
            'is_correct': self.is_correct,
            'question_type': self.question_type,
            'match_type': self.match_type,
            'matched_answer': self.matched_answer,
            'explanation': self.explanation,
        }


@dataclass(frozen=True)
class AggregateOutcome:
    """Correct/total counts for one skill area, ready for band scoring."""
    correct_count: int
    total_count: int
    skill_area: SkillArea

    @classmethod
    def from_results(cls, results: Iterable[EvaluationResult],
                     skill_area: Union[SkillArea, str]) -> "AggregateOutcome":
        correct = 0
        total = 0
        for result in results:
            total += 1
            if result.is_correct:
                correct += 1
        return cls(
            correct_count=correct,
            total_count=total,
            skill_area=SkillArea.parse(skill_area, default=SkillArea.READING),
        )
