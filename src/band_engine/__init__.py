"""
Band Engine

Answer evaluation and band scoring for reading and listening practice tests.
"""

from .types import (
    AggregateOutcome,
    EvaluationResult,
    Question,
    QuestionType,
    SkillArea,
)
from .evaluation import AnswerEvaluator, AnswerMatcher, SectionReport, evaluate_batch
from .scoring import BandScorer, ScoreReport, NO_DATA_BAND, overall_band, score

__version__ = "1.0.0"

__all__ = [
    "AggregateOutcome",
    "EvaluationResult",
    "Question",
    "QuestionType",
    "SkillArea",
    "AnswerEvaluator",
    "AnswerMatcher",
    "SectionReport",
    "evaluate_batch",
    "BandScorer",
    "ScoreReport",
    "NO_DATA_BAND",
    "overall_band",
    "score",
]
