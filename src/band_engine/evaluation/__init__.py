"""
Evaluation Module

Answer evaluation with type-aware fuzzy matching: normalization, similarity,
reference tables, per-type matchers and section reports.
"""

from .matcher import AnswerMatcher, MatchResult, MatchType
from .evaluator import AnswerEvaluator, SectionReport, build_explanation, evaluate_batch, get_evaluator
from .metrics import QuestionTypeStats, calculate_question_type_breakdown
from .reference_data import ReferenceData, load_reference_data

__all__ = [
    "AnswerMatcher",
    "MatchResult",
    "MatchType",
    "AnswerEvaluator",
    "SectionReport",
    "build_explanation",
    "evaluate_batch",
    "get_evaluator",
    "QuestionTypeStats",
    "calculate_question_type_breakdown",
    "ReferenceData",
    "load_reference_data",
]
