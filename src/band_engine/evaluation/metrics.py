"""
Evaluation Metrics

Per-question-type accuracy breakdown for review screens.
"""

from typing import Any, Dict, Iterable, List
from dataclasses import dataclass
from collections import defaultdict

from ..types import EvaluationResult


@dataclass(frozen=True)
class QuestionTypeStats:
    """Accuracy for one question type within a set of results."""
    question_type: str
    correct: int
    total: int

    @property
    def accuracy(self) -> float:
        """Accuracy percentage rounded to two decimals."""
        if self.total == 0:
            return 0.0
        return round((self.correct / self.total) * 100, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'question_type': self.question_type,
            'correct': self.correct,
            'total': self.total,
            'accuracy': self.accuracy,
        }


def calculate_question_type_breakdown(results: Iterable[EvaluationResult]) -> List[QuestionTypeStats]:
    """
    Group results by question type.

    Args:
        results: Evaluation results

    Returns:
        One QuestionTypeStats per type, in order of first appearance
    """
    by_type = defaultdict(list)
    for result in results:
        by_type[result.question_type].append(result.is_correct)

    return [
        QuestionTypeStats(question_type=question_type, correct=sum(outcomes), total=len(outcomes))
        for question_type, outcomes in by_type.items()
    ]
