"""
Answer Evaluation

Evaluates submitted answers against their questions, produces review
explanations, and rolls a whole reading or listening section up into a
band-scored report.
"""

from typing import Any, Dict, List, Optional, Sequence, Union
from dataclasses import dataclass, field

from .matcher import AnswerMatcher, MatchResult
from .metrics import QuestionTypeStats, calculate_question_type_breakdown
from ..types import AggregateOutcome, EvaluationResult, Question, SkillArea
from ..scoring.band_scorer import BandScorer
from ..utils.logging import get_logger, PerformanceTimer

logger = get_logger(__name__)

CORRECT_EXPLANATION = "Correct!"


def build_explanation(user_answer: str, correct_answers: Sequence[str], is_correct: bool) -> str:
    """Human-readable verdict shown to the candidate during review."""
    if is_correct:
        return CORRECT_EXPLANATION
    return (f"Incorrect. The correct answer(s): {', '.join(correct_answers)}. "
            f"Your answer: {user_answer}")


@dataclass(frozen=True)
class SectionReport:
    """Evaluation of a complete reading or listening section."""
    skill_area: SkillArea
    total_questions: int
    correct_count: int
    accuracy_percentage: float
    band: float
    results: List[EvaluationResult] = field(default_factory=list)
    question_type_breakdown: List[QuestionTypeStats] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'skill_area': self.skill_area.value,
            'total_questions': self.total_questions,
            'correct_answers': self.correct_count,
            'accuracy_percentage': self.accuracy_percentage,
            'band_score': self.band,
            'detailed_results': [result.to_dict() for result in self.results],
            'question_type_analysis': [stats.to_dict() for stats in self.question_type_breakdown],
        }


class AnswerEvaluator:
    """Evaluates answers and sections; holds no per-call state."""

    def __init__(self, matcher: Optional[AnswerMatcher] = None,
                 scorer: Optional[BandScorer] = None):
        """
        Initialize the evaluator.

        Args:
            matcher: Answer matcher (default thresholds and tables if None)
            scorer: Band scorer used for section reports
        """
        self.matcher = matcher or AnswerMatcher()
        self.scorer = scorer or BandScorer()

    @classmethod
    def from_config(cls, config) -> "AnswerEvaluator":
        """Create an evaluator from an AppConfig."""
        return cls(matcher=AnswerMatcher.from_config(config.evaluation))

    def evaluate(self, answer: Optional[str], question: Question,
                 skill_area: Optional[SkillArea] = None) -> EvaluationResult:
        """
        Evaluate one answer.

        Args:
            answer: The answer as submitted; None counts as blank and
                non-string values are converted with str
            question: The question it answers
            skill_area: Skill used to route unrecognised question types;
                defaults to the question's own skill

        Returns:
            EvaluationResult with verdict and explanation
        """
        user_answer = "" if answer is None else str(answer)
        match_result: MatchResult = self.matcher.match(user_answer, question, skill_area)

        logger.debug(
            f"Question {question.question_id} ({question.type_name}): "
            f"{'correct' if match_result.is_match else 'incorrect'} via {match_result.match_type.value}",
            extra={'question_id': question.question_id, 'skill_area': question.skill_area.value},
        )

        return EvaluationResult(
            is_correct=match_result.is_match,
            user_answer=user_answer,
            correct_answers=question.correct_answers,
            explanation=build_explanation(user_answer, question.correct_answers, match_result.is_match),
            question_id=question.question_id,
            question_type=question.type_name,
            match_type=match_result.match_type.value,
            matched_answer=match_result.matched_answer,
        )

    def evaluate_batch(self, answers: Sequence[Optional[str]], questions: Sequence[Question],
                       skill_area: Optional[SkillArea] = None) -> List[EvaluationResult]:
        """
        Evaluate answers against questions by position.

        Answers beyond the last question are skipped without error, which
        tolerates partial and over-long submissions.

        Args:
            answers: Submitted answers, answer[i] belongs to question[i]
            questions: Questions in the same order
            skill_area: Optional skill override for fallback routing

        Returns:
            One EvaluationResult per answer that has a question
        """
        if len(answers) > len(questions):
            logger.warning(
                f"Skipping {len(answers) - len(questions)} answer(s) without a matching question"
            )

        return [
            self.evaluate(answer, question, skill_area)
            for answer, question in zip(answers, questions)
        ]

    def evaluate_section(self, answers: Sequence[Optional[str]], questions: Sequence[Question],
                         skill_area: Union[SkillArea, str]) -> SectionReport:
        """
        Evaluate a whole reading or listening section and band it.

        The total counts every question in the section, answered or not.

        Args:
            answers: Submitted answers by position
            questions: All questions of the section
            skill_area: Section skill; also routes unrecognised question types

        Returns:
            SectionReport with counts, accuracy, band and per-type breakdown
        """
        skill = SkillArea.parse(skill_area, default=SkillArea.READING)

        with PerformanceTimer(f"{skill.value} section evaluation", logger):
            results = self.evaluate_batch(answers, questions, skill)

        correct = AggregateOutcome.from_results(results, skill).correct_count
        total = len(questions)
        report = self.scorer.score(correct, total, skill)

        logger.info(
            f"{skill.value.title()} section: {correct}/{total} correct, band {report.band}"
        )

        return SectionReport(
            skill_area=skill,
            total_questions=total,
            correct_count=correct,
            accuracy_percentage=round(report.accuracy_percentage, 2),
            band=report.band,
            results=results,
            question_type_breakdown=calculate_question_type_breakdown(results),
        )


_default_evaluator: Optional[AnswerEvaluator] = None


def get_evaluator() -> AnswerEvaluator:
    """Shared evaluator with default thresholds and packaged tables."""
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = AnswerEvaluator()
    return _default_evaluator


def evaluate_batch(answers: Sequence[Optional[str]],
                   questions: Sequence[Question]) -> List[EvaluationResult]:
    """Evaluate answers against questions by position with the shared evaluator."""
    return get_evaluator().evaluate_batch(answers, questions)
