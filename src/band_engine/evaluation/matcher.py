"""
Answer Matching System

Type-aware matching of a candidate's answer against a question's answer key.
Each question format maps to one matching strategy; formats without a
dedicated strategy fall back to the generic fuzzy rules of their skill.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from fuzzywuzzy import fuzz, process

from .normalization import (
    PARTIAL_MATCH_MIN_LENGTH,
    normalize_for_listening,
    normalize_for_reading,
    is_partial_match,
    similarity,
)
from .reference_data import ReferenceData, load_reference_data
from ..types import Question, QuestionType, SkillArea
from ..utils.logging import get_logger

logger = get_logger(__name__)

READING_SIMILARITY_THRESHOLD = 0.8
LISTENING_SIMILARITY_THRESHOLD = 0.75


class MatchType(str, Enum):
    """Rule that accepted an answer."""
    EXACT = "exact"
    SIMILARITY = "similarity"
    SYNONYM = "synonym"
    PLURAL = "plural"
    PARTIAL = "partial"
    VARIATION = "variation"
    VERDICT = "verdict"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    """Result of answer matching."""
    is_match: bool
    match_type: MatchType
    confidence: float
    normalized_answer: str
    matched_answer: Optional[str] = None


MatchStrategy = Callable[[str, Sequence[str]], MatchResult]


class AnswerMatcher:
    """Dispatches an answer to the matching strategy of its question type."""

    def __init__(self,
                 reference_data: Optional[ReferenceData] = None,
                 reading_similarity_threshold: float = READING_SIMILARITY_THRESHOLD,
                 listening_similarity_threshold: float = LISTENING_SIMILARITY_THRESHOLD,
                 partial_match_min_length: int = PARTIAL_MATCH_MIN_LENGTH):
        """
        Initialize the matcher.

        Args:
            reference_data: Synonym/variation tables (packaged tables if None)
            reading_similarity_threshold: Minimum similarity for reading answers
            listening_similarity_threshold: Minimum similarity for listening answers
            partial_match_min_length: Shortest string allowed to match by containment
        """
        self.reference_data = reference_data or load_reference_data()
        self.reading_similarity_threshold = reading_similarity_threshold
        self.listening_similarity_threshold = listening_similarity_threshold
        self.partial_match_min_length = partial_match_min_length

        self._strategies: Dict[QuestionType, MatchStrategy] = {
            QuestionType.MULTIPLE_CHOICE: self.match_option,
            QuestionType.MATCHING: self.match_option,
            QuestionType.FILL_BLANK: self.match_reading,
            QuestionType.SHORT_ANSWER: self.match_reading,
            QuestionType.SENTENCE_COMPLETION: self.match_reading,
            QuestionType.TRUE_FALSE_NOT_GIVEN: self.match_true_false_not_given,
            QuestionType.FORM_COMPLETION: self.match_listening,
            QuestionType.NOTE_COMPLETION: self.match_listening,
            QuestionType.MAP_LABELING: self.match_listening,
            QuestionType.DIAGRAM_LABELING: self.match_listening,
            QuestionType.TABLE_COMPLETION: self.match_listening,
        }
        self._fallbacks: Dict[SkillArea, MatchStrategy] = {
            SkillArea.READING: self.match_reading,
            SkillArea.LISTENING: self.match_listening,
        }

    @classmethod
    def from_config(cls, evaluation_config,
                    reference_data: Optional[ReferenceData] = None) -> "AnswerMatcher":
        """Create a matcher from an EvaluationConfig."""
        if reference_data is None:
            reference_data = load_reference_data(evaluation_config.reference_data)
        return cls(
            reference_data=reference_data,
            reading_similarity_threshold=evaluation_config.reading_similarity_threshold,
            listening_similarity_threshold=evaluation_config.listening_similarity_threshold,
            partial_match_min_length=evaluation_config.partial_match_min_length,
        )

    def strategy_for(self, question_type: Union[QuestionType, str],
                     skill_area: SkillArea = SkillArea.READING) -> MatchStrategy:
        """Return the strategy for a question type, or the skill's fallback."""
        strategy = self._strategies.get(QuestionType.parse(question_type))
        if strategy is None:
            strategy = self._fallbacks.get(skill_area, self.match_reading)
        return strategy

    def match(self, answer: Optional[str], question: Question,
              skill_area: Optional[SkillArea] = None) -> MatchResult:
        """
        Match an answer against a question's answer key.

        Args:
            answer: The answer as submitted
            question: Question carrying type and acceptable answers
            skill_area: Overrides the question's own skill for fallback routing

        Returns:
            MatchResult describing the accepting rule, if any
        """
        answer = "" if answer is None else str(answer)

        if not question.correct_answers:
            return MatchResult(
                is_match=False,
                match_type=MatchType.NONE,
                confidence=0.0,
                normalized_answer=answer,
            )

        strategy = self.strategy_for(question.question_type, skill_area or question.skill_area)
        return strategy(answer, question.correct_answers)

    def match_option(self, answer: str, correct_answers: Sequence[str]) -> MatchResult:
        """Exact, case-sensitive option key membership (multiple choice, matching)."""
        is_match = answer in correct_answers
        return MatchResult(
            is_match=is_match,
            match_type=MatchType.EXACT if is_match else MatchType.NONE,
            confidence=1.0 if is_match else 0.0,
            normalized_answer=answer,
            matched_answer=answer if is_match else None,
        )

    def match_reading(self, answer: str, correct_answers: Sequence[str]) -> MatchResult:
        """Fuzzy matching for written reading answers; first accepted candidate wins."""
        norm_answer = normalize_for_reading(answer)
        best_score = 0.0

        for correct in correct_answers:
            norm_correct = normalize_for_reading(correct)

            if norm_answer == norm_correct:
                return self._accept(MatchType.EXACT, 1.0, norm_answer, correct)

            score = similarity(norm_answer, norm_correct)
            best_score = max(best_score, score)
            if score >= self.reading_similarity_threshold:
                return self._accept(MatchType.SIMILARITY, score, norm_answer, correct)

            if self.reference_data.are_synonyms(norm_answer, norm_correct):
                return self._accept(MatchType.SYNONYM, 1.0, norm_answer, correct)

            if self.reference_data.are_plural_variants(norm_answer, norm_correct):
                return self._accept(MatchType.PLURAL, 1.0, norm_answer, correct)

            if is_partial_match(norm_answer, norm_correct, self.partial_match_min_length):
                return self._accept(MatchType.PARTIAL, score, norm_answer, correct)

        return self._reject(best_score, norm_answer)

    def match_listening(self, answer: str, correct_answers: Sequence[str]) -> MatchResult:
        """Lenient matching for answers transcribed from audio."""
        norm_answer = normalize_for_listening(answer)
        best_score = 0.0

        for correct in correct_answers:
            norm_correct = normalize_for_listening(correct)

            if norm_answer == norm_correct:
                return self._accept(MatchType.EXACT, 1.0, norm_answer, correct)

            if self.reference_data.matches_variation_group(norm_answer, norm_correct):
                return self._accept(MatchType.VARIATION, 1.0, norm_answer, correct)

            score = similarity(norm_answer, norm_correct)
            best_score = max(best_score, score)
            if score >= self.listening_similarity_threshold:
                return self._accept(MatchType.SIMILARITY, score, norm_answer, correct)

        return self._reject(best_score, norm_answer)

    def match_true_false_not_given(self, answer: str, correct_answers: Sequence[str]) -> MatchResult:
        """
        Compare verdicts by bucket (true / false / not given).

        Every listed answer is a key; the first one that accepts wins. When
        either side is not a recognised verdict word the normalized strings
        must be equal.
        """
        norm_answer = normalize_for_reading(answer)
        answer_bucket = self.reference_data.true_false_bucket(norm_answer)

        for key in correct_answers:
            norm_key = normalize_for_reading(key)
            key_bucket = self.reference_data.true_false_bucket(norm_key)

            if answer_bucket is not None and key_bucket is not None:
                if answer_bucket == key_bucket:
                    return self._accept(MatchType.VERDICT, 1.0, norm_answer, key)
            elif norm_answer == norm_key:
                return self._accept(MatchType.EXACT, 1.0, norm_answer, key)

        return self._reject(0.0, norm_answer)

    def suggest_closest(self, answer: str,
                        correct_answers: Sequence[str]) -> Optional[Tuple[str, float]]:
        """
        Find the acceptable answer closest to a rejected one.

        Used for review feedback only; never changes a verdict.

        Returns:
            Tuple of (acceptable answer, score in [0, 1]) or None
        """
        if not correct_answers:
            return None

        choices = {correct: normalize_for_reading(correct) for correct in correct_answers}
        best = process.extractOne(
            normalize_for_reading("" if answer is None else str(answer)),
            choices,
            processor=None,
            scorer=fuzz.ratio,
        )
        if best is None:
            return None

        _, score, correct = best
        return correct, score / 100.0

    def batch_match(self, answers: List[Optional[str]],
                    questions: List[Question]) -> List[MatchResult]:
        """Match answers to questions positionally; extra answers are ignored."""
        return [self.match(answer, question) for answer, question in zip(answers, questions)]

    @staticmethod
    def _accept(match_type: MatchType, confidence: float,
                normalized_answer: str, matched_answer: str) -> MatchResult:
        return MatchResult(
            is_match=True,
            match_type=match_type,
            confidence=confidence,
            normalized_answer=normalized_answer,
            matched_answer=matched_answer,
        )

    @staticmethod
    def _reject(confidence: float, normalized_answer: str) -> MatchResult:
        return MatchResult(
            is_match=False,
            match_type=MatchType.NONE,
            confidence=confidence,
            normalized_answer=normalized_answer,
        )
