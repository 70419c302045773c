"""
Band Scoring

Converts correct/total counts for a skill area into an accuracy percentage
and a proficiency band using fixed, skill-specific step tables. The tables
are hand-tuned lookup curves and must not be changed: historical score
reports depend on every threshold value.
"""

import math
from typing import Dict, Iterable, Optional, Tuple, Union
from dataclasses import dataclass

from ..types import AggregateOutcome, SkillArea
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Returned when there is nothing to score; never a real band
NO_DATA_BAND = 0.0


@dataclass(frozen=True)
class BandTable:
    """Descending (minimum percentage, band) steps with a floor band."""
    steps: Tuple[Tuple[int, float], ...]
    floor: float

    def band_for_counts(self, correct: int, total: int) -> float:
        # Exact rational comparison: 100 * correct / total >= threshold
        for threshold, band in self.steps:
            if 100 * correct >= threshold * total:
                return band
        return self.floor

    def band_for_percentage(self, percentage: float) -> float:
        for threshold, band in self.steps:
            if percentage >= threshold:
                return band
        return self.floor


READING_BAND_TABLE = BandTable(
    steps=(
        (95, 9.0), (89, 8.5), (83, 8.0), (75, 7.5), (67, 7.0), (58, 6.5), (50, 6.0),
        (42, 5.5), (33, 5.0), (25, 4.5), (17, 4.0), (8, 3.5), (4, 3.0),
    ),
    floor=2.5,
)

LISTENING_BAND_TABLE = BandTable(
    steps=(
        (97, 9.0), (92, 8.5), (87, 8.0), (80, 7.5), (72, 7.0), (65, 6.5), (57, 6.0),
        (50, 5.5), (42, 5.0), (35, 4.5), (27, 4.0), (20, 3.5), (12, 3.0),
    ),
    floor=2.5,
)

BAND_TABLES: Dict[SkillArea, BandTable] = {
    SkillArea.READING: READING_BAND_TABLE,
    SkillArea.LISTENING: LISTENING_BAND_TABLE,
}


@dataclass(frozen=True)
class ScoreReport:
    """Accuracy and band for one skill area."""
    accuracy_percentage: float
    band: float
    skill_area: SkillArea
    correct_count: int = 0
    total_count: int = 0

    @property
    def is_scoreable(self) -> bool:
        """False for the no-data sentinel report."""
        return self.total_count > 0

    def to_dict(self) -> Dict[str, object]:
        return {
            'skill_area': self.skill_area.value,
            'correct': self.correct_count,
            'total': self.total_count,
            'accuracy_percentage': self.accuracy_percentage,
            'band': self.band,
        }


class BandScorer:
    """Maps accuracy to proficiency bands; stateless and thread-safe."""

    def __init__(self, tables: Optional[Dict[SkillArea, BandTable]] = None):
        self.tables = dict(tables or BAND_TABLES)

    def table_for(self, skill_area: Union[SkillArea, str]) -> Tuple[SkillArea, BandTable]:
        skill = SkillArea.parse(skill_area)
        if skill is None or skill not in self.tables:
            logger.warning(f"Unknown skill area {skill_area!r}; using the reading band table")
            skill = SkillArea.READING
        return skill, self.tables[skill]

    def score(self, correct: int, total: int, skill_area: Union[SkillArea, str]) -> ScoreReport:
        """
        Score a skill area from its aggregate counts.

        Args:
            correct: Number of correct answers
            total: Number of questions
            skill_area: "reading" or "listening"

        Returns:
            ScoreReport; band is NO_DATA_BAND when total is zero
        """
        skill, table = self.table_for(skill_area)

        if total <= 0:
            return ScoreReport(
                accuracy_percentage=0.0,
                band=NO_DATA_BAND,
                skill_area=skill,
                correct_count=0,
                total_count=0,
            )

        if correct < 0 or correct > total:
            logger.warning(f"Correct count {correct} outside [0, {total}]; clamping")
            correct = min(max(correct, 0), total)

        return ScoreReport(
            accuracy_percentage=100.0 * correct / total,
            band=table.band_for_counts(correct, total),
            skill_area=skill,
            correct_count=correct,
            total_count=total,
        )

    def score_outcome(self, outcome: AggregateOutcome) -> ScoreReport:
        """Score an AggregateOutcome folded from evaluation results."""
        return self.score(outcome.correct_count, outcome.total_count, outcome.skill_area)

    def band_for_accuracy(self, accuracy_percentage: float,
                          skill_area: Union[SkillArea, str]) -> float:
        """Band for an already-computed accuracy percentage."""
        _, table = self.table_for(skill_area)
        return table.band_for_percentage(accuracy_percentage)


def overall_band(bands: Iterable[float]) -> float:
    """
    Mean of module bands rounded to the nearest half band, halves rounding up.

    Args:
        bands: Module bands, e.g. reading, listening, writing, speaking

    Returns:
        Overall band, or NO_DATA_BAND for no bands
    """
    bands = list(bands)
    if not bands:
        return NO_DATA_BAND

    mean = sum(bands) / len(bands)
    return math.floor(mean * 2 + 0.5) / 2


_default_scorer = BandScorer()


def score(correct_count: int, total_count: int, skill_area: Union[SkillArea, str]) -> ScoreReport:
    """Score a skill area with the standard band tables."""
    return _default_scorer.score(correct_count, total_count, skill_area)
