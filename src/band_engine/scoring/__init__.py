"""
Scoring Module

Accuracy-to-band conversion for reading and listening.
"""

from .band_scorer import (
    BandScorer,
    BandTable,
    ScoreReport,
    NO_DATA_BAND,
    READING_BAND_TABLE,
    LISTENING_BAND_TABLE,
    overall_band,
    score,
)

__all__ = [
    "BandScorer",
    "BandTable",
    "ScoreReport",
    "NO_DATA_BAND",
    "READING_BAND_TABLE",
    "LISTENING_BAND_TABLE",
    "overall_band",
    "score",
]
