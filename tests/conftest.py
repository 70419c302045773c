"""
Pytest Configuration

Global test configuration, fixtures, and utilities for the band engine
test suite.
"""

import pytest
import tempfile
from pathlib import Path

# Add src to Python path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from band_engine.core.config import AppConfig, EvaluationConfig, LoggingConfig, set_config
from band_engine.evaluation.evaluator import AnswerEvaluator
from band_engine.evaluation.matcher import AnswerMatcher
from band_engine.evaluation.reference_data import load_reference_data
from band_engine.scoring.band_scorer import BandScorer
from band_engine.types import Question, QuestionType, SkillArea


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_config(temp_dir):
    """Provide test configuration."""
    return AppConfig(
        name="Test Band Engine",
        version="test",
        debug=True,
        evaluation=EvaluationConfig(),
        logging=LoggingConfig(
            level="DEBUG",
            file=str(temp_dir / "test.log")
        ),
    )


@pytest.fixture(autouse=True)
def reset_global_config():
    """Keep the process-wide configuration from leaking between tests."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def reference_data():
    """Packaged reference tables."""
    return load_reference_data()


@pytest.fixture
def matcher(reference_data):
    """Matcher with default thresholds."""
    return AnswerMatcher(reference_data=reference_data)


@pytest.fixture
def evaluator(matcher):
    """Evaluator with default matcher and band tables."""
    return AnswerEvaluator(matcher=matcher, scorer=BandScorer())


@pytest.fixture
def reading_questions():
    """A small reading section mixing question types."""
    return [
        Question(QuestionType.MULTIPLE_CHOICE, ["B"], SkillArea.READING, question_id=1),
        Question(QuestionType.FILL_BLANK, ["receive"], SkillArea.READING, question_id=2),
        Question(QuestionType.TRUE_FALSE_NOT_GIVEN, ["Not Given"], SkillArea.READING, question_id=3),
        Question(QuestionType.SHORT_ANSWER, ["children"], SkillArea.READING, question_id=4),
        Question(QuestionType.SENTENCE_COMPLETION, ["large"], SkillArea.READING, question_id=5),
    ]


@pytest.fixture
def listening_questions():
    """A small listening section."""
    return [
        Question(QuestionType.FORM_COMPLETION, ["2:30"], SkillArea.LISTENING, question_id=1),
        Question(QuestionType.NOTE_COMPLETION, ["centre"], SkillArea.LISTENING, question_id=2),
        Question(QuestionType.MAP_LABELING, ["library"], SkillArea.LISTENING, question_id=3),
        Question(QuestionType.MULTIPLE_CHOICE, ["C"], SkillArea.LISTENING, question_id=4),
    ]


@pytest.fixture
def question_set_file(temp_dir):
    """Write a YAML question-set file and return its path."""
    def _write(content: str, name: str = "questions.yaml") -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


# Custom markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
