"""
Pytest configuration and fixtures for MockView tests.
"""

import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest


# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.app.question_generator import QuestionGenerator  # noqa: E402
from src.core.domain.models import AnswerFeedback, AnswerRecord  # noqa: E402
from src.infra.llm.gemini import BaseFeedbackService  # noqa: E402
from src.infra.persistence.repository import AnswerRepository  # noqa: E402


class FakeFeedbackService(BaseFeedbackService):
    """Feedback service returning scripted scores in order, then repeating the last."""

    def __init__(self, scores=(7,)):
        self.scores = list(scores)
        self.calls: list[tuple[str, str, str]] = []

    async def evaluate(self, question: str, answer: str, role: str) -> AnswerFeedback:
        self.calls.append((question, answer, role))
        index = min(len(self.calls) - 1, len(self.scores) - 1)
        score = self.scores[index]
        return AnswerFeedback(feedback=f"Scored {score}/10", score=score)


class NoShuffleRandom(random.Random):
    """Random source whose Fisher-Yates swaps are all no-ops."""

    def randint(self, a, b):
        return b


@pytest.fixture(scope="session")
def project_root_path():
    """Return the project root directory."""
    return project_root


@pytest.fixture
def generator():
    """Generator with a seeded random source."""
    return QuestionGenerator(rng=random.Random(42))


@pytest.fixture
def ordered_generator():
    """Generator that keeps templates in catalog order."""
    return QuestionGenerator(rng=NoShuffleRandom())


@pytest.fixture
def repository(tmp_path):
    """Answer repository in a temporary directory."""
    return AnswerRepository(data_dir=str(tmp_path / "answers"))


@pytest.fixture
def fake_feedback():
    return FakeFeedbackService()


@pytest.fixture
def make_record():
    """Factory for answer records with sensible defaults."""

    def _make(
        score: int,
        session_id: str = "s1",
        role: str = "Backend Developer",
        category: str = "API Design",
        user_id: str = "user-1",
        created_at: datetime | None = None,
        minutes_ago: int = 0,
    ) -> AnswerRecord:
        return AnswerRecord(
            role=role,
            question=f"Question about {category}",
            answer="My answer",
            feedback="Feedback",
            score=score,
            session_id=session_id,
            user_id=user_id,
            category=category,
            difficulty="beginner",
            created_at=created_at or datetime.now() - timedelta(minutes=minutes_ago),
        )

    return _make


@pytest.fixture
def feedback_factory():
    """The scripted feedback service class, for tests needing custom scores."""
    return FakeFeedbackService
