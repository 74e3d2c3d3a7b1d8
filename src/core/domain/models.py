"""
MockView - Domain Models.

Defines the core data structures used throughout the application.
Uses dataclasses for clarity and immutability where appropriate.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (unlike round())."""
    return int(math.floor(value + 0.5))


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Difficulty(str, Enum):
    """Question difficulty levels, easiest first."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class InterviewState(str, Enum):
    """States in the interview session state machine."""
    IDLE = "idle"
    QUESTIONING = "questioning"
    COMPLETE = "complete"
    ERROR = "error"


# -----------------------------------------------------------------------------
# Question Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class QuestionTemplate:
    """Static, role-tagged question blueprint."""

    category: str
    difficulty: Difficulty
    template: str
    follow_up: tuple[str, ...] = ()


@dataclass
class GeneratedQuestion:
    """A question instance produced from a template for one interview."""

    id: str
    question: str
    category: str
    difficulty: Difficulty
    follow_up: list[str] = field(default_factory=list)
    context: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "category": self.category,
            "difficulty": self.difficulty.value,
            "follow_up": list(self.follow_up),
            "context": self.context,
        }


@dataclass
class PreviousAnswer:
    """Historical performance on one question, input to adaptive generation."""

    question: str
    score: float
    category: str


# -----------------------------------------------------------------------------
# Answer & Feedback Models
# -----------------------------------------------------------------------------

@dataclass
class AnswerFeedback:
    """Feedback text and 1-10 score for a single answer."""

    feedback: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"feedback": self.feedback, "score": self.score}


@dataclass
class AnswerRecord:
    """A persisted answer with its feedback."""

    role: str
    question: str
    answer: str
    feedback: str
    score: int
    session_id: str
    user_id: str = ""
    category: str = ""
    difficulty: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "question": self.question,
            "answer": self.answer,
            "feedback": self.feedback,
            "score": self.score,
            "session_id": self.session_id,
            "user_id": self.user_id,
            "category": self.category,
            "difficulty": self.difficulty,
            "created_at": self.created_at.isoformat(),
        }


# -----------------------------------------------------------------------------
# Interview Session Models
# -----------------------------------------------------------------------------

@dataclass
class InterviewSession:
    """Complete interview session state."""

    session_id: str
    role: str
    user_id: str = ""
    state: InterviewState = InterviewState.IDLE

    questions: list[GeneratedQuestion] = field(default_factory=list)
    current_index: int = 0
    records: list[AnswerRecord] = field(default_factory=list)

    started_at: datetime | None = None
    ended_at: datetime | None = None

    @property
    def current_question(self) -> GeneratedQuestion | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def duration_minutes(self) -> float:
        """Get session duration in minutes."""
        if not self.started_at:
            return 0.0
        end = self.ended_at or datetime.now()
        return (end - self.started_at).total_seconds() / 60

    @property
    def average_score(self) -> float:
        """Get average score across all answered questions."""
        if not self.records:
            return 0.0
        return sum(r.score for r in self.records) / len(self.records)


@dataclass
class SessionSummary:
    """Summary returned when an interview session ends."""

    session_id: str
    role: str
    total_questions: int
    answered_questions: int
    average_score: int
    duration_minutes: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "role": self.role,
            "total_questions": self.total_questions,
            "answered_questions": self.answered_questions,
            "average_score": self.average_score,
            "duration_minutes": round(self.duration_minutes, 1),
        }


# -----------------------------------------------------------------------------
# Progress Statistics Models
# -----------------------------------------------------------------------------

@dataclass
class RoleStats:
    """Per-role performance across all stored answers."""

    role: str
    sessions: int
    average_score: int
    total_questions: int


@dataclass
class DashboardStats:
    """Aggregate progress figures for a user."""

    completed_sessions: int = 0
    total_questions: int = 0
    average_score: int = 0
    success_rate: int = 0
    best_role: str = "N/A"
    recent_activity: int = 0
    improvement_trend: int = 0
    role_stats: list[RoleStats] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "completed_sessions": self.completed_sessions,
            "total_questions": self.total_questions,
            "average_score": self.average_score,
            "success_rate": self.success_rate,
            "best_role": self.best_role,
            "recent_activity": self.recent_activity,
            "improvement_trend": self.improvement_trend,
            "role_stats": [
                {
                    "role": rs.role,
                    "sessions": rs.sessions,
                    "average_score": rs.average_score,
                    "total_questions": rs.total_questions,
                }
                for rs in self.role_stats
            ],
        }


@dataclass
class SessionHistory:
    """One past interview session, grouped from its answer records."""

    session_id: str
    role: str
    created_at: datetime
    records: list[AnswerRecord] = field(default_factory=list)

    @property
    def average_score(self) -> int:
        if not self.records:
            return 0
        return round_half_up(sum(r.score for r in self.records) / len(self.records))
