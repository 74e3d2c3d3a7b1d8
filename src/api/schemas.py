"""
MockView - API Request/Response Schemas.

Pydantic models for API validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.core.domain.models import Difficulty


# =============================================================================
# Request Schemas
# =============================================================================

class GenerateQuestionsRequest(BaseModel):
    """Request a batch of questions for a role."""
    role: str = Field(..., min_length=1, description="Job role, e.g. 'Backend Developer'")
    count: int = Field(default=5, ge=0, le=50, description="Number of questions")
    difficulty: Optional[Difficulty] = Field(default=None, description="Restrict to one level")
    categories: Optional[list[str]] = Field(default=None, description="Restrict to these categories")


class PreviousAnswerSchema(BaseModel):
    """Score achieved on an earlier question."""
    question: str
    score: float = Field(..., ge=1, le=10)
    category: str


class AdaptiveQuestionsRequest(BaseModel):
    """Request questions adapted to previous performance."""
    role: str = Field(..., min_length=1)
    previous_answers: list[PreviousAnswerSchema] = Field(default_factory=list)
    count: int = Field(default=5, ge=0, le=50)


class StartSessionRequest(BaseModel):
    """Request to start a new interview session."""
    role: str = Field(..., min_length=1)
    user_id: str = Field(default="", description="Owner of the stored answers")
    count: int = Field(default=5, ge=1, le=50)
    difficulty: Optional[Difficulty] = None
    categories: Optional[list[str]] = None
    adaptive: bool = Field(default=False, description="Adapt to the user's history")


class SubmitAnswerRequest(BaseModel):
    """Request to submit a text answer."""
    session_id: str
    answer_text: str = Field(..., min_length=1, description="Candidate's answer")


# =============================================================================
# Response Schemas
# =============================================================================

class QuestionSchema(BaseModel):
    """A generated interview question."""
    id: str
    question: str
    category: str
    difficulty: Difficulty
    follow_up: list[str] = Field(default_factory=list)
    context: str = ""


class QuestionsResponse(BaseModel):
    """A batch of generated questions."""
    role: str
    questions: list[QuestionSchema]


class SessionResponse(BaseModel):
    """Response after starting a session."""
    session_id: str
    status: str
    message: str
    total_questions: int


class QuestionResponse(BaseModel):
    """Response containing the current interview question."""
    session_id: str
    question_number: int
    total_questions: int
    question: Optional[QuestionSchema] = None
    complete: bool = False


class AnswerResultResponse(BaseModel):
    """Feedback after submitting an answer."""
    session_id: str
    question: str
    feedback: str
    score: int
    complete: bool


class SessionSummaryResponse(BaseModel):
    """Summary returned when a session ends."""
    session_id: str
    role: str
    total_questions: int
    answered_questions: int
    average_score: int
    duration_minutes: float


class AnswerRecordSchema(BaseModel):
    """One stored answer."""
    role: str
    question: str
    answer: str
    feedback: str
    score: int
    category: str = ""
    difficulty: str = ""
    created_at: datetime


class SessionHistorySchema(BaseModel):
    """One past interview with its answers."""
    session_id: str
    role: str
    created_at: datetime
    average_score: int
    questions: list[AnswerRecordSchema]


class HistoryResponse(BaseModel):
    """A user's interview history."""
    user_id: str
    sessions: list[SessionHistorySchema]


class RoleStatsSchema(BaseModel):
    role: str
    sessions: int
    average_score: int
    total_questions: int


class DashboardStatsResponse(BaseModel):
    """Aggregate progress for a user."""
    user_id: str
    completed_sessions: int
    total_questions: int
    average_score: int
    success_rate: int
    best_role: str
    recent_activity: int
    improvement_trend: int
    role_stats: list[RoleStatsSchema]


class ErrorResponse(BaseModel):
    """Body of every HTTPException raised by the routes."""
    detail: str
