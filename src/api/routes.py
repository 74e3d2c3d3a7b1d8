"""
MockView - API Routes.

FastAPI router with catalog, question generation, interview session
and progress endpoints. Answer submission is rate limited because it
calls the feedback model.
"""

import logging
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.api.schemas import (
    AdaptiveQuestionsRequest,
    AnswerRecordSchema,
    AnswerResultResponse,
    DashboardStatsResponse,
    ErrorResponse,
    GenerateQuestionsRequest,
    HistoryResponse,
    QuestionResponse,
    QuestionSchema,
    QuestionsResponse,
    RoleStatsSchema,
    SessionHistorySchema,
    SessionResponse,
    SessionSummaryResponse,
    StartSessionRequest,
    SubmitAnswerRequest,
)
from src.app.orchestrator import InterviewOrchestrator
from src.app.question_generator import QuestionGenerator
from src.app.stats import compute_dashboard_stats, group_sessions
from src.core.config import get_settings
from src.core.domain.models import GeneratedQuestion, PreviousAnswer
from src.core.exceptions import (
    SessionError,
    SessionNotFoundError,
    UnknownRoleError,
)
from src.core.question_bank import default_bank
from src.infra.llm.gemini import BaseFeedbackService, create_feedback_service
from src.infra.persistence.repository import AnswerRepository


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["interview"])

# OpenAPI documentation for the HTTPException bodies each route can return
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Unknown role or session"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid session operation"}}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Answer could not be processed"}}

# Rate limiting keyed by client IP
limiter = Limiter(key_func=get_remote_address)

# Live interview sessions (one orchestrator, and so one generator, each)
sessions: Dict[str, InterviewOrchestrator] = {}

# Session timestamps for cleanup
session_created: Dict[str, datetime] = {}


# =============================================================================
# Dependencies
# =============================================================================

@lru_cache
def get_answer_repo() -> AnswerRepository:
    """Shared answer repository."""
    return AnswerRepository()


@lru_cache
def get_feedback_service() -> BaseFeedbackService:
    """Shared feedback service."""
    return create_feedback_service()


def get_orchestrator(session_id: str) -> InterviewOrchestrator:
    """Get orchestrator for a live session."""
    orchestrator = sessions.get(session_id)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail=str(SessionNotFoundError(session_id)))
    return orchestrator


def cleanup_stale_sessions() -> int:
    """
    Remove sessions older than SESSION_TIMEOUT_HOURS.
    Returns the number of sessions cleaned up.
    """
    if not session_created:
        return 0

    cutoff = datetime.now() - timedelta(hours=get_settings().SESSION_TIMEOUT_HOURS)
    stale_sessions = [
        sid for sid, created in session_created.items()
        if created < cutoff
    ]

    for sid in stale_sessions:
        sessions.pop(sid, None)
        session_created.pop(sid, None)
        logger.info(f"Cleaned up stale session: {sid}")

    return len(stale_sessions)


def get_active_session_count() -> int:
    """Get count of active sessions for monitoring."""
    return len(sessions)


def _question_schema(question: GeneratedQuestion) -> QuestionSchema:
    return QuestionSchema(**question.to_dict())


# =============================================================================
# Catalog
# =============================================================================

@router.get("/roles")
async def list_roles() -> Dict:
    """List roles that have question templates."""
    return {"roles": default_bank.roles()}


@router.get("/roles/{role}/categories")
async def list_categories(role: str) -> Dict:
    """List question categories for a role (empty for unknown roles)."""
    return {"role": role, "categories": default_bank.categories_for(role)}


@router.get("/difficulties")
async def list_difficulties() -> Dict:
    """List difficulty levels, easiest first."""
    return {"difficulties": [d.value for d in default_bank.difficulty_levels()]}


# =============================================================================
# Question Generation
# =============================================================================

@router.post("/questions/generate", response_model=QuestionsResponse, responses=NOT_FOUND)
async def generate_questions(request: GenerateQuestionsRequest):
    """Generate a batch of questions with optional filters."""
    generator = QuestionGenerator()
    try:
        questions = generator.generate_questions(
            request.role,
            request.count,
            request.difficulty,
            request.categories,
        )
    except UnknownRoleError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return QuestionsResponse(
        role=request.role,
        questions=[_question_schema(q) for q in questions],
    )


@router.post("/questions/adaptive", response_model=QuestionsResponse, responses=NOT_FOUND)
async def generate_adaptive_questions(request: AdaptiveQuestionsRequest):
    """Generate questions adapted to the scores of previous answers."""
    generator = QuestionGenerator(
        weak_threshold=get_settings().WEAK_CATEGORY_THRESHOLD,
    )
    previous = [
        PreviousAnswer(question=a.question, score=a.score, category=a.category)
        for a in request.previous_answers
    ]
    try:
        questions = generator.generate_adaptive_questions(request.role, previous, request.count)
    except UnknownRoleError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return QuestionsResponse(
        role=request.role,
        questions=[_question_schema(q) for q in questions],
    )


# =============================================================================
# Session Management
# =============================================================================

@router.post("/session/start", response_model=SessionResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def start_session(
    request: StartSessionRequest,
    repo: AnswerRepository = Depends(get_answer_repo),
    feedback: BaseFeedbackService = Depends(get_feedback_service),
):
    """Start a new interview session."""
    cleanup_stale_sessions()

    orchestrator = InterviewOrchestrator(feedback=feedback, repository=repo)
    try:
        session_id = orchestrator.start_session(
            role=request.role,
            user_id=request.user_id,
            count=request.count,
            difficulty=request.difficulty,
            categories=request.categories,
            adaptive=request.adaptive,
        )
    except UnknownRoleError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    sessions[session_id] = orchestrator
    session_created[session_id] = datetime.now()

    logger.info(f"Started session {session_id}. Active sessions: {len(sessions)}")

    return SessionResponse(
        session_id=session_id,
        status="started",
        message="Interview session started. Ready for first question.",
        total_questions=len(orchestrator.session.questions),
    )


@router.get("/session/question", response_model=QuestionResponse, responses=NOT_FOUND)
async def get_current_question(session_id: str = Query(..., description="Session ID")):
    """Get the question the candidate should answer next."""
    orchestrator = get_orchestrator(session_id)
    number, total = orchestrator.progress
    question = orchestrator.current_question

    return QuestionResponse(
        session_id=session_id,
        question_number=number,
        total_questions=total,
        question=_question_schema(question) if question else None,
        complete=question is None,
    )


@router.post(
    "/answer/submit",
    response_model=AnswerResultResponse,
    responses={**NOT_FOUND, **BAD_REQUEST, **SERVER_ERROR},
)
@limiter.limit("60/hour")
async def submit_answer(request: Request, answer_request: SubmitAnswerRequest):
    """Submit an answer and get feedback. Rate-limited to protect the LLM."""
    orchestrator = get_orchestrator(answer_request.session_id)

    try:
        record = await orchestrator.submit_answer(answer_request.answer_text)
    except SessionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to process answer: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return AnswerResultResponse(
        session_id=answer_request.session_id,
        question=record.question,
        feedback=record.feedback,
        score=record.score,
        complete=orchestrator.current_question is None,
    )


@router.post("/answer/skip", response_model=QuestionResponse, responses={**NOT_FOUND, **BAD_REQUEST})
async def skip_question(session_id: str = Query(..., description="Session ID")):
    """Skip the current question."""
    orchestrator = get_orchestrator(session_id)
    try:
        question = orchestrator.skip_question()
    except SessionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    number, total = orchestrator.progress
    return QuestionResponse(
        session_id=session_id,
        question_number=number,
        total_questions=total,
        question=_question_schema(question) if question else None,
        complete=question is None,
    )


@router.post("/session/end", response_model=SessionSummaryResponse, responses=NOT_FOUND)
async def end_session(session_id: str = Query(..., description="Session ID to end")):
    """End an interview session and release it."""
    orchestrator = get_orchestrator(session_id)
    summary = orchestrator.end_session()

    sessions.pop(session_id, None)
    session_created.pop(session_id, None)

    return SessionSummaryResponse(**summary.to_dict())


# =============================================================================
# Progress
# =============================================================================

@router.get("/history/{user_id}", response_model=HistoryResponse)
async def get_history(user_id: str, repo: AnswerRepository = Depends(get_answer_repo)):
    """Past interviews for a user, newest first."""
    histories = group_sessions(repo.list_user(user_id))

    return HistoryResponse(
        user_id=user_id,
        sessions=[
            SessionHistorySchema(
                session_id=h.session_id,
                role=h.role,
                created_at=h.created_at,
                average_score=h.average_score,
                questions=[
                    AnswerRecordSchema(
                        role=r.role,
                        question=r.question,
                        answer=r.answer,
                        feedback=r.feedback,
                        score=r.score,
                        category=r.category,
                        difficulty=r.difficulty,
                        created_at=r.created_at,
                    )
                    for r in h.records
                ],
            )
            for h in histories
        ],
    )


@router.get("/stats/{user_id}", response_model=DashboardStatsResponse)
async def get_stats(user_id: str, repo: AnswerRepository = Depends(get_answer_repo)):
    """Dashboard statistics for a user."""
    stats = compute_dashboard_stats(
        repo.list_user(user_id),
        success_score=get_settings().SUCCESS_SCORE,
    )

    return DashboardStatsResponse(
        user_id=user_id,
        completed_sessions=stats.completed_sessions,
        total_questions=stats.total_questions,
        average_score=stats.average_score,
        success_rate=stats.success_rate,
        best_role=stats.best_role,
        recent_activity=stats.recent_activity,
        improvement_trend=stats.improvement_trend,
        role_stats=[RoleStatsSchema(**vars(rs)) for rs in stats.role_stats],
    )


# =============================================================================
# Health Check
# =============================================================================

@router.get("/health")
async def health_check():
    """API health check."""
    return {
        "status": "healthy",
        "service": "MockView",
        "active_sessions": get_active_session_count(),
    }
