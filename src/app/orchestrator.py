"""
MockView - Interview Orchestrator.

Manages the interview session state machine and coordinates:
- QuestionGenerator for the session's question list
- Feedback service for scoring answers
- AnswerRepository for persisting every answer

State Flow:
IDLE -> QUESTIONING -> COMPLETE

A failed answer (feedback or storage error) moves the session to ERROR
without advancing. Answering or skipping that question again returns the
session to QUESTIONING (or COMPLETE after the last question).
"""

import logging
import random
import uuid
from datetime import datetime
from typing import Callable, Sequence

from src.core.config import get_settings
from src.core.domain.models import (
    AnswerRecord,
    Difficulty,
    GeneratedQuestion,
    InterviewSession,
    InterviewState,
    SessionSummary,
    round_half_up,
)
from src.core.exceptions import (
    EmptyAnswerError,
    InvalidSessionStateError,
    SessionError,
)
from src.app.question_generator import QuestionGenerator
from src.app.stats import to_previous_answers
from src.infra.llm.gemini import BaseFeedbackService, create_feedback_service
from src.infra.persistence.repository import AnswerRepository


logger = logging.getLogger(__name__)

# States in which the current question can be answered or skipped
ANSWERABLE_STATES = (InterviewState.QUESTIONING, InterviewState.ERROR)


class InterviewOrchestrator:
    """
    Drives one interview session.

    Every orchestrator owns its own QuestionGenerator, so used-question
    tracking is scoped to the session.

    Usage:
        orchestrator = InterviewOrchestrator()

        # Start session
        session_id = orchestrator.start_session("Data Scientist", user_id="u1")

        # Answer questions until complete
        while orchestrator.state == InterviewState.QUESTIONING:
            question = orchestrator.current_question
            record = await orchestrator.submit_answer("...")

        # End session
        summary = orchestrator.end_session()
    """

    def __init__(
        self,
        feedback: BaseFeedbackService | None = None,
        repository: AnswerRepository | None = None,
        generator: QuestionGenerator | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the orchestrator with all components.

        Args:
            feedback: Answer scoring service (created if not provided)
            repository: Answer persistence (created if not provided)
            generator: Question generator (a fresh one if not provided)
            rng: Random source for a newly created generator
        """
        self._settings = get_settings()

        self._feedback = feedback or create_feedback_service()
        self._repository = repository or AnswerRepository()
        self._generator = generator or QuestionGenerator(
            rng=rng,
            weak_threshold=self._settings.WEAK_CATEGORY_THRESHOLD,
        )

        self._session: InterviewSession | None = None
        self._count = self._settings.DEFAULT_QUESTION_COUNT

        self._on_state_change: Callable[[InterviewState], None] | None = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def session(self) -> InterviewSession | None:
        """Get current session."""
        return self._session

    @property
    def generator(self) -> QuestionGenerator:
        return self._generator

    @property
    def state(self) -> InterviewState:
        """Get current interview state."""
        if self._session:
            return self._session.state
        return InterviewState.IDLE

    @property
    def current_question(self) -> GeneratedQuestion | None:
        if not self._session or self._session.state not in ANSWERABLE_STATES:
            return None
        return self._session.current_question

    @property
    def progress(self) -> tuple[int, int]:
        """(1-based number of the current question, total questions)."""
        if not self._session:
            return 0, 0
        total = len(self._session.questions)
        return min(self._session.current_index + 1, total), total

    # -------------------------------------------------------------------------
    # Callbacks
    # -------------------------------------------------------------------------

    def set_on_state_change(self, callback: Callable[[InterviewState], None]) -> None:
        """Set callback for state changes."""
        self._on_state_change = callback

    def _update_state(self, new_state: InterviewState) -> None:
        """Update session state and notify callback."""
        if self._session:
            self._session.state = new_state
            logger.info(f"State: {new_state.value}")
            if self._on_state_change:
                self._on_state_change(new_state)

    # -------------------------------------------------------------------------
    # Session Management
    # -------------------------------------------------------------------------

    def start_session(
        self,
        role: str,
        user_id: str = "",
        count: int | None = None,
        difficulty: Difficulty | str | None = None,
        categories: Sequence[str] | None = None,
        adaptive: bool = False,
    ) -> str:
        """
        Start a new interview session.

        Args:
            role: Job role to interview for
            user_id: Owner of the stored answers
            count: Number of questions (defaults to DEFAULT_QUESTION_COUNT)
            difficulty: Fixed difficulty (ignored when adaptive)
            categories: Allowed categories (ignored when adaptive)
            adaptive: Pick difficulty and focus from the user's history

        Returns:
            Session ID

        Raises:
            UnknownRoleError: If the role has no questions
            SessionError: If no questions match the filters
        """
        self._count = count if count is not None else self._settings.DEFAULT_QUESTION_COUNT

        if adaptive:
            history = self._repository.list_user(user_id, role=role) if user_id else []
            questions = self._generator.generate_adaptive_questions(
                role, to_previous_answers(history), self._count,
            )
        else:
            questions = self._generator.generate_questions(
                role, self._count, difficulty, categories,
            )

        if not questions:
            raise SessionError(
                "No questions match the requested filters",
                details=f"role={role}, difficulty={difficulty}, categories={categories}",
            )

        session_id = str(uuid.uuid4())[:8]
        self._session = InterviewSession(
            session_id=session_id,
            role=role,
            user_id=user_id,
            questions=questions,
            started_at=datetime.now(),
        )

        logger.info(f"🎙️ Interview session started: {session_id} ({role}, {len(questions)} questions)")
        self._update_state(InterviewState.QUESTIONING)

        return session_id

    def restart(self) -> str:
        """Start a fresh session for the same role and user."""
        session = self._require_session()
        return self.start_session(session.role, session.user_id, self._count)

    async def submit_answer(self, answer: str) -> AnswerRecord:
        """
        Score, persist and record an answer to the current question.

        Moves to the next question, or to COMPLETE after the last one.
        On failure the session moves to ERROR and stays on the same
        question, so the answer can be resubmitted.

        Raises:
            SessionError: If no session has been started
            InvalidSessionStateError: If the session is complete
            EmptyAnswerError: If the answer is blank
        """
        session = self._require_questioning()
        if not answer or not answer.strip():
            raise EmptyAnswerError()

        question = session.current_question

        try:
            feedback = await self._feedback.evaluate(
                question=question.question,
                answer=answer,
                role=session.role,
            )

            record = AnswerRecord(
                role=session.role,
                question=question.question,
                answer=answer,
                feedback=feedback.feedback,
                score=feedback.score,
                session_id=session.session_id,
                user_id=session.user_id,
                category=question.category,
                difficulty=question.difficulty.value,
            )
            self._repository.save(record)

        except Exception as e:
            logger.error(f"Error processing answer: {e}")
            self._update_state(InterviewState.ERROR)
            raise

        session.records.append(record)
        logger.info(f"✅ Answer {len(session.records)} scored {record.score}/10")

        self._advance()
        return record

    def skip_question(self) -> GeneratedQuestion | None:
        """Move past the current question without recording an answer."""
        self._require_questioning()
        self._advance()
        return self.current_question

    def end_session(self) -> SessionSummary:
        """
        End the interview session.

        Returns:
            Session summary
        """
        session = self._require_session()

        session.ended_at = datetime.now()
        if session.state != InterviewState.COMPLETE:
            self._update_state(InterviewState.COMPLETE)

        summary = SessionSummary(
            session_id=session.session_id,
            role=session.role,
            total_questions=len(session.questions),
            answered_questions=len(session.records),
            average_score=round_half_up(session.average_score),
            duration_minutes=session.duration_minutes,
        )

        logger.info(f"🏁 Interview complete: {summary.to_dict()}")
        return summary

    def reset(self) -> None:
        """Reset the orchestrator for a new session."""
        self._session = None
        self._generator.reset_used_questions()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _advance(self) -> None:
        session = self._session
        if session.is_last_question:
            session.current_index = len(session.questions)
            self._update_state(InterviewState.COMPLETE)
        else:
            session.current_index += 1
            if session.state == InterviewState.ERROR:
                self._update_state(InterviewState.QUESTIONING)

    def _require_session(self) -> InterviewSession:
        if not self._session:
            raise SessionError("No active session")
        return self._session

    def _require_questioning(self) -> InterviewSession:
        session = self._require_session()
        if session.state not in ANSWERABLE_STATES:
            raise InvalidSessionStateError(
                session.state.value, InterviewState.QUESTIONING.value,
            )
        return session


# -----------------------------------------------------------------------------
# Factory Function
# -----------------------------------------------------------------------------

def create_orchestrator(
    feedback: BaseFeedbackService | None = None,
    repository: AnswerRepository | None = None,
) -> InterviewOrchestrator:
    """Create an orchestrator with its own question generator."""
    return InterviewOrchestrator(
        feedback=feedback or create_feedback_service(),
        repository=repository or AnswerRepository(),
        generator=None,
    )
