"""
MockView - Answer Feedback Adapters.

Scores a candidate's answer and returns written feedback.
Uses Google Gemini when an API key is configured and falls back to
canned mock feedback otherwise, or when the model call fails.
"""

from __future__ import annotations

import logging
import random
import re
from abc import ABC, abstractmethod

import google.generativeai as genai
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from src.core.config import get_settings
from src.core.domain.models import AnswerFeedback
from src.core.exceptions import (
    LLMConnectionError,
    LLMRateLimitError,
    LLMResponseError,
    MissingAPIKeyError,
)
from src.core.prompts import FEEDBACK_PROMPT, FEEDBACK_SYSTEM, MOCK_FEEDBACK

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"(\d+)/10")
MIN_SCORE = 1
MAX_SCORE = 10


class BaseFeedbackService(ABC):
    """Abstract base class for answer feedback services."""

    @abstractmethod
    async def evaluate(self, question: str, answer: str, role: str) -> AnswerFeedback:
        """Return feedback text and a 1-10 score for an answer."""
        pass


class MockFeedbackService(BaseFeedbackService):
    """Returns one of a fixed set of feedback/score pairs."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    async def evaluate(self, question: str, answer: str, role: str) -> AnswerFeedback:
        feedback, score = self._rng.choice(MOCK_FEEDBACK)
        return AnswerFeedback(feedback=feedback, score=score)


class GeminiFeedbackService(BaseFeedbackService):
    """
    Gemini-powered answer reviewer.

    The model is asked for strengths, improvements and a "N/10" score;
    the score is pulled out of the text with a regex.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model=None,
        fallback: BaseFeedbackService | None = None,
        rng: random.Random | None = None,
    ):
        self._settings = get_settings()
        self._api_key = api_key if api_key is not None else self._settings.GEMINI_API_KEY
        self._model = model
        self._configured = model is not None
        self._rng = rng or random.Random()
        self._fallback = fallback or MockFeedbackService(self._rng)

    def _configure(self) -> None:
        """Configure the Gemini API client (lazy initialization)."""
        if self._configured:
            return

        if not self._api_key:
            raise MissingAPIKeyError("GEMINI_API_KEY")

        genai.configure(api_key=self._api_key)
        self._model = genai.GenerativeModel(
            self._settings.GEMINI_MODEL,
            system_instruction=FEEDBACK_SYSTEM,
        )
        self._configured = True
        logger.info("✅ Gemini API configured")

    async def evaluate(self, question: str, answer: str, role: str) -> AnswerFeedback:
        """Evaluate an answer, degrading to mock feedback on any failure."""
        try:
            self._configure()
            prompt = FEEDBACK_PROMPT.format(role=role, question=question, answer=answer)
            text = await self._generate(prompt)
        except MissingAPIKeyError:
            logger.warning("GEMINI_API_KEY not set, using mock feedback")
            return await self._fallback.evaluate(question, answer, role)
        except Exception as e:
            logger.warning(f"Feedback generation failed, using mock feedback: {e}")
            return await self._fallback.evaluate(question, answer, role)

        return AnswerFeedback(feedback=text, score=self.parse_score(text))

    def parse_score(self, text: str) -> int:
        """Extract an "N/10" score, clamped to 1-10; random 6-8 if absent."""
        match = SCORE_PATTERN.search(text)
        if not match:
            return self._rng.randint(6, 8)
        return max(MIN_SCORE, min(MAX_SCORE, int(match.group(1))))

    @retry(
        retry=retry_if_exception_type(LLMRateLimitError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _generate(self, prompt: str) -> str:
        """Internal method to call Gemini API."""
        try:
            generation_config = genai.GenerationConfig(
                temperature=self._settings.FEEDBACK_TEMPERATURE,
                max_output_tokens=self._settings.FEEDBACK_MAX_TOKENS,
            )

            response = await self._model.generate_content_async(
                prompt,
                generation_config=generation_config,
            )

            if not response.text:
                raise LLMResponseError("Empty response from Gemini")

            return response.text.strip()

        except LLMResponseError:
            raise
        except genai.types.BlockedPromptException as e:
            logger.warning(f"Prompt blocked: {e}")
            raise LLMResponseError("Content was blocked by safety filters")
        except Exception as e:
            error_str = str(e).lower()
            if "429" in error_str or "rate" in error_str:
                raise LLMRateLimitError("Gemini", retry_after=60)
            if "connection" in error_str or "network" in error_str:
                raise LLMConnectionError("Gemini", str(e))
            logger.error(f"Gemini error: {e}")
            raise LLMResponseError(str(e))


# -----------------------------------------------------------------------------
# Factory Function
# -----------------------------------------------------------------------------

def create_feedback_service() -> BaseFeedbackService:
    """Use Gemini when a key is configured, otherwise mock feedback."""
    if get_settings().GEMINI_API_KEY:
        return GeminiFeedbackService()
    logger.info("No GEMINI_API_KEY configured; using mock feedback service")
    return MockFeedbackService()
