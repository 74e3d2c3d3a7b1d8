"""
MockView - Question Generator.

Turns static templates into interview questions for a session:
- Filters by difficulty and category
- Avoids repeating templates until the eligible pool runs out
- Personalizes wording and attaches a short rationale
- Adapts difficulty and topic focus to previous scores

Each interview session owns its own generator, so dedup tracking never
leaks between concurrent sessions.
"""

from __future__ import annotations

import logging
import random
import re
import threading
import time
from collections import defaultdict
from typing import Iterable, Sequence, TypeVar

from src.core.domain.models import (
    Difficulty,
    GeneratedQuestion,
    PreviousAnswer,
    QuestionTemplate,
)
from src.core.question_bank import QuestionBank, default_bank


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Adaptive difficulty thresholds (mean score out of 10)
ADVANCED_THRESHOLD = 8.0
INTERMEDIATE_THRESHOLD = 6.0
WEAK_CATEGORY_THRESHOLD = 6.0

# Without any history, start at the middle level
NO_HISTORY_DIFFICULTY = Difficulty.INTERMEDIATE


def target_difficulty(mean_score: float) -> Difficulty:
    """Map a mean score to the difficulty the next questions should use."""
    if mean_score >= ADVANCED_THRESHOLD:
        return Difficulty.ADVANCED
    if mean_score >= INTERMEDIATE_THRESHOLD:
        return Difficulty.INTERMEDIATE
    return Difficulty.BEGINNER


def weak_categories(
    previous_answers: Iterable[PreviousAnswer],
    threshold: float = WEAK_CATEGORY_THRESHOLD,
) -> list[str]:
    """Categories whose mean score is below threshold, in first-seen order."""
    totals: dict[str, list[float]] = defaultdict(list)
    for answer in previous_answers:
        totals[answer.category].append(answer.score)

    return [
        category
        for category, scores in totals.items()
        if sum(scores) / len(scores) < threshold
    ]


class QuestionGenerator:
    """
    Selects and prepares interview questions for one session.

    The only mutable state is the set of template texts already handed out.
    It grows with every generate call and is cleared either explicitly via
    reset_used_questions() or automatically when the eligible pool is too
    small for a request.

    Usage:
        generator = QuestionGenerator(rng=random.Random(42))

        questions = generator.generate_questions("Backend Developer", 5)
        harder = generator.generate_adaptive_questions(
            "Backend Developer",
            [PreviousAnswer("...", 9, "API Design")],
        )
    """

    def __init__(
        self,
        bank: QuestionBank | None = None,
        rng: random.Random | None = None,
        weak_threshold: float = WEAK_CATEGORY_THRESHOLD,
    ):
        self._bank = bank or default_bank
        self._rng = rng or random.Random()
        self._weak_threshold = weak_threshold
        self._used: set[str] = set()
        self._lock = threading.Lock()

    @property
    def used_count(self) -> int:
        """Number of templates handed out since the last reset."""
        return len(self._used)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_questions(
        self,
        role: str,
        count: int = 5,
        difficulty: Difficulty | str | None = None,
        categories: Sequence[str] | None = None,
    ) -> list[GeneratedQuestion]:
        """
        Generate up to `count` questions for a role.

        Args:
            role: Role name; must exist in the question bank
            count: Desired number of questions
            difficulty: Restrict to one difficulty level
            categories: Restrict to these categories (None means any)

        Returns:
            Questions with distinct templates; shorter than `count` when the
            filters match fewer templates, empty when `count` <= 0

        Raises:
            UnknownRoleError: If the role has no templates
        """
        templates = self._bank.templates_for(role)

        if count <= 0:
            return []

        wanted = Difficulty(difficulty) if difficulty is not None else None
        allowed = set(categories) if categories is not None else None

        def matches(template: QuestionTemplate) -> bool:
            if wanted is not None and template.difficulty != wanted:
                return False
            return allowed is None or template.category in allowed

        with self._lock:
            pool = [
                t for t in templates
                if matches(t) and t.template not in self._used
            ]

            if len(pool) < count:
                logger.debug(
                    f"Only {len(pool)} unused templates for {role!r}, "
                    f"need {count}; resetting used set"
                )
                self._used.clear()
                pool = [t for t in templates if matches(t)]

            selected = self._shuffle(pool)[:count]
            for template in selected:
                self._used.add(template.template)

        stamp = int(time.time() * 1000)
        questions = [
            GeneratedQuestion(
                id=f"{role}-{stamp}-{index}",
                question=self._personalize(template.template, role),
                category=template.category,
                difficulty=template.difficulty,
                follow_up=list(template.follow_up),
                context=self._bank.context_for(template.category, role),
            )
            for index, template in enumerate(selected)
        ]

        logger.info(
            f"Generated {len(questions)}/{count} questions for {role} "
            f"(difficulty={wanted.value if wanted else 'any'}, "
            f"categories={sorted(allowed) if allowed is not None else 'any'})"
        )
        return questions

    def generate_adaptive_questions(
        self,
        role: str,
        previous_answers: Sequence[PreviousAnswer],
        count: int = 5,
    ) -> list[GeneratedQuestion]:
        """
        Generate questions whose difficulty and focus follow past scores.

        The mean score picks the difficulty; with no history the middle
        level is used.
        Categories averaging below the weak threshold become the allowed
        category set; with none, every category is allowed.
        """
        if previous_answers:
            mean = sum(a.score for a in previous_answers) / len(previous_answers)
            difficulty = target_difficulty(mean)
            mean_text = f"{mean:.1f}"
        else:
            difficulty = NO_HISTORY_DIFFICULTY
            mean_text = "n/a"

        weak = weak_categories(previous_answers, self._weak_threshold)

        logger.info(
            f"Adaptive selection for {role}: mean={mean_text}, "
            f"difficulty={difficulty.value}, weak={weak or 'none'}"
        )

        if weak:
            return self.generate_questions(role, count, difficulty, weak)
        return self.generate_questions(role, count, difficulty)

    # -------------------------------------------------------------------------
    # Catalog Queries
    # -------------------------------------------------------------------------

    def get_available_categories(self, role: str) -> list[str]:
        return self._bank.categories_for(role)

    def get_difficulty_levels(self) -> list[Difficulty]:
        return self._bank.difficulty_levels()

    def reset_used_questions(self) -> None:
        """Allow every template to be selected again."""
        with self._lock:
            self._used.clear()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _shuffle(self, items: list[T]) -> list[T]:
        """Fisher-Yates shuffle of a copy using the injected RNG."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def _personalize(self, text: str, role: str) -> str:
        for generic, specific in self._bank.phrasings_for(role).items():
            text = re.sub(re.escape(generic), specific, text, flags=re.IGNORECASE)
        return text
