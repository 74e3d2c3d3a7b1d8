"""
MockView - Progress Statistics.

Aggregates stored answer records into the figures shown on a user's
dashboard and interview history, and converts them into the input
expected by adaptive question generation.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from src.core.domain.models import (
    AnswerRecord,
    DashboardStats,
    PreviousAnswer,
    RoleStats,
    SessionHistory,
    round_half_up,
)


SUCCESS_SCORE = 7
RECENT_DAYS = 7
TREND_WINDOW = 10


def _mean(scores: Sequence[float]) -> float:
    return sum(scores) / len(scores) if scores else 0.0


def compute_dashboard_stats(
    records: Iterable[AnswerRecord],
    now: datetime | None = None,
    success_score: int = SUCCESS_SCORE,
) -> DashboardStats:
    """
    Build dashboard figures from a user's answer records.

    Args:
        records: Answer records in any order
        now: Reference time for recent activity (defaults to now)
        success_score: Scores at or above this count as successful

    Returns:
        DashboardStats; all zeros when there are no records
    """
    ordered = sorted(records, key=lambda r: r.created_at, reverse=True)
    if not ordered:
        return DashboardStats()

    now = now or datetime.now()
    scores = [r.score for r in ordered]
    total = len(ordered)

    role_scores: dict[str, list[int]] = defaultdict(list)
    role_sessions: dict[str, set[str]] = defaultdict(set)
    for record in ordered:
        role_scores[record.role].append(record.score)
        role_sessions[record.role].add(record.session_id)

    best_role, best_average = "N/A", 0.0
    for role, role_values in role_scores.items():
        average = _mean(role_values)
        if average > best_average:
            best_role, best_average = role, average

    cutoff = now - timedelta(days=RECENT_DAYS)

    role_stats = sorted(
        (
            RoleStats(
                role=role,
                sessions=len(role_sessions[role]),
                average_score=round_half_up(_mean(role_values)),
                total_questions=len(role_values),
            )
            for role, role_values in role_scores.items()
        ),
        key=lambda rs: rs.average_score,
        reverse=True,
    )

    return DashboardStats(
        completed_sessions=len({r.session_id for r in ordered}),
        total_questions=total,
        average_score=round_half_up(_mean(scores)),
        success_rate=round_half_up(100 * sum(s >= success_score for s in scores) / total),
        best_role=best_role,
        recent_activity=sum(r.created_at > cutoff for r in ordered),
        improvement_trend=improvement_trend(scores),
        role_stats=role_stats,
    )


def improvement_trend(scores_newest_first: Sequence[int]) -> int:
    """
    Percent change of the newest window of scores versus the one before.

    Returns 0 until there are at least TREND_WINDOW scores, and while the
    earlier window is still empty.
    """
    if len(scores_newest_first) < TREND_WINDOW:
        return 0

    recent = scores_newest_first[:TREND_WINDOW]
    previous = scores_newest_first[TREND_WINDOW:2 * TREND_WINDOW]
    if not previous:
        return 0

    recent_avg = _mean(recent)
    previous_avg = _mean(previous)
    if previous_avg == 0:
        return 0
    return round_half_up((recent_avg - previous_avg) / previous_avg * 100)


def group_sessions(records: Iterable[AnswerRecord]) -> list[SessionHistory]:
    """Group answer records by interview session, newest session first."""
    sessions: dict[str, SessionHistory] = {}
    for record in sorted(records, key=lambda r: r.created_at):
        history = sessions.get(record.session_id)
        if history is None:
            history = SessionHistory(
                session_id=record.session_id,
                role=record.role,
                created_at=record.created_at,
            )
            sessions[record.session_id] = history
        history.records.append(record)

    return sorted(sessions.values(), key=lambda h: h.created_at, reverse=True)


def to_previous_answers(records: Iterable[AnswerRecord]) -> list[PreviousAnswer]:
    """Convert stored records into adaptive generation input."""
    return [
        PreviousAnswer(question=r.question, score=r.score, category=r.category)
        for r in records
        if r.category
    ]
