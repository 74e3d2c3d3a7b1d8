"""
Unit tests for progress statistics.
"""

from datetime import datetime, timedelta

from src.app.stats import (
    compute_dashboard_stats,
    group_sessions,
    improvement_trend,
    round_half_up,
    to_previous_answers,
)


NOW = datetime(2025, 3, 1, 12, 0, 0)


class TestRoundHalfUp:

    def test_half_rounds_up(self):
        assert round_half_up(6.5) == 7
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self):
        assert round_half_up(6.49) == 6


# =============================================================================
# Dashboard Figures
# =============================================================================

class TestDashboardStats:
    """Test suite for compute_dashboard_stats."""

    def test_empty_records(self):
        stats = compute_dashboard_stats([], now=NOW)

        assert stats.total_questions == 0
        assert stats.average_score == 0
        assert stats.best_role == "N/A"
        assert stats.role_stats == []

    def test_totals_and_rates(self, make_record):
        records = [
            make_record(8, session_id="a", created_at=NOW - timedelta(hours=1)),
            make_record(6, session_id="a", created_at=NOW - timedelta(hours=1)),
            make_record(7, session_id="b", created_at=NOW - timedelta(days=10)),
            make_record(4, session_id="b", created_at=NOW - timedelta(days=10)),
        ]

        stats = compute_dashboard_stats(records, now=NOW)

        assert stats.completed_sessions == 2
        assert stats.total_questions == 4
        assert stats.average_score == 6  # 6.25
        assert stats.success_rate == 50
        assert stats.recent_activity == 2

    def test_success_rate_rounds_half_up(self, make_record):
        records = [make_record(7, created_at=NOW)] + [make_record(3, created_at=NOW)] * 7

        stats = compute_dashboard_stats(records, now=NOW)

        assert stats.success_rate == 13  # 12.5

    def test_best_role_and_role_stats(self, make_record):
        records = [
            make_record(5, session_id="a", role="Backend Developer", created_at=NOW),
            make_record(9, session_id="b", role="Data Scientist", created_at=NOW),
            make_record(8, session_id="c", role="Data Scientist", created_at=NOW),
        ]

        stats = compute_dashboard_stats(records, now=NOW)

        assert stats.best_role == "Data Scientist"
        assert [rs.role for rs in stats.role_stats] == ["Data Scientist", "Backend Developer"]
        top = stats.role_stats[0]
        assert (top.sessions, top.average_score, top.total_questions) == (2, 9, 2)

    def test_custom_success_score(self, make_record):
        records = [make_record(6, created_at=NOW), make_record(5, created_at=NOW)]

        stats = compute_dashboard_stats(records, now=NOW, success_score=6)

        assert stats.success_rate == 50


class TestImprovementTrend:

    def test_needs_a_full_window(self):
        assert improvement_trend([9] * 9) == 0

    def test_no_previous_window(self):
        assert improvement_trend([9] * 10) == 0

    def test_percent_change(self):
        scores = [8] * 10 + [5] * 10

        assert improvement_trend(scores) == 60

    def test_partial_previous_window(self):
        scores = [6] * 10 + [8] * 2

        assert improvement_trend(scores) == -25


# =============================================================================
# History
# =============================================================================

class TestHistory:

    def test_group_sessions_newest_first(self, make_record):
        records = [
            make_record(4, session_id="old", created_at=NOW - timedelta(days=2)),
            make_record(9, session_id="new", created_at=NOW),
            make_record(6, session_id="old", created_at=NOW - timedelta(days=2, minutes=-1)),
        ]

        histories = group_sessions(records)

        assert [h.session_id for h in histories] == ["new", "old"]
        assert [r.score for r in histories[1].records] == [4, 6]
        assert histories[1].average_score == 5

    def test_session_average_rounds_half_up(self, make_record):
        records = [
            make_record(6, session_id="s", created_at=NOW),
            make_record(7, session_id="s", created_at=NOW),
        ]

        [history] = group_sessions(records)

        assert history.average_score == 7

    def test_session_average_matches_dashboard_rounding(self, make_record):
        records = [
            make_record(8, session_id="s", created_at=NOW),
            make_record(9, session_id="s", created_at=NOW),
        ]

        [history] = group_sessions(records)
        stats = compute_dashboard_stats(records, now=NOW)

        assert history.average_score == stats.average_score == 9

    def test_to_previous_answers_skips_uncategorized(self, make_record):
        records = [make_record(5, category="API Design"), make_record(7, category="")]

        previous = to_previous_answers(records)

        assert len(previous) == 1
        assert previous[0].category == "API Design"
        assert previous[0].score == 5
