"""Tests for StatisticsEngine.

Tests cover:
- Weekly completion rate (active pairs only, half-up rounding)
- Weekly XP (base XP, no streak bonus)
- Perfect week predicate
- Per-day chart data
- Week summary and daily aggregates
"""

from __future__ import annotations

from datetime import date

import pytest

from habitquest import const
from habitquest.engines.statistics_engine import StatisticsEngine
from tests.helpers import TODAY, WEEK_END, WEEK_START, days_back, make_habit


@pytest.fixture
def stats() -> StatisticsEngine:
    """Return a StatisticsEngine instance."""
    return StatisticsEngine()


def full_week() -> list[date]:
    """Return every date of the week containing TODAY."""
    return days_back(7, end=WEEK_END)


class TestWeekCompletionRate:
    """Tests for week_completion_rate()."""

    def test_no_habits_is_zero(self, stats: StatisticsEngine) -> None:
        assert stats.week_completion_rate([], TODAY) == 0

    def test_no_active_pairs_is_zero(self, stats: StatisticsEngine) -> None:
        habit = make_habit(schedule=const.SCHEDULE_CUSTOM, custom_days=[])
        assert stats.week_completion_rate([habit], TODAY) == 0

    def test_daily_three_of_seven(self, stats: StatisticsEngine) -> None:
        """3/7 = 42.86% rounds to 43."""
        habit = make_habit(completed=days_back(3, end=date(2026, 1, 13)))
        assert stats.week_completion_rate([habit], TODAY) == 43

    def test_inactive_pairs_excluded(self, stats: StatisticsEngine) -> None:
        """Daily (7 pairs) + Mon/Wed/Fri (3 pairs), 4 completed = 40%."""
        habits = [
            make_habit("a", completed=days_back(3, end=date(2026, 1, 13))),
            make_habit(
                "b",
                schedule=const.SCHEDULE_CUSTOM,
                custom_days=[1, 3, 5],
                completed=[date(2026, 1, 12)],
            ),
        ]
        assert stats.week_completion_rate(habits, TODAY) == 40

    def test_half_rounds_up(self, stats: StatisticsEngine) -> None:
        """1/8 = 12.5% rounds to 13."""
        habits = [
            make_habit("a", completed=[WEEK_START]),
            make_habit("b", schedule=const.SCHEDULE_CUSTOM, custom_days=[0]),
        ]
        assert stats.week_completion_rate(habits, TODAY) == 13

    def test_completions_outside_week_ignored(self, stats: StatisticsEngine) -> None:
        habit = make_habit(completed=[date(2026, 1, 10), date(2026, 1, 18)])
        assert stats.week_completion_rate([habit], TODAY) == 0


class TestWeekXp:
    """Tests for week_xp()."""

    def test_base_xp_without_bonus(self, stats: StatisticsEngine) -> None:
        """Streak bonus does not apply to weekly XP."""
        habit = make_habit(
            xp=10,
            streak=9,
            completed=[date(2026, 1, 10), *days_back(3, end=date(2026, 1, 13))],
        )
        assert stats.week_xp([habit], TODAY) == 30

    def test_inactive_completion_not_counted(self, stats: StatisticsEngine) -> None:
        habit = make_habit(
            xp=10,
            schedule=const.SCHEDULE_CUSTOM,
            custom_days=[1],
            completed=[date(2026, 1, 12), date(2026, 1, 13)],
        )
        assert stats.week_xp([habit], TODAY) == 10


class TestPerfectWeek:
    """Tests for is_perfect_week()."""

    def test_empty_collection_is_false(self, stats: StatisticsEngine) -> None:
        assert stats.is_perfect_week([], TODAY) is False

    def test_daily_all_seven_days(self, stats: StatisticsEngine) -> None:
        habit = make_habit(completed=full_week())
        assert stats.is_perfect_week([habit], TODAY) is True

    def test_missing_one_day(self, stats: StatisticsEngine) -> None:
        habit = make_habit(completed=full_week()[1:])
        assert stats.is_perfect_week([habit], TODAY) is False

    def test_remaining_due_days_still_count(self, stats: StatisticsEngine) -> None:
        """Completing every day so far is not enough mid-week."""
        habit = make_habit(completed=days_back(4))
        assert stats.is_perfect_week([habit], TODAY) is False

    def test_inactive_pairs_impose_nothing(self, stats: StatisticsEngine) -> None:
        habits = [
            make_habit("a", completed=full_week()),
            make_habit(
                "b",
                schedule=const.SCHEDULE_CUSTOM,
                custom_days=[1],
                completed=[date(2026, 1, 12)],
            ),
        ]
        assert stats.is_perfect_week(habits, TODAY) is True

    def test_never_due_habit_alone(self, stats: StatisticsEngine) -> None:
        """A non-empty collection with no due pairs is vacuously perfect."""
        habit = make_habit(schedule=const.SCHEDULE_CUSTOM, custom_days=[])
        assert stats.is_perfect_week([habit], TODAY) is True


class TestWeeklyChartData:
    """Tests for weekly_chart_data()."""

    def test_seven_entries_sunday_first(self, stats: StatisticsEngine) -> None:
        chart = stats.weekly_chart_data([], TODAY)
        assert [entry["day"] for entry in chart] == [
            "Sun",
            "Mon",
            "Tue",
            "Wed",
            "Thu",
            "Fri",
            "Sat",
        ]
        assert chart[0]["date"] == "2026-01-11"
        assert all(entry["total"] == 0 and entry["percent"] == 0 for entry in chart)

    def test_counts_active_and_completed(self, stats: StatisticsEngine) -> None:
        habits = [
            make_habit("a", completed=[date(2026, 1, 12)]),
            make_habit(
                "b",
                schedule=const.SCHEDULE_CUSTOM,
                custom_days=[1, 3],
                completed=[date(2026, 1, 12)],
            ),
        ]
        chart = {entry["date"]: entry for entry in stats.weekly_chart_data(habits, TODAY)}

        assert chart["2026-01-11"]["total"] == 1
        assert chart["2026-01-12"] == {
            "day": "Mon",
            "date": "2026-01-12",
            "completed": 2,
            "total": 2,
            "percent": 100,
        }
        assert chart["2026-01-14"]["total"] == 2
        assert chart["2026-01-14"]["completed"] == 0


class TestSummaries:
    """Tests for week_summary() and daily aggregates."""

    def test_week_summary(self, stats: StatisticsEngine) -> None:
        habit = make_habit(xp=5, completed=full_week())
        assert stats.week_summary([habit], TODAY) == {
            "weekStart": "2026-01-11",
            "completionRate": 100,
            "weekXP": 35,
            "perfectWeek": True,
        }

    def test_completed_today_count(self, stats: StatisticsEngine) -> None:
        habits = [
            make_habit("a", completed=[TODAY]),
            make_habit("b"),
            make_habit(
                "c", schedule=const.SCHEDULE_CUSTOM, custom_days=[1], completed=[TODAY]
            ),
        ]
        assert stats.completed_today_count(habits, TODAY) == 1

    def test_best_streak(self, stats: StatisticsEngine) -> None:
        habits = [make_habit("a", streak=2), make_habit("b", streak=11)]
        assert stats.best_streak(habits) == 11

    def test_weekly_habit_done_once_this_week(self, stats: StatisticsEngine) -> None:
        habit = make_habit(
            schedule=const.SCHEDULE_WEEKLY, completed=[date(2026, 1, 12)]
        )
        assert stats.is_completed_this_week(habit, TODAY) is True

    def test_daily_habit_needs_today(self, stats: StatisticsEngine) -> None:
        habit = make_habit(completed=[date(2026, 1, 12)])
        assert stats.is_completed_this_week(habit, TODAY) is False
