"""호흡 세션 통계 계산 테스트"""
import asyncio
from datetime import date, datetime, timezone

from app.crud import breathing_sessions as breathing_crud
from app.crud.breathing_sessions import compute_breathing_stats
from app.schemas.breathing import SessionSummary

TODAY = date(2026, 10, 19)


def _doc(day, seconds=60, before=None, after=None, naive=False):
    created = datetime(day.year, day.month, day.day, 9, 30, tzinfo=None if naive else timezone.utc)
    return {
        "total_duration_seconds": seconds,
        "stress_level_before": before,
        "stress_level_after": after,
        "created_at": created,
    }


def test_empty_history():
    stats = compute_breathing_stats([], TODAY)

    assert stats.total_sessions == 0
    assert stats.total_minutes == 0.0
    assert stats.average_stress_reduction is None
    assert stats.longest_streak == 0
    assert stats.current_streak == 0


def test_totals_and_average_reduction():
    docs = [
        _doc(TODAY, seconds=90, before=5, after=2),
        _doc(TODAY, seconds=30, before=4, after=4),
        _doc(TODAY, seconds=60, before=3),
    ]

    stats = compute_breathing_stats(docs, TODAY)

    assert stats.total_sessions == 3
    assert stats.total_minutes == 3.0
    # 전/후 평가가 모두 있는 두 세션만 평균
    assert stats.average_stress_reduction == 1.5


def test_streaks():
    days = [date(2026, 10, d) for d in (10, 11, 17, 18, 19)]
    docs = [_doc(d) for d in days] + [_doc(date(2026, 10, 18))]

    stats = compute_breathing_stats(docs, TODAY)

    assert stats.longest_streak == 3
    assert stats.current_streak == 3


def test_current_streak_survives_until_today_is_over():
    docs = [_doc(date(2026, 10, 17)), _doc(date(2026, 10, 18), naive=True)]

    stats = compute_breathing_stats(docs, TODAY)

    assert stats.current_streak == 2
    assert stats.longest_streak == 2


def test_current_streak_broken_after_missed_day():
    docs = [_doc(date(2026, 10, 15)), _doc(date(2026, 10, 16))]

    stats = compute_breathing_stats(docs, TODAY)

    assert stats.current_streak == 0
    assert stats.longest_streak == 2


def test_get_breathing_stats_reads_only_own_sessions(fake_db, make_session_doc):
    make_session_doc(total_duration_seconds=120, stress_level_before=6, stress_level_after=3)
    make_session_doc(user_id="someone_else", total_duration_seconds=600)

    stats = asyncio.run(breathing_crud.get_breathing_stats("test_user_123"))

    assert stats.total_sessions == 1
    assert stats.total_minutes == 2.0
    assert stats.average_stress_reduction == 3.0
    assert stats.current_streak == 1


def test_create_breathing_session_stores_derived_minutes(fake_db):
    summary = SessionSummary(pattern_name="4-7-8 Breathing", total_duration_seconds=114, completed_cycles=6)

    created = asyncio.run(breathing_crud.create_breathing_session("test_user_123", summary))

    stored = fake_db["breathing_sessions"].docs[0]
    assert stored["user_id"] == "test_user_123"
    assert stored["duration_minutes"] == 1.9
    assert created.id == str(stored["_id"])
    assert created.completed is False
