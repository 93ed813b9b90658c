import datetime

import pytest

from prepforge.services.history import HistoryService, compute_trend, skill_breakdown
from prepforge.services.timer import calculate_time_score, get_recommended_time, get_timer_config
from prepforge.utilities.exceptions.database import EntityDoesNotExist
from tests.unit_tests.fakes import FakeAnswerRepo, FakeInterviewRepo, FakeProgressRepo, FakeStore


def _weeks(*scores):
    start = datetime.datetime(2025, 1, 6, tzinfo=datetime.timezone.utc)
    return [
        {"week": start + datetime.timedelta(weeks=idx), "avg_score": score, "count": 1}
        for idx, score in enumerate(scores)
    ]


@pytest.mark.parametrize(
    "scores, trend",
    [
        ((), "neutral"),
        ((6.0,), "neutral"),
        ((6.0, 7.0), "improving"),
        ((6.0, 5.0), "declining"),
        ((6.0, 6.2), "stable"),
        ((0.0, 5.0), "improving"),
    ],
)
def test_compute_trend(scores, trend):
    assert compute_trend(_weeks(*scores))["trend"] == trend


def test_compute_trend_change_is_percentage():
    assert compute_trend(_weeks(5.0, 6.0, 7.5))["change"] == 50.0


def test_skill_breakdown_orders_strongest_and_weakest():
    breakdown = skill_breakdown(
        {"relevance": 8.0, "clarity": 5.0, "depth": 6.5, "star_method": 9.0, "communication": 0.0},
        fourth_axis="star_method",
    )

    assert [s["name"] for s in breakdown["strongest"]] == ["STAR Method", "Relevance"]
    assert [s["name"] for s in breakdown["weakest"]] == ["Depth", "Clarity"]
    assert len(breakdown["all_skills"]) == 4


@pytest.mark.parametrize(
    "spent, expected",
    [(96, 10), (120, 9), (144, 7), (180, 5), (181, 3)],
)
def test_time_score_bands(spent, expected):
    assert calculate_time_score(spent, get_recommended_time("easy"))["score"] == expected


def test_timer_config():
    config = get_timer_config()

    assert config["recommended"] == {"easy": 120, "medium": 180, "hard": 300}
    assert get_recommended_time("unknown") == 180
    assert "Use the STAR method (Situation, Task, Action, Result)" in config["tips"]["hard"]


@pytest.mark.asyncio
async def test_history_pagination_and_ownership():
    store = FakeStore()
    owner = store.add_user()
    other = store.add_user(email="grace@example.com")
    interviews = FakeInterviewRepo(store)
    for idx in range(3):
        await interviews.create_interview(
            user_id=owner.id,
            job_role=f"Role {idx}",
            company="Acme",
            experience="junior",
            difficulty="easy",
            questions=[{"id": "1", "question": "Q?", "type": "behavioral", "difficulty": "easy", "category": "x"}],
        )
    service = HistoryService(
        interview_repo=interviews, answer_repo=FakeAnswerRepo(store), progress_repo=FakeProgressRepo(store)
    )

    page = await service.get_interview_history(user_id=owner.id, page=2, limit=2)

    assert page["pagination"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
    assert len(page["interviews"]) == 1
    assert page["interviews"][0]["question_count"] == 1

    some_interview_id = next(iter(store.interviews))
    with pytest.raises(EntityDoesNotExist):
        await service.get_interview_details(interview_id=some_interview_id, user_id=other.id)


@pytest.mark.asyncio
async def test_analytics_defaults_without_progress_row():
    store = FakeStore()
    user = store.add_user()
    service = HistoryService(
        interview_repo=FakeInterviewRepo(store), answer_repo=FakeAnswerRepo(store), progress_repo=FakeProgressRepo(store)
    )

    analytics = await service.get_analytics(user_id=user.id, days=7)

    assert analytics["overview"]["total_questions_answered"] == 0
    assert analytics["skills"] == {"behavioral": 50, "technical": 50, "situational": 50, "communication": 50}
    assert analytics["streaks"]["current"] == 0
    assert analytics["trend"]["trend"] == "neutral"
    assert isinstance(analytics["period"]["start_date"], datetime.datetime)

