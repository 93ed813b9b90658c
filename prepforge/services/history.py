import datetime
import math
from typing import Any

from prepforge.repository.crud.answer import AnswerCRUDRepository
from prepforge.repository.crud.interview import InterviewCRUDRepository
from prepforge.repository.crud.user_progress import UserProgressCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist

TREND_THRESHOLD_PERCENT = 5.0
RECENT_ACTIVITY_LIMIT = 5


def compute_trend(weekly: list[dict[str, Any]]) -> dict[str, Any]:
    """Compare the first and last weekly average: >5% up is improving, >5% down is declining."""
    if len(weekly) < 2:
        return {"trend": "neutral", "change": 0.0, "data": weekly}
    first = float(weekly[0]["avg_score"])
    last = float(weekly[-1]["avg_score"])
    if first == 0:
        change = 0.0 if last == 0 else 100.0
    else:
        change = (last - first) / first * 100
    if change > TREND_THRESHOLD_PERCENT:
        trend = "improving"
    elif change < -TREND_THRESHOLD_PERCENT:
        trend = "declining"
    else:
        trend = "stable"
    return {"trend": trend, "change": round(change, 2), "data": weekly}


def skill_breakdown(averages: dict[str, float], *, fourth_axis: str) -> dict[str, Any]:
    fourth_name = "STAR Method" if fourth_axis == "star_method" else "Communication"
    skills = [
        {"name": "Relevance", "score": round(averages.get("relevance", 0.0), 2)},
        {"name": "Clarity", "score": round(averages.get("clarity", 0.0), 2)},
        {"name": "Depth", "score": round(averages.get("depth", 0.0), 2)},
        {"name": fourth_name, "score": round(averages.get(fourth_axis, 0.0), 2)},
    ]
    # Stable sort keeps the listing order among ties
    skills.sort(key=lambda skill: skill["score"], reverse=True)
    return {"strongest": skills[:2], "weakest": skills[-2:], "all_skills": skills}


class HistoryService:
    """Read-side queries over interviews, answers and the progress aggregate."""

    def __init__(
        self,
        *,
        interview_repo: InterviewCRUDRepository,
        answer_repo: AnswerCRUDRepository,
        progress_repo: UserProgressCRUDRepository,
        fourth_axis: str = "star_method",
    ):
        self._interview_repo = interview_repo
        self._answer_repo = answer_repo
        self._progress_repo = progress_repo
        self._fourth_axis = fourth_axis

    async def get_interview_history(self, *, user_id: int, page: int = 1, limit: int = 10) -> dict[str, Any]:
        interviews, total = await self._interview_repo.list_user_interviews_page(user_id=user_id, page=page, limit=limit)
        return {
            "interviews": [
                {
                    "id": interview.id,
                    "job_role": interview.job_role,
                    "company": interview.company,
                    "difficulty": interview.difficulty,
                    "status": interview.status,
                    "duration": interview.duration,
                    "created_at": interview.created_at,
                    "question_count": len(interview.questions or []),
                }
                for interview in interviews
            ],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit) if limit else 0,
            },
        }

    async def get_interview_details(self, *, interview_id: int, user_id: int | None = None) -> dict[str, Any]:
        if user_id is None:
            interview = await self._interview_repo.get_by_id(interview_id=interview_id)
        else:
            interview = await self._interview_repo.get_by_id_and_user(interview_id=interview_id, user_id=user_id)
        if not interview:
            raise EntityDoesNotExist("Interview does not exist!")
        answers = await self._answer_repo.list_by_interview(interview_id=interview_id)
        return {"interview": interview, "answers": answers}

    async def get_user_stats(self, *, user_id: int) -> dict[str, Any]:
        interviews = await self._interview_repo.get_user_interviews(user_id=user_id)
        scores = await self._answer_repo.aggregate_scores(user_id=user_id)
        progress = await self._progress_repo.get_by_user(user_id=user_id)
        return {
            "total_interviews": len(interviews),
            "completed_interviews": sum(1 for interview in interviews if interview.status == "completed"),
            "total_questions_answered": scores["total_answers"],
            "average_score": round(scores["overall"], 2),
            "progress": progress,
        }

    async def get_analytics(
        self, *, user_id: int, days: int = 30, now: datetime.datetime | None = None
    ) -> dict[str, Any]:
        end = now or datetime.datetime.now(tz=datetime.timezone.utc)
        start = end - datetime.timedelta(days=days)

        interviews = [
            interview
            for interview in await self._interview_repo.get_user_interviews(user_id=user_id)
            if interview.created_at is None or interview.created_at >= start
        ]
        scores = await self._answer_repo.aggregate_scores(user_id=user_id, since=start)
        weekly = await self._answer_repo.weekly_scores(user_id=user_id, since=start)
        progress = await self._progress_repo.get_by_user(user_id=user_id)

        return {
            "period": {"days": days, "start_date": start, "end_date": end},
            "overview": {
                "total_interviews": len(interviews),
                "completed_interviews": sum(1 for interview in interviews if interview.status == "completed"),
                "total_questions_answered": scores["total_answers"],
                "average_score": round(scores["overall"], 2),
            },
            "scores": {
                "overall": round(scores["overall"], 2),
                "relevance": round(scores["relevance"], 2),
                "clarity": round(scores["clarity"], 2),
                "depth": round(scores["depth"], 2),
                "communication": round(scores["communication"], 2),
                "star_method": round(scores["star_method"], 2),
            },
            "skills": {
                "behavioral": progress.behavioral_skill if progress else 50,
                "technical": progress.technical_skill if progress else 50,
                "situational": progress.situational_skill if progress else 50,
                "communication": progress.communication_skill if progress else 50,
            },
            "streaks": {
                "current": progress.current_streak if progress else 0,
                "longest": progress.longest_streak if progress else 0,
                "last_practice": progress.last_practice_date if progress else None,
            },
            "trend": compute_trend(weekly),
            "recent_activity": [
                {
                    "id": interview.id,
                    "role": interview.job_role,
                    "company": interview.company,
                    "date": interview.created_at,
                    "status": interview.status,
                }
                for interview in interviews[:RECENT_ACTIVITY_LIMIT]
            ],
        }

    async def get_skill_breakdown(self, *, user_id: int) -> dict[str, Any]:
        scores = await self._answer_repo.aggregate_scores(user_id=user_id)
        return skill_breakdown(scores, fourth_axis=self._fourth_axis)
