"""In-memory stand-ins for the LLM client and the CRUD repositories."""

import datetime
import itertools
import zoneinfo
from types import SimpleNamespace
from typing import Any

from prepforge.config.manager import settings
from prepforge.repository.crud.answer import compute_overall_score
from prepforge.utilities.exceptions.database import EntityDoesNotExist


def _now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


class FakeLLM:
    def __init__(self, responses: list[str] | None = None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.is_configured = True

    async def generate_text(self, *, system_prompt, user_prompt, json_object=False, temperature=0.7, max_tokens=2048):
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt, "json_object": json_object})
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return ""

    async def close(self):
        return None


class FakeStore:
    def __init__(self):
        self.ids = itertools.count(1)
        self.users: dict[int, SimpleNamespace] = {}
        self.interviews: dict[int, SimpleNamespace] = {}
        self.answers: list[SimpleNamespace] = []
        self.progress: dict[int, SimpleNamespace] = {}
        self.sets: dict[int, SimpleNamespace] = {}
        self.fail_interview_writes = False
        self.fail_answer_writes = False
        self.fail_progress_writes = False

    def add_user(self, email: str = "ada@example.com", name: str | None = "Ada") -> SimpleNamespace:
        user = SimpleNamespace(
            id=next(self.ids),
            email=email,
            name=name,
            image=None,
            google_id=None,
            created_at=_now(),
            updated_at=_now(),
        )
        self.users[user.id] = user
        return user


class FakeUserRepo:
    def __init__(self, store: FakeStore):
        self.store = store

    async def get_user_by_id(self, *, user_id: int):
        if user_id not in self.store.users:
            raise EntityDoesNotExist("User does not exist!")
        return self.store.users[user_id]

    async def create_or_update_user(self, *, email: str, name: str | None = None, google_id: str | None = None):
        for user in self.store.users.values():
            if user.email == email:
                user.name = name if name is not None else user.name
                user.google_id = google_id if google_id is not None else user.google_id
                user.updated_at = _now()
                return user
        user = self.store.add_user(email=email, name=name)
        user.google_id = google_id
        return user


class FakeInterviewRepo:
    def __init__(self, store: FakeStore):
        self.store = store

    async def create_interview(self, *, user_id, job_role, company, experience, difficulty, questions):
        if self.store.fail_interview_writes:
            raise ConnectionError("database unavailable")
        interview = SimpleNamespace(
            id=next(self.store.ids),
            user_id=user_id,
            job_role=job_role,
            company=company,
            experience=experience,
            difficulty=difficulty,
            questions=list(questions),
            feedback=None,
            status="in_progress",
            duration=None,
            created_at=_now(),
            updated_at=_now(),
        )
        self.store.interviews[interview.id] = interview
        return interview

    async def get_by_id(self, *, interview_id):
        return self.store.interviews.get(interview_id)

    async def get_by_id_and_user(self, *, interview_id, user_id):
        interview = self.store.interviews.get(interview_id)
        if interview is None or interview.user_id != user_id:
            return None
        return interview

    async def get_user_interviews(self, *, user_id):
        rows = [i for i in self.store.interviews.values() if i.user_id == user_id]
        return sorted(rows, key=lambda i: (i.created_at, i.id), reverse=True)

    async def list_user_interviews_page(self, *, user_id, page, limit):
        rows = await self.get_user_interviews(user_id=user_id)
        start = (page - 1) * limit
        return rows[start : start + limit], len(rows)

    async def update_status(self, *, interview_id, status, duration=None):
        interview = self.store.interviews.get(interview_id)
        if interview is None:
            raise EntityDoesNotExist("Interview does not exist!")
        interview.status = status
        if duration is not None:
            interview.duration = duration
        interview.updated_at = _now()
        return interview


class FakeAnswerRepo:
    def __init__(self, store: FakeStore):
        self.store = store

    async def create_answer(self, *, fields):
        if self.store.fail_answer_writes:
            raise ConnectionError("database unavailable")
        values = {"communication_score": None, "star_method_score": None, "example_answer": None, "time_spent": None}
        values.update(fields)
        values["overall_score"] = compute_overall_score(values)
        values["attempt_number"] = 1 + sum(
            1
            for a in self.store.answers
            if (a.user_id, a.interview_id, a.question_id)
            == (values["user_id"], values["interview_id"], values["question_id"])
        )
        values.setdefault("created_at", _now())
        answer = SimpleNamespace(id=next(self.store.ids), **values)
        self.store.answers.append(answer)
        return answer

    async def list_by_interview(self, *, interview_id):
        return [a for a in self.store.answers if a.interview_id == interview_id]

    async def list_by_user(self, *, user_id):
        return sorted((a for a in self.store.answers if a.user_id == user_id), key=lambda a: (a.created_at, a.id))

    async def aggregate_scores(self, *, user_id, since=None):
        rows = [a for a in self.store.answers if a.user_id == user_id and (since is None or a.created_at >= since)]

        def avg(attr):
            values = [getattr(a, attr) for a in rows if getattr(a, attr) is not None]
            return sum(values) / len(values) if values else 0.0

        return {
            "overall": avg("overall_score"),
            "relevance": avg("relevance_score"),
            "clarity": avg("clarity_score"),
            "depth": avg("depth_score"),
            "communication": avg("communication_score"),
            "star_method": avg("star_method_score"),
            "total_answers": len(rows),
        }

    async def weekly_scores(self, *, user_id, since, timezone=None):
        zone = zoneinfo.ZoneInfo(timezone or settings.TIMEZONE)
        weeks: dict[datetime.datetime, list[float]] = {}
        for a in self.store.answers:
            if a.user_id != user_id or a.created_at < since:
                continue
            local = a.created_at.astimezone(zone).replace(tzinfo=None)
            day = local - datetime.timedelta(days=local.weekday())
            week = day.replace(hour=0, minute=0, second=0, microsecond=0)
            weeks.setdefault(week, []).append(a.overall_score)
        return [
            {"week": week, "avg_score": sum(scores) / len(scores), "count": len(scores)}
            for week, scores in sorted(weeks.items())
        ]


class FakeProgressRepo:
    """Progress store with a hook that can simulate a competing writer just before a write."""

    def __init__(self, store: FakeStore, before_write=None):
        self.store = store
        self.before_write = before_write
        self.writes = 0

    async def get_by_user(self, *, user_id):
        row = self.store.progress.get(user_id)
        return SimpleNamespace(**vars(row)) if row is not None else None

    async def _maybe_interfere(self):
        if self.store.fail_progress_writes:
            raise ConnectionError("database unavailable")
        if self.before_write is not None:
            await self.before_write(self.store)

    async def insert_if_absent(self, *, values):
        await self._maybe_interfere()
        if values["user_id"] in self.store.progress:
            return False
        self.store.progress[values["user_id"]] = SimpleNamespace(**values, updated_at=_now())
        self.writes += 1
        return True

    async def compare_and_set(
        self,
        *,
        user_id,
        expected_total_questions,
        expected_total_interviews,
        expected_completed_interviews,
        values,
    ):
        await self._maybe_interfere()
        row = self.store.progress.get(user_id)
        if row is None or (
            row.total_questions_answered,
            row.total_interviews,
            row.completed_interviews,
        ) != (expected_total_questions, expected_total_interviews, expected_completed_interviews):
            return False
        for key, value in values.items():
            setattr(row, key, value)
        row.updated_at = _now()
        self.writes += 1
        return True


class FakeSetRepo:
    def __init__(self, store: FakeStore):
        self.store = store

    async def create_set(self, *, user_id, title, questions, description=None, tags=None, interview_id=None):
        question_set = SimpleNamespace(
            id=next(self.store.ids),
            user_id=user_id,
            interview_id=interview_id,
            title=title,
            description=description,
            questions=list(questions),
            tags=list(dict.fromkeys(tags or [])),
            is_favorite=False,
            practice_count=0,
            created_at=_now(),
            updated_at=_now(),
        )
        self.store.sets[question_set.id] = question_set
        return question_set

    async def get_owned(self, *, set_id, user_id):
        question_set = self.store.sets.get(set_id)
        if question_set is None or question_set.user_id != user_id:
            raise EntityDoesNotExist("Question set does not exist!")
        return question_set

    async def list_by_user(self, *, user_id, tag=None):
        rows = [s for s in self.store.sets.values() if s.user_id == user_id and (not tag or tag in s.tags)]
        return sorted(rows, key=lambda s: (not s.is_favorite, -s.id))

    async def list_tags(self, *, user_id):
        return sorted({tag for s in self.store.sets.values() if s.user_id == user_id for tag in s.tags})

    async def toggle_favorite(self, *, set_id, user_id):
        question_set = await self.get_owned(set_id=set_id, user_id=user_id)
        question_set.is_favorite = not question_set.is_favorite
        return question_set

    async def increment_practice(self, *, set_id, user_id):
        question_set = await self.get_owned(set_id=set_id, user_id=user_id)
        question_set.practice_count += 1
        return question_set

    async def delete_set(self, *, set_id, user_id):
        await self.get_owned(set_id=set_id, user_id=user_id)
        del self.store.sets[set_id]
