import dataclasses
import datetime
import logging
import typing
import zoneinfo

from prepforge.config.manager import settings
from prepforge.repository.crud.answer import AnswerCRUDRepository
from prepforge.repository.crud.user_progress import UserProgressCRUDRepository

logger = logging.getLogger(__name__)

SKILL_MIN = 1
SKILL_MAX = 100
SKILL_DEFAULT = 50
SKILL_WEIGHT = 0.2
HIGH_SCORE_THRESHOLD = 9.0

ANSWER_MILESTONES = ((1, "first-answer"), (10, "ten-answers"), (50, "fifty-answers"))
STREAK_MILESTONES = ((3, "streak-3"), (7, "streak-7"), (30, "streak-30"))

SCORE_KEYS = ("relevance", "clarity", "depth", "fourth_axis")


class ProgressUpdateConflict(Exception):
    """Raised when the aggregate could not be written after the configured number of attempts."""


@dataclasses.dataclass
class ProgressSnapshot:
    user_id: int
    total_interviews: int = 0
    completed_interviews: int = 0
    total_questions_answered: int = 0
    average_score: float = 0.0
    behavioral_skill: int = SKILL_DEFAULT
    technical_skill: int = SKILL_DEFAULT
    situational_skill: int = SKILL_DEFAULT
    communication_skill: int = SKILL_DEFAULT
    current_streak: int = 0
    longest_streak: int = 0
    last_practice_date: datetime.date | None = None
    achievements: list[str] = dataclasses.field(default_factory=list)
    badges: list[str] = dataclasses.field(default_factory=list)

    @classmethod
    def from_row(cls, row: typing.Any) -> "ProgressSnapshot":
        values = {field.name: getattr(row, field.name) for field in dataclasses.fields(cls)}
        values["achievements"] = list(values["achievements"] or [])
        values["badges"] = list(values["badges"] or [])
        return cls(**values)

    def to_values(self) -> dict[str, typing.Any]:
        return dataclasses.asdict(self)


def sample_mean(scores: typing.Mapping[str, float | None]) -> float:
    present = [float(scores[key]) for key in SCORE_KEYS if scores.get(key) is not None]  # type: ignore[arg-type]
    if not present:
        return 0.0
    return sum(present) / len(present)


def advance_streak(
    *,
    current: int,
    longest: int,
    last_date: datetime.date | None,
    practiced_on: datetime.date,
) -> tuple[int, int, datetime.date | None]:
    """Return `(current, longest, last_date)` after a practice on `practiced_on`."""
    if last_date is None:
        current = 1
    elif practiced_on < last_date:
        # Out-of-order delivery never rewinds the streak
        return current, max(longest, current), last_date
    elif practiced_on == last_date:
        current = max(current, 1)
    elif practiced_on - last_date == datetime.timedelta(days=1):
        current += 1
    else:
        current = 1
    return current, max(longest, current), practiced_on


def move_skill(skill: int, score_out_of_ten: float) -> int:
    target = score_out_of_ten * 10
    moved = round(skill + (target - skill) * SKILL_WEIGHT)
    return min(SKILL_MAX, max(SKILL_MIN, moved))


def _grant(achievements: list[str], tag: str) -> None:
    if tag not in achievements:
        achievements.append(tag)


def apply_answer(
    state: ProgressSnapshot,
    *,
    scores: typing.Mapping[str, float | None],
    practiced_on: datetime.date,
    question_type: str | None = None,
) -> ProgressSnapshot:
    """Fold one scored answer into the aggregate. Pure: `state` is left untouched."""
    new = dataclasses.replace(state, achievements=list(state.achievements), badges=list(state.badges))
    mean = sample_mean(scores)
    # Same two-decimal value that is stored as the answer's overall score
    overall = round(mean, 2)

    count = state.total_questions_answered
    new.average_score = (state.average_score * count + overall) / (count + 1)
    new.total_questions_answered = count + 1

    new.current_streak, new.longest_streak, new.last_practice_date = advance_streak(
        current=state.current_streak,
        longest=state.longest_streak,
        last_date=state.last_practice_date,
        practiced_on=practiced_on,
    )

    if question_type in ("behavioral", "technical", "situational"):
        attr = f"{question_type}_skill"
        setattr(new, attr, move_skill(getattr(new, attr), mean))
    if scores.get("fourth_axis") is not None:
        new.communication_skill = move_skill(new.communication_skill, float(scores["fourth_axis"]))  # type: ignore[arg-type]

    for threshold, tag in ANSWER_MILESTONES:
        if new.total_questions_answered >= threshold:
            _grant(new.achievements, tag)
    for threshold, tag in STREAK_MILESTONES:
        if new.current_streak >= threshold:
            _grant(new.achievements, tag)
    if mean >= HIGH_SCORE_THRESHOLD:
        _grant(new.achievements, "high-score")
    return new


def answer_scores(answer: typing.Any) -> dict[str, float | None]:
    """Sub-scores of a stored answer row, with whichever fourth-axis column is set."""
    fourth = answer.star_method_score if answer.star_method_score is not None else answer.communication_score
    return {
        "relevance": answer.relevance_score,
        "clarity": answer.clarity_score,
        "depth": answer.depth_score,
        "fourth_axis": fourth,
    }


class ProgressAggregator:
    """Sole writer of `user_progress` rows.

    Every write is a compare-and-swap on the row's counters, so concurrent
    updates for one user are applied one after another rather than lost.
    """

    def __init__(
        self,
        *,
        progress_repo: UserProgressCRUDRepository,
        answer_repo: AnswerCRUDRepository | None = None,
        max_attempts: int | None = None,
        timezone: str | None = None,
    ):
        self._progress_repo = progress_repo
        self._answer_repo = answer_repo
        self._max_attempts = max_attempts or settings.PROGRESS_MAX_UPDATE_ATTEMPTS
        self._timezone = zoneinfo.ZoneInfo(timezone or settings.TIMEZONE)

    def practice_date(self, practiced_at: datetime.datetime | None) -> datetime.date:
        moment = practiced_at or datetime.datetime.now(tz=datetime.timezone.utc)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=datetime.timezone.utc)
        return moment.astimezone(self._timezone).date()

    async def _write(self, *, user_id: int, current: ProgressSnapshot | None, new: ProgressSnapshot) -> bool:
        if current is None:
            return await self._progress_repo.insert_if_absent(values=new.to_values())
        return await self._progress_repo.compare_and_set(
            user_id=user_id,
            expected_total_questions=current.total_questions_answered,
            expected_total_interviews=current.total_interviews,
            expected_completed_interviews=current.completed_interviews,
            values=new.to_values(),
        )

    async def _update(
        self, *, user_id: int, step: typing.Callable[[ProgressSnapshot], ProgressSnapshot]
    ) -> ProgressSnapshot:
        for attempt in range(1, self._max_attempts + 1):
            row = await self._progress_repo.get_by_user(user_id=user_id)
            current = ProgressSnapshot.from_row(row) if row is not None else None
            new = step(current or ProgressSnapshot(user_id=user_id))
            if await self._write(user_id=user_id, current=current, new=new):
                return new
            logger.info("Progress write for user %s lost a race (attempt %s), retrying", user_id, attempt)
        raise ProgressUpdateConflict(
            f"Could not update progress for user {user_id} after {self._max_attempts} attempts"
        )

    async def record_answer(
        self,
        *,
        user_id: int,
        scores: typing.Mapping[str, float | None],
        practiced_at: datetime.datetime | None = None,
        question_type: str | None = None,
    ) -> ProgressSnapshot:
        practiced_on = self.practice_date(practiced_at)
        return await self._update(
            user_id=user_id,
            step=lambda state: apply_answer(
                state, scores=scores, practiced_on=practiced_on, question_type=question_type
            ),
        )

    async def record_interview_started(self, *, user_id: int) -> ProgressSnapshot:
        return await self._update(
            user_id=user_id,
            step=lambda state: dataclasses.replace(state, total_interviews=state.total_interviews + 1),
        )

    async def record_interview_completed(self, *, user_id: int) -> ProgressSnapshot:
        return await self._update(
            user_id=user_id,
            step=lambda state: dataclasses.replace(state, completed_interviews=state.completed_interviews + 1),
        )

    async def reconcile(self, *, user_id: int) -> ProgressSnapshot:
        """Rebuild answer-derived fields from the full answer history.

        The write is guarded by the same counter check as incremental updates, so an
        answer recorded while the history is being replayed forces a fresh replay.
        """
        if self._answer_repo is None:
            raise RuntimeError("reconcile requires an answer repository")
        for attempt in range(1, self._max_attempts + 1):
            row = await self._progress_repo.get_by_user(user_id=user_id)
            # Read after the row: every answer the row has counted is already committed
            answers = await self._answer_repo.list_by_user(user_id=user_id)
            current = ProgressSnapshot.from_row(row) if row is not None else None
            existing = current or ProgressSnapshot(user_id=user_id)

            rebuilt = ProgressSnapshot(user_id=user_id)
            for answer in answers:
                rebuilt = apply_answer(
                    rebuilt, scores=answer_scores(answer), practiced_on=self.practice_date(answer.created_at)
                )

            merged = dataclasses.replace(
                existing,
                total_questions_answered=rebuilt.total_questions_answered,
                average_score=rebuilt.average_score,
                current_streak=rebuilt.current_streak,
                longest_streak=max(rebuilt.longest_streak, rebuilt.current_streak),
                last_practice_date=rebuilt.last_practice_date,
                achievements=list(existing.achievements)
                + [tag for tag in rebuilt.achievements if tag not in existing.achievements],
            )
            if await self._write(user_id=user_id, current=current, new=merged):
                logger.info(
                    "Reconciled progress for user %s from %s answers", user_id, rebuilt.total_questions_answered
                )
                return merged
            logger.info("Reconcile for user %s lost a race (attempt %s), replaying", user_id, attempt)
        raise ProgressUpdateConflict(
            f"Could not reconcile progress for user {user_id} after {self._max_attempts} attempts"
        )


__all__ = [
    "ProgressAggregator",
    "ProgressSnapshot",
    "ProgressUpdateConflict",
    "advance_streak",
    "answer_scores",
    "apply_answer",
    "sample_mean",
]
