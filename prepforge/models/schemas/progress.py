import datetime
import typing

from prepforge.models.schemas.answer import AnswerOut
from prepforge.models.schemas.base import BaseSchemaModel
from prepforge.models.schemas.interview import InterviewOut


class ProgressOut(BaseSchemaModel):
    user_id: int
    total_interviews: int
    completed_interviews: int
    total_questions_answered: int
    average_score: float
    behavioral_skill: int
    technical_skill: int
    situational_skill: int
    communication_skill: int
    current_streak: int
    longest_streak: int
    last_practice_date: datetime.date | None = None
    achievements: list[str] = []
    badges: list[str] = []


class UserStatsData(BaseSchemaModel):
    total_interviews: int
    completed_interviews: int
    total_questions_answered: int
    average_score: float
    progress: ProgressOut | None = None


class InterviewHistoryItem(BaseSchemaModel):
    id: int
    job_role: str
    company: str
    difficulty: str
    status: str
    duration: int | None = None
    created_at: datetime.datetime | None = None
    question_count: int


class Pagination(BaseSchemaModel):
    page: int
    limit: int
    total: int
    total_pages: int


class InterviewHistoryData(BaseSchemaModel):
    interviews: list[InterviewHistoryItem]
    pagination: Pagination


class InterviewDetailsData(BaseSchemaModel):
    interview: InterviewOut
    answers: list[AnswerOut]


class WeeklyScore(BaseSchemaModel):
    week: datetime.datetime
    avg_score: float
    count: int


class TrendOut(BaseSchemaModel):
    trend: typing.Literal["improving", "declining", "stable", "neutral"]
    change: float
    data: list[WeeklyScore]


class RecentActivity(BaseSchemaModel):
    id: int
    role: str
    company: str
    date: datetime.datetime | None = None
    status: str


class AnalyticsPeriod(BaseSchemaModel):
    days: int
    start_date: datetime.datetime
    end_date: datetime.datetime


class AnalyticsOverview(BaseSchemaModel):
    total_interviews: int
    completed_interviews: int
    total_questions_answered: int
    average_score: float


class AnalyticsScores(BaseSchemaModel):
    overall: float
    relevance: float
    clarity: float
    depth: float
    communication: float
    star_method: float


class AnalyticsSkills(BaseSchemaModel):
    behavioral: int
    technical: int
    situational: int
    communication: int


class AnalyticsStreaks(BaseSchemaModel):
    current: int
    longest: int
    last_practice: datetime.date | None = None


class AnalyticsData(BaseSchemaModel):
    period: AnalyticsPeriod
    overview: AnalyticsOverview
    scores: AnalyticsScores
    skills: AnalyticsSkills
    streaks: AnalyticsStreaks
    trend: TrendOut
    recent_activity: list[RecentActivity]


class SkillScore(BaseSchemaModel):
    name: str
    score: float


class SkillBreakdownData(BaseSchemaModel):
    strongest: list[SkillScore]
    weakest: list[SkillScore]
    all_skills: list[SkillScore]


class TimerConfigData(BaseSchemaModel):
    recommended: dict[str, int]
    tips: dict[str, list[str]]
