import dataclasses
import hashlib
import json
import logging
import math
from typing import Any

from prepforge.services.cache import TTLCache
from prepforge.services.llm import LLMClient, parse_json_payload

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 10.0

FOURTH_AXIS_KEYS = {
    "star_method": "starMethodScore",
    "communication": "communicationScore",
}

DEFAULT_OVERALL_FEEDBACK = "Thank you for your response."
DEFAULT_SUGGESTION = "Consider providing more specific examples and quantifiable results in your answer."

SYSTEM_PROMPT = (
    "You are an interview coach who evaluates answers to interview questions. "
    "You respond with a single JSON object and nothing else."
)


@dataclasses.dataclass
class ScoreRecord:
    relevance: float
    clarity: float
    depth: float
    fourth_axis: float
    overall_feedback: str
    suggestion: str
    is_fallback: bool = False

    def sub_scores(self) -> list[float]:
        return [self.relevance, self.clarity, self.depth, self.fourth_axis]

    def overall_score(self) -> float:
        scores = self.sub_scores()
        return round(sum(scores) / len(scores), 2)


def clamp_score(value: Any) -> float:
    """Coerce one upstream score into [0, 10]; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return SCORE_MIN
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return SCORE_MIN
    if not isinstance(value, (int, float)):
        return SCORE_MIN
    number = float(value)
    if math.isnan(number):
        return SCORE_MIN
    return min(SCORE_MAX, max(SCORE_MIN, number))


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def heuristic_feedback(answer: str) -> ScoreRecord:
    """Deterministic length-based evaluation used when the model is unavailable."""
    word_count = len(answer.split())
    if word_count < 20:
        score = 3.0
        overall = (
            "Your answer is quite brief. Interviewers look for enough detail to understand "
            "what you did and why it mattered."
        )
        suggestion = "Expand your answer with a concrete example from your experience and describe the outcome."
    elif word_count > 350:
        score = 6.0
        overall = "Your answer covers a lot of ground but is long, which makes the key points harder to follow."
        suggestion = "Tighten your answer around the situation, your actions and the result. Aim for two minutes."
    else:
        score = 7.0
        overall = "Good answer with a reasonable level of detail."
        suggestion = "Strengthen it by adding measurable results that show the impact of your work."
    return ScoreRecord(
        relevance=score,
        clarity=score,
        depth=score,
        fourth_axis=score,
        overall_feedback=overall,
        suggestion=suggestion,
        is_fallback=True,
    )


class FeedbackNormalizer:
    """Turns model output for a (question, answer) pair into a bounded ScoreRecord.

    `evaluate` never raises: every upstream problem ends in the length heuristic.
    """

    def __init__(self, *, llm: LLMClient, cache: TTLCache, fourth_axis: str = "star_method"):
        if fourth_axis not in FOURTH_AXIS_KEYS:
            raise ValueError(f"Unsupported fourth axis `{fourth_axis}`")
        self._llm = llm
        self._cache = cache
        self.fourth_axis = fourth_axis

    @staticmethod
    def cache_key(question: str, answer: str) -> str:
        payload = json.dumps([question, answer], ensure_ascii=False)
        return "feedback:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def build_prompt(self, question: str, answer: str) -> str:
        if self.fourth_axis == "star_method":
            fourth_label = (
                "STAR Method: if applicable, evaluate the use of the Situation, Task, Action, and Result (STAR) "
                "method for behavioral questions."
            )
        else:
            fourth_label = "Communication: how effectively is the answer delivered to an interviewer?"
        fourth_key = FOURTH_AXIS_KEYS[self.fourth_axis]
        return (
            "Analyze the following interview answer based on the question. Provide an evaluation covering:\n"
            "1. Relevance: how well does the answer address the question?\n"
            "2. Clarity: is the answer clear, concise, and easy to understand?\n"
            "3. Depth: does the answer demonstrate a deep understanding of the topic?\n"
            f"4. {fourth_label}\n\n"
            f"Question: {json.dumps(question, ensure_ascii=False)}\n"
            f"Answer: {json.dumps(answer, ensure_ascii=False)}\n\n"
            "Give a score from 0 to 10 for each of the four categories, a brief overall feedback summary "
            "and one suggestion for improvement. Return a JSON object with exactly this structure:\n"
            "{\n"
            '  "relevanceScore": number,\n'
            '  "clarityScore": number,\n'
            '  "depthScore": number,\n'
            f'  "{fourth_key}": number,\n'
            '  "overallFeedback": "string",\n'
            '  "suggestion": "string"\n'
            "}"
        )

    def normalize(self, payload: Any) -> ScoreRecord | None:
        """Clamp a parsed model payload. Returns None when it is not a JSON object."""
        if not isinstance(payload, dict):
            return None
        preferred = FOURTH_AXIS_KEYS[self.fourth_axis]
        other = next(key for key in FOURTH_AXIS_KEYS.values() if key != preferred)
        fourth_raw = payload.get(preferred)
        if fourth_raw is None:
            fourth_raw = payload.get(other)
        return ScoreRecord(
            relevance=clamp_score(payload.get("relevanceScore")),
            clarity=clamp_score(payload.get("clarityScore")),
            depth=clamp_score(payload.get("depthScore")),
            fourth_axis=clamp_score(fourth_raw),
            overall_feedback=_text_or_default(payload.get("overallFeedback"), DEFAULT_OVERALL_FEEDBACK),
            suggestion=_text_or_default(payload.get("suggestion"), DEFAULT_SUGGESTION),
        )

    async def evaluate(self, question: str, answer: str) -> ScoreRecord:
        key = self.cache_key(question, answer)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            raw = await self._llm.generate_text(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=self.build_prompt(question, answer),
                json_object=True,
                temperature=0,
            )
            record = self.normalize(parse_json_payload(raw))
        except Exception as e:  # noqa: BLE001
            logger.warning("Feedback generation failed, using length heuristic: %s", e)
            return heuristic_feedback(answer)

        if record is None:
            logger.warning("Feedback response was not a JSON object, using length heuristic")
            return heuristic_feedback(answer)

        self._cache.set(key, record)
        return dataclasses.replace(record)


__all__ = ["FeedbackNormalizer", "ScoreRecord", "clamp_score", "heuristic_feedback"]
