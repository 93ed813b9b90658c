import hashlib
import json
import logging
from typing import Any

from prepforge.services.cache import TTLCache
from prepforge.services.llm import LLMClient, parse_json_payload
from prepforge.services.question_bank import DIFFICULTIES, QUESTION_TYPES, get_fallback_pool

logger = logging.getLogger(__name__)

DIFFICULTY_GUIDELINES = {
    "easy": "Focus on basic concepts, general questions, and foundational knowledge. "
    "Suitable for entry-level or warm-up questions.",
    "medium": "Include moderately challenging questions that require some depth of knowledge and practical experience.",
    "hard": "Generate advanced questions that require deep expertise, complex problem-solving, "
    "and senior-level thinking.",
}

SENIORITY_CONTEXT = {
    "entry-level": "junior developer or entry-level candidate",
    "junior": "junior developer with 0-2 years of experience",
    "mid-level": "mid-level professional with 3-5 years of experience",
    "senior": "senior professional with 6+ years of experience",
    "lead": "lead or staff level with 8+ years of experience",
}

SYSTEM_PROMPT = (
    "You are an experienced technical interviewer. "
    "You respond with JSON only, never with prose or markdown."
)


def build_question_prompt(
    *, role: str, company: str, experience: str, difficulty: str, count: int, question_type: str
) -> str:
    level = difficulty if difficulty in DIFFICULTY_GUIDELINES else "medium"
    seniority = SENIORITY_CONTEXT.get(experience, experience)
    if question_type != "all":
        type_filter = f"Focus ONLY on {question_type} questions. All {count} questions must be {question_type} type."
        type_hint = f"(MUST be '{question_type}')"
    else:
        type_filter = "Mix different types: behavioral, technical, and situational questions."
        type_hint = ""
    return (
        f"Generate {count} {level} difficulty interview questions for a {role} position at {company} "
        f"for a {seniority}.\n\n"
        f"Difficulty Level: {level.upper()}\n{DIFFICULTY_GUIDELINES[level]}\n\n"
        f"Question Type Requirement: {type_filter}\n\n"
        'Return a JSON object {"questions": [...]} where each question has:\n'
        "- id: unique identifier (string)\n"
        "- question: the interview question (string)\n"
        f"- type: 'behavioral', 'technical', or 'situational' {type_hint}\n"
        f"- difficulty: '{level}'\n"
        "- category: relevant category like 'problem-solving', 'leadership', etc.\n\n"
        "Make questions relevant to the role, company, seniority level, and difficulty level."
    )


def select_questions(
    items: Any, *, difficulty: str, count: int, question_type: str
) -> list[dict[str, Any]]:
    """Keep well-formed items of the requested type, at most `count`, with unique string ids."""
    if isinstance(items, dict):
        items = items.get("questions")
    if not isinstance(items, list):
        return []

    level = difficulty if difficulty in DIFFICULTIES else "medium"
    selected: list[dict[str, Any]] = []
    for item in items:
        if len(selected) >= count:
            break
        if not isinstance(item, dict):
            continue
        text = item.get("question")
        if not isinstance(text, str) or not text.strip():
            continue
        q_type = item.get("type")
        if question_type != "all":
            if q_type != question_type:
                continue
        elif q_type not in QUESTION_TYPES:
            q_type = "behavioral"
        q_difficulty = item.get("difficulty") if item.get("difficulty") in DIFFICULTIES else level
        category = item.get("category")
        selected.append(
            {
                "id": item.get("id"),
                "question": text.strip(),
                "type": q_type,
                "difficulty": q_difficulty,
                "category": category.strip() if isinstance(category, str) and category.strip() else "general",
            }
        )

    seen: set[str] = set()
    for idx, question in enumerate(selected, start=1):
        raw_id = question["id"]
        q_id = str(raw_id).strip() if isinstance(raw_id, (str, int)) and not isinstance(raw_id, bool) else ""
        if not q_id or q_id in seen:
            q_id = str(idx)
            while q_id in seen:
                q_id = f"{q_id}-{idx}"
        seen.add(q_id)
        question["id"] = q_id
    return selected


class QuestionGenerator:
    def __init__(self, *, llm: LLMClient, cache: TTLCache):
        self._llm = llm
        self._cache = cache

    @staticmethod
    def cache_key(
        *, role: str, company: str, experience: str, difficulty: str, count: int, question_type: str
    ) -> str:
        payload = json.dumps([role, company, experience, difficulty, count, question_type], ensure_ascii=False)
        return "questions:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def fallback(self, *, role: str, difficulty: str, count: int, question_type: str) -> list[dict[str, Any]]:
        pool = get_fallback_pool(role=role, difficulty=difficulty)
        return select_questions(pool, difficulty=difficulty, count=count, question_type=question_type)

    async def generate(
        self,
        *,
        role: str,
        company: str,
        experience: str,
        difficulty: str = "medium",
        count: int = 5,
        question_type: str = "all",
    ) -> tuple[list[dict[str, Any]], bool]:
        """Return `(questions, is_fallback)`. Never raises."""
        key = self.cache_key(
            role=role,
            company=company,
            experience=experience,
            difficulty=difficulty,
            count=count,
            question_type=question_type,
        )
        cached = self._cache.get(key)
        if cached is not None:
            return cached, False

        prompt = build_question_prompt(
            role=role,
            company=company,
            experience=experience,
            difficulty=difficulty,
            count=count,
            question_type=question_type,
        )
        try:
            raw = await self._llm.generate_text(system_prompt=SYSTEM_PROMPT, user_prompt=prompt, json_object=True)
            questions = select_questions(
                parse_json_payload(raw), difficulty=difficulty, count=count, question_type=question_type
            )
        except Exception as e:  # noqa: BLE001
            logger.warning("Question generation failed, using question bank: %s", e)
            return self.fallback(role=role, difficulty=difficulty, count=count, question_type=question_type), True

        if not questions:
            logger.warning("Question generation returned no usable questions, using question bank")
            return self.fallback(role=role, difficulty=difficulty, count=count, question_type=question_type), True

        self._cache.set(key, questions)
        return questions, False


__all__ = ["QuestionGenerator", "build_question_prompt", "select_questions"]
