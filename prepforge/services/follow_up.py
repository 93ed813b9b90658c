import logging

from prepforge.services.llm import LLMClient, strip_code_fences

logger = logging.getLogger(__name__)

DEFAULT_FOLLOW_UP = "Can you elaborate on that a bit more?"

SYSTEM_PROMPT = "You are an interviewer running a mock interview. Reply with a single question and nothing else."


class FollowUpGenerator:
    """Asks the model for one follow-up question that digs into the candidate's answer."""

    def __init__(self, *, llm: LLMClient, max_answer_chars: int = 4000):
        self._llm = llm
        self._max_answer_chars = max_answer_chars

    def build_prompt(self, question: str, answer: str) -> str:
        # Use the trailing portion of long answers
        excerpt = answer.strip()
        if len(excerpt) > self._max_answer_chars:
            excerpt = excerpt[-self._max_answer_chars :]
        return (
            "Based on the original question and the user's answer, generate one relevant follow-up question. "
            "The follow-up should dig deeper into the user's response.\n\n"
            f'Original Question: "{question}"\n'
            f'User\'s Answer: "{excerpt}"\n\n'
            "Return only the follow-up question as a single string."
        )

    async def generate(self, question: str, answer: str) -> str:
        try:
            raw = await self._llm.generate_text(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=self.build_prompt(question, answer),
                max_tokens=256,
            )
        except Exception as e:  # noqa: BLE001
            logger.warning("Follow-up generation failed: %s", e)
            return DEFAULT_FOLLOW_UP

        text = strip_code_fences(raw).strip().strip('"').strip()
        if not text:
            logger.debug("Follow-up generation returned empty text")
            return DEFAULT_FOLLOW_UP
        return text


__all__ = ["DEFAULT_FOLLOW_UP", "FollowUpGenerator"]
