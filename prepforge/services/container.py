import asyncio
import contextlib
import logging

from prepforge.config.manager import settings
from prepforge.services.cache import TTLCache, sweep_caches_forever
from prepforge.services.feedback import FeedbackNormalizer
from prepforge.services.follow_up import FollowUpGenerator
from prepforge.services.llm import LLMClient
from prepforge.services.question_generator import QuestionGenerator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Process-wide services, built once per application and torn down with it."""

    def __init__(self, *, llm: LLMClient | None = None):
        self.llm = llm or LLMClient()
        self.question_cache = TTLCache(name="questions", default_ttl_seconds=settings.QUESTION_CACHE_TTL_SECONDS)
        self.feedback_cache = TTLCache(name="feedback", default_ttl_seconds=settings.FEEDBACK_CACHE_TTL_SECONDS)
        self.question_generator = QuestionGenerator(llm=self.llm, cache=self.question_cache)
        self.feedback_normalizer = FeedbackNormalizer(
            llm=self.llm, cache=self.feedback_cache, fourth_axis=settings.FEEDBACK_FOURTH_AXIS
        )
        self.follow_up_generator = FollowUpGenerator(llm=self.llm)
        self._sweep_task: asyncio.Task | None = None

    def start(self) -> None:
        if self._sweep_task is not None:
            return
        if not self.llm.is_configured:
            logger.warning("OPENAI_API_KEY is not set; question and feedback generation will use fallbacks")
        self._sweep_task = asyncio.create_task(
            sweep_caches_forever(
                [self.question_cache, self.feedback_cache], interval_seconds=settings.CACHE_SWEEP_INTERVAL_SECONDS
            )
        )

    async def stop(self) -> None:
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None
        await self.llm.close()
