import json
import math

import pytest

from prepforge.services.cache import TTLCache
from prepforge.services.feedback import FeedbackNormalizer, ScoreRecord, clamp_score, heuristic_feedback
from tests.unit_tests.fakes import FakeLLM

QUESTION = "Tell me about a time you led a project."
ANSWER = " ".join(["I led the migration of our billing service and coordinated three teams"] * 3)


def _normalizer(llm: FakeLLM, fourth_axis: str = "star_method") -> FeedbackNormalizer:
    return FeedbackNormalizer(llm=llm, cache=TTLCache(name="feedback", default_ttl_seconds=60), fourth_axis=fourth_axis)


def _assert_bounded(record: ScoreRecord) -> None:
    for value in record.sub_scores():
        assert math.isfinite(value)
        assert 0 <= value <= 10


@pytest.mark.parametrize(
    "raw, expected",
    [
        (7, 7.0),
        (7.5, 7.5),
        ("8", 8.0),
        (" 6.5 ", 6.5),
        (-3, 0.0),
        (42, 10.0),
        ("NaN", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 10.0),
        (None, 0.0),
        (True, 0.0),
        ("great", 0.0),
        ([8], 0.0),
    ],
)
def test_clamp_score(raw, expected):
    assert clamp_score(raw) == expected


@pytest.mark.asyncio
async def test_well_formed_response_is_used_as_is():
    payload = {
        "relevanceScore": 8,
        "clarityScore": 6,
        "depthScore": 7,
        "starMethodScore": 9,
        "overallFeedback": "Solid example.",
        "suggestion": "Quantify the outcome.",
    }
    normalizer = _normalizer(FakeLLM(responses=[json.dumps(payload)]))

    record = await normalizer.evaluate(QUESTION, ANSWER)

    assert (record.relevance, record.clarity, record.depth, record.fourth_axis) == (8, 6, 7, 9)
    assert record.overall_score() == 7.5
    assert record.overall_feedback == "Solid example."
    assert record.is_fallback is False


@pytest.mark.asyncio
async def test_fenced_and_partial_response_is_clamped():
    raw = '```json\n{"relevanceScore": 14, "clarityScore": "NaN", "depthScore": -2}\n```'
    record = await _normalizer(FakeLLM(responses=[raw])).evaluate(QUESTION, ANSWER)

    assert (record.relevance, record.clarity, record.depth, record.fourth_axis) == (10, 0, 0, 0)
    assert record.overall_feedback
    assert record.suggestion
    assert record.is_fallback is False


@pytest.mark.asyncio
async def test_fourth_axis_accepts_either_key():
    star = await _normalizer(FakeLLM(responses=['{"communicationScore": 4}'])).evaluate(QUESTION, ANSWER)
    assert star.fourth_axis == 4

    both = '{"communicationScore": 4, "starMethodScore": 9}'
    communication = await _normalizer(FakeLLM(responses=[both]), fourth_axis="communication").evaluate(QUESTION, ANSWER)
    assert communication.fourth_axis == 4


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "llm",
    [
        FakeLLM(error=ConnectionError("network down")),
        FakeLLM(error=TimeoutError()),
        FakeLLM(responses=[""]),
        FakeLLM(responses=["I think this answer is pretty good!"]),
        FakeLLM(responses=["[1, 2, 3]"]),
        FakeLLM(responses=["null"]),
    ],
)
async def test_unusable_upstream_falls_back_without_raising(llm):
    record = await _normalizer(llm).evaluate(QUESTION, ANSWER)

    _assert_bounded(record)
    assert record.is_fallback is True


@pytest.mark.asyncio
async def test_empty_object_is_clamped_not_fallback():
    record = await _normalizer(FakeLLM(responses=["{}"])).evaluate(QUESTION, ANSWER)

    assert record.sub_scores() == [0, 0, 0, 0]
    assert record.is_fallback is False


def test_heuristic_bands():
    assert heuristic_feedback("too short to judge").sub_scores() == [3, 3, 3, 3]
    assert heuristic_feedback(" ".join(["word"] * 100)).sub_scores() == [7, 7, 7, 7]
    assert heuristic_feedback(" ".join(["word"] * 351)).sub_scores() == [6, 6, 6, 6]


@pytest.mark.asyncio
async def test_successful_results_are_cached_and_copied():
    llm = FakeLLM(responses=['{"relevanceScore": 5, "clarityScore": 5, "depthScore": 5, "starMethodScore": 5}'])
    normalizer = _normalizer(llm)

    first = await normalizer.evaluate(QUESTION, ANSWER)
    first.relevance = 0
    second = await normalizer.evaluate(QUESTION, ANSWER)

    assert len(llm.calls) == 1
    assert second.relevance == 5


@pytest.mark.asyncio
async def test_fallback_results_are_not_cached():
    llm = FakeLLM(error=ConnectionError("network down"))
    normalizer = _normalizer(llm)

    await normalizer.evaluate(QUESTION, ANSWER)
    await normalizer.evaluate(QUESTION, ANSWER)

    assert len(llm.calls) == 2


def test_cache_key_distinguishes_question_answer_boundary():
    assert FeedbackNormalizer.cache_key("ab", "c") != FeedbackNormalizer.cache_key("a", "bc")


def test_unknown_fourth_axis_is_rejected():
    with pytest.raises(ValueError):
        _normalizer(FakeLLM(), fourth_axis="charisma")
