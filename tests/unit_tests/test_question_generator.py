import json

import pytest

from prepforge.services.cache import TTLCache
from prepforge.services.llm import parse_json_payload
from prepforge.services.question_bank import get_fallback_pool
from prepforge.services.question_generator import QuestionGenerator, build_question_prompt, select_questions
from tests.unit_tests.fakes import FakeLLM


def _generator(llm: FakeLLM) -> QuestionGenerator:
    return QuestionGenerator(llm=llm, cache=TTLCache(name="questions", default_ttl_seconds=60))


def _item(idx, q_type, text=None):
    return {"id": str(idx), "question": text or f"Question {idx}?", "type": q_type, "difficulty": "medium", "category": "x"}


@pytest.mark.asyncio
async def test_type_filter_and_truncation_on_oversized_mixed_response():
    items = [_item(i, ("technical", "behavioral", "situational")[i % 3]) for i in range(30)]
    generator = _generator(FakeLLM(responses=[json.dumps(items)]))

    questions, is_fallback = await generator.generate(
        role="Backend Engineer", company="Acme", experience="senior", count=5, question_type="technical"
    )

    assert is_fallback is False
    assert len(questions) == 5
    assert all(q["type"] == "technical" for q in questions)


@pytest.mark.asyncio
async def test_object_with_questions_key_is_accepted():
    payload = {"questions": [_item(1, "behavioral"), _item(2, "technical")]}
    questions, _ = await _generator(FakeLLM(responses=[json.dumps(payload)])).generate(
        role="Engineer", company="Acme", experience="mid-level"
    )

    assert [q["id"] for q in questions] == ["1", "2"]


def test_malformed_items_are_dropped_and_ids_made_unique():
    items = [
        "not an object",
        {"question": "   ", "type": "technical"},
        {"id": 7, "question": "First?", "type": "technical"},
        {"id": "7", "question": "Second?", "type": "unknown"},
        {"question": "Third?"},
    ]

    questions = select_questions(items, difficulty="hard", count=10, question_type="all")

    assert [q["question"] for q in questions] == ["First?", "Second?", "Third?"]
    ids = [q["id"] for q in questions]
    assert ids[0] == "7"
    assert len(set(ids)) == 3
    assert all(q["type"] in ("behavioral", "technical", "situational") for q in questions)
    assert all(q["difficulty"] == "hard" for q in questions)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "llm",
    [FakeLLM(error=RuntimeError("boom")), FakeLLM(responses=["not json"]), FakeLLM(responses=["[]"])],
)
async def test_fallback_uses_question_bank(llm):
    questions, is_fallback = await _generator(llm).generate(
        role="Data Engineer", company="Acme", experience="junior", difficulty="easy", count=3, question_type="technical"
    )

    assert is_fallback is True
    assert 0 < len(questions) <= 3
    assert all(q["type"] == "technical" and q["difficulty"] == "easy" for q in questions)
    assert any("Data Engineer" in q["question"] for q in questions)


@pytest.mark.asyncio
async def test_successful_generation_is_cached_but_fallback_is_not():
    llm = FakeLLM(responses=[json.dumps([_item(1, "behavioral")])])
    generator = _generator(llm)

    await generator.generate(role="PM", company="Acme", experience="lead")
    await generator.generate(role="PM", company="Acme", experience="lead")
    assert len(llm.calls) == 1

    failing = FakeLLM(error=RuntimeError("boom"))
    fallback_generator = _generator(failing)
    await fallback_generator.generate(role="PM", company="Acme", experience="lead")
    await fallback_generator.generate(role="PM", company="Acme", experience="lead")
    assert len(failing.calls) == 2


def test_fallback_pool_sizes_and_unknown_difficulty():
    for difficulty in ("easy", "medium", "hard"):
        assert len(get_fallback_pool(role="QA", difficulty=difficulty)) == 20
    assert get_fallback_pool(role="QA", difficulty="expert") == get_fallback_pool(role="QA", difficulty="medium")


def test_prompt_mentions_seniority_and_type():
    prompt = build_question_prompt(
        role="SRE", company="Acme", experience="senior", difficulty="hard", count=4, question_type="situational"
    )

    assert "6+ years" in prompt
    assert "ONLY on situational" in prompt
    assert "HARD" in prompt


def test_parse_json_payload_recovers_array_from_prose():
    raw = 'Here you go:\n```json\n[{"id": "1", "question": "Why Acme?",},]\n```\nGood luck!'

    assert parse_json_payload(raw) == [{"id": "1", "question": "Why Acme?"}]
    with pytest.raises(ValueError):
        parse_json_payload("no json here")


def test_cache_key_does_not_collide_across_field_boundaries():
    common = {"experience": "senior", "difficulty": "hard", "count": 5, "question_type": "all"}

    assert QuestionGenerator.cache_key(role="a:b", company="c", **common) != QuestionGenerator.cache_key(
        role="a", company="b:c", **common
    )
    assert QuestionGenerator.cache_key(role="SRE", company="Acme", **common) == QuestionGenerator.cache_key(
        role="SRE", company="Acme", **common
    )
