from typing import Any

RECOMMENDED_SECONDS: dict[str, int] = {
    "easy": 120,
    "medium": 180,
    "hard": 300,
}

DIFFICULTY_TIPS: dict[str, list[str]] = {
    "easy": [
        "Keep your answer clear and concise",
        "Focus on the key points",
        "Use simple examples",
    ],
    "medium": [
        "Structure your answer with introduction, body, and conclusion",
        "Provide specific examples from your experience",
        "Explain your thought process",
    ],
    "hard": [
        "Use the STAR method (Situation, Task, Action, Result)",
        "Demonstrate deep technical or strategic thinking",
        "Show how you handle complex scenarios",
        "Include metrics and measurable outcomes",
    ],
}

# (max ratio of time spent to recommended time, score, feedback)
_TIME_BANDS: list[tuple[float, int, str]] = [
    (0.8, 10, "Excellent! You answered quickly while maintaining quality."),
    (1.0, 9, "Great timing! You used the recommended time effectively."),
    (1.2, 7, "Good, but try to be more concise in real interviews."),
    (1.5, 5, "You took a bit longer than recommended. Practice being more direct."),
]
_SLOW_SCORE = (3, "Too slow. Focus on structuring your thoughts before answering.")


def get_recommended_time(difficulty: str) -> int:
    return RECOMMENDED_SECONDS.get(difficulty, RECOMMENDED_SECONDS["medium"])


def get_difficulty_tips(difficulty: str) -> list[str]:
    return list(DIFFICULTY_TIPS.get(difficulty, DIFFICULTY_TIPS["medium"]))


def calculate_time_score(time_spent: float, recommended_time: float) -> dict[str, Any]:
    if recommended_time <= 0:
        raise ValueError("recommended_time must be positive")
    ratio = max(0.0, time_spent) / recommended_time
    for max_ratio, score, feedback in _TIME_BANDS:
        if ratio <= max_ratio:
            return {"score": score, "feedback": feedback}
    score, feedback = _SLOW_SCORE
    return {"score": score, "feedback": feedback}


def get_timer_config() -> dict[str, Any]:
    return {
        "recommended": dict(RECOMMENDED_SECONDS),
        "tips": {difficulty: get_difficulty_tips(difficulty) for difficulty in RECOMMENDED_SECONDS},
    }
