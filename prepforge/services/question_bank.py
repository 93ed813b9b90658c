"""Static question pools used whenever generated questions are unavailable.

Entries are ``(type, category, text)``; ``{role}`` is replaced with the job role.
"""

from typing import Any

DIFFICULTIES = ("easy", "medium", "hard")
QUESTION_TYPES = ("behavioral", "technical", "situational")

EASY_QUESTIONS: list[tuple[str, str, str]] = [
    ("behavioral", "introduction", "Tell me about yourself and your interest in {role}."),
    ("behavioral", "self-assessment", "What are your main strengths?"),
    ("behavioral", "motivation", "Why do you want to work in this role?"),
    ("behavioral", "experience", "Describe a typical day in your current or previous role."),
    ("behavioral", "company-fit", "What interests you about our company?"),
    ("technical", "technical-skills", "What programming languages or tools do you use for {role}?"),
    ("situational", "professionalism", "How would you handle receiving negative feedback?"),
    ("behavioral", "achievements", "What is your greatest professional achievement?"),
    ("behavioral", "learning", "How do you stay updated with industry trends?"),
    ("behavioral", "work-culture", "Describe your ideal work environment."),
    ("technical", "fundamentals", "What basic concepts of {role} are you most comfortable with?"),
    ("situational", "time-management", "How do you prioritize your tasks?"),
    ("behavioral", "teamwork", "Tell me about a time you worked in a team."),
    ("behavioral", "goals", "What are your career goals for the next year?"),
    (
        "situational",
        "communication",
        "How would you explain a complex technical concept to a non-technical person?",
    ),
    ("technical", "tools", "What tools or frameworks are you familiar with in {role}?"),
    ("behavioral", "adaptability", "Describe a time when you had to learn something new quickly."),
    ("behavioral", "motivation", "What motivates you in your work?"),
    ("situational", "feedback", "How do you handle constructive criticism?"),
    ("behavioral", "fit", "What makes you a good fit for this role?"),
]

MEDIUM_QUESTIONS: list[tuple[str, str, str]] = [
    ("behavioral", "background", "Tell me about your experience with {role} and what interests you about this role."),
    ("behavioral", "problem-solving", "Describe a challenging project you worked on and how you overcame obstacles."),
    ("situational", "stress-management", "How do you handle working under pressure and tight deadlines?"),
    ("behavioral", "teamwork", "Tell me about a time when you had to work with a difficult team member."),
    (
        "behavioral",
        "career-planning",
        "Where do you see yourself in 5 years and how does this role fit into your career goals?",
    ),
    ("technical", "architecture", "Explain the architecture of a system you've built for {role}."),
    ("situational", "conflict-resolution", "How would you handle a conflict between two team members?"),
    ("behavioral", "influence", "Describe a time when you had to persuade stakeholders to adopt your solution."),
    ("technical", "decision-making", "What are the trade-offs between different approaches in {role}?"),
    ("behavioral", "failure", "Tell me about a time when you missed a deadline. What happened?"),
    ("technical", "quality", "How do you ensure code quality in your projects?"),
    ("situational", "mentorship", "How would you onboard a new team member?"),
    ("technical", "debugging", "Describe your approach to debugging complex issues."),
    ("behavioral", "change-management", "Tell me about a time you had to adapt to significant changes at work."),
    ("situational", "prioritization", "How do you balance technical debt with feature development?"),
    ("technical", "testing", "What testing strategies do you use for {role} projects?"),
    ("behavioral", "improvement", "Describe a time when you improved a process or system."),
    ("situational", "disagreement", "How would you handle a situation where you disagree with your manager?"),
    ("technical", "optimization", "Explain performance optimization techniques for {role}."),
    ("behavioral", "initiative", "Tell me about a time you took initiative on a project."),
]

HARD_QUESTIONS: list[tuple[str, str, str]] = [
    (
        "technical",
        "problem-solving",
        "Describe the most complex technical problem you've solved in {role} and walk me through your approach.",
    ),
    (
        "situational",
        "decision-making",
        "Tell me about a time when you had to make a critical decision with incomplete information. "
        "What was your thought process?",
    ),
    (
        "technical",
        "system-design",
        "How would you design and implement a system for [complex scenario]? Consider scalability, reliability, and cost.",
    ),
    (
        "behavioral",
        "adaptability",
        "Describe a situation where your initial approach failed. How did you identify the issue and what did you do "
        "differently?",
    ),
    (
        "situational",
        "leadership",
        "You're leading a project that's behind schedule and over budget. Walk me through your strategy to recover.",
    ),
    ("technical", "scalability", "Design a scalable architecture for a high-traffic {role} application."),
    ("behavioral", "tough-decisions", "Describe a time when you had to make a decision that was unpopular but necessary."),
    ("technical", "system-design", "How would you architect a system to handle millions of concurrent users?"),
    ("situational", "communication", "Tell me about a time you had to deliver bad news to stakeholders."),
    (
        "technical",
        "architecture",
        "Describe the most significant technical architecture decision you've made and its impact.",
    ),
    ("situational", "crisis-management", "How would you handle a critical production outage affecting thousands of users?"),
    ("behavioral", "mentorship", "Explain how you would mentor a struggling team member while meeting project deadlines."),
    ("technical", "security", "What are the most critical security considerations for {role} and how do you address them?"),
    ("behavioral", "adaptability", "Describe a situation where you had to completely pivot your technical approach mid-project."),
    ("situational", "transformation", "How would you lead a technical transformation initiative across multiple teams?"),
    ("technical", "distributed-systems", "Design a distributed system with high availability requirements for {role}."),
    ("behavioral", "politics", "Tell me about a time when you had to navigate significant organizational politics."),
    ("technical", "migration", "How would you migrate a legacy system to a modern architecture with zero downtime?"),
    ("behavioral", "culture", "Describe how you've built and maintained a high-performing engineering culture."),
    ("situational", "decision-framework", "How do you make technology decisions when there are multiple valid approaches?"),
]

_POOLS: dict[str, list[tuple[str, str, str]]] = {
    "easy": EASY_QUESTIONS,
    "medium": MEDIUM_QUESTIONS,
    "hard": HARD_QUESTIONS,
}


def get_fallback_pool(*, role: str, difficulty: str) -> list[dict[str, Any]]:
    """Return the full pool for `difficulty` (unknown difficulties use medium) with the role filled in."""
    level = difficulty if difficulty in _POOLS else "medium"
    return [
        {
            "id": str(idx),
            "question": text.replace("{role}", role),
            "type": q_type,
            "difficulty": level,
            "category": category,
        }
        for idx, (q_type, category, text) in enumerate(_POOLS[level], start=1)
    ]


__all__ = ["DIFFICULTIES", "QUESTION_TYPES", "get_fallback_pool"]
