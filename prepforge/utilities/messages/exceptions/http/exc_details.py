def user_not_found_details(user_id: int) -> str:
    return f"User with id `{user_id}` not found"


def interview_not_found_details(interview_id: int) -> str:
    return f"Interview with id `{interview_id}` not found"


def question_set_not_found_details(set_id: int) -> str:
    return f"Question set with id `{set_id}` not found"


def http_400_invalid_status_details(status: str) -> str:
    return f"Interview is already `{status}`"
