from prepforge.models.db.answer import Answer
from prepforge.models.db.interview import Interview
from prepforge.models.db.saved_question_set import SavedQuestionSet
from prepforge.models.db.user import User
from prepforge.models.db.user_progress import UserProgress

__all__ = ["Answer", "Interview", "SavedQuestionSet", "User", "UserProgress"]
