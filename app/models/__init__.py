from app.models.attempt import Attempt, FeedbackMode, Progress
from app.models.draft import QuizDraft
from app.models.quiz import Question, QuestionType, Quiz

__all__ = ["Attempt", "FeedbackMode", "Progress", "QuizDraft", "Question", "QuestionType", "Quiz"]
