"""User-facing messages returned by the quiz hosts."""

NOT_LOGGED_IN_MESSAGE: str = "Please log in with your access code first."
NO_ACTIVE_QUIZ_MESSAGE: str = "No quiz is currently in progress."
NO_RESULT_MESSAGE: str = "No finished quiz is available for review."
NO_TOPICS_MESSAGE: str = "No topics assigned to your account."
ANSWER_BEFORE_NEXT_MESSAGE: str = "Answer the current question before moving on."
TIME_UP_MESSAGE: str = "Time is up! Your quiz was submitted automatically."
UNANSWERED_WARNING_TEMPLATE: str = "You have {count} unanswered question(s)."
WELCOME_TEMPLATE: str = "Welcome, {name} (Class {class_level})"
