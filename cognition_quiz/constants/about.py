"""Static metadata describing Cognition Quiz."""

APP_NAME = "Cognition Quiz"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "Cognition Quiz runs timed multiple-choice quizzes drawn from topic question banks. "
    "Each attempt samples twenty questions, runs a twenty minute countdown and ends with "
    "a score and a question-by-question review."
)
