"""Quiz-related constants shared across the engine and its hosts."""

SAMPLE_SIZE: int = 20
QUIZ_DURATION_SECONDS: int = 20 * 60
TICK_INTERVAL_MS: int = 1000

# Timer colour bands for a full-length quiz; shorter quizzes scale these.
WARNING_THRESHOLD_SECONDS: int = 10 * 60
CRITICAL_THRESHOLD_SECONDS: int = 5 * 60
