"""Quiz-related constants shared across the engine, session and hosts."""

DEFAULT_QUESTION_COUNT: int = 8
WRONG_ANSWER_COUNT: int = 3
MIN_NAMED_PROFILES: int = 2
MEMORY_RECALL_PREFIX_LENGTH: int = 60
AUTO_ADVANCE_DELAY_MS: int = 1200
FIRST_LEVEL: int = 1
PROMPTED_MEMORY_SOURCE: str = "quiz_wrong"
