"""User-facing strings returned by the quiz hosts."""

NO_QUIZ_AVAILABLE_MESSAGE: str = "Add at least two people with names to start a quiz."
NO_ACTIVE_QUIZ_MESSAGE: str = "No quiz is currently running."
QUIZ_NOT_COMPLETE_MESSAGE: str = "The quiz has not been completed yet."

FEEDBACK_EXCELLENT: str = "Wonderful memory!"
FEEDBACK_GOOD: str = "Good effort!"
FEEDBACK_KEEP_GOING: str = "Keep practicing, you're growing"

MEMORY_PROMPT_TITLE: str = "Keep a Memory"
MEMORY_PROMPT_SUBTITLE: str = "Write something you'd like to remember"
MEMORY_PROMPT_WHO_LABEL: str = "About who?"
