"""Static metadata describing RecallQuiz."""

APP_NAME = "RecallQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "RecallQuiz builds short multiple-choice recall quizzes from the people a caregiver "
    "has entered and the memories recorded on the memory board, then runs them as a "
    "timed, scored session."
)
