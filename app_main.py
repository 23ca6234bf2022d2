"""Application entry point for the RecallQuiz host."""

from __future__ import annotations

import socket

from recall_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from recall_quiz.core.quiz_manager import QuizManager
from recall_quiz.core.services.advance_scheduler import ThreadedAdvanceScheduler
from recall_quiz.server.api_server import start_api_server
from recall_quiz.utils.logging_config import configure_logging


def _determine_base_url(port: int) -> str:
    """Best-effort determination of the local IP for the companion app URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, start the API server, and serve until interrupted."""
    logger = configure_logging()
    logger.info("Starting RecallQuiz host...")

    quiz_manager = QuizManager(scheduler=ThreadedAdvanceScheduler())
    server_thread = start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Quiz API available at %s", _determine_base_url(DEFAULT_PORT))

    try:
        server_thread.join()
    except KeyboardInterrupt:
        logger.info("Shutting down RecallQuiz host")
    finally:
        quiz_manager.end_quiz()


if __name__ == "__main__":
    main()
