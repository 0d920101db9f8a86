"""Application entry point for Cognition Quiz."""

from __future__ import annotations

import sys

from PySide6.QtCore import QCoreApplication

from cognition_quiz.constants.catalog_constants import CODES_RELATIVE_PATH, DEFAULT_DATA_DIR
from cognition_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from cognition_quiz.core.access_codes import AccessCodeRegistry
from cognition_quiz.core.catalog_loader import load_catalog
from cognition_quiz.core.quiz_manager import QuizManager
from cognition_quiz.server.api_server import start_api_server
from cognition_quiz.ui.tick_driver import QtTickDriver
from cognition_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Load the catalog, start the API server, and run the Qt loop that ticks quiz clocks."""
    logger = configure_logging()
    logger.info("Starting Cognition Quiz…")

    catalog = load_catalog(DEFAULT_DATA_DIR)
    registry = AccessCodeRegistry.from_file(DEFAULT_DATA_DIR / CODES_RELATIVE_PATH)
    if registry is None:
        logger.warning("No access code registry found; accepting any well-formed code.")

    quiz_manager = QuizManager(catalog=catalog, access_registry=registry)

    app = QCoreApplication(sys.argv)
    driver = QtTickDriver(on_tick=quiz_manager.tick)
    quiz_manager.set_clock_observers(
        on_started=driver.request_start,
        on_stopped=driver.request_stop,
    )

    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Quiz API available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
