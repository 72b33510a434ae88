from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from mdpdf.di.container import Container
from mdpdf.services.config import build_app_config
from mdpdf.utils.constants import APP_NAME, APP_ORG
from mdpdf.utils.log import configure_logging

logger = logging.getLogger(__name__)


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    app_config = build_app_config()
    configure_logging(app_config.log_level())
    logger.info("Starting %s %s", APP_NAME, app_config.get_version())

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default(app_config=app_config)

    # Optional file path to open passed as first CLI argument
    start_path = Path(argv[1]) if len(argv) > 1 else None

    win = container.build_main_window(start_path=start_path, app_title=APP_NAME)
    win.show()

    return app.exec()
