from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Ensure project root on sys.path when running as script or bundled app
_MEIPASS = getattr(sys, "_MEIPASS", None)
ROOT_DIR = Path(_MEIPASS) if _MEIPASS else Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from PySide6.QtCore import QtMsgType, qInstallMessageHandler  # noqa: E402
from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox  # noqa: E402

from vaxkeeper.bootstrap.startup import PACKAGE_DIR, initialize_database  # noqa: E402
from vaxkeeper.config import DB_FILE, LOG_DIR, WINDOW_TITLE, settings  # noqa: E402
from vaxkeeper.container import build_container  # noqa: E402
from vaxkeeper.ui.main_window import MainWindow  # noqa: E402


def _setup_logging() -> Path:
    log_path = LOG_DIR / "app.log"
    handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.addHandler(handler)
    return log_path


def _install_exception_hook(log_path: Path) -> None:
    def _handle_exception(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).error("Unhandled exception", exc_info=(exc_type, exc, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None,
                "Error",
                f"An unexpected error occurred.\nReport: {log_path}",
            )
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _handle_exception


def _install_qt_message_handler() -> None:
    def _handle_qt_message(msg_type: QtMsgType, _context, message: str) -> None:
        logger = logging.getLogger("qt")
        if msg_type in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
            logger.error("Qt: %s", message)
        elif msg_type == QtMsgType.QtWarningMsg:
            logger.warning("Qt: %s", message)
        else:
            logger.debug("Qt: %s", message)

    qInstallMessageHandler(_handle_qt_message)


def _apply_initial_window_size(window: QMainWindow, app: QApplication) -> None:
    screen = window.screen() or app.primaryScreen()
    if not screen:
        return
    available = screen.availableGeometry()
    width = min(available.width(), max(760, int(available.width() * 0.6)))
    height = min(available.height(), max(560, int(available.height() * 0.8)))
    window.resize(width, height)
    x = available.x() + max(0, (available.width() - width) // 2)
    y = available.y() + max(0, (available.height() - height) // 2)
    window.move(x, y)


def main() -> int:
    log_path = _setup_logging()
    _install_exception_hook(log_path)
    _install_qt_message_handler()
    app = QApplication(sys.argv)
    app.setApplicationDisplayName(WINDOW_TITLE)
    logging.getLogger(__name__).info("Starting with database %s", DB_FILE)
    if not initialize_database(
        package_dir=PACKAGE_DIR,
        db_file=DB_FILE,
        database_url=settings.database_url,
        log_dir=LOG_DIR,
    ):
        return 1
    container = build_container()

    window = MainWindow(container=container)
    _apply_initial_window_size(window, app)
    window.show()
    window.load_initial()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
