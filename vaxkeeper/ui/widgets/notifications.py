from __future__ import annotations

import logging

from PySide6.QtWidgets import QLabel, QMessageBox, QWidget

STATUS_LEVELS = ("success", "warning", "error", "info")

_ICONS = {
    "success": QMessageBox.Icon.Information,
    "warning": QMessageBox.Icon.Warning,
    "error": QMessageBox.Icon.Critical,
    "info": QMessageBox.Icon.Information,
}


def _refresh_status_style(label: QLabel) -> None:
    style = label.style()
    style.unpolish(label)
    style.polish(label)
    label.update()


def set_status(label: QLabel, message: str, level: str = "info") -> None:
    if not message:
        clear_status(label)
        return
    normalized_level = level if level in STATUS_LEVELS else "info"
    label.setText(message)
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", normalized_level)
    label.setWordWrap(True)
    _refresh_status_style(label)


def clear_status(label: QLabel) -> None:
    label.clear()
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", "")
    _refresh_status_style(label)


def show_message(parent: QWidget | None, title: str, message: str, level: str = "info") -> None:
    logger = logging.getLogger(__name__)
    if level == "error":
        logger.error("%s: %s", title, message)
    elif level == "warning":
        logger.warning("%s: %s", title, message)
    else:
        logger.info("%s: %s", title, message)
    box = QMessageBox(parent)
    box.setWindowTitle(title)
    box.setText(message)
    box.setIcon(_ICONS.get(level, QMessageBox.Icon.Information))
    box.exec()


def show_error(parent: QWidget | None, message: str, title: str = "Error") -> None:
    show_message(parent, title, message, level="error")


def show_warning(parent: QWidget | None, message: str, title: str = "Warning") -> None:
    show_message(parent, title, message, level="warning")


def show_info(parent: QWidget | None, message: str, title: str = "Information") -> None:
    show_message(parent, title, message, level="info")


class MessageBoxNotifier:
    """Feedback channel for form actions: a modal box plus the window status line."""

    def __init__(self, parent: QWidget | None, status: QLabel | None = None) -> None:
        self.parent = parent
        self.status = status

    def _update_status(self, message: str, level: str) -> None:
        if self.status is not None:
            set_status(self.status, message, level)

    def info(self, message: str) -> None:
        self._update_status(message, "success")
        show_info(self.parent, message)

    def warning(self, message: str) -> None:
        self._update_status(message, "warning")
        show_warning(self.parent, message)

    def error(self, message: str) -> None:
        self._update_status(message, "error")
        show_error(self.parent, message)
