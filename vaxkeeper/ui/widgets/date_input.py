from __future__ import annotations

from PySide6.QtCore import QDate, QEvent, QObject, Qt, QTimer
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QDateEdit

_POPUP_KEYS = (Qt.Key.Key_F4, Qt.Key.Key_Down, Qt.Key.Key_Select)


def create_optional_date_edit(empty_date: QDate) -> QDateEdit:
    """QDateEdit whose minimum date renders blank and means "not chosen"."""
    widget = QDateEdit()
    widget.setCalendarPopup(True)
    widget.setDisplayFormat("yyyy-MM-dd")
    widget.setMinimumDate(empty_date)
    widget.setSpecialValueText(" ")
    widget.setDate(empty_date)
    widget.installEventFilter(EmptyDatePopupPage(widget))
    return widget


def is_empty_date(widget: QDateEdit) -> bool:
    value = widget.date()
    return not value.isValid() or value == widget.minimumDate()


def show_today_page(widget: QDateEdit) -> None:
    if not is_empty_date(widget):
        return
    calendar = widget.calendarWidget()
    if calendar is None:
        return
    today = QDate.currentDate()
    calendar.setCurrentPage(today.year(), today.month())


class EmptyDatePopupPage(QObject):
    """Opens the calendar popup of a blank date edit on the current month.

    The popup syncs to the edit's date while it opens, so the page is moved
    on the next event loop turn.
    """

    def eventFilter(self, obj: object, event: QEvent) -> bool:  # noqa: N802
        if not isinstance(obj, QDateEdit) or not is_empty_date(obj):
            return False
        opens_popup = event.type() == QEvent.Type.MouseButtonPress
        if event.type() == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
            opens_popup = event.key() in _POPUP_KEYS
        if opens_popup:
            QTimer.singleShot(0, lambda: show_today_page(obj))
        return False
