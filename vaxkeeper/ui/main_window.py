from __future__ import annotations

from datetime import date
from typing import Any

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from vaxkeeper.config import WINDOW_TITLE
from vaxkeeper.domain.constants import Gender
from vaxkeeper.ui.patient_actions import (
    MSG_LIST_LOAD_FAILED,
    NotifierLike,
    PatientActions,
    PatientFields,
    VaccineFields,
)
from vaxkeeper.ui.patient_list_model import PatientListModel
from vaxkeeper.ui.widgets.date_input import create_optional_date_edit, is_empty_date, show_today_page
from vaxkeeper.ui.widgets.notifications import MessageBoxNotifier, clear_status

EMPTY_DATE = QDate(1900, 1, 1)
PATIENT_COLUMNS = ["ID", "Name", "Age", "Gender"]


class MainWindow(QMainWindow):
    def __init__(
        self,
        container: Any,
        notifier: NotifierLike | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(760, 560)
        self.model = PatientListModel(self)
        self._build_ui()
        self.notifier = notifier or MessageBoxNotifier(self, self.status)
        self.patient_actions = PatientActions(
            patient_service=container.patient_service,
            vaccination_service=container.vaccination_service,
            model=self.model,
            form=self,
            notifier=self.notifier,
        )
        self.model.changed.connect(self._render_patients)
        self._connect_actions()

    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel(WINDOW_TITLE)
        header.setObjectName("pageTitle")
        layout.addWidget(header)

        patient_box = QGroupBox("Patient")
        patient_form = QFormLayout()
        self.patient_name = QLineEdit()
        self.patient_age = QLineEdit()
        self.patient_age.setPlaceholderText("Years")
        self.patient_gender = QComboBox()
        self.patient_gender.addItem("Select", None)
        for value in Gender.values():
            self.patient_gender.addItem(value, value)
        patient_form.addRow("Name *", self.patient_name)
        patient_form.addRow("Age *", self.patient_age)
        patient_form.addRow("Gender *", self.patient_gender)
        patient_box.setLayout(patient_form)
        layout.addWidget(patient_box)

        patient_btns = QHBoxLayout()
        self.add_patient_btn = QPushButton("Add Patient")
        self.add_patient_btn.setObjectName("primaryButton")
        self.view_patients_btn = QPushButton("View Patients")
        self.delete_patient_btn = QPushButton("Delete Patient")
        patient_btns.addWidget(self.add_patient_btn)
        patient_btns.addWidget(self.view_patients_btn)
        patient_btns.addWidget(self.delete_patient_btn)
        patient_btns.addStretch()
        layout.addLayout(patient_btns)

        self.patient_table = QTableWidget(0, len(PATIENT_COLUMNS))
        self.patient_table.setHorizontalHeaderLabels(PATIENT_COLUMNS)
        self.patient_table.horizontalHeader().setStretchLastSection(True)
        self.patient_table.verticalHeader().setVisible(False)
        self.patient_table.setAlternatingRowColors(True)
        self.patient_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.patient_table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.patient_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.patient_table.setMinimumHeight(220)
        layout.addWidget(self.patient_table)

        vaccine_box = QGroupBox("Vaccination")
        vaccine_form = QFormLayout()
        self.vaccine_name = QLineEdit()
        self.manufacturer = QLineEdit()
        self.booster_date = create_optional_date_edit(EMPTY_DATE)
        show_today_page(self.booster_date)
        vaccine_form.addRow("Vaccine *", self.vaccine_name)
        vaccine_form.addRow("Manufacturer *", self.manufacturer)
        vaccine_form.addRow("Booster due *", self.booster_date)
        vaccine_box.setLayout(vaccine_form)
        layout.addWidget(vaccine_box)

        vaccine_btns = QHBoxLayout()
        self.add_vaccine_btn = QPushButton("Add Vaccine")
        self.add_vaccine_btn.setObjectName("primaryButton")
        vaccine_btns.addWidget(self.add_vaccine_btn)
        vaccine_btns.addStretch()
        layout.addLayout(vaccine_btns)

        self.status = QLabel("")
        clear_status(self.status)
        layout.addWidget(self.status)

        self.setCentralWidget(central)

    def _connect_actions(self) -> None:
        handlers = self.patient_actions.action_map()
        buttons = {
            "add_patient": self.add_patient_btn,
            "view_patients": self.view_patients_btn,
            "delete_patient": self.delete_patient_btn,
            "add_vaccine": self.add_vaccine_btn,
        }
        for name, button in buttons.items():
            handler = handlers[name]
            button.clicked.connect(lambda _checked=False, h=handler: h())

    def load_initial(self) -> bool:
        if self.patient_actions.reload():
            return True
        self.notifier.error(MSG_LIST_LOAD_FAILED)
        return False

    def _render_patients(self) -> None:
        patients = self.model.patients()
        self.patient_table.setRowCount(len(patients))
        for row, patient in enumerate(patients):
            self.patient_table.setItem(row, 0, QTableWidgetItem(str(patient.id)))
            self.patient_table.setItem(row, 1, QTableWidgetItem(patient.name))
            self.patient_table.setItem(row, 2, QTableWidgetItem(str(patient.age)))
            self.patient_table.setItem(row, 3, QTableWidgetItem(patient.gender))
        self.patient_table.clearSelection()

    # Form accessors used by PatientActions.

    def read_patient_fields(self) -> PatientFields:
        return PatientFields(
            name=self.patient_name.text(),
            age_text=self.patient_age.text(),
            gender=self.patient_gender.currentData(),
        )

    def clear_patient_fields(self) -> None:
        self.patient_name.clear()
        self.patient_age.clear()
        self.patient_gender.setCurrentIndex(0)

    def read_vaccine_fields(self) -> VaccineFields:
        return VaccineFields(
            vaccine_name=self.vaccine_name.text(),
            manufacturer=self.manufacturer.text(),
            booster_due_date=self._booster_date_value(),
        )

    def clear_vaccine_fields(self) -> None:
        self.vaccine_name.clear()
        self.manufacturer.clear()
        self.booster_date.setDate(EMPTY_DATE)
        show_today_page(self.booster_date)

    def selected_patient_id(self) -> int | None:
        rows = self.patient_table.selectionModel().selectedRows()
        if not rows:
            return None
        patient = self.model.patient_at(rows[0].row())
        return patient.id if patient else None

    def _booster_date_value(self) -> date | None:
        if is_empty_date(self.booster_date):
            return None
        qd = self.booster_date.date()
        return date(qd.year(), qd.month(), qd.day())
