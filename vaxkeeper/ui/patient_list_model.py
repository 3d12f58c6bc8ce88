from __future__ import annotations

from collections.abc import Iterable, Iterator

from PySide6.QtCore import QObject, Signal

from vaxkeeper.application.dto.patient_dto import PatientResponse


class PatientListModel(QObject):
    """
    Display snapshot of all patients in the store.

    Only replace_all() mutates the contents, so after every successful reload
    the model equals the patient table as of that query.
    """

    changed = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._patients: tuple[PatientResponse, ...] = ()

    def replace_all(self, patients: Iterable[PatientResponse]) -> None:
        self._patients = tuple(patients)
        self.changed.emit()

    def patients(self) -> tuple[PatientResponse, ...]:
        return self._patients

    def patient_at(self, row: int) -> PatientResponse | None:
        if 0 <= row < len(self._patients):
            return self._patients[row]
        return None

    def find(self, patient_id: int) -> PatientResponse | None:
        for patient in self._patients:
            if patient.id == patient_id:
                return patient
        return None

    def __len__(self) -> int:
        return len(self._patients)

    def __iter__(self) -> Iterator[PatientResponse]:
        return iter(self._patients)
