from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Protocol

from vaxkeeper.application.errors import StoreError, ValidationError
from vaxkeeper.application.services.patient_service import PatientService
from vaxkeeper.application.services.vaccination_service import VaccinationService
from vaxkeeper.domain.rules.validation import parse_patient_fields, parse_vaccine_fields
from vaxkeeper.ui.patient_list_model import PatientListModel

logger = logging.getLogger(__name__)

MSG_PATIENT_ADDED = "Patient added successfully!"
MSG_PATIENT_ADD_FAILED = "Failed to add patient!"
MSG_LIST_REFRESHED = "Patient list refreshed!"
MSG_LIST_LOAD_FAILED = "Failed to load patients!"
MSG_SELECT_TO_DELETE = "Please select a patient to delete!"
MSG_PATIENT_DELETED = "Patient deleted successfully!"
MSG_PATIENT_DELETE_FAILED = "Failed to delete patient!"
MSG_VACCINE_ADD_FAILED = "Failed to add vaccine!"


class ActionOutcome(StrEnum):
    SUCCESS = "success"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class PatientFields:
    name: str
    age_text: str
    gender: str | None


@dataclass(frozen=True)
class VaccineFields:
    vaccine_name: str
    manufacturer: str
    booster_due_date: date | None


class PatientFormLike(Protocol):
    def read_patient_fields(self) -> PatientFields: ...

    def clear_patient_fields(self) -> None: ...

    def read_vaccine_fields(self) -> VaccineFields: ...

    def clear_vaccine_fields(self) -> None: ...

    def selected_patient_id(self) -> int | None: ...


class NotifierLike(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class PatientActions:
    """
    Handlers for the four form actions.

    Each call is synchronous, touches the store at most once for writing, and
    reports exactly one message through the notifier.
    """

    def __init__(
        self,
        *,
        patient_service: PatientService,
        vaccination_service: VaccinationService,
        model: PatientListModel,
        form: PatientFormLike,
        notifier: NotifierLike,
    ) -> None:
        self.patient_service = patient_service
        self.vaccination_service = vaccination_service
        self.model = model
        self.form = form
        self.notifier = notifier

    def action_map(self) -> dict[str, Callable[[], ActionOutcome]]:
        return {
            "add_patient": self.add_patient,
            "view_patients": self.view_patients,
            "delete_patient": self.delete_patient,
            "add_vaccine": self.add_vaccine,
        }

    def reload(self) -> bool:
        # The model keeps its previous contents when the query fails.
        try:
            patients = self.patient_service.list_patients()
        except StoreError:
            logger.warning("Patient list reload failed; keeping %d cached rows", len(self.model))
            return False
        self.model.replace_all(patients)
        return True

    def add_patient(self) -> ActionOutcome:
        fields = self.form.read_patient_fields()
        try:
            request = parse_patient_fields(fields.name, fields.age_text, fields.gender)
        except ValidationError as exc:
            self.notifier.warning(str(exc))
            return ActionOutcome.REJECTED
        try:
            self.patient_service.add_patient(request)
        except StoreError:
            self.notifier.error(MSG_PATIENT_ADD_FAILED)
            return ActionOutcome.FAILED
        self.notifier.info(MSG_PATIENT_ADDED)
        self.reload()
        self.form.clear_patient_fields()
        return ActionOutcome.SUCCESS

    def view_patients(self) -> ActionOutcome:
        if not self.reload():
            self.notifier.error(MSG_LIST_LOAD_FAILED)
            return ActionOutcome.FAILED
        self.notifier.info(MSG_LIST_REFRESHED)
        return ActionOutcome.SUCCESS

    def delete_patient(self) -> ActionOutcome:
        patient_id = self.form.selected_patient_id()
        if patient_id is None:
            self.notifier.warning(MSG_SELECT_TO_DELETE)
            return ActionOutcome.REJECTED
        try:
            self.patient_service.delete_patient(patient_id)
        except StoreError:
            self.notifier.error(MSG_PATIENT_DELETE_FAILED)
            return ActionOutcome.FAILED
        self.notifier.info(MSG_PATIENT_DELETED)
        self.reload()
        return ActionOutcome.SUCCESS

    def add_vaccine(self) -> ActionOutcome:
        fields = self.form.read_vaccine_fields()
        try:
            request = parse_vaccine_fields(
                self.form.selected_patient_id(),
                fields.vaccine_name,
                fields.manufacturer,
                fields.booster_due_date,
            )
        except ValidationError as exc:
            self.notifier.warning(str(exc))
            return ActionOutcome.REJECTED
        try:
            self.vaccination_service.add_vaccination(request)
        except StoreError:
            self.notifier.error(MSG_VACCINE_ADD_FAILED)
            return ActionOutcome.FAILED
        self.notifier.info(f"Vaccine added for patient ID: {request.patient_id}")
        self.form.clear_vaccine_fields()
        return ActionOutcome.SUCCESS
