from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import Any, cast

from vaxkeeper.application.dto.patient_dto import PatientCreateRequest, PatientResponse
from vaxkeeper.application.dto.vaccination_dto import VaccinationCreateRequest
from vaxkeeper.application.errors import StoreError
from vaxkeeper.ui.patient_actions import (
    MSG_LIST_LOAD_FAILED,
    MSG_PATIENT_ADD_FAILED,
    MSG_PATIENT_ADDED,
    MSG_PATIENT_DELETE_FAILED,
    MSG_SELECT_TO_DELETE,
    MSG_VACCINE_ADD_FAILED,
    ActionOutcome,
    PatientActions,
    PatientFields,
    VaccineFields,
)
from vaxkeeper.ui.patient_list_model import PatientListModel


class _FakePatientService:
    def __init__(self) -> None:
        self.rows: list[PatientResponse] = []
        self.added: list[PatientCreateRequest] = []
        self.deleted: list[int] = []
        self.fail_on: set[str] = set()
        self.list_calls = 0

    def add_patient(self, request: PatientCreateRequest) -> PatientResponse:
        if "add" in self.fail_on:
            raise StoreError("connection refused")
        self.added.append(request)
        patient = PatientResponse(
            id=len(self.added), name=request.name, age=request.age, gender=request.gender.value
        )
        self.rows.append(patient)
        return patient

    def list_patients(self) -> list[PatientResponse]:
        self.list_calls += 1
        if "list" in self.fail_on:
            raise StoreError("connection refused")
        return list(self.rows)

    def delete_patient(self, patient_id: int) -> None:
        if "delete" in self.fail_on:
            raise StoreError("connection refused")
        self.deleted.append(patient_id)
        self.rows = [p for p in self.rows if p.id != patient_id]


class _FakeVaccinationService:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.added: list[VaccinationCreateRequest] = []

    def add_vaccination(self, request: VaccinationCreateRequest) -> None:
        if self.fail:
            raise StoreError("FOREIGN KEY constraint failed")
        self.added.append(request)


class _FakeForm:
    def __init__(
        self,
        patient: PatientFields | None = None,
        vaccine: VaccineFields | None = None,
        selected: int | None = None,
    ) -> None:
        self.patient = patient or PatientFields(name="", age_text="", gender=None)
        self.vaccine = vaccine or VaccineFields(vaccine_name="", manufacturer="", booster_due_date=None)
        self.selected = selected
        self.cleared = {"patient": 0, "vaccine": 0}

    def read_patient_fields(self) -> PatientFields:
        return self.patient

    def clear_patient_fields(self) -> None:
        self.cleared["patient"] += 1

    def read_vaccine_fields(self) -> VaccineFields:
        return self.vaccine

    def clear_vaccine_fields(self) -> None:
        self.cleared["vaccine"] += 1

    def selected_patient_id(self) -> int | None:
        return self.selected


def _make_actions(
    form: _FakeForm,
    patient_service: _FakePatientService | None = None,
    vaccination_service: _FakeVaccinationService | None = None,
) -> tuple[PatientActions, list[tuple[str, str]], PatientListModel]:
    messages: list[tuple[str, str]] = []
    notifier = SimpleNamespace(
        info=lambda message: messages.append(("info", message)),
        warning=lambda message: messages.append(("warning", message)),
        error=lambda message: messages.append(("error", message)),
    )
    model = PatientListModel()
    actions = PatientActions(
        patient_service=cast(Any, patient_service or _FakePatientService()),
        vaccination_service=cast(Any, vaccination_service or _FakeVaccinationService()),
        model=model,
        form=form,
        notifier=cast(Any, notifier),
    )
    return actions, messages, model


def test_action_map_exposes_four_actions() -> None:
    actions, _, _ = _make_actions(_FakeForm())

    assert set(actions.action_map()) == {"add_patient", "view_patients", "delete_patient", "add_vaccine"}


def test_add_patient_success_reloads_and_clears_fields() -> None:
    service = _FakePatientService()
    form = _FakeForm(patient=PatientFields(name="Alice", age_text="30", gender="Female"))
    actions, messages, model = _make_actions(form, service)

    assert actions.add_patient() is ActionOutcome.SUCCESS

    assert messages == [("info", MSG_PATIENT_ADDED)]
    assert [p.name for p in model] == ["Alice"]
    assert form.cleared["patient"] == 1


def test_add_patient_validation_failure_never_reaches_store() -> None:
    service = _FakePatientService()
    form = _FakeForm(patient=PatientFields(name="Alice", age_text="old", gender="Female"))
    actions, messages, _ = _make_actions(form, service)

    assert actions.add_patient() is ActionOutcome.REJECTED

    assert service.added == []
    assert service.list_calls == 0
    assert messages == [("warning", "Age must be a number!")]
    assert form.cleared["patient"] == 0


def test_add_patient_store_failure_keeps_fields_for_retry() -> None:
    service = _FakePatientService()
    service.fail_on.add("add")
    form = _FakeForm(patient=PatientFields(name="Alice", age_text="30", gender="Female"))
    actions, messages, _ = _make_actions(form, service)

    assert actions.add_patient() is ActionOutcome.FAILED

    assert messages == [("error", MSG_PATIENT_ADD_FAILED)]
    assert form.cleared["patient"] == 0
    assert service.list_calls == 0


def test_view_patients_failure_retains_previous_list() -> None:
    service = _FakePatientService()
    service.rows = [PatientResponse(id=1, name="Alice", age=30, gender="Female")]
    actions, messages, model = _make_actions(_FakeForm(), service)
    assert actions.view_patients() is ActionOutcome.SUCCESS

    service.fail_on.add("list")
    assert actions.view_patients() is ActionOutcome.FAILED

    assert [p.id for p in model] == [1]
    assert messages[-1] == ("error", MSG_LIST_LOAD_FAILED)


def test_view_patients_twice_yields_identical_lists() -> None:
    service = _FakePatientService()
    service.rows = [
        PatientResponse(id=1, name="Alice", age=30, gender="Female"),
        PatientResponse(id=2, name="Bob", age=41, gender="Male"),
    ]
    actions, _, model = _make_actions(_FakeForm(), service)

    actions.view_patients()
    first = model.patients()
    actions.view_patients()

    assert model.patients() == first


def test_delete_patient_without_selection_warns() -> None:
    service = _FakePatientService()
    actions, messages, _ = _make_actions(_FakeForm(selected=None), service)

    assert actions.delete_patient() is ActionOutcome.REJECTED

    assert service.deleted == []
    assert messages == [("warning", MSG_SELECT_TO_DELETE)]


def test_delete_patient_store_failure_reports_error() -> None:
    service = _FakePatientService()
    service.fail_on.add("delete")
    actions, messages, _ = _make_actions(_FakeForm(selected=3), service)

    assert actions.delete_patient() is ActionOutcome.FAILED

    assert messages == [("error", MSG_PATIENT_DELETE_FAILED)]
    assert service.list_calls == 0


def test_add_vaccine_without_selection_warns() -> None:
    vaccinations = _FakeVaccinationService()
    form = _FakeForm(
        vaccine=VaccineFields(vaccine_name="Flu", manufacturer="Pfizer", booster_due_date=date(2030, 1, 1))
    )
    actions, messages, _ = _make_actions(form, vaccination_service=vaccinations)

    assert actions.add_vaccine() is ActionOutcome.REJECTED

    assert vaccinations.added == []
    assert messages == [("warning", "Select a patient first!")]


def test_add_vaccine_success_clears_vaccine_fields_without_reload() -> None:
    service = _FakePatientService()
    vaccinations = _FakeVaccinationService()
    form = _FakeForm(
        vaccine=VaccineFields(vaccine_name="Flu", manufacturer="Pfizer", booster_due_date=date(2030, 1, 1)),
        selected=4,
    )
    actions, messages, _ = _make_actions(form, service, vaccinations)

    assert actions.add_vaccine() is ActionOutcome.SUCCESS

    assert vaccinations.added[0].patient_id == 4
    assert messages == [("info", "Vaccine added for patient ID: 4")]
    assert form.cleared["vaccine"] == 1
    assert service.list_calls == 0


def test_add_vaccine_store_failure_keeps_fields() -> None:
    form = _FakeForm(
        vaccine=VaccineFields(vaccine_name="Flu", manufacturer="Pfizer", booster_due_date=date(2030, 1, 1)),
        selected=4,
    )
    actions, messages, _ = _make_actions(form, vaccination_service=_FakeVaccinationService(fail=True))

    assert actions.add_vaccine() is ActionOutcome.FAILED

    assert messages == [("error", MSG_VACCINE_ADD_FAILED)]
    assert form.cleared["vaccine"] == 0
