from __future__ import annotations

import logging
from typing import cast

from sqlalchemy.exc import SQLAlchemyError

from vaxkeeper.application.dto.patient_dto import PatientCreateRequest, PatientResponse
from vaxkeeper.application.errors import StoreError
from vaxkeeper.infrastructure.db.models_sqlalchemy import Patient
from vaxkeeper.infrastructure.db.repositories.patient_repo import PatientRepository
from vaxkeeper.infrastructure.db.session import SessionFactory, session_scope

logger = logging.getLogger(__name__)


def _to_response(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=cast(int, patient.patient_id),
        name=cast(str, patient.name),
        age=cast(int, patient.age),
        gender=cast(str, patient.gender),
    )


class PatientService:
    def __init__(
        self,
        patient_repo: PatientRepository | None = None,
        session_factory: SessionFactory = session_scope,
    ) -> None:
        self.patient_repo = patient_repo or PatientRepository()
        self.session_factory = session_factory

    def add_patient(self, request: PatientCreateRequest) -> PatientResponse:
        try:
            with self.session_factory() as session:
                patient = self.patient_repo.create(
                    session,
                    name=request.name,
                    age=request.age,
                    gender=request.gender.value,
                )
                response = _to_response(patient)
        except SQLAlchemyError as exc:
            logger.exception("Insert patient failed")
            raise StoreError("Failed to add patient") from exc
        logger.info("Patient %s added", response.id)
        return response

    def list_patients(self) -> list[PatientResponse]:
        try:
            with self.session_factory() as session:
                return [_to_response(p) for p in self.patient_repo.list_all(session)]
        except SQLAlchemyError as exc:
            logger.exception("Load patients failed")
            raise StoreError("Failed to load patients") from exc

    def delete_patient(self, patient_id: int) -> None:
        # Missing ids are not reported; zero affected rows counts as success.
        try:
            with self.session_factory() as session:
                removed = self.patient_repo.delete(session, patient_id)
        except SQLAlchemyError as exc:
            logger.exception("Delete patient %s failed", patient_id)
            raise StoreError("Failed to delete patient") from exc
        if removed:
            logger.info("Patient %s deleted", patient_id)
        else:
            logger.info("Patient %s not found; nothing deleted", patient_id)
