from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from vaxkeeper.application.dto.vaccination_dto import VaccinationCreateRequest
from vaxkeeper.application.errors import StoreError
from vaxkeeper.infrastructure.db.repositories.vaccination_repo import VaccinationRepository
from vaxkeeper.infrastructure.db.session import SessionFactory, session_scope

logger = logging.getLogger(__name__)


class VaccinationService:
    def __init__(
        self,
        vaccination_repo: VaccinationRepository | None = None,
        session_factory: SessionFactory = session_scope,
    ) -> None:
        self.vaccination_repo = vaccination_repo or VaccinationRepository()
        self.session_factory = session_factory

    def add_vaccination(self, request: VaccinationCreateRequest) -> None:
        """Insert one vaccination_record row for an existing patient.

        The patient reference is checked by the database foreign key; a
        dangling id surfaces as StoreError like any other statement failure.
        """
        try:
            with self.session_factory() as session:
                self.vaccination_repo.create(
                    session,
                    patient_id=request.patient_id,
                    vaccine_name=request.vaccine_name,
                    manufacturer=request.manufacturer,
                    booster_due_date=request.booster_due_date,
                )
        except SQLAlchemyError as exc:
            logger.exception("Insert vaccination for patient %s failed", request.patient_id)
            raise StoreError("Failed to add vaccine") from exc
        logger.info(
            "Vaccination %s added for patient %s (booster due %s)",
            request.vaccine_name,
            request.patient_id,
            request.booster_due_date.isoformat(),
        )
