from __future__ import annotations

from dataclasses import dataclass

from vaxkeeper.application.services.patient_service import PatientService
from vaxkeeper.application.services.vaccination_service import VaccinationService
from vaxkeeper.infrastructure.db.repositories.patient_repo import PatientRepository
from vaxkeeper.infrastructure.db.repositories.vaccination_repo import VaccinationRepository
from vaxkeeper.infrastructure.db.session import SessionFactory, session_scope


@dataclass
class Container:
    patient_repo: PatientRepository
    vaccination_repo: VaccinationRepository

    patient_service: PatientService
    vaccination_service: VaccinationService


def build_container(session_factory: SessionFactory = session_scope) -> Container:
    patient_repo = PatientRepository()
    vaccination_repo = VaccinationRepository()

    patient_service = PatientService(patient_repo=patient_repo, session_factory=session_factory)
    vaccination_service = VaccinationService(
        vaccination_repo=vaccination_repo,
        session_factory=session_factory,
    )

    return Container(
        patient_repo=patient_repo,
        vaccination_repo=vaccination_repo,
        patient_service=patient_service,
        vaccination_service=vaccination_service,
    )
