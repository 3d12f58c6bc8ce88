from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from vaxkeeper.infrastructure.db.models_sqlalchemy import Patient


class PatientRepository:
    def create(self, session: Session, *, name: str, age: int, gender: str) -> Patient:
        patient = Patient(name=name, age=age, gender=gender)
        session.add(patient)
        session.flush()
        return patient

    def list_all(self, session: Session) -> list[Patient]:
        stmt = select(Patient).order_by(Patient.patient_id)
        return list(session.execute(stmt).scalars())

    def delete(self, session: Session, patient_id: int) -> int:
        """Delete one patient row; returns the number of rows removed (0 or 1)."""
        result = session.execute(delete(Patient).where(Patient.patient_id == patient_id))
        return int(result.rowcount or 0)
