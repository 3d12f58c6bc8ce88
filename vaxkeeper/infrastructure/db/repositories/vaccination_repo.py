from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from vaxkeeper.infrastructure.db.models_sqlalchemy import VaccinationRecord


class VaccinationRepository:
    def create(
        self,
        session: Session,
        *,
        patient_id: int,
        vaccine_name: str,
        manufacturer: str,
        booster_due_date: date,
    ) -> VaccinationRecord:
        record = VaccinationRecord(
            patient_id=patient_id,
            vaccine_name=vaccine_name,
            manufacturer=manufacturer,
            booster_due_date=booster_due_date,
        )
        session.add(record)
        session.flush()
        return record
