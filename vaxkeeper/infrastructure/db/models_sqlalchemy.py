from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Text,
)
from sqlalchemy.orm import DeclarativeBase

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    # avoid constraint_name token to allow unnamed CheckConstraint
    "ck": "ck_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


class Patient(Base):
    __tablename__ = "patient"

    patient_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("gender in ('Male','Female','Other')", name="ck_patient_gender"),
    )


class VaccinationRecord(Base):
    __tablename__ = "vaccination_record"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patient.patient_id", ondelete="CASCADE"),
        nullable=False,
    )
    vaccine_name = Column(Text, nullable=False)
    manufacturer = Column(Text, nullable=False)
    booster_due_date = Column(Date, nullable=False)

    __table_args__ = (
        Index("ix_vaccination_record_patient_id", "patient_id"),
    )
