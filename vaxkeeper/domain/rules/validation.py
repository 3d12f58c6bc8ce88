from __future__ import annotations

import re
from datetime import date

from pydantic import ValidationError as PydanticValidationError

from vaxkeeper.application.dto.patient_dto import MAX_AGE, PatientCreateRequest
from vaxkeeper.application.dto.vaccination_dto import VaccinationCreateRequest
from vaxkeeper.application.errors import ValidationError
from vaxkeeper.domain.constants import Gender

MSG_PATIENT_FIELDS_REQUIRED = "Please fill all fields before adding a patient!"
MSG_AGE_NOT_NUMBER = "Age must be a number!"
MSG_AGE_NEGATIVE = "Age cannot be negative!"
MSG_AGE_TOO_LARGE = f"Age cannot be greater than {MAX_AGE}!"
MSG_GENDER_INVALID = "Gender must be one of: " + ", ".join(Gender.values())
MSG_SELECT_PATIENT = "Select a patient first!"
MSG_VACCINE_FIELDS_REQUIRED = "Please fill all vaccine fields!"

_AGE_PATTERN = re.compile(r"[+-]?[0-9]+")


def normalize_text(value: str | None) -> str:
    return (value or "").strip()


def parse_age(age_text: str | None) -> int:
    text = normalize_text(age_text)
    if not text:
        raise ValidationError(MSG_PATIENT_FIELDS_REQUIRED)
    if not _AGE_PATTERN.fullmatch(text):
        raise ValidationError(MSG_AGE_NOT_NUMBER)
    age = int(text)
    # Outside a 32-bit signed int is not a number to the form either.
    if not -(2**31) <= age < 2**31:
        raise ValidationError(MSG_AGE_NOT_NUMBER)
    if age < 0:
        raise ValidationError(MSG_AGE_NEGATIVE)
    if age > MAX_AGE:
        raise ValidationError(MSG_AGE_TOO_LARGE)
    return age


def parse_patient_fields(
    name: str | None,
    age_text: str | None,
    gender: str | None,
) -> PatientCreateRequest:
    """Turn raw form text into a validated create request.

    Raises ValidationError with a message suitable for showing to the user.
    """
    clean_name = normalize_text(name)
    clean_gender = normalize_text(gender)
    if not clean_name or not normalize_text(age_text) or not clean_gender:
        raise ValidationError(MSG_PATIENT_FIELDS_REQUIRED)
    age = parse_age(age_text)
    if clean_gender not in Gender.values():
        raise ValidationError(MSG_GENDER_INVALID)
    try:
        return PatientCreateRequest(name=clean_name, age=age, gender=Gender(clean_gender))
    except PydanticValidationError as exc:
        raise ValidationError(MSG_PATIENT_FIELDS_REQUIRED) from exc


def parse_vaccine_fields(
    patient_id: int | None,
    vaccine_name: str | None,
    manufacturer: str | None,
    booster_due_date: date | None,
) -> VaccinationCreateRequest:
    if patient_id is None:
        raise ValidationError(MSG_SELECT_PATIENT)
    clean_vaccine = normalize_text(vaccine_name)
    clean_manufacturer = normalize_text(manufacturer)
    if not clean_vaccine or not clean_manufacturer or booster_due_date is None:
        raise ValidationError(MSG_VACCINE_FIELDS_REQUIRED)
    try:
        return VaccinationCreateRequest(
            patient_id=patient_id,
            vaccine_name=clean_vaccine,
            manufacturer=clean_manufacturer,
            booster_due_date=booster_due_date,
        )
    except PydanticValidationError as exc:
        raise ValidationError(MSG_VACCINE_FIELDS_REQUIRED) from exc
