from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class VaccinationCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    patient_id: int
    vaccine_name: str = Field(..., min_length=1)
    manufacturer: str = Field(..., min_length=1)
    booster_due_date: date
