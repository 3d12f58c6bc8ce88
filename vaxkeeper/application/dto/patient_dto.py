from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from vaxkeeper.domain.constants import Gender

MAX_AGE = 150


class PatientCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=MAX_AGE)
    gender: Gender


class PatientResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    age: int
    gender: str
