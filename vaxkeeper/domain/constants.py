from __future__ import annotations

from enum import StrEnum


class Gender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]
