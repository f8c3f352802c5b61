from typing import Optional
from datetime import date
from enum import Enum
from pydantic import BaseModel, Field


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"


class UserProfile(BaseModel):
    firstname: Optional[str] = None
    dateOfBirth: date
    maritalStatus: MaritalStatus = MaritalStatus.SINGLE
    numberOfDependents: int = Field(default=0, ge=0)

    def age_on(self, as_of: date) -> int:
        """
        Completed years of age on `as_of`. Age is never stored; it is derived
        from the date of birth every time it is needed.
        """
        birth = self.dateOfBirth
        age = as_of.year - birth.year
        if (as_of.month, as_of.day) < (birth.month, birth.day):
            age -= 1
        return age
