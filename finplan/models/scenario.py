from typing import Optional, List
from uuid import UUID
from enum import Enum
from pydantic import BaseModel, Field, model_validator
from uuid6 import uuid7

from finplan.models.account import AccountTypeAmounts
from finplan.models.mortgage import Mortgage

# Scenario Models

class Assumptions(BaseModel):
    """
    Financial assumptions for one age bucket. Amounts are in today's dollars
    and get inflated by the projection; rates are percentages.
    """
    # Retirement. Unset means employment income never stops.
    retirementAge: Optional[int] = Field(default=None, ge=0, le=120)

    # Income
    annualIncome: float = Field(default=0.0, ge=0)
    socialSecurityAge: Optional[int] = Field(default=None, ge=0, le=120) # Unset: never starts
    socialSecurityIncome: float = Field(default=0.0, ge=0)

    # Contributions, per account type
    contributions: AccountTypeAmounts = Field(default_factory=AccountTypeAmounts)

    # Spending
    annualSpending: float = Field(default=0.0, ge=0)
    annualTravelBudget: float = Field(default=0.0, ge=0)
    annualHealthcareCosts: float = Field(default=0.0, ge=0)

    # Same return rate for ALL account types
    investmentReturnRate: float = Field(default=0.0, ge=-100, le=100)
    inflationRate: float = Field(default=0.0, ge=-100, le=100)


class AssumptionBucket(BaseModel):
    id: UUID = Field(default_factory=uuid7)
    order: int = Field(default=0, ge=0)
    startAge: int = Field(ge=0, le=120)
    endAge: int = Field(ge=0, le=999)
    assumptions: Assumptions = Field(default_factory=Assumptions)

    @model_validator(mode="after")
    def check_age_range(self) -> "AssumptionBucket":
        if self.startAge > self.endAge:
            raise ValueError("Bucket start age must be less than or equal to end age")
        return self


class LumpSumEventType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class LumpSumEvent(BaseModel):
    """One-time amount at a given age. Never inflated."""
    id: UUID = Field(default_factory=uuid7)
    type: LumpSumEventType
    age: int = Field(ge=0, le=120)
    amount: float = Field(ge=0)
    description: str = ""


class Scenario(BaseModel):
    id: UUID = Field(default_factory=uuid7)
    name: str = Field(min_length=1, max_length=100)
    isDefault: bool = False
    description: Optional[str] = None
    assumptionBuckets: List[AssumptionBucket] = []
    lumpSumEvents: List[LumpSumEvent] = []
    mortgages: List[Mortgage] = []
