from typing import Optional, List
from uuid import UUID
from datetime import date
from pydantic import BaseModel, Field
from uuid6 import uuid7


class Mortgage(BaseModel):
    id: UUID = Field(default_factory=uuid7)
    name: str = Field(min_length=1) # e.g. "Primary Home", "Vacation Property"
    startDate: date
    loanAmount: float = Field(gt=0)
    termYears: int = Field(ge=1, le=50)
    interestRate: float = Field(ge=0, le=30) # Annual, percent (6.5 == 6.5%)
    monthlyEscrow: float = Field(default=0.0, ge=0) # Taxes + insurance
    additionalMonthlyPayment: float = Field(default=0.0, ge=0)
    description: Optional[str] = None


class MortgagePayment(BaseModel):
    month: int # 1-based payment number
    year: int
    principal: float
    interest: float
    escrow: float
    additionalPrincipal: float
    totalPayment: float
    remainingBalance: float


class AnnualMortgagePayment(BaseModel):
    year: int
    mortgageId: UUID
    mortgageName: str
    principal: float = 0.0
    interest: float = 0.0
    escrow: float = 0.0
    additionalPrincipal: float = 0.0
    totalPayment: float = 0.0
    startingBalance: float = 0.0
    endingBalance: float = 0.0


class MortgageSchedule(BaseModel):
    monthlyPayment: float # Principal + interest, escrow excluded
    schedule: List[MortgagePayment]
    annual: List[AnnualMortgagePayment]
