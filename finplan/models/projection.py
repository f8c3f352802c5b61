from typing import Optional, List, Dict
from uuid import UUID
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from uuid6 import uuid7

from finplan.models.account import AccountTypeAmounts
from finplan.models.mortgage import AnnualMortgagePayment

# Projection Models

class IncomeBreakdown(BaseModel):
    employment: float = 0.0 # Inflated
    socialSecurity: float = 0.0 # Inflated
    lumpSum: float = 0.0 # Actual dollars
    investmentGains: float = 0.0
    rmd: float = 0.0 # Required minimum distribution from the 401k
    # Cash pulled from checking/savings to cover a deficit. Not part of total.
    withdrawals: float = 0.0
    total: float = 0.0


class SpendingBreakdown(BaseModel):
    living: float = 0.0 # Inflated
    travel: float = 0.0 # Inflated
    healthcare: float = 0.0 # Inflated
    lumpSum: float = 0.0 # Actual dollars
    mortgages: float = 0.0 # Actual dollars
    total: float = 0.0


class MortgagePaymentsBreakdown(BaseModel):
    principal: float = 0.0
    interest: float = 0.0
    escrow: float = 0.0
    additionalPrincipal: float = 0.0
    total: float = 0.0
    byMortgage: List[AnnualMortgagePayment] = []


class ContributionBreakdown(BaseModel):
    total: float = 0.0
    byAccountType: AccountTypeAmounts = Field(default_factory=AccountTypeAmounts)


class BalanceBreakdown(BaseModel):
    total: float = 0.0
    byAccountType: AccountTypeAmounts = Field(default_factory=AccountTypeAmounts)


class AnnualProjection(BaseModel):
    year: int
    age: int
    income: IncomeBreakdown
    spending: SpendingBreakdown
    mortgagePayments: MortgagePaymentsBreakdown = Field(default_factory=MortgagePaymentsBreakdown)
    contributions: ContributionBreakdown
    netIncome: float
    accountBalances: BalanceBreakdown


class ProjectionSummary(BaseModel):
    startYear: int
    endYear: int
    totalIncome: float = 0.0
    totalSpending: float = 0.0
    totalContributions: float = 0.0
    finalNetWorth: float = 0.0
    yearsInDeficit: int = 0
    firstDeficitYear: Optional[int] = None


class ScenarioProjection(BaseModel):
    scenarioId: UUID
    scenarioName: str
    years: List[AnnualProjection]
    summary: ProjectionSummary


class StoredProjection(BaseModel):
    id: UUID = Field(default_factory=uuid7)
    scenarioId: UUID
    scenarioName: str
    calculatedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    startYear: int
    endYear: int
    projection: ScenarioProjection


# Comparison Models

class NetWorthComparisonRow(BaseModel):
    year: int
    values: Dict[str, float] # projection id -> total balance


class ProjectionComparison(BaseModel):
    storedProjections: List[StoredProjection]
    netWorthByYear: List[NetWorthComparisonRow]
    bestProjectionId: Optional[UUID] = None
