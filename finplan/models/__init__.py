from .account import Account, AccountType, AccountStatus, AccountTypeAmounts, ACCOUNT_TYPES
from .profile import UserProfile, MaritalStatus
from .mortgage import Mortgage, MortgagePayment, AnnualMortgagePayment, MortgageSchedule
from .scenario import (
    Assumptions,
    AssumptionBucket,
    LumpSumEvent,
    LumpSumEventType,
    Scenario
)
from .projection import (
    IncomeBreakdown,
    SpendingBreakdown,
    MortgagePaymentsBreakdown,
    ContributionBreakdown,
    BalanceBreakdown,
    AnnualProjection,
    ProjectionSummary,
    ScenarioProjection,
    StoredProjection,
    NetWorthComparisonRow,
    ProjectionComparison
)
