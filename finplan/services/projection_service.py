import logging
from datetime import date
from typing import List, Optional, Sequence, Dict

from finplan.core.config import settings
from finplan.models.account import Account, AccountType, AccountTypeAmounts, ACCOUNT_TYPES
from finplan.models.mortgage import AnnualMortgagePayment
from finplan.models.profile import UserProfile
from finplan.models.projection import (
    AnnualProjection,
    BalanceBreakdown,
    ContributionBreakdown,
    IncomeBreakdown,
    MortgagePaymentsBreakdown,
    ProjectionSummary,
    ScenarioProjection,
    SpendingBreakdown
)
from finplan.models.scenario import LumpSumEventType, Scenario
from finplan.services.financial_assumptions_service import FinancialAssumptionsService
from finplan.services.mortgage_service import get_annual_payments_by_year
from finplan.services.scenario_service import get_bucket_for_age, lump_sum_total

logger = logging.getLogger(__name__)


class ProjectionInputError(ValueError):
    """Raised before any computation when the projection inputs are structurally invalid."""


class ProjectionService:
    """
    Scenario projection engine.

    Simulates the six account-type balances forward one calendar year at a
    time using the scenario's age buckets, lump sum events and mortgages.
    The engine is a pure computation: no I/O, no shared state, and the
    arguments are never mutated. It is safe to call concurrently.
    """
    def __init__(self):
        self.assumptions_service = FinancialAssumptionsService()

    @staticmethod
    def _validate_inputs(scenario: Scenario, start_year: int, end_year: int):
        if not scenario.assumptionBuckets:
            raise ProjectionInputError("Scenario must have at least one assumption bucket")

        if start_year > end_year:
            raise ProjectionInputError("Start year must be less than or equal to end year")

        if end_year - start_year > settings.MAX_PROJECTION_YEARS:
            raise ProjectionInputError(f"Projection period cannot exceed {settings.MAX_PROJECTION_YEARS} years")

    def calculate_scenario_projection(
        self,
        scenario: Scenario,
        profile: UserProfile,
        accounts: Sequence[Account],
        start_year: int,
        end_year: int,
        as_of: Optional[date] = None
    ) -> ScenarioProjection:
        """
        Year-by-year projection of a scenario.

        Age is anchored to the real current age on `as_of` (today by default),
        not to `start_year`. Years whose age no bucket covers are skipped: they
        produce no record and leave balances untouched.

        Args:
            scenario (Scenario): Buckets, lump sum events and mortgages.
            profile (UserProfile): Supplies the date of birth.
            accounts (Sequence[Account]): Current balances; only active accounts count.
            start_year (int): First calendar year to project.
            end_year (int): Last calendar year to project (inclusive).
            as_of (date): Reference "today" for the age calculation.

        Returns:
            ScenarioProjection: The recorded years and their summary.

        Raises:
            ProjectionInputError: Empty bucket list, inverted or over-long year range.
        """
        self._validate_inputs(scenario, start_year, end_year)

        as_of = as_of or date.today()
        current_age = profile.age_on(as_of)
        current_year = as_of.year

        # Running balances by account TYPE. Account identity is dropped here.
        balances = AccountTypeAmounts.from_accounts(accounts)

        mortgage_payments = [get_annual_payments_by_year(m) for m in scenario.mortgages]

        years: List[AnnualProjection] = []

        for year in range(start_year, end_year + 1):
            age = current_age + (year - current_year)

            # 1. Bucket for this age
            bucket = get_bucket_for_age(scenario.assumptionBuckets, age)
            if bucket is None:
                logger.debug(f"No assumption bucket covers age {age}; skipping {year}")
                continue

            assumptions = bucket.assumptions

            # 2. Inflation compounds from the start of the projection window
            inflation_factor = (1 + assumptions.inflationRate / 100) ** (year - start_year)

            # 3. Income
            employment_income = 0.0
            if assumptions.retirementAge is None or age < assumptions.retirementAge:
                employment_income = assumptions.annualIncome * inflation_factor

            social_security_income = 0.0
            if assumptions.socialSecurityAge is not None and age >= assumptions.socialSecurityAge:
                social_security_income = assumptions.socialSecurityIncome * inflation_factor

            lump_sum_income = lump_sum_total(scenario.lumpSumEvents, LumpSumEventType.INCOME, age)

            # 4. Spending
            living_spending = assumptions.annualSpending * inflation_factor
            travel_spending = assumptions.annualTravelBudget * inflation_factor
            healthcare_spending = assumptions.annualHealthcareCosts * inflation_factor
            lump_sum_expenses = lump_sum_total(scenario.lumpSumEvents, LumpSumEventType.EXPENSE, age)

            mortgages = self._mortgage_payments_for_year(mortgage_payments, year)

            # 5. Contributions
            contributions = AccountTypeAmounts()
            for account_type in ACCOUNT_TYPES:
                contributions.set(account_type, assumptions.contributions.get(account_type) * inflation_factor)
            total_contributions = contributions.total

            # 6. Investment returns on the beginning balance, same rate for every type
            beginning_401k = balances.get(AccountType.RETIREMENT_401K)
            return_rate = assumptions.investmentReturnRate / 100
            total_gains = 0.0
            for account_type in ACCOUNT_TYPES:
                beginning = balances.get(account_type)
                gain = beginning * return_rate
                total_gains += gain
                balances.set(account_type, beginning + contributions.get(account_type) + gain)

            # 7. RMD, based on the prior year-end (beginning) 401k balance
            rmd_amount = self.assumptions_service.calculate_rmd(beginning_401k, age)
            if rmd_amount > 0:
                balances.add(AccountType.RETIREMENT_401K, -rmd_amount)

            # 8. Net settlement
            total_income = employment_income + social_security_income + lump_sum_income + total_gains + rmd_amount
            total_spending = living_spending + travel_spending + healthcare_spending + lump_sum_expenses + mortgages.total
            net_income = total_income - total_spending - total_contributions

            withdrawals = 0.0
            if net_income < 0:
                withdrawals = -net_income
                self._cover_deficit(balances, withdrawals)
            else:
                balances.add(AccountType.CHECKING, net_income)

            years.append(AnnualProjection(
                year=year,
                age=age,
                income=IncomeBreakdown(
                    employment=employment_income,
                    socialSecurity=social_security_income,
                    lumpSum=lump_sum_income,
                    investmentGains=total_gains,
                    rmd=rmd_amount,
                    withdrawals=withdrawals,
                    total=total_income
                ),
                spending=SpendingBreakdown(
                    living=living_spending,
                    travel=travel_spending,
                    healthcare=healthcare_spending,
                    lumpSum=lump_sum_expenses,
                    mortgages=mortgages.total,
                    total=total_spending
                ),
                mortgagePayments=mortgages,
                contributions=ContributionBreakdown(total=total_contributions, byAccountType=contributions),
                netIncome=net_income,
                accountBalances=BalanceBreakdown(total=balances.total, byAccountType=balances.model_copy())
            ))

        summary = self.calculate_projection_summary(years, start_year, end_year)

        logger.info(
            f"Projected scenario {scenario.id} for {start_year}-{end_year}: "
            f"{len(years)} years recorded, {summary.yearsInDeficit} in deficit"
        )

        return ScenarioProjection(
            scenarioId=scenario.id,
            scenarioName=scenario.name,
            years=years,
            summary=summary
        )

    @staticmethod
    def _cover_deficit(balances: AccountTypeAmounts, deficit: float):
        # Checking first, then savings. Whatever is left drives checking negative.
        for account_type in (AccountType.CHECKING, AccountType.SAVINGS):
            available = max(0.0, balances.get(account_type))
            take = min(deficit, available)
            balances.add(account_type, -take)
            deficit -= take
            if deficit <= 0:
                return

        balances.add(AccountType.CHECKING, -deficit)

    @staticmethod
    def _mortgage_payments_for_year(
        mortgage_payments: List[Dict[int, AnnualMortgagePayment]],
        year: int
    ) -> MortgagePaymentsBreakdown:
        breakdown = MortgagePaymentsBreakdown()
        for payments in mortgage_payments:
            payment = payments.get(year)
            if payment is None:
                continue
            breakdown.byMortgage.append(payment.model_copy())
            breakdown.principal += payment.principal
            breakdown.interest += payment.interest
            breakdown.escrow += payment.escrow
            breakdown.additionalPrincipal += payment.additionalPrincipal

        breakdown.total = breakdown.principal + breakdown.interest + breakdown.escrow + breakdown.additionalPrincipal
        return breakdown

    @staticmethod
    def calculate_projection_summary(years: List[AnnualProjection], start_year: int, end_year: int) -> ProjectionSummary:
        """Totals over the recorded years; final net worth is the last recorded total balance."""
        summary = ProjectionSummary(startYear=start_year, endYear=end_year)

        for projection in years:
            summary.totalIncome += projection.income.total
            summary.totalSpending += projection.spending.total
            summary.totalContributions += projection.contributions.total

            if projection.netIncome < 0:
                summary.yearsInDeficit += 1
                if summary.firstDeficitYear is None:
                    summary.firstDeficitYear = projection.year

        if years:
            summary.finalNetWorth = years[-1].accountBalances.total

        return summary


def calculate_scenario_projection(
    scenario: Scenario,
    profile: UserProfile,
    accounts: Sequence[Account],
    start_year: int,
    end_year: int,
    as_of: Optional[date] = None
) -> ScenarioProjection:
    return ProjectionService().calculate_scenario_projection(scenario, profile, accounts, start_year, end_year, as_of)
