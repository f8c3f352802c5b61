from typing import List, Optional, Dict

from finplan.models.mortgage import Mortgage, MortgagePayment, AnnualMortgagePayment

PAYOFF_THRESHOLD = 0.01


def calculate_monthly_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """
    Monthly principal + interest (escrow excluded), standard annuity formula:
    M = P[r(1+r)^n] / [(1+r)^n - 1]
    """
    if principal <= 0 or annual_rate < 0 or term_years <= 0:
        return 0.0

    number_of_payments = term_years * 12
    if annual_rate == 0:
        return principal / number_of_payments

    monthly_rate = annual_rate / 100 / 12
    growth = (1 + monthly_rate) ** number_of_payments
    return principal * monthly_rate * growth / (growth - 1)


def generate_amortization_schedule(mortgage: Mortgage) -> List[MortgagePayment]:
    """
    Full monthly schedule, starting in the month of `startDate`.
    Additional principal shortens the loan; the final payment is capped at the
    remaining balance.
    """
    schedule = []
    monthly_rate = mortgage.interestRate / 100 / 12
    number_of_payments = mortgage.termYears * 12
    monthly_payment = calculate_monthly_payment(mortgage.loanAmount, mortgage.interestRate, mortgage.termYears)
    additional_payment = mortgage.additionalMonthlyPayment or 0.0

    remaining_balance = mortgage.loanAmount
    start_month_index = mortgage.startDate.month - 1

    for month in range(1, number_of_payments + 1):
        if remaining_balance <= PAYOFF_THRESHOLD:
            break

        interest_payment = remaining_balance * monthly_rate
        principal_payment = monthly_payment - interest_payment
        additional_principal = additional_payment

        # Don't overpay on the last payment
        if principal_payment + additional_principal > remaining_balance:
            principal_payment = remaining_balance
            additional_principal = 0.0

        payment_year = mortgage.startDate.year + (start_month_index + month - 1) // 12
        remaining_balance -= principal_payment + additional_principal

        schedule.append(MortgagePayment(
            month=month,
            year=payment_year,
            principal=principal_payment,
            interest=interest_payment,
            escrow=mortgage.monthlyEscrow,
            additionalPrincipal=additional_principal,
            totalPayment=principal_payment + interest_payment + mortgage.monthlyEscrow + additional_principal,
            remainingBalance=max(0.0, remaining_balance)
        ))

    return schedule


def aggregate_to_annual_payments(schedule: List[MortgagePayment], mortgage: Mortgage) -> List[AnnualMortgagePayment]:
    """Rolls monthly payments up into calendar-year totals, sorted by year."""
    annual_payments: Dict[int, AnnualMortgagePayment] = {}

    for payment in schedule:
        annual = annual_payments.get(payment.year)
        if annual is None:
            annual = AnnualMortgagePayment(
                year=payment.year,
                mortgageId=mortgage.id,
                mortgageName=mortgage.name,
                startingBalance=payment.remainingBalance + payment.principal + payment.additionalPrincipal
            )
            annual_payments[payment.year] = annual

        annual.principal += payment.principal
        annual.interest += payment.interest
        annual.escrow += payment.escrow
        annual.additionalPrincipal += payment.additionalPrincipal
        annual.totalPayment += payment.totalPayment
        annual.endingBalance = payment.remainingBalance

    return [annual_payments[year] for year in sorted(annual_payments)]


def get_annual_payments_by_year(mortgage: Mortgage) -> Dict[int, AnnualMortgagePayment]:
    schedule = generate_amortization_schedule(mortgage)
    return {a.year: a for a in aggregate_to_annual_payments(schedule, mortgage)}


def get_mortgage_payment_for_year(mortgage: Mortgage, year: int) -> Optional[AnnualMortgagePayment]:
    """Annual payment summary for `year`, or None if the mortgage has no payments that year."""
    return get_annual_payments_by_year(mortgage).get(year)
