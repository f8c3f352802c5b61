from fastapi import APIRouter

from finplan.models.mortgage import Mortgage, MortgageSchedule
from finplan.services.mortgage_service import (
    aggregate_to_annual_payments,
    calculate_monthly_payment,
    generate_amortization_schedule
)

router = APIRouter()

@router.post("/schedule", response_model=MortgageSchedule)
def get_mortgage_schedule(mortgage: Mortgage):
    """
    Amortization schedule for a mortgage, monthly and rolled up by calendar year.
    """
    schedule = generate_amortization_schedule(mortgage)
    return MortgageSchedule(
        monthlyPayment=calculate_monthly_payment(mortgage.loanAmount, mortgage.interestRate, mortgage.termYears),
        schedule=schedule,
        annual=aggregate_to_annual_payments(schedule, mortgage)
    )
