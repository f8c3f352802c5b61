from typing import Optional
from datetime import date
from fastapi import APIRouter
from pydantic import BaseModel

from finplan.models import Scenario, UserProfile
from finplan.services.scenario_service import (
    calculate_projection_end_year,
    get_max_end_age,
    validate_buckets
)

router = APIRouter()

class ValidateScenarioRequest(BaseModel):
    scenario: Scenario
    profile: UserProfile
    asOf: Optional[date] = None

class ValidateScenarioResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    startYear: Optional[int] = None
    endYear: Optional[int] = None # Year the last bucket ends

@router.post("/validate", response_model=ValidateScenarioResponse)
def validate_scenario(request: ValidateScenarioRequest):
    """
    Check that a scenario's buckets tile the user's lifespan before it is saved,
    and suggest the projection range that covers every bucket.
    """
    error = validate_buckets(request.scenario.assumptionBuckets)
    if error:
        return ValidateScenarioResponse(valid=False, error=error)

    as_of = request.asOf or date.today()
    end_age = get_max_end_age(request.scenario.assumptionBuckets)
    return ValidateScenarioResponse(
        valid=True,
        startYear=as_of.year,
        endYear=calculate_projection_end_year(request.profile, end_age, as_of)
    )
