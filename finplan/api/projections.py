import logging
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from finplan.core.config import settings
from finplan.models import (
    Account,
    ProjectionComparison,
    Scenario,
    StoredProjection,
    UserProfile
)
from finplan.services.comparison_service import ComparisonService
from finplan.services.projection_service import ProjectionInputError, ProjectionService

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Pydantic Schemas ---

class CalculateProjectionRequest(BaseModel):
    scenario: Scenario
    profile: UserProfile
    accounts: List[Account] = []
    startYear: Optional[int] = None # Defaults to the current year
    endYear: Optional[int] = None # Defaults to the current year + DEFAULT_PROJECTION_YEARS
    asOf: Optional[date] = None # Reference "today" for the age calculation

class CompareProjectionsRequest(BaseModel):
    storedProjections: List[StoredProjection] = Field(default=[])

# --- Endpoints ---

@router.post("/calculate", response_model=StoredProjection)
def calculate_projection(request: CalculateProjectionRequest):
    """
    Run the projection engine for a scenario and return it ready to be stored.
    Persisting the result is up to the caller.
    """
    as_of = request.asOf or date.today()
    start_year = request.startYear or as_of.year
    end_year = request.endYear or as_of.year + settings.DEFAULT_PROJECTION_YEARS

    service = ProjectionService()
    try:
        projection = service.calculate_scenario_projection(
            request.scenario,
            request.profile,
            request.accounts,
            start_year,
            end_year,
            as_of=as_of
        )
    except ProjectionInputError as e:
        logger.warning(f"Rejected projection for scenario {request.scenario.id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return StoredProjection(
        scenarioId=request.scenario.id,
        scenarioName=request.scenario.name,
        startYear=start_year,
        endYear=end_year,
        projection=projection
    )

@router.post("/compare", response_model=ProjectionComparison)
def compare_projections(request: CompareProjectionsRequest):
    """
    Compare previously calculated projections side by side.
    """
    try:
        return ComparisonService.compare_projections(request.storedProjections)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
