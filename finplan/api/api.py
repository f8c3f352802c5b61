from fastapi import APIRouter
from . import projections, scenarios, mortgages

api_router = APIRouter()
api_router.include_router(projections.router, prefix="/projections", tags=["projections"])
api_router.include_router(scenarios.router, prefix="/scenarios", tags=["scenarios"])
api_router.include_router(mortgages.router, prefix="/mortgages", tags=["mortgages"])
