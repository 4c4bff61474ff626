"""
API routes for the deal calculator.
"""

from fastapi import APIRouter

from dealcalc.api import scenarios, calculations

router = APIRouter()

# Include sub-routers
router.include_router(scenarios.router, prefix="/scenarios", tags=["scenarios"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
