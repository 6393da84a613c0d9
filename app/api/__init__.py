"""
API routes for the calculator suite.
"""

from fastapi import APIRouter

from app.api import analysis, benchmarks, calculations, deals, export, scenarios

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(scenarios.router, prefix="/scenarios", tags=["scenarios"])
router.include_router(benchmarks.router, prefix="/benchmarks", tags=["benchmarks"])
router.include_router(deals.router, prefix="/deals", tags=["deals"])
router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
router.include_router(export.router, prefix="/export", tags=["export"])
