"""
Benchmark lookup endpoints.
"""

from typing import Dict, List

from fastapi import APIRouter

from app.data import BenchmarkProfile, get_benchmark_profile, list_industries, list_markets

router = APIRouter()


@router.get("/markets")
async def markets() -> List[Dict[str, str]]:
    """Supported markets with their currency."""
    return list_markets()


@router.get("/industries")
async def industries() -> List[Dict[str, str]]:
    """Supported industry codes and names."""
    return list_industries()


@router.get("/{country}/{industry}", response_model=BenchmarkProfile)
async def benchmark_profile(country: str, industry: str):
    """Resolved profile; unknown codes fall back to the defaults."""
    return get_benchmark_profile(country, industry)
