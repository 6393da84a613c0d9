"""
Static benchmark data.
"""

from app.data.markets import (
    BenchmarkProfile,
    get_benchmark_profile,
    list_industries,
    list_markets,
)

__all__ = ["BenchmarkProfile", "get_benchmark_profile", "list_industries", "list_markets"]
