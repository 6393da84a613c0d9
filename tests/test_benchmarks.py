"""
Tests for market and industry benchmark lookup.
"""

import pytest

from app.data import get_benchmark_profile, list_industries, list_markets
from app.data.markets import INDUSTRY_LABELS, MARKETS, BenchmarkProfile


class TestBenchmarkLookup:
    """Test get_benchmark_profile."""

    def test_known_pair(self):
        profile = get_benchmark_profile("PK", "tech")
        assert profile.market_name == "Pakistan"
        assert profile.currency == "PKR"
        assert profile.industry_name == "Technology"
        assert profile.avg_growth == 18.0
        assert profile.avg_inflation == 11.2
        assert profile.pe_irr == 25
        assert profile.pe_moic == 3.0

    def test_unknown_market_falls_back_to_us(self):
        profile = get_benchmark_profile("ZZ", "retail")
        assert profile.market_code == "US"
        assert profile.avg_growth == 3.8

    def test_unknown_industry_uses_real_estate_figures(self):
        profile = get_benchmark_profile("UK", "space-mining")
        real_estate = get_benchmark_profile("UK", "real-estate")
        assert profile.avg_growth == real_estate.avg_growth
        assert profile.avg_multiple == real_estate.avg_multiple
        assert profile.industry_name == "space-mining"

    def test_lookup_never_raises(self):
        profile = get_benchmark_profile("", "")
        assert profile.market_code == "US"

    def test_growth_tiers_ordered(self):
        """Every profile has excellent >= good >= average >= 0."""
        for market in MARKETS.values():
            for industry in INDUSTRY_LABELS:
                profile = get_benchmark_profile(market.code, industry)
                assert profile.excellent_growth >= profile.good_growth >= profile.avg_growth >= 0

    def test_out_of_order_tiers_rejected(self):
        with pytest.raises(ValueError, match="Growth tiers out of order"):
            BenchmarkProfile(
                market_code="US",
                market_name="United States",
                currency="USD",
                industry_code="tech",
                industry_name="Technology",
                avg_growth=10,
                good_growth=5,
                excellent_growth=20,
                avg_multiple=10,
                good_multiple=12,
                avg_margin=20,
                avg_inflation=2,
                pe_irr=20,
                pe_moic=2.5,
                context="",
            )


class TestListings:
    """Test market and industry listings."""

    def test_markets(self):
        codes = [m["code"] for m in list_markets()]
        assert codes == ["US", "PK", "UK", "AE"]

    def test_industries(self):
        values = {i["value"] for i in list_industries()}
        assert values == {"real-estate", "tech", "retail", "manufacturing", "healthcare", "finance"}
