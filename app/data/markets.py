"""
Market and industry benchmark tables.

Static figures per market (inflation, private equity hurdle rates) and per
industry within each market (growth, multiples, margins). Profiles are built
once at import and looked up by value.
"""

from dataclasses import dataclass
from typing import Dict, List

DEFAULT_MARKET = "US"
DEFAULT_INDUSTRY = "real-estate"


@dataclass(frozen=True)
class IndustryBenchmark:
    """Industry figures within one market."""

    avg_growth: float  # Annual %, average operator
    good_growth: float
    excellent_growth: float  # Top performers
    avg_multiple: float  # EV / EBITDA
    good_multiple: float
    avg_margin: float  # EBITDA margin %
    context: str


@dataclass(frozen=True)
class Market:
    """Market-wide figures plus its industry table."""

    code: str
    name: str
    currency: str
    avg_inflation: float  # Annual %
    pe_irr: float  # Private equity hurdle IRR %
    pe_moic: float  # Private equity target multiple
    industries: Dict[str, IndustryBenchmark]


@dataclass(frozen=True)
class BenchmarkProfile:
    """Resolved benchmark figures for one (market, industry) pair."""

    market_code: str
    market_name: str
    currency: str
    industry_code: str
    industry_name: str
    avg_growth: float
    good_growth: float
    excellent_growth: float
    avg_multiple: float
    good_multiple: float
    avg_margin: float
    avg_inflation: float
    pe_irr: float
    pe_moic: float
    context: str

    def __post_init__(self):
        if not (self.excellent_growth >= self.good_growth >= self.avg_growth >= 0):
            raise ValueError(
                f"Growth tiers out of order for {self.market_code}/{self.industry_code}"
            )


INDUSTRY_LABELS = {
    "real-estate": "Real Estate",
    "tech": "Technology",
    "retail": "Retail & Food",
    "manufacturing": "Manufacturing",
    "healthcare": "Healthcare",
    "finance": "Financial Services",
}


MARKETS: Dict[str, Market] = {
    "US": Market(
        code="US",
        name="United States",
        currency="USD",
        avg_inflation=2.8,
        pe_irr=20,
        pe_moic=2.5,
        industries={
            "real-estate": IndustryBenchmark(4.2, 6.0, 8.0, 15, 18, 25, "US real estate is steady but slow, with prices rising about 4% a year. Safe money, not fast money."),
            "tech": IndustryBenchmark(12.5, 18.0, 25.0, 20, 30, 35, "US tech grows 12% or more a year. Crowded field with big winners and many failures. High risk, high reward."),
            "retail": IndustryBenchmark(3.8, 6.5, 10.0, 8, 12, 15, "US retail is tough, growing only 3-4% a year while online shopping squeezes physical stores."),
            "manufacturing": IndustryBenchmark(5.2, 8.0, 12.0, 10, 14, 20, "US manufacturing is solid and predictable at about 5% a year. Reliable for long holds."),
            "healthcare": IndustryBenchmark(6.8, 10.0, 15.0, 12, 16, 22, "Healthcare grows 7-10% a year as the population ages. Expensive to start, stable once running."),
            "finance": IndustryBenchmark(7.5, 11.0, 16.0, 14, 18, 30, "Financial services grow a steady 7-8% a year with high margins, under heavy regulation."),
        },
    ),
    "PK": Market(
        code="PK",
        name="Pakistan",
        currency="PKR",
        avg_inflation=11.2,
        pe_irr=25,
        pe_moic=3.0,
        industries={
            "real-estate": IndustryBenchmark(8.5, 12.0, 15.0, 10, 14, 30, "Pakistani real estate is volatile. It can grow 8-15% a year, but inflation eats into it."),
            "tech": IndustryBenchmark(18.0, 25.0, 35.0, 12, 18, 40, "Pakistani tech is booming on a young population and low labor costs. Power and politics add risk."),
            "retail": IndustryBenchmark(7.2, 10.5, 15.0, 6, 9, 18, "Retail grows 7-10% a year with the middle class. Currency swings and imports hit margins fast."),
            "manufacturing": IndustryBenchmark(9.5, 14.0, 20.0, 8, 12, 22, "Textiles, cement and steel can grow 10-15% a year. Energy costs and rupee devaluation are the big risks."),
            "healthcare": IndustryBenchmark(11.0, 16.0, 22.0, 9, 13, 25, "Healthcare grows 11-16% a year as incomes rise, with little competition so far."),
            "finance": IndustryBenchmark(10.5, 15.0, 20.0, 10, 14, 28, "Banks and finance grow 10-15% a year with the economy. Rate swings and politics matter."),
        },
    ),
    "UK": Market(
        code="UK",
        name="United Kingdom",
        currency="GBP",
        avg_inflation=2.5,
        pe_irr=18,
        pe_moic=2.3,
        industries={
            "real-estate": IndustryBenchmark(3.5, 5.5, 7.5, 16, 20, 23, "UK real estate grows slowly at 3-5% a year. London is expensive and Brexit added uncertainty."),
            "tech": IndustryBenchmark(10.5, 16.0, 22.0, 18, 28, 33, "UK tech is strong in fintech and AI, growing 10-16% a year. Talent is expensive."),
            "retail": IndustryBenchmark(2.8, 5.0, 8.0, 7, 11, 14, "UK retail is shrinking, with 3-5% growth and high street closures everywhere."),
            "manufacturing": IndustryBenchmark(4.2, 7.0, 10.0, 9, 13, 19, "UK manufacturing is stable but slow at 4-7%. Specialty products beat mass production."),
            "healthcare": IndustryBenchmark(5.5, 8.5, 12.0, 11, 15, 21, "Healthcare grows 5-8% as the population ages, with the NHS holding most of the market."),
            "finance": IndustryBenchmark(6.8, 10.0, 14.0, 13, 17, 29, "London financial services remain strong at 7-10% growth, though some business moved to the EU."),
        },
    ),
    "AE": Market(
        code="AE",
        name="UAE",
        currency="AED",
        avg_inflation=1.8,
        pe_irr=22,
        pe_moic=2.8,
        industries={
            "real-estate": IndustryBenchmark(6.5, 9.5, 13.0, 12, 16, 28, "UAE real estate, Dubai especially, runs hot and cold at 6-13% a year. Oversupply can crash prices."),
            "tech": IndustryBenchmark(15.0, 22.0, 30.0, 16, 24, 38, "UAE tech grows 15-30% with strong government backing, and tax-free income attracts talent."),
            "retail": IndustryBenchmark(5.5, 8.5, 12.0, 7, 10, 17, "Retail grows 5-8% with tourism and expats. Competition is fierce and rents are high."),
            "manufacturing": IndustryBenchmark(7.2, 11.0, 15.0, 9, 13, 21, "Free zones make manufacturing easy, growing 7-11% a year, though labor costs are rising."),
            "healthcare": IndustryBenchmark(8.5, 13.0, 18.0, 10, 14, 24, "Healthcare is booming on medical tourism and wealthy expats, at 8-13% growth."),
            "finance": IndustryBenchmark(9.0, 13.5, 18.0, 12, 16, 31, "Dubai is becoming a regional finance hub growing 9-13% a year. Islamic finance is big."),
        },
    ),
}


def _build_profile(market: Market, industry_code: str, industry_name: str) -> BenchmarkProfile:
    data = market.industries[industry_code]
    return BenchmarkProfile(
        market_code=market.code,
        market_name=market.name,
        currency=market.currency,
        industry_code=industry_code,
        industry_name=industry_name,
        avg_growth=data.avg_growth,
        good_growth=data.good_growth,
        excellent_growth=data.excellent_growth,
        avg_multiple=data.avg_multiple,
        good_multiple=data.good_multiple,
        avg_margin=data.avg_margin,
        avg_inflation=market.avg_inflation,
        pe_irr=market.pe_irr,
        pe_moic=market.pe_moic,
        context=data.context,
    )


PROFILES: Dict[tuple, BenchmarkProfile] = {
    (market.code, industry): _build_profile(market, industry, INDUSTRY_LABELS[industry])
    for market in MARKETS.values()
    for industry in market.industries
}


def get_benchmark_profile(country: str, industry: str) -> BenchmarkProfile:
    """
    Look up benchmarks for a market and industry.

    Unknown markets fall back to US and unknown industries to real estate;
    this never raises.
    """
    market = MARKETS.get(country) or MARKETS[DEFAULT_MARKET]
    if industry in market.industries:
        return PROFILES[(market.code, industry)]

    # Unknown industry: real-estate figures under the requested name
    return _build_profile(market, DEFAULT_INDUSTRY, INDUSTRY_LABELS.get(industry, industry))


def list_markets() -> List[Dict[str, str]]:
    """Supported markets as code/name/currency records."""
    return [
        {"code": m.code, "name": m.name, "currency": m.currency}
        for m in MARKETS.values()
    ]


def list_industries() -> List[Dict[str, str]]:
    """Supported industries as value/label records."""
    return [{"value": code, "label": label} for code, label in INDUSTRY_LABELS.items()]
