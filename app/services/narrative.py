"""
AI narrative service.

Requests commentary on a calculator result from an OpenAI-compatible chat
completions gateway. Short in-app verdicts are streamed fragment by
fragment; detailed memo analysis is returned as one string. The numeric
result never depends on this service.
"""

import asyncio
import json
import logging
import re
from functools import lru_cache
from typing import AsyncIterator, Dict, List, Optional, Union

from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI, RateLimitError
from pydantic import BaseModel, ConfigDict, Field

from app.calculators import CalculationResult
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

Scalar = Union[str, float, int, None]


class NarrativePayload(BaseModel):
    """The flat request body sent for narrative generation."""

    model_config = ConfigDict(populate_by_name=True)

    calculator_type: str = Field(alias="calculatorType")
    inputs: Dict[str, Scalar]
    results: Dict[str, Scalar]
    industry: str
    country: str


def build_analysis_payload(result: CalculationResult) -> NarrativePayload:
    """Payload for a calculator result."""
    return NarrativePayload(
        calculator_type=result.display_name,
        inputs=result.input_values(),
        results=result.metrics(),
        industry=result.inputs.industry,
        country=result.inputs.country,
    )


# ============================================================================
# ERRORS
# ============================================================================


class NarrativeError(Exception):
    """Base class for narrative failures, carrying an HTTP status."""

    status_code = 500
    default_message = "AI analysis unavailable"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NarrativeNotConfiguredError(NarrativeError):
    status_code = 503
    default_message = "AI analysis is not configured"


class NarrativeUnavailableError(NarrativeError):
    status_code = 500
    default_message = "AI analysis unavailable"


class NarrativeRateLimitedError(NarrativeError):
    status_code = 429
    default_message = "Rate limit exceeded. Try again shortly."


class NarrativeCreditsExhaustedError(NarrativeError):
    status_code = 402
    default_message = "AI credits exhausted."


class NarrativeConnectionError(NarrativeError):
    status_code = 502
    default_message = "Failed to connect to AI."


def _translate_error(exc: APIError) -> NarrativeError:
    if isinstance(exc, RateLimitError):
        return NarrativeRateLimitedError()
    if isinstance(exc, APIStatusError) and exc.status_code == 402:
        return NarrativeCreditsExhaustedError()
    if isinstance(exc, APIConnectionError):
        return NarrativeConnectionError()
    return NarrativeUnavailableError()


# ============================================================================
# PROMPTS
# ============================================================================

CALCULATOR_CONTEXTS: Dict[str, Dict[str, str]] = {
    "Future Value": {
        "in_app": (
            "You are analyzing a FUTURE VALUE calculation: what an investment or "
            "asset will be worth at a given growth rate. Judge whether the rate is "
            "realistic for the industry, how it compares with inflation-adjusted "
            "returns, and whether it is a good long-term play. Tell the user what "
            "to do: hold, invest more or diversify. Reference the country and industry."
        ),
        "memo": (
            "You are writing a detailed Future Value / Growth Analysis memo. Discuss "
            "compound growth, compare the assumed rate with historical industry "
            "averages in the country, address inflation erosion, and cite 2-3 real "
            "comparable assets in the same sector and country with their historical "
            "growth. Say whether the returns justify the horizon and opportunity cost."
        ),
    },
    "Deal ROI": {
        "in_app": (
            "You are analyzing a DEAL ROI / ACQUISITION calculation. Judge whether "
            "the entry price is fair for the EBITDA, whether the IRR and cash return "
            "justify the risk, and how the deal compares with typical deals in this "
            "industry and country. Tell the user to proceed, negotiate down or walk "
            "away. Reference specific numbers."
        ),
        "memo": (
            "You are writing a detailed Deal ROI / LBO Analysis memo. Analyze the "
            "entry multiple against industry comparables, IRR against hurdle rates, "
            "MOIC, cash-on-cash dynamics and exit feasibility at the assumed multiple. "
            "Cite 2-3 real comparable transactions in the same industry and region "
            "with approximate size and outcome. Discuss leverage, cycle and execution risk."
        ),
    },
    "Breakeven": {
        "in_app": (
            "You are analyzing a BREAKEVEN calculation: units needed to cover fixed "
            "costs. Judge whether the per-unit margin is healthy, how quickly the "
            "breakeven volume is realistic, and what the unit economics say about "
            "viability. Advise on pricing or cost reduction, referencing the "
            "contribution per unit and the breakeven point."
        ),
        "memo": (
            "You are writing a detailed Breakeven Analysis memo. Analyze contribution "
            "margin, fixed cost coverage and volume sensitivity against industry "
            "margins in the country. Cite 2-3 comparable businesses in the sector with "
            "typical margins, and discuss economics at 2x and 5x breakeven volume."
        ),
    },
    "Valuation": {
        "in_app": (
            "You are analyzing a COMPANY VALUATION from revenue and EBITDA. Judge "
            "whether the EBITDA margin is strong for the industry, how the implied "
            "multiple compares with recent transactions, and whether the business is "
            "undervalued or overvalued. Say whether to sell, raise capital or keep growing."
        ),
        "memo": (
            "You are writing a detailed Valuation Analysis memo using EV/EBITDA, "
            "EV/Revenue and margin-based approaches. Compare against 2-3 real "
            "comparable companies or recent M&A transactions in the same industry and "
            "country, and discuss what drives premium or discount valuations there."
        ),
    },
    "Payback": {
        "in_app": (
            "You are analyzing an INVESTMENT PAYBACK calculation: how long annual "
            "savings or earnings take to recover the investment. Judge whether the "
            "payback period is acceptable, what the inflation-adjusted return looks "
            "like, and the value created over the projection. Say whether it is worth making."
        ),
        "memo": (
            "You are writing a detailed Payback / Investment Recovery Analysis memo. "
            "Compare the payback period with industry norms, discuss inflation's "
            "effect on real returns, and project total value creation. Cite 2-3 "
            "comparable investments in the same industry and country with typical "
            "payback periods, and discuss opportunity cost and risk-adjusted return."
        ),
    },
}

IN_APP_RULES = """
HARD LIMITS:
- MAXIMUM 50 words and 320 characters.
- 3-4 sentences only.

Rules:
- Tell the user what to DO based on the results.
- Mention the country and industry briefly.
- Reference one or two key numbers and say whether they beat or trail the industry average.
- Simple everyday language, no jargon.
- Plain text only: no emojis, markdown, bullet points or bold.
- Be specific to these numbers; never use template phrases."""

MEMO_RULES = """
Rules:
- Write 3-4 paragraphs of substantive analysis.
- Reference specific numbers from the data provided.
- Compare performance against industry benchmarks in the specific market.
- Include 2-3 real-world comparable transactions or companies from the same industry and region, with approximate year, size and outcome.
- Discuss risks and opportunities specific to this industry and market.
- Formal, clear tone. Flowing prose in plain text: no emojis, bullet points or markdown.
- Remove any claim that cannot be supported by the input data."""


def build_messages(payload: NarrativePayload, detailed_memo: bool = False) -> List[Dict[str, str]]:
    """System and user messages for a payload."""
    context = CALCULATOR_CONTEXTS.get(payload.calculator_type, CALCULATOR_CONTEXTS["Deal ROI"])

    header = (
        f"Calculator: {payload.calculator_type}\n"
        f"Market: {payload.country}\n"
        f"Industry: {payload.industry}\n\n"
        f"Inputs: {json.dumps(payload.inputs)}\n"
        f"Results: {json.dumps(payload.results)}\n\n"
    )

    if detailed_memo:
        system = context["memo"] + "\n" + MEMO_RULES
        user = header + (
            "Write a detailed market analysis with real-world comparables for the "
            "investment memorandum. Tie every claim to the numbers provided."
        )
    else:
        system = context["in_app"] + "\n" + IN_APP_RULES
        user = header + (
            "Give a 3-4 sentence actionable verdict. Max 50 words, 320 characters. "
            "Be specific to THESE numbers."
        )

    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def strip_markdown(text: str) -> str:
    """Remove bold/italic markers, headings and backticks."""
    text = text.replace("**", "").replace("*", "")
    text = re.sub(r"#{1,6}\s", "", text)
    return text.replace("`", "").strip()


# ============================================================================
# SERVICE
# ============================================================================


class NarrativeService:
    """Narrative generation over an OpenAI-compatible client."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client = client

        if self.client is None and self.settings.ai_api_key:
            self.client = AsyncOpenAI(
                api_key=self.settings.ai_api_key,
                base_url=self.settings.ai_base_url,
            )

    @property
    def available(self) -> bool:
        return self.client is not None

    def _require_client(self) -> AsyncOpenAI:
        if self.client is None:
            raise NarrativeNotConfiguredError()
        return self.client

    async def stream_analysis(self, payload: NarrativePayload) -> AsyncIterator[str]:
        """
        Stream the short in-app verdict.

        Yields:
            Text fragments in arrival order

        Raises:
            NarrativeError: If the gateway is unconfigured or the request fails
        """
        client = self._require_client()

        try:
            stream = await client.chat.completions.create(
                model=self.settings.ai_model,
                messages=build_messages(payload),
                stream=True,
                max_tokens=self.settings.ai_inline_max_tokens,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except APIError as e:
            logger.warning(f"Narrative stream failed for {payload.calculator_type}: {e}")
            raise _translate_error(e) from e

    async def generate_memo_analysis(self, payload: NarrativePayload) -> str:
        """
        Generate the detailed memo analysis in one response.

        Raises:
            NarrativeError: If the gateway is unconfigured or the request fails
        """
        client = self._require_client()

        try:
            response = await client.chat.completions.create(
                model=self.settings.ai_model,
                messages=build_messages(payload, detailed_memo=True),
                stream=False,
                max_tokens=self.settings.ai_memo_max_tokens,
            )
        except APIError as e:
            logger.error(f"Memo analysis failed for {payload.calculator_type}: {e}")
            raise _translate_error(e) from e

        text = response.choices[0].message.content if response.choices else ""
        return strip_markdown(text or "")


@lru_cache()
def get_narrative_service() -> NarrativeService:
    """Get cached narrative service instance."""
    return NarrativeService()


class NarrativeSession:
    """
    Holds at most one in-flight narrative request.

    Starting a new request cancels the previous one, so fragments from a
    stale request never reach the buffer.
    """

    def __init__(self, service: NarrativeService):
        self.service = service
        self.text = ""
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, payload: NarrativePayload) -> asyncio.Task:
        """Cancel any in-flight request and start streaming a new one."""
        self.cancel()
        self.text = ""
        self._task = asyncio.create_task(self._consume(payload))
        return self._task

    def cancel(self) -> None:
        if self.running:
            self._task.cancel()

    async def _consume(self, payload: NarrativePayload) -> str:
        fragments: List[str] = []
        async for fragment in self.service.stream_analysis(payload):
            fragments.append(fragment)
            if asyncio.current_task() is self._task:
                self.text = "".join(fragments)
        return "".join(fragments)

    async def result(self) -> str:
        """
        Wait for the current request and return its full text.

        A cancelled request yields whatever text arrived before cancellation.
        """
        task = self._task
        if task is None or task.cancelled():
            return self.text

        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
            return self.text
