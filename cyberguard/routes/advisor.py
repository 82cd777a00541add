"""
AI blueprint exposing the three prompt flows under ``/api/ai``.

Each endpoint validates its JSON body, runs the flow against the shared
:class:`LLMChains` client and returns the flow output.  Any failure of
the external model is caught here and returned as an error toast so
the page can show it in its error banner.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable
from openai import OpenAIError
from pydantic import BaseModel, ValidationError
from quart import Blueprint, current_app, jsonify
from quart_schema import validate_request

from cyberguard.utils.logger import get_logger
from cyberguard.utils.helper import response_error_toast
from cyberguard.services.llm_chain.llm_chains import LLMChains, LLMRefusal
from cyberguard.services.flows.flow import FlowError
from cyberguard.services.flows.threat_analyzer import (
    ThreatAnalyzerInput,
    threat_analyzer_summary,
)
from cyberguard.services.flows.security_advisor import (
    SecurityRecommendationsInput,
    get_security_recommendations,
)
from cyberguard.services.flows.gap_analyzer import GapAnalysisInput, analyze_security_gaps


logger = get_logger(__name__)
advisor_bp = Blueprint("advisor", __name__)


def _llm() -> LLMChains:
    return current_app.extensions["llm"]


async def run_flow_safely(
    name: str, call: Callable[[], Awaitable[BaseModel]], fallback_message: str
):
    """Jalankan flow; error LLM/transport dikembalikan sebagai toast 502."""
    try:
        output = await call()
    except (FlowError, LLMRefusal) as e:
        logger.warning("[%s] %s", name, e)
        return response_error_toast(status="error", message=str(e), http_status=502)
    except asyncio.TimeoutError:
        logger.exception("[%s] timeout memanggil LLM", name)
        return response_error_toast(
            status="error", message="The AI service did not respond in time.", http_status=502
        )
    except (OpenAIError, ValidationError) as e:
        logger.exception("[%s] gagal memanggil LLM", name)
        return response_error_toast(
            status="error", message=str(e) or fallback_message, http_status=502
        )
    return jsonify(output.model_dump(mode="json")), 200


@advisor_bp.post("/threat-analyzer")
@validate_request(ThreatAnalyzerInput)
async def threat_analyzer(data: ThreatAnalyzerInput):
    """Summarize and prioritize threats from real-time data feeds."""
    return await run_flow_safely(
        "threat_analyzer",
        lambda: threat_analyzer_summary(_llm(), data),
        "An unknown error occurred during threat analysis.",
    )


@advisor_bp.post("/security-advisor")
@validate_request(SecurityRecommendationsInput)
async def security_advisor(data: SecurityRecommendationsInput):
    """Recommend steps from the current to the desired security state."""
    return await run_flow_safely(
        "security_advisor",
        lambda: get_security_recommendations(_llm(), data),
        "An unknown error occurred while fetching recommendations.",
    )


@advisor_bp.post("/gap-analysis")
@validate_request(GapAnalysisInput)
async def gap_analysis(data: GapAnalysisInput):
    """Analyze gaps between current and target security profiles."""
    return await run_flow_safely(
        "gap_analyzer",
        lambda: analyze_security_gaps(_llm(), data),
        "An unknown error occurred during gap analysis.",
    )
