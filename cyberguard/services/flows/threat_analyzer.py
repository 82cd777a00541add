"""
AI threat analyzer flow.

Turns free-text real-time data feeds (sensor alerts, failed logins,
reported CVEs) into a summarized and prioritized list of potential
threats.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cyberguard.models.schemas import NonBlankStr
from cyberguard.services.llm_chain.llm_chains import LLMChains
from .flow import PromptFlow
from .prompt_instruction import THREAT_ANALYZER_PROMPT


class ThreatAnalyzerInput(BaseModel):
    real_time_data_feeds: NonBlankStr = Field(
        description="Real-time updates on potential threats and vulnerabilities from "
        "centralized sensors collecting network event data."
    )


class ThreatAnalyzerOutput(BaseModel):
    threat_summary: str = Field(
        description="A summarized and prioritized list of potential threats based on "
        "real-time data feeds."
    )


threat_analyzer_flow: PromptFlow[ThreatAnalyzerInput, ThreatAnalyzerOutput] = PromptFlow(
    "threat_analyzer",
    ThreatAnalyzerInput,
    ThreatAnalyzerOutput,
    THREAT_ANALYZER_PROMPT,
)


async def threat_analyzer_summary(
    llm: LLMChains, data: ThreatAnalyzerInput
) -> ThreatAnalyzerOutput:
    return await threat_analyzer_flow.run(llm, data)
