"""
Gap analyzer flow.

Compares a current security profile against a target profile and
returns a concise gap analysis plus prioritized recommendations.  The
profile summaries usually come from :func:`cyberguard.services.reporting.report.summarize_profiles`.
"""

from __future__ import annotations

from enum import Enum
from typing import List
from pydantic import BaseModel, Field

from cyberguard.models.schemas import NonBlankStr
from cyberguard.services.llm_chain.llm_chains import LLMChains
from .flow import PromptFlow
from .prompt_instruction import GAP_ANALYZER_PROMPT


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class GapAnalysisInput(BaseModel):
    current_profile_summary: NonBlankStr = Field(
        description="A detailed summary of the current security profile, including "
        "identified threats, vulnerabilities, implemented controls, and relevant asset "
        "information for each threat."
    )
    target_profile_summary: NonBlankStr = Field(
        description="A detailed summary of the desired target security profile, "
        "including target identifiers, desired implementation levels, and types of "
        "assets it applies to."
    )


class Recommendation(BaseModel):
    title: str = Field(description="A short, clear title for the recommendation.")
    description: str = Field(
        description="A detailed explanation of the recommended action: what needs to be "
        "done, why it's important, and how to implement it or which tools to use."
    )
    priority: Priority = Field(description="The priority of implementing this recommendation.")


class GapAnalysisOutput(BaseModel):
    gap_analysis: str = Field(
        description="A concise analysis identifying the key gaps between the current and "
        "target security profiles."
    )
    recommendations: List[Recommendation] = Field(
        description="Actionable recommendations to bridge the identified gaps."
    )


gap_analyzer_flow: PromptFlow[GapAnalysisInput, GapAnalysisOutput] = PromptFlow(
    "gap_analyzer",
    GapAnalysisInput,
    GapAnalysisOutput,
    GAP_ANALYZER_PROMPT,
    empty_output_message="AI failed to generate gap analysis output.",
)


async def analyze_security_gaps(
    llm: LLMChains, data: GapAnalysisInput
) -> GapAnalysisOutput:
    return await gap_analyzer_flow.run(llm, data)
