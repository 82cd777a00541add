"""
Security advisor flow.

Given a description of the current and the desired security state of a
system, asks the model for actionable recommendations to get from one
to the other.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cyberguard.models.schemas import NonBlankStr
from cyberguard.services.llm_chain.llm_chains import LLMChains
from .flow import PromptFlow
from .prompt_instruction import SECURITY_ADVISOR_PROMPT


class SecurityRecommendationsInput(BaseModel):
    current_security_state: NonBlankStr = Field(
        description="The current security state of the system."
    )
    desired_security_state: NonBlankStr = Field(
        description="The desired security state of the system."
    )


class SecurityRecommendationsOutput(BaseModel):
    recommendations: str = Field(
        description="Actionable recommendations for achieving the desired security state."
    )


security_advisor_flow: PromptFlow[
    SecurityRecommendationsInput, SecurityRecommendationsOutput
] = PromptFlow(
    "security_advisor",
    SecurityRecommendationsInput,
    SecurityRecommendationsOutput,
    SECURITY_ADVISOR_PROMPT,
)


async def get_security_recommendations(
    llm: LLMChains, data: SecurityRecommendationsInput
) -> SecurityRecommendationsOutput:
    return await security_advisor_flow.run(llm, data)
