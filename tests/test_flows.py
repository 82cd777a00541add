import asyncio

import httpx
import pytest
from openai import APIConnectionError

from cyberguard.services.flows import (
    analyze_security_gaps,
    get_security_recommendations,
    threat_analyzer_summary,
)
from cyberguard.services.flows.flow import FlowError
from cyberguard.services.flows.gap_analyzer import (
    GapAnalysisInput,
    GapAnalysisOutput,
    Priority,
)
from cyberguard.services.flows.security_advisor import (
    SecurityRecommendationsInput,
    security_advisor_flow,
)
from cyberguard.services.flows.threat_analyzer import (
    ThreatAnalyzerInput,
    ThreatAnalyzerOutput,
    threat_analyzer_flow,
)
from cyberguard.services.llm_chain.llm_chains import LLMRefusal


FEEDS = "Sensor 12: 40 failed SSH logins from 10.0.0.7\nCVE-2024-3400 reported on VPN gateway"


def test_threat_prompt_contains_feeds() -> None:
    prompt = threat_analyzer_flow.render(ThreatAnalyzerInput(real_time_data_feeds=FEEDS))
    assert FEEDS in prompt


def test_advisor_prompt_contains_both_states() -> None:
    prompt = security_advisor_flow.render(
        SecurityRecommendationsInput(
            current_security_state="No MFA", desired_security_state="MFA everywhere"
        )
    )
    assert "No MFA" in prompt
    assert "MFA everywhere" in prompt


def test_flow_inputs_reject_blank_text() -> None:
    with pytest.raises(ValueError):
        ThreatAnalyzerInput(real_time_data_feeds="   ")
    with pytest.raises(ValueError):
        GapAnalysisInput(current_profile_summary="x", target_profile_summary="")


async def test_threat_analyzer_returns_parsed_output(llm, completions) -> None:
    completions.reply_with({"threat_summary": "1. SSH brute force (high)"})
    out = await threat_analyzer_summary(llm, ThreatAnalyzerInput(real_time_data_feeds=FEEDS))

    assert isinstance(out, ThreatAnalyzerOutput)
    assert out.threat_summary == "1. SSH brute force (high)"
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"] is ThreatAnalyzerOutput
    assert FEEDS in call["messages"][0]["content"]


async def test_flow_accepts_plain_dict_input(llm, completions) -> None:
    completions.reply_with({"recommendations": "Enable MFA."})
    out = await security_advisor_flow.run(
        llm, {"current_security_state": "a", "desired_security_state": "b"}
    )
    assert out.recommendations == "Enable MFA."


async def test_gap_analyzer_output(llm, completions) -> None:
    completions.reply_with(
        {
            "gap_analysis": "Access control is below target.",
            "recommendations": [
                {"title": "Roll out MFA", "description": "Use Okta.", "priority": "High"}
            ],
        }
    )
    out = await analyze_security_gaps(
        llm,
        GapAnalysisInput(current_profile_summary="current", target_profile_summary="target"),
    )
    assert isinstance(out, GapAnalysisOutput)
    assert out.recommendations[0].priority is Priority.HIGH


async def test_empty_model_output_raises_flow_error(llm) -> None:
    with pytest.raises(FlowError, match="AI failed to generate gap analysis output."):
        await analyze_security_gaps(
            llm, GapAnalysisInput(current_profile_summary="a", target_profile_summary="b")
        )

    with pytest.raises(FlowError, match="security_advisor"):
        await get_security_recommendations(
            llm,
            SecurityRecommendationsInput(current_security_state="a", desired_security_state="b"),
        )


async def test_refusal_is_raised(llm, completions) -> None:
    completions.refusal = "I can't help with that."
    with pytest.raises(LLMRefusal):
        await threat_analyzer_summary(llm, ThreatAnalyzerInput(real_time_data_feeds=FEEDS))


async def test_fallback_to_create_with_json_schema(create_only_llm) -> None:
    llm, completions = create_only_llm('{"threat_summary": "Phishing wave"}')

    out = await threat_analyzer_summary(llm, ThreatAnalyzerInput(real_time_data_feeds=FEEDS))

    assert out.threat_summary == "Phishing wave"
    response_format = completions.calls[0]["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "ThreatAnalyzerOutput"


async def test_fallback_rejects_output_outside_schema(create_only_llm) -> None:
    llm, _ = create_only_llm('{"unexpected": true}')

    with pytest.raises(ValueError):
        await threat_analyzer_summary(llm, ThreatAnalyzerInput(real_time_data_feeds=FEEDS))


# =====================================
# Endpoint
# =====================================
async def test_threat_analyzer_endpoint(client, completions) -> None:
    completions.reply_with({"threat_summary": "Brute force on SSH"})
    response = await client.post("/api/ai/threat-analyzer", json={"real_time_data_feeds": FEEDS})
    assert response.status_code == 200
    assert await response.get_json() == {"threat_summary": "Brute force on SSH"}


async def test_security_advisor_endpoint(client, completions) -> None:
    completions.reply_with({"recommendations": "Segment the SCADA network."})
    response = await client.post(
        "/api/ai/security-advisor",
        json={"current_security_state": "flat network", "desired_security_state": "segmented"},
    )
    assert response.status_code == 200
    assert (await response.get_json())["recommendations"] == "Segment the SCADA network."


async def test_endpoint_rejects_blank_input(client, completions) -> None:
    response = await client.post("/api/ai/threat-analyzer", json={"real_time_data_feeds": ""})
    assert response.status_code == 400
    assert completions.calls == []


async def test_empty_output_becomes_error_toast(client) -> None:
    response = await client.post(
        "/api/ai/gap-analysis",
        json={"current_profile_summary": "a", "target_profile_summary": "b"},
    )
    assert response.status_code == 502
    data = await response.get_json()
    assert data["status"] == "error"
    assert data["message"] == "AI failed to generate gap analysis output."


async def test_transport_error_becomes_error_toast(client, completions) -> None:
    completions.error = APIConnectionError(request=httpx.Request("POST", "http://llm.test"))
    response = await client.post("/api/ai/threat-analyzer", json={"real_time_data_feeds": FEEDS})
    assert response.status_code == 502
    assert (await response.get_json())["status"] == "error"


async def test_timeout_becomes_error_toast(client, completions) -> None:
    completions.error = asyncio.TimeoutError()
    response = await client.post(
        "/api/ai/security-advisor",
        json={"current_security_state": "a", "desired_security_state": "b"},
    )
    assert response.status_code == 502
    assert (await response.get_json())["message"] == "The AI service did not respond in time."
