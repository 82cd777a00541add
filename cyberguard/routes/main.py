# cyberguard/routes/main.py
from __future__ import annotations

from cyberguard.utils.logger import get_logger
from cyberguard.utils.helper import utc_now_iso
from cyberguard.models.schemas import DISPLAY_CATEGORIES, WeaknessSeverity
from cyberguard.services.risk.calculator import Level, risk_matrix
from cyberguard.services.flows.prompt_instruction import (
    SECURITY_ADVISOR_EXAMPLE_CURRENT,
    SECURITY_ADVISOR_EXAMPLE_DESIRED,
    THREAT_ANALYZER_EXAMPLE,
)
from quart import Blueprint, render_template, current_app, jsonify


logger = get_logger(__name__)
main_bp = Blueprint("main", __name__)


FEATURE_CARDS = [
    {"title": "Asset Registry", "description": "Catalog your corporate assets.", "href": "/assets", "cta": "Manage Assets"},
    {"title": "Real-time Monitoring", "description": "View simulated network event data.", "href": "/monitoring", "cta": "View Events"},
    {"title": "AI Threat Analyzer", "description": "Analyze potential threats with AI.", "href": "/threat-analyzer", "cta": "Analyze Threats"},
    {"title": "Risk Calculator", "description": "Evaluate risks and exposures.", "href": "/risk-calculator", "cta": "Calculate Risks"},
    {"title": "AI Security Advisor", "description": "Get AI-driven security advice.", "href": "/security-advisor", "cta": "Get Advice"},
    {"title": "Reporting Panel", "description": "Generate security reports.", "href": "/reporting", "cta": "View Reports"},
]


@main_bp.route("/")
async def index() -> any:  # type: ignore
    """Render the dashboard with one card per feature."""
    return await render_template("index.html", cards=FEATURE_CARDS)


@main_bp.get("/assets")
async def assets_page() -> any:  # type: ignore
    return await render_template(
        "assets.html",
        categories=list(DISPLAY_CATEGORIES),
        severities=[s.value for s in WeaknessSeverity],
    )


@main_bp.get("/monitoring")
async def monitoring_page() -> any:  # type: ignore
    return await render_template("monitoring.html")


@main_bp.get("/threat-analyzer")
async def threat_analyzer_page() -> any:  # type: ignore
    return await render_template(
        "threat_analyzer.html", default_feeds=THREAT_ANALYZER_EXAMPLE
    )


@main_bp.get("/risk-calculator")
async def risk_calculator_page() -> any:  # type: ignore
    return await render_template(
        "risk_calculator.html", levels=[lv.value for lv in Level], matrix=risk_matrix()
    )


@main_bp.get("/security-advisor")
async def security_advisor_page() -> any:  # type: ignore
    return await render_template(
        "security_advisor.html",
        default_current=SECURITY_ADVISOR_EXAMPLE_CURRENT,
        default_desired=SECURITY_ADVISOR_EXAMPLE_DESIRED,
    )


@main_bp.get("/reporting")
async def reporting_page() -> any:  # type: ignore
    return await render_template("reporting.html")


@main_bp.get("/health")
async def health():
    cfg = current_app.extensions["service_configs"]
    simulator = current_app.extensions["monitoring"]
    return jsonify(
        {
            "status": "ok",
            "time": utc_now_iso(),
            "llm_model": cfg.llm_model,
            "llm_configured": bool(cfg.llm_api_key),
            "monitoring": simulator.status(),
        }
    ), 200
