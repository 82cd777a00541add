# cyberguard/routes/reporting.py
from __future__ import annotations

from quart import Blueprint, current_app, jsonify, render_template
from quart_schema import validate_request

from cyberguard.utils.logger import get_logger
from cyberguard.services.reporting.catalog import (
    ICS_TOOL_OPTIONS,
    IMPLEMENTATION_LEVELS,
    IMPLEMENTATION_STATUSES,
    THREAT_CATALOG,
    threat_options,
)
from cyberguard.services.reporting.report import (
    ReportForm,
    ThreatDefaultsIn,
    apply_threat_defaults,
    asset_options_by_category,
    build_report,
    default_entry,
    default_target_profile,
    summarize_profiles,
)
from cyberguard.services.flows.gap_analyzer import GapAnalysisInput, analyze_security_gaps
from .advisor import run_flow_safely


logger = get_logger(__name__)
reporting_bp = Blueprint("reporting", __name__)


@reporting_bp.get("/catalog")
async def catalog():
    return jsonify(
        {
            "threats": [
                {
                    "name": name,
                    "identifier": THREAT_CATALOG[name].identifier,
                    "vulnerability": THREAT_CATALOG[name].vulnerability,
                    "ttp": THREAT_CATALOG[name].ttp,
                    "affected": list(THREAT_CATALOG[name].affected),
                }
                for name in threat_options()
            ],
            "ics_tools": ICS_TOOL_OPTIONS,
            "implementation_statuses": list(IMPLEMENTATION_STATUSES),
            "implementation_levels": list(IMPLEMENTATION_LEVELS),
        }
    )


@reporting_bp.get("/asset-options")
async def asset_options():
    options = await asset_options_by_category(current_app.extensions["db"])
    return jsonify(options)


@reporting_bp.get("/defaults")
async def defaults():
    """Isian awal form laporan: satu ancaman default + profil target default."""
    options = await asset_options_by_category(current_app.extensions["db"])
    return jsonify(
        {
            "current_profile": [default_entry(options)],
            "target_profile": default_target_profile(),
        }
    )


@reporting_bp.post("/threat-defaults")
@validate_request(ThreatDefaultsIn)
async def threat_defaults(data: ThreatDefaultsIn):
    options = await asset_options_by_category(current_app.extensions["db"])
    return jsonify(apply_threat_defaults(data.entry, data.threat, options))


@reporting_bp.post("/")
@validate_request(ReportForm)
async def generate_report(data: ReportForm):
    return jsonify(build_report(data)), 200


@reporting_bp.post("/print")
@validate_request(ReportForm)
async def print_report(data: ReportForm):
    return await render_template("report.html", report=build_report(data))


@reporting_bp.post("/gap-analysis")
@validate_request(ReportForm)
async def report_gap_analysis(data: ReportForm):
    """Jalankan gap analyzer dari profil saat ini vs target di form laporan."""
    current, target = summarize_profiles(data)
    flow_input = GapAnalysisInput(
        current_profile_summary=current, target_profile_summary=target
    )
    return await run_flow_safely(
        "gap_analyzer",
        lambda: analyze_security_gaps(current_app.extensions["llm"], flow_input),
        "An unknown error occurred during gap analysis.",
    )
