# cyberguard/services/reporting/report.py
from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, BeforeValidator, Field

from cyberguard.models.models import ModelDB
from cyberguard.models.schemas import NonBlankStr
from cyberguard.utils.logger import get_logger
from .catalog import (
    CATEGORY_ASSET_TYPES,
    HARDWARE,
    INFORMATION_RESOURCE,
    OTHER_THREAT,
    SOFTWARE,
    THREAT_CATALOG,
    asset_options,
    default_threat,
    first_available_asset,
    ics_tool_label,
)

logger = get_logger(__name__)

REPORT_TITLE = "CyberGuard security profile report"

ImplementationStatus = Literal[
    "Implemented", "Not implemented", "Partially implemented", "Not applicable"
]


def _level_as_str(value: Any) -> Any:
    # level boleh dikirim sebagai angka (2) atau string ("2")
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


ImplementationLevel = Annotated[Literal["1", "2", "3", "4"], BeforeValidator(_level_as_str)]

# slot aset di entri ancaman (nama field) per kategori
ASSET_SLOTS: Dict[str, str] = {
    SOFTWARE: "software",
    HARDWARE: "hardware",
    INFORMATION_RESOURCE: "information_resource",
}


class ThreatEntry(BaseModel):
    threat: NonBlankStr
    identifier: Optional[str] = None
    vulnerability: NonBlankStr
    ttp: NonBlankStr
    implementation_status: Optional[ImplementationStatus] = None
    implementation_level: Optional[ImplementationLevel] = None
    software: Optional[str] = "-"
    hardware: Optional[str] = "-"
    information_resource: Optional[str] = "-"
    ics_tool: Optional[str] = "-"
    comment: Optional[str] = ""


class TargetProfile(BaseModel):
    identifiers: List[NonBlankStr] = Field(min_length=1)
    implementation_level: Optional[ImplementationLevel] = None
    applies_to_software: bool = False
    applies_to_hardware: bool = False
    applies_to_information_resource: bool = False
    applies_to_ics_tool: bool = False


class ReportForm(BaseModel):
    current_profile: List[ThreatEntry] = Field(min_length=1)
    target_profile: TargetProfile


class ThreatDefaultsIn(BaseModel):
    threat: NonBlankStr
    entry: Dict[str, Any] = Field(default_factory=dict)


# ====================================
# Opsi aset dari registry
# ====================================
async def asset_options_by_category(db: ModelDB) -> Dict[str, List[str]]:
    """Opsi dropdown aset per kategori laporan, diambil dari registry aset."""
    assets = await db.list_assets()
    return {
        category: asset_options(a.name for a in assets if a.type == asset_type)
        for category, asset_type in CATEGORY_ASSET_TYPES.items()
    }


def apply_threat_defaults(
    entry: Dict[str, Any], threat: str, options: Dict[str, List[str]]
) -> Dict[str, Any]:
    """Fill an entry's identifier, vulnerability, TTP and asset slots from the catalogue.

    For a catalogued threat, each asset slot becomes the first registry asset
    of its category when the threat affects that category, otherwise ``"-"``.
    For the manual "Other" threat the user picks the assets, so only empty
    slots are reset to ``"-"``.  Unknown threats leave the entry untouched.
    """
    detail = THREAT_CATALOG.get(threat)
    result = dict(entry)
    result["threat"] = threat
    if detail is None:
        return result

    result["identifier"] = detail.identifier
    result["vulnerability"] = detail.vulnerability
    result["ttp"] = detail.ttp

    if threat == OTHER_THREAT:
        for slot in ASSET_SLOTS.values():
            if not result.get(slot):
                result[slot] = "-"
    elif detail.affected:
        for category, slot in ASSET_SLOTS.items():
            result[slot] = (
                first_available_asset(options.get(category, []))
                if category in detail.affected
                else "-"
            )
    return result


def default_entry(options: Dict[str, List[str]]) -> Dict[str, Any]:
    entry = {
        "implementation_status": "Implemented",
        "implementation_level": "3",
        "software": "-",
        "hardware": "-",
        "information_resource": "-",
        "ics_tool": "-",
        "comment": "",
    }
    return apply_threat_defaults(entry, default_threat(), options)


def default_target_profile() -> Dict[str, Any]:
    return TargetProfile(
        identifiers=["ID.AM-3.Target"],
        implementation_level="4",
        applies_to_software=True,
        applies_to_hardware=True,
        applies_to_information_resource=True,
        applies_to_ics_tool=True,
    ).model_dump()


# ====================================
# Build laporan
# ====================================
def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_report(form: ReportForm, *, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    target = form.target_profile
    identifiers = ", ".join(target.identifiers)

    rows = [
        {
            "threat": e.threat,
            "vulnerability": e.vulnerability,
            "ttp": e.ttp,
            "identifier": e.identifier or "",
            "software": e.software or "-",
            "hardware": e.hardware or "-",
            "information_resource": e.information_resource or "-",
            "ics_tool": ics_tool_label(e.ics_tool),
            "implementation_status": e.implementation_status or "",
            "implementation_level": e.implementation_level or "",
            "comment": e.comment or "",
        }
        for e in form.current_profile
    ]

    report = {
        "title": REPORT_TITLE,
        "date": today.isoformat(),
        "document_title": f"CyberGuard_Report_{today.isoformat()}",
        "current_profile": rows,
        "target_profile": {
            "identifiers": identifiers,
            "implementation_level": target.implementation_level or "",
            "applies_to_software": _yes_no(target.applies_to_software),
            "applies_to_hardware": _yes_no(target.applies_to_hardware),
            "applies_to_information_resource": _yes_no(target.applies_to_information_resource),
            "applies_to_ics_tool": _yes_no(target.applies_to_ics_tool),
        },
        "recommendations_hint": (
            f"To achieve identifier(s) [{identifiers}]:\n"
            "- Implement/improve the following ICS tools: [list of tools]\n"
            "- Eliminate/minimize the following threats: [threats from the current "
            "profile that do not meet the targets]\n"
            "- Apply additional controls to assets: [list of assets and controls]"
        ),
    }
    logger.info(
        "Laporan dibuat | threats=%d identifiers=%s", len(rows), identifiers
    )
    return report


def summarize_profiles(form: ReportForm) -> Tuple[str, str]:
    """Render both profiles as text for the gap analyzer flow."""
    lines: List[str] = []
    for i, e in enumerate(form.current_profile, start=1):
        lines.append(f"Threat {i}: {e.threat}")
        lines.append(f"  Identifier: {e.identifier or 'N/A'}")
        lines.append(f"  Vulnerability: {e.vulnerability}")
        lines.append(f"  Attacker actions (TTP): {e.ttp}")
        lines.append(
            f"  Assets: software={e.software or '-'}, hardware={e.hardware or '-'}, "
            f"information resource={e.information_resource or '-'}"
        )
        lines.append(f"  ICS tool: {ics_tool_label(e.ics_tool)}")
        lines.append(
            f"  Implementation: status={e.implementation_status or 'unknown'}, "
            f"level={e.implementation_level or 'unknown'}"
        )
        if e.comment:
            lines.append(f"  Comment: {e.comment}")
    current = "\n".join(lines)

    t = form.target_profile
    applies = [
        name
        for name, flag in (
            ("software", t.applies_to_software),
            ("hardware", t.applies_to_hardware),
            ("information resources", t.applies_to_information_resource),
            ("ICS tools", t.applies_to_ics_tool),
        )
        if flag
    ]
    target = "\n".join(
        [
            f"Target identifiers: {', '.join(t.identifiers)}",
            f"Desired implementation level: {t.implementation_level or 'unspecified'}",
            f"Applies to: {', '.join(applies) or 'none'}",
        ]
    )
    return current, target
