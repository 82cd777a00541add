"""
Static catalogues used by the security profile report.

The threat catalogue maps each threat to its asset-management identifier
(ID.AM-x), the exploited vulnerability, the attacker's likely actions
(TTP) and the asset categories it affects.  The ICS catalogue lists the
information-security tool families a control can be implemented with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from cyberguard.models.schemas import AssetType


SOFTWARE = "software"
HARDWARE = "hardware"
INFORMATION_RESOURCE = "information_resource"

# kategori slot aset di laporan → tipe aset di registry
CATEGORY_ASSET_TYPES: Dict[str, AssetType] = {
    SOFTWARE: AssetType.SOFTWARE,
    HARDWARE: AssetType.HARDWARE,
    INFORMATION_RESOURCE: AssetType.INFORMATION,
}

OTHER_THREAT = "Other threat (requires manual description)"
BASE_ASSET_OPTIONS: Tuple[str, ...] = ("-", "Other")

IMPLEMENTATION_STATUSES = (
    "Implemented",
    "Not implemented",
    "Partially implemented",
    "Not applicable",
)
IMPLEMENTATION_LEVELS = ("1", "2", "3", "4")


@dataclass(frozen=True)
class ThreatDetail:
    identifier: str
    vulnerability: str
    ttp: str
    affected: Tuple[str, ...] = field(default_factory=tuple)


THREAT_CATALOG: Dict[str, ThreatDetail] = {
    "Infection of workstations or servers, loss of control over the system": ThreatDetail(
        "ID.AM-2",
        "Attack via malicious attachments",
        "Opening an attachment, infecting systems with malware",
        (SOFTWARE, HARDWARE),
    ),
    "Unauthorized code execution, data theft, website disruption": ThreatDetail(
        "ID.AM-2",
        "Use of a vulnerable CMS component",
        "Exploiting the vulnerability, running malicious code",
        (SOFTWARE,),
    ),
    "Loss of confidential information, reputational and financial damage": ThreatDetail(
        "ID.AM-3",
        "Data leak",
        "Unauthorized access, copying, transfer of information",
        (INFORMATION_RESOURCE,),
    ),
    "Unauthorized access to systems and services via stolen passwords": ThreatDetail(
        "ID.AM-3",
        "Passwords stored in plain text",
        "Theft or leak of passwords",
        (INFORMATION_RESOURCE, SOFTWARE),
    ),
    "Integrity violation, data leak, system sabotage due to insufficient access control": ThreatDetail(
        "ID.AM-3",
        "Insufficient access control",
        "Unauthorized login, substitution of user rights",
        (INFORMATION_RESOURCE, SOFTWARE, HARDWARE),
    ),
    "Legal issues, loss of control over CRM due to licensing": ThreatDetail(
        "ID.AM-2",
        "Unprotected CRM licensing",
        "Theft of license keys, use of pirated copies",
        (SOFTWARE,),
    ),
    "Theft of personal data, broken authentication via access to the user database": ThreatDetail(
        "ID.AM-3",
        "Unauthorized access to the user database",
        "Theft or modification of user data",
        (INFORMATION_RESOURCE,),
    ),
    "Unauthorized access, system compromise via authentication bypass": ThreatDetail(
        "ID.AM-2",
        "Authentication bypass",
        "Using vulnerabilities to bypass identity verification",
        (SOFTWARE,),
    ),
    "Increased incident risk, insider threats due to policy violations": ThreatDetail(
        "ID.AM-5",
        "Security policy violation",
        "Unauthorized changes, ignoring rules",
        (SOFTWARE, HARDWARE, INFORMATION_RESOURCE),
    ),
    "Information leak, credential compromise via social engineering": ThreatDetail(
        "ID.AM-5",
        "Social engineering",
        "Deceiving employees to gain access",
        (INFORMATION_RESOURCE,),
    ),
    "Credential theft, unauthorized access via phishing": ThreatDetail(
        "ID.AM-5",
        "Phishing",
        "Sending forged emails to obtain data",
        (INFORMATION_RESOURCE, SOFTWARE),
    ),
    "Compromise of user accounts, interference with CRM via phishing links": ThreatDetail(
        "ID.AM-2",
        "Phishing links in CRM",
        "Injecting malicious links into CRM",
        (SOFTWARE,),
    ),
    "System damage, data theft, denial of service via malware": ThreatDetail(
        "ID.AM-2",
        "Malicious software",
        "Installing and spreading malicious modules",
        (SOFTWARE, HARDWARE),
    ),
    "Service unavailability for users due to a DoS attack": ThreatDetail(
        "ID.AM-2",
        "DoS attack on the portal",
        "Overloading the server with requests",
        (SOFTWARE, HARDWARE),
    ),
    "Theft, modification or deletion of database data via SQL injection": ThreatDetail(
        "ID.AM-2",
        "SQL injection on the database server",
        "Injecting malicious SQL code",
        (SOFTWARE, INFORMATION_RESOURCE),
    ),
    "Failures, outages, integrity and confidentiality breaches via XSS": ThreatDetail(
        "ID.AM-2",
        "XSS in WordPress",
        "Injecting malicious JavaScript code",
        (SOFTWARE,),
    ),
    OTHER_THREAT: ThreatDetail(
        "N/A",
        "Describe the vulnerability...",
        "Describe possible attacker actions...",
    ),
}


ICS_TOOL_OPTIONS: List[Dict[str, str]] = [
    {"value": "-", "label": "-"},
    {"value": "Other ICS tool", "label": "Other ICS tool"},
    {
        "value": "Microsoft Active Directory, Okta",
        "label": "Identity and access management (IAM) (Microsoft Active Directory, Okta)",
    },
    {
        "value": "OpenSSL, Thales Luna HSM",
        "label": "Cryptographic tools (OpenSSL, Thales Luna HSM)",
    },
    {
        "value": "Kaspersky Endpoint Security, Symantec Endpoint Protection",
        "label": "Antivirus systems (Kaspersky Endpoint Security, Symantec Endpoint Protection)",
    },
    {
        "value": "Cisco ASA, Fortinet FortiGate, pfSense",
        "label": "Network firewalls (Cisco ASA, Fortinet FortiGate, pfSense)",
    },
    {
        "value": "Snort, Suricata",
        "label": "Intrusion detection and prevention systems (IDS/IPS) (Snort, Suricata)",
    },
    {
        "value": "Splunk, IBM QRadar, ELK Stack",
        "label": "Centralized logging systems (SIEM) (Splunk, IBM QRadar, ELK Stack)",
    },
    {
        "value": "Veeam Backup & Replication, Acronis True Image",
        "label": "Backup tools (Veeam Backup & Replication, Acronis True Image)",
    },
    {
        "value": "HID Global, Honeywell Access Control",
        "label": "Physical access control systems (HID Global, Honeywell Access Control)",
    },
    {
        "value": "Microsoft WSUS, ManageEngine Patch Manager",
        "label": "Patch management systems (Microsoft WSUS, ManageEngine Patch Manager)",
    },
]


def threat_options() -> List[str]:
    """Catalogued threats, alphabetical, with the manual "Other" entry last."""
    return sorted(THREAT_CATALOG, key=lambda name: (name == OTHER_THREAT, name))


def default_threat() -> str:
    return threat_options()[0]


def ics_tool_label(value: str | None) -> str:
    for opt in ICS_TOOL_OPTIONS:
        if opt["value"] == value:
            return opt["label"]
    return value or "-"


def asset_options(names: Iterable[str]) -> List[str]:
    """Base options ("-", "Other") first, then unique asset names alphabetically."""
    base = sorted(BASE_ASSET_OPTIONS)
    others = sorted({n for n in names if n and n not in BASE_ASSET_OPTIONS})
    return base + others


def first_available_asset(options: Iterable[str]) -> str:
    return next((opt for opt in options if opt not in BASE_ASSET_OPTIONS), "-")
