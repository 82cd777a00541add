"""
Qualitative risk calculator.

A simplified SCAP-like scoring: the likelihood that a vulnerability is
exploited and the impact on the asset, each rated Low/Medium/High, map
to one of four risk levels through a fixed 3×3 table.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple
from pydantic import BaseModel

from cyberguard.models.schemas import NonBlankStr


class Level(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# (impact, likelihood) -> risk
RISK_MATRIX: Dict[Tuple[Level, Level], RiskLevel] = {
    (Level.HIGH, Level.HIGH): RiskLevel.CRITICAL,
    (Level.HIGH, Level.MEDIUM): RiskLevel.HIGH,
    (Level.HIGH, Level.LOW): RiskLevel.MEDIUM,
    (Level.MEDIUM, Level.HIGH): RiskLevel.HIGH,
    (Level.MEDIUM, Level.MEDIUM): RiskLevel.MEDIUM,
    (Level.MEDIUM, Level.LOW): RiskLevel.LOW,
    (Level.LOW, Level.HIGH): RiskLevel.MEDIUM,
    (Level.LOW, Level.MEDIUM): RiskLevel.LOW,
    (Level.LOW, Level.LOW): RiskLevel.LOW,
}

RISK_LABELS: Dict[RiskLevel, str] = {
    RiskLevel.LOW: "Low risk",
    RiskLevel.MEDIUM: "Medium risk",
    RiskLevel.HIGH: "High risk",
    RiskLevel.CRITICAL: "Critical risk",
}


class RiskAssessmentIn(BaseModel):
    asset_name: NonBlankStr
    vulnerability: NonBlankStr
    likelihood: Level
    impact: Level


class RiskAssessmentOut(RiskAssessmentIn):
    risk_level: RiskLevel
    label: str


def calculate_risk(likelihood: Level | str, impact: Level | str) -> RiskLevel:
    """Look up the risk level for a (likelihood, impact) pair.

    Raises:
        ValueError: if either value is not one of Low/Medium/High.
    """
    return RISK_MATRIX[(Level(impact), Level(likelihood))]


def assess(data: RiskAssessmentIn) -> RiskAssessmentOut:
    risk = calculate_risk(data.likelihood, data.impact)
    return RiskAssessmentOut(**data.model_dump(), risk_level=risk, label=RISK_LABELS[risk])


def risk_matrix() -> Dict[str, Dict[str, str]]:
    """The full table as ``{impact: {likelihood: risk}}`` for display."""
    return {
        impact.value: {
            likelihood.value: RISK_MATRIX[(impact, likelihood)].value
            for likelihood in Level
        }
        for impact in reversed(list(Level))
    }
