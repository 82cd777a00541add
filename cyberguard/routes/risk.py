# cyberguard/routes/risk.py
from __future__ import annotations

from quart import Blueprint, jsonify
from quart_schema import validate_request

from cyberguard.utils.logger import get_logger
from cyberguard.services.risk.calculator import RiskAssessmentIn, assess, risk_matrix


logger = get_logger(__name__)
risk_bp = Blueprint("risk", __name__)


@risk_bp.post("/calculate")
@validate_request(RiskAssessmentIn)
async def calculate(data: RiskAssessmentIn):
    """Compute the qualitative risk level for one asset/vulnerability pair."""
    result = assess(data)
    logger.info(
        "Risk dihitung | asset=%s likelihood=%s impact=%s risk=%s",
        data.asset_name,
        data.likelihood.value,
        data.impact.value,
        result.risk_level.value,
    )
    return jsonify(result.model_dump(mode="json"))


@risk_bp.get("/matrix")
async def matrix():
    return jsonify(risk_matrix())
