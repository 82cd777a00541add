import pytest

from cyberguard.services.risk.calculator import (
    Level,
    RiskAssessmentIn,
    RiskLevel,
    assess,
    calculate_risk,
    risk_matrix,
)


@pytest.mark.parametrize(
    "likelihood, impact, expected",
    [
        ("High", "High", "Critical"),
        ("Medium", "High", "High"),
        ("Low", "High", "Medium"),
        ("High", "Medium", "High"),
        ("Medium", "Medium", "Medium"),
        ("Low", "Medium", "Low"),
        ("High", "Low", "Medium"),
        ("Medium", "Low", "Low"),
        ("Low", "Low", "Low"),
    ],
)
def test_calculate_risk_table(likelihood: str, impact: str, expected: str) -> None:
    assert calculate_risk(likelihood, impact) == RiskLevel(expected)


def test_every_pair_maps_to_a_risk_level() -> None:
    results = {calculate_risk(lk, im) for lk in Level for im in Level}
    assert results == set(RiskLevel)


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_risk("Extreme", "Low")


def test_assess_adds_label() -> None:
    out = assess(
        RiskAssessmentIn(
            asset_name="Database Gamma",
            vulnerability="SQL injection",
            likelihood=Level.HIGH,
            impact=Level.HIGH,
        )
    )
    assert out.risk_level is RiskLevel.CRITICAL
    assert out.label == "Critical risk"
    assert out.asset_name == "Database Gamma"


def test_risk_matrix_rows_are_impacts() -> None:
    matrix = risk_matrix()
    assert list(matrix) == ["High", "Medium", "Low"]
    assert matrix["High"]["High"] == "Critical"
    assert matrix["Low"]["Medium"] == "Low"


async def test_calculate_endpoint(client) -> None:
    response = await client.post(
        "/api/risk/calculate",
        json={
            "asset_name": "VPN gateway Zeta",
            "vulnerability": "Outdated firmware",
            "likelihood": "Medium",
            "impact": "High",
        },
    )
    assert response.status_code == 200
    data = await response.get_json()
    assert data["risk_level"] == "High"
    assert data["label"] == "High risk"


async def test_calculate_endpoint_rejects_blank_asset(client) -> None:
    response = await client.post(
        "/api/risk/calculate",
        json={"asset_name": "  ", "vulnerability": "x", "likelihood": "Low", "impact": "Low"},
    )
    assert response.status_code == 400
    data = await response.get_json()
    assert data["status"] == "error"


async def test_calculate_endpoint_rejects_unknown_level(client) -> None:
    response = await client.post(
        "/api/risk/calculate",
        json={"asset_name": "a", "vulnerability": "b", "likelihood": "Extreme", "impact": "Low"},
    )
    assert response.status_code == 400
