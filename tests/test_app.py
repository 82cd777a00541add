import pytest

from cyberguard.config import TestingConfig, get_config


async def test_health(client) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    data = await response.get_json()
    assert data["status"] == "ok"
    assert data["llm_configured"] is True
    assert data["monitoring"]["events"] == 20


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "/assets",
        "/monitoring",
        "/threat-analyzer",
        "/risk-calculator",
        "/security-advisor",
        "/reporting",
    ],
)
async def test_pages_render(client, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 200
    body = await response.get_data(as_text=True)
    assert "CyberGuard" in body


async def test_dashboard_links_every_feature(client) -> None:
    body = await (await client.get("/")).get_data(as_text=True)
    for href in ("/assets", "/monitoring", "/threat-analyzer", "/risk-calculator",
                 "/security-advisor", "/reporting"):
        assert f'href="{href}"' in body


def test_get_config() -> None:
    assert get_config("testing") is TestingConfig
    assert get_config("unknown").ENV == "development"


async def test_assets_page_offers_edit_and_delete(client) -> None:
    body = await (await client.get("/assets")).get_data(as_text=True)
    for action in ("edit", "delete", "weakness", "edit-weakness", "delete-weakness"):
        assert f'data-act="{action}"' in body
    assert '"PATCH"' in body
    assert "Critical" in body


async def test_reporting_page_builds_form_controls(client) -> None:
    body = await (await client.get("/reporting")).get_data(as_text=True)
    for element_id in ("entries", "add-threat", "identifiers", "add-identifier", "target-level"):
        assert f'id="{element_id}"' in body
    for flag in ("applies_to_software", "applies_to_hardware",
                 "applies_to_information_resource", "applies_to_ics_tool"):
        assert f'data-flag="{flag}"' in body
    assert "<textarea" not in body
