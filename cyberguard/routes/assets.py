"""
Asset registry blueprint.

CRUD over assets and their weaknesses, mounted under ``/api/assets``.
Request bodies are validated by quart-schema; unknown ids return 404.
"""

from __future__ import annotations

from quart import Blueprint, current_app, jsonify, request
from quart_schema import validate_request

from cyberguard.utils.logger import get_logger
from cyberguard.utils.helper import response_error_toast
from cyberguard.models.models import AssetNotFound, ModelDB, WeaknessNotFound
from cyberguard.models.schemas import (
    DISPLAY_CATEGORIES,
    AssetIn,
    AssetType,
    AssetUpdate,
    WeaknessIn,
    WeaknessUpdate,
)


logger = get_logger(__name__)
assets_bp = Blueprint("assets", __name__)


def _db() -> ModelDB:
    return current_app.extensions["db"]


@assets_bp.errorhandler(AssetNotFound)
@assets_bp.errorhandler(WeaknessNotFound)
async def _not_found(error: LookupError):
    return response_error_toast(status="error", message=str(error), http_status=404)


@assets_bp.get("/categories")
async def categories():
    return jsonify(
        {
            "categories": {label: t.value for label, t in DISPLAY_CATEGORIES.items()},
            "types": [t.value for t in AssetType],
        }
    )


@assets_bp.get("/")
async def list_assets():
    raw_type = request.args.get("type")
    asset_type = None
    if raw_type:
        # boleh pakai label kategori ("Information resources") atau tipe ("Information")
        asset_type = DISPLAY_CATEGORIES.get(raw_type)
        if asset_type is None:
            try:
                asset_type = AssetType(raw_type)
            except ValueError:
                return response_error_toast(
                    status="error", message=f"Unknown asset type: {raw_type}", http_status=400
                )
    assets = await _db().list_assets(asset_type)
    return jsonify([a.model_dump(mode="json") for a in assets])


@assets_bp.post("/")
@validate_request(AssetIn)
async def create_asset(data: AssetIn):
    asset = await _db().create_asset(data)
    return jsonify(asset.model_dump(mode="json")), 201


@assets_bp.get("/<int:asset_id>")
async def get_asset(asset_id: int):
    asset = await _db().get_asset(asset_id)
    return jsonify(asset.model_dump(mode="json"))


@assets_bp.patch("/<int:asset_id>")
@validate_request(AssetUpdate)
async def update_asset(asset_id: int, data: AssetUpdate):
    asset = await _db().update_asset(asset_id, data)
    return jsonify(asset.model_dump(mode="json"))


@assets_bp.delete("/<int:asset_id>")
async def delete_asset(asset_id: int):
    await _db().delete_asset(asset_id)
    return "", 204


@assets_bp.post("/<int:asset_id>/weaknesses")
@validate_request(WeaknessIn)
async def add_weakness(asset_id: int, data: WeaknessIn):
    weakness = await _db().add_weakness(asset_id, data)
    return jsonify(weakness.model_dump(mode="json")), 201


@assets_bp.patch("/<int:asset_id>/weaknesses/<int:weakness_id>")
@validate_request(WeaknessUpdate)
async def update_weakness(asset_id: int, weakness_id: int, data: WeaknessUpdate):
    weakness = await _db().update_weakness(asset_id, weakness_id, data)
    return jsonify(weakness.model_dump(mode="json"))


@assets_bp.delete("/<int:asset_id>/weaknesses/<int:weakness_id>")
async def delete_weakness(asset_id: int, weakness_id: int):
    await _db().delete_weakness(asset_id, weakness_id)
    return "", 204
