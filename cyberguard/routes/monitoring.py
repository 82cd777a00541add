# cyberguard/routes/monitoring.py
from __future__ import annotations

from quart import Blueprint, current_app, jsonify, request

from cyberguard.utils.logger import get_logger
from cyberguard.services.monitoring.simulator import MonitoringFeed, MonitoringSimulator


logger = get_logger(__name__)
monitoring_bp = Blueprint("monitoring", __name__)


def _feed() -> MonitoringFeed:
    return current_app.extensions["monitoring_feed"]


def _simulator() -> MonitoringSimulator:
    return current_app.extensions["monitoring"]


def _limit(default: int) -> int:
    try:
        return max(0, int(request.args.get("limit", default)))
    except ValueError:
        return default


@monitoring_bp.get("/events")
async def network_events():
    feed = _feed()
    events = feed.events[: _limit(feed.max_events)]
    return jsonify([e.to_dict() for e in events])


@monitoring_bp.get("/access-logs")
async def access_logs():
    feed = _feed()
    logs = feed.access_logs[: _limit(feed.max_access_logs)]
    return jsonify([log.to_dict() for log in logs])


@monitoring_bp.get("/summary")
async def summary():
    return jsonify(_feed().summary())


@monitoring_bp.get("/status")
async def status():
    return jsonify(_simulator().status())


@monitoring_bp.post("/pause")
async def pause():
    _simulator().pause()
    return jsonify(_simulator().status())


@monitoring_bp.post("/resume")
async def resume():
    _simulator().resume()
    return jsonify(_simulator().status())


@monitoring_bp.post("/toggle")
async def toggle():
    _simulator().toggle()
    return jsonify(_simulator().status())
