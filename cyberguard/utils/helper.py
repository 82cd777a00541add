# cyberguard/utils/helper.py
from __future__ import annotations

from datetime import datetime, timezone
from quart import jsonify


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso(timespec: str = "seconds") -> str:
    """Waktu UTC dalam ISO-8601 (contoh: 2025-08-17T01:55:12+00:00)."""
    return utc_now().isoformat(timespec=timespec)


def response_error_toast(status: str, message: str, http_status: int = 500):
    """Response JSON untuk banner/toast error di halaman.

    Args:
        status (str): warning | error
        message (str): pesan untuk user.
        http_status (int, optional): HTTP status code. Defaults to 500.
    """
    return jsonify(
        {"status": status, "message": message, "time": utc_now_iso()}
    ), http_status
