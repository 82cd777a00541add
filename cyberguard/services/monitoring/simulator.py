# cyberguard/services/monitoring/simulator.py
from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from enum import Enum
from itertools import count
from typing import Any, Callable, Dict, Iterator, List, Optional

from cyberguard.utils.helper import utc_now
from cyberguard.utils.logger import get_logger


logger = get_logger(__name__)


class RiskPresence(str, Enum):
    RISK_DETECTED = "Risk detected"
    NO_RISKS = "No risks detected"
    ASSET_UNKNOWN = "Asset not identified"


class AccessAction(str, Enum):
    LOGIN = "Login"
    LOGOUT = "Logout"
    ACCESS_ATTEMPT = "Access attempt"
    CONFIG_CHANGE = "Configuration change"


class AccessStatus(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


EVENT_FIREWALL_BLOCK = "Firewall block"
EVENT_LOGIN_ATTEMPT = "Login attempt"
EVENT_SYSTEM_UPDATE = "System update"
EVENT_DATA_LEAK = "Data leak detected"
EVENT_MALWARE = "Malware detected"

EVENT_TYPES = [
    EVENT_FIREWALL_BLOCK,
    EVENT_LOGIN_ATTEMPT,
    EVENT_SYSTEM_UPDATE,
    EVENT_DATA_LEAK,
    EVENT_MALWARE,
]

MOCK_ASSET_NAMES = [
    "File server Alpha",
    "Database Gamma",
    "Domain controller Epsilon",
    "SCADA PLC-101",
    "Web portal Omega",
    "VPN gateway Zeta",
    "IPS system Delta",
]
MOCK_USER_NAMES = ["admin_01", "operator_scada", "dev_user", "guest_network", "support_it"]

# peluang event terkait aset yang dikenal, lalu peluang aset itu berisiko
RELATED_ASSET_THRESHOLD = 0.3
RISK_DETECTED_THRESHOLD = 0.4
EVENT_WINDOW_SECS = 60.0
ACCESS_LOG_ID_OFFSET = 100000


@dataclass
class NetworkEvent:
    id: str
    timestamp: datetime
    type: str
    source_ip: str
    destination_ip: str
    details: str
    risk_presence: RiskPresence
    related_asset: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["risk_presence"] = self.risk_presence.value
        return data


@dataclass
class AssetAccessLog:
    id: str
    timestamp: datetime
    user_name: str
    asset_name: str
    action: AccessAction
    status: AccessStatus
    ip_address: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["action"] = self.action.value
        data["status"] = self.status.value
        return data


# =====================================
# Generator
# =====================================
def random_ip(rng: random.Random) -> str:
    return ".".join(str(rng.randrange(256)) for _ in range(4))


def generate_network_event(
    event_id: str,
    rng: random.Random,
    now: Callable[[], datetime] = utc_now,
) -> NetworkEvent:
    event_type = rng.choice(EVENT_TYPES)

    related_asset: Optional[str] = None
    if rng.random() > RELATED_ASSET_THRESHOLD:
        related_asset = rng.choice(MOCK_ASSET_NAMES)
        risk_presence = (
            RiskPresence.RISK_DETECTED
            if rng.random() > RISK_DETECTED_THRESHOLD
            else RiskPresence.NO_RISKS
        )
    else:
        risk_presence = RiskPresence.ASSET_UNKNOWN

    details = f"Simulated event: {event_type}."
    if related_asset:
        details += f" Related asset: {related_asset}."

    return NetworkEvent(
        id=event_id,
        timestamp=now() - timedelta(seconds=rng.random() * EVENT_WINDOW_SECS),
        type=event_type,
        source_ip="N/A" if event_type == EVENT_SYSTEM_UPDATE else random_ip(rng),
        destination_ip=random_ip(rng),
        details=details,
        risk_presence=risk_presence,
        related_asset=related_asset,
    )


def generate_access_log(
    log_id: str,
    rng: random.Random,
    now: Callable[[], datetime] = utc_now,
) -> AssetAccessLog:
    return AssetAccessLog(
        id=log_id,
        timestamp=now() - timedelta(seconds=rng.random() * EVENT_WINDOW_SECS),
        user_name=rng.choice(MOCK_USER_NAMES),
        asset_name=rng.choice(MOCK_ASSET_NAMES),
        action=rng.choice(list(AccessAction)),
        status=rng.choice(list(AccessStatus)),
        ip_address=random_ip(rng),
    )


def _newest_first(items: List[Any]) -> List[Any]:
    return sorted(items, key=lambda it: it.timestamp, reverse=True)


# =====================================
# Feed (state in-memory)
# =====================================
class MonitoringFeed:
    """Two bounded, newest-first feeds of simulated monitoring data."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        now: Callable[[], datetime] = utc_now,
        max_events: int = 100,
        max_access_logs: int = 50,
    ):
        if max_events < 1 or max_access_logs < 1:
            raise ValueError("feed capacity must be at least 1")
        self.rng = rng or random.Random()
        self.now = now
        self.max_events = max_events
        self.max_access_logs = max_access_logs

        base = int(now().timestamp() * 1000)
        self._event_ids: Iterator[int] = count(base)
        self._log_ids: Iterator[int] = count(base + ACCESS_LOG_ID_OFFSET)
        self.events: List[NetworkEvent] = []
        self.access_logs: List[AssetAccessLog] = []

    def seed(self, n_events: int = 20, n_access_logs: int = 15) -> None:
        events = [self._new_event() for _ in range(n_events)]
        logs = [self._new_access_log() for _ in range(n_access_logs)]
        self.events = _newest_first(events)[: self.max_events]
        self.access_logs = _newest_first(logs)[: self.max_access_logs]

    def _new_event(self) -> NetworkEvent:
        return generate_network_event(str(next(self._event_ids)), self.rng, self.now)

    def _new_access_log(self) -> AssetAccessLog:
        return generate_access_log(str(next(self._log_ids)), self.rng, self.now)

    def tick_events(self) -> NetworkEvent:
        event = self._new_event()
        self.events = _newest_first([event, *self.events[: self.max_events - 1]])
        return event

    def tick_access_logs(self) -> AssetAccessLog:
        log = self._new_access_log()
        self.access_logs = _newest_first([log, *self.access_logs[: self.max_access_logs - 1]])
        return log

    def summary(self) -> Dict[str, int]:
        counts = {rp.value: 0 for rp in RiskPresence}
        for event in self.events:
            counts[event.risk_presence.value] += 1
        return counts


# =====================================
# Simulator (background loop)
# =====================================
class MonitoringSimulator:
    """
    Menjalankan tick feed secara periodik di event loop Quart.
    Simulasi aktif secara default; pause/resume hanya mengubah flag.
    """

    def __init__(
        self,
        feed: MonitoringFeed,
        *,
        event_interval: float = 3.0,
        access_log_interval: float = 4.5,
    ):
        self.feed = feed
        self.event_interval = float(event_interval)
        self.access_log_interval = float(access_log_interval)
        self.is_simulating = True
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def pause(self) -> None:
        self.is_simulating = False
        logger.info("Simulasi monitoring dijeda")

    def resume(self) -> None:
        self.is_simulating = True
        logger.info("Simulasi monitoring dilanjutkan")

    def toggle(self) -> bool:
        if self.is_simulating:
            self.pause()
        else:
            self.resume()
        return self.is_simulating

    def status(self) -> Dict[str, Any]:
        return {
            "is_simulating": self.is_simulating,
            "running": self.running,
            "event_interval_secs": self.event_interval,
            "access_log_interval_secs": self.access_log_interval,
            "events": len(self.feed.events),
            "access_logs": len(self.feed.access_logs),
        }

    async def _loop(self, interval: float, tick: Callable[[], Any]) -> None:
        while True:
            await asyncio.sleep(interval)
            if not self.is_simulating:
                continue
            try:
                tick()
            except Exception:
                logger.exception(
                    "Tick monitoring gagal (%s), lanjut ke tick berikutnya",
                    getattr(tick, "__name__", "tick"),
                )

    async def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._loop(self.event_interval, self.feed.tick_events)),
            asyncio.create_task(
                self._loop(self.access_log_interval, self.feed.tick_access_logs)
            ),
        ]
        logger.info(
            "Simulasi monitoring dimulai (event=%.1fs, access_log=%.1fs)",
            self.event_interval,
            self.access_log_interval,
        )

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks = []
        logger.info("Simulasi monitoring dihentikan")
