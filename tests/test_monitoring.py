import asyncio
import random
from datetime import datetime, timedelta, timezone

import pytest

from cyberguard.services.monitoring.simulator import (
    ACCESS_LOG_ID_OFFSET,
    EVENT_SYSTEM_UPDATE,
    EVENT_TYPES,
    MOCK_ASSET_NAMES,
    MonitoringFeed,
    MonitoringSimulator,
    RiskPresence,
    generate_network_event,
)


FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def fixed_now() -> datetime:
    return FIXED_NOW


def make_feed(seed: int = 7, **kwargs) -> MonitoringFeed:
    return MonitoringFeed(rng=random.Random(seed), now=fixed_now, **kwargs)


def test_generated_events_are_consistent() -> None:
    rng = random.Random(42)
    for i in range(500):
        event = generate_network_event(str(i), rng, fixed_now)
        assert FIXED_NOW - timedelta(seconds=60) <= event.timestamp <= FIXED_NOW
        if event.type == EVENT_SYSTEM_UPDATE:
            assert event.source_ip == "N/A"
        else:
            assert len(event.source_ip.split(".")) == 4
        if event.related_asset is None:
            assert event.risk_presence is RiskPresence.ASSET_UNKNOWN
        else:
            assert event.related_asset in MOCK_ASSET_NAMES
            assert event.risk_presence is not RiskPresence.ASSET_UNKNOWN
            assert event.related_asset in event.details


def test_same_seed_gives_same_feed() -> None:
    first, second = make_feed(3), make_feed(3)
    first.seed(10, 5)
    second.seed(10, 5)
    assert [e.to_dict() for e in first.events] == [e.to_dict() for e in second.events]
    assert [log.to_dict() for log in first.access_logs] == [
        log.to_dict() for log in second.access_logs
    ]


def test_seed_sorts_newest_first_and_offsets_log_ids() -> None:
    feed = make_feed()
    feed.seed(20, 15)
    assert len(feed.events) == 20
    assert len(feed.access_logs) == 15

    stamps = [e.timestamp for e in feed.events]
    assert stamps == sorted(stamps, reverse=True)

    base = int(FIXED_NOW.timestamp() * 1000)
    assert {int(e.id) for e in feed.events} == set(range(base, base + 20))
    log_ids = {int(log.id) for log in feed.access_logs}
    assert min(log_ids) == base + ACCESS_LOG_ID_OFFSET


def test_ticks_respect_capacity() -> None:
    feed = make_feed(max_events=5, max_access_logs=3)
    feed.seed(3, 3)
    for _ in range(10):
        feed.tick_events()
        feed.tick_access_logs()

    assert len(feed.events) == 5
    assert len(feed.access_logs) == 3
    assert len({e.id for e in feed.events}) == 5
    stamps = [e.timestamp for e in feed.events]
    assert stamps == sorted(stamps, reverse=True)


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        make_feed(max_events=0)


def test_summary_counts_every_event() -> None:
    feed = make_feed()
    feed.seed(30, 0)
    summary = feed.summary()
    assert set(summary) == {rp.value for rp in RiskPresence}
    assert sum(summary.values()) == 30


def test_event_to_dict_is_json_ready() -> None:
    event = generate_network_event("1", random.Random(1), fixed_now)
    data = event.to_dict()
    assert isinstance(data["timestamp"], str)
    assert data["risk_presence"] in {rp.value for rp in RiskPresence}


def test_toggle_flips_state() -> None:
    simulator = MonitoringSimulator(make_feed())
    assert simulator.is_simulating is True
    assert simulator.toggle() is False
    assert simulator.toggle() is True


async def test_simulator_ticks_only_while_simulating() -> None:
    feed = MonitoringFeed(rng=random.Random(5))
    simulator = MonitoringSimulator(feed, event_interval=0.01, access_log_interval=0.01)
    await simulator.start()
    try:
        assert simulator.running
        await asyncio.sleep(0.1)
        assert len(feed.events) > 0

        simulator.pause()
        await asyncio.sleep(0.02)
        paused_count = len(feed.events)
        await asyncio.sleep(0.1)
        assert len(feed.events) == paused_count
    finally:
        await simulator.stop()
    assert not simulator.running


async def test_feed_endpoints(client) -> None:
    response = await client.get("/api/monitoring/events")
    events = await response.get_json()
    assert len(events) == 20
    assert {"id", "timestamp", "type", "source_ip", "destination_ip", "risk_presence"} <= set(
        events[0]
    )

    response = await client.get("/api/monitoring/events?limit=5")
    assert len(await response.get_json()) == 5

    response = await client.get("/api/monitoring/access-logs")
    assert len(await response.get_json()) == 15

    response = await client.get("/api/monitoring/summary")
    assert sum((await response.get_json()).values()) == 20


async def test_pause_resume_toggle_endpoints(client) -> None:
    response = await client.get("/api/monitoring/status")
    status = await response.get_json()
    assert status["is_simulating"] is True
    assert status["running"] is False

    response = await client.post("/api/monitoring/pause")
    assert (await response.get_json())["is_simulating"] is False

    response = await client.post("/api/monitoring/resume")
    assert (await response.get_json())["is_simulating"] is True

    response = await client.post("/api/monitoring/toggle")
    assert (await response.get_json())["is_simulating"] is False


def test_generator_probabilities() -> None:
    rng = random.Random(2024)
    events = [generate_network_event(str(i), rng, fixed_now) for i in range(20000)]

    related = [e for e in events if e.related_asset is not None]
    risky = [e for e in related if e.risk_presence is RiskPresence.RISK_DETECTED]
    assert len(related) / len(events) == pytest.approx(0.7, abs=0.02)
    assert len(risky) / len(related) == pytest.approx(0.6, abs=0.02)
    assert {e.type for e in events} == set(EVENT_TYPES)


async def test_failing_tick_does_not_stop_simulator() -> None:
    feed = MonitoringFeed(rng=random.Random(9))
    real_tick = feed.tick_events
    calls = {"n": 0}

    def flaky_tick():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("sensor offline")
        return real_tick()

    feed.tick_events = flaky_tick  # type: ignore[method-assign]
    simulator = MonitoringSimulator(feed, event_interval=0.01, access_log_interval=10)
    await simulator.start()
    try:
        await asyncio.sleep(0.1)
        assert calls["n"] > 1
        assert len(feed.events) > 0
        assert simulator.running
    finally:
        await simulator.stop()
