# cyberguard/extensions.py
from __future__ import annotations

from quart import Quart

from .config import ServiceConfigs
from .utils.logger import get_logger
from .models.models import ModelDB
from .services.llm_chain.llm_chains import LLMChains
from .services.monitoring.simulator import MonitoringFeed, MonitoringSimulator


async def init_extensions(app: Quart, service_configs: ServiceConfigs | None = None) -> None:
    """Initialise all asynchronous extensions and attach them to the app.

    This should be called once when the application starts.  The
    resulting objects are stored on ``app.extensions`` for later use:
    ``service_configs``, ``db``, ``llm``, ``monitoring_feed`` and
    ``monitoring``.
    """

    logger = get_logger(__name__)

    # Load service configuration from environment (via pydantic)
    service_configs = service_configs or ServiceConfigs()
    app.extensions["service_configs"] = service_configs
    logger.info(f"ServiceConfigs loaded: LLM model = {service_configs.llm_model}")

    # LLM client; key kosong tidak fatal, flow akan gagal dengan pesan ke user
    if not service_configs.llm_api_key:
        logger.warning("LLM_API_KEY kosong. Flow AI akan gagal sampai key di-set di .env.")
    app.extensions["llm"] = LLMChains.from_configs(service_configs)

    # Initialise Models Database (registry aset)
    models_db = ModelDB(app.config["SQLALCHEMY_DATABASE_URI"])
    await models_db.init_models()
    app.extensions["db"] = models_db

    # Feed monitoring (in-memory) + simulator
    feed = MonitoringFeed(
        max_events=service_configs.max_network_events,
        max_access_logs=service_configs.max_access_logs,
    )
    feed.seed(
        service_configs.initial_network_events, service_configs.initial_access_logs
    )
    app.extensions["monitoring_feed"] = feed
    app.extensions["monitoring"] = MonitoringSimulator(
        feed,
        event_interval=service_configs.event_interval_secs,
        access_log_interval=service_configs.access_log_interval_secs,
    )
    logger.info(
        "Monitoring feed seeded (events=%d, access_logs=%d)",
        len(feed.events),
        len(feed.access_logs),
    )


async def shutdown_extensions(app: Quart) -> None:
    """Clean up all asynchronous extensions on application shutdown."""
    logger = get_logger(__name__)

    simulator: MonitoringSimulator | None = app.extensions.get("monitoring")
    if simulator:
        await simulator.stop()

    db: ModelDB | None = app.extensions.get("db")
    if db:
        await db.dispose()
        logger.info("ModelDB disposed")
