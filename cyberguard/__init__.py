# cyberguard/__init__.py
from __future__ import annotations

import os
from quart import Quart
from quart_schema import QuartSchema, RequestSchemaValidationError

from .config import ServiceConfigs, get_config
from .utils.logger import get_logger
from .utils.helper import response_error_toast
from .extensions import init_extensions, shutdown_extensions
from .routes.main import main_bp
from .routes.assets import assets_bp
from .routes.monitoring import monitoring_bp
from .routes.risk import risk_bp
from .routes.advisor import advisor_bp
from .routes.reporting import reporting_bp


async def create_app(
    config_object: object | None = None,
    service_configs: ServiceConfigs | None = None,
) -> Quart:
    """Application factory for the CyberGuard Quart app.

    Args:
        config_object: Optional explicit configuration class.  If not
            provided, the value of the ``APP_ENV`` environment variable
            is used to determine which configuration class to load via
            :func:`get_config`.  See :mod:`cyberguard.config` for details.
        service_configs: Optional :class:`ServiceConfigs` instance; built
            from the environment when omitted.

    Returns:
        A fully configured :class:`quart.Quart` application instance.
    """

    app = Quart(__name__, instance_relative_config=True)

    QuartSchema(app)

    env = os.environ.get("APP_ENV", "default")
    if config_object:
        app.config.from_object(config_object)
    else:
        app.config.from_object(get_config(env))

    # Inisialisasi logger global
    logger = get_logger("quart.app")
    logger.info(f"Starting CyberGuard app in {app.config['ENV']} mode")

    # Inisialisasi semua extension async (DB, LLM, monitoring)
    await init_extensions(app, service_configs)
    logger.info("Extensions initialized successfully")

    @app.before_serving
    async def _start_monitoring():
        if app.config.get("MONITORING_AUTOSTART", True):
            await app.extensions["monitoring"].start()

    @app.after_serving
    async def _cleanup():
        await shutdown_extensions(app)
        logger.info("Extensions shutdown successfully")

    @app.errorhandler(RequestSchemaValidationError)
    async def _validation_error(error: RequestSchemaValidationError):
        return response_error_toast(
            status="error", message=str(error.validation_error), http_status=400
        )

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(assets_bp, url_prefix="/api/assets")
    app.register_blueprint(monitoring_bp, url_prefix="/api/monitoring")
    app.register_blueprint(risk_bp, url_prefix="/api/risk")
    app.register_blueprint(advisor_bp, url_prefix="/api/ai")
    app.register_blueprint(reporting_bp, url_prefix="/api/reports")
    logger.info("Blueprints registered")

    return app
