"""
Flask Application Factory

Creates and configures the Flask application.
"""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from tashkentforecast.config import get_config
from tashkentforecast.api.routes import register_routes
from tashkentforecast.logging_config import setup_logging, get_logger
from tashkentforecast.service import AnalysisService

logger = get_logger(__name__)


def create_app(test_config=None, service: Optional[AnalysisService] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        test_config: Optional test configuration dict.
        service: Analysis service to serve. A service fetching the
            configured sheet is created if omitted.

    Returns:
        Configured Flask application.
    """
    config = get_config()

    setup_logging()

    app = Flask(__name__)
    app.config["DEBUG"] = config.api.debug
    # Keep Cyrillic labels readable and class order as aggregated
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    app.config["ANALYSIS_SERVICE"] = service or AnalysisService()

    if test_config:
        app.config.update(test_config)

    CORS(app)
    register_routes(app)

    logger.info("Flask app created")
    return app


def run_server(host: str = None, port: int = None, debug: bool = None, refresh: bool = True):
    """Run the Flask development server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        debug: Enable debug mode.
        refresh: Load the sheet before serving.
    """
    config = get_config()

    host = host or config.api.host
    port = port or config.api.port
    debug = debug if debug is not None else config.api.debug

    app = create_app()

    if refresh:
        state = app.config["ANALYSIS_SERVICE"].refresh()
        logger.info("Initial refresh finished: %s", state.value)

    logger.info("Starting server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
