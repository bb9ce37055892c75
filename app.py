"""
Flask main application: serves the RHK Engine API.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from loguru import logger

from RHKEngine.flask_interface import initialize_report_engine, report_bp
from RHKEngine.utils.config import Settings, settings


def setup_logging(config: Settings):
    """stdout sink plus a rotating log file."""
    Path(config.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=config.LOG_LEVEL,
    )
    logger.add(
        config.LOG_FILE,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
    )


def create_app(config: Optional[Settings] = None, agent=None) -> Flask:
    """
    Build the Flask application and initialize the RHK Engine.

    Args:
        config: settings; module-level `settings` when omitted.
        agent: prebuilt ReportAgent (tests).
    """
    config = config or settings
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('FLASK_SECRET_KEY', 'smart-rhk-local')

    app.register_blueprint(report_bp, url_prefix='/api/report')
    if not initialize_report_engine(agent, config):
        logger.error("RHK Engine failed to initialize, API routes will answer 500")

    @app.route('/')
    def index():
        return jsonify({
            'success': True,
            'service': 'smart-rhk',
            'api': '/api/report',
        })

    return app


if __name__ == '__main__':
    setup_logging(settings)
    application = create_app(settings)
    logger.info(f"Flask server started at http://{settings.HOST}:{settings.PORT}")
    try:
        application.run(host=settings.HOST, port=settings.PORT, debug=False)
    except KeyboardInterrupt:
        logger.info("shutting down")
