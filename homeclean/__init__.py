# homeclean/__init__.py
"""
Flask app factory.

- Creates and configures the Flask instance.
- Loads settings from the environment (homeclean.settings).
- Sets up JSON logging.
- Builds the MongoDB handle, the mailer and the notification queue.
- Registers blueprints (bookings/quotes/notifications/health).
"""

from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from homeclean.settings import load_settings
from homeclean.logging import configure_logging, get_logger
from homeclean.db import Database
from homeclean.mail import Mailer
from homeclean.models import EmailLogRepository
from homeclean.notifier import Notifier


def create_app(
    config_name: str | None = None,
    *,
    database: Database | None = None,
    mailer: Mailer | None = None,
    overrides: dict | None = None,
) -> Flask:
    app = Flask(__name__)

    # 1) Config
    settings = load_settings(config_name)
    app.config.update(settings)
    if overrides:
        app.config.update(overrides)

    # 2) Logging
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    log = get_logger(__name__)
    log.info("app.init", extra={"env": app.config.get("CONFIG_NAME", "dev")})

    # 3) MongoDB (connection is verified lazily on first request)
    db = database or Database.from_settings(app.config)
    app.config["DATABASE"] = db

    # 4) Mailer + fire-and-forget queue
    app.config["MAILER"] = mailer or Mailer.from_settings(app.config, EmailLogRepository(db))
    app.config["NOTIFIER"] = Notifier(app.config.get("NOTIFY_QUEUE_SIZE", 100))

    # 5) Blueprints
    from homeclean.blueprints.bookings import bookings
    from homeclean.blueprints.quotes import quotes
    from homeclean.blueprints.notifications import notifications
    from homeclean.blueprints.health import health

    app.register_blueprint(bookings)
    app.register_blueprint(quotes)
    app.register_blueprint(notifications)
    app.register_blueprint(health)

    # 6) Every answer is JSON, including framework errors
    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        log.exception("app.unhandled_error", extra={"error": str(e)})
        return jsonify({"error": "Internal server error"}), 500

    return app
