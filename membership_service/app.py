"""
Membership Service - Flask application
Accepts membership purchases and sends the customer confirmation and the
admin notification emails. Nothing is stored.
"""

import logging

from dotenv import load_dotenv
from flasgger import Swagger
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from membership_service.config import Settings
from membership_service.extensions import DISPATCHER, RATE_LIMITER, SETTINGS, cors
from membership_service.ratelimit import FixedWindowRateLimiter
from membership_service.services import NotificationDispatcher, build_transport
from membership_service.services.uploads import max_content_length

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("membership_service").setLevel(level)


def create_app(settings=None, transport=None):
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()

    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = max_content_length(settings.max_upload_bytes)

    # Initialize Extensions
    cors.init_app(app, origins=list(settings.cors_allowed_origins))
    Swagger(app)

    app.extensions[SETTINGS] = settings
    app.extensions[DISPATCHER] = NotificationDispatcher(
        settings,
        transport if transport is not None else build_transport(settings),
    )
    app.extensions[RATE_LIMITER] = FixedWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    # Register Blueprints
    from membership_service.routes.membership import membership_bp
    app.register_blueprint(membership_bp, url_prefix="/api")

    from membership_service.routes.health import health_bp
    app.register_blueprint(health_bp, url_prefix="/api")

    register_error_handlers(app)

    logger.info("From email: %s", settings.from_email or "(not configured)")
    logger.info("Admin email: %s", settings.admin_email or "(not configured)")
    logger.info("Mail transport: %s, environment: %s", settings.mail_transport, settings.app_env)
    return app


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error: %s", e)
        return jsonify({"success": False, "error": "Internal server error"}), 500


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.extensions[SETTINGS].port)
