from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from membership_service.extensions import SETTINGS

SERVICE_NAME = "Simone Susinna Membership API"

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health():
    """
    Health check endpoint
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is up, with the configured sender and admin addresses
    """
    settings = current_app.extensions[SETTINGS]
    return jsonify({
        "status": "healthy",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.app_env,
        "emailConfig": {
            "fromEmail": settings.from_email,
            "adminEmail": settings.admin_email,
            "transport": settings.mail_transport,
        },
    }), 200
