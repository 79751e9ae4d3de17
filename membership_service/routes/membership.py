"""
Membership Routes
Handles POST /api/membership and POST /api/test-email
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from membership_service.exceptions import MembershipError, RateLimitExceeded
from membership_service.extensions import DISPATCHER, RATE_LIMITER, SETTINGS
from membership_service.models import MembershipSubmission, lookup_plan
from membership_service.services.uploads import read_form
from membership_service.services.validation import validate_submission

logger = logging.getLogger(__name__)

membership_bp = Blueprint("membership", __name__)


def _error(exc):
    response = jsonify(exc.to_dict())
    response.status_code = exc.status_code
    if isinstance(exc, RateLimitExceeded):
        response.headers["Retry-After"] = str(exc.retry_after)
    return response


@membership_bp.before_request
def apply_rate_limit():
    if request.endpoint != "membership.create_membership":
        return None
    limiter = current_app.extensions[RATE_LIMITER]
    try:
        limiter.hit(request.remote_addr or "unknown")
    except RateLimitExceeded as exc:
        return _error(exc)
    return None


@membership_bp.route("/membership", methods=["POST"])
def create_membership():
    """
    Submit a membership purchase
    ---
    tags:
      - Membership
    consumes:
      - multipart/form-data
      - application/x-www-form-urlencoded
    parameters:
      - in: formData
        name: email
        type: string
        required: true
      - in: formData
        name: plan
        type: string
        required: true
        description: bronze, silver or gold (case-insensitive)
      - in: formData
        name: paymentMethod
        type: string
        required: true
      - in: formData
        name: transactionId
        type: string
        required: true
      - in: formData
        name: giftCardPin
        type: string
        description: 4-8 digits, checked for Gift Card payments
      - in: formData
        name: giftCardImage
        type: file
        description: JPEG, PNG or GIF, max 5MB
    responses:
      200:
        description: Confirmation sent, admin notification attempted
      400:
        description: Missing or invalid fields, or rejected upload
      429:
        description: Too many requests from this client
      500:
        description: Confirmation email could not be sent
    """
    settings = current_app.extensions[SETTINGS]
    dispatcher = current_app.extensions[DISPATCHER]

    try:
        form, proof_image = read_form(request, settings.max_upload_bytes)
        submission = validate_submission(
            MembershipSubmission.from_form(form, proof_image=proof_image)
        )
        plan = lookup_plan(submission.plan)
        outcome = dispatcher.dispatch(submission, plan)
    except MembershipError as exc:
        logger.info("Membership submission failed (%s): %s", exc.status_code, exc.message)
        return _error(exc)

    return jsonify({
        "success": True,
        "message": "Membership processed successfully",
        "data": {**plan.to_dict(), **outcome.to_dict()},
    }), 200


@membership_bp.route("/test-email", methods=["POST"])
def send_test_email():
    """
    Send a test message to the configured admin address
    ---
    tags:
      - Diagnostics
    responses:
      200:
        description: Test email sent
      500:
        description: Mail transport error
    """
    dispatcher = current_app.extensions[DISPATCHER]
    try:
        message = dispatcher.send_test_email()
    except Exception as e:
        logger.error("Test email failed: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({"success": True, "message": f"Test email sent to {message.to}"}), 200
