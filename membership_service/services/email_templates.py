"""
Email Templates - Membership Service
Pure renderers: every function takes plain values and returns a string.
Templates live in membership_service/templates/emails and are autoescaped,
so submitted values cannot inject markup into either email.
"""

import os
import re
from datetime import datetime

from jinja2 import Environment, PackageLoader, select_autoescape

DEFAULT_ATTACHMENT_EXTENSION = ".jpg"
UNSAFE_FILENAME_CHARS = re.compile(r"[\\/\x00-\x1f\x7f]")

_env = Environment(
    loader=PackageLoader("membership_service", "templates/emails"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_long_date(moment):
    """Monday, October 19, 2026"""
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


def format_timestamp(moment):
    """Monday, October 19, 2026 at 04:07 PM"""
    return f"{format_long_date(moment)} at {moment:%I:%M %p}"


def header_value(text):
    """Collapse whitespace, CR and LF included, so the value fits on one header line."""
    return " ".join(text.split())


def customer_subject(plan):
    return header_value(f"🎉 Your {plan.display_name} Confirmation")


def admin_subject(plan, submission):
    return header_value(
        f"⚠️ New {plan.display_name} Purchase "
        f"({submission.payment_method}) - {submission.email}"
    )


def render_customer_email(plan, payment_method, transaction_id, *,
                          club_name, portal_url, now=None):
    now = now or datetime.now()
    return _env.get_template("customer_confirmation.html").render(
        plan=plan,
        payment_method=payment_method,
        transaction_id=transaction_id,
        activation_date=format_long_date(now),
        year=now.year,
        club_name=club_name,
        portal_url=portal_url,
    )


def render_admin_email(plan, submission, *, club_name, now=None):
    """
    Admin alert for a processed submission.
    The gift card section and the "Action Required" banner only appear for
    Gift Card payments; the PIN is shown in full so it can be checked.
    """
    now = now or datetime.now()
    return _env.get_template("admin_notification.html").render(
        plan=plan,
        customer_email=submission.email,
        payment_method=submission.payment_method,
        transaction_id=submission.transaction_id,
        is_gift_card=submission.is_gift_card,
        gift_card_pin=submission.gift_card_pin or "N/A",
        has_image=submission.has_image,
        purchased_at=format_timestamp(now),
        club_name=club_name,
    )


def render_test_email(*, club_name, now=None):
    now = now or datetime.now()
    return _env.get_template("test_email.html").render(
        club_name=club_name,
        sent_at=format_timestamp(now),
    )


def proof_attachment_name(transaction_id, original_filename):
    """giftcard_<transaction id><original extension, .jpg when there is none>"""
    extension = os.path.splitext(original_filename or "")[1] or DEFAULT_ATTACHMENT_EXTENSION
    return UNSAFE_FILENAME_CHARS.sub("", f"giftcard_{transaction_id}{extension}")
