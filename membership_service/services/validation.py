"""
Request Validator - Membership Service
Rules run in order and the first failure wins:
    1. required fields present
    2. email looks like local@domain.tld
    3. gift card PIN (when given for a Gift Card payment) is 4-8 digits
"""

import re

from membership_service.exceptions import ValidationError, ValidationReason

# Syntactic sanity check only, not RFC 5322.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
GIFT_CARD_PIN_PATTERN = re.compile(r"[0-9]{4,8}")


def check_submission(submission):
    """Return the first rule the submission breaks, or None when it is valid."""
    required = (
        submission.email,
        submission.plan,
        submission.payment_method,
        submission.transaction_id,
    )
    if not all(required):
        return ValidationReason.MISSING_FIELDS

    if not EMAIL_PATTERN.fullmatch(submission.email):
        return ValidationReason.INVALID_EMAIL

    if submission.is_gift_card and submission.gift_card_pin:
        if not GIFT_CARD_PIN_PATTERN.fullmatch(submission.gift_card_pin):
            return ValidationReason.INVALID_GIFT_CARD_PIN

    return None


def validate_submission(submission):
    reason = check_submission(submission)
    if reason is not None:
        raise ValidationError(reason)
    return submission
