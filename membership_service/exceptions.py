"""
Exceptions - Membership Service
Client errors (validation, upload) map to 400, dispatch failures to 500.
"""

from enum import Enum


class MembershipError(Exception):
    """Base class for errors raised while handling a membership submission."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"success": False, "error": self.message}


class ConfigError(RuntimeError):
    """Raised when process configuration is missing or invalid."""


# --- Validation ----------------------------------------------------------

class ValidationReason(Enum):
    MISSING_FIELDS = "Missing required fields"
    INVALID_EMAIL = "Invalid email format"
    INVALID_GIFT_CARD_PIN = "Gift card PIN must be 4-8 digits"


class ValidationError(MembershipError):
    status_code = 400

    def __init__(self, reason):
        super().__init__(reason.value)
        self.reason = reason


# --- Upload --------------------------------------------------------------

class UploadError(MembershipError):
    status_code = 400

    def __init__(self, message="File upload error"):
        super().__init__(message)


class FileTooLarge(UploadError):
    def __init__(self, max_bytes):
        max_mb = max_bytes // (1024 * 1024)
        super().__init__(f"Image file too large (max {max_mb}MB)")
        self.max_bytes = max_bytes


class UnsupportedFileType(UploadError):
    def __init__(self, mimetype):
        super().__init__("Only JPEG, PNG, or GIF images are allowed")
        self.mimetype = mimetype


# --- Dispatch ------------------------------------------------------------

class MailTransportError(RuntimeError):
    """Raised by a mail transport when a message could not be delivered."""


class DispatchError(MembershipError):
    status_code = 500


class CustomerDispatchError(DispatchError):
    def __init__(self, message="Failed to send confirmation email"):
        super().__init__(message)


class AdminDispatchError(DispatchError):
    def __init__(self, message="Failed to send admin notification"):
        super().__init__(message)


# --- Rate limiting -------------------------------------------------------

class RateLimitExceeded(MembershipError):
    status_code = 429

    def __init__(self, retry_after,
                 message="Too many requests from this IP, please try again later."):
        super().__init__(message)
        self.retry_after = retry_after
