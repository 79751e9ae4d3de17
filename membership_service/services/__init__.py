from membership_service.services.dispatcher import NotificationDispatcher
from membership_service.services.mail_transport import build_transport
from membership_service.services.validation import check_submission, validate_submission

__all__ = [
    "NotificationDispatcher",
    "build_transport",
    "check_submission",
    "validate_submission",
]
