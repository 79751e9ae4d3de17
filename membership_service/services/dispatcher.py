"""
Notification Dispatcher - Membership Service
Sends the two emails for a validated submission, strictly in order:
    1. customer confirmation (mandatory, failure aborts the request)
    2. admin notification   (best-effort, failure is logged and absorbed)
"""

import logging
from datetime import datetime

from membership_service.exceptions import (
    AdminDispatchError,
    CustomerDispatchError,
)
from membership_service.models import Attachment, DispatchOutcome, EmailMessage
from membership_service.services import email_templates

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, settings, transport, clock=datetime.now):
        self.settings = settings
        self.transport = transport
        self.clock = clock

    # --- Message builders -----------------------------------------------

    def build_customer_message(self, submission, plan):
        html = email_templates.render_customer_email(
            plan,
            submission.payment_method,
            submission.transaction_id,
            club_name=self.settings.sender_name,
            portal_url=self.settings.portal_url,
            now=self.clock(),
        )
        return EmailMessage(
            sender=self.settings.from_header,
            to=submission.email,
            subject=email_templates.customer_subject(plan),
            html_body=html,
        )

    def build_admin_message(self, submission, plan):
        html = email_templates.render_admin_email(
            plan,
            submission,
            club_name=self.settings.sender_name,
            now=self.clock(),
        )
        attachments = ()
        image = submission.proof_image
        if image is not None:
            attachments = (
                Attachment(
                    filename=email_templates.proof_attachment_name(
                        submission.transaction_id, image.filename
                    ),
                    content=image.content,
                    content_type=image.mimetype,
                ),
            )
        return EmailMessage(
            sender=self.settings.from_header,
            to=self.settings.admin_email,
            subject=email_templates.admin_subject(plan, submission),
            html_body=html,
            attachments=attachments,
        )

    def build_test_message(self):
        return EmailMessage(
            sender=self.settings.from_header,
            to=self.settings.admin_email,
            subject="🧪 Test Email - Admin Notifications",
            html_body=email_templates.render_test_email(
                club_name=self.settings.sender_name,
                now=self.clock(),
            ),
        )

    # --- Sending --------------------------------------------------------

    def send_customer_confirmation(self, submission, plan):
        try:
            self.transport.send(self.build_customer_message(submission, plan))
        except Exception as exc:
            logger.error("Failed to send customer email to %s: %s", submission.email, exc)
            raise CustomerDispatchError() from exc
        logger.info("Customer email sent to %s", submission.email)

    def send_admin_notification(self, submission, plan):
        try:
            self.transport.send(self.build_admin_message(submission, plan))
        except Exception as exc:
            raise AdminDispatchError(str(exc)) from exc
        logger.info("Admin notification sent to %s", self.settings.admin_email)

    def dispatch(self, submission, plan):
        """
        Returns a DispatchOutcome. Raises CustomerDispatchError when the
        confirmation could not be sent; the admin email is then never tried.
        """
        if not plan.is_known:
            logger.warning(
                "Unrecognized plan %r for transaction %s, sending generic membership emails",
                submission.plan,
                submission.transaction_id,
            )

        self.send_customer_confirmation(submission, plan)

        admin_sent = True
        try:
            self.send_admin_notification(submission, plan)
        except AdminDispatchError as exc:
            admin_sent = False
            logger.warning(
                "Failed to send admin email for transaction %s, continuing without it: %s",
                submission.transaction_id,
                exc.message,
                exc_info=True,
            )

        outcome = DispatchOutcome(customer_sent=True, admin_sent=admin_sent)
        logger.info(
            "Membership transaction processed: email=%s plan=%s payment_method=%s "
            "transaction_id=%s has_image=%s emails_sent=%s",
            submission.email,
            plan.display_name,
            submission.payment_method,
            submission.transaction_id,
            submission.has_image,
            outcome.to_dict(),
        )
        return outcome

    def send_test_email(self):
        message = self.build_test_message()
        self.transport.send(message)
        logger.info("Test email sent to %s", message.to)
        return message
