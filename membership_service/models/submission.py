"""
Request-scoped values - Membership Service
Nothing here is persisted; every instance lives for one request.
"""

from dataclasses import dataclass, field
from typing import Optional

GIFT_CARD = "Gift Card"


@dataclass(frozen=True)
class ProofImage:
    content: bytes
    mimetype: str
    filename: str


@dataclass(frozen=True)
class MembershipSubmission:
    email: str
    plan: str
    payment_method: str
    transaction_id: str
    gift_card_pin: Optional[str] = None
    proof_image: Optional[ProofImage] = None

    @classmethod
    def from_form(cls, form, proof_image=None):
        """
        Build a submission from the form fields of a multipart or url-encoded body.

        Every value is stripped of surrounding whitespace before validation, so
        " fan@example.com " is accepted as "fan@example.com". A blank PIN becomes None.
        """
        return cls(
            email=(form.get("email") or "").strip(),
            plan=(form.get("plan") or "").strip(),
            payment_method=(form.get("paymentMethod") or "").strip(),
            transaction_id=(form.get("transactionId") or "").strip(),
            gift_card_pin=(form.get("giftCardPin") or "").strip() or None,
            proof_image=proof_image,
        )

    @property
    def is_gift_card(self):
        return self.payment_method == GIFT_CARD

    @property
    def has_image(self):
        return self.proof_image is not None


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: str
    subject: str
    html_body: str
    attachments: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class DispatchOutcome:
    customer_sent: bool = False
    admin_sent: bool = False

    def to_dict(self):
        return {
            "emailSent": self.customer_sent,
            "adminNotified": self.admin_sent,
        }
