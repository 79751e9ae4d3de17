from membership_service.models.plan import Plan, PlanDetails, lookup_plan
from membership_service.models.submission import (
    Attachment,
    DispatchOutcome,
    EmailMessage,
    MembershipSubmission,
    ProofImage,
)

__all__ = [
    "Attachment",
    "DispatchOutcome",
    "EmailMessage",
    "MembershipSubmission",
    "Plan",
    "PlanDetails",
    "ProofImage",
    "lookup_plan",
]
