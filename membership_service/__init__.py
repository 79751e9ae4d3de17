"""Membership purchase backend: validation and notification email dispatch."""

from membership_service.app import create_app

__all__ = ["create_app"]
