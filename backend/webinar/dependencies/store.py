"""
Dependencies exposing startup state to routes.
"""
from fastapi import Request

from webinar.config import Settings
from webinar.services.registration_service import RegistrationService


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_registration_service(request: Request) -> RegistrationService:
    """Dependency to get a RegistrationService bound to the open store."""
    return RegistrationService(request.app.state.registrations)
