"""
Service layer for business logic.
"""
from webinar.services.registration_service import RegistrationService

__all__ = [
    "RegistrationService",
]
