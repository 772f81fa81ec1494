"""
Dependencies for dependency injection in routes.
"""
from webinar.dependencies.store import get_settings, get_registration_service

__all__ = [
    "get_settings",
    "get_registration_service",
]
