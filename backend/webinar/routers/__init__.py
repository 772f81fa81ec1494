"""
API Routers module.
"""
from webinar.routers import health, registration

__all__ = ["health", "registration"]
