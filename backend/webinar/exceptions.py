"""
Exception types raised by the webinar registration backend.
"""


class WebinarError(Exception):
    """Base class for application errors."""


class ConfigurationError(WebinarError):
    """Raised when the document store cannot be configured."""


class ServiceBindingError(ConfigurationError):
    """Raised when the platform service-binding descriptor is unusable."""


class StoreUnavailableError(WebinarError):
    """Raised when a registration is attempted without an open store."""

    def __init__(self, message: str = "Registration store is not available"):
        super().__init__(message)
