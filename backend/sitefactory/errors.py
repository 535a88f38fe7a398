# backend/sitefactory/errors.py
"""Application exception types.

Every error carries the HTTP status it is rendered with by the exception
handler registered in ``sitefactory.main``.
"""


class SiteFactoryError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(SiteFactoryError):
    """Malformed or missing input"""
    status_code = 400


class NotFoundError(SiteFactoryError):
    """No row matches the requested id"""
    status_code = 404


class RateLimitError(SiteFactoryError):
    status_code = 429

    def __init__(self, message: str, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class UpstreamError(SiteFactoryError):
    """Third-party API unreachable or answered with a non-success status"""
    status_code = 502


class ConfigurationError(SiteFactoryError):
    """A required credential or setting is missing"""
    status_code = 500


class InternalError(SiteFactoryError):
    status_code = 500


class StoreError(InternalError):
    """Storage backend failure; the message is safe to show to clients"""


class MigrationError(Exception):
    """A schema migration failed and was rolled back"""

    def __init__(self, name: str, cause: Exception) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Migration {name} failed: {cause}")


__all__ = [
    "SiteFactoryError",
    "ValidationError",
    "NotFoundError",
    "RateLimitError",
    "UpstreamError",
    "ConfigurationError",
    "InternalError",
    "StoreError",
    "MigrationError",
]
