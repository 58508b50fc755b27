"""
utils/errors.py
-----------------
Error kinds raised by the store, identity and upload layers.
Views catch AdminError and show str(error) to the admin as-is.
"""


class AdminError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(AdminError):
    """A required field is missing or malformed. Raised before any remote call."""
    status_code = 400


class AuthorizationError(AdminError):
    """Bad credentials, a non allow-listed email, or an invalid session."""
    status_code = 401


class NotFoundError(AdminError):
    status_code = 404


class RemoteServiceError(AdminError):
    """Database, identity or image host failure. Carries the remote message."""
    status_code = 502
