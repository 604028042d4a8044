"""
Application Errors
Domain failures that map onto HTTP status codes
"""


class AppError(Exception):
    """Base class for expected, user-visible failures"""
    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self):
        payload = {'message': self.message}
        if self.errors:
            payload['errors'] = self.errors
        return payload


class ValidationError(AppError):
    """Request payload failed validation"""
    status_code = 400


class NotFoundError(AppError):
    """Form or response does not exist (or is not published)"""
    status_code = 404


class ConflictError(AppError):
    """Submission rejected because it would duplicate an existing one"""
    status_code = 409
