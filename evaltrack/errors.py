"""
Domain errors

Core modules raise these; the HTTP layer renders them as
{"error": message} with the matching status code.
"""


class EvalTrackError(Exception):
    """Base class for errors that terminate a request"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(EvalTrackError):
    """No authenticated campus on the request"""
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Forbidden(EvalTrackError):
    """Authenticated, but the target belongs to another campus"""
    status_code = 403

    def __init__(self, message: str = "Forbidden - Session belongs to another campus."):
        super().__init__(message)


class NotFound(EvalTrackError):
    status_code = 404


class ValidationError(EvalTrackError):
    """Missing or invalid required field"""
    status_code = 400


class StorageError(EvalTrackError):
    """The document could not be written"""
    status_code = 500
