"""
Error types for scene

Every error raised by the admission, payment and analytics code derives from
SceneError and carries the HTTP status code it is rendered with.
"""


class SceneError(Exception):
    """Base exception for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_dict(self):
        return {'success': False, 'error': self.message}


class ValidationFailure(SceneError):
    """Invalid request data"""
    status_code = 400


class AuthenticationFailure(SceneError):
    """Invalid credentials"""
    status_code = 401


class Forbidden(SceneError):
    """Access denied"""
    status_code = 403


class NotFound(SceneError):
    """Resource not found"""
    status_code = 404


class CapacityExceeded(SceneError):
    """Event is full"""
    status_code = 409


class InvalidTransition(SceneError):
    """Attendee status does not allow this change"""
    status_code = 409


class Conflict(SceneError):
    """Resource already exists"""
    status_code = 409


class DependencyUnavailable(SceneError):
    """Feature not available"""
    status_code = 503


class GatewayFailure(SceneError):
    """External service request failed"""
    status_code = 502
