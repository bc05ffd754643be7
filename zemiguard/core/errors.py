"""
Error taxonomy shared by policies, the gateway and the transports
"""

from enum import Enum
from typing import Dict, Type

from fastapi import status


class ErrorKind(str, Enum):
    AUTHENTICATION_REQUIRED = "authentication_required"
    NOT_AUTHORIZED = "not_authorized"
    INVALID_STATE_TRANSITION = "invalid_state_transition"
    IMMUTABLE_FIELD_VIOLATION = "immutable_field_violation"
    UNIQUENESS_VIOLATION = "uniqueness_violation"


class AuthorizationError(Exception):
    """Base class for errors raised when a decision is turned into an exception"""
    kind: ErrorKind = ErrorKind.NOT_AUTHORIZED
    status_code: int = status.HTTP_403_FORBIDDEN
    default_detail: str = "Operation not permitted"

    def __init__(self, detail: str = ""):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationRequired(AuthorizationError):
    kind = ErrorKind.AUTHENTICATION_REQUIRED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class NotAuthorized(AuthorizationError):
    kind = ErrorKind.NOT_AUTHORIZED
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Operation not permitted"


class InvalidStateTransition(AuthorizationError):
    kind = ErrorKind.INVALID_STATE_TRANSITION
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Invalid state transition"


class ImmutableFieldViolation(AuthorizationError):
    kind = ErrorKind.IMMUTABLE_FIELD_VIOLATION
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Attempt to change an immutable field"


class UniquenessViolation(AuthorizationError):
    kind = ErrorKind.UNIQUENESS_VIOLATION
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class InvalidDecisionRequest(ValueError):
    """Raised for malformed requests (missing or invalid snapshots); never a denial"""


ERRORS_BY_KIND: Dict[ErrorKind, Type[AuthorizationError]] = {
    ErrorKind.AUTHENTICATION_REQUIRED: AuthenticationRequired,
    ErrorKind.NOT_AUTHORIZED: NotAuthorized,
    ErrorKind.INVALID_STATE_TRANSITION: InvalidStateTransition,
    ErrorKind.IMMUTABLE_FIELD_VIOLATION: ImmutableFieldViolation,
    ErrorKind.UNIQUENESS_VIOLATION: UniquenessViolation,
}


def error_for(kind: ErrorKind, detail: str = "") -> AuthorizationError:
    return ERRORS_BY_KIND[kind](detail)
