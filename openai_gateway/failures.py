"""Failure identification and classification for broker calls.

A caught exception is first reduced to a ``FailureKind`` and then looked up
in ``CLASSIFICATION``, the single table deciding which cause and which
category a caller observes.
"""

import logging
from enum import Enum

import httpx
import openai

from .errors import (
    CATEGORY_ERRORS,
    Category,
    CauseKind,
    FailureCause,
    InvalidFieldsError,
    OpenAIGatewayError,
)

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNPROCESSABLE = "unprocessable"
    LOCKED = "locked"
    TOO_MANY_REQUESTS = "too_many_requests"
    SERVER_ERROR = "server_error"
    URL_NOT_FOUND = "url_not_found"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


STATUS_FAILURE_KINDS: dict[int, FailureKind] = {
    400: FailureKind.BAD_REQUEST,
    401: FailureKind.UNAUTHORIZED,
    403: FailureKind.FORBIDDEN,
    404: FailureKind.NOT_FOUND,
    409: FailureKind.CONFLICT,
    422: FailureKind.UNPROCESSABLE,
    423: FailureKind.LOCKED,
    429: FailureKind.TOO_MANY_REQUESTS,
}

# Validation failures carry their own payload, hence no cause.
CLASSIFICATION: dict[FailureKind, tuple[CauseKind | None, Category]] = {
    FailureKind.VALIDATION: (None, Category.VALIDATION),
    FailureKind.NOT_FOUND: (CauseKind.NOT_FOUND, Category.DEPENDENCY_VALIDATION),
    FailureKind.UNAUTHORIZED: (CauseKind.UNAUTHORIZED, Category.DEPENDENCY),
    FailureKind.FORBIDDEN: (CauseKind.UNAUTHORIZED, Category.DEPENDENCY),
    FailureKind.BAD_REQUEST: (CauseKind.INVALID_REQUEST, Category.DEPENDENCY_VALIDATION),
    FailureKind.CONFLICT: (CauseKind.LOCKED, Category.DEPENDENCY_VALIDATION),
    FailureKind.LOCKED: (CauseKind.LOCKED, Category.DEPENDENCY_VALIDATION),
    FailureKind.TOO_MANY_REQUESTS: (CauseKind.EXCESSIVE_CALL, Category.DEPENDENCY_VALIDATION),
    FailureKind.UNPROCESSABLE: (CauseKind.INVALID_CONFIGURATION, Category.DEPENDENCY_VALIDATION),
    FailureKind.SERVER_ERROR: (CauseKind.SERVER_ERROR, Category.DEPENDENCY),
    FailureKind.URL_NOT_FOUND: (CauseKind.INVALID_CONFIGURATION, Category.DEPENDENCY),
    FailureKind.TIMEOUT: (CauseKind.UNREACHABLE, Category.DEPENDENCY),
    FailureKind.UNKNOWN: (CauseKind.UNCATEGORIZED, Category.SERVICE),
}


def _status_failure_kind(status_code: int) -> FailureKind:
    if status_code in STATUS_FAILURE_KINDS:
        return STATUS_FAILURE_KINDS[status_code]
    if 500 <= status_code < 600:
        return FailureKind.SERVER_ERROR
    return FailureKind.UNKNOWN


def identify_failure(error: BaseException) -> FailureKind:
    """Reduce a caught exception to the kind of failure it represents."""
    if isinstance(error, InvalidFieldsError):
        return FailureKind.VALIDATION
    if isinstance(error, openai.APIStatusError):
        return _status_failure_kind(error.status_code)
    if isinstance(error, httpx.HTTPStatusError):
        return _status_failure_kind(error.response.status_code)
    # APITimeoutError subclasses APIConnectionError, so it goes first.
    if isinstance(error, (openai.APITimeoutError, httpx.TimeoutException)):
        return FailureKind.TIMEOUT
    if isinstance(error, (openai.APIConnectionError, httpx.ConnectError)):
        return FailureKind.URL_NOT_FOUND
    return FailureKind.UNKNOWN


def classify_failure(error: BaseException, entity: str) -> OpenAIGatewayError:
    """Build the category exception a caller observes for ``error``.

    The result is returned rather than raised so the call site can chain it
    with ``raise ... from error``.
    """
    failure_kind = identify_failure(error)
    cause_kind, category = CLASSIFICATION[failure_kind]

    cause: FailureCause | InvalidFieldsError
    if isinstance(error, InvalidFieldsError):
        cause = error
    else:
        # only InvalidFieldsError maps to a row without a cause
        cause = FailureCause(cause_kind or CauseKind.UNCATEGORIZED, error)

    logger.warning(
        "OpenAI gateway operation failed",
        extra={
            "entity": entity,
            "failure_kind": failure_kind.value,
            "category": category.value,
            "cause": cause_kind.value if cause_kind else None,
        },
        exc_info=error if category is Category.SERVICE else None,
    )
    return CATEGORY_ERRORS[category](entity, cause)
