"""Domain-level exceptions for the OpenAI gateway.

Two closed families:

* ``FailureCause`` is internal. It pairs a known failure reason with the
  low-level failure that produced it.
* ``OpenAIGatewayError`` and its four kinds are what callers see. Each one
  owns exactly one payload: a ``FailureCause``, or for validation failures
  the aggregate ``InvalidFieldsError``.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar


class CauseKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_REQUEST = "invalid_request"
    LOCKED = "locked"
    EXCESSIVE_CALL = "excessive_call"
    INVALID_CONFIGURATION = "invalid_configuration"
    SERVER_ERROR = "server_error"
    UNREACHABLE = "unreachable"
    UNCATEGORIZED = "uncategorized"


class Category(str, Enum):
    VALIDATION = "validation"
    DEPENDENCY_VALIDATION = "dependency_validation"
    DEPENDENCY = "dependency"
    SERVICE = "service"


CAUSE_MESSAGES: dict[CauseKind, str] = {
    CauseKind.NOT_FOUND: "Requested resource was not found, fix errors and try again.",
    CauseKind.UNAUTHORIZED: "Unauthorized request, fix errors and try again.",
    CauseKind.INVALID_REQUEST: "Request was rejected as invalid, fix errors and try again.",
    CauseKind.LOCKED: "Requested resource is locked, please try again later.",
    CauseKind.EXCESSIVE_CALL: "Excessive call error occurred, limit your calls.",
    CauseKind.INVALID_CONFIGURATION: "Invalid configuration error occurred, contact support.",
    CauseKind.SERVER_ERROR: "Server error occurred, contact support.",
    CauseKind.UNREACHABLE: "Remote service could not be reached in time, contact support.",
    CauseKind.UNCATEGORIZED: "Unexpected error occurred, contact support.",
}

CATEGORY_MESSAGES: dict[Category, str] = {
    Category.VALIDATION: "validation error occurred, fix errors and try again.",
    Category.DEPENDENCY_VALIDATION: "dependency validation error occurred, fix errors and try again.",
    Category.DEPENDENCY: "dependency error occurred, contact support.",
    Category.SERVICE: "service error occurred, contact support.",
}


class InvalidFieldsError(Exception):
    """Raised by structural validators with every violated field of an entity."""

    def __init__(self, entity: str, errors: Mapping[str, list[str]]) -> None:
        self.entity = entity
        self.errors: dict[str, list[str]] = {field: list(messages) for field, messages in errors.items()}
        super().__init__(f"Invalid {entity}, fix errors and try again.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidFieldsError):
            return NotImplemented
        return self.entity == other.entity and self.errors == other.errors

    def __hash__(self) -> int:
        return hash((InvalidFieldsError, self.entity))


class FailureCause(Exception):
    """Known failure reason paired with the low-level failure that produced it."""

    def __init__(self, kind: CauseKind, inner: BaseException) -> None:
        self.kind = kind
        self.inner = inner
        super().__init__(CAUSE_MESSAGES[kind])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FailureCause):
            return NotImplemented
        return self.kind is other.kind and (self.inner is other.inner or self.inner == other.inner)

    def __hash__(self) -> int:
        return hash((FailureCause, self.kind))


class OpenAIGatewayError(Exception):
    """Base of the four externally visible failure kinds."""

    category: ClassVar[Category]

    def __init__(self, entity: str, cause: FailureCause | InvalidFieldsError) -> None:
        self.entity = entity
        self.cause = cause
        super().__init__(f"{entity.capitalize()} {CATEGORY_MESSAGES[self.category]}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OpenAIGatewayError):
            return NotImplemented
        return type(self) is type(other) and self.entity == other.entity and self.cause == other.cause

    def __hash__(self) -> int:
        return hash((type(self), self.entity))

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "message": str(self),
            "category": self.category.value,
        }
        if isinstance(self.cause, InvalidFieldsError):
            payload["errors"] = self.cause.errors
        else:
            payload["cause"] = self.cause.kind.value
        return payload


class OpenAIValidationError(OpenAIGatewayError):
    category = Category.VALIDATION


class OpenAIDependencyValidationError(OpenAIGatewayError):
    category = Category.DEPENDENCY_VALIDATION


class OpenAIDependencyError(OpenAIGatewayError):
    category = Category.DEPENDENCY


class OpenAIServiceError(OpenAIGatewayError):
    category = Category.SERVICE


CATEGORY_ERRORS: dict[Category, type[OpenAIGatewayError]] = {
    Category.VALIDATION: OpenAIValidationError,
    Category.DEPENDENCY_VALIDATION: OpenAIDependencyValidationError,
    Category.DEPENDENCY: OpenAIDependencyError,
    Category.SERVICE: OpenAIServiceError,
}
