"""Error kinds exposed by the marketplace core.

Domain code raises Protean exceptions; callers that need a transport-neutral
shape use :func:`describe` to turn them into a ``(kind, message)`` pair.
"""

from enum import Enum

from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError


class ErrorKind(Enum):
    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    INCONSISTENT = "Inconsistent"


_KINDS = (
    (ObjectNotFoundError, ErrorKind.NOT_FOUND),
    (ValidationError, ErrorKind.VALIDATION_FAILED),
    (InvalidStateError, ErrorKind.INCONSISTENT),
)


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        parts = []
        for field, errors in messages.items():
            errors = errors if isinstance(errors, list | tuple) else [errors]
            parts.extend(f"{field}: {error}" if not field.startswith("_") else str(error) for error in errors)
        return "; ".join(parts)
    return str(messages)


def kind_of(exc: Exception) -> ErrorKind | None:
    """Return the error kind for a domain exception, or None if it is not one."""
    for exc_type, kind in _KINDS:
        if isinstance(exc, exc_type):
            return kind
    return None


def describe(exc: Exception) -> tuple[str, str]:
    """Convert a domain exception into a ``(kind, message)`` pair.

    Raises the exception back when it is not one of the known domain errors,
    so store and programming errors are never disguised as client errors.
    """
    kind = kind_of(exc)
    if kind is None:
        raise exc

    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    return kind.value, _flatten(messages)
