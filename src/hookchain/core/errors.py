"""Failure types raised by the hook pipeline."""

import json
from typing import Any


class HookError(Exception):
    """Base class for failures raised by hookchain itself."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingRequiredField(HookError):
    """A required attribute is absent or empty.

    The message names every configured required key, not just the one that
    failed, so callers see the full requirement in one place.
    """

    def __init__(self, field: str, required_keys: tuple[str, ...]):
        super().__init__(f"Params {', '.join(required_keys)} are needed")
        self.field = field
        self.required_keys = required_keys


class InvalidFieldType(HookError):
    """An attribute with a numeric floor holds a non-numeric value."""

    def __init__(self, field: str, value: Any, minimum: Any):
        super().__init__(
            f"Field '{field}' must be a number to apply minimum {minimum}, "
            f"got {type(value).__name__}"
        )
        self.field = field
        self.value = value
        self.minimum = minimum


class AddonFailure(HookError):
    """Raised by an addon to reject the operation it is processing."""


class ResponseAlreadySent(HookError):
    """A response sink was invoked more than once."""


def error_message(exc: BaseException) -> str:
    """Convert a failure into the reason forwarded to a response sink.

    Uses the failure's ``message`` attribute when set, then its string form,
    and falls back to a JSON serialization of the failure.
    """
    message = getattr(exc, "message", None)
    if message:
        return str(message)

    text = str(exc)
    if text:
        return text

    return json.dumps(
        {"type": type(exc).__name__, "args": list(exc.args)},
        default=repr,
    )
