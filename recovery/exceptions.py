"""
Exceptions for structured-response recovery.

The recoverer itself never raises for malformed input; it reports failure
through RecoveryResult. These exceptions exist for callers that opt into
exception-style control flow.

Exception Hierarchy:
    RecoveryError (base)
    └── ShapeError

Usage:
    from recovery import recover_json, RecoveryError, ShapeError

    try:
        plan = recover_json(raw).unwrap()
    except RecoveryError as e:
        print(f"Recovery failed: {e.status}")
"""

from __future__ import annotations

from typing import Optional


class RecoveryError(Exception):
    """
    Raised by RecoveryResult.unwrap() when recovery failed.

    Attributes:
        message: Human-readable error description
        status: Failure status value ("no_json_found" or "unrecoverable")
        details: Last parser error message (optional)
    """

    def __init__(
        self,
        message: str = "Could not recover a structured value",
        status: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.message = message
        self.status = status
        self.details = details

        full_message = message
        if status:
            full_message = f"{message} [{status}]"
        if details:
            full_message = f"{full_message} | Details: {details}"

        super().__init__(full_message)


class ShapeError(RecoveryError):
    """
    Raised when a JsonValue accessor is used on a value of another kind.

    Attributes:
        expected: Kind the caller asked for
        actual: Kind the value really has
        path: Location of the value inside the tree
    """

    def __init__(self, expected: str, actual: str, path: str = "$"):
        self.expected = expected
        self.actual = actual
        self.path = path
        super().__init__(f"Expected {expected} at {path}, got {actual}")
