"""
Result types for structured-response recovery.

RecoveryResult is the discriminated outcome of one recovery attempt. A
success always holds a value that came out of the strict parser; there is
no partial or degraded success.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import RecoveryError


class RecoveryStatus(str, Enum):
    """
    Outcome of a recovery attempt.

    PARSED: Strict parsing succeeded without any repair
    REPAIRED: Strict parsing succeeded only after the repair pass
    NO_JSON_FOUND: The input contains no '{' at all
    UNRECOVERABLE: Parsing failed both before and after repair
    """

    PARSED = "parsed"
    REPAIRED = "repaired"
    NO_JSON_FOUND = "no_json_found"
    UNRECOVERABLE = "unrecoverable"


@dataclass(frozen=True)
class RecoveryResult:
    """
    Outcome of recover_json().

    Attributes:
        status: How recovery ended
        value: Parsed object or array (None on failure)
        raw: The original response text
        candidate: Substring chosen by boundary extraction (pre-repair)
        repaired_text: Output of the repair pass, None if repair never ran
        error: Last strict-parser error message on failure
    """

    status: RecoveryStatus
    value: Any = None
    raw: str = ""
    candidate: str = ""
    repaired_text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (RecoveryStatus.PARSED, RecoveryStatus.REPAIRED)

    @property
    def was_repaired(self) -> bool:
        """True when the upstream response was cut short or malformed."""
        return self.status == RecoveryStatus.REPAIRED

    @property
    def canonical_text(self) -> str:
        """Re-serialized value; always well-formed JSON for a successful result."""
        if not self.ok:
            raise RecoveryError(
                "No recovered value to serialize",
                status=self.status.value,
                details=self.error,
            )
        return json.dumps(self.value, ensure_ascii=False)

    def unwrap(self) -> Any:
        """Return the value or raise RecoveryError."""
        if not self.ok:
            raise RecoveryError(
                "Could not recover a structured value",
                status=self.status.value,
                details=self.error,
            )
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Diagnostic summary, safe to log or return from an API."""
        return {
            "status": self.status.value,
            "ok": self.ok,
            "was_repaired": self.was_repaired,
            "error": self.error,
            "raw_length": len(self.raw),
            "candidate": self.candidate,
            "repaired_text": self.repaired_text,
        }
