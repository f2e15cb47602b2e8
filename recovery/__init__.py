"""
Structured-response recovery for LLM completions.

Hosted models asked for JSON often wrap it in prose or markdown fences, or
stop mid-object when they hit their token limit. recover_json() extracts the
intended object, parses it strictly, and on failure runs one bounded repair
pass before parsing again.

Quick Start:
    from recovery import recover_json

    result = recover_json(completion_text)
    if not result.ok:
        raise RuntimeError(f"Invalid response: {result.status.value}")
    if result.was_repaired:
        print("Response was truncated; treat it as lower confidence.")
    plan = result.value
"""

__version__ = "1.0.0"

from .backfill import WEEKDAYS, backfill_missing_keys, backfill_weekly_plan
from .exceptions import RecoveryError, ShapeError
from .extraction import extract_candidate, strip_code_fences
from .models import RecoveryResult, RecoveryStatus
from .recoverer import recover_json, strict_parse
from .repair import COUNTS, STACK, STRATEGIES, repair_truncated_json
from .values import JsonKind, JsonValue

__all__ = [
    "__version__",
    # Pipeline
    "recover_json",
    "strict_parse",
    "extract_candidate",
    "strip_code_fences",
    "repair_truncated_json",
    "STACK",
    "COUNTS",
    "STRATEGIES",
    # Results
    "RecoveryResult",
    "RecoveryStatus",
    "JsonValue",
    "JsonKind",
    # Back-fill
    "WEEKDAYS",
    "backfill_missing_keys",
    "backfill_weekly_plan",
    # Exceptions
    "RecoveryError",
    "ShapeError",
]
