"""
Structured-response recovery pipeline.

Strategy:
1) Strict parse of the whole response (fast path, no repair).
2) Boundary extraction, then strict parse of the candidate.
3) One repair pass over the candidate, then a final strict parse.

Only objects and arrays count as recovered values. The pipeline never
raises for malformed input; failures come back as a RecoveryResult.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .extraction import extract_candidate
from .models import RecoveryResult, RecoveryStatus
from .repair import STACK, STRATEGIES, repair_truncated_json


logger = logging.getLogger(__name__)

_MISSING = object()
_LOG_PREVIEW_CHARS = 500


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_parse(text: str) -> Any:
    """Parse standard JSON. NaN and Infinity are rejected.

    Raises:
        ValueError: If the text is not strict JSON
    """
    return json.loads(text, parse_constant=_reject_constant)


def _parse_container(text: str) -> tuple[Any, Optional[str]]:
    try:
        value = strict_parse(text)
    except ValueError as exc:
        return _MISSING, str(exc)
    except RecursionError:
        return _MISSING, "Nesting is too deep to parse"
    if not isinstance(value, (dict, list)):
        return _MISSING, f"Top-level value is {type(value).__name__}, not an object or array"
    return value, None


def recover_json(
    raw: str,
    *,
    strategy: str = STACK,
    normalize_quotes: bool = False,
) -> RecoveryResult:
    """
    Recover one JSON object or array from a model response.

    Args:
        raw: Full response text from the completion service
        strategy: Closing strategy for the repair pass ("stack" or "counts")
        normalize_quotes: Also rewrite single-quoted strings during repair

    Returns:
        RecoveryResult with status PARSED, REPAIRED, NO_JSON_FOUND or
        UNRECOVERABLE

    Raises:
        ValueError: If strategy is not a known closing strategy
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unsupported repair strategy: {strategy}")

    raw = raw or ""
    text = raw.strip()

    value, error = _parse_container(text)
    if value is not _MISSING:
        return RecoveryResult(RecoveryStatus.PARSED, value, raw=raw, candidate=text)

    candidate = extract_candidate(text)
    if "{" not in candidate:
        logger.error(f"No JSON object found in response: {raw[:_LOG_PREVIEW_CHARS]!r}")
        return RecoveryResult(
            RecoveryStatus.NO_JSON_FOUND,
            raw=raw,
            candidate=candidate,
            error=error,
        )

    value, error = _parse_container(candidate)
    if value is not _MISSING:
        return RecoveryResult(RecoveryStatus.PARSED, value, raw=raw, candidate=candidate)

    repaired = repair_truncated_json(candidate, strategy=strategy, normalize_quotes=normalize_quotes)
    value, repair_error = _parse_container(repaired)
    if value is not _MISSING:
        logger.warning(
            f"Response needed repair before parsing "
            f"({len(candidate)} -> {len(repaired)} chars): {error}"
        )
        return RecoveryResult(
            RecoveryStatus.REPAIRED,
            value,
            raw=raw,
            candidate=candidate,
            repaired_text=repaired,
        )

    logger.error(
        f"Response could not be recovered: {repair_error} | "
        f"raw: {raw[:_LOG_PREVIEW_CHARS]!r}"
    )
    return RecoveryResult(
        RecoveryStatus.UNRECOVERABLE,
        raw=raw,
        candidate=candidate,
        repaired_text=repaired,
        error=repair_error,
    )
