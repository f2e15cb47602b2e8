"""
Truncation repair for model responses that failed strict parsing.

The dominant failure mode of hosted completions is mid-generation
truncation: the model hits its token limit and stops before closing its
open structures. The repair pass is a fixed sequence of textual steps:

1. Dangling-tail trim: cut a half-written key, value or literal back to the
   last structurally safe point.
2. Trailing-comma removal: delete commas that directly precede a closer.
3. Structure closing: emit the closers still owed for open '{' and '['.

Each step is a single forward scan. Characters inside double-quoted strings
(including escaped quotes) never affect the nesting state.

Usage:
    from recovery.repair import repair_truncated_json

    repaired = repair_truncated_json('{"a": [1, 2, {"b": "x')
    # '{"a": [1, 2, {}]}'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator


STACK = "stack"
COUNTS = "counts"
STRATEGIES = (STACK, COUNTS)

_CLOSER_FOR = {"{": "}", "[": "]"}
_OPENER_FOR = {"}": "{", "]": "["}
_OPENERS = "{["
_CLOSERS = "}]"

# Signatures of a key or value whose opening quote was the last thing emitted.
_DANGLING_SUFFIXES = (', "', '", "', ': "')

_TOKEN_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.+-")
_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_LITERALS = frozenset({"true", "false", "null"})
_TRAILING_COMMA_RE = re.compile(r",\s*[}\]]")


# =============================================================================
# SCAN STATE
# =============================================================================


@dataclass
class RepairState:
    """
    Ephemeral state for one forward scan over a candidate string.

    Attributes:
        position: Index of the character being scanned
        brace_depth: Net count of '{' minus '}' seen outside strings
        bracket_depth: Net count of '[' minus ']' seen outside strings
        openers: Stack of unmatched openers, innermost last
        in_string: Whether the scan is inside a double-quoted string
        escape_pending: Whether the previous character was a backslash in a string
        last_safe: Length of the longest prefix ending on a complete element
            or right after an opener (-1 if there is none)
        awaiting_colon: An object key has been closed but no ':' followed it
    """

    position: int = 0
    brace_depth: int = 0
    bracket_depth: int = 0
    openers: list[str] = field(default_factory=list)
    in_string: bool = False
    escape_pending: bool = False
    last_safe: int = -1
    awaiting_colon: bool = False

    @property
    def top(self) -> str:
        return self.openers[-1] if self.openers else ""

    def open(self, opener: str) -> None:
        if opener == "{":
            self.brace_depth += 1
        else:
            self.bracket_depth += 1
        self.openers.append(opener)

    def close(self, closer: str) -> list[str]:
        """Consume a closer and return the closers owed by inner openers.

        A '}' that arrives while a '[' is still open inside its object means
        the array was never closed; the returned list holds the ']' (and any
        other closers) that must be emitted before it. A closer without any
        matching opener is left alone.
        """
        if closer == "}":
            self.brace_depth -= 1
        else:
            self.bracket_depth -= 1

        opener = _OPENER_FOR[closer]
        if opener not in self.openers:
            return []

        owed = []
        while self.openers[-1] != opener:
            owed.append(_CLOSER_FOR[self.openers.pop()])
        self.openers.pop()
        return owed

    def owed_closers(self, strategy: str = STACK) -> str:
        if strategy == COUNTS:
            return "]" * max(self.bracket_depth, 0) + "}" * max(self.brace_depth, 0)
        return "".join(_CLOSER_FOR[opener] for opener in reversed(self.openers))


def _walk(text: str, state: RepairState) -> Iterator[tuple[int, str, bool]]:
    """Yield (index, char, structural) and keep the string flags on state current.

    structural is True only for characters outside string literals. The
    flags are updated before each yield.
    """
    for index, char in enumerate(text):
        state.position = index
        if state.escape_pending:
            state.escape_pending = False
            yield index, char, False
            continue
        if state.in_string:
            if char == "\\":
                state.escape_pending = True
            elif char == '"':
                state.in_string = False
            yield index, char, False
            continue
        if char == '"':
            state.in_string = True
            yield index, char, False
            continue
        yield index, char, True


def scan_structure(text: str) -> RepairState:
    """Scan text once and return the nesting state at its end."""
    state = RepairState()
    expect_key = False

    for index, char, structural in _walk(text, state):
        if not structural:
            # A closing quote leaves in_string False; an opening or escaped one does not.
            if char == '"' and not state.in_string and expect_key:
                state.awaiting_colon = True
                expect_key = False
            continue

        if char in _OPENERS:
            state.open(char)
            state.last_safe = index + 1
            state.awaiting_colon = False
            expect_key = char == "{"
        elif char in _CLOSERS:
            state.close(char)
            state.last_safe = index + 1
            state.awaiting_colon = False
            expect_key = False
        elif char == ",":
            state.last_safe = index
            state.awaiting_colon = False
            expect_key = state.top == "{"
        elif char == ":":
            state.awaiting_colon = False

    return state


# =============================================================================
# REPAIR STEPS
# =============================================================================


def _is_complete_token(token: str) -> bool:
    return token in _LITERALS or _NUMBER_RE.fullmatch(token) is not None


def _has_dangling_tail(text: str, state: RepairState) -> bool:
    if state.in_string or text.endswith(_DANGLING_SUFFIXES):
        return True
    if text.endswith((",", ":")):
        return True
    if state.awaiting_colon:
        return True

    start = len(text)
    while start > 0 and text[start - 1] in _TOKEN_CHARS:
        start -= 1
    token = text[start:]
    return bool(token) and not _is_complete_token(token)


def trim_dangling_tail(text: str) -> str:
    """Cut a truncated trailing key, value or literal back to a safe point.

    The safe point is whichever comes later: the last element separator
    outside strings (the comma itself is dropped) or the position just
    after the last opener or closer. Text that does not end in a dangling fragment,
    or has no safe point, is returned unchanged.
    """
    stripped = text.rstrip()
    state = scan_structure(stripped)
    if not _has_dangling_tail(stripped, state):
        return text
    if state.last_safe <= 0:
        return text
    return stripped[: state.last_safe].rstrip()


def remove_trailing_commas(text: str) -> str:
    """Delete each comma that is followed only by whitespace and a closer."""
    state = RepairState()
    out: list[str] = []
    for index, char, structural in _walk(text, state):
        if structural and char == "," and _TRAILING_COMMA_RE.match(text, index):
            continue
        out.append(char)
    return "".join(out)


def close_open_structures(text: str, strategy: str = STACK) -> str:
    """Append (and, for the stack strategy, insert) the missing closers.

    stack: unwind an explicit opener stack, so interleaved '{' and '[' are
        closed in the right order.
    counts: append every missing ']' and then every missing '}', without
        looking at nesting order.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unsupported repair strategy: {strategy}")

    state = RepairState()
    out: list[str] = []
    for _, char, structural in _walk(text, state):
        if structural and char in _OPENERS:
            state.open(char)
        elif structural and char in _CLOSERS:
            owed = state.close(char)
            if strategy == STACK:
                out.extend(owed)
        out.append(char)

    out.append(state.owed_closers(strategy))
    return "".join(out)


def normalize_single_quotes(text: str) -> str:
    """Rewrite single-quoted strings as double-quoted ones.

    Double-quoted strings are copied untouched, so apostrophes inside them
    survive. Inside a single-quoted string a bare '"' is escaped and an
    escaped \\' becomes a plain apostrophe.
    """
    out: list[str] = []
    in_double = False
    in_single = False
    escape_pending = False

    for char in text:
        if escape_pending:
            escape_pending = False
            if in_single and char == "'":
                out[-1] = "'"
            else:
                out.append(char)
            continue
        if char == "\\" and (in_double or in_single):
            escape_pending = True
            out.append(char)
            continue
        if in_double:
            if char == '"':
                in_double = False
            out.append(char)
            continue
        if in_single:
            if char == "'":
                in_single = False
                out.append('"')
            elif char == '"':
                out.append('\\"')
            else:
                out.append(char)
            continue

        if char == '"':
            in_double = True
            out.append(char)
        elif char == "'":
            in_single = True
            out.append('"')
        else:
            out.append(char)

    return "".join(out)


def repair_truncated_json(
    text: str,
    strategy: str = STACK,
    normalize_quotes: bool = False,
) -> str:
    """
    Run the full repair pass over a candidate string.

    Args:
        text: Candidate string that failed strict parsing
        strategy: Closing strategy, "stack" (default) or "counts"
        normalize_quotes: Convert single-quoted strings before repairing

    Returns:
        Repaired text. It is not guaranteed to parse.
    """
    repaired = text.strip()
    if normalize_quotes:
        repaired = normalize_single_quotes(repaired)

    repaired = trim_dangling_tail(repaired)
    repaired = remove_trailing_commas(repaired)
    return close_open_structures(repaired, strategy)
