"""Salvage JSON payloads from truncated or fenced model output.

Completion endpoints in JSON mode still occasionally return a payload wrapped in
markdown fences, followed by chatter, or cut off at the token limit. The helpers
here recover what can be recovered without guessing content: text is only ever
truncated and then closed with the brackets it already opened.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from chefmate.errors import UnparsableResponseError

logger = logging.getLogger(__name__)

__all__ = [
    "find_json_endpoint",
    "repair_and_parse",
    "repair_truncated_json",
    "strip_code_fences",
]

_LEADING_FENCE = re.compile(r"^```(?:json|JSON)?\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")
_CLOSERS = {"{": "}", "[": "]"}


@dataclass
class _Container:
    """One unclosed ``{`` or ``[`` seen while scanning."""

    opener: str
    # Offset the text can be cut at while keeping only complete members.
    complete_until: Optional[int] = None
    expecting_value: bool = False


@dataclass
class _ScanState:
    """Result of a string-aware walk over JSON-ish text."""

    in_string: bool = False
    open_stack: List[_Container] = field(default_factory=list)


def strip_code_fences(raw_text: str) -> str:
    """Remove a wrapping ```json / ``` fence if present."""

    text = raw_text.strip()
    if text.startswith("```"):
        text = _LEADING_FENCE.sub("", text, count=1)
        text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def _json_start(text: str) -> int:
    """Offset of the first ``{`` or ``[``, or -1."""

    starts = [index for index in (text.find("{"), text.find("[")) if index != -1]
    return min(starts) if starts else -1


def _value_completed(stack: List[_Container], offset: int) -> None:
    if not stack:
        return
    container = stack[-1]
    if container.opener == "[" or container.expecting_value:
        container.complete_until = offset


def _scan(text: str) -> _ScanState:
    state = _ScanState()
    escaped = False
    for index, char in enumerate(text):
        if state.in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                state.in_string = False
                _value_completed(state.open_stack, index + 1)
            continue

        if char == '"':
            state.in_string = True
        elif char == "[":
            state.open_stack.append(_Container("[", complete_until=index + 1))
        elif char == "{":
            state.open_stack.append(_Container("{"))
        elif char in ("}", "]"):
            if state.open_stack and _CLOSERS[state.open_stack[-1].opener] == char:
                state.open_stack.pop()
                _value_completed(state.open_stack, index + 1)
        elif char == ":" and state.open_stack:
            state.open_stack[-1].expecting_value = True
        elif char == "," and state.open_stack:
            container = state.open_stack[-1]
            container.complete_until = index
            container.expecting_value = False
    return state


def _cut_offset(stack: List[_Container]) -> Optional[int]:
    """Where to cut an unfinished payload so no partial element survives.

    Inside an array the cut goes back to the last complete element of the
    outermost open array, so a half-written entry is dropped rather than kept
    with missing fields. Without an open array the innermost object with a
    complete member decides.
    """

    for container in stack:
        if container.opener == "[":
            return container.complete_until
    for container in reversed(stack):
        if container.complete_until is not None:
            return container.complete_until
    return None


def find_json_endpoint(text: str) -> Optional[tuple[int, int]]:
    """Return ``(start, end)`` of the first complete top-level object or array.

    ``end`` is inclusive. Brackets inside strings are ignored and a backslash
    escapes the next character. Returns ``None`` when the value never closes.
    """

    start = _json_start(text)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            depth += 1
        elif char in ("}", "]"):
            depth -= 1
            if depth == 0:
                return start, index
    return None


def repair_truncated_json(text: str) -> Optional[str]:
    """Close a payload that was cut off before its top-level value ended.

    Everything after the last complete element is discarded and the remaining
    unclosed ``[``/``{`` are closed in nesting order. Returns ``None`` when
    there is nothing to salvage.
    """

    start = _json_start(text)
    if start == -1:
        return None
    candidate = text[start:].rstrip()

    state = _scan(candidate)
    if not state.in_string and not state.open_stack:
        return candidate

    cut = _cut_offset(state.open_stack)
    if cut is None:
        return None
    candidate = candidate[:cut].rstrip()

    state = _scan(candidate)
    closers = "".join(
        _CLOSERS[container.opener] for container in reversed(state.open_stack)
    )
    return candidate + closers


def repair_and_parse(raw_text: str) -> Any:
    """Parse model output as JSON, salvaging truncated payloads when possible."""

    text = strip_code_fences(raw_text or "")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.info("Model output is not valid JSON (%d chars); attempting repair", len(text))

    endpoint = find_json_endpoint(text)
    if endpoint is not None:
        start, end = endpoint
        candidate: Optional[str] = text[start : end + 1]
    else:
        candidate = repair_truncated_json(text)

    if candidate is None:
        raise UnparsableResponseError("No recoverable JSON value in model output", text)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("JSON repair failed: %s", exc)
        raise UnparsableResponseError("Repaired model output is still not JSON", text) from exc

    logger.info("Recovered JSON from malformed model output")
    return parsed
