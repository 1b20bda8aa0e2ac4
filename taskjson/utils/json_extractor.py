"""Utility helpers for extracting task JSON payloads from model responses."""

from __future__ import annotations

import json
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

_FENCE_OPEN_JSON = re.compile(r"^```json\s*", re.MULTILINE)
_FENCE_OPEN = re.compile(r"^```\s*", re.MULTILINE)
_FENCE_CLOSE = re.compile(r"```\s*$", re.MULTILINE)
_VAR_DECLARATION = re.compile(r"^(?:const|let|var)\s+[A-Za-z0-9_]+\s*=\s*")
_TRAILING_SEMICOLON = re.compile(r";?\s*\Z")
_OBJECT_MATCH = re.compile(r"\{.*\}", re.DOTALL)
_ARRAY_MATCH = re.compile(r"\[.*\]", re.DOTALL)

_TASK_STRING_FIELDS = "title|description|details|testStrategy"

# Applied in order, first occurrence only.
_DANGLING_FIXES: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r'"dependencies"\s*:\s*\Z'), '"dependencies": []'),
    (re.compile(r'"dependencies"\s*:\s*\}'), '"dependencies": []}'),
    (re.compile(r'"dependencies"\s*:\s*,'), '"dependencies": [],'),
    (re.compile(r'"subtasks"\s*:\s*\Z'), '"subtasks": []'),
    (re.compile(r'"subtasks"\s*:\s*\}'), '"subtasks": []}'),
    (re.compile(r'"subtasks"\s*:\s*,'), '"subtasks": [],'),
    (re.compile(rf'"({_TASK_STRING_FIELDS})"\s*:\s*\Z'), r'"\1": ""'),
    (re.compile(rf'"({_TASK_STRING_FIELDS})"\s*:\s*\}}'), r'"\1": ""}'),
    (re.compile(rf'"({_TASK_STRING_FIELDS})"\s*:\s*,'), r'"\1": "",'),
    (re.compile(r":\s*\Z"), ': ""'),
    (re.compile(r":\s*\}"), ': ""}'),
    (re.compile(r":\s*,"), ': "",'),
)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)\s*:")

TASK_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "title": "Generated Task",
        "description": "Task generated from incomplete AI response",
        "details": "Please review and update task details",
        "testStrategy": "Manual verification required",
        "dependencies": (),
    }
)

ERROR_RECOVERY_TASK: Mapping[str, Any] = MappingProxyType(
    {
        "title": "Error Recovery Task",
        "description": "Task created due to JSON parsing error",
        "details": "Original AI response could not be parsed. Please review and update.",
        "testStrategy": "Manual verification required",
        "dependencies": (),
    }
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """Parse ``text`` as strict JSON; ``NaN`` and ``Infinity`` are rejected."""

    return json.loads(text, parse_constant=_reject_constant)


def is_valid_json(text: str) -> bool:
    """Return True when ``text`` is strict JSON."""

    try:
        loads_strict(text)
    except (TypeError, ValueError, RecursionError):
        return False
    return True


def _strip_formatting(text: str) -> str:
    candidate = text.strip()
    candidate = _FENCE_OPEN_JSON.sub("", candidate)
    candidate = _FENCE_OPEN.sub("", candidate)
    candidate = _FENCE_CLOSE.sub("", candidate)
    candidate = _VAR_DECLARATION.sub("", candidate, count=1)
    candidate = _TRAILING_SEMICOLON.sub("", candidate, count=1)

    block = _OBJECT_MATCH.search(candidate) or _ARRAY_MATCH.search(candidate)
    if block:
        return block.group(0)
    return candidate


def _as_is(candidate: str) -> Optional[str]:
    return candidate if is_valid_json(candidate) else None


def _repair_truncation(candidate: str) -> Optional[str]:
    fixed = candidate
    for pattern, replacement in _DANGLING_FIXES:
        fixed = pattern.sub(replacement, fixed, count=1)
    fixed = _TRAILING_COMMA.sub(r"\1", fixed)

    if fixed.startswith("{") and not fixed.endswith("}"):
        fixed += "}"
    if fixed.startswith("[") and not fixed.endswith("]"):
        fixed += "]"
    return fixed if is_valid_json(fixed) else None


def _convert_object_literal(candidate: str) -> Optional[str]:
    # Blind quote swap: apostrophes inside values are lost.
    converted = _UNQUOTED_KEY.sub(r'\1"\2":', candidate).replace("'", '"')
    return converted if is_valid_json(converted) else None


_STAGES: Tuple[Callable[[str], Optional[str]], ...] = (
    _as_is,
    _repair_truncation,
    _convert_object_literal,
)


def extract_json(text: str) -> str:
    """Return the best-guess JSON substring of a model response.

    Markdown fences, a leading ``const x =`` declaration and a trailing
    semicolon are stripped, and the outermost object (or array) is
    isolated. The candidate is then run through increasingly lossy
    stages (as-is, truncation repair, object-literal conversion) and the
    first one that yields strict JSON wins. When none does, ``text`` is
    returned unchanged, so callers can detect failure by comparing the
    result with their input.
    """

    if not isinstance(text, str):
        text = ""

    candidate = _strip_formatting(text)
    for stage in _STAGES:
        result = stage(candidate)
        if result is not None:
            return result
    return text


def is_complete_json(json_text: str) -> bool:
    """Check whether ``json_text`` parses and, for tasks, has no blank fields."""

    try:
        parsed = loads_strict(json_text)
    except (TypeError, ValueError, RecursionError):
        return False

    if not isinstance(parsed, (dict, list)):
        return False

    if isinstance(parsed, dict) and ("title" in parsed or "description" in parsed):
        return not any(
            value is None or (isinstance(value, str) and not value.strip())
            for value in parsed.values()
        )
    return True


def _dump(task: Mapping[str, Any]) -> str:
    return json.dumps(dict(task), indent=2, ensure_ascii=False)


def complete_task_json(incomplete_json: str) -> str:
    """Fill missing task fields with defaults and return pretty-printed JSON.

    Never raises: input that does not parse at all yields the canned
    error-recovery task.
    """

    try:
        parsed = loads_strict(incomplete_json)
    except (TypeError, ValueError, RecursionError):
        return _dump(ERROR_RECOVERY_TASK)

    if not isinstance(parsed, dict):
        parsed = {}

    completed = {key: parsed.get(key) or default for key, default in TASK_DEFAULTS.items()}
    for key, value in parsed.items():
        if key not in completed:
            completed[key] = value

    if not isinstance(completed["dependencies"], list):
        completed["dependencies"] = []
    return _dump(completed)
