"""Recovery service: turns raw model output into a usable task object"""
import json
from typing import Any

from ..core.logging import get_logger
from ..models.task import Task, TaskRecovery
from ..utils.json_extractor import complete_task_json, extract_json, is_complete_json, loads_strict


logger = get_logger(__name__)


class InputTooLargeError(ValueError):
    """Raised when a payload exceeds the configured size limit"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Input of {size} characters exceeds the limit of {limit}")


_UNPARSED = object()


def _try_load(text: str) -> Any:
    try:
        return loads_strict(text)
    except (TypeError, ValueError, RecursionError):
        return _UNPARSED


class TaskRecoveryService:
    """Composes extraction, completeness checking and completion"""

    def __init__(self, max_input_chars: int = 0):
        self.max_input_chars = max_input_chars

    def _enforce_limit(self, text: str) -> None:
        if self.max_input_chars and len(text) > self.max_input_chars:
            raise InputTooLargeError(len(text), self.max_input_chars)

    def extract(self, text: str) -> str:
        self._enforce_limit(text)
        return extract_json(text)

    def check(self, json_text: str) -> bool:
        self._enforce_limit(json_text)
        return is_complete_json(json_text)

    def complete(self, json_text: str) -> Task:
        self._enforce_limit(json_text)
        return Task.model_validate(json.loads(complete_task_json(json_text)))

    def recover(self, text: str) -> TaskRecovery:
        """Extract a task from raw model output, filling gaps with defaults

        The completer always runs on the extracted text. A complete,
        task-shaped object passes through it unchanged, so
        ``defaults_applied`` is False. A complete but non-task object such
        as ``{"a": 1}`` gets the five task defaults with its own keys kept.
        Text that does not parse yields the canned error task.
        """
        self._enforce_limit(text)

        extracted = extract_json(text)
        parsed = _try_load(extracted)
        complete = is_complete_json(extracted)

        completed = json.loads(complete_task_json(extracted))
        defaults_applied = completed != parsed

        logger.info(
            "task_recovery_completed",
            input_chars=len(text),
            extracted_ok=parsed is not _UNPARSED,
            complete=complete,
            defaults_applied=defaults_applied,
        )

        return TaskRecovery(
            task=Task.model_validate(completed),
            extracted=extracted,
            extracted_ok=parsed is not _UNPARSED,
            complete=complete,
            defaults_applied=defaults_applied,
        )
