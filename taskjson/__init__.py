"""Recover task JSON from unreliable language model output."""
from .utils.json_extractor import complete_task_json, extract_json, is_complete_json
from .services.recovery import InputTooLargeError, TaskRecoveryService

__all__ = [
    "InputTooLargeError",
    "TaskRecoveryService",
    "complete_task_json",
    "extract_json",
    "is_complete_json",
]
