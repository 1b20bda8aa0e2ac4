"""Task models and request/response payloads for the recovery endpoints."""

from __future__ import annotations

import json
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Task(BaseModel):
    """A completed task object; keys other than the five known ones are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str
    description: str
    details: str
    test_strategy: str = Field(alias="testStrategy")
    dependencies: List[Any] = Field(default_factory=list)

    @field_validator("title", "description", "details", "test_strategy", mode="before")
    @classmethod
    def _ensure_text(cls, value):
        if isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)


class TaskRecovery(BaseModel):
    task: Task
    extracted: str
    extracted_ok: bool
    complete: bool
    defaults_applied: bool


class ExtractRequest(BaseModel):
    text: str


class ExtractResponse(BaseModel):
    json_text: str = Field(alias="json")
    ok: bool

    model_config = ConfigDict(populate_by_name=True)


class CheckRequest(BaseModel):
    json_text: str


class CheckResponse(BaseModel):
    complete: bool


class CompleteRequest(BaseModel):
    json_text: str


class CompleteResponse(BaseModel):
    task: Task


class RecoverRequest(BaseModel):
    text: str
