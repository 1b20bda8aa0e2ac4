"""Task extraction, completeness and completion endpoints"""
from fastapi import APIRouter, Depends

from ...api.deps import get_recovery_service
from ...api.errors import APIError
from ...models.task import (
    CheckRequest,
    CheckResponse,
    CompleteRequest,
    CompleteResponse,
    ExtractRequest,
    ExtractResponse,
    RecoverRequest,
    TaskRecovery,
)
from ...services.recovery import InputTooLargeError, TaskRecoveryService
from ...utils.json_extractor import is_valid_json


router = APIRouter()


@router.post("/extract", response_model=ExtractResponse)
async def extract(
    request: ExtractRequest,
    service: TaskRecoveryService = Depends(get_recovery_service)
):
    """Strip formatting noise and repair the JSON in a model response"""
    try:
        extracted = service.extract(request.text)
    except InputTooLargeError as exc:
        raise APIError.input_too_large(exc) from exc

    return ExtractResponse(json_text=extracted, ok=is_valid_json(extracted))


@router.post("/check", response_model=CheckResponse)
async def check(
    request: CheckRequest,
    service: TaskRecoveryService = Depends(get_recovery_service)
):
    """Report whether a JSON string is a complete object"""
    try:
        complete = service.check(request.json_text)
    except InputTooLargeError as exc:
        raise APIError.input_too_large(exc) from exc

    return {"complete": complete}


@router.post("/complete", response_model=CompleteResponse)
async def complete(
    request: CompleteRequest,
    service: TaskRecoveryService = Depends(get_recovery_service)
):
    """Fill missing task fields with defaults"""
    try:
        task = service.complete(request.json_text)
    except InputTooLargeError as exc:
        raise APIError.input_too_large(exc) from exc

    return {"task": task}


@router.post("/recover", response_model=TaskRecovery)
async def recover(
    request: RecoverRequest,
    service: TaskRecoveryService = Depends(get_recovery_service)
):
    """Extract, check and complete a task from raw model output"""
    try:
        return service.recover(request.text)
    except InputTooLargeError as exc:
        raise APIError.input_too_large(exc) from exc
