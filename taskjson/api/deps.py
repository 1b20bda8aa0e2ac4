"""Request-scoped dependencies"""
from fastapi import Request
from ..services.recovery import TaskRecoveryService


def get_recovery_service(request: Request) -> TaskRecoveryService:
    """Get recovery service from app state"""
    return request.app.state.recovery_service
