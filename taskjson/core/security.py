"""Optional API key verification."""

from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from .config import get_settings


async def enforce_api_key(x_api_key: Optional[str] = Header(default=None)) -> None:
    expected = get_settings().api_key
    if expected and x_api_key != expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )
