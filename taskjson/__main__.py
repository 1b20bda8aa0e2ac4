"""Run the recovery service with uvicorn: ``python -m taskjson``."""
import uvicorn

from .core.config import get_settings


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "taskjson.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
