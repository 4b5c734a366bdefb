"""
Entry point for running the service with `python -m backend`.

Reload is only enabled in development.
"""
import uvicorn

from backend.settings import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.environment == "development",
    )
