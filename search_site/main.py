"""Main FastAPI application entry point."""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi.responses import Response

from search_site.core.app_factory import create_app
from search_site.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
log_level = os.getenv("LOG_LEVEL", "INFO")
setup_logging(log_level, log_dir=os.getenv("LOG_DIR"))

# Create application
app = create_app()


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Return empty favicon to prevent 404 errors."""
    return Response(content=b"", media_type="image/x-icon")


def run() -> None:
    """Run the site with uvicorn using host/port from settings."""
    import uvicorn

    from search_site.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "search_site.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=os.getenv("UVICORN_RELOAD", "false").lower() == "true",
    )


if __name__ == "__main__":
    run()
