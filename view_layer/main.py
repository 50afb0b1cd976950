"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from view_layer.config import get_settings
from view_layer.core.app_factory import create_app
from view_layer.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()

# Configure structured logging (JSON to file + console)
setup_logging(settings.log_level, settings.log_dir or None)

# Create application
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "view_layer.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
