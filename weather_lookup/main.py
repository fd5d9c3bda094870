"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from weather_lookup.config import get_settings
from weather_lookup.core.app_factory import create_app
from weather_lookup.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()

# Configure structured logging (JSON to file + console)
setup_logging(settings.log_level)

app = create_app(settings)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Weather Lookup API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_lookup.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
