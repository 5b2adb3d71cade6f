"""Configuration management for SheetTrace."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Google Sheets API credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Root log level used by the CLI
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Tracing behaviour
    reference_case_sensitive: bool = os.getenv("REFERENCE_CASE_SENSITIVE", "true").lower() == "true"
    annotate_target: bool = os.getenv("ANNOTATE_TARGET", "true").lower() == "true"  # Write the result as a note on the traced cell


settings = Settings()
