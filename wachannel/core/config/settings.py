"""
Settings for the wachannel WhatsApp channel adapter.

Simple environment variable configuration for the process itself (server,
logging, Graph API location). Channel credentials live in the
``whatsapp_channel`` setting group (see ``channel_settings``) and are only
enforced when they are first needed.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & General Configuration
        # ================================================================
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")
        self.default_language: str = os.getenv("DEFAULT_LANGUAGE", "en")

        # ================================================================
        # Graph API Configuration
        # ================================================================
        self.api_version: str = os.getenv("API_VERSION", "v20.0")
        self.base_url: str = os.getenv("BASE_URL", "https://graph.facebook.com")
        self.webhook_path: str = os.getenv("WEBHOOK_PATH", "/webhook/whatsapp")

        # ================================================================
        # WhatsApp Channel Credentials (read by EnvSettingsProvider)
        # ================================================================
        self.whatsapp_app_secret: str | None = os.getenv("WHATSAPP_APP_SECRET")
        self.whatsapp_access_token: str | None = os.getenv("WHATSAPP_ACCESS_TOKEN")
        self.whatsapp_verify_token: str | None = os.getenv("WHATSAPP_VERIFY_TOKEN")
        self.whatsapp_greeting_text: str | None = os.getenv("WHATSAPP_GREETING_TEXT")

        # ================================================================
        # Public file serving (used to build attachment links)
        # ================================================================
        self.public_url: str = os.getenv("PUBLIC_URL", f"http://localhost:{self.port}")

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"
        self.environment = self.environment.upper()

        self.base_url = self.base_url.rstrip("/")
        if not self.api_version.startswith("v"):
            raise ValueError("API_VERSION must look like 'v20.0'")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
