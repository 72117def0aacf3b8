"""
Configuration loading for the Resend helpers.

Values come from environment variables, optionally seeded from a .env file.
"""

import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .base import DEFAULT_BASE_URL, ResendConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back on bad values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name}={raw!r} must be positive, using {default}")
        return default
    return value


class ResendConfigLoader:
    """
    Load Resend configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Example:
        >>> loader = ResendConfigLoader()
        >>> config = loader.load_config()
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            env_file: Path to .env file (default: .env in working directory)
        """
        if env_file:
            load_dotenv(env_file)
            self._loaded_from_env = True
        else:
            env_path = Path.cwd() / ".env"
            self._loaded_from_env = env_path.exists()
            if self._loaded_from_env:
                load_dotenv(env_path)
                logger.info(f"Loaded configuration from {env_path}")

    def load_config(self) -> ResendConfig:
        """
        Load Resend configuration from environment.

        Environment variables:
        - RESEND_API_KEY: API key used as bearer token
        - RESEND_BASE_URL: API root (default: https://api.resend.com)
        - RESEND_TIMEOUT: Request timeout in seconds (default: 30)
        - RESEND_LOG_LEVEL: Logging level (default: INFO)
        - RESEND_JSON_LOGS: Emit JSON logs (default: true)

        Returns:
            ResendConfig: Loaded configuration
        """
        api_key = os.getenv("RESEND_API_KEY") or None
        if not api_key:
            logger.warning("RESEND_API_KEY not set")

        config = ResendConfig(
            api_key=api_key,
            base_url=os.getenv("RESEND_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=_int_env("RESEND_TIMEOUT", DEFAULT_TIMEOUT),
            log_level=os.getenv("RESEND_LOG_LEVEL", "INFO").upper(),
            json_logs=os.getenv("RESEND_JSON_LOGS", "true").lower() == "true",
        )

        logger.info(
            f"Loaded ResendConfig: base_url={config.base_url}, "
            f"timeout={config.timeout}, log_level={config.log_level}"
        )

        return config
