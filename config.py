"""config.py - Incapsula client configuration

Configuration dataclass for the Incapsula API client. Starts from default
values, overridden by environment variables and the .env file.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from dotenv import load_dotenv

from utils.incapsula.incapsula_constants import BASE_URL

load_dotenv()

logger = logging.getLogger(__name__)
logger.setLevel(logging.getLevelName(os.getenv("LOG_LEVEL", "INFO")))

# Global cache instance
_CONFIG_INSTANCE: Optional["IncapsulaConfig"] = None


@dataclass
class IncapsulaConfig:
    """Incapsula API client configuration."""

    # ========================
    # 🔐 INCAPSULA API SETTINGS
    # ========================
    API_ID: str = field(default_factory=lambda: os.getenv("INCAPSULA_API_ID", ""))
    API_KEY: str = field(default_factory=lambda: os.getenv("INCAPSULA_API_KEY", ""))
    BASE_URL: str = field(default_factory=lambda: os.getenv("INCAPSULA_BASE_URL", BASE_URL))

    # ========================
    # ⚙️ TECHNICAL SETTINGS
    # ========================
    REQUEST_TIMEOUT: int = field(default_factory=lambda: int(os.getenv("INCAPSULA_REQUEST_TIMEOUT", "30")))
    DEBUG: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def load(cls) -> "IncapsulaConfig":
        """Load config from the environment."""
        return cls()

    def validate(self) -> bool:
        """Validate config values, raising ValueError with every problem found."""
        errors = []

        if not self.API_ID:
            errors.append("❌ INCAPSULA_API_ID is required")
        if not self.API_KEY:
            errors.append("❌ INCAPSULA_API_KEY is required")
        if not self.BASE_URL.startswith(("http://", "https://")):
            errors.append(f"❌ INCAPSULA_BASE_URL must be an http(s) URL, got {self.BASE_URL!r}")
        if self.REQUEST_TIMEOUT <= 0:
            errors.append("❌ INCAPSULA_REQUEST_TIMEOUT must be positive")

        if errors:
            raise ValueError("\n".join(errors))

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Config as a dict for debug logging, secrets masked."""
        sensitive_fields = {"API_ID", "API_KEY"}
        result = {}

        for field_name in self.__dataclass_fields__:
            value = getattr(self, field_name)
            if field_name in sensitive_fields and value:
                result[field_name] = "***HIDDEN***"
            else:
                result[field_name] = value

        return result


def get_config_sync() -> IncapsulaConfig:
    """Return the cached config instance, loading and validating it once."""
    global _CONFIG_INSTANCE
    if _CONFIG_INSTANCE is None:
        config = IncapsulaConfig.load()
        config.validate()
        _CONFIG_INSTANCE = config
        logger.info("✅ Incapsula config loaded and validated")
        logger.debug(f"Config: {_CONFIG_INSTANCE.to_dict()}")
    return _CONFIG_INSTANCE
