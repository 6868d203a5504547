"""
Configuration settings for the relay service.
Environment variables override defaults.
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Relay configuration"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Discord
    DISCORD_BOT_TOKEN: str = ""
    DISCORD_API_BASE: str = "https://discord.com/api/v10"
    DISCORD_TIMEOUT: int = 10  # seconds

    # Formatting
    MESSAGE_LAYOUT: str = "text"  # text | embed_fields | embed_description
    MAX_DIAGNOSTIC_LENGTH: int = 1000  # 0 = unbounded
    VALIDATE_MESSAGES: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(key)
            if env_value is not None:
                field_type = self.__dataclass_fields__[key].type
                if field_type == bool:
                    setattr(self, key, env_value.lower() in ("true", "1", "yes"))
                elif field_type == int:
                    setattr(self, key, int(env_value))
                else:
                    setattr(self, key, env_value)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests override it with their own Settings."""
    return settings
