"""
SREST Configuration

Central configuration for the SREST toolkit.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Valid log levels for validation
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

ENV_PREFIX = "SREST_"


class Config:
    """
    Toolkit configuration settings.

    Organized into:
    - Internal: routing and view internals (DO NOT MODIFY)
    - Env: Environment file configuration
    - User Settings: Configurable by developers
    """

    class Internal:
        """
        SREST Internal Configuration

        WARNING: THESE SETTINGS ARE PROTECTED AND CANNOT BE MODIFIED.
        Route deduplication and template naming depend on them.
        """
        # Routing Internals
        SUPPORTED_HTTP_METHODS = ["GET", "POST", "PUT", "DELETE"]
        PATH_VAR_MARKER = ":"  # "/users/:id"
        CATCH_ALL_MARKER = "*"  # "/static/*filepath"
        DEDUP_WILDCARD = "*"

        # Views Internals
        TEMPLATE_EXTENSION = ".html"
        VIEW_DIR_SEPARATOR = ","

    class Env:
        """Environment file configuration"""
        file = ".env"  # Path to .env file (can be ".env.prod", ".env.dev", etc.)
        auto_load = True  # Automatically load .env file
        override = True  # Override existing environment variables

    # User-Configurable Settings
    # ============================

    # Framework Behavior
    DEBUG = False  # Reload templates on every render
    VERBOSE_LOGGING = True
    LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Server Configuration
    HOST = "0.0.0.0"
    PORT = 7000

    # TLS Configuration
    USE_TLS = False
    TLS_CERT = None  # Path to certificate file
    TLS_KEY = None  # Path to private key file

    # Views Configuration
    VIEWS_DIR = "templates"  # Comma-separated for several roots

    def __init_subclass__(cls, **kwargs):
        """
        Validate that child classes don't override protected attributes.

        This hook is called automatically when a class inherits from Config.
        """
        super().__init_subclass__(**kwargs)

        if "Internal" in cls.__dict__:
            raise TypeError(
                f"Cannot override Config.Internal in {cls.__name__}. "
                "Config.Internal contains routing-critical settings."
            )

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None):
        """
        Load configuration from .env file and environment variables.

        All environment variables must be prefixed with SREST_*

        Args:
            env_file: Path to .env file (overrides Config.Env.file)

        Example .env file:
            SREST_DEBUG=True
            SREST_PORT=8000
            SREST_LOG_LEVEL=DEBUG
            SREST_VIEWS_DIR=templates,themes/dark
        """
        env_file_path = env_file or cls.Env.file

        if cls.Env.auto_load:
            env_path = Path(env_file_path)
            if env_path.exists():
                load_dotenv(env_path, override=cls.Env.override)
                if cls.VERBOSE_LOGGING:
                    logger.info(f"Loaded environment from: {env_path}")
            elif cls.VERBOSE_LOGGING:
                logger.info(f".env file not found: {env_path}")

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            attr_name = env_key[len(ENV_PREFIX):]

            if attr_name == "INTERNAL" or hasattr(cls.Internal, attr_name):
                logger.warning(f"Cannot override internal setting: {env_key}")
                continue

            parsed_value = _auto_detect(env_value)

            if attr_name == "LOG_LEVEL":
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(
                        f"Invalid LOG_LEVEL: {env_value}. "
                        f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                        f"Using default value."
                    )
                    continue
                parsed_value = parsed_value.upper()

            elif attr_name == "PORT":
                if not isinstance(parsed_value, int) or not (0 <= parsed_value <= 65535):
                    logger.warning(
                        f"Invalid PORT: {env_value}. "
                        f"Must be between 0 and 65535. Using default value."
                    )
                    continue

            # VIEWS_DIR keeps its raw comma-separated form
            elif attr_name == "VIEWS_DIR":
                parsed_value = env_value

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid
        """
        if not cls.Internal.SUPPORTED_HTTP_METHODS:
            raise ValueError("Internal.SUPPORTED_HTTP_METHODS cannot be empty")

        if cls.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        if cls.USE_TLS and not (cls.TLS_CERT and cls.TLS_KEY):
            raise ValueError("USE_TLS requires both TLS_CERT and TLS_KEY")

        return True


def _auto_detect(env_value: str):
    """Auto-detect the type of an environment value."""
    if env_value.lower() in ("null", "none", "~", ""):
        return None

    if env_value.lower() in ("true", "false", "1", "0", "yes", "no", "on", "off"):
        return env_value.lower() in ("true", "1", "yes", "on")

    if env_value.lstrip("-").isdigit():
        return int(env_value)

    if "," in env_value:
        return [item.strip() for item in env_value.split(",") if item.strip()]

    if "." in env_value and env_value.replace(".", "", 1).lstrip("-").isdigit():
        return float(env_value)

    return env_value


class DevConfig(Config):
    """Development configuration with helpful defaults."""

    class Env:
        """Development environment configuration"""
        file = ".env.dev"
        auto_load = True
        override = True

    DEBUG = True
    VERBOSE_LOGGING = True
    LOG_LEVEL = "DEBUG"
    HOST = "127.0.0.1"


class ProdConfig(Config):
    """Production configuration."""

    class Env:
        """Production environment configuration"""
        file = ".env.prod"
        auto_load = True
        override = False  # Don't override system env vars in production

    DEBUG = False
    VERBOSE_LOGGING = False
    LOG_LEVEL = "WARNING"


@dataclass
class Options:
    """Listener options for Server.run."""

    use_tls: bool = False
    tls_cert: Optional[str] = None
    tls_key: Optional[str] = None
    host: str = Config.HOST

    @classmethod
    def from_config(cls, config=Config) -> "Options":
        return cls(
            use_tls=bool(config.USE_TLS),
            tls_cert=config.TLS_CERT,
            tls_key=config.TLS_KEY,
            host=config.HOST,
        )


# Default configuration
DEFAULT_CONFIG = Config
