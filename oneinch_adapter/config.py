"""
Configuration management for the 1inch adapter

Loads settings from environment variables and .env file.
Includes logging configuration with optional file output.
"""

import os
import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError, InvalidParameter
from .types.chains import ChainId, DEFAULT_BASE_URL, ApiService


def _load_env_file():
    """Load .env file from project root"""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass(frozen=True)
class OneInchConfig:
    """
    1inch API client configuration

    Every field defaults to its environment variable; explicit arguments win.
    Immutable once built, so one instance can back any number of concurrent
    calls.

    Environment variables:
        ONEINCH_API_KEY: API key sent as "Authorization: Bearer <key>"
        ONEINCH_BASE_URL: API host (default: https://api.1inch.dev)
        ONEINCH_TIMEOUT: Per-request timeout in seconds (default: 30)
        ONEINCH_DEFAULT_CHAIN_ID: Chain used when a request omits one
        ONEINCH_SWAP_API_VERSION / ONEINCH_PRICE_API_VERSION / ONEINCH_TOKEN_API_VERSION
    """
    api_key: Optional[str] = field(default_factory=lambda: _get_env("ONEINCH_API_KEY", None))
    base_url: str = field(default_factory=lambda: _get_env("ONEINCH_BASE_URL", DEFAULT_BASE_URL))
    timeout: float = field(default_factory=lambda: _get_env_float("ONEINCH_TIMEOUT", 30.0))
    default_chain_id: Optional[ChainId] = field(
        default_factory=lambda: _get_env("ONEINCH_DEFAULT_CHAIN_ID", None)
    )
    swap_api_version: str = field(
        default_factory=lambda: _get_env("ONEINCH_SWAP_API_VERSION", ApiService.SWAP.default_version)
    )
    price_api_version: str = field(
        default_factory=lambda: _get_env("ONEINCH_PRICE_API_VERSION", ApiService.PRICE.default_version)
    )
    token_api_version: str = field(
        default_factory=lambda: _get_env("ONEINCH_TOKEN_API_VERSION", ApiService.TOKEN.default_version)
    )

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError.missing("base_url")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError.invalid("timeout", "must be a number of seconds")
        if self.timeout <= 0:
            raise ConfigurationError.invalid("timeout", "must be positive")

        if self.default_chain_id is not None:
            try:
                object.__setattr__(self, "default_chain_id", ChainId.parse(self.default_chain_id))
            except InvalidParameter as e:
                raise ConfigurationError.invalid("default_chain_id", e.reason or str(e)) from None

    def api_version(self, service: ApiService) -> str:
        """Configured version of an upstream API family"""
        if service is ApiService.SWAP:
            return self.swap_api_version
        if service is ApiService.PRICE:
            return self.price_api_version
        return self.token_api_version

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        key = "***" if self.api_key else None
        return (
            f"OneInchConfig(api_key={key!r}, base_url={self.base_url!r}, timeout={self.timeout}, "
            f"default_chain_id={self.default_chain_id!r})"
        )


@dataclass
class LoggingConfig:
    """
    Logging configuration with optional file output

    Environment variables:
        LOG_FILE: Path to log file (default: no file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)

    Example .env:
        LOG_LEVEL=DEBUG
        LOG_CONSOLE=true
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Usage:
        from oneinch_adapter.config import get_config

        print(get_config().oneinch.base_url)
    """
    oneinch: OneInchConfig = field(default_factory=OneInchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance, built on the first get_config() call
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get global configuration instance

    Raises:
        ConfigurationError: If the environment holds invalid settings
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global _config
    _config = Config.reload()
    return _config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "oneinch_adapter",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (global config, or the environment, if None)
        logger_name: Name of the logger to configure (default: oneinch_adapter)

    Returns:
        Configured logger instance

    Example:
        from oneinch_adapter.config import LoggingConfig, setup_logging
        logger = setup_logging(LoggingConfig(log_level="DEBUG", console_output=True))
    """
    if log_config is None:
        log_config = _config.logging if _config is not None else LoggingConfig()

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to release file handles on reload
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)
    handlers: List[logging.Handler] = []

    if log_config.log_file:
        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
