"""Provides functions for loading and validating configuration settings.

Supports loading from a JSON (or YAML) configuration file, a .env file and
environment variables. The result is a typed, immutable AppConfig that is
passed explicitly to every component that needs it.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv

from pawscheck.domain.exceptions import ConfigurationError
from pawscheck.domain.models.common import DelayRange, RetryPolicy

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_FILE = Path("config.json")
ENV_FILE_NAME = ".env"
ENV_PREFIX = "PAWSCHECK_"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36"
)
DEFAULT_LOG_FILE = "logs/pawscheck.log"

# Environment variable suffix -> path in the raw config mapping
ENV_OVERRIDES = {
    "API_ENDPOINT": ("apiEndpoint",),
    "SIGNATURE_MESSAGE": ("signatureMessage",),
    "USER_AGENT": ("userAgent",),
    "ENABLE_PROXY": ("enableProxy",),
    "CONCURRENCY": ("concurrency",),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file"),
}
# Overrides kept verbatim instead of going through coerce_env_value
STRING_OVERRIDES = {"API_ENDPOINT", "SIGNATURE_MESSAGE", "USER_AGENT", "LOG_LEVEL", "LOG_FILE"}


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    file: Optional[str] = DEFAULT_LOG_FILE


@dataclass(frozen=True)
class AppConfig:
    """Validated runtime configuration."""
    api_endpoint: str
    signature_message: str
    enable_proxy: bool = False
    concurrency: int = 5
    delay: DelayRange = field(default_factory=DelayRange)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    user_agent: str = DEFAULT_USER_AGENT
    log_settings: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "AppConfig":
        """Builds an AppConfig from the camelCase keys of config.json.

        Raises:
            ConfigurationError: naming the first invalid or missing field.
        """
        if not isinstance(raw, Mapping):
            raise ConfigurationError("Configuration root must be an object")

        api_endpoint = _require_str(raw, "apiEndpoint")
        parsed = urlparse(api_endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"'apiEndpoint' must be an http(s) URL, got '{api_endpoint}'")
        signature_message = _require_str(raw, "signatureMessage")

        concurrency = _get_int(raw, "concurrency", 5)
        if concurrency < 1:
            raise ConfigurationError(f"'concurrency' must be >= 1, got {concurrency}")

        delay_raw = _get_section(raw, "delayBetweenAccounts")
        retry_raw = _get_section(raw, "retryOptions")
        logging_raw = _get_section(raw, "logging")
        try:
            delay = DelayRange(
                min_ms=_get_int(delay_raw, "min", 1000, prefix="delayBetweenAccounts."),
                max_ms=_get_int(delay_raw, "max", 3000, prefix="delayBetweenAccounts."),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid 'delayBetweenAccounts': {e}") from e
        try:
            retry_policy = RetryPolicy(
                max_retries=_get_int(retry_raw, "retries", 3, prefix="retryOptions."),
                min_backoff_ms=_get_int(retry_raw, "minTimeout", 1000, prefix="retryOptions."),
                max_backoff_ms=_get_int(retry_raw, "maxTimeout", 5000, prefix="retryOptions."),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid 'retryOptions': {e}") from e

        log_file = logging_raw.get("file", DEFAULT_LOG_FILE)
        return cls(
            api_endpoint=api_endpoint,
            signature_message=signature_message,
            enable_proxy=_get_bool(raw, "enableProxy", False),
            concurrency=concurrency,
            delay=delay,
            retry_policy=retry_policy,
            user_agent=str(raw.get("userAgent") or DEFAULT_USER_AGENT),
            log_settings=LoggingSettings(
                level=str(logging_raw.get("level", "INFO")).upper(),
                file=str(log_file) if log_file else None,
            ),
        )


# --- Field helpers ---

def _require_str(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        raise ConfigurationError(f"Missing required configuration field '{key}'")
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"'{key}' must be a non-empty string")
    return value.strip()

def _get_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"'{key}' must be an object")
    return value

def _get_int(raw: Mapping[str, Any], key: str, default: int, prefix: str = "") -> int:
    value = raw.get(key, default)
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigurationError(f"'{prefix}{key}' must be an integer, got {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(f"'{prefix}{key}' must be an integer, got {value!r}") from None
    if not number.is_integer():
        raise ConfigurationError(f"'{prefix}{key}' must be an integer, got {value!r}")
    return int(number)

def _get_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


# --- Loading ---

def coerce_env_value(value: str) -> Any:
    """Converts common string types from environment variables."""
    if value.lower() == 'true':
        return True
    elif value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        else:
            return int(value)
    except (ValueError, TypeError):
        return value

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

def read_config_file(config_file: Path) -> Dict[str, Any]:
    """Parses the configuration file. YAML is used for .yaml/.yml, JSON otherwise."""
    if not config_file.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_file}")
    try:
        content = config_file.read_text(encoding="utf-8")
        if config_file.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read configuration {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_file} did not contain an object")
    logger.debug(f"Loaded configuration from: {config_file}")
    return data

def apply_env_overrides(raw: Dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Returns a copy of raw with PAWSCHECK_* environment variables applied."""
    environ = os.environ if environ is None else environ
    merged = dict(raw)
    for suffix, path in ENV_OVERRIDES.items():
        env_key = ENV_PREFIX + suffix
        if env_key not in environ:
            continue
        value = environ[env_key]
        if suffix not in STRING_OVERRIDES:
            value = coerce_env_value(value)
        if len(path) == 1:
            merged[path[0]] = value
        else:
            section = dict(merged.get(path[0]) or {})
            section[path[1]] = value
            merged[path[0]] = section
        logger.debug(f"Configuration '{'.'.join(path)}' overridden by {env_key}")
    return merged

def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> AppConfig:
    """Loads and validates configuration.

    Priority order (highest to lowest):
    1. Environment Variables (PAWSCHECK_*)
    2. .env file
    3. Configuration file
    4. Defaults defined on AppConfig

    Args:
        config_file: Path to config.json (or a YAML file).
        env_file: Path to the .env file (searches upwards from cwd if None).

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid.
    """
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.debug(f"Loaded environment variables from: {dotenv_path}")

    raw = apply_env_overrides(read_config_file(Path(config_file)))
    config = AppConfig.from_mapping(raw)
    logger.debug(f"Configuration validated: {config}")
    return config
