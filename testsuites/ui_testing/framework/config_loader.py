"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration file (config/config.yaml)
    - Environment variable override (TRELLO_BASE_URL overrides trello.base_url)
    - Dot notation path access with default values
    - Typed, validated browser session settings

The loader is constructed once per run and passed explicitly to the
browser session and the reporter.

================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from .errors import ConfigurationError


# Default configuration file path (repo root / config / config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

# Browser engines Playwright can launch
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (TRELLO_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("trello.base_url")
        'https://trello.com'

        >>> config.get("browser.viewport_width", 1920)
        1920

    Environment Variable Mapping:
        - browser.type -> BROWSER_TYPE
        - browser.headless -> BROWSER_HEADLESS
        - trello.email -> TRELLO_EMAIL
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "trello.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "browser", "trello")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value


@dataclass(frozen=True)
class SessionSettings:
    """
    Validated settings for one browser session.

    Attributes:
        browser_type: One of SUPPORTED_BROWSERS
        headless: Run browser without a window
        viewport_width: Context viewport width in pixels
        viewport_height: Context viewport height in pixels
        slow_mo: Delay in milliseconds between engine operations
        base_url: Board application URL opened after launch
        username: Login email/username
        password: Login password
        default_timeout: Engine wait budget in milliseconds
    """
    browser_type: str
    headless: bool
    viewport_width: int
    viewport_height: int
    slow_mo: int
    base_url: str
    username: str
    password: str
    default_timeout: int = 10000

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "SessionSettings":
        """
        Resolve and validate session settings.

        Raises:
            ConfigurationError: Listing every missing or invalid value
        """
        problems: List[str] = []

        browser_type = str(config.get("browser.type", "chromium") or "").strip().lower()
        if browser_type not in SUPPORTED_BROWSERS:
            problems.append(
                f"browser.type must be one of {', '.join(SUPPORTED_BROWSERS)} "
                f"(got '{browser_type}')"
            )

        viewport: Dict[str, int] = {}
        for dimension in ("viewport_width", "viewport_height"):
            raw = config.get(f"browser.{dimension}", 1920 if dimension == "viewport_width" else 1080)
            try:
                number = int(raw)
            except (TypeError, ValueError):
                number = 0
            if number <= 0:
                problems.append(f"browser.{dimension} must be a positive integer (got '{raw}')")
            viewport[dimension] = number

        try:
            slow_mo = int(config.get("browser.slow_mo", 0))
            default_timeout = int(config.get("browser.default_timeout", 10000))
        except (TypeError, ValueError) as e:
            problems.append(f"browser timings must be integers: {e}")
            slow_mo, default_timeout = 0, 10000

        required: Dict[str, str] = {}
        for key in ("trello.base_url", "trello.email", "trello.password"):
            value = config.get(key, "")
            value = "" if value is None else str(value).strip()
            if not value:
                problems.append(f"{key} is required")
            required[key] = value

        if problems:
            raise ConfigurationError(
                "Invalid session configuration:\n"
                + "\n".join(f"  - {p}" for p in problems)
            )

        return cls(
            browser_type=browser_type,
            headless=bool(config.get("browser.headless", True)),
            viewport_width=viewport["viewport_width"],
            viewport_height=viewport["viewport_height"],
            slow_mo=slow_mo,
            base_url=required["trello.base_url"],
            username=required["trello.email"],
            password=required["trello.password"],
            default_timeout=default_timeout,
        )

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}


__all__ = [
    "ConfigLoader",
    "SessionSettings",
    "SUPPORTED_BROWSERS",
    "DEFAULT_CONFIG_PATH",
]
