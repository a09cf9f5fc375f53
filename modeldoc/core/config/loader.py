"""TOML configuration loader for modeldoc."""

from __future__ import annotations

import os
import re
import time
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, cast

import pydantic

from modeldoc.core.config.models import LoggingConfig, ModelDocConfig
from modeldoc.core.docs.models import Settings
from modeldoc.core.exceptions import ConfigurationError, ValidationError
from modeldoc.core.keys import KEY_PATTERN, compile_key_pattern
from modeldoc.core.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Parameters
    ----------
    value : str
        Environment variable value

    Returns
    -------
    bool
        Parsed boolean value

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = _TRUTHY_VALUES | _FALSY_VALUES
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> ModelDocConfig:
    """Cached configuration loader."""
    loader = ConfigLoader()
    return loader._load_and_parse(Path(path_str))


class ConfigLoader:
    """Loads and processes modeldoc configuration from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_from_toml(self, path: str | Path | None = None) -> ModelDocConfig:
        """Load configuration from TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches for modeldoc.toml or pyproject.toml

        Returns
        -------
        ModelDocConfig
            Parsed configuration with environment variables substituted

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If the file is not valid TOML or a section is invalid
        """
        config_path = self._find_config_file(path)
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> ModelDocConfig:
        """Load and parse configuration file."""
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        if config_path.name == "pyproject.toml":
            modeldoc_data = data.get("tool", {}).get("modeldoc", {})
            if not modeldoc_data:
                logger.warning("No [tool.modeldoc] section found in pyproject.toml, using defaults")
                return get_default_config()
        elif "tool" in data and "modeldoc" in data.get("tool", {}):
            modeldoc_data = data["tool"]["modeldoc"]
        else:
            # Flat format (top-level keys)
            modeldoc_data = data

        modeldoc_data = self._substitute_env_vars(modeldoc_data)
        return self._parse_config(modeldoc_data)

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Parameters
        ----------
        path : str | Path | None
            Explicit path or None to search

        Returns
        -------
        Path
            Path to configuration file

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("MODELDOC_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug(f"Using config from MODELDOC_CONFIG_PATH: {config_path}")
                return config_path
            logger.warning(f"MODELDOC_CONFIG_PATH set but file not found: {config_path}")

        for search_path in (Path("modeldoc.toml"), Path(".modeldoc.toml")):
            if search_path.exists():
                return search_path

        # pyproject.toml only counts when it has a [tool.modeldoc] section
        current = Path.cwd()
        while True:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                with pyproject.open("rb") as f:
                    data = tomllib.load(f)
                if "modeldoc" in data.get("tool", {}):
                    return pyproject
            if current == current.parent:
                break
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Searched for: modeldoc.toml, .modeldoc.toml, "
            "pyproject.toml with [tool.modeldoc]"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ``${VAR}`` environment variables in configuration."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        f"Environment variable ${{{var_name}}} not found, keeping placeholder"
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> ModelDocConfig:
        """Parse configuration data into ModelDocConfig.

        Raises
        ------
        ConfigurationError
            If a value has the wrong type or the key pattern does not compile
        """
        modules = data.get("modules", [])
        if isinstance(modules, str):
            modules = [modules]
        if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
            raise ConfigurationError("modules", "must be a list of module names")

        key_pattern = data.get("key_pattern", KEY_PATTERN)
        try:
            compile_key_pattern(key_pattern)
        except (ValidationError, TypeError) as e:
            raise ConfigurationError("key_pattern", str(e)) from e

        workers = data.get("workers", 1)
        if not isinstance(workers, int) or workers < 1:
            raise ConfigurationError("workers", f"must be a positive integer, got {workers!r}")

        config = ModelDocConfig(
            modules=tuple(modules),
            universe=data.get("universe"),
            output=data.get("output", "build/models.json"),
            key_pattern=key_pattern,
            recursive=bool(data.get("recursive", True)),
            docstrings_as_descriptions=bool(data.get("docstrings_as_descriptions", False)),
            workers=workers,
            settings=self._parse_settings(data.get("settings", {})),
            logging=self._parse_logging_config(data.get("logging", {})),
        )
        logger.debug("Loaded {count} modules", count=len(config.modules))
        return config

    def _parse_settings(self, settings_data: dict[str, Any]) -> Settings:
        """Parse the ``[settings]`` section; ``founded`` defaults to the load time."""
        settings_data = dict(settings_data)
        settings_data.setdefault("founded", time.time_ns() // 1_000_000)
        if env_record_time := os.getenv("MODELDOC_RECORD_TIME"):
            try:
                settings_data["record_time"] = _parse_bool_env(env_record_time)
            except ValueError as e:
                logger.warning(f"Invalid MODELDOC_RECORD_TIME value: {e}")
        try:
            return Settings.model_validate(settings_data)
        except pydantic.ValidationError as e:
            raise ConfigurationError("settings", str(e)) from e

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over TOML configuration:
        - MODELDOC_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - MODELDOC_LOG_FORMAT: Output format (console, json, structured, rich)
        - MODELDOC_LOG_FILE: Optional file path for log output
        - MODELDOC_LOG_COLOR: Use color output (true/false)
        - MODELDOC_LOG_TIMESTAMP: Include timestamp (true/false)

        Parameters
        ----------
        logging_data : dict[str, Any]
            Logging section from TOML config

        Returns
        -------
        LoggingConfig
            Parsed logging configuration with env overrides applied
        """
        level = logging_data.get("level", "INFO")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("MODELDOC_LOG_LEVEL"):
            level = env_level.upper()
            logger.debug(f"Overriding log level from env: {level}")

        if env_format := os.getenv("MODELDOC_LOG_FORMAT"):
            format_type = env_format.lower()
            logger.debug(f"Overriding log format from env: {format_type}")

        if env_file := os.getenv("MODELDOC_LOG_FILE"):
            output_file = env_file
            logger.debug(f"Overriding log file from env: {output_file}")

        if env_color := os.getenv("MODELDOC_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning(f"Invalid MODELDOC_LOG_COLOR value: {e}")

        if env_timestamp := os.getenv("MODELDOC_LOG_TIMESTAMP"):
            try:
                include_timestamp = _parse_bool_env(env_timestamp)
            except ValueError as e:
                logger.warning(f"Invalid MODELDOC_LOG_TIMESTAMP value: {e}")

        return LoggingConfig(
            level=cast("Literal['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']", level),
            format=cast("Literal['console', 'json', 'structured', 'rich']", format_type),
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


def load_config(path: str | Path | None = None) -> ModelDocConfig:
    """Load configuration from TOML file or return defaults.

    Parameters
    ----------
    path : str | Path | None
        Path to configuration file or None to search

    Returns
    -------
    ModelDocConfig
        Loaded configuration, or defaults if no file is found by searching

    Raises
    ------
    FileNotFoundError
        If an explicit ``path`` does not exist
    """
    loader = ConfigLoader()
    if path is not None:
        return loader.load_from_toml(path)
    try:
        return loader.load_from_toml(None)
    except FileNotFoundError:
        logger.info("No configuration file found, using defaults")
        return get_default_config()


def clear_config_cache() -> None:
    """Clear all configuration caches.

    Useful for testing or when configuration files have been modified
    and you need to force a reload.
    """
    _load_and_parse_cached.cache_clear()


def get_default_config() -> ModelDocConfig:
    """Get default configuration.

    Returns
    -------
    ModelDocConfig
        Default configuration; ``founded`` is the current time
    """
    return ModelDocConfig(settings=Settings(founded=time.time_ns() // 1_000_000))
