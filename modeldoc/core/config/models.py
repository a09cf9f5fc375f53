"""Configuration data models for modeldoc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from modeldoc.core.docs.models import Settings
from modeldoc.core.keys import KEY_PATTERN


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for modeldoc.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.modeldoc.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export MODELDOC_LOG_LEVEL=DEBUG
    export MODELDOC_LOG_FORMAT=json
    export MODELDOC_LOG_FILE=/var/log/modeldoc.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class ModelDocConfig:
    """Complete modeldoc configuration.

    Attributes
    ----------
    modules : tuple[str, ...]
        Python modules (or packages) whose classes form the type universe
    universe : str | None
        Path to a JSON/YAML universe description, used instead of ``modules``
    output : str
        Path of the generated document
    key_pattern : str
        Regular expression every model key must match
    recursive : bool
        Also scan submodules of the listed packages
    docstrings_as_descriptions : bool
        Fall back to class docstrings for model descriptions
    workers : int
        Threads used to resolve models
    settings : Settings
        Project settings copied into the document
    logging : LoggingConfig
        Logging configuration

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.modeldoc]
    modules = ["myproject.models"]
    output = "build/models.json"

    [tool.modeldoc.settings]
    project_description = "Spells and weapons"
    project_url = "https://example.org"
    maintainers = ["Alice", "Bob"]
    ```
    """

    modules: tuple[str, ...] = ()
    universe: str | None = None
    output: str = "build/models.json"
    key_pattern: str = KEY_PATTERN
    recursive: bool = True
    docstrings_as_descriptions: bool = False
    workers: int = 1
    settings: Settings = field(default_factory=Settings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
