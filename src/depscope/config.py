"""Configuration loading and management for depscope.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.depscope.toml)
    3. Project config (./depscope.toml)
    4. Explicit config file
    5. Environment variables (DEPSCOPE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(keyword="net", verbose=True)
    >>> config.verbosity
    'verbose'
    >>> config.keyword
    'net'
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import DepscopeError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DIAGRAM_DIRECTIONS = ("LR", "RL", "TB", "TD", "BT")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a depscope run.

    Attributes:
        Scanning:
            extensions: File suffixes treated as sources/headers (case-insensitive)
            exclude_name_pattern: Regex; files whose name matches are skipped
            header_markers: An include is kept only if it contains one of these
            allow_hidden_files: Include files under dot-directories
            follow_symlinks: Follow symbolic links while walking
            max_files: Stop scanning after this many files

        Diagram:
            diagram_direction: Mermaid flowchart direction
            keyword: Default keyword for scoped diagrams ("" = full diagram)

        Pipeline:
            enable_validation: Check graph invariants after construction
            verbosity: Logging verbosity level
    """

    # Scanning
    extensions: list[str] = field(
        default_factory=lambda: [".c", ".cc", ".cpp", ".cxx", ".h", ".hh", ".hpp", ".hxx"]
    )
    exclude_name_pattern: str = "test|mock"
    header_markers: list[str] = field(default_factory=lambda: [".h", ".hpp"])
    allow_hidden_files: bool = False
    follow_symlinks: bool = False
    max_files: int = 20000

    # Diagram
    diagram_direction: str = "LR"
    keyword: str = ""

    # Pipeline
    enable_validation: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension required")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")

        if self.exclude_name_pattern:
            try:
                re.compile(self.exclude_name_pattern)
            except re.error as e:
                raise InvalidConfigError("exclude_name_pattern", self.exclude_name_pattern, str(e))

        if not self.header_markers:
            raise InvalidConfigError(
                "header_markers", self.header_markers, "at least one marker required"
            )

        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")

        if self.diagram_direction.upper() not in DIAGRAM_DIRECTIONS:
            raise InvalidConfigError(
                "diagram_direction",
                self.diagram_direction,
                f"expected one of {', '.join(DIAGRAM_DIRECTIONS)}",
            )

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")

    @property
    def normalized_extensions(self) -> frozenset[str]:
        """Lower-cased extension set used for suffix matching."""
        return frozenset(ext.lower() for ext in self.extensions)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options don't mask file values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        DepscopeError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".depscope.toml"
    if global_config.exists():
        merged.update(_load_config_file(global_config, "global config"))

    project_config = Path.cwd() / "depscope.toml"
    if project_config.exists():
        merged.update(_load_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise DepscopeError(f"Config file not found: {config_file}")
        merged.update(_load_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise DepscopeError(f"Invalid configuration: {e}")


def _load_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except DepscopeError:
        raise
    except Exception as e:
        raise DepscopeError(f"Invalid {label} '{path}': {e}")

    # Settings may live at top level or under a [depscope] table
    section = data.get("depscope")
    if isinstance(section, dict):
        return dict(section)
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEPSCOPE_* environment variables.

    Supported environment variables:
        DEPSCOPE_EXTENSIONS: comma-separated list (.cpp,.h)
        DEPSCOPE_EXCLUDE_NAME_PATTERN: regex
        DEPSCOPE_HEADER_MARKERS: comma-separated list
        DEPSCOPE_ALLOW_HIDDEN_FILES: bool
        DEPSCOPE_FOLLOW_SYMLINKS: bool
        DEPSCOPE_MAX_FILES: int
        DEPSCOPE_DIAGRAM_DIRECTION: LR/RL/TB/TD/BT
        DEPSCOPE_KEYWORD: str
        DEPSCOPE_ENABLE_VALIDATION: bool
        DEPSCOPE_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any DEPSCOPE_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"DEPSCOPE_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise DepscopeError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Lists come in comma-separated
    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # tomli is declared as a dependency for Python < 3.11
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
