"""Configuration loading and management for errorflow.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.errorflow.toml)
    3. Project config (./errorflow.toml)
    4. Explicit config file
    5. Environment variables (ERRORFLOW_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]
SupertypeMatch = Literal["substring", "exact"]

# Supertype names that mark a class declaration as an error type
DEFAULT_ERROR_SUPERTYPES = (
    "Error",
    "TypedError",
    "TypeError",
    "RangeError",
    "ReferenceError",
)


def _default_extensions() -> list[str]:
    # Imported here: the scanning package imports this module
    from .scanning.languages import known_extensions

    return sorted(known_extensions())


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an error-flow analysis run.

    All fields have sensible defaults. Users typically override only a few
    fields via CLI flags or config file.

    Attributes:
        Performance tuning:
            workers: Number of parallel workers (None = auto-detect)

        File filtering:
            exclude_patterns: Glob patterns to exclude from discovery
            extensions: File extensions picked up by discovery
            max_file_size_mb: Files above this size are reported unavailable
            max_files: Maximum number of files to analyze
            allow_hidden_files: Include hidden files (starting with .)
            follow_symlinks: Follow symbolic links during discovery

        Classification:
            error_supertypes: Supertype names that mark an error declaration
            supertype_match: "substring" (recall) or "exact" (precision)
            implicit_catch_type: Fallback intercept name for a catch clause
                without a type annotation
            strict_parse: Treat files with syntax errors as unavailable

        Output control:
            verbosity: Logging verbosity level
    """

    # Performance tuning
    workers: Optional[int] = None  # None = auto-detect from CPU cores

    # File filtering
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "node_modules/*",
            "dist/*",
            "build/*",
            "coverage/*",
            ".git/*",
            "*.test.ts",
            "*.spec.ts",
            "*.test.tsx",
            "*.spec.tsx",
            "*.d.ts",
            "*.min.js",
            "*.bundle.js",
        ]
    )
    extensions: list[str] = field(default_factory=_default_extensions)
    max_file_size_mb: float = 5.0
    max_files: int = 10000
    allow_hidden_files: bool = False
    follow_symlinks: bool = False

    # Classification
    error_supertypes: list[str] = field(default_factory=lambda: list(DEFAULT_ERROR_SUPERTYPES))
    supertype_match: SupertypeMatch = "substring"
    implicit_catch_type: str = "unknown"
    strict_parse: bool = False

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "must start with '.'")

        if not self.error_supertypes:
            raise InvalidConfigError("error_supertypes", self.error_supertypes, "must not be empty")
        if self.supertype_match not in ("substring", "exact"):
            raise InvalidConfigError(
                "supertype_match", self.supertype_match, "must be 'substring' or 'exact'"
            )
        if not self.implicit_catch_type:
            raise InvalidConfigError(
                "implicit_catch_type", self.implicit_catch_type, "must not be empty"
            )

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Configuration sources are merged in priority order (lowest to highest):
        1. Defaults (AnalysisConfig field defaults)
        2. Global config (~/.errorflow.toml)
        3. Project config (./errorflow.toml)
        4. Explicit config file (if config_file provided)
        5. Environment variables (ERRORFLOW_* prefix)
        6. CLI overrides (kwargs)

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict = {}

    # 1. Try global config
    global_config = Path.home() / ".errorflow.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    # 2. Try project config
    project_config = Path.cwd() / "errorflow.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    # 3. Explicit config file (highest priority from files)
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    # 4. Environment variables (ERRORFLOW_* prefix)
    merged.update(_load_env_vars())

    # 5. CLI overrides (highest priority)
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
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ERRORFLOW_* environment variables.

    Supported environment variables:
        ERRORFLOW_WORKERS: int
        ERRORFLOW_MAX_FILE_SIZE_MB: float
        ERRORFLOW_MAX_FILES: int
        ERRORFLOW_ALLOW_HIDDEN_FILES: bool (true/false/1/0)
        ERRORFLOW_FOLLOW_SYMLINKS: bool
        ERRORFLOW_SUPERTYPE_MATCH: substring/exact
        ERRORFLOW_IMPLICIT_CATCH_TYPE: str
        ERRORFLOW_STRICT_PARSE: bool
        ERRORFLOW_VERBOSITY: quiet/normal/verbose

    List fields (exclude_patterns, extensions, error_supertypes) are only
    configurable through TOML or CLI flags.

    Returns:
        Dict of field_name -> parsed_value for any ERRORFLOW_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"ERRORFLOW_{field_name.upper()}"
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
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the type is not env-configurable

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

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

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Accept both a flat file and a [errorflow] table
    if isinstance(data.get("errorflow"), dict):
        return dict(data["errorflow"])
    return data
