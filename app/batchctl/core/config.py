"""batchctl configuration and settings.

This module provides the configuration model and I/O functions for the
batch commands. Values here are defaults: command-line options override
them, and everything is fixed for the duration of one run.

Configuration is stored in ~/.config/batchctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from batchctl.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from batchctl.core.paths import get_config_path
from batchctl.transforms.archive import DEFAULT_ARCHIVE_SUFFIX
from batchctl.transforms.transcode import (
    DEFAULT_INPUT_EXTENSIONS,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_TRANSCODE_PARAMS,
)

logger = logging.getLogger(__name__)


def _clean_extension(value: str) -> str:
    ext = value.strip().lstrip(".").lower()
    if not ext:
        msg = "extension cannot be empty"
        raise ValueError(msg)
    return ext


class ToolsConfig(BaseModel):
    """Explicit locations for external tools.

    Attributes:
        seven_zip: Path to the 7-Zip executable, probed before any default.
        ffmpeg: Path to the FFmpeg executable, probed before any default.
        search_roots: Extra directories searched for bare tool names.
    """

    model_config = ConfigDict(extra="forbid")

    seven_zip: Annotated[str | None, Field(description="7-Zip executable")] = None
    ffmpeg: Annotated[str | None, Field(description="FFmpeg executable")] = None
    search_roots: Annotated[
        list[Path],
        Field(description="Extra directories searched for tools"),
    ] = []


class ArchiveConfig(BaseModel):
    """Settings for ``batchctl archive``."""

    model_config = ConfigDict(extra="forbid")

    suffix: Annotated[str, Field(min_length=1, description="Archive suffix")] = (
        DEFAULT_ARCHIVE_SUFFIX
    )
    blacklist: Annotated[
        list[str],
        Field(description="Extensions never archived"),
    ] = ["ts", DEFAULT_ARCHIVE_SUFFIX]
    extra_args: Annotated[
        list[str],
        Field(description="Additional archiver switches"),
    ] = []

    @field_validator("blacklist")
    @classmethod
    def normalize_blacklist(cls, v: list[str]) -> list[str]:
        """Normalize extensions to lower case without a leading dot."""
        return [_clean_extension(ext) for ext in v]


class TranscodeConfig(BaseModel):
    """Settings for ``batchctl transcode``."""

    model_config = ConfigDict(extra="forbid")

    extensions: Annotated[
        list[str],
        Field(min_length=1, description="Input extensions to transcode"),
    ] = list(DEFAULT_INPUT_EXTENSIONS)
    output_extension: Annotated[str, Field(description="Output extension")] = (
        DEFAULT_OUTPUT_EXTENSION
    )
    params: Annotated[
        list[str],
        Field(description="Transcoder switches between input and output"),
    ] = list(DEFAULT_TRANSCODE_PARAMS)

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Normalize extensions to lower case without a leading dot."""
        return [_clean_extension(ext) for ext in v]

    @field_validator("output_extension")
    @classmethod
    def normalize_output_extension(cls, v: str) -> str:
        """Normalize the output extension."""
        return _clean_extension(v)


class RenameConfig(BaseModel):
    """Settings for ``batchctl rename``."""

    model_config = ConfigDict(extra="forbid")

    target_dir: Annotated[Path, Field(description="Directory receiving renamed copies")] = Path(
        "./target"
    )
    extensions: Annotated[
        list[str],
        Field(min_length=1, description="Extensions to rename"),
    ] = ["mp4", "webm", "m4v"]
    move: Annotated[bool, Field(description="Delete sources after copying")] = False

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Normalize extensions to lower case without a leading dot."""
        return [_clean_extension(ext) for ext in v]


class BatchConfig(BaseModel):
    """Top-level batchctl configuration.

    Attributes:
        skip_hidden: Skip entries whose name starts with a dot.
        exclude_patterns: Glob patterns excluded by name for every command.
        tools: External tool locations.
        archive: Archive command settings.
        transcode: Transcode command settings.
        rename: Rename command settings.
    """

    model_config = ConfigDict(extra="forbid")

    skip_hidden: bool = True
    exclude_patterns: list[str] = []
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    transcode: TranscodeConfig = Field(default_factory=TranscodeConfig)
    rename: RenameConfig = Field(default_factory=RenameConfig)


def load_config(path: Path | None = None) -> BatchConfig:
    """Load configuration from a TOML file.

    A missing file at the default location yields the built-in defaults;
    a missing file that was explicitly requested is an error.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated BatchConfig object.

    Raises:
        ConfigNotFoundError: If an explicitly given config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return BatchConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return BatchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: BatchConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The BatchConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_toml(config: BatchConfig) -> str:
    """Render a configuration as TOML text."""
    return tomli_w.dumps(config.model_dump(mode="json", exclude_none=True))
