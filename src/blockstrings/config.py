"""Configuration loader for blockstrings.toml."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.errors import ConfigError
from .core.model import DEFAULT_STRING_FIELD
from .flyout import DEFAULT_NAME, FLYOUT_TYPES

CONFIG_NAME = "blockstrings.toml"


@dataclass
class WorkspaceConfig:
    """Workspace document location."""
    path: Path


@dataclass
class BlocksConfig:
    """Which block types reference string names, and through which field."""
    string_types: list[str] = field(default_factory=lambda: list(FLYOUT_TYPES))
    string_field: str = DEFAULT_STRING_FIELD


@dataclass
class FlyoutConfig:
    """Flyout category configuration."""
    default_name: str = DEFAULT_NAME
    block_types: list[str] = field(default_factory=lambda: list(FLYOUT_TYPES))


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class BlockstringsConfig:
    """Complete blockstrings configuration."""
    workspace: WorkspaceConfig
    blocks: BlocksConfig
    flyout: FlyoutConfig
    log: LogConfig


def load_config(
    config_path: Path | None = None, workspace_path: Path | None = None
) -> BlockstringsConfig:
    """
    Load configuration from blockstrings.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/blockstrings.toml
    3. blockstrings.toml next to the workspace file

    Args:
        config_path: Explicit path to config file
        workspace_path: Workspace document, used for the fallback search

    Returns:
        BlockstringsConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if workspace_path:
        search_paths.append(workspace_path.parent / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
                raise ConfigError(f"Invalid config {path}: {e}") from e
            break

    workspace_data = toml_data.get("workspace", {})
    workspace_config = WorkspaceConfig(
        path=Path(workspace_data.get("path", workspace_path or Path("workspace.yaml"))),
    )

    blocks_data = toml_data.get("blocks", {})
    blocks_config = BlocksConfig(
        string_types=list(blocks_data.get("string_types", FLYOUT_TYPES)),
        string_field=blocks_data.get("string_field", DEFAULT_STRING_FIELD),
    )

    flyout_data = toml_data.get("flyout", {})
    flyout_config = FlyoutConfig(
        default_name=flyout_data.get("default_name", DEFAULT_NAME),
        block_types=list(flyout_data.get("block_types", FLYOUT_TYPES)),
    )

    log_data = toml_data.get("log", {})
    level = str(log_data.get("level", "WARNING")).upper()
    # getLevelName maps registered names to ints, anything else to a string
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level: {level}")
    log_config = LogConfig(level=level)

    return BlockstringsConfig(
        workspace=workspace_config,
        blocks=blocks_config,
        flyout=flyout_config,
        log=log_config,
    )
