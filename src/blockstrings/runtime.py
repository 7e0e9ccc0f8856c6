"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.yaml_workspace import FileWorkspace, YamlWorkspaceCodec
from .config import BlockstringsConfig, load_config
from .core.workspace import Workspace


@dataclass
class Runtime:
    """Container for all wired components."""
    workspace: Workspace
    store: FileWorkspace
    config: BlockstringsConfig


def build_runtime(
    workspace_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Load configuration and the workspace document it points at."""
    config = load_config(config_path=config_path, workspace_path=workspace_path)

    # CLI args win over config values
    if workspace_path is None:
        workspace_path = config.workspace.path

    codec = YamlWorkspaceCodec(
        string_types=config.blocks.string_types,
        string_field=config.blocks.string_field,
    )
    store = FileWorkspace(workspace_path, codec)

    return Runtime(
        workspace=store.load(),
        store=store,
        config=config,
    )
