"""Core utility functions for Token Registry Tools.

This module provides shared path helpers used by the walker and the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict

from token_registry.core.enums import RegistryKind


def get_registry_paths(registry_root: Path) -> Dict[RegistryKind, Path]:
    """Get the top-level directory for each registry kind.

    Layout:
    - contracts: {registry_root}/contracts/{chainId}/{address}.json
    - projects:  {registry_root}/projects/{slug}.json
    - tokens:    {registry_root}/tokens/{address}/{address}.json

    Args:
        registry_root: Path to the registry checkout.

    Returns:
        Mapping of kind to its root directory, in processing order.

    Examples:
        >>> paths = get_registry_paths(Path("registry"))
        >>> print(paths[RegistryKind.TOKEN])
        registry/tokens
    """
    return {kind: registry_root / kind.root_dir for kind in RegistryKind}


def entry_ref(path: Path, registry_root: Path) -> str:
    """Return a stable, registry-relative POSIX path used in reports.

    Examples:
        >>> entry_ref(Path("/r/projects/uniswap.json"), Path("/r"))
        'projects/uniswap.json'
    """
    try:
        return path.relative_to(registry_root).as_posix()
    except ValueError:
        return path.as_posix()
