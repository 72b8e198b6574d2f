"""alfredzed - Alfred script filter for Zed workspaces and project directories.

The `alfred-zed` command prints either the recently opened Zed workspaces
or the subdirectories of configured project roots as Alfred JSON.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
