"""Core logic for alfredzed.

This package contains:
    - items: Launcher item model
    - paths: Display names for history and filesystem paths
    - workspaces: Recent workspaces from the Zed history database
    - directories: Subdirectories of configured project roots
    - filter: Substring query filtering
    - response: Placeholder substitution and JSON output
    - config: Application configuration management
    - console: Rich console output and logging
    - result: Result type and error taxonomy
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
