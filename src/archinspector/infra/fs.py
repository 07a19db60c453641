from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory used for diagnostics. Analysis
results are never written to disk.
"""

import os

APP_DIR_NAME = "ArchInspector"
UNIX_APP_DIR_NAME = ".archinspector"


def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for application data.

    - Windows: %LOCALAPPDATA%/ArchInspector
    - Linux/Mac: ~/.archinspector

    The directory is not created here; callers that write into it create
    the subdirectory they need.

    Returns:
        str: Absolute path to the application data directory.
    """
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.join(base, APP_DIR_NAME)

    return os.path.abspath(os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME))
