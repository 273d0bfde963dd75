from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def get_package_version() -> str:
    try:
        return importlib.metadata.version("pageflow")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_git_commit() -> Optional[str]:
    """Short commit hash of the checkout this module lives in, if any."""
    here = Path(__file__).resolve().parent
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(here),
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    commit = get_git_commit()
    version = get_package_version()
    return f"{version} ({commit})" if commit else version
