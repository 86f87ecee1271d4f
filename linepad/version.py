from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import Optional

FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    try:
        return importlib.metadata.version("linepad")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        return None


def get_commit() -> Optional[str]:
    """Short commit hash when running from a git checkout."""
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "--short=7", "HEAD"], cwd=str(here))
    return commit


def get_version_string() -> str:
    commit = get_commit()
    if commit:
        return f"{get_version()} ({commit})"
    return get_version()
