"""
Configuration model for git-user-bend.

The CLI constructs a Config instance and passes it down into the core
logic, so the home directory and persona store are resolved once per
invocation instead of being read from the environment on every call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import MissingHomeDirectory

STORAGE_FILE_NAME = ".gub.personas"
STORAGE_ENV_VAR = "GIT_USER_BEND_STORAGE"


@dataclass
class Config:
    """
    Top-level configuration for a git-user-bend run.
    """

    home_directory: Path
    storage_file: Path
    verbosity: int = 0


def home_variable(platform: Optional[str] = None) -> str:
    """Name of the environment variable holding the user's home directory."""

    if (platform or os.name) == "nt":
        return "USERPROFILE"
    return "HOME"


def resolve_home_directory(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> Path:
    environ = os.environ if environ is None else environ
    variable = home_variable(platform)
    value = environ.get(variable, "")
    if not value.strip():
        raise MissingHomeDirectory(variable)
    return Path(value)


def load_config(
    home_directory: Optional[str] = None,
    verbosity: int = 0,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Build a Config from explicit values, falling back to the environment.

    An explicit home directory always wins over the platform variable.
    The persona store defaults to a dotfile in the home directory.
    """

    environ = os.environ if environ is None else environ

    if home_directory:
        home = Path(home_directory)
    else:
        home = resolve_home_directory(environ)

    storage_override = environ.get(STORAGE_ENV_VAR)
    if storage_override:
        storage_file = Path(storage_override)
    else:
        storage_file = home / STORAGE_FILE_NAME

    return Config(home_directory=home, storage_file=storage_file, verbosity=verbosity)
