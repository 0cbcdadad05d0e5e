"""
Discovery of the user's global Git configuration file.

Git reads its global configuration from one of several places below the
home directory. GlobalConfiguration checks a fixed list of candidates in
priority order and remembers the outcome for the rest of the invocation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import NonExistentGlobalConfiguration

LOG = logging.getLogger(__name__)

# Priority order; the first existing candidate wins.
CANDIDATE_PATHS: Tuple[str, ...] = (
    ".gitconfig",
    ".config/git/config",
    ".config/git/.gitconfig",
    ".config/git/gitconfig",
    "git/config",
)

DEFAULT_CONFIG_SUBDIRECTORY = Path(".config") / "git"


@dataclass(frozen=True)
class ConfigurationReference:
    """
    Outcome of a global configuration lookup.

    When no candidate exists, path is the default location a new file
    would be created at and exists is False.
    """

    path: Path
    exists: bool

    @property
    def directory(self) -> Path:
        return self.path.parent


def default_configuration_path(home_directory: Union[str, Path]) -> Path:
    """Location used when a global configuration has to be created."""

    return Path(home_directory) / DEFAULT_CONFIG_SUBDIRECTORY / "config"


class GlobalConfiguration:
    """
    Locates the global Git configuration below a home directory.
    """

    def __init__(self, home_directory: Union[str, Path], platform: Optional[str] = None) -> None:
        self.home_directory = Path(home_directory)
        self._platform = platform or os.name
        self._reference: Optional[ConfigurationReference] = None

    @property
    def default_path(self) -> Path:
        return default_configuration_path(self.home_directory)

    def locate(self) -> ConfigurationReference:
        """
        Return the first existing candidate, or a reference to the default path.

        The filesystem is only consulted on the first call.
        """

        if self._reference is None:
            self._reference = self._search()
        return self._reference

    def resolve(self) -> Path:
        """
        Return the path of the existing global configuration.

        Raises NonExistentGlobalConfiguration naming the home directory
        when none of the candidates exist.
        """

        reference = self.locate()
        if not reference.exists:
            raise NonExistentGlobalConfiguration(self.home_directory)
        return reference.path

    def mark_created(self, path: Path) -> ConfigurationReference:
        """Record that a configuration file now exists at path."""

        self._reference = ConfigurationReference(path=path, exists=True)
        return self._reference

    def _search(self) -> ConfigurationReference:
        for candidate in CANDIDATE_PATHS:
            path = self.home_directory / candidate
            if path.is_file():
                if self._platform == "nt":
                    path = path.resolve()
                LOG.debug("Found global Git configuration at %s", path)
                return ConfigurationReference(path=path, exists=True)

        LOG.debug("No global Git configuration below %s", self.home_directory)
        return ConfigurationReference(path=self.default_path, exists=False)
