"""
Custom exception types used across git-user-bend.

Every failure the tool can report is a GitUserBendError subclass, so the
CLI can render them as a single ``Error: ...`` line while unexpected bugs
still surface with a traceback. Messages are complete sentences ending
in a period.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class GitUserBendError(Exception):
    """Base class for all git-user-bend specific errors."""


class MissingHomeDirectory(GitUserBendError):
    """Raised when no home directory is configured or present in the environment."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Unable to resolve a home directory, {variable} is not set.")


class NonExistentGlobalConfiguration(GitUserBendError):
    """Raised when none of the global Git configuration candidates exist."""

    def __init__(self, home_directory: PathLike) -> None:
        self.home_directory = str(home_directory)
        super().__init__(f"No global Git configuration present in {self.home_directory}.")


class FailedToCreateDirectory(GitUserBendError):
    """Raised when the default configuration directory cannot be created."""

    def __init__(self, directory: PathLike) -> None:
        self.directory = str(directory)
        super().__init__(f"Failed to create directory {self.directory}.")


class FailedToCreateDefaultConfigurationFile(GitUserBendError):
    """Raised when the empty default configuration file cannot be created."""

    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(f"Failed to create default Git configuration file {self.path}.")


class ConfigurationWriteError(GitUserBendError):
    """Raised when reading or writing a configuration file fails."""

    def __init__(self, path: PathLike, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to write {self.path}: {reason}.")


class InvalidConditionalConfigurationName(GitUserBendError):
    """Raised when a conditional configuration name is rejected."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)


class InvalidAlias(GitUserBendError):
    """Raised when a persona alias is blank or too long."""

    def __init__(self, alias: str, message: str) -> None:
        self.alias = alias
        super().__init__(message)


class UnknownPersonaAlias(GitUserBendError):
    """Raised when the registry holds personas, but none with the alias."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"No known persona for alias {alias}.")


class NoPersonasDefined(GitUserBendError):
    """Raised when a lookup is attempted against an empty registry."""

    def __init__(self) -> None:
        super().__init__("There are no defined personas.")


class DuplicatePersonaAlias(GitUserBendError):
    """Raised when adding a persona whose alias is already registered."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"The alias {alias} is already in use.")


class InvalidPersona(GitUserBendError):
    """Raised when a persona's name or email is unusable."""


class PersonaStorageError(GitUserBendError):
    """Raised when the persona store cannot be read or written."""


class RepositoryError(GitUserBendError):
    """Raised when the target directory is missing or not a Git repository."""
