"""
Writes includeIf stanzas and conditional configuration dotfiles.

Both writes are whole-file overwrites. Appending to the global
configuration is a read-modify-write without locking, so two concurrent
invocations against the same file can lose one stanza.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .domain import Identity, IncludeIf, render_user_section
from .eol import detect_eol
from .errors import (
    ConfigurationWriteError,
    FailedToCreateDefaultConfigurationFile,
    FailedToCreateDirectory,
)
from .locator import GlobalConfiguration

LOG = logging.getLogger(__name__)


def _read(path: Path) -> str:
    # newline="" keeps \r and \r\n intact for EOL detection; surrogateescape
    # lets bytes that are not UTF-8 round-trip unchanged.
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise ConfigurationWriteError(path, exc.strerror or str(exc)) from exc


def _write(path: Path, content: str) -> bool:
    try:
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
            written = handle.write(content)
    except OSError as exc:
        raise ConfigurationWriteError(path, exc.strerror or str(exc)) from exc
    return written == len(content)


def create_default_configuration(configuration: GlobalConfiguration) -> Path:
    """
    Create an empty global configuration at the default location.

    The parent directory is created first; an already existing directory
    is fine.
    """

    path = configuration.default_path
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FailedToCreateDirectory(directory) from exc

    try:
        path.touch()
    except OSError as exc:
        raise FailedToCreateDefaultConfigurationFile(path) from exc

    LOG.info("Created global Git configuration %s", path)
    configuration.mark_created(path)
    return path


def append_include_if(
    configuration: GlobalConfiguration,
    dotfile_name: str,
    target_directory: str,
    create_if_missing: bool = False,
) -> bool:
    """
    Append an includeIf stanza for target_directory to the global configuration.

    Existing content is kept byte for byte. Non-blank content is followed
    by one instance of its dominant line ending before the stanza; blank
    content gets the stanza with no separator.
    """

    reference = configuration.locate()
    if reference.exists:
        path = reference.path
    elif create_if_missing:
        path = create_default_configuration(configuration)
    else:
        path = configuration.resolve()

    stanza = IncludeIf(git_directory=target_directory, dotfile_name=dotfile_name).render()

    content = _read(path)
    if content.strip():
        eol = detect_eol(content)
        LOG.debug("Detected line ending %r in %s", eol, path)
        content += eol + stanza
    else:
        content += stanza

    LOG.debug("Appending includeIf for %s to %s", target_directory, path)
    return _write(path, content)


def conditional_dotfile_path(configuration: GlobalConfiguration, dotfile_name: str) -> Path:
    """Dotfiles live next to the global configuration they are included from."""

    return configuration.resolve().parent / dotfile_name


def write_conditional_dotfile(
    configuration: GlobalConfiguration,
    dotfile_name: str,
    identity: Identity,
) -> bool:
    """
    Write a dotfile holding a single ``[user]`` section for identity.

    Any existing file is replaced. The global configuration must already
    exist; this never creates it.
    """

    path = conditional_dotfile_path(configuration, dotfile_name)
    LOG.debug("Writing conditional configuration %s", path)
    written = _write(path, render_user_section(identity))
    if written:
        LOG.info("Wrote conditional configuration %s for %s", path, identity.email)
    return written
