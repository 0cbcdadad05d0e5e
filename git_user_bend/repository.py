"""
Git repository checks for git-user-bend.

Conditional configurations are only created for directories that exist
and are Git working directories. All git invocations go through
_run_git so error handling and logging stay in one place.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Union

from .errors import RepositoryError

LOG = logging.getLogger(__name__)


def _run_git(args: list[str], cwd: Union[str, Path]) -> subprocess.CompletedProcess[str]:
    """
    Run a git command in cwd and return the completed process.

    A non-zero exit status is returned to the caller, not raised.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command in %s: %s", cwd, " ".join(cmd))
    completed = subprocess.run(
        cmd,
        cwd=str(cwd),
        check=False,
        text=True,
        capture_output=True,
    )
    if completed.returncode != 0:
        LOG.debug("git stderr: %s", completed.stderr.strip())
    return completed


def ensure_git_repository(directory: Union[str, Path]) -> Path:
    """
    Return directory as a Path if it is inside a Git repository.
    """

    path = Path(directory)
    if not path.is_dir():
        raise RepositoryError(f"The directory {directory} doesn't exist.")

    try:
        completed = _run_git(["rev-parse", "--git-dir"], cwd=path)
    except OSError as exc:
        raise RepositoryError(f"No Git repository in {directory}.") from exc

    if completed.returncode != 0:
        raise RepositoryError(f"No Git repository in {directory}.")

    return path
