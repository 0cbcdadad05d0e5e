"""
Core domain models for git-user-bend.

These dataclasses describe personas, the identities projected from them
and the includeIf stanzas written to the global configuration. They
avoid any filesystem access so the registry, writer and orchestrator can
share them freely.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Identity:
    """
    A Git committer identity, as written to a ``[user]`` section.
    """

    name: str
    email: str


@dataclass
class Persona:
    """
    A named, reusable committer identity plus a usage counter.

    usage_frequency only ever grows; it is bumped each time the persona
    is applied.
    """

    alias: str
    name: str
    email: str
    usage_frequency: int = 0

    def identity(self) -> Identity:
        return Identity(name=self.name, email=self.email)

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IncludeIf:
    """
    An ``[includeIf "gitdir:..."]`` stanza pointing at a conditional dotfile.
    """

    git_directory: str
    dotfile_name: str

    def render(self) -> str:
        return f'[includeIf "gitdir:{self.git_directory}"]\n    path = {self.dotfile_name}'


def render_user_section(identity: Identity) -> str:
    """Render the body of a conditional configuration dotfile."""

    return f"[user]\n    email = {identity.email}\n    name = {identity.name}"
