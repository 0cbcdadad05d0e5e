"""
Persona registry and its JSON storage.

The store is a JSON array of objects with the keys alias, name, email
and usage_frequency. Registry order is the storage order; it only
matters for listing.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, List, Optional

from .domain import Persona
from .errors import (
    DuplicatePersonaAlias,
    InvalidAlias,
    InvalidPersona,
    NoPersonasDefined,
    PersonaStorageError,
    UnknownPersonaAlias,
)

LOG = logging.getLogger(__name__)

MAX_ALIAS_LENGTH = 20

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def guard_alias(alias: Optional[str]) -> str:
    """
    Validate a persona alias and return it unchanged.
    """

    if alias is None or not alias.strip():
        raise InvalidAlias(alias or "", "The provided alias is empty.")
    if len(alias) > MAX_ALIAS_LENGTH:
        raise InvalidAlias(
            alias,
            f"The provided alias {alias} is longer than {MAX_ALIAS_LENGTH} characters.",
        )
    return alias


def _persona_from_record(record: Any, position: int) -> Persona:
    if not isinstance(record, dict):
        raise PersonaStorageError(f"Persona #{position} in the store is not an object.")

    values = {}
    for key in ("alias", "name", "email"):
        value = record.get(key)
        if not isinstance(value, str):
            raise PersonaStorageError(
                f"Persona #{position} in the store requires a string field {key}."
            )
        values[key] = value

    usage = record.get("usage_frequency", 0)
    if not isinstance(usage, int) or isinstance(usage, bool) or usage < 0:
        raise PersonaStorageError(
            f"Persona #{position} in the store has an invalid usage_frequency."
        )

    return Persona(usage_frequency=usage, **values)


class PersonaRegistry:
    """
    An ordered collection of personas with unique aliases.
    """

    def __init__(self, personas: Optional[List[Persona]] = None) -> None:
        self._personas: List[Persona] = []
        for persona in personas or []:
            self._insert(persona)

    @classmethod
    def load(cls, path: Path) -> "PersonaRegistry":
        """
        Read a registry from path; a missing or blank file is an empty registry.
        """

        if not path.exists():
            LOG.debug("No persona store at %s", path)
            return cls()

        try:
            raw_text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersonaStorageError(f"Failed to read persona store {path}.") from exc

        if not raw_text.strip():
            return cls()

        try:
            raw = json.loads(raw_text)
        except ValueError as exc:
            raise PersonaStorageError(f"The persona store {path} is not valid JSON.") from exc

        if not isinstance(raw, list):
            raise PersonaStorageError(f"The persona store {path} must hold a JSON list.")

        personas = [_persona_from_record(item, i) for i, item in enumerate(raw, start=1)]
        LOG.debug("Loaded %d personas from %s", len(personas), path)
        try:
            return cls(personas)
        except DuplicatePersonaAlias as exc:
            raise PersonaStorageError(
                f"The persona store {path} defines the alias {exc.alias} twice."
            ) from exc

    def save(self, path: Path) -> None:
        records = [persona.to_record() for persona in self._personas]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise PersonaStorageError(f"Failed to write persona store {path}.") from exc
        LOG.debug("Saved %d personas to %s", len(records), path)

    def __len__(self) -> int:
        return len(self._personas)

    def all(self) -> List[Persona]:
        return list(self._personas)

    def find_by_alias(self, alias: str) -> Persona:
        """
        Return the persona with exactly this alias.

        An empty registry raises NoPersonasDefined rather than
        UnknownPersonaAlias, so callers can tell "nothing configured"
        apart from a typo.
        """

        if not self._personas:
            raise NoPersonasDefined()
        for persona in self._personas:
            if persona.alias == alias:
                return persona
        raise UnknownPersonaAlias(alias)

    def ranked(self) -> List[Persona]:
        """Personas by descending usage; ties keep storage order."""

        return sorted(self._personas, key=lambda persona: -persona.usage_frequency)

    def add(self, persona: Persona) -> Persona:
        guard_alias(persona.alias)
        if not persona.name.strip():
            raise InvalidPersona("The provided name is empty.")
        if not _EMAIL_RE.match(persona.email):
            raise InvalidPersona(f"The provided email {persona.email} is invalid.")
        return self._insert(persona)

    def _insert(self, persona: Persona) -> Persona:
        if any(existing.alias == persona.alias for existing in self._personas):
            raise DuplicatePersonaAlias(persona.alias)
        self._personas.append(persona)
        return persona

    def remove(self, alias: str) -> Persona:
        persona = self.find_by_alias(alias)
        self._personas.remove(persona)
        return persona

    def increment_usage(self, alias: str) -> Persona:
        persona = self.find_by_alias(alias)
        persona.usage_frequency += 1
        return persona
