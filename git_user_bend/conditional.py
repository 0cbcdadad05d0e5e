"""
Creation of conditional configurations.

A conditional configuration is a dotfile with a ``[user]`` section plus
an includeIf stanza in the global configuration that activates it for a
repository directory. The orchestration here validates the request,
resolves the persona and drives the writer:

  - validate the alias,
  - validate the configuration name,
  - look the persona up in the registry,
  - append the includeIf stanza, then
  - write the dotfile.

Nothing is rolled back. If the dotfile cannot be written after the
stanza was appended, the global configuration points at a missing file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .domain import Persona
from .errors import InvalidConditionalConfigurationName
from .locator import GlobalConfiguration
from .personas import PersonaRegistry, guard_alias
from .writer import append_include_if, write_conditional_dotfile

LOG = logging.getLogger(__name__)

MAX_CONDITIONAL_NAME_LENGTH = 20

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


@dataclass
class ConditionalConfigRequest:
    """
    Already parsed input for one conditional configuration.

    configuration_name is used verbatim as the dotfile name; a missing
    leading dot is not added.
    """

    alias: str
    configuration_name: str
    directory: str
    create_global_configuration: bool = False


def is_numeric(value: str) -> bool:
    return bool(_NUMERIC_RE.match(value))


def guard_conditional_configuration_name(name: str) -> str:
    """
    Validate a conditional configuration name and return it unchanged.

    Length is checked before emptiness and numeric-ness, so an overlong
    numeric name reports the length problem.
    """

    if len(name) > MAX_CONDITIONAL_NAME_LENGTH:
        raise InvalidConditionalConfigurationName(
            name,
            f"The provided configuration name {name} is longer than "
            f"{MAX_CONDITIONAL_NAME_LENGTH} characters.",
        )
    if not name.strip():
        raise InvalidConditionalConfigurationName(
            name, "The provided configuration name is empty."
        )
    if is_numeric(name):
        raise InvalidConditionalConfigurationName(
            name, "The provided configuration name is a number."
        )
    return name


def create_conditional_config(
    request: ConditionalConfigRequest,
    registry: PersonaRegistry,
    configuration: GlobalConfiguration,
) -> Persona:
    """
    Write the includeIf stanza and dotfile for request; return the persona used.
    """

    alias = guard_alias(request.alias)
    name = guard_conditional_configuration_name(request.configuration_name)
    persona = registry.find_by_alias(alias)

    LOG.debug(
        "Creating conditional configuration %s for %s in %s",
        name,
        alias,
        request.directory,
    )

    append_include_if(
        configuration,
        name,
        request.directory,
        create_if_missing=request.create_global_configuration,
    )
    write_conditional_dotfile(configuration, name, persona.identity())

    return persona
