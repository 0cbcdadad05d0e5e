"""
Command-line interface for git-user-bend.

This module is responsible for argument parsing, the repository check
and rendering results; the work itself is delegated to the registry and
the conditional configuration orchestration.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from .conditional import ConditionalConfigRequest, create_conditional_config
from .config import Config, load_config
from .domain import Persona
from .errors import GitUserBendError
from .locator import GlobalConfiguration
from .logging_utils import configure_logging
from .personas import PersonaRegistry
from .repository import ensure_git_repository


def build_arg_parser(configuration: Optional[GlobalConfiguration] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-user-bend",
        description="Manage Git committer personas and per-directory identities.",
    )
    parser.add_argument(
        "--home",
        help="Home directory to look for the global Git configuration in (default: $HOME).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    if configuration is not None:
        reference = configuration.locate()
        conditional_description = (
            f"Creates a conditional configuration dotfile in {reference.directory} "
            f"and adds a matching includeIf to {reference.path}."
        )
    else:
        conditional_description = (
            "Creates a conditional configuration dotfile next to the global Git "
            "configuration and adds a matching includeIf to it."
        )

    conditional = subparsers.add_parser(
        "create-conditional-config",
        help="Create a conditional configuration for a persona.",
        description=conditional_description,
    )
    conditional.add_argument(
        "alias",
        help="The persona alias to set in the conditional configuration.",
    )
    conditional.add_argument(
        "configuration_name",
        metavar="configuration-name",
        help=(
            "The name of the conditional configuration dotfile to create, "
            "the leading . can be omitted."
        ),
    )
    conditional.add_argument(
        "directory",
        nargs="?",
        help="The directory of the Git repository (default: current directory).",
    )
    conditional.add_argument(
        "-c",
        "--create-global-git-config",
        action="store_true",
        help="Create a global Git config file when not present.",
    )

    add = subparsers.add_parser("add", help="Add a persona.")
    add.add_argument("alias", help="The alias of the persona.")
    add.add_argument("name", help="The committer name of the persona.")
    add.add_argument("email", help="The committer email of the persona.")

    remove = subparsers.add_parser("remove", help="Remove a persona.")
    remove.add_argument("alias", help="The alias of the persona to remove.")

    personas = subparsers.add_parser("personas", help="List the defined personas.")
    personas.add_argument(
        "--by-usage",
        action="store_true",
        help="Order personas by how often they have been used.",
    )

    return parser


def _format_persona(persona: Persona) -> str:
    return f"{persona.alias}  {persona.name} <{persona.email}>  (usage {persona.usage_frequency})"


def _run_create_conditional_config(args: argparse.Namespace, config: Config) -> None:
    directory = os.path.abspath(args.directory or os.getcwd())
    ensure_git_repository(directory)

    registry = PersonaRegistry.load(config.storage_file)
    configuration = GlobalConfiguration(config.home_directory)

    request = ConditionalConfigRequest(
        alias=args.alias,
        configuration_name=args.configuration_name,
        directory=directory,
        create_global_configuration=args.create_global_git_config,
    )
    persona = create_conditional_config(request, registry, configuration)

    registry.increment_usage(persona.alias)
    registry.save(config.storage_file)

    print(
        f"Created conditional configuration {request.configuration_name} "
        f"for persona {persona.alias}."
    )


def _run_add(args: argparse.Namespace, config: Config) -> None:
    registry = PersonaRegistry.load(config.storage_file)
    persona = registry.add(Persona(alias=args.alias, name=args.name, email=args.email))
    registry.save(config.storage_file)
    print(f"Added persona {persona.alias}.")


def _run_remove(args: argparse.Namespace, config: Config) -> None:
    registry = PersonaRegistry.load(config.storage_file)
    persona = registry.remove(args.alias)
    registry.save(config.storage_file)
    print(f"Removed persona {persona.alias}.")


def _run_personas(args: argparse.Namespace, config: Config) -> None:
    registry = PersonaRegistry.load(config.storage_file)
    if not len(registry):
        print("There are no defined personas.")
        return
    personas = registry.ranked() if args.by_usage else registry.all()
    for persona in personas:
        print(_format_persona(persona))


COMMANDS = {
    "create-conditional-config": _run_create_conditional_config,
    "add": _run_add,
    "remove": _run_remove,
    "personas": _run_personas,
}


def _help_configuration(argv: Optional[List[str]]) -> Optional[GlobalConfiguration]:
    # Only the help text needs the configuration before parsing.
    args = sys.argv[1:] if argv is None else argv
    if "-h" not in args and "--help" not in args:
        return None
    home_parser = argparse.ArgumentParser(add_help=False)
    home_parser.add_argument("--home")
    known, _ = home_parser.parse_known_args(args)
    try:
        return GlobalConfiguration(load_config(home_directory=known.home).home_directory)
    except GitUserBendError:
        return None


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser(_help_configuration(argv))
    args = parser.parse_args(argv)

    try:
        config = load_config(home_directory=args.home, verbosity=args.verbose)
        configure_logging(verbosity=config.verbosity)
        COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        return 130
    except GitUserBendError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
