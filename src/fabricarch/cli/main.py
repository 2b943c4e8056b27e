from __future__ import annotations

import argparse
import sys
from typing import Sequence

from fabricarch import __version__
from fabricarch.cli.commands import COMMAND_CHOICES, commands_command
from fabricarch.cli.generate import ARTIFACT_CHOICES, generate_command
from fabricarch.cli.templates import templates_command
from fabricarch.cli.validate import validate_command
from fabricarch.config import get_settings
from fabricarch.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fabricarch", description="Hyperledger Fabric network configuration compiler"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser(
        "generate", help="Generate configtx, crypto-config and docker-compose documents"
    )
    generate_parser.add_argument("artifact", choices=ARTIFACT_CHOICES, help="Document to generate")
    generate_parser.add_argument("network_file", help="Path to network YAML/JSON file")
    generate_parser.add_argument(
        "-o", "--output-dir", default="generated", help="Output directory (default: generated)"
    )
    generate_parser.add_argument(
        "--dry-run", action="store_true", help="Preview without writing files"
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a network definition")
    validate_parser.add_argument("network_file", help="Path to network YAML/JSON file")
    validate_parser.add_argument(
        "--format", dest="output_format", choices=["table", "json"], default="table"
    )
    validate_parser.add_argument(
        "--strict", action="store_true", help="Treat warnings as failures"
    )

    templates_parser = subparsers.add_parser(
        "templates", help="List network templates or expand one into a network file"
    )
    templates_parser.add_argument("template_id", nargs="?", help="Template to expand")
    templates_parser.add_argument("-o", "--output", help="Write the network YAML to this file")

    commands_parser = subparsers.add_parser(
        "commands", help="Print peer CLI commands for operating a network"
    )
    commands_parser.add_argument("network_file", help="Path to network YAML/JSON file")
    commands_parser.add_argument(
        "-c",
        "--command",
        dest="peer_command",
        choices=COMMAND_CHOICES,
        help="Print only this command",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, json_output=not settings.debug)

    if args.command == "generate":
        sys.exit(
            generate_command(
                args.artifact,
                args.network_file,
                output_dir=args.output_dir,
                dry_run=args.dry_run,
            )
        )

    if args.command == "validate":
        sys.exit(
            validate_command(
                args.network_file,
                output_format=args.output_format,
                strict=args.strict,
            )
        )

    if args.command == "templates":
        sys.exit(templates_command(args.template_id, output=args.output))

    if args.command == "commands":
        sys.exit(commands_command(args.network_file, command=args.peer_command))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
