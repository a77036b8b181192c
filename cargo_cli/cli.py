"""Command-line entry point.

Invoked by cargo as ``cargo cli [FLAGS] [OPTIONS] <path>`` (cargo runs the
``cargo-cli`` executable with ``cli`` as its first argument), or directly::

    cargo-cli cli my-tool
    cargo-cli cli -a docopt my-tool
    cargo-cli cli --license none --no-readme my-tool
    python -m cargo_cli cli --vcs pijul -vv -a docopt --name flambe my-tool
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from pydantic import ValidationError

from . import __version__
from .config import ArgParser, Color, Configuration, LicenseChoice, Settings, Vcs
from .errors import CargoCliError, InvalidSubCommand
from .scaffold import ScaffoldOrchestrator
from .utils import print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-cli",
        description="Creates a Rust command line application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        exit_on_error=False,
        epilog=(
            "Examples:\n"
            "  cargo cli my-tool\n"
            "  cargo cli -a docopt my-tool\n"
            "  cargo cli --license none --no-readme my-tool\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subcommands = parser.add_subparsers(dest="command")

    cli = subcommands.add_parser("cli", help="Create a new binary cli project")
    cli.add_argument(
        "--vcs",
        choices=[v.value for v in Vcs],
        default=Vcs.GIT.value,
        help="Initialize a new repository for the given version control system "
        "or do not initialize any version control at all (default: git)",
    )
    cli.add_argument(
        "--name",
        default=None,
        help="Set the resulting package name, defaults to the value of <path>",
    )
    cli.add_argument(
        "--color",
        choices=[c.value for c in Color],
        default=Color.AUTO.value,
        help="Coloring (default: auto)",
    )

    lock = cli.add_mutually_exclusive_group()
    lock.add_argument("--frozen", action="store_true", help="Require Cargo.lock and cache are up to date")
    lock.add_argument("--locked", action="store_true", help="Require Cargo.lock is up to date")

    output = cli.add_mutually_exclusive_group()
    output.add_argument(
        "-v",
        dest="verbose",
        action="count",
        default=0,
        help="Use verbose output (-vv very verbose/build.rs output)",
    )
    output.add_argument("-q", "--quiet", action="store_true", help="No output printed to stdout")

    cli.add_argument(
        "-a",
        "--arg_parser",
        dest="arg_parser",
        choices=[p.value for p in ArgParser],
        default=ArgParser.CLAP.value,
        help="Specify the argument parser to use in the generated output (default: clap)",
    )
    cli.add_argument(
        "--license",
        choices=[lic.value for lic in LicenseChoice],
        default=LicenseChoice.BOTH.value,
        help="Specify licensing to include in the generated output (default: both)",
    )
    cli.add_argument("--no-readme", action="store_true", help="Turn off README.md generation")
    cli.add_argument(
        "--no-latest",
        action="store_true",
        help="Turn off the crates.io query for the latest version (use defaults)",
    )
    cli.add_argument("path")
    return parser


def parse_configuration(argv: Sequence[str] | None = None) -> Configuration:
    """Parse *argv* into a validated ``Configuration``.

    Raises:
        InvalidSubCommand: If the ``cli`` subcommand is missing or unknown.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except argparse.ArgumentError as exc:
        if exc.argument_name != "command":
            parser.error(str(exc))
        raise InvalidSubCommand() from exc
    if args.command != "cli":
        raise InvalidSubCommand()

    return Configuration(
        path=args.path,
        name=args.name or "",
        arg_parser=args.arg_parser,
        license=args.license,
        include_readme=not args.no_readme,
        query_latest=not args.no_latest,
        vcs=args.vcs,
        color=args.color,
        frozen=args.frozen,
        locked=args.locked,
        quiet=args.quiet,
        verbose=min(args.verbose, 2),
    )


def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, scaffold the project and return the exit code."""
    try:
        config = parse_configuration(argv)
        orchestrator = ScaffoldOrchestrator(config, Settings.from_env())
        return asyncio.run(orchestrator.run())
    except CargoCliError as exc:
        print_error(exc.message)
    except ValidationError as exc:
        print_error(f"invalid configuration: {exc}")
    except OSError as exc:
        print_error(str(exc))
    return 1


def main() -> None:
    """Console-script entry point for ``cargo-cli``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
