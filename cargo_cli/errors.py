"""Exception taxonomy for the cargo-cli scaffolder.

Every fatal condition raised by the core derives from ``CargoCliError`` so the
command-line entry point can report it once and exit with status 1.  The only
recovered failure category (crates.io lookups) never reaches this module; see
``cargo_cli.registry``.
"""

from __future__ import annotations


class CargoCliError(Exception):
    """Base class for all fatal scaffolding errors."""

    default_message = "cargo-cli failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Configuration-contract violations
# ---------------------------------------------------------------------------


class InvalidArgParser(CargoCliError):
    default_message = "An invalid argument parser was specified!"


class InvalidLicense(CargoCliError):
    default_message = "An invalid license type was specified!"


class InvalidPath(CargoCliError):
    default_message = "An invalid path was specified!"


class InvalidSubCommand(CargoCliError):
    default_message = "An invalid subcommand was specified!"


# ---------------------------------------------------------------------------
# External tool failures
# ---------------------------------------------------------------------------


class InvalidExitCode(CargoCliError):
    default_message = "An invalid exit code was received from 'cargo new'!"


# ---------------------------------------------------------------------------
# Rendering, filesystem and manifest failures
# ---------------------------------------------------------------------------


class TemplateError(CargoCliError):
    """Raised when a catalog template cannot be loaded or rendered."""

    default_message = "A template could not be rendered!"


class FileConflictError(CargoCliError):
    """Raised when a create-new-only file already exists on disk."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Refusing to overwrite existing file: {path}")


class ManifestError(CargoCliError):
    """Raised when ``Cargo.toml`` cannot be parsed or serialised."""

    default_message = "Cargo.toml could not be processed!"
