"""cargo-cli configuration.

Typed configuration for a single scaffolding run.  ``Configuration`` carries
the user's already-validated choices and is immutable once built; ``Settings``
holds the tuneable knobs of the tool itself (registry host, timeout, cargo
executable) and can be overridden from environment variables.
"""

from __future__ import annotations

import os
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ArgParser(str, Enum):
    """Argument-parsing crate used by the generated project."""

    CLAP = "clap"
    DOCOPT = "docopt"


class LicenseChoice(str, Enum):
    """Licensing to include in the generated project."""

    BOTH = "both"
    MIT = "mit"
    APACHE = "apache"
    NONE = "none"


class Vcs(str, Enum):
    GIT = "git"
    HG = "hg"
    PIJUL = "pijul"
    FOSSIL = "fossil"
    NONE = "none"


class Color(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class OutputLevel(IntEnum):
    """Terminal output level.  Messages below the active level are dropped."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3

    def __str__(self) -> str:
        return self.name.capitalize()


class Configuration(BaseModel):
    """The user's scaffolding choices for one invocation."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Target directory passed to cargo new")
    name: str = Field(default="", description="Package name; defaults to the path")
    arg_parser: ArgParser = Field(default=ArgParser.CLAP)
    license: LicenseChoice = Field(default=LicenseChoice.BOTH)
    include_readme: bool = Field(default=True)
    query_latest: bool = Field(default=True, description="Query crates.io for latest versions")

    # Options passed straight through to ``cargo new``.
    vcs: Vcs = Field(default=Vcs.GIT)
    color: Color = Field(default=Color.AUTO)
    frozen: bool = False
    locked: bool = False
    quiet: bool = False
    verbose: int = Field(default=0, ge=0, le=2)

    @model_validator(mode="before")
    @classmethod
    def _default_name_to_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("path", "")}
        return data

    @model_validator(mode="after")
    def _check_exclusive_flags(self) -> "Configuration":
        if self.frozen and self.locked:
            raise ValueError("--frozen cannot be used with --locked")
        if self.quiet and self.verbose:
            raise ValueError("--quiet cannot be used with -v")
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def output_level(self) -> OutputLevel:
        """Output level implied by ``--quiet`` / ``-v`` / ``-vv``."""
        if self.quiet:
            return OutputLevel.WARN
        if self.verbose == 0:
            return OutputLevel.INFO
        if self.verbose == 1:
            return OutputLevel.DEBUG
        return OutputLevel.TRACE

    @property
    def has_explicit_name(self) -> bool:
        return self.name != self.path

    def initializer_args(self) -> list[str]:
        """Build the ``cargo new`` argument list (without the executable)."""
        args = ["new", "--bin"]
        if self.frozen:
            args.append("--frozen")
        if self.locked:
            args.append("--locked")

        if self.quiet:
            args.append("--quiet")
        elif self.verbose == 1:
            args.append("-v")
        elif self.verbose >= 2:
            args.append("-vv")

        args.extend(["--color", self.color.value])
        args.extend(["--vcs", self.vcs.value])

        if self.has_explicit_name:
            args.extend(["--name", self.name])
        args.append(self.path)
        return args


class Settings(BaseModel):
    """Tool-level settings shared by every run."""

    registry_url: str = Field(default="https://crates.io")
    timeout: float = Field(default=5.0, gt=0, description="Per-lookup timeout in seconds")
    user_agent: str = Field(default="cargo-cli (https://github.com/cargo-cli/cargo-cli)")
    cargo: str = Field(default="cargo", description="cargo executable to invoke")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CARGO_CLI_REGISTRY_URL, CARGO_CLI_TIMEOUT, CARGO_CLI_USER_AGENT,
            CARGO_CLI_CARGO.

        Raises:
            ValidationError: If a variable holds an invalid value.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CARGO_CLI_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["CARGO_CLI_REGISTRY_URL"]
        if os.environ.get("CARGO_CLI_TIMEOUT"):
            kwargs["timeout"] = os.environ["CARGO_CLI_TIMEOUT"]
        if os.environ.get("CARGO_CLI_USER_AGENT"):
            kwargs["user_agent"] = os.environ["CARGO_CLI_USER_AGENT"]
        if os.environ.get("CARGO_CLI_CARGO"):
            kwargs["cargo"] = os.environ["CARGO_CLI_CARGO"]
        return cls(**kwargs)
