"""Unit tests for Configuration and Settings (cargo_cli.config).

Tests cover:
- Configuration defaults, name defaulting, immutability
- Mutually exclusive flags
- Output level derivation
- ``cargo new`` argument construction
- Settings defaults and from_env
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cargo_cli.config import (
    ArgParser,
    Color,
    Configuration,
    LicenseChoice,
    OutputLevel,
    Settings,
    Vcs,
)


pytestmark = pytest.mark.unit


class TestConfiguration:
    def test_defaults(self):
        config = Configuration(path="my-tool")
        assert config.arg_parser is ArgParser.CLAP
        assert config.license is LicenseChoice.BOTH
        assert config.include_readme is True
        assert config.query_latest is True
        assert config.vcs is Vcs.GIT
        assert config.color is Color.AUTO
        assert config.verbose == 0

    def test_name_defaults_to_path(self):
        config = Configuration(path="my-tool")
        assert config.name == "my-tool"
        assert config.has_explicit_name is False

    def test_explicit_name(self):
        config = Configuration(path="some/dir", name="flambe")
        assert config.name == "flambe"
        assert config.has_explicit_name is True

    def test_string_values_coerced(self):
        config = Configuration(path="x", arg_parser="docopt", license="apache")
        assert config.arg_parser is ArgParser.DOCOPT
        assert config.license is LicenseChoice.APACHE

    def test_invalid_arg_parser_rejected(self):
        with pytest.raises(ValidationError):
            Configuration(path="x", arg_parser="argparse")

    def test_invalid_license_rejected(self):
        with pytest.raises(ValidationError):
            Configuration(path="x", license="gpl")

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            Configuration(path="")

    def test_frozen_and_locked_conflict(self):
        with pytest.raises(ValidationError):
            Configuration(path="x", frozen=True, locked=True)

    def test_quiet_and_verbose_conflict(self):
        with pytest.raises(ValidationError):
            Configuration(path="x", quiet=True, verbose=1)

    def test_verbose_capped(self):
        with pytest.raises(ValidationError):
            Configuration(path="x", verbose=3)

    def test_immutable(self):
        config = Configuration(path="x")
        with pytest.raises(ValidationError):
            config.path = "y"


class TestOutputLevel:
    @pytest.mark.parametrize(
        "kwargs, expected",
        [
            ({"quiet": True}, OutputLevel.WARN),
            ({}, OutputLevel.INFO),
            ({"verbose": 1}, OutputLevel.DEBUG),
            ({"verbose": 2}, OutputLevel.TRACE),
        ],
    )
    def test_level_from_flags(self, kwargs, expected):
        assert Configuration(path="x", **kwargs).output_level is expected

    def test_ordering(self):
        assert OutputLevel.TRACE < OutputLevel.DEBUG < OutputLevel.INFO < OutputLevel.WARN

    def test_str(self):
        assert str(OutputLevel.DEBUG) == "Debug"


class TestInitializerArgs:
    def test_minimal(self):
        args = Configuration(path="my-tool").initializer_args()
        assert args == ["new", "--bin", "--color", "auto", "--vcs", "git", "my-tool"]

    def test_all_pass_through_flags(self):
        config = Configuration(
            path="dir",
            name="flambe",
            vcs="pijul",
            color="never",
            frozen=True,
            verbose=2,
        )
        assert config.initializer_args() == [
            "new", "--bin", "--frozen", "-vv",
            "--color", "never", "--vcs", "pijul",
            "--name", "flambe", "dir",
        ]

    def test_quiet_and_locked(self):
        args = Configuration(path="dir", quiet=True, locked=True).initializer_args()
        assert "--quiet" in args
        assert "--locked" in args
        assert "--frozen" not in args

    def test_single_verbose(self):
        args = Configuration(path="dir", verbose=1).initializer_args()
        assert "-v" in args
        assert "-vv" not in args

    def test_path_is_last(self):
        args = Configuration(path="dir", name="other").initializer_args()
        assert args[-1] == "dir"


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.registry_url == "https://crates.io"
        assert settings.timeout == 5.0
        assert settings.cargo == "cargo"
        assert "cargo-cli" in settings.user_agent

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(timeout=0)

    def test_from_env_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()

    def test_from_env_overrides(self):
        env = {
            "CARGO_CLI_REGISTRY_URL": "http://localhost:9000",
            "CARGO_CLI_TIMEOUT": "1.5",
            "CARGO_CLI_USER_AGENT": "tests",
            "CARGO_CLI_CARGO": "/opt/cargo",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings.from_env()
        assert settings.registry_url == "http://localhost:9000"
        assert settings.timeout == 1.5
        assert settings.user_agent == "tests"
        assert settings.cargo == "/opt/cargo"

    @pytest.mark.parametrize("timeout", ["five", "0", "-1"])
    def test_from_env_rejects_bad_timeout(self, timeout):
        with patch.dict("os.environ", {"CARGO_CLI_TIMEOUT": timeout}, clear=True):
            with pytest.raises(ValidationError):
                Settings.from_env()
