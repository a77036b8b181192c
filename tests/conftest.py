"""Shared pytest fixtures for the cargo-cli test suite.

Provides reusable fixtures for:
- A fake ``cargo new`` initializer that writes the files cargo would
- Ready-made ``Configuration`` objects
- A quiet ``Reporter`` recording into an in-memory Rich console
- Mock subprocess and httpx helpers
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from cargo_cli.config import Configuration, OutputLevel
from cargo_cli.utils import Reporter


CARGO_TOML = textwrap.dedent(
    """\
    [package]
    name = "{name}"
    version = "0.1.0"
    authors = []

    [dependencies]
    """
)

CARGO_MAIN_RS = 'fn main() {\n    println!("Hello, world!");\n}\n'


# ---------------------------------------------------------------------------
# Fake initializer
# ---------------------------------------------------------------------------


class FakeCargo:
    """Test double for the ``cargo new`` collaborator.

    Records every argument list it receives and, on success, creates
    ``src/main.rs`` and ``Cargo.toml`` under the target path the way
    ``cargo new --bin`` does.
    """

    def __init__(
        self,
        exit_code: int = 0,
        create_files: bool = True,
        manifest: str | None = None,
    ) -> None:
        self.exit_code = exit_code
        self.create_files = create_files
        self.manifest = manifest
        self.calls: list[list[str]] = []

    async def run(self, args: Sequence[str]) -> int:
        self.calls.append(list(args))
        if self.exit_code == 0 and self.create_files:
            self._create(args)
        return self.exit_code

    def _create(self, args: Sequence[str]) -> None:
        path = Path(args[-1])
        name = args[args.index("--name") + 1] if "--name" in args else path.name
        (path / "src").mkdir(parents=True, exist_ok=True)
        (path / "src" / "main.rs").write_text(CARGO_MAIN_RS, encoding="utf-8")
        manifest = self.manifest if self.manifest is not None else CARGO_TOML.format(name=name)
        (path / "Cargo.toml").write_text(manifest, encoding="utf-8")


@pytest.fixture
def fake_cargo() -> FakeCargo:
    """A successful fake ``cargo new``."""
    return FakeCargo()


@pytest.fixture
def make_fake_cargo():
    """Factory for ``FakeCargo`` instances with custom behaviour."""
    return FakeCargo


# ---------------------------------------------------------------------------
# Paths & configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def project_path(tmp_path: Path) -> Path:
    """Target path for a generated project (not created yet)."""
    return tmp_path / "demo"


@pytest.fixture
def offline_config(project_path: Path) -> Configuration:
    """clap + both licenses + README, without crates.io queries."""
    return Configuration(
        path=str(project_path),
        name="demo",
        arg_parser="clap",
        license="both",
        include_readme=True,
        query_latest=False,
    )


@pytest.fixture
def cargo_project(project_path: Path) -> Path:
    """A directory laid out as ``cargo new --bin demo`` leaves it."""
    (project_path / "src").mkdir(parents=True)
    (project_path / "src" / "main.rs").write_text(CARGO_MAIN_RS, encoding="utf-8")
    (project_path / "Cargo.toml").write_text(CARGO_TOML.format(name="demo"), encoding="utf-8")
    return project_path


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------


@pytest.fixture
def record_console() -> Console:
    return Console(record=True, width=200, color_system=None, highlight=False)


@pytest.fixture
def reporter(record_console: Console) -> Reporter:
    """A TRACE-level reporter writing into a recording console."""
    return Reporter(level=OutputLevel.TRACE, out=record_console)


# ---------------------------------------------------------------------------
# Mock helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Factory for mock asyncio subprocesses with a given return code.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(returncode: int = 0) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def mock_http_client():
    """Factory for a mocked ``httpx.AsyncClient`` used as an async context manager.

    ``get`` may be a response object or an exception instance to raise.
    """
    def factory(get: Any) -> AsyncMock:
        client = AsyncMock()
        if isinstance(get, BaseException):
            client.get = AsyncMock(side_effect=get)
        else:
            client.get = AsyncMock(return_value=get)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        return client

    return factory


@pytest.fixture
def crates_response():
    """Factory for a mocked crates.io JSON response."""
    def factory(payload: Any, status_code: int = 200) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.raise_for_status = MagicMock()
        return response

    return factory
