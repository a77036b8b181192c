"""Writes rendered content to the generated project.

Each ``FileRole`` has a fixed relative path and one of two creation
policies.  ``src/main.rs`` is created by ``cargo new`` and is truncated and
rewritten; every other file must not exist yet and is created exclusively, so
re-running the scaffolder over an existing project fails instead of
clobbering it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from .catalog import README_TEMPLATE, LicenseAssets, TemplateSet
from .config import OutputLevel
from .errors import FileConflictError, InvalidPath
from .templates import TemplateRenderer


class WritePolicy(str, Enum):
    OVERWRITE_EXISTING = "overwrite-existing"
    CREATE_NEW = "create-new"


class FileRole(Enum):
    """Logical files produced by the scaffolder: ``(relative path, policy)``."""

    MAIN = ("src/main.rs", WritePolicy.OVERWRITE_EXISTING)
    RUN = ("src/run.rs", WritePolicy.CREATE_NEW)
    ERROR = ("src/error.rs", WritePolicy.CREATE_NEW)
    LICENSE_MIT = ("LICENSE-MIT", WritePolicy.CREATE_NEW)
    LICENSE_APACHE = ("LICENSE-APACHE", WritePolicy.CREATE_NEW)
    README = ("README.md", WritePolicy.CREATE_NEW)
    MANIFEST = ("Cargo.toml", WritePolicy.OVERWRITE_EXISTING)

    @property
    def relative_path(self) -> str:
        return self.value[0]

    @property
    def policy(self) -> WritePolicy:
        return self.value[1]

    @property
    def verb(self) -> str:
        return "Updated" if self.policy is WritePolicy.OVERWRITE_EXISTING else "Created"

    def target(self, base_path: str | Path) -> Path:
        return Path(base_path).joinpath(*self.relative_path.split("/"))


@dataclass(frozen=True)
class WriteEvent:
    """A successful write, reported to the terminal collaborator."""

    verb: str
    path: str
    level: OutputLevel = OutputLevel.DEBUG


# ---------------------------------------------------------------------------
# FileMaterializer
# ---------------------------------------------------------------------------


class FileMaterializer:
    """Applies the create-vs-overwrite policy for each ``FileRole``."""

    async def write(
        self, role: FileRole, base_path: str | Path, content: str | None
    ) -> WriteEvent | None:
        """Write *content* for *role* under *base_path*.

        A ``None`` *content* means the role has no body for this run (license
        not selected, README disabled); nothing is written and ``None`` is
        returned.

        Raises:
            InvalidPath: The overwrite-existing target does not exist.
            FileConflictError: A create-new-only target already exists.
        """
        if content is None:
            return None

        path = role.target(base_path)
        if role.policy is WritePolicy.OVERWRITE_EXISTING:
            await asyncio.to_thread(_overwrite_file, path, content)
        else:
            await asyncio.to_thread(_create_file, path, content)
        return WriteEvent(verb=role.verb, path=role.relative_path)

    async def materialize_sources(
        self,
        base_path: str | Path,
        template_set: TemplateSet,
        license_assets: LicenseAssets,
        renderer: TemplateRenderer,
        context: dict[str, Any],
        *,
        include_readme: bool,
        on_event: Callable[[WriteEvent], None] | None = None,
    ) -> list[WriteEvent]:
        """Render and write every source, license and README file.

        Files are written in a fixed order (main, error, run, licenses,
        README) and the first failure aborts the remaining writes.  *on_event*
        is called after each successful write, before the next one starts.
        """
        plan: list[tuple[FileRole, str | None]] = [
            (FileRole.MAIN, renderer.render_source(template_set.main_template, license_assets, context)),
            (FileRole.ERROR, renderer.render_source(template_set.error_template, license_assets, context)),
            (FileRole.RUN, renderer.render_source(template_set.run_template, license_assets, context)),
            (FileRole.LICENSE_MIT, renderer.render_optional(license_assets.mit_template, context)),
            (FileRole.LICENSE_APACHE, renderer.render_optional(license_assets.apache_template, context)),
            (FileRole.README, renderer.render(README_TEMPLATE, context) if include_readme else None),
        ]

        events: list[WriteEvent] = []
        for role, content in plan:
            event = await self.write(role, base_path, content)
            if event is not None:
                events.append(event)
                if on_event is not None:
                    on_event(event)
        return events


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _overwrite_file(path: Path, content: str) -> None:
    """Truncate and rewrite a file that must already exist."""
    try:
        with path.open("r+", encoding="utf-8", newline="") as fh:
            fh.truncate(0)
            fh.write(content)
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
        raise InvalidPath(f"Expected an existing file at {path}") from exc


def _create_file(path: Path, content: str) -> None:
    """Create a file that must not exist yet, creating parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("x", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except FileExistsError as exc:
        raise FileConflictError(str(path)) from exc
