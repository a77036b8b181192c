"""Scaffolding orchestrator.

Drives one run from a validated ``Configuration`` to a finished project:

    START -> TEMPLATES_SELECTED -> INITIALIZER_INVOKED -> FILES_MATERIALIZED
          -> MANIFEST_MERGED -> DONE

Any exception moves the run to ``FAILED`` and is re-raised unchanged.  A
non-zero ``cargo new`` exit code is returned as-is and nothing is written.
Dependency versions are resolved once ``cargo new`` has succeeded and before
any file is rendered, so rendering and merging only see plain data.
Files already written when a later step fails are left in place.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from .catalog import (
    LicenseAssets,
    TemplateSet,
    fallback_dependencies,
    select_license,
    select_templates,
)
from .config import Configuration, Settings
from .errors import InvalidExitCode, InvalidPath
from .initializer import CargoInitializer, Initializer
from .manifest import MANIFEST_FILENAME, ManifestMerger
from .materializer import FileMaterializer, FileRole, WriteEvent
from .registry import VersionResolver
from .templates import TemplateRenderer
from .utils import Reporter


class ScaffoldState(str, Enum):
    START = "start"
    TEMPLATES_SELECTED = "templates-selected"
    INITIALIZER_INVOKED = "initializer-invoked"
    FILES_MATERIALIZED = "files-materialized"
    MANIFEST_MERGED = "manifest-merged"
    DONE = "done"
    FAILED = "failed"


class ScaffoldOrchestrator:
    """Runs the scaffolding sequence for one ``Configuration``.

    Attributes:
        config: The user's choices for this run.
        state: Current ``ScaffoldState``; ``FAILED`` is terminal.
        events: Every ``WriteEvent`` emitted so far.
        dependencies: The resolved dependency set, once computed.
    """

    def __init__(
        self,
        config: Configuration,
        settings: Settings | None = None,
        *,
        initializer: Initializer | None = None,
        resolver: VersionResolver | None = None,
        renderer: TemplateRenderer | None = None,
        materializer: FileMaterializer | None = None,
        merger: ManifestMerger | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or Settings()
        self.initializer = initializer or CargoInitializer(self.settings.cargo)
        self._resolver = resolver
        self.renderer = renderer or TemplateRenderer()
        self.materializer = materializer or FileMaterializer()
        self.merger = merger or ManifestMerger()
        self.reporter = reporter or Reporter(config.output_level, config.color)

        self.state = ScaffoldState.START
        self.events: list[WriteEvent] = []
        self.dependencies: dict[str, str] = {}
        self.template_set: TemplateSet | None = None
        self.license_assets: LicenseAssets | None = None

    @property
    def resolver(self) -> VersionResolver:
        """The crates.io resolver, built on first use."""
        if self._resolver is None:
            self._resolver = VersionResolver(
                base_url=self.settings.registry_url,
                timeout=self.settings.timeout,
                user_agent=self.settings.user_agent,
            )
        return self._resolver

    @property
    def project_path(self) -> Path:
        return Path(self.config.path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self) -> int:
        """Execute every step and return the process exit code."""
        try:
            return await self._run()
        except BaseException:
            self.state = ScaffoldState.FAILED
            raise

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _run(self) -> int:
        if not self.config.path or not self.config.name:
            raise InvalidPath()

        self.template_set = select_templates(self.config.arg_parser)
        self.license_assets = select_license(self.config.license)
        self.state = ScaffoldState.TEMPLATES_SELECTED

        exit_code = await self._invoke_initializer()
        if exit_code != 0:
            self.state = ScaffoldState.FAILED
            return exit_code
        self.state = ScaffoldState.INITIALIZER_INVOKED

        self.dependencies = await self.resolve_dependencies(self.template_set)

        await self.materializer.materialize_sources(
            self.project_path,
            self.template_set,
            self.license_assets,
            self.renderer,
            {"name": self.config.name},
            include_readme=self.config.include_readme,
            on_event=self._record,
        )
        self.state = ScaffoldState.FILES_MATERIALIZED

        await asyncio.to_thread(
            self.merger.merge,
            FileRole.MANIFEST.target(self.project_path),
            self.dependencies,
            self.license_assets,
            self.config.include_readme,
        )
        self._record(WriteEvent(verb=FileRole.MANIFEST.verb, path=MANIFEST_FILENAME))
        self.state = ScaffoldState.MANIFEST_MERGED

        self.reporter.info(
            "Created", f"binary cli (application) `{self.config.name}` project"
        )
        self.state = ScaffoldState.DONE
        return 0

    async def _invoke_initializer(self) -> int:
        args = self.config.initializer_args()
        self.reporter.trace("Running", " ".join([self.settings.cargo, *args]))
        exit_code = await self.initializer.run(args)
        if exit_code < 0:
            # Terminated by a signal: there is no exit code to propagate.
            raise InvalidExitCode()
        return exit_code

    async def resolve_dependencies(self, template_set: TemplateSet) -> dict[str, str]:
        """Build the dependency set, querying crates.io only when enabled."""
        if not self.config.query_latest:
            return fallback_dependencies(template_set)

        results = await self.resolver.lookup_all(template_set.dependencies)
        for result in results:
            if result.success:
                self.reporter.trace("Resolved", f"{result.crate} v{result.version}")
            else:
                self.reporter.debug(
                    "Fallback", f"{result.crate} v{result.version} ({result.error})"
                )
        return {r.crate: r.version for r in results}

    def _record(self, event: WriteEvent) -> None:
        self.events.append(event)
        self.reporter.emit(event)
