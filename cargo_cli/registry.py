"""Async crates.io version lookups.

Wraps ``GET /api/v1/crates/<name>`` with a bounded timeout and a fail-soft
policy: any transport, status or payload problem degrades to the crate's
pinned fallback version instead of raising.  Scaffolding must keep working
offline.

Typical usage::

    resolver = VersionResolver()
    deps = await resolver.resolve_all(["clap", "error-chain"])
"""

from __future__ import annotations

import asyncio
from typing import Iterable

import httpx
from pydantic import BaseModel, Field

from .catalog import fallback_version


class CrateVersion(BaseModel):
    """Outcome of a single version lookup."""

    crate: str
    version: str
    success: bool = Field(default=True, description="Whether crates.io answered")
    error: str | None = Field(default=None, description="Why the fallback was used")


class VersionResolver:
    """Resolves the latest published version of a crate on crates.io."""

    def __init__(
        self,
        base_url: str = "https://crates.io",
        timeout: float = 5.0,
        user_agent: str = "cargo-cli",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers={"Accept": "application/json", "User-Agent": self.user_agent},
        )

    @staticmethod
    def _extract_max_version(data: object) -> str:
        """Pull ``crate.max_version`` out of a crates.io response body."""
        if not isinstance(data, dict):
            raise ValueError("response body is not an object")
        crate = data.get("crate")
        if not isinstance(crate, dict):
            raise ValueError("response has no 'crate' record")
        version = crate.get("max_version")
        if not isinstance(version, str) or not version:
            raise ValueError("response has no 'max_version'")
        return version

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def lookup(self, crate: str) -> CrateVersion:
        """Look up *crate* and report whether the fallback had to be used."""
        fallback = fallback_version(crate)
        try:
            async with self._client() as client:
                response = await client.get(f"/api/v1/crates/{crate}")
                response.raise_for_status()
                version = self._extract_max_version(response.json())
                return CrateVersion(crate=crate, version=version)
        except httpx.ConnectError:
            error = f"Cannot connect to {self.base_url}"
        except httpx.TimeoutException:
            error = f"Lookup timed out after {self.timeout}s"
        except httpx.HTTPStatusError as exc:
            error = f"crates.io returned HTTP {exc.response.status_code}"
        except Exception as exc:  # noqa: BLE001
            error = f"Unexpected lookup failure: {exc}"
        return CrateVersion(crate=crate, version=fallback, success=False, error=error)

    async def resolve_latest(self, crate: str) -> str:
        """Return the latest version of *crate*, or its fallback on any failure."""
        result = await self.lookup(crate)
        return result.version

    async def lookup_all(self, crates: Iterable[str]) -> list[CrateVersion]:
        """Look up several crates concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.lookup(c) for c in crates)))

    async def resolve_all(self, crates: Iterable[str]) -> dict[str, str]:
        """Resolve several crates into an ordered ``{crate: version}`` mapping."""
        results = await self.lookup_all(crates)
        return {r.crate: r.version for r in results}
