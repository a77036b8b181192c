"""Load, merge and store ``Cargo.toml``.

The manifest is kept as the ``tomlkit`` document tree rather than a fixed
model.  Tables and keys the merger does not own (``[features]``,
``[[bin]]``, ``[target.*.dependencies]``, ``edition`` ...) are left where they
are, along with comments, inline tables and blank lines; new keys are appended
to the end of the table they belong to.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

from .catalog import README_FILENAME, LicenseAssets
from .errors import InvalidPath, ManifestError


MANIFEST_FILENAME = "Cargo.toml"


class Manifest:
    """Thin view over a parsed ``Cargo.toml`` document."""

    def __init__(self, data: TOMLDocument) -> None:
        self.data = data

    @classmethod
    def from_string(cls, text: str) -> "Manifest":
        try:
            data = tomlkit.parse(text)
        except TOMLKitError as exc:
            raise ManifestError(f"Cannot parse {MANIFEST_FILENAME}: {exc}") from exc
        if not isinstance(data.get("package"), dict):
            raise ManifestError(f"{MANIFEST_FILENAME} has no [package] table")
        return cls(data)

    def to_string(self) -> str:
        try:
            return tomlkit.dumps(self.data)
        except (TOMLKitError, TypeError, ValueError) as exc:
            raise ManifestError(f"Cannot serialise {MANIFEST_FILENAME}: {exc}") from exc

    # ------------------------------------------------------------------
    # Owned sections
    # ------------------------------------------------------------------

    @property
    def package(self) -> dict[str, Any]:
        package = self.data.get("package")
        if not isinstance(package, dict):
            raise ManifestError(f"{MANIFEST_FILENAME} has no [package] table")
        return package

    @property
    def dependencies(self) -> dict[str, Any]:
        """The ``[dependencies]`` table, appended empty when missing."""
        deps = self.data.setdefault("dependencies", tomlkit.table())
        if not isinstance(deps, dict):
            raise ManifestError(f"{MANIFEST_FILENAME} [dependencies] is not a table")
        return deps

    @property
    def name(self) -> str:
        return str(self.package.get("name", ""))

    @property
    def license(self) -> str | None:
        value = self.package.get("license")
        return None if value is None else str(value)

    @property
    def readme(self) -> str | None:
        value = self.package.get("readme")
        return None if value is None else str(value)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_dependencies(self, deps: Mapping[str, str]) -> None:
        """Insert or overwrite *deps*; other entries are left untouched."""
        table = self.dependencies
        for crate, version in deps.items():
            table[crate] = version

    def set_license(self, license_field: str | None) -> None:
        if license_field is not None:
            self.package["license"] = license_field

    def set_readme(self, readme: str) -> None:
        self.package["readme"] = readme


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def load_manifest(path: str | Path) -> Manifest:
    """Read and parse the manifest at *path*.

    Raises:
        InvalidPath: If the file does not exist.
        ManifestError: If the file is not a valid ``Cargo.toml``.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise InvalidPath(f"No {MANIFEST_FILENAME} found at {file_path}") from exc
    return Manifest.from_string(raw)


def save_manifest(manifest: Manifest, path: str | Path) -> None:
    """Serialise *manifest* and truncate-write it to *path*.

    Serialisation happens before the file is opened, so a failure leaves the
    existing file untouched.
    """
    content = manifest.to_string()
    Path(path).write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# ManifestMerger
# ---------------------------------------------------------------------------


class ManifestMerger:
    """Merges resolved dependencies and license/readme metadata into ``Cargo.toml``."""

    def merge(
        self,
        manifest_path: str | Path,
        deps: Mapping[str, str],
        license_assets: LicenseAssets,
        include_readme: bool,
    ) -> Manifest:
        """Load *manifest_path*, apply the owned fields and write it back.

        The in-memory document is fully updated before anything is written.
        """
        manifest = load_manifest(manifest_path)
        manifest.add_dependencies(deps)
        if include_readme:
            manifest.set_readme(README_FILENAME)
        manifest.set_license(license_assets.manifest_license)
        save_manifest(manifest, manifest_path)
        return manifest
