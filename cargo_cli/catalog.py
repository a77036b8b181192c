"""Static template and license registries.

Selection is a pure lookup keyed by the closed ``ArgParser`` and
``LicenseChoice`` enumerations.  Template entries are names relative to the
package template directory and are resolved by ``TemplateRenderer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from .config import ArgParser, LicenseChoice
from .errors import InvalidArgParser, InvalidLicense


README_FILENAME = "README.md"
README_TEMPLATE = "README.md.j2"

# Versions used when crates.io is not queried or cannot be reached.
FALLBACK_VERSIONS: Mapping[str, str] = MappingProxyType(
    {
        "clap": "2.25.0",
        "docopt": "0.8.1",
        "error-chain": "0.10.0",
        "serde": "1.0.8",
        "serde_derive": "1.0.8",
    }
)


# ---------------------------------------------------------------------------
# Template sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateSet:
    """Source templates and crate dependencies for one argument parser."""

    arg_parser: ArgParser
    main_template: str
    run_template: str
    error_template: str
    dependencies: tuple[str, ...]


_TEMPLATE_SETS: Mapping[ArgParser, TemplateSet] = MappingProxyType(
    {
        ArgParser.CLAP: TemplateSet(
            arg_parser=ArgParser.CLAP,
            main_template="clap/main.rs.j2",
            run_template="clap/run.rs.j2",
            error_template="clap/error.rs.j2",
            dependencies=("clap", "error-chain"),
        ),
        ArgParser.DOCOPT: TemplateSet(
            arg_parser=ArgParser.DOCOPT,
            main_template="docopt/main.rs.j2",
            run_template="docopt/run.rs.j2",
            error_template="docopt/error.rs.j2",
            dependencies=("docopt", "error-chain", "serde", "serde_derive"),
        ),
    }
)


def select_templates(arg_parser: Any) -> TemplateSet:
    """Return the ``TemplateSet`` for *arg_parser*.

    Raises:
        InvalidArgParser: If *arg_parser* is not a known parser.
    """
    try:
        return _TEMPLATE_SETS[ArgParser(arg_parser)]
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidArgParser() from exc


def fallback_version(crate: str) -> str:
    """Return the pinned fallback version for *crate*."""
    return FALLBACK_VERSIONS[crate]


def fallback_dependencies(template_set: TemplateSet) -> dict[str, str]:
    """Build the dependency set from fallback versions only."""
    return {crate: fallback_version(crate) for crate in template_set.dependencies}


# ---------------------------------------------------------------------------
# License assets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LicenseAssets:
    """License header, license file bodies and ``Cargo.toml`` license value.

    Absent bodies are ``None`` and mean "do not create this file".
    """

    choice: LicenseChoice
    header_template: str | None
    mit_template: str | None
    apache_template: str | None
    manifest_license: str | None

    @property
    def has_license(self) -> bool:
        return self.mit_template is not None or self.apache_template is not None


_LICENSE_ASSETS: Mapping[LicenseChoice, LicenseAssets] = MappingProxyType(
    {
        LicenseChoice.BOTH: LicenseAssets(
            choice=LicenseChoice.BOTH,
            header_template="license/header_both.j2",
            mit_template="license/LICENSE-MIT.j2",
            apache_template="license/LICENSE-APACHE.j2",
            manifest_license="MIT/Apache-2.0",
        ),
        LicenseChoice.MIT: LicenseAssets(
            choice=LicenseChoice.MIT,
            header_template="license/header_mit.j2",
            mit_template="license/LICENSE-MIT.j2",
            apache_template=None,
            manifest_license="MIT",
        ),
        LicenseChoice.APACHE: LicenseAssets(
            choice=LicenseChoice.APACHE,
            header_template="license/header_apache.j2",
            mit_template=None,
            apache_template="license/LICENSE-APACHE.j2",
            manifest_license="Apache-2.0",
        ),
        LicenseChoice.NONE: LicenseAssets(
            choice=LicenseChoice.NONE,
            header_template=None,
            mit_template=None,
            apache_template=None,
            manifest_license=None,
        ),
    }
)


def select_license(choice: Any) -> LicenseAssets:
    """Return the ``LicenseAssets`` for *choice*.

    Raises:
        InvalidLicense: If *choice* is not a known license selection.
    """
    try:
        return _LICENSE_ASSETS[LicenseChoice(choice)]
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidLicense() from exc
