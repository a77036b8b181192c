"""cargo-cli -- scaffolds Rust command line applications on top of ``cargo new``.

Quick usage::

    from cargo_cli import Configuration, ScaffoldOrchestrator

    config = Configuration(path="my-tool", arg_parser="docopt", license="mit")
    exit_code = await ScaffoldOrchestrator(config).run()
"""

__version__ = "0.1.0"

from cargo_cli.config import ArgParser, Configuration, LicenseChoice, Settings
from cargo_cli.scaffold import ScaffoldOrchestrator, ScaffoldState

__all__ = [
    "ArgParser",
    "Configuration",
    "LicenseChoice",
    "ScaffoldOrchestrator",
    "ScaffoldState",
    "Settings",
    "__version__",
]
