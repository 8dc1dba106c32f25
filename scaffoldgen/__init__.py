# File: scaffoldgen/__init__.py
"""
scaffoldgen — Repository & Controller Scaffolding Generator
===========================================================

Build-time code generator that turns domain model classes into starter
files for a repository layer (contract + implementation) and a thin
controller layer, using text templates with ``{Placeholder}`` tokens.

Architecture overview::

    ┌──────────────┐     ┌───────────────────┐     ┌───────────────┐
    │  CLI / Entry │────▶│ ScaffoldGenerator │────▶│ TemplateStore │
    │   (cli.py)   │     │  (generator.py)   │     │ (templates.py)│
    └──────────────┘     └─────────┬─────────┘     └───────────────┘
                                   │
                    ┌──────────────┼──────────────┐
                    ▼              ▼              ▼
             ┌────────────┐ ┌────────────┐ ┌────────────┐
             │ discovery  │ │   paths    │ │   models   │
             │   (.py)    │ │   (.py)    │ │   (.py)    │
             └────────────┘ └────────────┘ └────────────┘

Usage::

    # Models
    from scaffoldgen import Entity

    class Product(Entity[int]):
        Id: int

    # As a library
    from scaffoldgen import ScaffoldGenerator, GeneratorSettings
    ScaffoldGenerator(settings).generate_all(overwrite=False)

    # From the command line
    python -m scaffoldgen generate -c scaffold.yaml -v
"""

from __future__ import annotations

from typing import List

__version__: str = "0.1.0"
__license__: str = "MIT"

from scaffoldgen.entity import Entity
from scaffoldgen.exceptions import (
    ConfigurationError,
    ModelDiscoveryError,
    PathDerivationError,
    ScaffoldError,
)
from scaffoldgen.models import (
    CONTROLLER_TARGET,
    DEFAULT_TARGETS,
    IREPOSITORY_TARGET,
    REPOSITORY_TARGET,
    GenerationTarget,
    GeneratorSettings,
    ModelDescriptor,
    TargetKind,
)
from scaffoldgen.paths import PathResolver, derive_project_root
from scaffoldgen.templates import TemplateStore, build_placeholder_map, substitute
from scaffoldgen.discovery import (
    ModelRegistry,
    ModuleScanner,
    describe_model,
    is_model,
    resolve_model_reference,
)
from scaffoldgen.generator import (
    GenerationReport,
    ScaffoldGenerator,
    TargetFailure,
    load_settings_file,
    parse_raw_settings,
)

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: List[str] = [
    # Version info
    "__version__",
    "__license__",
    # Core orchestrator
    "ScaffoldGenerator",
    "GenerationReport",
    "TargetFailure",
    "load_settings_file",
    "parse_raw_settings",
    # Models
    "Entity",
    "GeneratorSettings",
    "ModelDescriptor",
    "GenerationTarget",
    "TargetKind",
    "IREPOSITORY_TARGET",
    "REPOSITORY_TARGET",
    "CONTROLLER_TARGET",
    "DEFAULT_TARGETS",
    # Discovery
    "ModuleScanner",
    "ModelRegistry",
    "describe_model",
    "is_model",
    "resolve_model_reference",
    # Paths & templates
    "PathResolver",
    "derive_project_root",
    "TemplateStore",
    "build_placeholder_map",
    "substitute",
    # Errors
    "ScaffoldError",
    "ConfigurationError",
    "PathDerivationError",
    "ModelDiscoveryError",
]
