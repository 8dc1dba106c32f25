# File: scaffoldgen/generator.py
"""
scaffoldgen - Generation Pipeline (Orchestrator)
=================================================

Connects every phase together:

    Settings → Model discovery → (per model × per target)
        Path resolution → skip-or-render → atomic write

Workflow for one model::

    1. Build the ``ModelDescriptor`` (name + key type).
    2. For each target (IRepository, Repository, Controller), independently:
       a. resolve the output directory (namespace hint or fallback),
       b. skip when the file exists and ``overwrite`` is off,
       c. load the template, substitute placeholders, write atomically.
    3. Record the outcome in a ``GenerationReport``.

Error handling strategy:
    - Settings problems raise ``ConfigurationError`` before any file is
      touched.
    - Discovery problems raise ``ModelDiscoveryError``.
    - An ``OSError`` or an undecodable template on one target is recorded
      and logged; the remaining targets and models still run.  Nothing is rolled back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import yaml
from pydantic import ValidationError

from scaffoldgen.discovery import ModuleScanner, describe_model
from scaffoldgen.exceptions import ConfigurationError
from scaffoldgen.models import (
    DEFAULT_TARGETS,
    GenerationTarget,
    GeneratorSettings,
    ModelDescriptor,
)
from scaffoldgen.paths import PathResolver
from scaffoldgen.templates import TemplateStore, render
from scaffoldgen.utils import Timer, write_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.generator")

# Keys under which the settings may be nested in a config file.
_SETTINGS_SECTION_KEYS: Tuple[str, ...] = ("scaffold", "code_generate", "CodeGenerateOption")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TargetFailure:
    """One target that could not be written."""

    model: str
    kind: str
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.model} [{self.kind}] {self.path}: {self.message}"


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Outcome of ``generate_all`` / ``generate_single``.

    ``written`` and ``skipped`` hold absolute file paths in processing order.
    """

    models_processed: List[str] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failures: List[TargetFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failures

    def merge(self, other: "GenerationReport") -> None:
        self.models_processed.extend(other.models_processed)
        self.written.extend(other.written)
        self.skipped.extend(other.skipped)
        self.failures.extend(other.failures)

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "SUCCESS" if self.success else "FAILED"
        lines.append(f"{'='*60}")
        lines.append("  scaffoldgen — Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:           {status}")
        lines.append(f"  Models processed: {len(self.models_processed)}")
        lines.append(f"  Files written:    {len(self.written)}")
        lines.append(f"  Files skipped:    {len(self.skipped)}")
        lines.append(f"  Total time:       {self.elapsed_seconds:.3f}s")

        if self.written:
            lines.append(f"{'─'*60}")
            lines.append("  Written:")
            for path in self.written:
                lines.append(f"    ✓ {path}")

        if self.skipped:
            lines.append(f"{'─'*60}")
            lines.append("  Skipped (already exist):")
            for path in self.skipped:
                lines.append(f"    ⊘ {path}")

        if self.failures:
            lines.append(f"{'─'*60}")
            lines.append(f"  Failures ({len(self.failures)}):")
            for failure in self.failures:
                lines.append(f"    ✗ {failure}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Settings loader helpers
# ---------------------------------------------------------------------------


def load_settings_file(path: Path) -> Dict[str, Any]:
    """
    Load a settings file (YAML or JSON) into a dictionary.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a
            mapping.
    """
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration {path}: {exc}") from exc

    suffix: str = path.suffix.lower()
    try:
        if suffix == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at top level of {path}, got {type(data).__name__}."
        )
    return data


def settings_section(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the settings mapping, unwrapping a known section key if present."""
    for key in _SETTINGS_SECTION_KEYS:
        section: Any = raw.get(key)
        if isinstance(section, dict):
            return section
    return raw


def parse_raw_settings(
    raw: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
) -> GeneratorSettings:
    """
    Validate a raw mapping into ``GeneratorSettings``.

    The mapping may hold the settings directly or under one of the section
    keys ``scaffold``, ``code_generate`` or ``CodeGenerateOption``.
    *overrides* win over file values; ``None`` overrides are ignored.

    Raises:
        ConfigurationError: If required values are missing or invalid.
    """
    data: Dict[str, Any] = dict(settings_section(raw))

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return GeneratorSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid generator settings: {exc}") from exc


# ---------------------------------------------------------------------------
# ScaffoldGenerator — orchestrator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """
    Emit repository contract, repository and controller files per model.

    Usage::

        generator = ScaffoldGenerator(settings)
        report = generator.generate_all()
        generator.generate_single(Product, overwrite=True)

    ``discovery`` is anything with ``discover(namespace)``; it defaults to a
    ``ModuleScanner`` over ``settings.models_namespace``.
    """

    def __init__(
        self,
        settings: GeneratorSettings,
        *,
        template_store: Optional[TemplateStore] = None,
        discovery: Optional[Any] = None,
        targets: Sequence[GenerationTarget] = DEFAULT_TARGETS,
    ) -> None:
        self._settings: GeneratorSettings = settings
        self._templates: TemplateStore = template_store or TemplateStore(
            settings.template_dir
        )
        self._discovery: Any = discovery if discovery is not None else ModuleScanner()
        self._targets: Sequence[GenerationTarget] = tuple(targets)
        self._paths: PathResolver = PathResolver(settings.project_root)

        logger.debug(
            "ScaffoldGenerator initialised: root=%s, targets=%s.",
            settings.project_root,
            [t.kind.value for t in self._targets],
        )

    @property
    def settings(self) -> GeneratorSettings:
        return self._settings

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    def generate_all(self, overwrite: bool = False) -> GenerationReport:
        """Generate every target for every discovered model."""
        report: GenerationReport = GenerationReport()

        with Timer("generate_all") as timer:
            descriptors: List[ModelDescriptor] = self._discovery.discover(
                self._settings.models_namespace
            )
            for descriptor in descriptors:
                report.merge(self._generate_descriptor(descriptor, overwrite))

        report.elapsed_seconds = timer.elapsed
        self._log_outcome(report)
        return report

    def generate_single(
        self,
        model: Union[type, ModelDescriptor],
        overwrite: bool = False,
    ) -> GenerationReport:
        """Generate every target for one model class or descriptor."""
        descriptor: ModelDescriptor = (
            model if isinstance(model, ModelDescriptor) else describe_model(model)
        )

        with Timer(f"generate_single[{descriptor.name}]") as timer:
            report: GenerationReport = self._generate_descriptor(descriptor, overwrite)

        report.elapsed_seconds = timer.elapsed
        self._log_outcome(report)
        return report

    # -----------------------------------------------------------------
    # Internal: per model / per target
    # -----------------------------------------------------------------

    def _generate_descriptor(
        self, descriptor: ModelDescriptor, overwrite: bool
    ) -> GenerationReport:
        report: GenerationReport = GenerationReport()
        report.models_processed.append(descriptor.name)
        for target in self._targets:
            self._generate_target(target, descriptor, overwrite, report)
        return report

    def _generate_target(
        self,
        target: GenerationTarget,
        descriptor: ModelDescriptor,
        overwrite: bool,
        report: GenerationReport,
    ) -> None:
        file_name: str = target.file_name(descriptor.name, self._settings.file_extension)
        full_path: Path = Path(target.fallback_directory) / file_name

        try:
            directory: Path = self._paths.resolve(
                target.namespace_hint(self._settings),
                target.fallback_directory,
            )
            full_path = directory / file_name

            if full_path.is_file() and not overwrite:
                logger.debug("Skipping existing file %s", full_path)
                report.skipped.append(full_path)
                return

            content: str = render(
                self._templates, target.template_name, self._settings, descriptor
            )
            write_file(full_path, content)

        except (OSError, UnicodeDecodeError) as exc:
            failure: TargetFailure = TargetFailure(
                model=descriptor.name,
                kind=target.kind.value,
                path=str(full_path),
                message=f"{type(exc).__name__}: {exc}",
            )
            report.failures.append(failure)
            logger.error("Failed to generate %s", failure)
            return

        report.written.append(full_path)
        logger.info("Generated %s", full_path)

    def _log_outcome(self, report: GenerationReport) -> None:
        if report.success:
            logger.info(
                "Generation complete: %d model(s), %d written, %d skipped in %.3fs.",
                len(report.models_processed),
                len(report.written),
                len(report.skipped),
                report.elapsed_seconds,
            )
        else:
            logger.error(
                "Generation finished with %d failure(s) in %.3fs.",
                len(report.failures),
                report.elapsed_seconds,
            )

    def __repr__(self) -> str:
        return f"<ScaffoldGenerator {self._settings!r}>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ScaffoldGenerator",
    "GenerationReport",
    "TargetFailure",
    "load_settings_file",
    "parse_raw_settings",
    "settings_section",
]

logger.debug("scaffoldgen.generator loaded.")
