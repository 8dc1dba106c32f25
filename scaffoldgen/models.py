# File: scaffoldgen/models.py
"""
scaffoldgen - Core Data Models
===============================
Pydantic V2 models and static descriptors shared by the whole pipeline:

    Settings → Discovery → Path resolution → Template substitution → Write

``GeneratorSettings`` is built once at process start and passed down by
parameter; nothing in the pipeline mutates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.models")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TargetKind(str, Enum):
    """The three artefact kinds produced for every model."""

    IREPOSITORY = "irepository"
    REPOSITORY = "repository"
    CONTROLLER = "controller"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class GeneratorSettings(BaseModel):
    """
    Read-only generator configuration.

    The four namespace hints double as directory names relative to
    ``project_root`` and as the import paths embedded in the generated code.
    They are accepted under their PascalCase keys too, so an existing
    ``CodeGenerateOption`` section can be fed in unchanged.
    """

    model_config = _FROZEN_CONFIG

    models_namespace: str = Field(
        ..., alias="ModelsNamespace", description="Module or package holding the models."
    )
    irepositories_namespace: str = Field(
        ..., alias="IRepositoriesNamespace", description="Namespace of repository contracts."
    )
    repositories_namespace: str = Field(
        ..., alias="RepositoriesNamespace", description="Namespace of repository implementations."
    )
    controllers_namespace: str = Field(
        ..., alias="ControllersNamespace", description="Namespace of controllers."
    )
    project_root: Path = Field(
        ..., description="Directory the namespace hints are resolved against."
    )
    file_extension: str = Field(
        default=".py", description="Extension of every generated file."
    )
    template_dir: Optional[Path] = Field(
        default=None,
        description="Directory searched for templates before the packaged set.",
    )

    @field_validator(
        "models_namespace",
        "irepositories_namespace",
        "repositories_namespace",
        "controllers_namespace",
    )
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("namespace must not be blank")
        return v

    @field_validator("file_extension")
    @classmethod
    def _dotted_extension(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("."):
            v = "." + v
        return v

    def __repr__(self) -> str:
        return f"<GeneratorSettings models={self.models_namespace} root={self.project_root}>"


# ---------------------------------------------------------------------------
# Model descriptor
# ---------------------------------------------------------------------------


class ModelDescriptor(BaseModel):
    """Name and key type of one discovered model."""

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1, description="Simple class name of the model.")
    key_type_name: Optional[str] = Field(
        default=None, description="Type name of the model's ``Id`` field, if declared."
    )

    def __repr__(self) -> str:
        return f"<ModelDescriptor {self.name}[{self.key_type_name or '?'}]>"


# ---------------------------------------------------------------------------
# Generation targets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GenerationTarget:
    """
    Static description of one artefact kind.

    ``namespace_field`` names the ``GeneratorSettings`` attribute holding the
    preferred output directory; ``fallback_directory`` is used (and created)
    when that directory does not exist.
    """

    kind: TargetKind
    template_name: str
    namespace_field: str
    fallback_directory: str
    file_name_format: str

    def file_name(self, model_name: str, extension: str = ".py") -> str:
        return self.file_name_format.format(model=model_name) + extension

    def namespace_hint(self, settings: GeneratorSettings) -> str:
        return getattr(settings, self.namespace_field)


IREPOSITORY_TARGET: GenerationTarget = GenerationTarget(
    kind=TargetKind.IREPOSITORY,
    template_name="IRepositoryTemplate.txt",
    namespace_field="irepositories_namespace",
    fallback_directory="IRepositories",
    file_name_format="I{model}Repository",
)

REPOSITORY_TARGET: GenerationTarget = GenerationTarget(
    kind=TargetKind.REPOSITORY,
    template_name="RepositoryTemplate.txt",
    namespace_field="repositories_namespace",
    fallback_directory="Repositories",
    file_name_format="{model}Repository",
)

CONTROLLER_TARGET: GenerationTarget = GenerationTarget(
    kind=TargetKind.CONTROLLER,
    template_name="ControllerTemplate.txt",
    namespace_field="controllers_namespace",
    fallback_directory="Controllers",
    file_name_format="{model}Controller",
)

DEFAULT_TARGETS: Tuple[GenerationTarget, ...] = (
    IREPOSITORY_TARGET,
    REPOSITORY_TARGET,
    CONTROLLER_TARGET,
)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "TargetKind",
    "GeneratorSettings",
    "ModelDescriptor",
    "GenerationTarget",
    "IREPOSITORY_TARGET",
    "REPOSITORY_TARGET",
    "CONTROLLER_TARGET",
    "DEFAULT_TARGETS",
]

logger.debug("scaffoldgen.models loaded — %d public symbols.", len(__all__))
