# File: scaffoldgen/templates.py
"""
scaffoldgen - Code Template Engine
===================================
Loads named template bodies and fills their placeholder tokens.

Templates ship inside the package under ``code_templates/`` and are
addressed by ``(package, "code_templates", template_name)``.  A
``template_dir`` given by the caller is searched first, so projects can
override a single template without copying the whole set.

Substitution is literal: no regex, no expressions, no escaping rules.
Every recognised token is replaced in one left-to-right pass and the
replacement text is never scanned again, so a value that happens to
contain ``{ModelTypeName}`` is emitted verbatim.  Unknown ``{...}`` tokens
are left untouched.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from scaffoldgen.models import GeneratorSettings, ModelDescriptor

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TEMPLATE_PACKAGE: str = "scaffoldgen"
TEMPLATE_FOLDER: str = "code_templates"

MODELS_NAMESPACE_TOKEN: str = "{ModelsNamespace}"
IREPOSITORIES_NAMESPACE_TOKEN: str = "{IRepositoriesNamespace}"
REPOSITORIES_NAMESPACE_TOKEN: str = "{RepositoriesNamespace}"
CONTROLLERS_NAMESPACE_TOKEN: str = "{ControllersNamespace}"
MODEL_TYPE_NAME_TOKEN: str = "{ModelTypeName}"
KEY_TYPE_NAME_TOKEN: str = "{KeyTypeName}"

PLACEHOLDER_TOKENS: Tuple[str, ...] = (
    MODELS_NAMESPACE_TOKEN,
    IREPOSITORIES_NAMESPACE_TOKEN,
    REPOSITORIES_NAMESPACE_TOKEN,
    CONTROLLERS_NAMESPACE_TOKEN,
    MODEL_TYPE_NAME_TOKEN,
    KEY_TYPE_NAME_TOKEN,
)


# ---------------------------------------------------------------------------
# Template store
# ---------------------------------------------------------------------------


class TemplateStore:
    """
    Named template bodies, cached per instance.

    ``load`` never raises for a missing template: it logs a warning and
    returns an empty body.
    """

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        self._template_dir: Optional[Path] = (
            Path(template_dir) if template_dir is not None else None
        )
        self._cache: Dict[str, str] = {}

    def load(self, template_name: str) -> str:
        if template_name in self._cache:
            return self._cache[template_name]

        body: Optional[str] = self._read_override(template_name)
        if body is None:
            body = self._read_packaged(template_name)
        if body is None:
            logger.warning(
                "Template '%s' not found; generating from an empty body.",
                template_name,
            )
            body = ""

        self._cache[template_name] = body
        return body

    def _read_override(self, template_name: str) -> Optional[str]:
        if self._template_dir is None:
            return None
        path: Path = self._template_dir / template_name
        if not path.is_file():
            return None
        logger.debug("Loaded template %s from %s", template_name, path)
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _read_packaged(template_name: str) -> Optional[str]:
        resource = (
            resources.files(TEMPLATE_PACKAGE)
            .joinpath(TEMPLATE_FOLDER)
            .joinpath(template_name)
        )
        if not resource.is_file():
            return None
        logger.debug("Loaded packaged template %s", template_name)
        return resource.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"<TemplateStore override={self._template_dir}>"


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------


def build_placeholder_map(
    settings: GeneratorSettings, descriptor: ModelDescriptor
) -> Dict[str, str]:
    """Ordered token → value map for one model; a missing key type maps to ``""``."""
    return {
        MODELS_NAMESPACE_TOKEN: settings.models_namespace,
        IREPOSITORIES_NAMESPACE_TOKEN: settings.irepositories_namespace,
        REPOSITORIES_NAMESPACE_TOKEN: settings.repositories_namespace,
        CONTROLLERS_NAMESPACE_TOKEN: settings.controllers_namespace,
        MODEL_TYPE_NAME_TOKEN: descriptor.name,
        KEY_TYPE_NAME_TOKEN: descriptor.key_type_name or "",
    }


def substitute(body: str, placeholders: Mapping[str, str]) -> str:
    """
    Replace every token of *placeholders* in *body*.

    Scans left to right; at each step the earliest occurring token wins,
    ties going to the token listed first.  Replacement values are copied
    to the output and never re-scanned.
    """
    tokens: List[str] = [t for t in placeholders if t]
    if not body or not tokens:
        return body

    parts: List[str] = []
    pos: int = 0
    while True:
        best_index: int = -1
        best_token: str = ""
        for token in tokens:
            index: int = body.find(token, pos)
            if index != -1 and (best_index == -1 or index < best_index):
                best_index, best_token = index, token
        if best_index == -1:
            break
        parts.append(body[pos:best_index])
        parts.append(placeholders[best_token])
        pos = best_index + len(best_token)

    parts.append(body[pos:])
    return "".join(parts)


def render(
    store: TemplateStore,
    template_name: str,
    settings: GeneratorSettings,
    descriptor: ModelDescriptor,
) -> str:
    """Load *template_name* and fill it for *descriptor*."""
    return substitute(store.load(template_name), build_placeholder_map(settings, descriptor))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "TEMPLATE_PACKAGE",
    "TEMPLATE_FOLDER",
    "PLACEHOLDER_TOKENS",
    "TemplateStore",
    "build_placeholder_map",
    "substitute",
    "render",
]
