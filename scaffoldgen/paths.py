# File: scaffoldgen/paths.py
"""
scaffoldgen - Output Path Resolution
=====================================

Two concerns live here:

``derive_project_root``
    Computes the project root from a build-output location once, at start-up.
    The convention is "repository root sits one level above the directory
    that contains ``bin``": ``/work/app/.venv/bin/python`` → ``/work/app``.

``PathResolver``
    Maps a namespace hint to an output directory under that root, creating a
    conventionally named fallback directory when the hint does not exist.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import List, Union

from scaffoldgen.exceptions import PathDerivationError
from scaffoldgen.utils import ensure_directory

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.paths")


# ---------------------------------------------------------------------------
# Project root derivation
# ---------------------------------------------------------------------------


def detect_separator(location: str) -> str:
    """Return ``/`` when *location* has a posix ``/bin`` segment, else ``\\``."""
    return "/" if "/bin" in location else "\\"


def derive_project_root(location: Union[str, Path]) -> Path:
    """
    Derive the project root from a location inside a ``bin`` directory.

    The path is cut at its first ``bin`` segment, then one more directory
    level is dropped.

    Raises:
        PathDerivationError: If *location* has no ``bin`` segment or nothing
            remains above it.
    """
    text: str = str(location)
    sep: str = detect_separator(text)
    marker: str = sep + "bin"

    index: int = -1
    start: int = 0
    while True:
        found: int = text.find(marker, start)
        if found < 0:
            break
        end: int = found + len(marker)
        if end == len(text) or text[end] == sep:
            index = found
            break
        start = found + 1

    if index <= 0:
        raise PathDerivationError(
            f"Cannot derive project root: no '{marker}' segment in {text!r}."
        )

    build_output: str = text[:index]
    parent_index: int = build_output.rfind(sep)
    if parent_index < 0:
        raise PathDerivationError(
            f"Cannot derive project root: nothing above {build_output!r}."
        )

    root: str = build_output[:parent_index] or sep
    if sep == "\\" and root.endswith(":"):
        root += sep

    pure = PurePosixPath(root) if sep == "/" else PureWindowsPath(root)
    logger.debug("Derived project root %s from %s", pure, text)
    return Path(str(pure))


# ---------------------------------------------------------------------------
# Path resolver
# ---------------------------------------------------------------------------


class PathResolver:
    """
    Resolve output directories below a fixed project root.

    Usage::

        resolver = PathResolver(Path("/work/app"))
        resolver.resolve("app.repositories", "Repositories")
    """

    def __init__(self, project_root: Path) -> None:
        self._project_root: Path = Path(project_root)

    @property
    def project_root(self) -> Path:
        return self._project_root

    def candidates(self, namespace_hint: str) -> List[Path]:
        """
        Directories a hint may name: the literal name first, then the dotted
        package path (``shop.repositories`` → ``shop/repositories``).
        """
        paths: List[Path] = [self._project_root / namespace_hint]
        if "." in namespace_hint.strip("."):
            paths.append(self._project_root.joinpath(*namespace_hint.split(".")))
        return paths

    def resolve(self, namespace_hint: str, fallback_name: str) -> Path:
        """
        Return the first existing directory among ``candidates(hint)``,
        otherwise ``project_root / fallback_name`` (created if absent).
        """
        for candidate in self.candidates(namespace_hint):
            if candidate.is_dir():
                return candidate

        preferred: Path = self._project_root / namespace_hint
        fallback: Path = self._project_root / fallback_name
        if not fallback.is_dir():
            logger.info(
                "Directory %s not found, creating fallback %s.",
                preferred,
                fallback,
            )
        return ensure_directory(fallback)

    def __repr__(self) -> str:
        return f"<PathResolver root={self._project_root}>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "detect_separator",
    "derive_project_root",
    "PathResolver",
]
