"""
tests/conftest.py
Shared fixtures for the scaffoldgen test suite.

Real file I/O happens inside pytest's ``tmp_path``.  Model modules are
written to disk and imported through ``sys.path`` so discovery sees
ordinary top-level classes.
"""

from __future__ import annotations

import importlib
import logging
import pathlib
import sys
import textwrap
import uuid
from typing import Any, Callable, Dict, Iterator, Optional, Set

import pytest
import yaml

from scaffoldgen.models import GeneratorSettings


# ---------------------------------------------------------------------------
# Model sources
# ---------------------------------------------------------------------------

SHOP_MODELS_SOURCE: str = '''
import abc
from typing import Generic, TypeVar

from scaffoldgen import Entity

T = TypeVar("T")


class Product(Entity[int]):
    Id: int
    title: str


class Order(Entity[str]):
    Id: str


class Customer(Entity[int]):
    @property
    def Id(self) -> int:
        return 1


class Keyless(Entity[int]):
    title: str


class AbstractProduct(Entity[int], abc.ABC):
    Id: int

    @abc.abstractmethod
    def price(self) -> float:
        ...


class GenericProduct(Entity[int], Generic[T]):
    Id: int


class Outer:
    class NestedProduct(Entity[int]):
        Id: int


class Mismatched(Entity[int]):
    Id: str


class NotAModel:
    Id: int
'''


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_scaffoldgen_logger() -> Iterator[None]:
    """The CLI detaches the package logger; restore it for caplog."""
    yield
    pkg_logger: logging.Logger = logging.getLogger("scaffoldgen")
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Importable model modules
# ---------------------------------------------------------------------------


@pytest.fixture()
def module_root(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[pathlib.Path]:
    """A directory on ``sys.path``; modules imported from it are unloaded afterwards."""
    root: pathlib.Path = tmp_path / "modsrc"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    before: Set[str] = set(sys.modules)
    yield root
    for name in set(sys.modules) - before:
        module = sys.modules.get(name)
        if module is not None and str(root) in str(getattr(module, "__file__", "") or ""):
            del sys.modules[name]


@pytest.fixture()
def write_models(module_root: pathlib.Path) -> Callable[..., str]:
    """
    Write a model module (or package) and return its import name.

    ``write_models(source)`` creates a module; ``write_models(files={...})``
    creates a package from ``{"relative/path.py": source}``.
    """

    def _write(
        source: Optional[str] = None,
        *,
        files: Optional[Dict[str, str]] = None,
    ) -> str:
        name: str = f"scaffold_models_{uuid.uuid4().hex[:10]}"
        if files is None:
            (module_root / f"{name}.py").write_text(
                textwrap.dedent(source or ""), encoding="utf-8"
            )
            importlib.invalidate_caches()
            return name

        pkg: pathlib.Path = module_root / name
        pkg.mkdir()
        (pkg / "__init__.py").write_text("", encoding="utf-8")
        for rel, body in files.items():
            path: pathlib.Path = pkg / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(body), encoding="utf-8")
        importlib.invalidate_caches()
        return name

    return _write


@pytest.fixture()
def shop_models(write_models: Callable[..., str]) -> str:
    """Import name of a module holding the reference shop models."""
    return write_models(SHOP_MODELS_SOURCE)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_root(tmp_path: pathlib.Path) -> pathlib.Path:
    root: pathlib.Path = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def make_settings(project_root: pathlib.Path) -> Callable[..., GeneratorSettings]:
    """Factory for ``GeneratorSettings`` rooted at ``project_root``."""

    def _make(**overrides: Any) -> GeneratorSettings:
        values: Dict[str, Any] = {
            "models_namespace": "shop.models",
            "irepositories_namespace": "shop.irepositories",
            "repositories_namespace": "shop.repositories",
            "controllers_namespace": "shop.controllers",
            "project_root": project_root,
        }
        values.update(overrides)
        return GeneratorSettings(**values)

    return _make


@pytest.fixture()
def all_tokens_template_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Override templates that use each of the six tokens exactly once."""
    directory: pathlib.Path = tmp_path / "templates"
    directory.mkdir()
    body: str = (
        "models={ModelsNamespace}\n"
        "irepos={IRepositoriesNamespace}\n"
        "repos={RepositoriesNamespace}\n"
        "controllers={ControllersNamespace}\n"
        "model={ModelTypeName}\n"
        "key={KeyTypeName}\n"
    )
    for name in ("IRepositoryTemplate.txt", "RepositoryTemplate.txt", "ControllerTemplate.txt"):
        (directory / name).write_text(body, encoding="utf-8")
    return directory


@pytest.fixture()
def config_file(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Write a YAML settings file and return its path."""

    def _write(data: Dict[str, Any], name: str = "scaffold.yaml") -> pathlib.Path:
        path: pathlib.Path = tmp_path / name
        with open(path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(data, fh, default_flow_style=False)
        return path

    return _write

