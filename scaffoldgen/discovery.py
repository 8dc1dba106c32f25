# File: scaffoldgen/discovery.py
"""
scaffoldgen - Model Discovery
==============================

Finds the classes to scaffold and reduces each to a ``ModelDescriptor``.

Two interchangeable sources share the ``discover(namespace)`` signature:

``ModuleScanner``
    Imports a module (every sub-module too, for a package) and keeps the
    classes declared there that are concrete, non-generic, not nested and
    derive from ``Entity[K]`` where ``K`` is the type of their ``Id``.

``ModelRegistry``
    Static list filled by the caller.  No imports, no introspection beyond
    ``describe_model`` for registered classes.

Order follows module definition order; callers should not rely on it.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import typing
from types import ModuleType
from typing import Any, Dict, Iterator, List, Optional, Set, Union

from scaffoldgen.entity import Entity
from scaffoldgen.exceptions import ModelDiscoveryError
from scaffoldgen.models import ModelDescriptor

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.discovery")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ID_FIELD: str = "Id"

_MISSING: Any = object()


# ---------------------------------------------------------------------------
# Type introspection helpers
# ---------------------------------------------------------------------------


def type_name(tp: Any) -> str:
    """Short display name of a type annotation (``int``, ``UUID``, ``Optional[int]``)."""
    if isinstance(tp, str):
        return tp
    if isinstance(tp, typing.ForwardRef):
        return tp.__forward_arg__
    if typing.get_origin(tp) is None:
        name: Optional[str] = getattr(tp, "__name__", None)
        if name:
            return name
    return repr(tp).replace("typing.", "")


def entity_key_argument(cls: type) -> Any:
    """
    Return ``K`` from the nearest ``Entity[K]`` (or ``SubEntity[K]``) base of
    *cls*, or ``_MISSING`` when *cls* has no parameterised entity base.
    """
    for klass in cls.__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin: Any = typing.get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, Entity)):
                continue
            args = typing.get_args(base)
            if args:
                return args[0]
    return _MISSING


def _class_annotations(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references: keep the raw strings.
        merged: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(inspect.get_annotations(klass))
        return merged


def id_annotation(cls: type) -> Any:
    """Declared type of the ``Id`` field or property, or ``_MISSING``."""
    hints: Dict[str, Any] = _class_annotations(cls)
    if ID_FIELD in hints:
        return hints[ID_FIELD]

    attr: Any = inspect.getattr_static(cls, ID_FIELD, None)
    if isinstance(attr, property) and attr.fget is not None:
        try:
            returns: Any = typing.get_type_hints(attr.fget).get("return", _MISSING)
        except (NameError, TypeError):
            returns = inspect.get_annotations(attr.fget).get("return", _MISSING)
        return returns
    return _MISSING


def _resolve_key_type(cls: type) -> Any:
    """
    Key type of an entity class, ``_MISSING`` for no ``Id``, or ``None`` when
    ``Id`` contradicts the entity parameter.
    """
    key_arg: Any = entity_key_argument(cls)
    declared: Any = id_annotation(cls)

    if declared is _MISSING:
        return _MISSING
    if isinstance(declared, typing.TypeVar):
        return key_arg
    if key_arg is _MISSING or isinstance(key_arg, typing.TypeVar):
        return declared
    if declared == key_arg or type_name(declared) == type_name(key_arg):
        return declared
    return None


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


def is_nested(cls: type) -> bool:
    return "." in cls.__qualname__


def is_generic(cls: type) -> bool:
    return bool(getattr(cls, "__parameters__", ()))


def is_model(cls: Any) -> bool:
    """True when *cls* is a concrete, non-generic, top-level entity model."""
    if not inspect.isclass(cls) or cls is Entity:
        return False
    if not issubclass(cls, Entity):
        return False
    if inspect.isabstract(cls) or is_generic(cls) or is_nested(cls):
        return False

    key_arg: Any = entity_key_argument(cls)
    if key_arg is _MISSING or isinstance(key_arg, typing.TypeVar):
        return False

    if _resolve_key_type(cls) is None:
        logger.debug(
            "Skipping %s: Id type does not match its entity key %s.",
            cls.__qualname__,
            type_name(key_arg),
        )
        return False
    return True


def describe_model(cls: type) -> ModelDescriptor:
    """
    Build the descriptor of an entity class.

    A missing ``Id`` is tolerated: ``key_type_name`` is ``None`` and a
    warning is logged.

    Raises:
        ModelDiscoveryError: If *cls* is not an ``Entity`` subclass.
    """
    if not (inspect.isclass(cls) and issubclass(cls, Entity)):
        raise ModelDiscoveryError(f"{cls!r} is not an Entity subclass.")

    key: Any = _resolve_key_type(cls)
    if key is _MISSING:
        logger.warning(
            "Model %s declares no '%s' field; key type will be empty.",
            cls.__name__,
            ID_FIELD,
        )
        key_name: Optional[str] = None
    elif key is None:
        key_name = type_name(id_annotation(cls))
    else:
        key_name = type_name(key)

    return ModelDescriptor(name=cls.__name__, key_type_name=key_name)


# ---------------------------------------------------------------------------
# Module scanning
# ---------------------------------------------------------------------------


def _import(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as exc:
        raise ModelDiscoveryError(f"Cannot import models module '{name}': {exc}") from exc


def _iter_modules(namespace: str) -> Iterator[ModuleType]:
    module: ModuleType = _import(namespace)
    yield module

    search_path = getattr(module, "__path__", None)
    if search_path is None:
        return

    def _on_error(name: str) -> None:
        raise ModelDiscoveryError(f"Cannot import models module '{name}'.")

    for info in pkgutil.walk_packages(
        search_path, prefix=module.__name__ + ".", onerror=_on_error
    ):
        yield _import(info.name)


class ModuleScanner:
    """Discover models by importing and introspecting a module or package."""

    def discover(self, namespace: str) -> List[ModelDescriptor]:
        descriptors: List[ModelDescriptor] = []
        seen: Set[type] = set()

        for module in _iter_modules(namespace):
            for value in list(vars(module).values()):
                if not inspect.isclass(value) or value in seen:
                    continue
                if value.__module__ != module.__name__:
                    continue
                seen.add(value)
                if is_model(value):
                    descriptors.append(describe_model(value))

        logger.info(
            "Discovered %d model(s) in %s: %s",
            len(descriptors),
            namespace,
            ", ".join(d.name for d in descriptors) or "-",
        )
        return descriptors

    def __repr__(self) -> str:
        return "<ModuleScanner>"


# ---------------------------------------------------------------------------
# Static registry
# ---------------------------------------------------------------------------


class ModelRegistry:
    """
    Explicit list of models to scaffold.

    Usage::

        registry = ModelRegistry()
        registry.register(Product)
        registry.register("Invoice", key_type_name="UUID")
        ScaffoldGenerator(settings, discovery=registry).generate_all()
    """

    def __init__(self) -> None:
        self._descriptors: Dict[str, ModelDescriptor] = {}

    def register(
        self,
        model: Union[type, str, ModelDescriptor],
        key_type_name: Optional[str] = None,
    ) -> ModelDescriptor:
        """Register a class, a descriptor, or a bare name plus key type."""
        if isinstance(model, ModelDescriptor):
            descriptor: ModelDescriptor = model
        elif isinstance(model, str):
            descriptor = ModelDescriptor(name=model, key_type_name=key_type_name)
        else:
            descriptor = describe_model(model)

        self._descriptors[descriptor.name] = descriptor
        logger.debug("Registered %r", descriptor)
        return descriptor

    def discover(self, namespace: Optional[str] = None) -> List[ModelDescriptor]:
        """Return every registered descriptor; *namespace* is ignored."""
        return list(self._descriptors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"<ModelRegistry {len(self._descriptors)} model(s)>"


# ---------------------------------------------------------------------------
# Explicit model references
# ---------------------------------------------------------------------------


def resolve_model_reference(reference: str) -> type:
    """
    Import a class from ``package.module:ClassName`` (or
    ``package.module.ClassName``).

    Raises:
        ModelDiscoveryError: If the module or attribute is missing.
    """
    if ":" in reference:
        module_name, _, attr = reference.partition(":")
    else:
        module_name, _, attr = reference.rpartition(".")

    if not module_name or not attr:
        raise ModelDiscoveryError(
            f"Invalid model reference '{reference}'; expected 'module:ClassName'."
        )

    module: ModuleType = _import(module_name)
    try:
        target: Any = getattr(module, attr)
    except AttributeError as exc:
        raise ModelDiscoveryError(
            f"Module '{module_name}' has no attribute '{attr}'."
        ) from exc

    if not inspect.isclass(target):
        raise ModelDiscoveryError(f"'{reference}' is not a class.")
    return target


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ID_FIELD",
    "type_name",
    "entity_key_argument",
    "id_annotation",
    "is_model",
    "describe_model",
    "ModuleScanner",
    "ModelRegistry",
    "resolve_model_reference",
]
