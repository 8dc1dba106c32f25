# File: scaffoldgen/exceptions.py
"""
scaffoldgen - Exception hierarchy
==================================

Only conditions that stop a run are exceptions.  Degraded cases (missing
template, missing ``Id`` annotation) are logged and carried on with, and
per-target write failures are recorded in the ``GenerationReport``.
"""

from __future__ import annotations

from typing import List


class ScaffoldError(Exception):
    """Base class for every error raised by scaffoldgen."""


class ConfigurationError(ScaffoldError):
    """Settings are missing, unreadable or invalid.  Fatal at start-up."""


class PathDerivationError(ConfigurationError):
    """The project root cannot be derived from the given location."""


class ModelDiscoveryError(ScaffoldError):
    """A models module could not be imported or a class is not a model."""


__all__: List[str] = [
    "ScaffoldError",
    "ConfigurationError",
    "PathDerivationError",
    "ModelDiscoveryError",
]
