# File: scaffoldgen/entity.py
"""
scaffoldgen - Model base class
===============================

A class is scaffolded when it derives from ``Entity[K]`` and declares an
``Id`` of type ``K``::

    class Product(Entity[int]):
        Id: int
        title: str
"""

from __future__ import annotations

from typing import Generic, List, TypeVar

TKey = TypeVar("TKey")


class Entity(Generic[TKey]):
    """Generic base for domain models keyed by an identifier of type ``TKey``."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} Id={getattr(self, 'Id', None)!r}>"


__all__: List[str] = ["Entity", "TKey"]
