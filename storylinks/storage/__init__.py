"""Content source interfaces and implementations."""

from storylinks.storage.interfaces import BookContentSourceInterface
from storylinks.storage.memory import InMemoryBookContentSource

__all__ = [
    "BookContentSourceInterface",
    "InMemoryBookContentSource",
]
