"""
Read-only lookup tables from header strings to enumerants.
"""

from enum import Enum
from types import MappingProxyType
from typing import Generic, Mapping, Optional, TypeVar

E = TypeVar("E", bound=Enum)


class Registry(Generic[E]):
    """
    Fixed mapping from token to enumerant with a sentinel for misses.

    The table is copied at construction and never changes afterwards, so a
    registry can be shared between threads freely.
    """

    def __init__(self, table: Mapping[str, E], sentinel: E):
        self._table = MappingProxyType(dict(table))
        self._reverse = MappingProxyType({value: key for key, value in self._table.items()})
        self.sentinel = sentinel

    @property
    def table(self) -> Mapping[str, E]:
        return self._table

    def resolve(self, token: Optional[str]) -> E:
        """Look up ``token``; unknown or empty tokens resolve to the sentinel."""
        if not token:
            return self.sentinel
        return self._table.get(token, self.sentinel)

    def to_string(self, enumerant: E) -> str:
        """Reverse lookup; the sentinel (or an unmapped value) gives ``""``."""
        return self._reverse.get(enumerant, "")

    def __contains__(self, token: object) -> bool:
        return token in self._table
