"""Type registry: application type -> write handler, tag -> read handler.

Lookup is by exact type and exact tag.  There is no MRO walk, so a
subclass of dict needs its own entry.

A Registry is frozen once built.  Its tables are read-only views, so one
instance can be shared by any number of concurrent streams.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ._handlers import default_read_handlers, default_write_handlers

ReadHandler = Callable[[Any], Any]


class Registry:
    """Built-in handlers, optionally extended or overridden by the caller.

    Example:
        class PointHandler(WriteHandler):
            def tag(self, v): return "point"
            def rep(self, v): return [v.x, v.y]

        reg = Registry(write_handlers={Point: PointHandler()},
                       read_handlers={"point": lambda rep: Point(*rep)})
    """

    __slots__ = ("_writers", "_readers")

    def __init__(self,
                 write_handlers: Optional[Mapping[type, Any]] = None,
                 read_handlers: Optional[Mapping[str, ReadHandler]] = None) -> None:
        writers = default_write_handlers()
        readers = default_read_handlers()
        if write_handlers:
            writers.update(write_handlers)
        if read_handlers:
            readers.update(read_handlers)
        self._writers = MappingProxyType(writers)
        self._readers = MappingProxyType(readers)

    @property
    def write_handlers(self) -> Mapping[type, Any]:
        return self._writers

    @property
    def read_handlers(self) -> Mapping[str, ReadHandler]:
        return self._readers

    def resolve_writer(self, t: type) -> Optional[Any]:
        return self._writers.get(t)

    def resolve_reader(self, tag: str) -> Optional[ReadHandler]:
        return self._readers.get(tag)

    @classmethod
    def default(cls) -> "Registry":
        """The shared registry of built-in handlers."""
        return _DEFAULT


_DEFAULT = Registry()
