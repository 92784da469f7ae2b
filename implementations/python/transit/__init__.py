"""transit: Transit data interchange for Python.

Encode richly typed values to compact JSON, verbose JSON or MessagePack,
and read them back.

Quick start:
    >>> from transit import encode, decode, Keyword
    >>> encode({Keyword("a"): [1, 2]})
    b'["^ ","~:a",[1,2]]'
    >>> decode(b'["^ ","~:a",[1,2]]')
    {Keyword('a'): [1, 2]}

Scalars at the top level are quoted, because not every JSON parser
accepts a bare scalar document:
    >>> encode("hello")
    b'["~#\\'","hello"]'

Tags the reader does not know come back as TaggedValue and are written
out again unchanged:
    >>> decode(b'["~#point",[1,2]]')
    TaggedValue('point', [1, 2])
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Iterator, Optional

from ._cache import ReadCache, WriteCache
from ._constants import (
    CONTENT_TYPES,
    FMT_JSON,
    FMT_JSON_VERBOSE,
    FMT_MSGPACK,
    FORMATS,
)
from ._decoder import Decoder
from ._encoder import Encoder
from ._errors import (
    ERR_CACHE_DESYNC,
    ERR_FORMAT,
    ERR_MALFORMED_TAG,
    ERR_PARSE,
    ERR_UNENCODABLE_TYPE,
    TransitError,
)
from ._formats import get_format
from ._handlers import WriteHandler
from ._registry import Registry
from ._types import (
    URI,
    BigInt,
    Char,
    Frozendict,
    FrozenTList,
    Keyword,
    Link,
    Symbol,
    TaggedValue,
    TList,
    TypedKey,
)

__version__ = "0.8.0"

logger = logging.getLogger(__name__)

__all__ = [
    # Public API functions
    "encode",
    "decode",
    "Writer",
    "Reader",
    "Registry",
    "WriteHandler",
    # Value types
    "Keyword",
    "Symbol",
    "Char",
    "URI",
    "BigInt",
    "TList",
    "Link",
    "TaggedValue",
    "Frozendict",
    "FrozenTList",
    "TypedKey",
    # Exception
    "TransitError",
    # Error codes
    "ERR_UNENCODABLE_TYPE",
    "ERR_MALFORMED_TAG",
    "ERR_CACHE_DESYNC",
    "ERR_PARSE",
    "ERR_FORMAT",
    # Formats
    "FMT_JSON",
    "FMT_JSON_VERBOSE",
    "FMT_MSGPACK",
    "FORMATS",
    "CONTENT_TYPES",
]


# ── One-shot API ──────────────────────────────────────────────

def encode(value: Any, fmt: str = FMT_JSON, registry: Optional[Registry] = None) -> bytes:
    """Encode one value as a complete Transit document in `fmt`.

    `fmt` is "json", "json-verbose" or "msgpack".  Raises TransitError
    with ERR_UNENCODABLE_TYPE when some part of the value has no handler.
    """
    f = get_format(fmt)
    enc = Encoder(f, registry or Registry.default())
    node = enc.encode_top(value, WriteCache(enabled=f.cache_enabled))
    return f.render(node)


def decode(data: bytes, fmt: str = FMT_JSON, registry: Optional[Registry] = None) -> Any:
    """Decode one complete Transit document.

    Unknown tags decode to TaggedValue.  Malformed input raises
    TransitError (ERR_PARSE, ERR_MALFORMED_TAG or ERR_CACHE_DESYNC).
    """
    f = get_format(fmt)
    node = f.parse(data)
    return Decoder(registry or Registry.default()).decode_top(node, ReadCache())


# ── Streams ───────────────────────────────────────────────────
# A stream carries any number of back-to-back top-level values.  Each
# value gets its own cache, so values can be read independently of
# whatever came before them.

class Writer:
    """Writes Transit values to a binary stream."""

    def __init__(self, stream: BinaryIO, fmt: str = FMT_JSON,
                 registry: Optional[Registry] = None) -> None:
        self._stream = stream
        self._format = get_format(fmt)
        self._encoder = Encoder(self._format, registry or Registry.default())

    @property
    def content_type(self) -> str:
        return self._format.content_type

    def write(self, value: Any) -> None:
        cache = WriteCache(enabled=self._format.cache_enabled)
        node = self._encoder.encode_top(value, cache)
        data = self._format.render(node)
        logger.debug("wrote %d bytes of %s, %d cache entries", len(data), self._format.name, len(cache))
        self._stream.write(data)

    def flush(self) -> None:
        self._stream.flush()


class Reader:
    """Reads Transit values from a binary stream.

    Iterating yields each value as soon as it has fully arrived, which is
    what an interactive peer (write one value, wait for the answer) needs.
    """

    def __init__(self, stream: BinaryIO, fmt: str = FMT_JSON,
                 registry: Optional[Registry] = None) -> None:
        self._format = get_format(fmt)
        self._decoder = Decoder(registry or Registry.default())
        self._nodes = self._format.parse_stream(stream)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        node = next(self._nodes)
        return self._decoder.decode_top(node, ReadCache())

    def read(self) -> Any:
        """Return the next value, or raise EOFError at the end of the stream."""
        try:
            return next(self)
        except StopIteration:
            raise EOFError("no more Transit values in stream")
