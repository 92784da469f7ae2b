"""Format adapters: intermediate nodes <-> JSON / verbose JSON / MessagePack bytes.

Each adapter states its capabilities as class attributes, and the encoder
reads them to decide between string and array/object forms:

    cache_enabled   whether repeated cacheable strings become "^" codes
    prefer_strings  scalar extensions with a non-string rep still use
                    the "~x" string form when the handler offers one
    native_binary   bytes travel as a native binary value
    json_ints       integers beyond 2^53 are written as "~i" strings

Rendering (node -> bytes) is where MapNode and TagNode get their shape:

    format        MapNode                 TagNode
    json          ["^ ", k, v, ...]       ["~#tag", rep]
    json-verbose  {"k": v, ...}           {"~#tag": rep}
    msgpack       native map              ["~#tag", rep]

Parsing keeps object/map entries in wire order (object_pairs_hook),
because the read cache must see strings in the order they were written.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, BinaryIO, Dict, Iterator, List, Optional

import msgpack

from ._constants import (
    CONTENT_TYPES,
    FMT_JSON,
    FMT_JSON_VERBOSE,
    FMT_MSGPACK,
    MAP_AS_ARRAY,
)
from ._errors import ERR_FORMAT, ERR_PARSE, TransitError
from ._types import MapNode, TagNode

_READ_SIZE = 65536
_JSON_WS = " \t\n\r"
# Characters of numbers and of true, false and null.
_SCALAR_CHARS = frozenset("0123456789+-.eEtrufalsn")
_JSON_INNER_CHARS = frozenset(_JSON_WS + "[]{}:,") | _SCALAR_CHARS
_WORDS = ("true", "false", "null")
_CONTAINER, _STRING, _SCALAR = "container", "string", "scalar"


def _read_some(fp: BinaryIO) -> bytes:
    """Read whatever is available, without waiting for a full buffer."""
    read1 = getattr(fp, "read1", None)
    if read1 is not None:
        return read1(_READ_SIZE)
    return fp.read(_READ_SIZE)


def _reject_constant(name: str) -> Any:
    raise TransitError(ERR_PARSE, "JSON constant {} not allowed".format(name))


class Format:
    name: str = ""
    cache_enabled: bool = True
    prefer_strings: bool = True
    native_binary: bool = False
    json_ints: bool = False
    verbose: bool = False

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.name]

    def render(self, node: Any) -> bytes:
        raise NotImplementedError

    def parse(self, data: bytes) -> Any:
        raise NotImplementedError

    def parse_stream(self, fp: BinaryIO) -> Iterator[Any]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return "<{} {}>".format(type(self).__name__, self.name)


# ── JSON stream splitting ─────────────────────────────────────

class _JsonSplitter:
    """Cuts a character stream into the texts of complete top-level JSON values.

    Only nesting depth and string state are tracked, so every character
    is looked at once; each finished text still goes through json for
    the real parse.  Characters that cannot appear in any JSON text are
    rejected as soon as they arrive.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._kind: Optional[str] = None
        self._depth = 0
        self._in_string = False
        self._escape = False
        self._word_len = 0

    def _take(self, tail: str) -> str:
        self._parts.append(tail)
        doc = "".join(self._parts)
        self._parts = []
        self._kind = None
        return doc

    def _begin(self, c: str) -> None:
        if c in "[{":
            self._kind, self._depth = _CONTAINER, 1
        elif c == '"':
            self._kind, self._in_string = _STRING, True
        elif c in _SCALAR_CHARS:
            self._kind = _SCALAR
            self._word_len = 1 if c.isalpha() else 0
        else:
            raise TransitError(ERR_PARSE, "unexpected {!r} at top level of JSON input".format(c))

    def feed(self, text: str) -> Iterator[str]:
        start = 0
        i = 0
        n = len(text)
        while i < n:
            c = text[i]
            kind = self._kind
            if kind is None:
                if c in _JSON_WS:
                    start = i + 1
                else:
                    start = i
                    self._begin(c)
            elif kind == _SCALAR:
                if c not in _SCALAR_CHARS:
                    yield self._take(text[start:i])
                    continue
                if self._word_len:
                    self._word_len += 1
                    if self._word_len > 5:
                        raise TransitError(ERR_PARSE, "bad JSON literal near {!r}".format(
                            text[start:i + 1]))
                    if c in "el" and "".join(self._parts) + text[start:i + 1] in _WORDS:
                        yield self._take(text[start:i + 1])
                        start = i + 1
            elif self._in_string:
                if self._escape:
                    self._escape = False
                elif c == "\\":
                    self._escape = True
                elif c == '"':
                    self._in_string = False
                    if kind == _STRING:
                        yield self._take(text[start:i + 1])
                        start = i + 1
            elif c == '"':
                self._in_string = True
            elif c in "[{":
                self._depth += 1
            elif c in "]}":
                self._depth -= 1
                if self._depth == 0:
                    yield self._take(text[start:i + 1])
                    start = i + 1
            elif c not in _JSON_INNER_CHARS:
                raise TransitError(ERR_PARSE, "unexpected {!r} in JSON input".format(c))
            i += 1
        if self._kind is not None:
            self._parts.append(text[start:])

    def finish(self) -> Iterator[str]:
        """Flush a trailing number or word at end of stream."""
        if self._kind == _SCALAR:
            yield self._take("")
        elif self._kind is not None:
            raise TransitError(ERR_PARSE, "truncated JSON value at end of stream")


# ── JSON ──────────────────────────────────────────────────────

class JsonFormat(Format):
    """Compact JSON: maps as arrays, caching on."""

    name = FMT_JSON
    json_ints = True

    def _to_json(self, node: Any) -> Any:
        if isinstance(node, MapNode):
            out = [MAP_AS_ARRAY]
            for k, v in node.pairs:
                out.append(self._to_json(k))
                out.append(self._to_json(v))
            return out
        if isinstance(node, TagNode):
            return [node.tag, self._to_json(node.rep)]
        if isinstance(node, list):
            return [self._to_json(x) for x in node]
        return node

    def render(self, node: Any) -> bytes:
        try:
            text = json.dumps(self._to_json(node), ensure_ascii=False,
                              separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise TransitError(ERR_PARSE, "cannot render node as JSON: {}".format(e))
        return text.encode("utf-8")

    def _decoder(self) -> json.JSONDecoder:
        return json.JSONDecoder(object_pairs_hook=MapNode, parse_constant=_reject_constant)

    def parse(self, data: bytes) -> Any:
        try:
            text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
            return self._decoder().decode(text)
        except UnicodeDecodeError:
            raise TransitError(ERR_PARSE, "invalid UTF-8 in JSON input")
        except json.JSONDecodeError as e:
            raise TransitError(ERR_PARSE, "JSON parse error: {}".format(e))

    def parse_stream(self, fp: BinaryIO) -> Iterator[Any]:
        """Yield back-to-back JSON values as soon as each one is complete."""
        splitter = _JsonSplitter()
        utf8 = codecs.getincrementaldecoder("utf-8")()
        while True:
            chunk = _read_some(fp)
            try:
                text = utf8.decode(chunk, final=not chunk)
            except UnicodeDecodeError:
                raise TransitError(ERR_PARSE, "invalid UTF-8 in JSON input")
            for doc in splitter.feed(text):
                yield self.parse(doc)
            if not chunk:
                for doc in splitter.finish():
                    yield self.parse(doc)
                return


class JsonVerboseFormat(JsonFormat):
    """Verbose JSON: maps as objects, no caching, readable handler forms."""

    name = FMT_JSON_VERBOSE
    cache_enabled = False
    verbose = True

    def _to_json(self, node: Any) -> Any:
        if isinstance(node, MapNode):
            return {k: self._to_json(v) for k, v in node.pairs}
        if isinstance(node, TagNode):
            return {node.tag: self._to_json(node.rep)}
        if isinstance(node, list):
            return [self._to_json(x) for x in node]
        return node


# ── MessagePack ───────────────────────────────────────────────

class MsgpackFormat(Format):
    """MessagePack: native maps, native binary, native 64-bit ints."""

    name = FMT_MSGPACK
    prefer_strings = False
    native_binary = True

    def _to_msgpack(self, node: Any) -> Any:
        if isinstance(node, MapNode):
            return {k: self._to_msgpack(v) for k, v in node.pairs}
        if isinstance(node, TagNode):
            return [node.tag, self._to_msgpack(node.rep)]
        if isinstance(node, list):
            return [self._to_msgpack(x) for x in node]
        return node

    def render(self, node: Any) -> bytes:
        try:
            return msgpack.packb(self._to_msgpack(node), use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise TransitError(ERR_PARSE, "cannot render node as msgpack: {}".format(e))

    def _unpacker_options(self) -> Dict[str, Any]:
        return dict(raw=False, object_pairs_hook=MapNode, strict_map_key=False)

    def parse(self, data: bytes) -> Any:
        try:
            return msgpack.unpackb(data, **self._unpacker_options())
        except (ValueError, msgpack.UnpackException) as e:
            raise TransitError(ERR_PARSE, "msgpack parse error: {}".format(e))

    def parse_stream(self, fp: BinaryIO) -> Iterator[Any]:
        unpacker = msgpack.Unpacker(**self._unpacker_options())
        fed = 0
        while True:
            chunk = _read_some(fp)
            if not chunk:
                break
            unpacker.feed(chunk)
            fed += len(chunk)
            try:
                for node in unpacker:
                    yield node
            except (ValueError, msgpack.UnpackException) as e:
                raise TransitError(ERR_PARSE, "msgpack parse error: {}".format(e))
        if unpacker.tell() != fed:
            raise TransitError(ERR_PARSE, "truncated msgpack value at end of stream")


_FORMATS: Dict[str, Format] = {
    FMT_JSON: JsonFormat(),
    FMT_JSON_VERBOSE: JsonVerboseFormat(),
    FMT_MSGPACK: MsgpackFormat(),
}


def get_format(name: str) -> Format:
    """Return the shared adapter for a format name ("json", "json-verbose", "msgpack")."""
    try:
        return _FORMATS[name]
    except KeyError:
        raise TransitError(ERR_FORMAT, "unknown format {!r}; expected one of {}".format(
            name, ", ".join(sorted(_FORMATS))))
