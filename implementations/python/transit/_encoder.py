"""Tag encoder: application values -> intermediate nodes.

The walk is depth-first and emits every cacheable string through the
WriteCache in the order the adapter will render it.  That order is the
one the reader sees, which is what keeps the two caches in step.

Ground tags are handled inline:

    "_"  null         "?"  boolean       "s"  string
    "i"  integer      "d"  float         "b"  bytes
    "array"           "map"              "'"  quote

Every other tag goes through _encode_extension(): one-character tags
use the "~" + tag + rep string form when they can, everything else
becomes a TagNode ("~#tag", rep) with the rep encoded recursively.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from ._cache import WriteCache
from ._constants import ESC, JSON_INT_MAX, JSON_INT_MIN, RESERVED_PREFIXES, TAG
from ._errors import ERR_UNENCODABLE_TYPE, TransitError
from ._formats import Format
from ._handlers import Quote
from ._registry import Registry
from ._types import MapNode, TagNode, TypedKey


def escape(s: str) -> str:
    """Prefix data strings that start with a reserved character."""
    if s and s[0] in RESERVED_PREFIXES:
        return ESC + s
    return s


class Encoder:
    """Turns values into nodes for one format.  Stateless apart from the cache passed in."""

    def __init__(self, fmt: Format, registry: Registry) -> None:
        self.fmt = fmt
        self.registry = registry

    def handler_for(self, v: Any) -> Any:
        h = self.registry.resolve_writer(type(v))
        if h is None:
            raise TransitError(ERR_UNENCODABLE_TYPE,
                               "no write handler for type {}".format(type(v).__name__))
        if self.fmt.verbose:
            vh = h.verbose_handler()
            if vh is not None:
                return vh
        return h

    def encode_top(self, v: Any, cache: WriteCache) -> Any:
        """Encode a top-level value, quoting it if it is a scalar.

        Some JSON parsers refuse a bare scalar document, so scalars are
        wrapped as ["~#'", v] (or {"~#'": v}); composites go out as-is.
        """
        if type(v) is TypedKey:
            v = v.value
        tag = self.handler_for(v).tag(v)
        if len(tag) == 1:
            v = Quote(v)
        return self.encode(v, False, cache)

    def encode(self, v: Any, as_map_key: bool, cache: WriteCache) -> Any:
        if type(v) is TypedKey:
            v = v.value
        h = self.handler_for(v)
        tag = h.tag(v)

        if tag == "s":
            return cache.cache_write(escape(h.rep(v)), as_map_key)

        if tag == "_":
            return self._string_form("_", "", as_map_key, cache) if as_map_key else None

        if tag == "?":
            rep = bool(h.rep(v))
            if as_map_key:
                return self._string_form("?", "t" if rep else "f", as_map_key, cache)
            return rep

        if tag == "i":
            rep = int(h.rep(v))
            if as_map_key or (self.fmt.json_ints and not JSON_INT_MIN <= rep <= JSON_INT_MAX):
                return self._string_form("i", str(rep), as_map_key, cache)
            return rep

        if tag == "d":
            if as_map_key:
                return self._string_form("d", h.string_rep(v), as_map_key, cache)
            return float(h.rep(v))

        if tag == "b":
            if self.fmt.native_binary and not as_map_key:
                return bytes(h.rep(v))
            return self._string_form("b", h.string_rep(v), as_map_key, cache)

        if tag == "'":
            return self._tagged(tag, h.rep(v), cache)

        if as_map_key and len(tag) > 1:
            raise TransitError(ERR_UNENCODABLE_TYPE,
                               "{} (tag {!r}) cannot be a map key".format(type(v).__name__, tag))

        if tag == "array":
            return [self.encode(x, False, cache) for x in h.rep(v)]

        if tag == "map":
            return self._encode_map(h.rep(v), cache)

        return self._encode_extension(tag, h, v, as_map_key, cache)

    def _encode_extension(self, tag: str, h: Any, v: Any, as_map_key: bool,
                          cache: WriteCache) -> Any:
        if len(tag) > 1:
            return self._tagged(tag, h.rep(v), cache)
        rep = h.rep(v)
        if isinstance(rep, str):
            return self._string_form(tag, rep, as_map_key, cache)
        if as_map_key or self.fmt.prefer_strings:
            srep = h.string_rep(v)
            if isinstance(srep, str):
                return self._string_form(tag, srep, as_map_key, cache)
            if as_map_key:
                raise TransitError(ERR_UNENCODABLE_TYPE,
                                   "{} (tag {!r}) has no string form for a map key".format(
                                       type(v).__name__, tag))
        return self._tagged(tag, rep, cache)

    def _string_form(self, tag: str, rep: str, as_map_key: bool, cache: WriteCache) -> str:
        return cache.cache_write(ESC + tag + rep, as_map_key)

    def _tagged(self, tag: str, rep: Any, cache: WriteCache) -> TagNode:
        # Tag first: the reader registers it before it reads the rep.
        tag_str = cache.cache_write(ESC + TAG + tag, False)
        return TagNode(tag_str, self.encode(rep, False, cache))

    def _stringable(self, k: Any) -> bool:
        if type(k) is TypedKey:
            k = k.value
        h = self.handler_for(k)
        if len(h.tag(k)) != 1:
            return False
        return isinstance(h.rep(k), str) or h.string_rep(k) is not None

    def _encode_map(self, m: Any, cache: WriteCache) -> Any:
        items: List[Tuple[Any, Any]] = list(m.items())
        if all(self._stringable(k) for k, _ in items):
            pairs = []
            for k, v in items:
                key = self.encode(k, True, cache)
                pairs.append((key, self.encode(v, False, cache)))
            return MapNode(pairs)
        # Composite keys, or scalar keys with no string form:
        # a flat [k1, v1, k2, v2, ...] under "cmap".
        flat: List[Any] = []
        for k, v in items:
            flat.append(k)
            flat.append(v)
        return self._tagged("cmap", flat, cache)
