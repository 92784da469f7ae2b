"""Tag decoder: intermediate nodes -> application values.

Mirror of the encoder.  Strings are parsed as

    "^x" / "^xy"   cache code (not the "^ " map marker)
    "~~..." etc.   escaped data string, leading "~" dropped
    "~#name"       composite tag marker (Tag), legal only at the head of
                   a two-element array or as the only key of an object
    "~xrest"       scalar extension: read handler for "x" applied to "rest"
    anything else  plain string

Every string in a cacheable position is registered in the ReadCache
after it is parsed, in wire order, whether or not it turns out to be
useful later.
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

from ._cache import ReadCache, is_cache_code, is_cacheable
from ._constants import ESC, MAP_AS_ARRAY, RESERVED_PREFIXES, TAG
from ._errors import ERR_MALFORMED_TAG, ERR_PARSE, TransitError
from ._registry import Registry
from ._types import MapNode, Tag, TaggedValue, freeze

logger = logging.getLogger(__name__)

# What a read handler may raise when its rep has the wrong shape.
_HANDLER_ERRORS = (ValueError, TypeError, KeyError, IndexError, ArithmeticError)


class Decoder:
    """Turns nodes back into values.  Stateless apart from the cache passed in."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def decode_top(self, node: Any, cache: ReadCache) -> Any:
        return self._value(node, cache)

    def decode(self, node: Any, cache: ReadCache, as_map_key: bool = False) -> Any:
        """Decode one node.  May return a Tag marker; see _value()."""
        if isinstance(node, str):
            return self._decode_string(node, cache, as_map_key)
        if isinstance(node, MapNode):
            return self._decode_map(node.pairs, cache)
        if isinstance(node, list):
            return self._decode_list(node, cache)
        return node

    def _value(self, node: Any, cache: ReadCache) -> Any:
        v = self.decode(node, cache, False)
        if isinstance(v, Tag):
            raise TransitError(ERR_MALFORMED_TAG,
                               "tag {!r} outside a tag/rep pair".format(v.name))
        return v

    def _decode_string(self, s: str, cache: ReadCache, as_map_key: bool) -> Any:
        if is_cache_code(s):
            return cache.lookup(s)
        value = self._parse_string(s)
        if is_cacheable(s, as_map_key):
            cache.register(value)
        return value

    def _parse_string(self, s: str) -> Any:
        if len(s) < 2 or s[0] != ESC:
            return s
        c = s[1]
        if c in RESERVED_PREFIXES:
            return s[1:]
        if c == TAG:
            if len(s) == 2:
                raise TransitError(ERR_MALFORMED_TAG, "empty composite tag")
            return Tag(s[2:])
        return self._apply(c, s[2:])

    def _apply(self, tag: str, rep: Any) -> Any:
        handler = self.registry.resolve_reader(tag)
        if handler is None:
            logger.debug("no read handler for tag %r, keeping it as a TaggedValue", tag)
            return TaggedValue(tag, rep)
        try:
            return handler(rep)
        except _HANDLER_ERRORS as e:
            raise TransitError(ERR_MALFORMED_TAG,
                               "bad rep for tag {!r}: {!r} ({})".format(tag, rep, e))

    def _decode_list(self, lst: List[Any], cache: ReadCache) -> Any:
        if not lst:
            return []
        if lst[0] == MAP_AS_ARRAY:
            rest = lst[1:]
            if len(rest) % 2 != 0:
                raise TransitError(ERR_PARSE, "map-as-array with an odd number of elements")
            return self._decode_map(list(zip(rest[0::2], rest[1::2])), cache)
        head = self.decode(lst[0], cache, False)
        if isinstance(head, Tag):
            if len(lst) != 2:
                raise TransitError(ERR_MALFORMED_TAG,
                                   "tagged array for {!r} has {} elements, expected 2".format(
                                       head.name, len(lst)))
            return self._apply(head.name, self._value(lst[1], cache))
        out = [head]
        for x in lst[1:]:
            out.append(self._value(x, cache))
        return out

    def _decode_map(self, pairs: List[Tuple[Any, Any]], cache: ReadCache) -> Any:
        if len(pairs) == 1:
            k, v = pairs[0]
            key = self.decode(k, cache, True)
            if isinstance(key, Tag):
                return self._apply(key.name, self._value(v, cache))
            return {freeze(key): self._value(v, cache)}
        out = {}
        for k, v in pairs:
            key = self.decode(k, cache, True)
            if isinstance(key, Tag):
                raise TransitError(ERR_MALFORMED_TAG,
                                   "tag {!r} as a key in a {}-entry map".format(key.name, len(pairs)))
            out[freeze(key)] = self._value(v, cache)
        return out
