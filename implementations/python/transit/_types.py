"""Transit value types and the format-neutral intermediate nodes.

Application types
    Keyword, Symbol, Char, URI   scalar extension types (named atoms)
    BigInt                       int that always encodes as "n"
    TList                        ordered list that encodes as "list", not array
    Link                         hypermedia link ("link" tag)
    TaggedValue                  carrier for tags the reader did not know
    Frozendict                   hashable map, used where a decoded map
                                 has to sit inside a set or a map key
    FrozenTList                  hashable TList, same use
    TypedKey                     bool or non-integer number as a set
                                 member or map key, equal only within
                                 its own type

Intermediate nodes
    MapNode                      ordered (key, value) pairs
    TagNode                      a "~#tag" string plus its encoded rep

Ground nodes are plain Python values (None, bool, int, float, bytes,
str, list).  Only maps and tagged composites need a wrapper, because
their rendering differs per format.
"""

from __future__ import annotations

import decimal
import fractions
from typing import Any, Iterator, List, Mapping, Optional, Tuple


# ── Named atoms ───────────────────────────────────────────────
# Not str subclasses: Keyword("a") != "a".

class _Named:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError("{} name must be a string".format(type(self).__name__))
        self.name = name

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and other.name == self.name

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return "{}({!r})".format(type(self).__name__, self.name)


class Keyword(_Named):
    """A keyword, e.g. Clojure's :foo."""
    __slots__ = ()


class Symbol(_Named):
    """A symbol, e.g. Clojure's 'foo."""
    __slots__ = ()


class Char(_Named):
    """A single character, distinct from a one-character string."""
    __slots__ = ()

    def __init__(self, name: str) -> None:
        super().__init__(name)
        if len(name) != 1:
            raise ValueError("Char must be exactly one character, got {!r}".format(name))


class URI(_Named):
    """A URI, kept as its string form."""
    __slots__ = ()


class BigInt(int):
    """An int that is always written with the arbitrary-precision tag.

    Plain ints narrow to "i" when they fit in 64 bits.  Decoded "n"
    values come back as BigInt so re-encoding keeps the "n" form.
    """

    def __repr__(self) -> str:
        return "BigInt({})".format(int(self))


class TList(list):
    """A list that encodes with the "list" tag instead of as an array."""

    def __repr__(self) -> str:
        return "TList({})".format(list.__repr__(self))


class Frozendict(Mapping):
    """Immutable, hashable mapping."""

    __slots__ = ("_d", "_hash")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._d = dict(*args, **kwargs)
        self._hash: Optional[int] = None

    def __getitem__(self, key: Any) -> Any:
        return self._d[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._d.items()))
        return self._hash

    def __repr__(self) -> str:
        return "Frozendict({!r})".format(self._d)


class FrozenTList(tuple):
    """Hashable TList, used where a decoded list has to be a set member or map key."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "FrozenTList({})".format(list(self))


# Types whose Python equality crosses Transit types:
# True == 1 == 1.0 == Fraction(1) == Decimal(1).
_TYPED_KEY_TYPES = (bool, float, decimal.Decimal, fractions.Fraction)


class TypedKey:
    """A boolean or non-integer number in a set or in map-key position.

    Python treats True, 1, 1.0, Fraction(1) and Decimal(1) as one
    dictionary key; Transit treats them as five.  TypedKey compares equal
    only to a value of the same type, so a decoded set or map keeps every
    member.  It still compares equal to the bare value it wraps, and the
    encoder writes it as that value.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __eq__(self, other: Any) -> bool:
        if type(other) is TypedKey:
            other = other.value
        return type(other) is type(self.value) and other == self.value

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return "TypedKey({!r})".format(self.value)


def freeze(value: Any) -> Any:
    """Return a hashable equivalent of a decoded value.

    Used for map keys and set members, where Python needs hashability
    but the wire format has no such restriction.
    """
    t = type(value)
    if t is list:
        return tuple(freeze(v) for v in value)
    if t is TList:
        return FrozenTList(freeze(v) for v in value)
    if t is set:
        return frozenset(value)
    if t is dict:
        return Frozendict((k, freeze(v)) for k, v in value.items())
    if t in _TYPED_KEY_TYPES:
        return TypedKey(value)
    return value


class Link:
    """A hypermedia link: href, rel and optional name, prompt and render."""

    __slots__ = ("href", "rel", "name", "prompt", "render")

    LINK = "link"
    IMAGE = "image"

    def __init__(self, href: URI, rel: str, name: Optional[str] = None,
                 prompt: Optional[str] = None, render: Optional[str] = None) -> None:
        if render not in (None, Link.LINK, Link.IMAGE):
            raise ValueError("render must be 'link', 'image' or None")
        self.href = href if isinstance(href, URI) else URI(href)
        self.rel = rel
        self.name = name
        self.prompt = prompt
        self.render = render

    def _key(self) -> Tuple[Any, ...]:
        return (self.href, self.rel, self.name, self.prompt, self.render)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Link) and other._key() == self._key()

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return "Link(href={!r}, rel={!r}, name={!r}, prompt={!r}, render={!r})".format(*self._key())


class TaggedValue:
    """A tag/rep pair the reader had no handler for.

    Writing it back produces the same tag and rep, so unknown extensions
    pass through untouched.
    """

    __slots__ = ("tag", "rep")

    def __init__(self, tag: str, rep: Any) -> None:
        self.tag = tag
        self.rep = rep

    def __eq__(self, other: Any) -> bool:
        return (isinstance(other, TaggedValue)
                and other.tag == self.tag and other.rep == self.rep)

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash((self.tag, freeze(self.rep)))

    def __repr__(self) -> str:
        return "TaggedValue({!r}, {!r})".format(self.tag, self.rep)


# ── Intermediate nodes ────────────────────────────────────────

class MapNode:
    """A map as an ordered list of (key, value) node pairs.

    Order matters: the read cache is filled in the order entries appear
    on the wire, so every adapter must render and parse pairs in order.
    """

    __slots__ = ("pairs",)

    def __init__(self, pairs: Optional[List[Tuple[Any, Any]]] = None) -> None:
        self.pairs: List[Tuple[Any, Any]] = list(pairs) if pairs is not None else []

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, MapNode) and other.pairs == self.pairs

    def __repr__(self) -> str:
        return "MapNode({!r})".format(self.pairs)


class TagNode:
    """A tagged composite: `tag` is "~#name" (or its cache code), `rep` a node."""

    __slots__ = ("tag", "rep")

    def __init__(self, tag: str, rep: Any) -> None:
        self.tag = tag
        self.rep = rep

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, TagNode) and other.tag == self.tag and other.rep == self.rep

    def __repr__(self) -> str:
        return "TagNode({!r}, {!r})".format(self.tag, self.rep)


class Tag:
    """Decoder-side marker for a parsed "~#name" string.

    Cached like any other parsed string, so a later "^0" can stand in
    for the tag at the head of a tagged array.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Tag) and other.name == self.name

    def __hash__(self) -> int:
        return hash(("Tag", self.name))

    def __repr__(self) -> str:
        return "Tag({!r})".format(self.name)
