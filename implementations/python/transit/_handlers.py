"""Built-in write and read handlers.

A write handler is any object with four methods:

    tag(v)            -> the semantic tag for v
    rep(v)            -> a value that is itself encodable
    string_rep(v)     -> a string form of v, or None if there is none
    verbose_handler() -> a handler to use instead in verbose JSON, or None

Subclassing WriteHandler is a convenience for the defaults, not a
requirement.  A read handler is just a callable taking the decoded rep.

Tag conventions: one-character tags are scalars and can appear in string
form ("~" + tag + string_rep); longer tags are composites and always use
the "~#tag" array/object form.
"""

from __future__ import annotations

import base64
import datetime
import decimal
import fractions
import math
import uuid
from typing import Any, Callable, Dict, Optional

from ._constants import INT64_MAX, INT64_MIN
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
    freeze,
)

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_MS = datetime.timedelta(milliseconds=1)
_MASK64 = (1 << 64) - 1


class WriteHandler:
    """Default capability set: no string form, no verbose substitute."""

    def tag(self, v: Any) -> str:
        raise NotImplementedError

    def rep(self, v: Any) -> Any:
        return v

    def string_rep(self, v: Any) -> Optional[str]:
        return None

    def verbose_handler(self) -> Optional["WriteHandler"]:
        return None


# ── Ground types ──────────────────────────────────────────────

class NullHandler(WriteHandler):
    def tag(self, v):
        return "_"

    def string_rep(self, v):
        return ""


class BooleanHandler(WriteHandler):
    def tag(self, v):
        return "?"

    def string_rep(self, v):
        return "t" if v else "f"


class IntHandler(WriteHandler):
    """Narrows to "i" when the value fits a signed 64-bit int, else "n"."""

    def tag(self, v):
        return "i" if INT64_MIN <= v <= INT64_MAX else "n"

    def rep(self, v):
        return v if INT64_MIN <= v <= INT64_MAX else str(v)

    def string_rep(self, v):
        return str(v)


class FloatHandler(WriteHandler):
    """Finite floats are ground; NaN and the infinities use "z"."""

    def tag(self, v):
        return "d" if math.isfinite(v) else "z"

    def rep(self, v):
        if math.isfinite(v):
            return v
        if math.isnan(v):
            return "NaN"
        return "INF" if v > 0 else "-INF"

    def string_rep(self, v):
        return repr(v) if math.isfinite(v) else self.rep(v)


class StringHandler(WriteHandler):
    def tag(self, v):
        return "s"

    def string_rep(self, v):
        return v


class BytesHandler(WriteHandler):
    def tag(self, v):
        return "b"

    def rep(self, v):
        return bytes(v)

    def string_rep(self, v):
        return base64.b64encode(bytes(v)).decode("ascii")


class ArrayHandler(WriteHandler):
    def tag(self, v):
        return "array"


class MapHandler(WriteHandler):
    def tag(self, v):
        return "map"


# ── Scalar extensions ─────────────────────────────────────────

class BigIntHandler(WriteHandler):
    def tag(self, v):
        return "n"

    def rep(self, v):
        return str(int(v))

    def string_rep(self, v):
        return str(int(v))


class _NamedHandler(WriteHandler):
    def __init__(self, tag: str) -> None:
        self._tag = tag

    def tag(self, v):
        return self._tag

    def rep(self, v):
        return v.name

    def string_rep(self, v):
        return v.name


class DecimalHandler(WriteHandler):
    def tag(self, v):
        return "f"

    def rep(self, v):
        return str(v)

    def string_rep(self, v):
        return str(v)


def datetime_to_millis(dt: datetime.datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def millis_to_datetime(ms: Any) -> datetime.datetime:
    return _EPOCH + datetime.timedelta(milliseconds=int(ms))


def datetime_to_iso(dt: datetime.datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    dt = dt.astimezone(datetime.timezone.utc)
    return "{}.{:03d}Z".format(dt.strftime("%Y-%m-%dT%H:%M:%S"), dt.microsecond // 1000)


def iso_to_datetime(s: str) -> datetime.datetime:
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


class VerboseDateTimeHandler(WriteHandler):
    def tag(self, v):
        return "t"

    def rep(self, v):
        return datetime_to_iso(v)

    def string_rep(self, v):
        return datetime_to_iso(v)


class DateTimeHandler(WriteHandler):
    """Milliseconds since the epoch; ISO-8601 text in verbose JSON."""

    _verbose = VerboseDateTimeHandler()

    def tag(self, v):
        return "m"

    def rep(self, v):
        return datetime_to_millis(v)

    def string_rep(self, v):
        return str(datetime_to_millis(v))

    def verbose_handler(self):
        return self._verbose


class UUIDHandler(WriteHandler):
    """String form in JSON; two signed 64-bit halves as the composite rep."""

    def tag(self, v):
        return "u"

    def rep(self, v):
        return [_signed64(v.int >> 64), _signed64(v.int & _MASK64)]

    def string_rep(self, v):
        return str(v)


def _signed64(n: int) -> int:
    return n - (1 << 64) if n > INT64_MAX else n


# ── Composite extensions ──────────────────────────────────────

class SetHandler(WriteHandler):
    def tag(self, v):
        return "set"

    def rep(self, v):
        return list(v)


class TListHandler(WriteHandler):
    def tag(self, v):
        return "list"

    def rep(self, v):
        return list(v)


class RatioHandler(WriteHandler):
    def tag(self, v):
        return "ratio"

    def rep(self, v):
        return [BigInt(v.numerator), BigInt(v.denominator)]


class LinkHandler(WriteHandler):
    def tag(self, v):
        return "link"

    def rep(self, v):
        return {
            "href": v.href,
            "rel": v.rel,
            "name": v.name,
            "prompt": v.prompt,
            "render": v.render,
        }


class TaggedValueHandler(WriteHandler):
    """Writes back whatever tag and rep the reader captured."""

    def tag(self, v):
        return v.tag

    def rep(self, v):
        return v.rep

    def string_rep(self, v):
        return v.rep if isinstance(v.rep, str) else None


class Quote:
    """Wrapper the encoder puts around top-level scalars."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


class QuoteHandler(WriteHandler):
    def tag(self, v):
        return "'"

    def rep(self, v):
        return v.value


def default_write_handlers() -> Dict[type, Any]:
    strings = StringHandler()
    arrays = ArrayHandler()
    maps = MapHandler()
    sets = SetHandler()
    data = BytesHandler()
    lists = TListHandler()
    return {
        type(None): NullHandler(),
        bool: BooleanHandler(),
        int: IntHandler(),
        BigInt: BigIntHandler(),
        float: FloatHandler(),
        str: strings,
        bytes: data,
        bytearray: data,
        Keyword: _NamedHandler(":"),
        Symbol: _NamedHandler("$"),
        Char: _NamedHandler("c"),
        URI: _NamedHandler("r"),
        decimal.Decimal: DecimalHandler(),
        datetime.datetime: DateTimeHandler(),
        uuid.UUID: UUIDHandler(),
        list: arrays,
        tuple: arrays,
        dict: maps,
        Frozendict: maps,
        set: sets,
        frozenset: sets,
        TList: lists,
        FrozenTList: lists,
        fractions.Fraction: RatioHandler(),
        Link: LinkHandler(),
        TaggedValue: TaggedValueHandler(),
        Quote: QuoteHandler(),
    }


# ── Read handlers ─────────────────────────────────────────────
# Each takes the already-decoded rep.  ValueError / TypeError / KeyError
# raised here are reported by the decoder as ERR_MALFORMED_TAG.

def _read_boolean(rep: Any) -> bool:
    if rep == "t":
        return True
    if rep == "f":
        return False
    raise ValueError("bad boolean rep {!r}".format(rep))


def _read_special(rep: Any) -> float:
    if rep == "NaN":
        return float("nan")
    if rep == "INF":
        return float("inf")
    if rep == "-INF":
        return float("-inf")
    raise ValueError("bad special number {!r}".format(rep))


def _read_uuid(rep: Any) -> uuid.UUID:
    if isinstance(rep, str):
        return uuid.UUID(rep)
    hi, lo = rep
    return uuid.UUID(int=((hi & _MASK64) << 64) | (lo & _MASK64))


def _read_datetime_millis(rep: Any) -> datetime.datetime:
    return millis_to_datetime(rep)


def _read_decimal(rep: Any) -> decimal.Decimal:
    try:
        return decimal.Decimal(rep)
    except decimal.InvalidOperation:
        raise ValueError("bad decimal {!r}".format(rep))


def _read_set(rep: Any) -> set:
    return {freeze(x) for x in rep}


def _read_cmap(rep: Any) -> dict:
    if len(rep) % 2 != 0:
        raise ValueError("cmap rep must have an even number of elements")
    it = iter(rep)
    return {freeze(k): v for k, v in zip(it, it)}


def _read_ratio(rep: Any) -> fractions.Fraction:
    num, den = rep
    return fractions.Fraction(int(num), int(den))


def _read_link(rep: Any) -> Link:
    return Link(rep["href"], rep["rel"], rep.get("name"), rep.get("prompt"), rep.get("render"))


def default_read_handlers() -> Dict[str, Callable[[Any], Any]]:
    return {
        "_": lambda rep: None,
        "?": _read_boolean,
        "i": int,
        "d": float,
        "n": lambda rep: BigInt(int(rep)),
        "z": _read_special,
        "f": _read_decimal,
        "b": lambda rep: base64.b64decode(rep, validate=True) if isinstance(rep, str) else bytes(rep),
        "c": Char,
        ":": Keyword,
        "$": Symbol,
        "r": URI,
        "u": _read_uuid,
        "m": _read_datetime_millis,
        "t": iso_to_datetime,
        "'": lambda rep: rep,
        "set": _read_set,
        "list": TList,
        "cmap": _read_cmap,
        "ratio": _read_ratio,
        "link": _read_link,
    }
