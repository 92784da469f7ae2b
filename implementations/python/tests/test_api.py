"""Unit tests for the transit public API.

Organized by feature area.  Exact wire output per format is checked in
test_formats.py and cache arithmetic in test_cache.py; these tests
exercise round-trips, the registry and the error contracts.
"""

from __future__ import annotations

import datetime
import decimal
import fractions
import io
import math
import os
import sys
import unittest
import uuid

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from transit import (
    CONTENT_TYPES,
    ERR_CACHE_DESYNC,
    ERR_FORMAT,
    ERR_MALFORMED_TAG,
    ERR_PARSE,
    ERR_UNENCODABLE_TYPE,
    FORMATS,
    URI,
    BigInt,
    Char,
    Frozendict,
    FrozenTList,
    Keyword,
    Link,
    Reader,
    Registry,
    Symbol,
    TaggedValue,
    TList,
    TransitError,
    TypedKey,
    WriteHandler,
    Writer,
    decode,
    encode,
)

UTC = datetime.timezone.utc


def roundtrip(value, fmt):
    return decode(encode(value, fmt), fmt)


# ── Round-trips of every semantic type ────────────────────────

SAMPLES = [
    None,
    True,
    False,
    0,
    1,
    -1,
    42,
    2**53 - 1,
    2**53,
    -(2**53),
    2**63 - 1,
    -(2**63),
    2**63,
    -(2**63) - 1,
    8987676543234565432178765987645654323456554331234566789,
    0.0,
    -3.14159,
    6.626e-34,
    4e11,
    "",
    "a",
    "hello",
    "~foo",
    "^foo",
    "`foo",
    "^ foo",
    "`~hello",
    "詹姆斯",
    b"",
    b"\x00\x01\xff",
    Keyword("hello"),
    Keyword("a"),
    Symbol("hello"),
    Char("t"),
    Char("~"),
    BigInt(5),
    decimal.Decimal("1.5"),
    decimal.Decimal("-1.1E-1"),
    datetime.datetime(2000, 1, 1, 12, 0, tzinfo=UTC),
    datetime.datetime(1776, 7, 4, 12, 0, tzinfo=UTC),
    datetime.datetime(1970, 1, 1, tzinfo=UTC),
    datetime.datetime(2014, 4, 7, 22, 17, 17, tzinfo=UTC),
    uuid.UUID("5a2cbea3-e8c6-428b-b525-21239370dd55"),
    uuid.UUID("d1dc64fa-da79-444b-9fa4-d4412f427289"),
    URI("http://example.com"),
    URI("http://www.詹姆斯.com/"),
    fractions.Fraction(1, 3),
    fractions.Fraction(-10, 11),
    [],
    [1, 2, 3],
    [0, 1, 2.0, True, False, "five", Keyword("six"), Symbol("seven"), "~eight", None],
    [[1, 2, 3], ["a", [Keyword("b")]]],
    {},
    {"a": 1, "b": 2, "c": 3},
    {Keyword("a"): 1, Keyword("b"): "a string", Keyword("c"): True},
    {1: "one", 2: "two"},
    {None: 1, True: 2, False: 3},
    {1.5: "x", b"ab": "y", Char("["): 1},
    {"~#set": [1, 2, 3]},
    {(1, 1): "one", (2, 2): "two"},
    {fractions.Fraction(1, 2): fractions.Fraction(2, 5)},
    set(),
    {1, 2, 3},
    {True, False},
    {Keyword("a"), Keyword("b"), Keyword("c")},
    {frozenset({1, 2}), frozenset({"x"})},
    TList(),
    TList([1, 24, 3]),
    Link(URI("http://example.com/a"), "self"),
    Link(URI("http://example.com/img"), "icon", "logo", "Our logo", Link.IMAGE),
    TaggedValue("point", [1, 2]),
    TaggedValue("X", "foo"),
]


class TestRoundTrip(unittest.TestCase):
    def test_every_sample_every_format(self):
        for fmt in FORMATS:
            for val in SAMPLES:
                with self.subTest(fmt=fmt, val=val):
                    self.assertEqual(roundtrip(val, fmt), val)

    def test_special_numbers(self):
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                nan, inf, ninf = roundtrip([float("nan"), float("inf"), float("-inf")], fmt)
                self.assertTrue(math.isnan(nan))
                self.assertEqual(inf, float("inf"))
                self.assertEqual(ninf, float("-inf"))

    def test_types_survive(self):
        """Equality alone would not catch Keyword -> str or BigInt -> int drift."""
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                out = roundtrip([Keyword("k"), Symbol("s"), Char("c"), URI("u:x"),
                                 BigInt(7), TList([1]), b"\x01"], fmt)
                self.assertEqual([type(x) for x in out],
                                 [Keyword, Symbol, Char, URI, BigInt, TList, bytes])

    def test_int_narrowing(self):
        self.assertIs(type(roundtrip(2**63 - 1, "msgpack")), int)
        self.assertIs(type(roundtrip(2**63, "msgpack")), BigInt)
        self.assertIs(type(roundtrip(2**53, "json")), int)

    def test_tuple_decodes_as_list(self):
        self.assertEqual(roundtrip((1, 2), "json"), [1, 2])

    def test_composite_keys_are_hashable(self):
        out = roundtrip({(1, (2, 3)): "a", frozenset({1}): "b"}, "json")
        self.assertEqual(out[(1, (2, 3))], "a")
        self.assertEqual(out[frozenset({1})], "b")

    def test_map_key_inside_cmap(self):
        key = Frozendict({"a": 1})
        out = roundtrip({key: 2}, "json-verbose")
        self.assertEqual(out, {key: 2})
        self.assertIsInstance(next(iter(out)), Frozendict)

    def test_bool_and_number_set_members_stay_apart(self):
        out = decode(b'["~#set",[0,1,2.0,true,false,"five","~:six","~$seven","~~eight",null]]')
        self.assertEqual(len(out), 10)
        kinds = sorted(type(m.value if isinstance(m, TypedKey) else m).__name__ for m in out)
        self.assertEqual(kinds, ["Keyword", "NoneType", "Symbol", "bool", "bool",
                                 "float", "int", "int", "str", "str"])
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                again = roundtrip(out, fmt)
                self.assertEqual(len(again), 10)
                self.assertEqual(again, out)

    def test_bool_and_number_map_keys_stay_apart(self):
        data = b'["^ ","~i1","one","~?t","yes","~d1.0","float"]'
        out = decode(data)
        self.assertEqual(len(out), 3)
        self.assertEqual(out[1], "one")
        self.assertEqual(out[TypedKey(True)], "yes")
        self.assertEqual(out[TypedKey(1.0)], "float")
        self.assertEqual(encode(out), data)

    def test_typed_key_equality(self):
        self.assertEqual(TypedKey(True), True)
        self.assertEqual(TypedKey(True), TypedKey(True))
        self.assertNotEqual(TypedKey(True), 1)
        self.assertNotEqual(TypedKey(1.0), TypedKey(1))
        self.assertNotEqual(TypedKey(decimal.Decimal(1)), fractions.Fraction(1))
        self.assertEqual({True: None}, {TypedKey(True): None})

    def test_typed_key_encodes_as_its_value(self):
        self.assertEqual(encode(TypedKey(2.0)), encode(2.0))
        self.assertEqual(encode([TypedKey(False)]), b'[false]')

    def test_list_tag_kept_inside_set(self):
        data = b'["~#set",[["~#list",[1,2]]]]'
        out = decode(data)
        self.assertIs(type(next(iter(out))), FrozenTList)
        self.assertEqual(encode(out), data)

    def test_list_tag_kept_as_map_key(self):
        data = b'["~#cmap",[["~#list",[1,2]],1]]'
        out = decode(data)
        self.assertEqual(out, {FrozenTList([1, 2]): 1})
        self.assertEqual(encode(out), data)

    def test_naive_datetime_is_utc(self):
        naive = datetime.datetime(2000, 1, 1, 12, 0)
        out = roundtrip(naive, "json")
        self.assertEqual(out, naive.replace(tzinfo=UTC))

    def test_datetime_millisecond_precision(self):
        dt = datetime.datetime(2020, 5, 6, 7, 8, 9, 123456, tzinfo=UTC)
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                self.assertEqual(roundtrip(dt, fmt), dt.replace(microsecond=123000))


# ── Caching through the public API ────────────────────────────

class TestCaching(unittest.TestCase):
    def test_repeated_map_key(self):
        self.assertEqual(encode([{"abcd": 1}, {"abcd": 2}]),
                         b'[["^ ","abcd",1],["^ ","^0",2]]')

    def test_three_char_key_not_cached(self):
        self.assertEqual(encode([{"abc": 1}, {"abc": 2}]),
                         b'[["^ ","abc",1],["^ ","abc",2]]')

    def test_plain_string_values_not_cached(self):
        self.assertEqual(encode(["abcd", "abcd"]), b'["abcd","abcd"]')

    def test_keywords_cached_in_value_position(self):
        self.assertEqual(encode([Keyword("abcd"), Keyword("abcd")]),
                         b'["~:abcd","^0"]')

    def test_key_then_value(self):
        self.assertEqual(encode({Keyword("foo"): Keyword("foo")}),
                         b'["^ ","~:foo","^0"]')

    def test_string_key_then_plain_value(self):
        """A string cached as a key is still written out in value position."""
        self.assertEqual(encode({"abcd": "abcd"}), b'["^ ","abcd","abcd"]')

    def test_tags_cached(self):
        self.assertEqual(encode([set(), set()]), b'[["~#set",[]],["^0",[]]]')
        self.assertEqual(decode(b'[["~#set",[]],["^0",[]]]'), [set(), set()])

    def test_verbose_never_caches(self):
        self.assertEqual(encode([{"abcd": 1}, {"abcd": 2}], "json-verbose"),
                         b'[{"abcd":1},{"abcd":2}]')

    def test_each_stream_value_gets_a_fresh_cache(self):
        buf = io.BytesIO()
        w = Writer(buf, "json")
        w.write({"abcd": 1})
        w.write({"abcd": 1})
        self.assertEqual(buf.getvalue(), b'["^ ","abcd",1]["^ ","abcd",1]')

    def test_wraparound_roundtrip(self):
        for n in (1935, 1936, 1937):
            vals = [Keyword("key%04d" % (i % n)) for i in range(2 * n)]
            for fmt in FORMATS:
                with self.subTest(n=n, fmt=fmt):
                    self.assertEqual(roundtrip(vals, fmt), vals)

    def test_map_keys_wraparound_roundtrip(self):
        maps = [{"key%04d" % i: i} for i in range(1937)] * 2
        for fmt in ("json", "msgpack"):
            with self.subTest(fmt=fmt):
                self.assertEqual(roundtrip(maps, fmt), maps)


# ── Top-level quoting ─────────────────────────────────────────

class TestQuoting(unittest.TestCase):
    def test_scalar_is_quoted(self):
        self.assertEqual(encode("hello"), b'["~#\'","hello"]')
        self.assertEqual(decode(b'["~#\'","hello"]'), "hello")

    def test_verbose_quote(self):
        self.assertEqual(encode("hello", "json-verbose"), b'{"~#\'":"hello"}')
        self.assertEqual(decode(b'{"~#\'":"hello"}', "json-verbose"), "hello")

    def test_null_and_bool(self):
        self.assertEqual(encode(None), b'["~#\'",null]')
        self.assertEqual(encode(True), b'["~#\'",true]')

    def test_composites_not_quoted(self):
        self.assertEqual(encode([]), b"[]")
        self.assertEqual(encode({}), b'["^ "]')
        self.assertEqual(encode(set()), b'["~#set",[]]')


# ── Unknown tags ──────────────────────────────────────────────

class TestTaggedValue(unittest.TestCase):
    def test_unknown_composite(self):
        self.assertEqual(decode(b'["~#point",[1,2]]'), TaggedValue("point", [1, 2]))

    def test_unknown_scalar(self):
        self.assertEqual(decode(b'["~Unrecognized"]'), [TaggedValue("U", "nrecognized")])

    def test_byte_identical_reencode(self):
        cases = {
            "json": [b'["~#point",[1,2]]', b'["~#\'","~Xfoo"]', b'["~Unrecognized"]',
                     b'["^ ","~:key","~Unrecognized"]',
                     b'[["~#abcde",["~:anything"]],["^0",["~:anything-else"]]]'],
            "json-verbose": [b'{"~#point":[1,2]}', b'{"~#\'":"~Xfoo"}',
                             b'{"~:key":"~Unrecognized"}'],
        }
        for fmt, docs in cases.items():
            for data in docs:
                with self.subTest(fmt=fmt, data=data):
                    self.assertEqual(encode(decode(data, fmt), fmt), data)

    def test_byte_identical_msgpack(self):
        import msgpack
        data = msgpack.packb(["~#point", {"x": 1, "y": ["~#thing", "~Qq"]}], use_bin_type=True)
        self.assertEqual(encode(decode(data, "msgpack"), "msgpack"), data)

    def test_tagged_value_as_map_key(self):
        out = decode(b'{"~/t":null}')
        self.assertEqual(out, {TaggedValue("/", "t"): None})
        self.assertEqual(encode(out), b'["^ ","~/t",null]')

    def test_one_char_tag_with_array_rep_as_map_key(self):
        import msgpack
        data = msgpack.packb(["~#cmap", [["~#x", [1, 2]], 1]], use_bin_type=True)
        out = decode(data, "msgpack")
        self.assertEqual(out, {TaggedValue("x", [1, 2]): 1})
        self.assertEqual(encode(out, "msgpack"), data)
        text = b'["~#cmap",[["~#x",[1,2]],1]]'
        self.assertEqual(encode(decode(text)), text)

    def test_tagged_value_hashable_with_list_rep(self):
        self.assertEqual(len({TaggedValue("p", [1, 2]), TaggedValue("p", [1, 2])}), 1)


# ── Registry ──────────────────────────────────────────────────

class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)


class PointHandler(WriteHandler):
    def tag(self, v):
        return "point"

    def rep(self, v):
        return [v.x, v.y]


class Circle:
    def __init__(self, center, radius):
        self.center = center
        self.radius = radius

    def __eq__(self, other):
        return isinstance(other, Circle) and (self.center, self.radius) == (other.center, other.radius)


class CircleHandler(WriteHandler):
    def tag(self, v):
        return "circle"

    def rep(self, v):
        return [v.center, v.radius]


class Temperature:
    def __init__(self, degrees):
        self.degrees = degrees

    def __eq__(self, other):
        return isinstance(other, Temperature) and other.degrees == self.degrees

    def __hash__(self):
        return hash(self.degrees)


class TemperatureHandler(WriteHandler):
    """Application scalar: upper-case tag, string form in JSON."""

    def tag(self, v):
        return "T"

    def rep(self, v):
        return v.degrees

    def string_rep(self, v):
        return str(v.degrees)


REGISTRY = Registry(
    write_handlers={Point: PointHandler(), Circle: CircleHandler(), Temperature: TemperatureHandler()},
    read_handlers={
        "point": lambda rep: Point(*rep),
        "circle": lambda rep: Circle(*rep),
        "T": lambda rep: Temperature(int(rep)),
    },
)


class TestRegistry(unittest.TestCase):
    def test_custom_composite(self):
        data = encode(Point(1, 2), registry=REGISTRY)
        self.assertEqual(data, b'["~#point",[1,2]]')
        self.assertEqual(decode(data, registry=REGISTRY), Point(1, 2))

    def test_extension_inside_extension(self):
        c = Circle(Point(1, 2), 5)
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                self.assertEqual(decode(encode(c, fmt, REGISTRY), fmt, REGISTRY), c)

    def test_nested_tags_cached(self):
        data = encode([Point(1, 2), Point(3, 4)], registry=REGISTRY)
        self.assertEqual(data, b'[["~#point",[1,2]],["^0",[3,4]]]')

    def test_custom_scalar(self):
        self.assertEqual(encode([Temperature(20)], registry=REGISTRY), b'["~T20"]')
        self.assertEqual(encode({Temperature(20): 1}, registry=REGISTRY), b'["^ ","~T20",1]')
        self.assertEqual(encode([Temperature(20)], "msgpack", REGISTRY),
                         encode([TaggedValue("T", 20)], "msgpack"))
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                v = {Temperature(20): [Temperature(-4)]}
                self.assertEqual(decode(encode(v, fmt, REGISTRY), fmt, REGISTRY), v)

    def test_unregistered_reader_falls_back(self):
        data = encode(Point(1, 2), registry=REGISTRY)
        self.assertEqual(decode(data), TaggedValue("point", [1, 2]))

    def test_exact_type_lookup(self):
        class MyDict(dict):
            pass

        with self.assertRaises(TransitError) as ctx:
            encode(MyDict(a=1))
        self.assertEqual(ctx.exception.code, ERR_UNENCODABLE_TYPE)

    def test_override_builtin_reader(self):
        reg = Registry(read_handlers={":": str})
        self.assertEqual(decode(b'["~:abc"]', registry=reg), ["abc"])

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            REGISTRY.write_handlers[object] = PointHandler()
        with self.assertRaises(TypeError):
            REGISTRY.read_handlers["x"] = str

    def test_default_is_shared(self):
        self.assertIs(Registry.default(), Registry.default())


# ── Errors ────────────────────────────────────────────────────

class TestErrors(unittest.TestCase):
    def assertCode(self, code, fn, *args, **kwargs):
        with self.assertRaises(TransitError) as ctx:
            fn(*args, **kwargs)
        self.assertEqual(ctx.exception.code, code)

    def test_unencodable(self):
        self.assertCode(ERR_UNENCODABLE_TYPE, encode, object())
        self.assertCode(ERR_UNENCODABLE_TYPE, encode, {"a": [object()]})

    def test_unknown_format(self):
        self.assertCode(ERR_FORMAT, encode, 1, "xml")
        self.assertCode(ERR_FORMAT, decode, b"[]", "edn")

    def test_cache_desync(self):
        self.assertCode(ERR_CACHE_DESYNC, decode, b'["^0"]')
        self.assertCode(ERR_CACHE_DESYNC, decode, b'[["^ ","abcd",1],["^ ","^1",2]]')
        self.assertCode(ERR_CACHE_DESYNC, decode, b'["^abcd"]')
        self.assertCode(ERR_CACHE_DESYNC, decode, b'["^"]')

    def test_malformed_tags(self):
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~#set",[1],2]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~#set"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~#"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'[1,"~#set"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'{"~#set":[1],"a":2}', "json-verbose")

    def test_bad_reps(self):
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~unot-a-uuid"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~inope"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~fnope"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~zHUGE"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~?x"]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~#ratio",["~n1","~n0"]]')
        self.assertCode(ERR_MALFORMED_TAG, decode, b'["~#cmap",[1]]')

    def test_parse_errors(self):
        self.assertCode(ERR_PARSE, decode, b"[")
        self.assertCode(ERR_PARSE, decode, b"[1] [2]")
        self.assertCode(ERR_PARSE, decode, b"[NaN]")
        self.assertCode(ERR_PARSE, decode, b"\xff")
        self.assertCode(ERR_PARSE, decode, b'["^ ","a"]')
        self.assertCode(ERR_PARSE, decode, b"\x92\x01", "msgpack")

    def test_map_key_without_string_form_uses_cmap(self):
        class Blob:
            pass

        class BlobHandler(WriteHandler):
            def tag(self, v):
                return "B"

            def rep(self, v):
                return [1, 2]

        reg = Registry(write_handlers={Blob: BlobHandler()})
        self.assertEqual(encode([Blob()], registry=reg), b'[["~#B",[1,2]]]')
        self.assertEqual(encode({Blob(): 1}, registry=reg), b'["~#cmap",[["~#B",[1,2]],1]]')


# ── Streams ───────────────────────────────────────────────────

class _Trickle(io.RawIOBase):
    """A stream that hands out a few bytes per read, like a slow pipe."""

    def __init__(self, data, step=3):
        self._data = data
        self._pos = 0
        self._step = step

    def readable(self):
        return True

    def read1(self, n=-1):
        chunk = self._data[self._pos:self._pos + self._step]
        self._pos += len(chunk)
        return chunk


class _OneChunk(io.RawIOBase):
    """Hands out one chunk, then fails any further read."""

    def __init__(self, data):
        self._data = data

    def readable(self):
        return True

    def read1(self, n=-1):
        if self._data is None:
            raise AssertionError("read past the first chunk")
        data, self._data = self._data, None
        return data


class TestStreams(unittest.TestCase):
    VALUES = [1, "hello", {"abcd": [Keyword("abcd"), "詹姆斯"]}, {1, 2}, None]

    def test_writer_reader_every_format(self):
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                buf = io.BytesIO()
                w = Writer(buf, fmt)
                for v in self.VALUES:
                    w.write(v)
                self.assertEqual(list(Reader(io.BytesIO(buf.getvalue()), fmt)), self.VALUES)

    def test_trickled_input(self):
        for fmt in FORMATS:
            with self.subTest(fmt=fmt):
                data = b"".join(encode(v, fmt) for v in self.VALUES)
                self.assertEqual(list(Reader(_Trickle(data), fmt)), self.VALUES)

    def test_whitespace_between_json_values(self):
        r = Reader(io.BytesIO(b' ["~#\'",1]\n\n[2] \n'), "json")
        self.assertEqual(list(r), [1, [2]])

    def test_read_until_eof(self):
        r = Reader(io.BytesIO(encode([1])), "json")
        self.assertEqual(r.read(), [1])
        with self.assertRaises(EOFError):
            r.read()

    def test_bare_json_values_yield_without_another_read(self):
        for data, value in ((b'"abc"', "abc"), (b'true', True), (b'null', None),
                            (b'[1,2]', [1, 2]), (b'"a\\"b" ', 'a"b')):
            with self.subTest(data=data):
                self.assertEqual(next(iter(Reader(_OneChunk(data), "json"))), value)

    def test_json_number_waits_for_a_delimiter(self):
        r = Reader(_Trickle(b'12345 [6]', step=2), "json")
        self.assertEqual(list(r), [12345, [6]])

    def test_bad_json_fails_before_next_read(self):
        for data in (b'[1, @', b'] [1]', b'{"a": nope', b'tru"'):
            with self.subTest(data=data):
                with self.assertRaises(TransitError) as ctx:
                    list(Reader(_OneChunk(data), "json"))
                self.assertEqual(ctx.exception.code, ERR_PARSE)

    def test_values_before_bad_json_still_arrive(self):
        it = iter(Reader(_OneChunk(b'[1] [2] }'), "json"))
        self.assertEqual(next(it), [1])
        self.assertEqual(next(it), [2])
        with self.assertRaises(TransitError):
            next(it)

    def test_brackets_inside_strings_ignored(self):
        data = b'["]}", "\\\\", "{["] "x]"'
        self.assertEqual(list(Reader(_Trickle(data, step=1), "json")),
                         [["]}", "\\", "{["], "x]"])

    def test_truncated_stream(self):
        for fmt in ("json", "msgpack"):
            with self.subTest(fmt=fmt):
                data = encode(["abc", 1, 2], fmt)[:-1]
                with self.assertRaises(TransitError) as ctx:
                    list(Reader(io.BytesIO(data), fmt))
                self.assertEqual(ctx.exception.code, ERR_PARSE)

    def test_content_types(self):
        self.assertEqual(Writer(io.BytesIO(), "json").content_type, "application/transit+json")
        self.assertEqual(Writer(io.BytesIO(), "msgpack").content_type, "application/transit+msgpack")
        self.assertEqual(CONTENT_TYPES["json-verbose"], "application/transit+json")


if __name__ == "__main__":
    unittest.main()
