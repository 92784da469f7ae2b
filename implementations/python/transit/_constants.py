"""Transit wire constants: reserved characters, cache alphabet, numeric limits.

Everything here is part of the wire contract.  Two implementations that
disagree on any of these values cannot read each other's output, so treat
them as versioned parameters rather than tuning knobs.
"""

from __future__ import annotations

from typing import Dict

__wire_version__ = "0.8"

# ── Reserved prefix characters ───────────────────────────────
# A data string that starts with one of these is escaped with ESC.
ESC: str = "~"   # tag / escape
SUB: str = "^"   # cache code
RES: str = "`"   # reserved for future use
TAG: str = "#"   # "~#" introduces a composite tag

RESERVED_PREFIXES = (ESC, SUB, RES)

# First element of a JSON array that is really a map.
MAP_AS_ARRAY: str = "^ "

QUOTE_TAG: str = "'"

# ── Cache code alphabet ──────────────────────────────────────
# Codes are "^" + one or two chars from chr(48) ... chr(48 + 43).
# Some older write-ups describe a 94-char alphabet; this implementation
# follows the 44-char one used by the reference writers.
CACHE_CODE_DIGITS: int = 44
BASE_CHAR_IDX: int = 48
MAX_CACHE_ENTRIES: int = CACHE_CODE_DIGITS * CACHE_CODE_DIGITS

# Strings shorter than this are never cached.
MIN_SIZE_CACHEABLE: int = 4

# ── Integer ranges ───────────────────────────────────────────
# Python ints are unbounded, so narrowing to the wire types is explicit.
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# JSON numbers beyond this lose precision in JavaScript readers, so the
# JSON writers emit them as "~i" strings instead.
JSON_INT_MAX: int = 2**53 - 1
JSON_INT_MIN: int = -JSON_INT_MAX

# ── Formats ──────────────────────────────────────────────────
FMT_JSON: str = "json"
FMT_JSON_VERBOSE: str = "json-verbose"
FMT_MSGPACK: str = "msgpack"

FORMATS = (FMT_JSON, FMT_JSON_VERBOSE, FMT_MSGPACK)

CONTENT_TYPES: Dict[str, str] = {
    FMT_JSON: "application/transit+json",
    FMT_JSON_VERBOSE: "application/transit+json",
    FMT_MSGPACK: "application/transit+msgpack",
}
