"""Write and read caches.

Both sides keep an independent counter and never talk to each other.
They stay in step only because the writer assigns codes in exactly the
order the reader will meet the same strings.  Anything that changes the
order in which cacheable strings are emitted or parsed breaks that.

A cache lives for exactly one top-level value.  Writer and Reader create
a fresh one per value; never share one between streams or threads.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ._constants import (
    BASE_CHAR_IDX,
    CACHE_CODE_DIGITS,
    ESC,
    MAP_AS_ARRAY,
    MAX_CACHE_ENTRIES,
    MIN_SIZE_CACHEABLE,
    SUB,
)
from ._errors import ERR_CACHE_DESYNC, TransitError

logger = logging.getLogger(__name__)

# "~:" keyword, "~$" symbol, "~#" tag
_CACHEABLE_TAG_CHARS = frozenset(":$#")


def is_cacheable(s: str, as_map_key: bool = False) -> bool:
    """True if `s` (already encoded) may be replaced by a cache code."""
    if len(s) < MIN_SIZE_CACHEABLE:
        return False
    if as_map_key:
        return True
    return s[0] == ESC and s[1] in _CACHEABLE_TAG_CHARS


def is_cache_code(s: str) -> bool:
    """True if `s` is a cache reference: any "^" string except the map marker.

    Writers escape data strings that start with "^", so a code of the
    wrong length is a desync, not data.
    """
    return s[:1] == SUB and s != MAP_AS_ARRAY


def index_to_code(index: int) -> str:
    hi, lo = divmod(index, CACHE_CODE_DIGITS)
    if hi == 0:
        return SUB + chr(lo + BASE_CHAR_IDX)
    return SUB + chr(hi + BASE_CHAR_IDX) + chr(lo + BASE_CHAR_IDX)


def code_to_index(code: str) -> int:
    if len(code) == 2:
        return ord(code[1]) - BASE_CHAR_IDX
    return (ord(code[1]) - BASE_CHAR_IDX) * CACHE_CODE_DIGITS + (ord(code[2]) - BASE_CHAR_IDX)


class WriteCache:
    """Maps cacheable strings to the codes that replace their repeats."""

    __slots__ = ("enabled", "_codes")

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._codes: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._codes)

    def try_cache(self, s: str, as_map_key: bool = False) -> Optional[str]:
        """Return the code for `s` if it was seen before, else None.

        A new cacheable `s` is registered on the way through.
        """
        if not self.enabled or not is_cacheable(s, as_map_key):
            return None
        code = self._codes.get(s)
        if code is not None:
            return code
        if len(self._codes) == MAX_CACHE_ENTRIES:
            logger.debug("write cache full at %d entries, resetting", MAX_CACHE_ENTRIES)
            self._codes.clear()
        self._codes[s] = index_to_code(len(self._codes))
        return None

    def cache_write(self, s: str, as_map_key: bool = False) -> str:
        """Return what to put on the wire for `s`: its code, or `s` itself."""
        code = self.try_cache(s, as_map_key)
        return s if code is None else code


class ReadCache:
    """Positional store of parsed values, addressed by cache code."""

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: List[Any] = []

    def __len__(self) -> int:
        return len(self._values)

    def lookup(self, code: str) -> Any:
        if not 2 <= len(code) <= 3:
            raise TransitError(ERR_CACHE_DESYNC, "malformed cache code {!r}".format(code))
        idx = code_to_index(code)
        if idx < 0 or idx >= len(self._values):
            raise TransitError(
                ERR_CACHE_DESYNC,
                "cache code {!r} (index {}) not registered; {} entries cached".format(
                    code, idx, len(self._values)),
            )
        return self._values[idx]

    def register(self, value: Any) -> None:
        if len(self._values) == MAX_CACHE_ENTRIES:
            logger.debug("read cache full at %d entries, resetting", MAX_CACHE_ENTRIES)
            self._values = []
        self._values.append(value)
