"""Transit error codes and the exception class that carries them.

Every failure the codec surfaces is a TransitError whose `.code` is one
of the ERR_* strings below.  The only condition the decoder recovers from
on its own is an unknown tag, which becomes a TaggedValue instead of an
error.
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the CLI prints them verbatim.

ERR_UNENCODABLE_TYPE: str = "ERR_UNENCODABLE_TYPE"  # no write handler for a type
ERR_MALFORMED_TAG: str = "ERR_MALFORMED_TAG"        # tag/rep shape or rep rejected
ERR_CACHE_DESYNC: str = "ERR_CACHE_DESYNC"          # cache code never registered
ERR_PARSE: str = "ERR_PARSE"                        # bytes are not JSON / msgpack
ERR_FORMAT: str = "ERR_FORMAT"                      # unknown format name

ALL_CODES = (
    ERR_UNENCODABLE_TYPE,
    ERR_MALFORMED_TAG,
    ERR_CACHE_DESYNC,
    ERR_PARSE,
    ERR_FORMAT,
)


class TransitError(Exception):
    """Exception for Transit encode/decode failures.

    The `.code` attribute is one of the ERR_* strings above and is what
    callers (and tests) should compare against.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
