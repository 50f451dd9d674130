"""Unicode hygiene for text sent to or received from vendors."""
from __future__ import annotations

import re

_SURROGATE = re.compile("[\ud800-\udfff]")


def sanitize_surrogates(text: str) -> str:
    """Replace unpaired UTF-16 surrogates with U+FFFD.

    Properly paired surrogates (as produced by some JSON decoders) are joined
    into the code point they encode, so the result always encodes as UTF-8.
    """
    if not text or not _SURROGATE.search(text):
        return text
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


__all__ = ["sanitize_surrogates"]
