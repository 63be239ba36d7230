"""Content fingerprints for raw geometry sources.

A fast, non-cryptographic 32-bit rolling hash (``h = h * 31 + unit``) over
the UTF-16 code units of the source text, rendered as a signed decimal
string. It only has to detect edits between calls, not resist collisions.
"""

from typing import Dict, Sequence, Union

SourceText = Union[str, bytes, None]


def content_fingerprint(content: SourceText) -> str:
    """Fingerprint a single raw source text."""
    if content is None:
        content = ""
    elif isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    
    data = content.encode("utf-16-be", errors="surrogatepass")
    value = 0
    for i in range(0, len(data), 2):
        unit = (data[i] << 8) | data[i + 1]
        value = (value * 31 + unit) & 0xFFFFFFFF
    
    if value >= 0x80000000:
        value -= 0x100000000
    return str(value)


def fingerprint_sources(raw_contents: Sequence[SourceText]) -> Dict[int, str]:
    """Fingerprint every source, keyed by its position."""
    return {index: content_fingerprint(content) for index, content in enumerate(raw_contents)}
