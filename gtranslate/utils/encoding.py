"""
Decoding of --query-file contents. Query files come from editors and
spreadsheets in whatever encoding they were saved with.
"""

from pathlib import Path
from typing import Optional, Tuple

import chardet


def decode_bytes(raw: bytes, preferred: Tuple[str, ...] = ("utf-8-sig", "utf-8")) -> str:
    """
    Turn query bytes into text.

    UTF-8 (with or without BOM) is tried first; anything else is handed to
    chardet and decoded with errors='replace', so a query is never rejected
    for its encoding alone.
    """
    for enc in preferred:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue

    detected = chardet.detect(raw)
    enc = detected.get("encoding") or "utf-8"
    try:
        return raw.decode(enc, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def read_text_safely(path: Path, preferred: Tuple[str, ...] = ("utf-8-sig", "utf-8")) -> Optional[str]:
    """Query text from ``path``, or None when the file cannot be opened."""
    try:
        raw = Path(path).read_bytes()
    except OSError:
        return None
    return decode_bytes(raw, preferred)
