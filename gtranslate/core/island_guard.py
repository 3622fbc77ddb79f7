# -*- coding: utf-8 -*-
"""
Island Guard Module
===================
Detects the parts of a query that must survive translation untouched
("islands"), masks them before the text is sent and puts them back afterwards.

Pipeline:
---------
1. **Detect:** ordered regex passes wrap every island in a private-use
   delimiter pair (``ISLAND_OPEN`` ... ``ISLAND_CLOSE``).
2. **Extract:** the delimited contents are collected left to right.
3. **Mask:** every delimited span becomes one shared marker token (``||``)
   and single quotes are escaped for the outbound payload.
4. **Restore:** the Nth marker in the translated text is replaced by the Nth
   island.

Pass order is part of the contract. Changing it changes which span wins
where two patterns could overlap, e.g. ``<a href="{url}">`` is one HTML
island, never a tag with a brace island inside.

Known limitation: all islands share one marker, so restoration is purely
positional. A translation that reorders or drops markers misaligns or loses
islands silently. A query that already carries the marker text next to
islands is rejected up front (``IslandError``).
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from gtranslate.core.constants import DEFAULT_CONVERSIONS, DEFAULT_MARKER

logger = logging.getLogger(__name__)

# Unicode PUA markers. Translation engines and ordinary text never carry these,
# so they can delimit islands without colliding with [[...]] in user text.
ISLAND_OPEN = '\uE001'
ISLAND_CLOSE = '\uE002'

ISLAND_RE = re.compile(f"{ISLAND_OPEN}([^{ISLAND_OPEN}{ISLAND_CLOSE}]*){ISLAND_CLOSE}")
# re.split with one capturing group -> [plain, island, plain, island, ..., plain]
_ISLAND_SPLIT_RE = re.compile(f"({ISLAND_OPEN}[^{ISLAND_OPEN}{ISLAND_CLOSE}]*{ISLAND_CLOSE})")

# =============================================================================
# PATTERN CLASSES
# =============================================================================
_PAT_HTML = r'<[^>]*>'               # <b>, </b>, <a href="...">
_PAT_BRACE = r'\{[^}]*\}'            # {0}, {name}, {}
_PAT_BRACKET = r'\[[^\]]*\]'         # [var], [1]
# Function name prefix: "Foo::bar", "JFTP: :write" (only at the start of the text)
_PAT_QUALIFIED = r'^.*: ?:[^: ]*'

_ESCAPED_QUOTE = "\\'"


class IslandError(ValueError):
    """Raised when a query cannot be scanned for islands."""


@dataclass(frozen=True)
class IslandPattern:
    """One detection pass. ``anchored`` passes only look at the text start."""
    name: str
    regex: re.Pattern
    anchored: bool = False


def _format_pattern(conversions: Iterable[str]) -> str:
    chars = ''.join(sorted({c for c in conversions}))
    if not chars:
        raise IslandError("At least one format conversion character is required")
    if any(len(c) != 1 for c in conversions):
        raise IslandError(f"Conversions must be single characters: {list(conversions)!r}")
    # %1$s, %03c, %d, %e ... a run of non-space characters ending in a conversion
    return rf'%\S*[{re.escape(chars)}]'


def build_patterns(conversions: Iterable[str] = DEFAULT_CONVERSIONS) -> List[IslandPattern]:
    """Return the detection passes in their fixed order."""
    conversions = list(conversions)
    return [
        IslandPattern("html_tag", re.compile(_PAT_HTML)),
        IslandPattern("brace_placeholder", re.compile(_PAT_BRACE)),
        IslandPattern("bracket_placeholder", re.compile(_PAT_BRACKET)),
        IslandPattern("format_specifier", re.compile(_format_pattern(conversions))),
        IslandPattern("qualified_name", re.compile(_PAT_QUALIFIED), anchored=True),
    ]


def _wrap(match: "re.Match[str]") -> str:
    return f"{ISLAND_OPEN}{match.group(0)}{ISLAND_CLOSE}"


class IslandDetector:
    """
    Wraps non-translatable spans in island delimiters.

    Every pass sees the output of the previous one but only scans the plain
    text between islands, so an earlier island is never re-matched, split or
    nested by a later pass.
    """

    def __init__(self, conversions: Iterable[str] = DEFAULT_CONVERSIONS,
                 patterns: Optional[List[IslandPattern]] = None):
        self.patterns = patterns if patterns is not None else build_patterns(conversions)

    def mark(self, text: str) -> str:
        if ISLAND_OPEN in text or ISLAND_CLOSE in text:
            raise IslandError("Query contains reserved island delimiter characters (U+E001/U+E002)")
        marked = text
        for pattern in self.patterns:
            marked = self._apply(pattern, marked)
        return marked

    @staticmethod
    def _apply(pattern: IslandPattern, marked: str) -> str:
        parts = _ISLAND_SPLIT_RE.split(marked)
        # Even indexes are plain text, odd indexes are islands from earlier passes.
        if pattern.anchored:
            parts[0] = pattern.regex.sub(_wrap, parts[0], count=1)
        else:
            for i in range(0, len(parts), 2):
                if parts[i]:
                    parts[i] = pattern.regex.sub(_wrap, parts[i])
        return ''.join(parts)


def extract_islands(marked: str) -> List[str]:
    """Original island contents in order of appearance (delimiters stripped)."""
    return ISLAND_RE.findall(marked)


@dataclass
class MaskResult:
    text: str
    islands: List[str] = field(default_factory=list)
    has_islands: bool = False


def escape_quotes(text: str) -> str:
    return text.replace("'", _ESCAPED_QUOTE)


def unescape_quotes(text: str) -> str:
    return text.replace(_ESCAPED_QUOTE, "'")


def mask_islands(marked: str, marker: str = DEFAULT_MARKER) -> MaskResult:
    """
    Replace every delimited island with one copy of ``marker`` and escape
    single quotes so they cannot close a quoted field in the request body.

    Raises ``IslandError`` when the query itself already contains the marker
    text in a way that would put islands back in the wrong place.
    """
    if not marker:
        raise IslandError("Marker token must not be empty")
    islands = extract_islands(marked)
    # Callable replacement: the marker is literal text, never a group reference
    masked, count = ISLAND_RE.subn(lambda _m: marker, marked)
    if count and restore_islands(masked, islands, marker) != ISLAND_RE.sub(r'\1', marked):
        raise IslandError(f"Query contains the marker token {marker!r} outside its islands; "
                          f"choose another marker")
    return MaskResult(text=escape_quotes(masked), islands=islands, has_islands=count > 0)


def protect_text(text: str, marker: str = DEFAULT_MARKER,
                 detector: Optional[IslandDetector] = None,
                 log: Optional[logging.Logger] = None) -> MaskResult:
    """Detect, extract and mask in one step."""
    log = log or logger
    detector = detector or IslandDetector()
    marked = detector.mark(text)
    result = mask_islands(marked, marker)
    if result.has_islands:
        log.debug("Number of non-translated islands of text: %d", len(result.islands))
        log.debug(", ".join(result.islands))
    return result


def restore_islands(text: str, islands: List[str], marker: str = DEFAULT_MARKER,
                    has_islands: bool = True, log: Optional[logging.Logger] = None) -> str:
    """
    Put islands back into translated text, the Nth marker getting the Nth island.

    Surplus markers are left as they are; islands without a marker are dropped.
    Quote escaping is not undone here, see ``unescape_quotes``.
    """
    if not has_islands:
        return text

    log = log or logger
    remaining = iter(islands)
    used = 0

    def _next_island(match: "re.Match[str]") -> str:
        nonlocal used
        island = next(remaining, None)
        if island is None:
            return match.group(0)
        used += 1
        return island

    restored = re.sub(re.escape(marker), _next_island, text)
    if used != len(islands):
        log.debug("Only %d of %d islands had a marker in the translation", used, len(islands))
    return restored
