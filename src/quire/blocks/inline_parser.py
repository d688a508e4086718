"""Inline markup <-> rich text runs.

Recognised markers, in detection order:

    **bold**    *italic*    ~~strikethrough~~    `code`

Every pattern is matched over the whole input independently, then all
matches are merged by start offset and walked left to right. Nested or
overlapping markers (``**bold *and italic* text**``) therefore yield
overlapping matches; they are emitted as found rather than resolved, so
the output on such input repeats some text. This is a known limitation
of the format; the result is deterministic and parsing never fails.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, NamedTuple

from .blocks_models import Annotations, RichText

logger = logging.getLogger(__name__)


_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.*?)\*\*"), "bold"),
    (re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)"), "italic"),
    (re.compile(r"~~(.*?)~~"), "strikethrough"),
    (re.compile(r"`(.*?)`"), "code"),
)

# Wrap order for rendering; innermost first
_MARKERS: tuple[tuple[str, str], ...] = (
    ("bold", "**"),
    ("italic", "*"),
    ("strikethrough", "~~"),
    ("code", "`"),
)


class _Match(NamedTuple):
    start: int
    end: int
    inner: str
    annotation: str


def _find_matches(text: str) -> list[_Match]:
    matches = [
        _Match(m.start(), m.end(), m.group(1), annotation)
        for pattern, annotation in _PATTERNS
        for m in pattern.finditer(text)
    ]
    # sorted() is stable: ties keep pattern order
    return sorted(matches, key=lambda m: m.start)


def parse_inline(text: str) -> list[RichText]:
    """Parse inline markdown emphasis into rich text runs.

    Args:
        text: Raw text that may contain inline markers.

    Returns:
        Ordered runs. Never empty: text without markers (including the
        empty string) becomes a single plain run.
    """
    matches = _find_matches(text)
    if not matches:
        return [RichText(content=text)]

    runs: list[RichText] = []
    last_index = 0

    for match in matches:
        if match.start > last_index:
            runs.append(RichText(content=text[last_index:match.start]))

        runs.append(
            RichText(
                content=match.inner,
                annotations=Annotations(**{match.annotation: True}),
            )
        )
        last_index = match.end

    if last_index < len(text):
        runs.append(RichText(content=text[last_index:]))

    logger.debug("Parsed %d inline marker(s) into %d run(s)", len(matches), len(runs))
    return runs


def render_inline(runs: Iterable[RichText]) -> str:
    """Render rich text runs back to inline markdown.

    Annotations without a marker (underline, color) and links are dropped.
    For input holding a single non-nested marker pair this is the exact
    inverse of parse_inline().
    """
    parts = []
    for run in runs:
        text = run.content
        for annotation, marker in _MARKERS:
            if getattr(run.annotations, annotation):
                text = f"{marker}{text}{marker}"
        parts.append(text)
    return "".join(parts)


def plain_text(runs: Iterable[RichText]) -> str:
    """Concatenate run contents without any markers."""
    return "".join(run.content for run in runs)
