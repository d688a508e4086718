"""Parse Markdown into blocks.

This module converts Markdown text into a flat list of Block objects,
one block per non-blank line. Each trimmed line is classified by its
prefix, in this order:

    "# " / "## " / "### "        heading_1 / heading_2 / heading_3
    "- [ ] " / "* [ ] "          to_do, unchecked
    "- [x] " / "* [x] "          to_do, checked
    "- " / "* "                  bulleted_list_item
    "1. " (digits, dot, space)   numbered_list_item
    anything else                paragraph

Checkbox prefixes are tested before plain bullets so a task line is
never read as a bullet. The rest of the line goes through the inline
parser, so emphasis inside headings and list items is kept. Nested
lists, multi-line paragraphs and fenced code are not recognised.

parse_lines() is the looser classifier used for pasted text. On top of
the rules above it accepts "+" bullets, any run of whitespace after a
list marker, "[X]" checkboxes, "```" fence lines (code) and "> " quotes
(paragraph, marker dropped).
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import NamedTuple

from .blocks_factory import create_block
from .blocks_models import Block, BlockType, ToDoProperties

logger = logging.getLogger(__name__)


_HEADING_PREFIXES: tuple[tuple[str, BlockType], ...] = (
    ("# ", BlockType.HEADING_1),
    ("## ", BlockType.HEADING_2),
    ("### ", BlockType.HEADING_3),
)
_UNCHECKED_PREFIXES = ("- [ ] ", "* [ ] ")
_CHECKED_PREFIXES = ("- [x] ", "* [x] ")
_BULLET_PREFIXES = ("- ", "* ")
_NUMBERED_RE = re.compile(r"^[0-9]+\.\s")

_PASTE_UNCHECKED_RE = re.compile(r"^[-*+]\s+\[\s\]\s+")
_PASTE_CHECKED_RE = re.compile(r"^[-*+]\s+\[[xX]\]\s+")
_PASTE_BULLET_RE = re.compile(r"^[-*+]\s+")
_PASTE_NUMBERED_RE = re.compile(r"^[0-9]+\.\s+")
_PASTE_FENCE_RE = re.compile(r"^```\w*\s*")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


class LineKind(NamedTuple):
    """Classification of one Markdown line."""

    type: BlockType
    text: str
    checked: bool = False


def classify_line(line: str) -> LineKind:
    """Classify a single line of Markdown.

    Total over all strings: anything unrecognised is a paragraph.
    """
    line = line.strip()

    for prefix, block_type in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return LineKind(block_type, line[len(prefix):])

    if line.startswith(_UNCHECKED_PREFIXES):
        return LineKind(BlockType.TO_DO, line[6:], checked=False)
    if line.startswith(_CHECKED_PREFIXES):
        return LineKind(BlockType.TO_DO, line[6:], checked=True)

    if line.startswith(_BULLET_PREFIXES):
        return LineKind(BlockType.BULLETED_LIST, line[2:])

    if _NUMBERED_RE.match(line):
        return LineKind(BlockType.NUMBERED_LIST, _NUMBERED_RE.sub("", line, count=1))

    return LineKind(BlockType.PARAGRAPH, line)


def classify_paste_line(line: str) -> LineKind:
    """Classify a single line of pasted text.

    Like classify_line(), but tolerant of the list and checkbox spellings
    found in text copied from other editors.
    """
    line = line.strip()

    for prefix, block_type in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return LineKind(block_type, line[len(prefix):])

    match = _PASTE_UNCHECKED_RE.match(line)
    if match:
        return LineKind(BlockType.TO_DO, line[match.end():], checked=False)
    match = _PASTE_CHECKED_RE.match(line)
    if match:
        return LineKind(BlockType.TO_DO, line[match.end():], checked=True)

    match = _PASTE_BULLET_RE.match(line)
    if match:
        return LineKind(BlockType.BULLETED_LIST, line[match.end():])

    match = _PASTE_NUMBERED_RE.match(line)
    if match:
        return LineKind(BlockType.NUMBERED_LIST, line[match.end():])

    if line.startswith("```"):
        # Language tag is dropped
        return LineKind(BlockType.CODE, _PASTE_FENCE_RE.sub("", line, count=1))

    if line.startswith("> "):
        return LineKind(BlockType.PARAGRAPH, line[2:])

    return LineKind(BlockType.PARAGRAPH, line)


def _block_from_line(kind: LineKind) -> Block:
    block = create_block(kind.type, kind.text)
    if kind.checked:
        return replace(block, properties=ToDoProperties(checked=True))
    return block


def parse_markdown(markdown: str) -> list[Block]:
    """Parse Markdown text into blocks.

    Args:
        markdown: The Markdown text to parse. Both "\\n" and "\\r\\n"
            line endings are accepted.

    Returns:
        One block per non-blank line, in order, all without children.
    """
    blocks = [
        _block_from_line(classify_line(line))
        for line in _LINE_SPLIT_RE.split(markdown)
        if line.strip()
    ]
    logger.debug("Parsed %d markdown block(s)", len(blocks))
    return blocks


def parse_lines(text: str) -> list[Block]:
    """Turn pasted multi-line text into blocks, one per non-blank line.

    Lines are classified with classify_paste_line(). A line holding only
    a code fence becomes an empty code block.
    """
    blocks = [
        _block_from_line(classify_paste_line(line))
        for line in _LINE_SPLIT_RE.split(text)
        if line.strip()
    ]
    logger.debug("Parsed %d pasted line(s) into blocks", len(blocks))
    return blocks
