"""Render blocks to Markdown, plain text and HTML.

render_markdown() is the inverse direction of parse_markdown(), but not a
byte-exact one: blank lines are normalised to one between blocks, numbered
items are all written as "1." and children are not rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import mistletoe

from .blocks_models import HEADING_TYPES, Block, BlockType
from .inline_parser import render_inline

logger = logging.getLogger(__name__)


_HEADING_PREFIX = {
    BlockType.HEADING_1: "#",
    BlockType.HEADING_2: "##",
    BlockType.HEADING_3: "###",
}


def render_markdown(blocks: Sequence[Block]) -> str:
    """Render a flat list of blocks to Markdown.

    Args:
        blocks: Blocks to render, one line each.

    Returns:
        Markdown text with a blank line between consecutive blocks.
    """
    return "\n\n".join(_render_block(block) for block in blocks)


def _render_block(block: Block) -> str:
    """Render a single block to one Markdown line."""
    text = render_inline(block.content)

    if block.type in HEADING_TYPES:
        return f"{_HEADING_PREFIX[block.type]} {text}"
    elif block.type == BlockType.BULLETED_LIST:
        return f"- {text}"
    elif block.type == BlockType.NUMBERED_LIST:
        # No renumbering; Markdown viewers number the list themselves
        return f"1. {text}"
    elif block.type == BlockType.TO_DO:
        checkbox = "[x]" if block.checked else "[ ]"
        return f"- {checkbox} {text}"
    else:
        return text


def render_plain_text(blocks: Sequence[Block]) -> str:
    """Render a forest as plain text without any markup.

    Headings are upper-cased, to-dos are prefixed with [DONE] or [TODO],
    and children follow their parent on the next lines.
    """
    # (block, parent position) in pre-order; rendered bottom-up below
    nodes: list[tuple[Block, int]] = []
    stack = [(block, -1) for block in reversed(blocks)]
    while stack:
        block, parent = stack.pop()
        nodes.append((block, parent))
        position = len(nodes) - 1
        stack.extend((child, position) for child in reversed(block.children))

    child_parts: list[list[str]] = [[] for _ in nodes]
    parts: list[str] = []
    for position in range(len(nodes) - 1, -1, -1):
        block, parent = nodes[position]
        text = _plain_line(block)
        if child_parts[position]:
            text += "\n" + "\n\n".join(reversed(child_parts[position]))
        (parts if parent < 0 else child_parts[parent]).append(text)

    return "\n\n".join(reversed(parts))


def _plain_line(block: Block) -> str:
    text = block.plain_text()
    if block.type in HEADING_TYPES:
        return text.upper()
    if block.type == BlockType.TO_DO:
        status = "[DONE]" if block.checked else "[TODO]"
        return f"{status} {text}"
    return text


def render_html(blocks: Sequence[Block]) -> str:
    """Render a flat list of blocks to an HTML fragment.

    The blocks are rendered to Markdown first and converted by mistletoe,
    so the HTML carries the same simplifications as render_markdown().
    """
    html = mistletoe.markdown(render_markdown(blocks))
    logger.debug("Rendered %d block(s) to %d characters of HTML", len(blocks), len(html))
    return html
