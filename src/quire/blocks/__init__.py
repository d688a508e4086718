"""Block-based document model.

This package provides a Notion-inspired block system: typed content blocks
holding inline rich text, arranged in a tree.

Key components:
- blocks_models: Block, RichText, Annotations, BlockType dataclasses
- inline_parser: inline markdown <-> rich text runs
- blocks_factory: block construction
- blocks_tree: tree operations (find, update, move, search, statistics)
- markdown_parser: Markdown -> Blocks conversion
- markdown_renderer: Blocks -> Markdown, plain text and HTML
- wire_format: Blocks <-> structured JSON wire format
- templates: starter pages
"""

from .blocks_factory import create_block, new_block_id
from .blocks_models import (
    Annotations,
    Block,
    BlockProperties,
    BlockType,
    RichText,
    ToDoProperties,
)
from .blocks_tree import (
    TodoStats,
    append_child,
    change_block_type,
    count_characters,
    count_todos,
    count_words,
    find_block,
    flatten_tree,
    group_by_type,
    insert_block,
    iter_blocks,
    move_block,
    remove_block,
    search_blocks,
    set_block_text,
    toggle_todo,
    update_block,
)
from .inline_parser import parse_inline, plain_text, render_inline
from .markdown_parser import classify_line, classify_paste_line, parse_lines, parse_markdown
from .markdown_renderer import render_html, render_markdown, render_plain_text
from .templates import TemplateKind, page_template
from .wire_format import from_wire_format, to_wire_format

__all__ = [
    "Annotations",
    "Block",
    "BlockProperties",
    "BlockType",
    "RichText",
    "ToDoProperties",
    "TodoStats",
    "TemplateKind",
    "create_block",
    "new_block_id",
    "append_child",
    "change_block_type",
    "count_characters",
    "count_todos",
    "count_words",
    "find_block",
    "flatten_tree",
    "group_by_type",
    "insert_block",
    "iter_blocks",
    "move_block",
    "remove_block",
    "search_blocks",
    "set_block_text",
    "toggle_todo",
    "update_block",
    "parse_inline",
    "plain_text",
    "render_inline",
    "classify_line",
    "classify_paste_line",
    "parse_lines",
    "parse_markdown",
    "render_html",
    "render_markdown",
    "render_plain_text",
    "page_template",
    "from_wire_format",
    "to_wire_format",
]
