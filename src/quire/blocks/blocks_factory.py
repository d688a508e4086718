"""Block construction.

Blocks are created here with a fresh id, both timestamps set to now,
content parsed from inline markdown and no children.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from uuid import uuid4

from ..settings import settings
from .blocks_models import Block, BlockType, default_properties
from .inline_parser import parse_inline


def now_iso() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def new_block_id(prefix: str | None = None) -> str:
    """Generate a new unique block ID.

    Millisecond timestamp plus a random suffix; ids are never reused.
    """
    return f"{prefix or settings.id_prefix}-{int(time.time() * 1000)}-{uuid4().hex[:9]}"


def create_block(type: BlockType | str, text: str = "") -> Block:
    """Create a new block.

    Args:
        type: Block type (e.g., 'paragraph', 'to_do').
        text: Initial content; inline markdown is parsed into runs.

    Returns:
        The created Block. to_do blocks start unchecked.

    Raises:
        UnknownBlockTypeError: If the type is not supported.
    """
    block_type = BlockType.parse(type)
    now = now_iso()

    return Block(
        id=new_block_id(),
        type=block_type,
        content=tuple(parse_inline(text)),
        children=(),
        properties=default_properties(block_type),
        created_time=now,
        last_edited_time=now,
    )
