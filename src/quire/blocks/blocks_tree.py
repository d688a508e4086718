"""Tree operations for block forests.

This module provides operations over an ordered forest of blocks:
- Traversal, lookup and search
- Copy-on-write updates, inserts and removals
- Root-level reordering
- Aggregate statistics and grouping

Every operation is built on two primitives: iter_blocks() for reading
(pre-order, parents before children) and _rewrite() for writing (rebuilds
the path from the root to the target and shares everything else). Lookup
and update therefore always agree on which block an id resolves to.

Blocks are immutable, so the returned lists never alias caller-held state;
callers must not rely on identity of unchanged siblings either way.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import fields, replace
from typing import Any, NamedTuple

from ..errors import OutOfRangeError, ValidationError
from .blocks_factory import now_iso
from .blocks_models import (
    Block,
    BlockType,
    ToDoProperties,
    default_properties,
    properties_from_dict,
)
from .inline_parser import parse_inline

logger = logging.getLogger(__name__)

_BLOCK_FIELDS = frozenset(f.name for f in fields(Block))
_IMMUTABLE_FIELDS = frozenset({"id", "created_time"})


class TodoStats(NamedTuple):
    total: int
    completed: int


# =============================================================================
# Traversal
# =============================================================================


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Yield every block of a forest in pre-order (parent before children).

    Uses an explicit stack of sibling iterators, so tree depth is not
    limited by the interpreter's recursion limit.
    """
    stack: list[Iterator[Block]] = [iter(blocks)]
    while stack:
        block = next(stack[-1], None)
        if block is None:
            stack.pop()
            continue
        yield block
        if block.children:
            stack.append(iter(block.children))


def flatten_tree(blocks: Iterable[Block]) -> list[Block]:
    """Flatten a forest to a depth-first list."""
    return list(iter_blocks(blocks))


def _find_path(
    blocks: Sequence[Block],
    block_id: str,
) -> list[tuple[Sequence[Block], int]] | None:
    """Locate the first block with the given id, in iter_blocks() order.

    Returns:
        (level, index) pairs from the root level down to the target, or
        None if the id is absent.
    """
    path: list[tuple[Sequence[Block], int]] = [(blocks, 0)]
    while path:
        level, index = path[-1]
        if index >= len(level):
            path.pop()
            if path:
                parent_level, parent_index = path[-1]
                path[-1] = (parent_level, parent_index + 1)
            continue

        block = level[index]
        if block.id == block_id:
            return path
        if block.children:
            path.append((block.children, 0))
        else:
            path[-1] = (level, index + 1)
    return None


def _rewrite(
    blocks: Sequence[Block],
    block_id: str,
    transform: Callable[[Block], list[Block]],
) -> tuple[list[Block], bool]:
    """Replace the first block with the given id by transform(block).

    Visits blocks in the same order as iter_blocks(). transform returns the
    replacement blocks; an empty list removes the target. Only the blocks
    on the path from the root to the target are rebuilt.

    Returns:
        The rebuilt root level and whether the target was found.
    """
    path = _find_path(blocks, block_id)
    if path is None:
        return list(blocks), False

    level, index = path[-1]
    rebuilt = [*level[:index], *transform(level[index]), *level[index + 1:]]
    for level, index in reversed(path[:-1]):
        parent = replace(level[index], children=tuple(rebuilt))
        rebuilt = [*level[:index], parent, *level[index + 1:]]
    return rebuilt, True


# =============================================================================
# Lookup
# =============================================================================


def find_block(blocks: Iterable[Block], block_id: str) -> Block | None:
    """Find a block anywhere in the forest.

    Args:
        blocks: Root blocks.
        block_id: The block ID.

    Returns:
        The first match in pre-order, or None if absent.
    """
    for block in iter_blocks(blocks):
        if block.id == block_id:
            return block
    return None


def search_blocks(blocks: Iterable[Block], query: str) -> list[Block]:
    """Find blocks whose plain text contains query, ignoring case.

    Markdown markers are not part of the searched text. Results are in
    pre-order, a parent before its own matching children.
    """
    needle = query.lower()
    return [block for block in iter_blocks(blocks) if needle in block.plain_text().lower()]


# =============================================================================
# Updates
# =============================================================================


def _check_change_fields(changes: dict[str, Any]) -> None:
    unknown = set(changes) - _BLOCK_FIELDS - {"metadata"}
    if unknown:
        raise ValidationError(
            f"Unknown block field(s): {', '.join(sorted(unknown))}",
            field=sorted(unknown)[0],
            constraint="block_field",
        )

    frozen = set(changes) & _IMMUTABLE_FIELDS
    if frozen:
        raise ValidationError(
            f"Block field(s) cannot change: {', '.join(sorted(frozen))}",
            field=sorted(frozen)[0],
            constraint="immutable",
        )


def _normalize_changes(block: Block, changes: dict[str, Any]) -> dict[str, Any]:
    changes = dict(changes)
    new_type = BlockType.parse(changes.get("type", block.type))
    changes["type"] = new_type

    if isinstance(changes.get("content"), str):
        changes["content"] = tuple(parse_inline(changes["content"]))

    metadata = changes.pop("metadata", None)
    if "properties" not in changes:
        if metadata is not None:
            changes["properties"] = properties_from_dict(new_type, metadata)
        elif new_type != block.type:
            changes["properties"] = default_properties(new_type)

    changes["last_edited_time"] = now_iso()
    return changes


def update_block(blocks: Sequence[Block], block_id: str, **changes: Any) -> list[Block]:
    """Replace a block by a copy of itself with changes applied.

    Args:
        blocks: Root blocks.
        block_id: The block to update (searched recursively).
        **changes: Block fields to replace. ``content`` may be given as a
            string (inline markdown is parsed) and ``metadata`` as a loose
            dict. Changing ``type`` without ``properties`` resets the
            properties to the new type's default.

    Returns:
        New forest; last_edited_time of the target is set to now. If the id
        is absent the forest is returned unchanged.

    Raises:
        ValidationError: If changes name unknown fields, id or created_time.
    """
    _check_change_fields(changes)

    def transform(block: Block) -> list[Block]:
        return [replace(block, **_normalize_changes(block, changes))]

    result, found = _rewrite(blocks, block_id, transform)
    if not found:
        logger.warning("update_block: block %s not found", block_id)
    else:
        logger.debug("Updated block %s (%s)", block_id, ", ".join(sorted(changes)))
    return result


def set_block_text(blocks: Sequence[Block], block_id: str, text: str) -> list[Block]:
    """Replace a block's content with text parsed as inline markdown."""
    return update_block(blocks, block_id, content=tuple(parse_inline(text)))


def change_block_type(
    blocks: Sequence[Block],
    block_id: str,
    new_type: BlockType | str,
) -> list[Block]:
    """Change a block's type; type-specific properties start from defaults."""
    new_type = BlockType.parse(new_type)
    return update_block(
        blocks,
        block_id,
        type=new_type,
        properties=default_properties(new_type),
    )


def toggle_todo(blocks: Sequence[Block], block_id: str) -> list[Block]:
    """Flip the checked state of a to_do block.

    Blocks of other types are left untouched.
    """
    block = find_block(blocks, block_id)
    if block is None or block.type != BlockType.TO_DO:
        return list(blocks)
    return update_block(blocks, block_id, properties=ToDoProperties(checked=not block.checked))


# =============================================================================
# Structure
# =============================================================================


def _check_index(index: int, length: int, field: str) -> None:
    if not 0 <= index < length:
        raise OutOfRangeError(
            f"{field} {index} out of range for {length} block(s)",
            index=index,
            length=length,
            field=field,
        )


def move_block(blocks: Sequence[Block], from_index: int, to_index: int) -> list[Block]:
    """Move a root block from one position to another.

    The block is removed at from_index and reinserted at to_index of the
    shortened list; blocks in between shift by one.

    Raises:
        OutOfRangeError: If either index is outside the list.
    """
    _check_index(from_index, len(blocks), "from_index")
    _check_index(to_index, len(blocks), "to_index")

    result = list(blocks)
    moved = result.pop(from_index)
    result.insert(to_index, moved)

    logger.debug("Moved block %s from %d to %d", moved.id, from_index, to_index)
    return result


def insert_block(blocks: Sequence[Block], index: int, block: Block) -> list[Block]:
    """Insert a root block before position index (len(blocks) appends).

    Raises:
        OutOfRangeError: If index is outside 0..len(blocks).
    """
    _check_index(index, len(blocks) + 1, "index")
    result = list(blocks)
    result.insert(index, block)
    return result


def append_child(blocks: Sequence[Block], parent_id: str, child: Block) -> list[Block]:
    """Append a block to the children of parent_id.

    Returns the forest unchanged when the parent is absent.
    """
    def transform(parent: Block) -> list[Block]:
        return [replace(parent, children=parent.children + (child,))]

    result, found = _rewrite(blocks, parent_id, transform)
    if not found:
        logger.warning("append_child: parent %s not found", parent_id)
    return result


def remove_block(blocks: Sequence[Block], block_id: str) -> list[Block]:
    """Remove a block, and with it its subtree, from the forest."""
    result, found = _rewrite(blocks, block_id, lambda block: [])
    if not found:
        logger.warning("remove_block: block %s not found", block_id)
    return result


# =============================================================================
# Statistics
# =============================================================================


def count_words(blocks: Iterable[Block]) -> int:
    """Count whitespace-separated words across the whole forest."""
    return sum(len(block.plain_text().split()) for block in iter_blocks(blocks))


def count_characters(blocks: Iterable[Block]) -> int:
    """Count characters of plain text across the whole forest."""
    return sum(len(block.plain_text()) for block in iter_blocks(blocks))


def count_todos(blocks: Iterable[Block]) -> TodoStats:
    """Count to_do blocks and how many of them are checked."""
    total = 0
    completed = 0
    for block in iter_blocks(blocks):
        if block.type == BlockType.TO_DO:
            total += 1
            if block.checked:
                completed += 1
    return TodoStats(total=total, completed=completed)


def group_by_type(blocks: Iterable[Block]) -> dict[BlockType, list[Block]]:
    """Partition every block of the forest by type.

    All block types are present as keys, possibly with empty lists.
    """
    groups: dict[BlockType, list[Block]] = {block_type: [] for block_type in BlockType}
    for block in iter_blocks(blocks):
        groups[block.type].append(block)
    return groups
