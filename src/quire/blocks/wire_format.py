"""Convert block forests to and from the structured JSON wire format.

Wire shape of one block:

    {
        "object": "block",
        "id": "block-...",
        "type": "to_do",
        "to_do": {"rich_text": [...], "checked": false},
        "children": [...],
        "created_time": "...",
        "last_edited_time": "..."
    }

The type-keyed payload holds the rich text runs and, for to_do blocks
only, the checked flag. Conversion in this direction is exact:
from_wire_format(to_wire_format(blocks)) == blocks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..errors import ValidationError
from .blocks_factory import now_iso
from .blocks_models import Block, BlockProperties, BlockType, RichText, ToDoProperties

logger = logging.getLogger(__name__)


def to_wire_format(blocks: Iterable[Block]) -> list[dict[str, Any]]:
    """Convert blocks (recursively) to wire objects."""
    result: list[dict[str, Any]] = []
    # (block, list its wire object belongs to); popped in pre-order
    stack = [(block, result) for block in reversed(list(blocks))]
    while stack:
        block, siblings = stack.pop()
        obj = _block_to_wire(block)
        siblings.append(obj)
        stack.extend((child, obj["children"]) for child in reversed(block.children))
    return result


def _block_to_wire(block: Block) -> dict[str, Any]:
    """Wire object for one block; children are filled in by the caller."""
    payload: dict[str, Any] = {
        "rich_text": [run.to_dict() for run in block.content],
    }
    if block.type == BlockType.TO_DO:
        payload["checked"] = block.checked

    return {
        "object": "block",
        "id": block.id,
        "type": block.type.value,
        block.type.value: payload,
        "children": [],
        "created_time": block.created_time,
        "last_edited_time": block.last_edited_time,
    }


def from_wire_format(objects: Sequence[dict[str, Any]]) -> list[Block]:
    """Convert wire objects (recursively) to blocks.

    Missing optional fields (rich_text, children, checked, annotations,
    link, timestamps) are filled with defaults so data written by other
    format versions still loads.

    Raises:
        ValidationError: If an object has no id, its type is missing, or a
            block, payload, run or children list has the wrong shape.
        UnknownBlockTypeError: If a type is not supported.
    """
    # Blocks are immutable, so children must exist before their parent.
    # Read every object in pre-order first, then build in reverse.
    nodes: list[tuple[dict[str, Any], int]] = []
    stack = [(obj, -1) for obj in reversed(_check_list(objects, "blocks"))]
    while stack:
        obj, parent = stack.pop()
        nodes.append((_block_fields(obj), parent))
        position = len(nodes) - 1
        children = _check_list(obj.get("children"), "children")
        stack.extend((child, position) for child in reversed(children))

    children_of: list[list[Block]] = [[] for _ in nodes]
    roots: list[Block] = []
    for position in range(len(nodes) - 1, -1, -1):
        fields, parent = nodes[position]
        block = Block(children=tuple(reversed(children_of[position])), **fields)
        (roots if parent < 0 else children_of[parent]).append(block)

    roots.reverse()
    logger.debug("Loaded %d root block(s) from wire format", len(roots))
    return roots


def _check_list(value: Any, field: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"Wire {field} must be a list", field=field, value=value)
    return list(value)


def _block_fields(obj: Any) -> dict[str, Any]:
    """Validate one wire object and read every Block field but children."""
    if not isinstance(obj, dict):
        raise ValidationError("Wire block must be an object", field="block", value=obj)

    block_id = obj.get("id")
    if not block_id:
        raise ValidationError("Wire block has no id", field="id")

    type_tag = obj.get("type")
    if not type_tag:
        raise ValidationError("Wire block has no type", field="type", context={"id": block_id})
    block_type = BlockType.parse(type_tag)

    payload = obj.get(block_type.value)
    if payload is None:
        payload = {}
    elif not isinstance(payload, dict):
        raise ValidationError(
            f"Wire payload {block_type.value!r} must be an object",
            field=block_type.value,
            value=payload,
            context={"id": block_id},
        )

    if block_type == BlockType.TO_DO:
        properties: BlockProperties = ToDoProperties(checked=bool(payload.get("checked", False)))
    else:
        properties = BlockProperties()

    now = now_iso()
    created_time = obj.get("created_time")
    last_edited_time = obj.get("last_edited_time")

    return {
        "id": block_id,
        "type": block_type,
        "content": tuple(
            RichText.from_dict(run) for run in _check_list(payload.get("rich_text"), "rich_text")
        ),
        "properties": properties,
        "created_time": now if created_time is None else created_time,
        "last_edited_time": now if last_edited_time is None else last_edited_time,
    }
