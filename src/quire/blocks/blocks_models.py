"""Data models for the block-based document system.

This module defines the core data structures for Notion-style blocks.
Blocks are immutable values: every operation in blocks_tree returns new
blocks instead of writing fields in place, so a forest handed out by one
call can be shared freely with other callers and threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import PropertiesMismatchError, UnknownBlockTypeError, ValidationError


class BlockType(str, Enum):
    """Supported block types."""

    # Text blocks
    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"

    # List blocks
    BULLETED_LIST = "bulleted_list_item"
    NUMBERED_LIST = "numbered_list_item"
    TO_DO = "to_do"

    # Special blocks
    TOGGLE = "toggle"
    CODE = "code"

    @classmethod
    def parse(cls, value: BlockType | str) -> BlockType:
        """Coerce a type tag to a BlockType.

        Raises:
            UnknownBlockTypeError: If the tag is not a supported type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownBlockTypeError(value) from None


HEADING_TYPES = frozenset({
    BlockType.HEADING_1,
    BlockType.HEADING_2,
    BlockType.HEADING_3,
})

# Text colors accepted in annotations
COLORS = frozenset({
    "default",
    "gray",
    "brown",
    "orange",
    "yellow",
    "green",
    "blue",
    "purple",
    "pink",
    "red",
})


# =============================================================================
# Rich Text
# =============================================================================


@dataclass(frozen=True)
class Annotations:
    """Inline style flags of a rich text run.

    Flags are independent; a run may be bold and italic at the same time.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"

    def __post_init__(self) -> None:
        if self.color not in COLORS:
            raise ValidationError(
                f"Unknown text color: {self.color!r}",
                field="color",
                value=self.color,
                constraint="color",
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Annotations:
        """Create from dictionary; missing keys take their defaults."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("Annotations must be an object", field="annotations", value=data)
        return cls(
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            strikethrough=bool(data.get("strikethrough", False)),
            underline=bool(data.get("underline", False)),
            code=bool(data.get("code", False)),
            color=data.get("color") or "default",
        )

    def active(self) -> list[str]:
        """Names of the flags that are switched on."""
        return [
            name
            for name in ("bold", "italic", "strikethrough", "underline", "code")
            if getattr(self, name)
        ]

    def is_plain(self) -> bool:
        return not self.active() and self.color == "default"


@dataclass(frozen=True)
class RichText:
    """A contiguous span of text sharing one style combination.

    Rich text is stored as a sequence of runs, each with its own
    annotations. Concatenating the runs' content gives the block's
    plain text.
    """

    content: str
    link: str | None = None
    annotations: Annotations = field(default_factory=Annotations)
    type: str = "text"

    def __post_init__(self) -> None:
        # A run without annotations is a plain run
        if self.annotations is None:
            object.__setattr__(self, "annotations", Annotations())
        elif isinstance(self.annotations, dict):
            object.__setattr__(self, "annotations", Annotations.from_dict(self.annotations))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the external rich text shape."""
        return {
            "type": self.type,
            "text": {
                "content": self.content,
                "link": self.link,
            },
            "annotations": self.annotations.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RichText:
        """Create from the external rich text shape."""
        if not isinstance(data, dict):
            raise ValidationError("Rich text run must be an object", field="rich_text", value=data)
        text = data.get("text") or {}
        if not isinstance(text, dict):
            raise ValidationError("Rich text \"text\" must be an object", field="text", value=text)
        return cls(
            content=text.get("content") or "",
            link=text.get("link"),
            annotations=Annotations.from_dict(data.get("annotations")),
            type=data.get("type") or "text",
        )

    def plain_text(self) -> str:
        """Get plain text content without formatting."""
        return self.content


# =============================================================================
# Type-specific properties
# =============================================================================


@dataclass(frozen=True)
class BlockProperties:
    """Properties of block types that carry no type-specific data."""

    def to_dict(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class ToDoProperties(BlockProperties):
    """Properties of a to_do block."""

    checked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"checked": self.checked}


def default_properties(block_type: BlockType | str) -> BlockProperties:
    """Get the default properties variant for a block type."""
    if BlockType.parse(block_type) == BlockType.TO_DO:
        return ToDoProperties()
    return BlockProperties()


def properties_from_dict(block_type: BlockType | str, data: dict[str, Any] | None) -> BlockProperties:
    """Build the properties variant for a type from a loose attribute dict.

    Keys that mean nothing for the type are dropped.
    """
    if BlockType.parse(block_type) == BlockType.TO_DO:
        return ToDoProperties(checked=bool((data or {}).get("checked", False)))
    return BlockProperties()


# =============================================================================
# Block
# =============================================================================


@dataclass(frozen=True)
class Block:
    """A content block in the Notion-style document.

    Blocks form a tree: each block owns an ordered tuple of children.
    Text content is stored as rich text runs; type-specific data lives
    in a properties variant that matches the block type.
    """

    id: str
    type: BlockType

    # Content
    content: tuple[RichText, ...] = ()

    # Hierarchy
    children: tuple[Block, ...] = ()

    # Type-specific properties (ToDoProperties for to_do)
    properties: BlockProperties = field(default_factory=BlockProperties)

    # Timestamps (ISO-8601, UTC)
    created_time: str = ""
    last_edited_time: str = ""

    def __post_init__(self) -> None:
        block_type = BlockType.parse(self.type)
        object.__setattr__(self, "type", block_type)
        object.__setattr__(self, "content", tuple(self.content))
        object.__setattr__(self, "children", tuple(self.children))

        if self.properties is None:
            object.__setattr__(self, "properties", default_properties(block_type))
        elif block_type == BlockType.TO_DO and not isinstance(self.properties, ToDoProperties):
            # A to_do block always has a defined checked flag
            object.__setattr__(self, "properties", ToDoProperties())
        elif block_type != BlockType.TO_DO and isinstance(self.properties, ToDoProperties):
            raise PropertiesMismatchError(block_type.value, type(self.properties).__name__)

    @property
    def checked(self) -> bool:
        """Checkbox state; always False for blocks that are not to_do."""
        if isinstance(self.properties, ToDoProperties):
            return self.properties.checked
        return False

    @property
    def metadata(self) -> dict[str, Any]:
        """Loose attribute view of the properties ({"checked": ...} or {})."""
        return self.properties.to_dict()

    def plain_text(self) -> str:
        """Get concatenated plain text from all rich text runs."""
        return "".join(run.plain_text() for run in self.content)

    def has_children(self) -> bool:
        return len(self.children) > 0
