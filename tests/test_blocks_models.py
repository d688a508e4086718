"""Tests for blocks_models.py and blocks_factory.py."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace

import pytest

from quire.blocks.blocks_factory import create_block, new_block_id
from quire.blocks.blocks_models import (
    COLORS,
    Annotations,
    Block,
    BlockProperties,
    BlockType,
    RichText,
    ToDoProperties,
    default_properties,
    properties_from_dict,
)
from quire.errors import PropertiesMismatchError, UnknownBlockTypeError, ValidationError


class TestBlockType:
    """Test block type coercion."""

    def test_nine_types(self) -> None:
        assert len(list(BlockType)) == 9

    def test_parse_string(self) -> None:
        assert BlockType.parse("bulleted_list_item") is BlockType.BULLETED_LIST

    def test_parse_unknown(self) -> None:
        with pytest.raises(UnknownBlockTypeError) as exc_info:
            BlockType.parse("divider")

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.field == "type"


class TestCreateBlock:
    """Test the block factory."""

    def test_todo_defaults_unchecked(self) -> None:
        block = create_block("to_do")

        assert block.checked is False
        assert block.metadata == {"checked": False}
        assert isinstance(block.properties, ToDoProperties)

    def test_paragraph_has_no_checked(self) -> None:
        block = create_block("paragraph")

        assert block.metadata == {}
        assert "checked" not in block.metadata
        assert block.checked is False

    def test_content_parsed(self) -> None:
        block = create_block(BlockType.HEADING_2, "A **bold** title")

        assert [run.content for run in block.content] == ["A ", "bold", " title"]
        assert block.content[1].annotations.bold

    def test_empty_text_has_one_run(self) -> None:
        block = create_block("paragraph")

        assert len(block.content) == 1
        assert block.plain_text() == ""

    def test_plain_text_reconstructs_input(self) -> None:
        """Concatenated runs give back the text used to build the block."""
        text = "Just some ordinary words"

        assert create_block("paragraph", text).plain_text() == text

    def test_no_children(self) -> None:
        block = create_block("toggle", "Toggle")

        assert block.children == ()
        assert not block.has_children()

    def test_timestamps_equal_at_creation(self) -> None:
        block = create_block("code", "x = 1")

        assert block.created_time
        assert block.created_time == block.last_edited_time

    def test_unique_ids(self) -> None:
        ids = {create_block("paragraph").id for _ in range(1000)}

        assert len(ids) == 1000

    def test_id_prefix(self) -> None:
        assert create_block("paragraph").id.startswith("block-")
        assert new_block_id("span").startswith("span-")

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownBlockTypeError):
            create_block("callout", "nope")


class TestBlock:
    """Test Block value semantics."""

    def test_frozen(self) -> None:
        block = create_block("paragraph", "x")

        with pytest.raises(FrozenInstanceError):
            block.type = BlockType.CODE  # type: ignore[misc]

    def test_lists_become_tuples(self) -> None:
        child = Block(id="c", type=BlockType.PARAGRAPH)
        block = Block(
            id="p",
            type="paragraph",
            content=[RichText(content="a")],
            children=[child],
        )

        assert block.type is BlockType.PARAGRAPH
        assert block.content == (RichText(content="a"),)
        assert block.children == (child,)

    def test_structural_equality(self) -> None:
        a = Block(id="x", type=BlockType.TO_DO, content=(RichText(content="t"),))
        b = Block(id="x", type="to_do", content=[RichText(content="t")])

        assert a == b

    def test_todo_always_has_checked(self) -> None:
        block = Block(id="x", type=BlockType.TO_DO)

        assert block.properties == ToDoProperties(checked=False)

    def test_checked_on_non_todo_rejected(self) -> None:
        with pytest.raises(PropertiesMismatchError):
            Block(id="x", type=BlockType.HEADING_1, properties=ToDoProperties(checked=True))

    def test_replace_type_to_todo(self) -> None:
        block = replace(create_block("paragraph", "x"), type=BlockType.TO_DO)

        assert block.checked is False


class TestRichText:
    """Test rich text runs and annotations."""

    def test_missing_annotations_are_default(self) -> None:
        run = RichText(content="a", annotations=None)  # type: ignore[arg-type]

        assert run.annotations == Annotations()
        assert run == RichText(content="a")

    def test_annotations_from_partial_dict(self) -> None:
        annotations = Annotations.from_dict({"bold": True})

        assert annotations == Annotations(bold=True)
        assert annotations.color == "default"

    def test_active_flags(self) -> None:
        annotations = Annotations(bold=True, underline=True, color="red")

        assert annotations.active() == ["bold", "underline"]
        assert not annotations.is_plain()

    def test_to_dict_shape(self) -> None:
        run = RichText(content="go", link="https://example.com")

        assert run.to_dict() == {
            "type": "text",
            "text": {"content": "go", "link": "https://example.com"},
            "annotations": {
                "bold": False,
                "italic": False,
                "strikethrough": False,
                "underline": False,
                "code": False,
                "color": "default",
            },
        }

    def test_from_dict_tolerates_missing_fields(self) -> None:
        assert RichText.from_dict({}) == RichText(content="")

    def test_palette_colors_accepted(self) -> None:
        for color in COLORS:
            assert Annotations(color=color).color == color

    def test_unknown_color_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Annotations(color="neon")

        assert exc_info.value.constraint == "color"
        assert exc_info.value.field == "color"

    def test_unknown_color_rejected_from_dict(self) -> None:
        with pytest.raises(ValidationError):
            Annotations.from_dict({"bold": True, "color": "neon"})

    def test_from_dict_rejects_non_object(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RichText.from_dict("plain")  # type: ignore[arg-type]

        assert exc_info.value.field == "rich_text"


class TestProperties:
    """Test the per-type properties variant."""

    def test_default_properties(self) -> None:
        assert default_properties("to_do") == ToDoProperties()
        assert default_properties(BlockType.CODE) == BlockProperties()

    def test_from_dict_drops_irrelevant_keys(self) -> None:
        assert properties_from_dict("paragraph", {"checked": True}) == BlockProperties()
        assert properties_from_dict("to_do", {"checked": True}) == ToDoProperties(checked=True)
        assert properties_from_dict("to_do", None) == ToDoProperties(checked=False)
