"""Starter block skeletons for new pages."""

from __future__ import annotations

from enum import Enum

from .blocks_factory import create_block
from .blocks_models import Block, BlockType


class TemplateKind(str, Enum):
    MEETING = "meeting"
    PROJECT = "project"
    DAILY = "daily"
    NOTES = "notes"


_SKELETONS: dict[TemplateKind, tuple[tuple[BlockType, str], ...]] = {
    TemplateKind.MEETING: (
        (BlockType.HEADING_1, "Meeting Notes"),
        (BlockType.HEADING_2, "Attendees"),
        (BlockType.BULLETED_LIST, ""),
        (BlockType.HEADING_2, "Agenda"),
        (BlockType.NUMBERED_LIST, ""),
        (BlockType.HEADING_2, "Notes"),
        (BlockType.PARAGRAPH, ""),
        (BlockType.HEADING_2, "Action Items"),
        (BlockType.TO_DO, ""),
    ),
    TemplateKind.PROJECT: (
        (BlockType.HEADING_1, "Project Plan"),
        (BlockType.HEADING_2, "Overview"),
        (BlockType.PARAGRAPH, ""),
        (BlockType.HEADING_2, "Goals"),
        (BlockType.BULLETED_LIST, ""),
        (BlockType.HEADING_2, "Timeline"),
        (BlockType.PARAGRAPH, ""),
        (BlockType.HEADING_2, "Tasks"),
        (BlockType.TO_DO, ""),
    ),
    TemplateKind.DAILY: (
        (BlockType.HEADING_1, "Daily Notes"),
        (BlockType.HEADING_2, "Today's Goals"),
        (BlockType.TO_DO, ""),
        (BlockType.HEADING_2, "Notes"),
        (BlockType.PARAGRAPH, ""),
        (BlockType.HEADING_2, "Tomorrow"),
        (BlockType.BULLETED_LIST, ""),
    ),
    TemplateKind.NOTES: (
        (BlockType.HEADING_1, "Notes"),
        (BlockType.PARAGRAPH, ""),
    ),
}


def page_template(kind: TemplateKind | str = TemplateKind.NOTES) -> list[Block]:
    """Build the starter blocks for a page template.

    Args:
        kind: Template name; anything unrecognised gets the notes template.

    Returns:
        Fresh blocks. Only ids and timestamps differ between calls.
    """
    try:
        template = TemplateKind(kind)
    except ValueError:
        template = TemplateKind.NOTES

    return [create_block(block_type, text) for block_type, text in _SKELETONS[template]]
