from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import pytest

from quire.blocks.blocks_models import Block, BlockType, RichText, ToDoProperties, default_properties
from quire.blocks.inline_parser import parse_inline

FIXED_TIME = "2024-01-01T00:00:00+00:00"

# Well past the default recursion limit
DEEP_CHAIN_DEPTH = 5000


def _make_block(
    block_id: str,
    block_type: BlockType | str,
    text: str = "",
    children: tuple[Block, ...] = (),
    checked: bool | None = None,
) -> Block:
    block_type = BlockType.parse(block_type)
    if checked is not None:
        properties = ToDoProperties(checked=checked)
    else:
        properties = default_properties(block_type)
    return Block(
        id=block_id,
        type=block_type,
        content=tuple(parse_inline(text)),
        children=children,
        properties=properties,
        created_time=FIXED_TIME,
        last_edited_time=FIXED_TIME,
    )


@pytest.fixture
def make_block() -> Callable[..., Block]:
    """Build blocks with fixed ids and timestamps."""
    return _make_block


@pytest.fixture
def sample_forest() -> list[Block]:
    """A small nested document.

    Pre-order: h, p, c1, d, t
    """
    deep = _make_block("d", BlockType.TO_DO, "deep task", checked=True)
    child = _make_block("c1", BlockType.BULLETED_LIST, "child one", children=(deep,))
    return [
        _make_block("h", BlockType.HEADING_1, "Title"),
        _make_block("p", BlockType.PARAGRAPH, "Hello **world**", children=(child,)),
        _make_block("t", BlockType.TO_DO, "top task"),
    ]


@pytest.fixture
def one_of_each() -> list[Block]:
    """One block of every block type."""
    return [
        _make_block(f"b-{block_type.value}", block_type, f"{block_type.value} text")
        for block_type in BlockType
    ]


@pytest.fixture
def deep_chain() -> list[Block]:
    """One root with DEEP_CHAIN_DEPTH nested levels: n0 > n1 > ... > n4999.

    Every level reads "level" except the innermost, which reads "leaf".
    """
    block = Block(
        id=f"n{DEEP_CHAIN_DEPTH - 1}",
        type=BlockType.PARAGRAPH,
        content=(RichText(content="leaf"),),
    )
    for depth in range(DEEP_CHAIN_DEPTH - 2, -1, -1):
        block = Block(
            id=f"n{depth}",
            type=BlockType.PARAGRAPH,
            content=(RichText(content="level"),),
            children=(block,),
        )
    return [block]


@pytest.fixture
def quire_logger() -> Iterator[logging.Logger]:
    """Package logger, restored after the test."""
    logger = logging.getLogger("quire")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
