"""Page export and import envelopes.

An exported page is a JSON object:

    {
        "title": "...",
        "emoji": "...",
        "blocks": [<wire blocks>],
        "exported_at": "<ISO-8601>",
        "format_version": "1.0"
    }

Any change to this shape must bump FORMAT_VERSION. Importers keep the
version they read so it can be written back unchanged.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .blocks.blocks_factory import now_iso
from .blocks.blocks_models import Block
from .blocks.wire_format import from_wire_format, to_wire_format
from .errors import ValidationError
from .settings import settings

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


@dataclass(frozen=True)
class ImportedPage:
    """A page read back from an export envelope."""

    title: str
    emoji: str
    blocks: list[Block] = field(default_factory=list)
    format_version: str | None = None
    exported_at: str | None = None


def export_page(title: str, emoji: str, blocks: Sequence[Block]) -> dict[str, Any]:
    """Wrap a block forest in an export envelope.

    Args:
        title: Page title.
        emoji: Page icon.
        blocks: Root blocks of the page.

    Returns:
        Envelope dict, ready for json.dumps().
    """
    return {
        "title": title,
        "emoji": emoji,
        "blocks": to_wire_format(blocks),
        "exported_at": now_iso(),
        "format_version": FORMAT_VERSION,
    }


def export_page_json(title: str, emoji: str, blocks: Sequence[Block]) -> str:
    """Export a page as JSON text."""
    return json.dumps(
        export_page(title, emoji, blocks),
        ensure_ascii=False,
        indent=settings.export_indent or None,
    )


def import_page(data: dict[str, Any] | str) -> ImportedPage:
    """Read a page from an export envelope.

    Args:
        data: Envelope dict, or its JSON text.

    Returns:
        The imported page. A missing title or emoji takes the configured
        default and missing blocks give an empty page.

    Raises:
        ValidationError: If the JSON is invalid, the envelope is not an
            object, or a block cannot be read.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid page JSON: {e.msg}",
                field="data",
                constraint="json",
                context={"line": e.lineno, "column": e.colno},
            ) from e

    if not isinstance(data, dict):
        raise ValidationError("Page envelope must be a JSON object", field="data")

    format_version = data.get("format_version")
    if format_version is not None and format_version != FORMAT_VERSION:
        logger.warning(
            "Importing page with format_version %s (current is %s)",
            format_version,
            FORMAT_VERSION,
        )

    page = ImportedPage(
        title=data.get("title") or settings.default_title,
        emoji=data.get("emoji") or settings.default_emoji,
        blocks=from_wire_format(data.get("blocks") or []),
        format_version=format_version,
        exported_at=data.get("exported_at"),
    )
    logger.debug("Imported page %r with %d root block(s)", page.title, len(page.blocks))
    return page
