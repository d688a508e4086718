"""Tests for page_export.py - export/import envelopes."""

from __future__ import annotations

import json
import logging

import pytest

from quire.blocks.wire_format import to_wire_format
from quire.errors import ValidationError
from quire.page_export import FORMAT_VERSION, ImportedPage, export_page, export_page_json, import_page


class TestExportPage:
    """Test the export envelope."""

    def test_envelope_fields(self, sample_forest) -> None:
        envelope = export_page("My Page", "\U0001F680", sample_forest)

        assert envelope["title"] == "My Page"
        assert envelope["emoji"] == "\U0001F680"
        assert envelope["blocks"] == to_wire_format(sample_forest)
        assert envelope["format_version"] == "1.0" == FORMAT_VERSION
        assert "T" in envelope["exported_at"]

    def test_json_text(self, sample_forest) -> None:
        text = export_page_json("My Page", "\U0001F680", sample_forest)

        assert "\U0001F680" in text
        assert json.loads(text)["blocks"][0]["id"] == "h"


class TestImportPage:
    """Test reading envelopes back."""

    def test_round_trip(self, sample_forest) -> None:
        page = import_page(export_page("Doc", "x", sample_forest))

        assert page.title == "Doc"
        assert page.emoji == "x"
        assert page.blocks == sample_forest
        assert page.format_version == FORMAT_VERSION

    def test_round_trip_json_text(self, sample_forest) -> None:
        page = import_page(export_page_json("Doc", "x", sample_forest))

        assert page.blocks == sample_forest

    def test_defaults(self) -> None:
        page = import_page({})

        assert page == ImportedPage(title="Untitled", emoji="\U0001F4DD", blocks=[])

    def test_empty_title_takes_default(self) -> None:
        assert import_page({"title": "", "blocks": None}).title == "Untitled"

    def test_format_version_carried_through(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="quire"):
            page = import_page({"title": "Later", "format_version": "2.0", "blocks": []})

        assert page.format_version == "2.0"
        assert "format_version 2.0" in caplog.text

    def test_exported_at_kept(self) -> None:
        page = import_page({"exported_at": "2024-05-01T10:00:00+00:00"})

        assert page.exported_at == "2024-05-01T10:00:00+00:00"

    def test_invalid_json(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            import_page("{not json")

        assert exc_info.value.constraint == "json"

    def test_non_object(self) -> None:
        with pytest.raises(ValidationError):
            import_page("[1, 2]")

    def test_bad_block(self) -> None:
        with pytest.raises(ValidationError):
            import_page({"blocks": [{"type": "paragraph"}]})
