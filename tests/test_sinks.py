"""Tests for the JSON file sink."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from microlend.calculators.profit import ProfitSummary
from microlend.exceptions import SinkError
from microlend.sinks import JsonFileSink


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_write_batch(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path / "out")
        path = sink.write_batch("rows", [{"amount": Decimal("1.00")}, {"amount": Decimal("2.50")}])

        assert path == tmp_path / "out" / "rows.json"
        assert json.loads(path.read_text()) == [{"amount": "1.00"}, {"amount": "2.50"}]
        assert sink.counts == {"rows": 2}

    def test_write_document(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path, pretty=True)
        path = sink.write_document(
            "overview", ProfitSummary(Decimal("1"), Decimal("2"), Decimal("3"), Decimal("-4"))
        )

        text = path.read_text()
        assert "\n  " in text
        assert json.loads(text)["profit"] == "-4"

    def test_close_logs_counts(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        sink = JsonFileSink(tmp_path)
        sink.write_batch("rows", [])

        with caplog.at_level("INFO", logger="microlend"):
            sink.close()

        assert "rows: 0 records" in caplog.text

    def test_write_failure(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        (tmp_path / "rows.json").mkdir()

        with pytest.raises(SinkError, match="rows.json"):
            sink.write_batch("rows", [])
