"""JSON file sink for exporting reports to files."""

import json
import logging
from pathlib import Path
from typing import Any

from microlend.exceptions import SinkError
from microlend.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output records to JSON files, one file per entity type."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"
        data = [to_dict(record) for record in records]
        self._dump(file_path, data)
        self._counts[entity_type] = len(records)
        return file_path

    def write_document(self, name: str, document: Any) -> Path:
        """Write a single record (e.g. a summary) to ``<name>.json``."""
        file_path = self.output_dir / f"{name}.json"
        self._dump(file_path, to_dict(document))
        self._counts[name] = 1
        return file_path

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
        except OSError as e:
            raise SinkError(f"Failed to write {file_path}: {e}") from e
