"""One JSON array of records per file, shared by the JSON repositories.

Writes go to a temporary sibling that is then renamed over the store, so
an interrupted write leaves the previous contents intact.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from pathlib import Path


class JsonRecordFile:

    def __init__(self, path: Path) -> None:
        self.path = path
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def find(self, key: str, value: object) -> dict | None:
        for raw in self.load():
            if raw[key] == value:
                return raw
        return None

    def upsert(self, key: str, record: dict) -> None:
        """Replace the record with the same *key* value, or append it."""
        records = self.load()
        for i, raw in enumerate(records):
            if raw[key] == record[key]:
                records[i] = record
                break
        else:
            records.append(record)
        self.persist(records)

    def modify(
        self, key: str, value: object, change: Callable[[dict], dict | None]
    ) -> bool:
        """Rewrite the record whose *key* equals *value*, from one read.

        *change* returns the replacement record, or None to leave the file
        untouched.  Returns whether a record was rewritten.
        """
        records = self.load()
        for i, raw in enumerate(records):
            if raw[key] != value:
                continue
            updated = change(raw)
            if updated is None:
                return False
            records[i] = updated
            self.persist(records)
            return True
        return False

    def persist(self, records: list[dict]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2)
                fh.write("\n")
            os.replace(tmp_name, self.path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
