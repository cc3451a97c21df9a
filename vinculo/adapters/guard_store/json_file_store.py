"""JSON file guard store — implements GuardStorePort.

The whole mirror is one structured record::

    {"version": 1, "completed": {"profiles": {"abc123": true}, "family-profiles": {}}}

Every operation re-reads the file, so several processes sharing the path see
each other's markers on their next query (there is no live notification).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from vinculo.application.ports.guard_store import GuardStorePort
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey

logger = logging.getLogger(__name__)

RECORD_VERSION = 1


class JsonFileGuardStore(GuardStorePort):
    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def is_completed(self, key: ResourceKey) -> bool:
        completed = self._read()
        return bool(completed.get(key.kind.value, {}).get(key.slug, False))

    def mark_completed(self, key: ResourceKey) -> None:
        completed = self._read()
        completed.setdefault(key.kind.value, {})[key.slug] = True
        self._write(completed)

    def remove(self, key: ResourceKey) -> None:
        completed = self._read()
        if completed.get(key.kind.value, {}).pop(key.slug, None) is not None:
            self._write(completed)

    def clear(self, kind: ResourceKind | None = None) -> None:
        if kind is None:
            self._write({})
            return
        completed = self._read()
        completed.pop(kind.value, None)
        self._write(completed)

    def entries(self) -> dict[str, list[str]]:
        """Completed slugs grouped by resource kind."""
        return {
            kind: sorted(slug for slug, done in slugs.items() if done)
            for kind, slugs in self._read().items()
        }

    def _read(self) -> dict[str, dict[str, bool]]:
        try:
            if not self._path.exists():
                return {}
            record = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable visit guard record at %s; treating as empty", self._path)
            return {}

        completed = record.get("completed") if isinstance(record, dict) else None
        if not isinstance(completed, dict):
            logger.warning("Malformed visit guard record at %s; treating as empty", self._path)
            return {}
        return {k: dict(v) for k, v in completed.items() if isinstance(v, dict)}

    def _write(self, completed: dict[str, dict[str, bool]]) -> None:
        record = {"version": RECORD_VERSION, "completed": completed}
        tmp_path: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Readers only ever see a complete record.
            fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=".visit_guard.")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(record, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError:
            logger.exception("Failed to write visit guard record to %s", self._path)
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
