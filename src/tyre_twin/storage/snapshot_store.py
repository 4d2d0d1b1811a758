from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from tyre_twin.constants import STORAGE_KEY
from tyre_twin.models.tyre import SimulationParams, TyreProperties, TyreState


@dataclass(slots=True)
class SavedSession:
    params: SimulationParams
    data: TyreState
    props: TyreProperties


class SnapshotStore:
    """Local key-value JSON file; the session blob lives under a single fixed key.

    The tick loop, the HTTP handlers and the vision worker all save through one
    store, so every read-modify-write of the file holds the store lock.
    """

    def __init__(self, path: Path, key: str = STORAGE_KEY) -> None:
        self.path = path
        self.key = key
        self._lock = Lock()

    def load(self) -> Optional[SavedSession]:
        with self._lock:
            blob = self._read_all().get(self.key)
        if blob is None:
            return None
        try:
            params = SimulationParams.from_dict(blob.get("params") or {})
            props = TyreProperties.from_dict(blob.get("props") or {})
            if blob.get("data"):
                data = TyreState.from_dict(blob["data"])
            else:
                data = TyreState.initial(props)
        except (AttributeError, TypeError, ValueError) as exc:
            print(f"[STORE] Failed to load state: {exc}")
            return None
        return SavedSession(params=params, data=data, props=props)

    def save(self, snapshot: Dict[str, Any]) -> None:
        with self._lock:
            entries = self._read_all()
            entries[self.key] = snapshot
            self._write_all(entries)

    def clear(self) -> None:
        with self._lock:
            entries = self._read_all()
            if entries.pop(self.key, None) is not None:
                self._write_all(entries)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            print(f"[STORE] Failed to load state: {exc}")
            return {}
        if not isinstance(raw, dict):
            print(f"[STORE] Failed to load state: unexpected {type(raw).__name__} in {self.path}")
            return {}
        return raw

    def _write_all(self, entries: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent, prefix=f"{self.path.name}.", suffix=".tmp", delete=False
        ) as fp:
            json.dump(entries, fp, ensure_ascii=True)
            tmp_path = Path(fp.name)
        try:
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
