from __future__ import annotations

import json
import threading

from tyre_twin.constants import STORAGE_KEY
from tyre_twin.models.tyre import RubberCompound, SimulationParams, TyreHealth, TyreProperties, TyreState
from tyre_twin.storage.snapshot_store import SnapshotStore


def _snapshot() -> dict:
    return {
        "params": SimulationParams(temperature=35.0, is_moving=True, speed=90.0).to_dict(),
        "data": TyreState(wax_reserve=42.0, state=TyreHealth.WARNING, rul=321).to_dict(),
        "props": TyreProperties(rubber_compound=RubberCompound.HARD).to_dict(),
    }


def test_missing_file_loads_nothing(tmp_path) -> None:
    assert SnapshotStore(tmp_path / "none.json").load() is None


def test_save_then_load_restores_session(tmp_path) -> None:
    store = SnapshotStore(tmp_path / "storage.json")
    store.save(_snapshot())

    saved = store.load()

    assert saved is not None
    assert saved.params.speed == 90.0
    assert saved.params.is_moving is True
    assert saved.data.wax_reserve == 42.0
    assert saved.data.state is TyreHealth.WARNING
    assert saved.data.rul == 321
    assert saved.props.rubber_compound is RubberCompound.HARD


def test_blob_lives_under_fixed_key_beside_other_entries(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"otherApp": {"x": 1}}), encoding="utf-8")
    store = SnapshotStore(path)

    store.save(_snapshot())
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert set(raw) == {"otherApp", STORAGE_KEY}

    store.clear()
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw == {"otherApp": {"x": 1}}
    assert store.load() is None


def test_corrupt_file_falls_back_to_defaults(tmp_path, capsys) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    store = SnapshotStore(path)

    assert store.load() is None
    assert "[STORE] Failed to load state" in capsys.readouterr().out

    store.save(_snapshot())
    assert store.load() is not None


def test_invalid_blob_falls_back_to_defaults(tmp_path, capsys) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({STORAGE_KEY: {"data": {"waxReserve": "lots"}}}), encoding="utf-8")
    assert SnapshotStore(path).load() is None
    assert "[STORE] Failed to load state" in capsys.readouterr().out


def test_blob_without_props_uses_defaults(tmp_path) -> None:
    path = tmp_path / "storage.json"
    blob = _snapshot()
    del blob["props"]
    path.write_text(json.dumps({STORAGE_KEY: blob}), encoding="utf-8")
    saved = SnapshotStore(path).load()
    assert saved is not None
    assert saved.props == TyreProperties()


def test_concurrent_saves_keep_the_file_valid(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"otherApp": {"keep": True}}), encoding="utf-8")
    store = SnapshotStore(path)
    errors: list[BaseException] = []
    corrupt_reads: list[int] = []

    def writer(width: int) -> None:
        snapshot = {**_snapshot(), "note": "x" * width}
        try:
            for _ in range(150):
                store.save(snapshot)
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    def reader() -> None:
        for _ in range(150):
            if store.load() is None:
                corrupt_reads.append(1)

    store.save(_snapshot())
    threads = [threading.Thread(target=writer, args=(width,)) for width in (0, 400, 1200)]
    threads.append(threading.Thread(target=reader))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert corrupt_reads == []
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["otherApp"] == {"keep": True}
    assert raw[STORAGE_KEY]["note"] in {"", "x" * 400, "x" * 1200}
    assert sorted(p.name for p in tmp_path.iterdir()) == ["storage.json"]
