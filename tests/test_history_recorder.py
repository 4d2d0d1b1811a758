from __future__ import annotations

import csv

import pyarrow.parquet as pq

from tyre_twin.models.tyre import TyreState
from tyre_twin.storage.history_recorder import HistoryRecorder


def test_empty_history_writes_nothing(tmp_path) -> None:
    recorder = HistoryRecorder(tmp_path / "out")
    assert recorder.flush([]) == (None, None)
    assert list((tmp_path / "out").iterdir()) == []


def test_flush_writes_csv_and_parquet(tmp_path) -> None:
    history = [TyreState(mileage=float(i), tread_depth=8.0 - i * 0.01) for i in range(3)]
    csv_path, parquet_path = HistoryRecorder(tmp_path).flush(history, label="run1")

    assert csv_path == tmp_path / "history_run1.csv"
    with csv_path.open(newline="", encoding="utf-8") as fp:
        rows = list(csv.DictReader(fp))
    assert [row["tick"] for row in rows] == ["0", "1", "2"]
    assert rows[0]["state"] == "ACTIVE"

    table = pq.read_table(parquet_path)
    assert table.num_rows == 3
    assert table.column("mileage").to_pylist() == [0.0, 1.0, 2.0]


def test_parquet_can_be_skipped(tmp_path) -> None:
    csv_path, parquet_path = HistoryRecorder(tmp_path).flush([TyreState()], persist_parquet=False, label="x")
    assert csv_path is not None and csv_path.exists()
    assert parquet_path is None
