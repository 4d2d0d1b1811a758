from __future__ import annotations

import csv
import datetime as dt
from pathlib import Path
from typing import Optional, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from tyre_twin.models.tyre import TyreState


class HistoryRecorder:
    """Exports the chart history buffer for offline analysis."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def flush(
        self,
        history: Sequence[TyreState],
        persist_parquet: bool = True,
        label: str | None = None,
    ) -> tuple[Optional[Path], Optional[Path]]:
        if not history:
            return None, None

        label = label or dt.datetime.now().strftime("%Y%m%d_%H%M%S")
        rows = [{"tick": index, **entry.to_dict()} for index, entry in enumerate(history)]
        csv_path = self.output_dir / f"history_{label}.csv"
        with csv_path.open("w", newline="", encoding="utf-8") as fp:
            writer = csv.DictWriter(fp, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)

        parquet_path: Optional[Path] = None
        if persist_parquet:
            parquet_path = self.output_dir / f"history_{label}.parquet"
            pq.write_table(pa.Table.from_pylist(rows), parquet_path)

        return csv_path, parquet_path
