from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path
from typing import Optional, TextIO


class _TeeStream:
    """Writes to the console stream and to the session log file."""

    def __init__(self, original: TextIO, log_handle: TextIO) -> None:
        self.original = original
        self._log = log_handle

    def write(self, data: str) -> int:
        self.original.write(data)
        if not self._log.closed:
            self._log.write(data)
        return len(data)

    def flush(self) -> None:
        self.original.flush()
        if not self._log.closed:
            self._log.flush()

    def isatty(self) -> bool:
        return bool(getattr(self.original, "isatty", lambda: False)())

    @property
    def encoding(self) -> str | None:
        return getattr(self.original, "encoding", None)


_log_handle: Optional[TextIO] = None


def configure_runtime_log(log_file: Path, banner: str = "TyreTwin session") -> Path:
    """Mirror stdout/stderr into ``log_file`` so the tagged prints survive the session."""
    global _log_handle

    log_path = log_file.expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    if _log_handle is None or _log_handle.closed:
        _log_handle = log_path.open("a", encoding="utf-8", buffering=1)
    _log_handle.write(f"\n========== {banner} started {dt.datetime.now().isoformat(timespec='seconds')} ==========\n")

    if not isinstance(sys.stdout, _TeeStream):
        sys.stdout = _TeeStream(sys.stdout, _log_handle)  # type: ignore[assignment]
    if not isinstance(sys.stderr, _TeeStream):
        sys.stderr = _TeeStream(sys.stderr, _log_handle)  # type: ignore[assignment]
    return log_path


def restore_streams() -> None:
    """Undo :func:`configure_runtime_log` and close the log file."""
    global _log_handle

    if isinstance(sys.stdout, _TeeStream):
        sys.stdout = sys.stdout.original  # type: ignore[assignment]
    if isinstance(sys.stderr, _TeeStream):
        sys.stderr = sys.stderr.original  # type: ignore[assignment]
    if _log_handle is not None and not _log_handle.closed:
        _log_handle.close()
    _log_handle = None
