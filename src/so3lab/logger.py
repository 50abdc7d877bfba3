"""
CSV logging for sampled rotation loops.

Buffers rows in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

from so3lab.topology.lift import lift_path
from so3lab.topology.loops import LoopPath
from so3lab.utils.validation import validate_positive

FIELD_COMPONENTS = {
    "p": ["x", "y", "z"],
    "q": ["w", "x", "y", "z"],
    "lift": ["w", "x", "y", "z"],
    "jump": [],
}


class PathLogger:
    """
    Buffered CSV logger for LoopPath samples.

    Every call to :meth:`log` appends one row per sample of a loop, tagged
    with a run counter, so a loop regenerated after each parameter change
    can be traced in one file.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing.
    fields : list[str] | None
        Per-sample fields. Default: ["p", "q", "lift", "jump"]
        Options: "p" (ball point), "q" (unwrapped quaternion),
                 "lift" (SU(2) lift of the ball path), "jump" (1 at jump indices)

    Examples
    --------
    >>> with PathLogger("loops.csv") as logger:
    ...     logger.log(generate_loop((1, 0, 0), 2 * math.pi))
    ...     logger.log(generate_loop((1, 0, 0), 4 * math.pi))
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        validate_positive(buffer_size, "buffer_size")
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else ["p", "q", "lift", "jump"]

        invalid = set(self.fields) - set(FIELD_COMPONENTS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(FIELD_COMPONENTS)}"
            )

        self.runs = 0
        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None
        self._header_written = False

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> PathLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    def header(self) -> list[str]:
        hdr = ["run", "total_angle", "t"]
        for field in self.fields:
            components = FIELD_COMPONENTS[field]
            if components:
                hdr.extend(f"{field}_{c}" for c in components)
            else:
                hdr.append(field)
        return hdr

    def _write_header(self) -> None:
        self._writer.writerow(self.header())
        self._file.flush()
        self._header_written = True

    def log(self, loop: LoopPath) -> None:
        """
        Buffer every sample of ``loop``.

        Opens the file on first use when not used as a context manager, and
        writes to disk whenever the buffer fills.
        """
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header()

        lifted = lift_path(loop.points) if "lift" in self.fields else None
        jumps = set(loop.jump_indices)

        for i, t in enumerate(loop.parameters):
            row = [str(self.runs), f"{loop.total_angle:.10e}", f"{t:.10f}"]
            for field in self.fields:
                if field == "p":
                    p = loop.points[i]
                    row.extend(f"{v:.10e}" for v in (p.x, p.y, p.z))
                elif field == "q":
                    row.extend(f"{v:.10e}" for v in loop.quaternions[i].to_s3())
                elif field == "lift":
                    row.extend(f"{v:.10e}" for v in lifted[i].to_s3())
                elif field == "jump":
                    row.append("1" if i in jumps else "0")
            self._buffer.append(row)

            if len(self._buffer) >= self.buffer_size:
                self.flush()

        self.runs += 1

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
