# recorder.py
"""
Sinks for the sampled trajectory.

A recorder receives the species names once, then (t, x) samples in
increasing time order, then ``finish()``.
"""

from __future__ import annotations

import os
from typing import List, Protocol, Sequence

import numpy as np
import pandas as pd


class OutputSinkUnavailable(OSError):
    """The output file could not be opened; raised before any integration work."""


class Recorder(Protocol):
    def begin(self, names: Sequence[str]) -> None: ...

    def record(self, t: float, x: np.ndarray) -> None: ...

    def finish(self) -> None: ...


class TrajectoryRecorder:
    """Keeps samples in memory; ``to_dataframe()`` gives a t-first table."""

    def __init__(self):
        self.names: List[str] = []
        self.times: List[float] = []
        self.states: List[np.ndarray] = []

    def begin(self, names: Sequence[str]) -> None:
        self.names = list(names)

    def record(self, t: float, x: np.ndarray) -> None:
        self.times.append(float(t))
        self.states.append(np.array(x, dtype=float, copy=True))

    def finish(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self.times)

    def to_dataframe(self) -> pd.DataFrame:
        n = len(self.names) if self.names else (len(self.states[0]) if self.states else 0)
        names = self.names or [f"x{i}" for i in range(n)]
        data = np.vstack(self.states) if self.states else np.zeros((0, len(names)))
        df = pd.DataFrame(data, columns=names)
        df.insert(0, "t", np.asarray(self.times, dtype=float))
        return df


class CsvRecorder:
    """
    Comma-separated trajectory file: one header row (``t`` then species
    names) and one row per sample. Rows are buffered and written through
    pandas in time order.

    Use as a context manager; the file is flushed and closed on every exit
    path, also when the integration fails.
    """

    def __init__(self, path, float_format: str = "%.10g", buffer_size: int = 500):
        self.path = os.fspath(path)
        self.float_format = float_format
        self.buffer_size = int(buffer_size)
        self._fh = None
        self._names: List[str] = []
        self._rows: List[np.ndarray] = []
        self.n_samples = 0

    def open(self) -> "CsvRecorder":
        try:
            self._fh = open(self.path, "w", newline="")
        except OSError as e:
            raise OutputSinkUnavailable(f"unable to open output file '{self.path}': {e}") from e
        return self

    def __enter__(self) -> "CsvRecorder":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def begin(self, names: Sequence[str]) -> None:
        if self._fh is None:
            self.open()
        self._names = list(names)
        self._fh.write(",".join(["t"] + self._names) + "\n")

    def record(self, t: float, x: np.ndarray) -> None:
        row = np.empty(len(x) + 1, dtype=float)
        row[0] = t
        row[1:] = x
        self._rows.append(row)
        self.n_samples += 1
        if len(self._rows) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        if self._fh is None:
            return
        if self._rows:
            pd.DataFrame(np.vstack(self._rows)).to_csv(
                self._fh,
                header=False,
                index=False,
                float_format=self.float_format,
                lineterminator="\n",
            )
            self._rows = []
        self._fh.flush()

    def finish(self) -> None:
        self.flush()

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            self.flush()
        finally:
            self._fh.close()
            self._fh = None


def load_trajectory(path) -> pd.DataFrame:
    """Read a trajectory written by CsvRecorder."""
    return pd.read_csv(path)

