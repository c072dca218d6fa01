import logging
from pathlib import Path

import numpy as np

from pyrhythmcomplexity.exceptions import TimingLoadError


class MLTiming:
    """Wrapper class for loading note timing files for PyRhythmComplexity.

    A timing file lists note onset times in milliseconds, one per line
    (first whitespace-separated column) or comma separated for ``.csv`` files.
    Lines starting with ``#`` are ignored.
    """

    __slots__ = (
        "filepath",
        "filename",
        "onsets",
        "n_onsets",
        "length",
    )

    def __init__(self, filepath: str | Path) -> None:
        """Load and validate onset times from filepath."""
        path = Path(filepath)
        delimiter = "," if path.suffix.lower() == ".csv" else None

        try:
            onsets = np.loadtxt(
                path,
                comments="#",
                delimiter=delimiter,
                usecols=0,
                ndmin=1,
                dtype=np.float64,
            )
        except (OSError, ValueError) as e:
            raise TimingLoadError(
                f"{path.name} could not be loaded. Invalid timing data or unsupported format."
            ) from e

        if onsets.size == 0:
            raise TimingLoadError(f'No onset times could be loaded from "{path}".')

        if not np.all(np.isfinite(onsets)):
            raise TimingLoadError(f'"{path}" contains non-finite onset times.')

        if np.any(np.diff(onsets) <= 0):
            raise TimingLoadError(f'Onset times in "{path}" are not strictly increasing.')

        self.filepath = str(path)
        self.filename = path.name
        self.onsets = onsets
        self.n_onsets = int(onsets.size)
        self.length = float(onsets[-1] - onsets[0])

        logging.info(f'Loaded {self.n_onsets} onsets from "{self.filename}"')

    def intervals(self) -> np.ndarray:
        """Time between consecutive onsets (ms)."""
        return np.diff(self.onsets)

    def ms_to_seconds(self, ms: float) -> float:
        return ms / 1000.0

    def ms_to_ftime(self, ms: float) -> str:
        seconds = self.ms_to_seconds(ms)
        return f"{int(seconds // 60):02d}:{seconds % 60:06.3f}"
