import logging
import os
import time
from dataclasses import dataclass

import numpy as np

from pyrhythmcomplexity.difficulty import (
    DifficultyHitObject,
    create_difficulty_hit_objects,
    evaluate_sequence,
)
from pyrhythmcomplexity.difficulty.preprocessing import IntervalKind
from pyrhythmcomplexity.exceptions import NotEnoughObjectsError
from pyrhythmcomplexity.timing import MLTiming
from pyrhythmcomplexity.utils import EXPORT_SUFFIX


@dataclass
class ComplexitySummary:
    """Aggregate view over the per-note scores of a track."""

    count: int
    peak: float
    peak_index: int
    mean: float


class RhythmComplexity:
    """High-level API access to PyRhythmComplexity's main functions."""

    def __init__(self, filepath: str):
        """Initializes the RhythmComplexity object with the provided timing file.

        Args:
            filepath (str): path to the note timing file to use.
        """
        self.mltiming = MLTiming(filepath=filepath)

    @property
    def filename(self) -> str:
        return self.mltiming.filename

    @property
    def filepath(self) -> str:
        return self.mltiming.filepath

    def ms_to_ftime(self, ms: float) -> str:
        return self.mltiming.ms_to_ftime(ms)

    def difficulty_objects(
        self,
        clock_rate: float = 1.0,
        interval: IntervalKind = "strain",
    ) -> list[DifficultyHitObject]:
        if self.mltiming.n_onsets < 2:
            raise NotEnoughObjectsError(
                f'"{self.filename}" needs at least two onsets to be evaluated.'
            )
        return create_difficulty_hit_objects(
            self.mltiming.onsets, clock_rate=clock_rate, interval=interval
        )

    def evaluate(
        self,
        clock_rate: float = 1.0,
        interval: IntervalKind = "strain",
    ) -> np.ndarray:
        """Per-note rhythm complexity, one score per onset after the first.

        Args:
            clock_rate (float, optional): playback rate. Defaults to 1.0.
            interval (str, optional): "strain" or "delta" intervals. Defaults to "strain".

        Returns:
            np.ndarray: float64 array of scores.
        """
        t0 = time.perf_counter()
        objects = self.difficulty_objects(clock_rate=clock_rate, interval=interval)
        scores = evaluate_sequence(objects)
        logging.info(
            f"Evaluated {len(scores)} notes of {self.filename} in {time.perf_counter() - t0:.3f}s"
        )
        return scores

    def evaluated_intervals(
        self,
        clock_rate: float = 1.0,
        interval: IntervalKind = "strain",
    ) -> np.ndarray:
        """Interval (ms, scaled by the clock rate) each note was evaluated with."""
        objects = self.difficulty_objects(clock_rate=clock_rate, interval=interval)
        return np.array([obj.interval for obj in objects], dtype=np.float64)

    def onset_of(self, object_index: int) -> float:
        """Onset time (ms, unscaled) of the note behind a difficulty object."""
        return float(self.mltiming.onsets[object_index + 1])

    @staticmethod
    def summary(scores: np.ndarray) -> ComplexitySummary:
        peak_index = int(np.argmax(scores))
        return ComplexitySummary(
            count=len(scores),
            peak=float(scores[peak_index]),
            peak_index=peak_index,
            mean=float(np.mean(scores)),
        )

    def export_txt(
        self,
        scores: np.ndarray,
        output_dir: str | None = None,
    ) -> str:
        if output_dir is not None:
            out_path = os.path.join(output_dir, f"{self.filename}{EXPORT_SUFFIX}")
        else:
            out_path = os.path.join(
                os.path.dirname(self.mltiming.filepath), f"{self.filename}{EXPORT_SUFFIX}"
            )

        with open(out_path, "w") as file:
            for idx, score in enumerate(scores):
                file.write(f"{self.onset_of(idx):g} {score:.6f}\n")

        return out_path
