"""
Difficulty Preprocessing - Hit objects as seen by the evaluators.

Turns a list of note onset times into difficulty hit objects: one per note
after the first, each knowing the time elapsed since the previous note and
able to walk backwards and forwards through the sequence it belongs to.

Offset convention used by ``previous``:
- ``previous(-1)`` is the object itself
- ``previous(0)`` is the object one step back
- ``previous(k)`` is the object ``k + 1`` steps back
"""

from __future__ import annotations

from typing import Literal, Protocol, Sequence, runtime_checkable

import numpy as np

from pyrhythmcomplexity.difficulty.constants import MIN_DELTA_TIME

IntervalKind = Literal["delta", "strain"]


@runtime_checkable
class TimingHistory(Protocol):
    """Backward-navigable view on a timed event, as read by the evaluators."""

    def has_predecessor(self, offset: int) -> bool:
        """Whether an event exists ``offset + 1`` steps back."""
        ...

    def interval_duration(self, offset: int) -> float:
        """Interval duration (ms) of the event ``offset + 1`` steps back."""
        ...


class DifficultyHitObject:
    """A note wrapped with the timing information difficulty evaluation needs."""

    __slots__ = (
        "index",
        "start_time",
        "delta_time",
        "_objects",
    )

    def __init__(
        self,
        index: int,
        objects: list[DifficultyHitObject],
        start_time: float,
        last_start_time: float,
        clock_rate: float,
    ) -> None:
        """
        Args:
            index: Position of this object in ``objects``
            objects: The shared list of all difficulty objects of the sequence
            start_time: Onset of the note (ms)
            last_start_time: Onset of the previous note (ms)
            clock_rate: Playback rate; times are divided by it
        """
        self.index = index
        self._objects = objects
        self.start_time = start_time / clock_rate
        self.delta_time = (start_time - last_start_time) / clock_rate

    def previous(self, backwards_index: int) -> DifficultyHitObject | None:
        idx = self.index - (backwards_index + 1)
        return self._objects[idx] if 0 <= idx < len(self._objects) else None

    def next(self, forwards_index: int) -> DifficultyHitObject | None:
        idx = self.index + (forwards_index + 1)
        return self._objects[idx] if 0 <= idx < len(self._objects) else None

    @property
    def interval(self) -> float:
        return self.delta_time

    def has_predecessor(self, offset: int) -> bool:
        return self.previous(offset) is not None

    def interval_duration(self, offset: int) -> float:
        return self.previous(offset).interval

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(index={self.index}, "
            f"start_time={self.start_time:.3f}, interval={self.interval:.3f})"
        )


class StrainHitObject(DifficultyHitObject):
    """Difficulty object whose interval is the strain time.

    Strain time is the delta time bounded below by ``MIN_DELTA_TIME`` so that
    stacked or near-simultaneous notes do not produce near-zero intervals.
    """

    __slots__ = ("strain_time",)

    def __init__(
        self,
        index: int,
        objects: list[DifficultyHitObject],
        start_time: float,
        last_start_time: float,
        clock_rate: float,
    ) -> None:
        super().__init__(index, objects, start_time, last_start_time, clock_rate)
        self.strain_time = max(self.delta_time, MIN_DELTA_TIME)

    @property
    def interval(self) -> float:
        return self.strain_time


def create_difficulty_hit_objects(
    onsets: Sequence[float] | np.ndarray,
    clock_rate: float = 1.0,
    interval: IntervalKind = "strain",
) -> list[DifficultyHitObject]:
    """
    Build the difficulty objects of a note sequence.

    The first note has no preceding interval, so it gets no difficulty object:
    ``n`` onsets give ``n - 1`` objects.

    Args:
        onsets: Note onset times in milliseconds, in playback order
        clock_rate: Playback rate (e.g. 1.5 for a sped-up track)
        interval: ``"strain"`` for clamped strain times, ``"delta"`` for raw deltas

    Returns:
        List of difficulty objects sharing one backing list
    """
    if clock_rate <= 0:
        raise ValueError(f"Clock rate must be positive, got {clock_rate}.")

    match interval:
        case "strain":
            cls = StrainHitObject
        case "delta":
            cls = DifficultyHitObject
        case _:
            raise ValueError(f'Unknown interval kind "{interval}".')

    times = [float(t) for t in onsets]
    objects: list[DifficultyHitObject] = []
    for i in range(1, len(times)):
        objects.append(cls(len(objects), objects, times[i], times[i - 1], clock_rate))

    return objects
