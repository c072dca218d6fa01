class IntervalHistory:
    """Timing history backed by a plain list of intervals in playback order."""

    def __init__(self, intervals, index=None):
        self.intervals = list(intervals)
        self.index = len(self.intervals) - 1 if index is None else index

    def has_predecessor(self, offset):
        idx = self.index - (offset + 1)
        return 0 <= idx < len(self.intervals)

    def interval_duration(self, offset):
        return self.intervals[self.index - (offset + 1)]
