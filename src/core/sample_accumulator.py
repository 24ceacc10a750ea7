# src/core/sample_accumulator.py

"""Per-cycle window of price samples."""

import math


class SampleAccumulator:
    """Collects the samples of one polling cycle.

    The window starts empty, takes any number of ``add`` calls, is
    reduced to its minimum, then ``reset`` for the next cycle.
    """

    def __init__(self) -> None:
        self._samples: list[float] = []

    def __len__(self) -> int:
        return len(self._samples)

    def add(self, value: float) -> None:
        """Append a sample, ``nan`` included."""
        self._samples.append(value)

    def reduce(self) -> float:
        """Minimum of the usable samples.

        ``nan`` samples never win the comparison, so they only show up
        in the result when nothing else was added. An empty window
        reduces to ``inf``.
        """
        if not self._samples:
            return math.inf
        usable = [v for v in self._samples if not math.isnan(v)]
        if not usable:
            return math.nan
        return min(usable)

    def reset(self) -> None:
        """Empty the window."""
        self._samples.clear()
