# -----------------------------------------------------------------------------
#  statistics.py
#  Running sample statistics (Welford's online algorithm)
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, MutableSequence
from math import sqrt
from numbers import Real


def _as_number(x):
    if isinstance(x, bool) or not isinstance(x, Real):
        raise TypeError(f"Sample values must be real numbers, got {type(x).__name__}.")
    return x


class Sample(MutableSequence):
    """
    A list of observations whose count, mean and sum of squared deviations
    (M2) are updated on every insertion, replacement and removal, so the
    moments are O(1) to query and always match the current contents.

        >>> s = Sample([2, 2, 2, 4, 3, 3, 3, 3, 4, 4])
        >>> s.median(), s.mode(), round(s.population_variance(), 12)
        (3.0, 3, 0.6)
    """

    __slots__ = ("_data", "_m2", "_mean", "_n")

    def __init__(self, values: Iterable[float] = ()):
        self._data: list = []
        self._n = 0
        self._mean = 0.0
        self._m2 = 0.0
        self.extend(values)

    # --- Welford bookkeeping ---

    def _record(self, x) -> None:
        self._n += 1
        delta = x - self._mean
        self._mean += delta / self._n
        self._m2 += delta * (x - self._mean)

    def _forget(self, x) -> None:
        if self._n == 1:
            self._n, self._mean, self._m2 = 0, 0.0, 0.0
            return
        old_mean = self._mean
        self._mean = (self._n * old_mean - x) / (self._n - 1)
        self._m2 -= (x - old_mean) * (x - self._mean)
        self._n -= 1

    # --- MutableSequence protocol ---

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            new = [_as_number(v) for v in value]
            old = self._data[index]
            self._data[index] = new
            for x in old:
                self._forget(x)
            for x in new:
                self._record(x)
        else:
            value = _as_number(value)
            old = self._data[index]
            self._data[index] = value
            self._forget(old)
            self._record(value)

    def __delitem__(self, index) -> None:
        old = self._data[index]
        del self._data[index]
        for x in old if isinstance(index, slice) else (old,):
            self._forget(x)

    def __len__(self) -> int:
        return len(self._data)

    def insert(self, index: int, value) -> None:
        value = _as_number(value)
        self._data.insert(index, value)
        self._record(value)

    def clear(self) -> None:
        self._data.clear()
        self._n, self._mean, self._m2 = 0, 0.0, 0.0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sample):
            return self._data == other._data
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Sample({self._data!r})"

    # --- statistics ---

    def mean(self) -> float | None:
        return self._mean if self._n else None

    def population_variance(self) -> float | None:
        if not self._n:
            return None
        return max(self._m2, 0.0) / self._n

    def population_stddev(self) -> float | None:
        var = self.population_variance()
        return None if var is None else sqrt(var)

    def sample_variance(self) -> float | None:
        """Unbiased (n − 1) variance; None with fewer than two observations."""
        if self._n < 2:  # noqa: PLR2004
            return None
        return max(self._m2, 0.0) / (self._n - 1)

    def sample_stddev(self) -> float | None:
        var = self.sample_variance()
        return None if var is None else sqrt(var)

    def median(self) -> float | None:
        if not self._data:
            return None
        ordered = sorted(self._data)
        mid = len(ordered) // 2
        if len(ordered) % 2:
            return float(ordered[mid])
        return (ordered[mid - 1] + ordered[mid]) / 2

    def mode(self):
        """Most frequent value; among equally frequent ones, the one seen last."""
        if not self._data:
            return None
        counts = Counter(self._data)
        # max() keeps the first maximum it meets, i.e. the last one seen
        return max(reversed(self._data), key=counts.__getitem__)
