from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from partial_pairs.data.missing import OptionalSample


@dataclass(frozen=True)
class PairedValues:
    paired_x: np.ndarray
    paired_y: np.ndarray
    x_only: np.ndarray
    y_only: np.ndarray


@dataclass(frozen=True)
class PairClassification:
    paired: tuple[int, ...]  # observed in both x and y
    x_only: tuple[int, ...]
    y_only: tuple[int, ...]

    @property
    def n1(self) -> int:
        return len(self.paired)

    @property
    def n2(self) -> int:
        return len(self.x_only)

    @property
    def n3(self) -> int:
        return len(self.y_only)

    def values(self, x: OptionalSample, y: OptionalSample) -> PairedValues:
        def take(sample: OptionalSample, idx: tuple[int, ...]) -> np.ndarray:
            return np.asarray([sample[i] for i in idx], dtype=np.float64)

        return PairedValues(
            paired_x=take(x, self.paired),
            paired_y=take(y, self.paired),
            x_only=take(x, self.x_only),
            y_only=take(y, self.y_only),
        )


def classify_pairs(x: OptionalSample, y: OptionalSample) -> PairClassification:
    if len(x) != len(y):
        raise ValueError("x and y must have same length")

    paired: list[int] = []
    x_only: list[int] = []
    y_only: list[int] = []
    for i, (xv, yv) in enumerate(zip(x, y)):
        if xv is not None and yv is not None:
            paired.append(i)
        elif xv is not None:
            x_only.append(i)
        elif yv is not None:
            y_only.append(i)
        # missing in both: dropped
    return PairClassification(paired=tuple(paired), x_only=tuple(x_only), y_only=tuple(y_only))
