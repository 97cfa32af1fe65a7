"""Publication-cycle arithmetic for dataset descriptors."""

from __future__ import annotations

import dataclasses
import datetime as dt
from typing import TYPE_CHECKING, Callable, Iterator, Sequence, TypeVar

if TYPE_CHECKING:
    from rapidrefresh.models.base import BaseDataset

D = TypeVar("D", bound="BaseDataset")

RAP_CYCLES: tuple[str, ...] = ("t00z", "t06z", "t12z", "t18z")
GFS_CYCLES: tuple[str, ...] = ("00", "06", "12", "18")
HRRR_CYCLES: tuple[str, ...] = tuple(f"{hour:02d}" for hour in range(24))

ONE_DAY = dt.timedelta(days=1)


def _advance_sequence(sequence: Sequence[str]) -> Callable[[str], tuple[str, int]]:
    def advance(cycle: str) -> tuple[str, int]:
        try:
            idx = sequence.index(cycle)
        except ValueError:
            raise ValueError(f"Unknown cycle {cycle!r}; expected one of {', '.join(sequence)}") from None
        if idx + 1 == len(sequence):
            return sequence[0], 1
        return sequence[idx + 1], 0

    return advance


def _advance_hourly(cycle: str) -> tuple[str, int]:
    try:
        hour = int(cycle)
    except ValueError:
        raise ValueError(f"Unknown cycle {cycle!r}; expected an hour 00-23") from None
    if not 0 <= hour <= 23:
        raise ValueError(f"Unknown cycle {cycle!r}; expected an hour 00-23")
    hour += 1
    return f"{hour % 24:02d}", hour // 24


CYCLE_ADVANCERS: dict[str, Callable[[str], tuple[str, int]]] = {
    "rap": _advance_sequence(RAP_CYCLES),
    "gfs": _advance_sequence(GFS_CYCLES),
    "hrrr": _advance_hourly,
}


def next_cycle(dataset: D) -> D:
    """
    Return ``dataset`` advanced by one publication interval.

    Rolling past the last cycle of the day moves ``date`` forward one day.
    All other fields are carried through unchanged.
    """

    advancer = CYCLE_ADVANCERS.get(dataset.model_key)
    if advancer is None:
        raise ValueError(f"No cycle schedule defined for {dataset.model_key}")
    cycle, days = advancer(dataset.cycle)
    return dataclasses.replace(dataset, date=dataset.date + days * ONE_DAY, cycle=cycle)


def advance(dataset: D, steps: int) -> D:
    """Apply :func:`next_cycle` ``steps`` times."""

    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    for _ in range(steps):
        dataset = next_cycle(dataset)
    return dataset


def cycles_between(start: D, count: int) -> Iterator[D]:
    """Yield ``count`` consecutive cycles beginning with ``start``."""

    current = start
    for _ in range(count):
        yield current
        current = next_cycle(current)
