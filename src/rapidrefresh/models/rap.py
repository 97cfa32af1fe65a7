"""RAP dataset descriptor."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from rapidrefresh.models.base import BaseDataset, FieldSpec


@dataclass(frozen=True)
class RAP(BaseDataset):
    """Rapid Refresh output on the NOAA Open Data bucket.

    ``product`` selects the level set: ``pgrb`` for pressure levels, ``bgrb``
    for native hybrid levels.
    """

    model_key = "rap"
    fields = (
        FieldSpec("date", "date"),
        FieldSpec("cycle"),
        FieldSpec("grid"),
        FieldSpec("product"),
        FieldSpec("forecast"),
    )

    date: dt.date = field(default_factory=dt.date.today)
    cycle: str = "t00z"
    grid: str = "awp130"
    product: str = "pgrb"
    forecast: str = "f00"
