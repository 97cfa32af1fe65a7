"""GFS dataset descriptor."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from rapidrefresh.models.base import BaseDataset, FieldSpec


@dataclass(frozen=True)
class GFS(BaseDataset):
    """Global Forecast System ``pgrb2`` output."""

    model_key = "gfs"
    fields = (
        FieldSpec("date", "date"),
        FieldSpec("cycle"),
        FieldSpec("resolution"),
        FieldSpec("product"),
        FieldSpec("forecast"),
    )

    date: dt.date = field(default_factory=dt.date.today)
    cycle: str = "00"
    resolution: str = "0p25"
    product: str = "atmos"
    forecast: str = "f000"
