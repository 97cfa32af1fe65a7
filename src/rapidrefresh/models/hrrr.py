"""HRRR dataset descriptor."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from rapidrefresh.models.base import BaseDataset, FieldSpec


@dataclass(frozen=True)
class HRRR(BaseDataset):
    """High-Resolution Rapid Refresh output, one run per hour."""

    model_key = "hrrr"
    fields = (
        FieldSpec("date", "date"),
        FieldSpec("cycle"),
        FieldSpec("region"),
        FieldSpec("product"),
        FieldSpec("forecast"),
    )

    date: dt.date = field(default_factory=dt.date.today)
    cycle: str = "00"
    region: str = "conus"
    product: str = "wrfsfc"
    forecast: str = "f00"
