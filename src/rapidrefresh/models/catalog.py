"""Static descriptions of valid field values for each model family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Union

from rapidrefresh.backends.urls import GFS_BUCKET_URL, HRRR_BUCKET_URL, RAP_BUCKET_URL
from rapidrefresh.models.cycles import GFS_CYCLES, HRRR_CYCLES, RAP_CYCLES

if TYPE_CHECKING:
    from rapidrefresh.models.base import BaseDataset

ModelRef = Union[str, "BaseDataset", type]


@dataclass(frozen=True)
class DatasetCatalog:
    """Valid values, defaults and grid spacing for one model family."""

    key: str
    description: str
    bucket_url: str
    fields: Mapping[str, tuple[str, ...]]
    defaults: Mapping[str, str]
    resolution_km: float | Mapping[str, float]
    resolution_field: str | None
    cycle_interval_hours: int


RAP_CATALOG = DatasetCatalog(
    key="rap",
    description="Rapid Refresh, 13 km CONUS mesoscale model",
    bucket_url=RAP_BUCKET_URL,
    fields={
        "cycle": RAP_CYCLES,
        "grid": ("awp130", "awp252", "awp236"),
        "product": ("pgrb", "bgrb"),
        "forecast": tuple(f"f{h:02d}" for h in range(22)),
    },
    defaults={"cycle": "t00z", "grid": "awp130", "product": "pgrb", "forecast": "f00"},
    resolution_km={"awp130": 13.545, "awp252": 20.318, "awp236": 40.635},
    resolution_field="grid",
    cycle_interval_hours=6,
)

GFS_CATALOG = DatasetCatalog(
    key="gfs",
    description="Global Forecast System",
    bucket_url=GFS_BUCKET_URL,
    fields={
        "cycle": GFS_CYCLES,
        "resolution": ("0p25", "0p50", "1p00"),
        "product": ("atmos", "wave"),
        "forecast": tuple(f"f{h:03d}" for h in range(385)),
    },
    defaults={"cycle": "00", "resolution": "0p25", "product": "atmos", "forecast": "f000"},
    resolution_km={"0p25": 27.83, "0p50": 55.66, "1p00": 111.32},
    resolution_field="resolution",
    cycle_interval_hours=6,
)

HRRR_CATALOG = DatasetCatalog(
    key="hrrr",
    description="High-Resolution Rapid Refresh, 3 km convection-allowing model",
    bucket_url=HRRR_BUCKET_URL,
    fields={
        "cycle": HRRR_CYCLES,
        "region": ("conus", "alaska"),
        "product": ("wrfsfc", "wrfprs", "wrfnat", "wrfsubh"),
        "forecast": tuple(f"f{h:02d}" for h in range(49)),
    },
    defaults={"cycle": "00", "region": "conus", "product": "wrfsfc", "forecast": "f00"},
    resolution_km=3.0,
    resolution_field=None,
    cycle_interval_hours=1,
)

CATALOGS: dict[str, DatasetCatalog] = {
    "rap": RAP_CATALOG,
    "gfs": GFS_CATALOG,
    "hrrr": HRRR_CATALOG,
}


def _model_key(model: ModelRef) -> str:
    if isinstance(model, str):
        return model.lower()
    key = getattr(model, "model_key", None)
    if key is None:
        raise TypeError(f"Cannot determine model for {model!r}")
    return key


def describe(model: ModelRef) -> DatasetCatalog:
    """Return the catalog for a model key, descriptor class or descriptor."""

    key = _model_key(model)
    catalog = CATALOGS.get(key)
    if catalog is None:
        raise ValueError(f"Unsupported model key: {key}")
    return catalog


def validate(dataset: "BaseDataset") -> list[str]:
    """
    List the fields of ``dataset`` whose values fall outside the catalog.

    Returns an empty list for a fully documented descriptor. Nothing in the
    package calls this implicitly; undocumented values simply produce URLs the
    bucket will not serve.
    """

    catalog = describe(dataset)
    problems: list[str] = []
    for name, allowed in catalog.fields.items():
        value = getattr(dataset, name)
        if value not in allowed:
            problems.append(f"{name}={value!r} is not a known {catalog.key} value")
    return problems


def resolution_of(dataset: "BaseDataset") -> float:
    """Return the nominal grid spacing of ``dataset`` in kilometres."""

    catalog = describe(dataset)
    if catalog.resolution_field is None:
        return float(catalog.resolution_km)
    value = getattr(dataset, catalog.resolution_field)
    try:
        return catalog.resolution_km[value]
    except KeyError:
        raise ValueError(f"No resolution known for {catalog.resolution_field}={value!r}") from None
