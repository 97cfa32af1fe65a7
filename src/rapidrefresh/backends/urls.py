"""Helper utilities for constructing NOAA Open Data bucket URLs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from rapidrefresh.models.base import BaseDataset

RAP_BUCKET_URL = "https://noaa-rap-pds.s3.amazonaws.com"
GFS_BUCKET_URL = "https://noaa-gfs-bdp-pds.s3.amazonaws.com"
HRRR_BUCKET_URL = "https://noaa-hrrr-bdp-pds.s3.amazonaws.com"
INDEX_SUFFIX = ".idx"


def build_rap_url(dataset: "BaseDataset") -> str:
    """Return the bucket URL for a RAP GRIB2 file."""

    ymd = dataset.date.strftime("%Y%m%d")
    fname = f"rap.{dataset.cycle}.{dataset.grid}{dataset.product}{dataset.forecast}.grib2"
    return f"{RAP_BUCKET_URL}/rap.{ymd}/{fname}"


def build_gfs_url(dataset: "BaseDataset") -> str:
    """Return the bucket URL for a GFS GRIB2 file."""

    ymd = dataset.date.strftime("%Y%m%d")
    fname = f"gfs.t{dataset.cycle}z.pgrb2.{dataset.resolution}.{dataset.forecast}"
    return f"{GFS_BUCKET_URL}/gfs.{ymd}/{dataset.cycle}/{dataset.product}/{fname}"


def build_hrrr_url(dataset: "BaseDataset") -> str:
    """Return the bucket URL for a HRRR GRIB2 file."""

    ymd = dataset.date.strftime("%Y%m%d")
    fname = f"hrrr.t{dataset.cycle}z.{dataset.product}{dataset.forecast}.grib2"
    return f"{HRRR_BUCKET_URL}/hrrr.{ymd}/{dataset.region}/{fname}"


MODEL_URL_BUILDERS: dict[str, Callable[["BaseDataset"], str]] = {
    "rap": build_rap_url,
    "gfs": build_gfs_url,
    "hrrr": build_hrrr_url,
}


def build_url(dataset: "BaseDataset") -> str:
    """
    Return the canonical remote URL of the full file described by ``dataset``.
    """

    builder = MODEL_URL_BUILDERS.get(dataset.model_key)
    if builder is None:
        raise ValueError(f"No URL builder defined for {dataset.model_key}")
    return builder(dataset)


def build_index_url(dataset: "BaseDataset") -> str:
    """Return the URL of the ``.idx`` companion of ``dataset``."""

    return build_url(dataset) + INDEX_SUFFIX
