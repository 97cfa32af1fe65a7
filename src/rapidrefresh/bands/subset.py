"""Assemble a partial GRIB2 file from byte ranges of selected bands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from rapidrefresh.bands.index import Band, fetch_bands
from rapidrefresh.exceptions import BandNotFound, EmptySelection

if TYPE_CHECKING:
    from rapidrefresh.backends.base import Transport
    from rapidrefresh.cache import CacheStore
    from rapidrefresh.models.base import BaseDataset

LOGGER = logging.getLogger("rapidrefresh.bands")
PARTIAL_SUFFIX = ".part"

ByteRange = tuple[int, Optional[int]]


def byte_ranges(reference: Sequence[Band], selected: Sequence[Band], *, source: str | None = None) -> list[ByteRange]:
    """
    Resolve the inclusive byte range of every selected band.

    Ranges come back in the caller's order, duplicates included. A band's range
    ends one byte before the next entry of ``reference``; the last entry is
    open-ended (``None``). A band sharing its offset with the next entry gets
    the empty range ``(start, start - 1)``.
    """

    if not selected:
        raise EmptySelection("No bands selected")
    positions = {band.line_number: idx for idx, band in enumerate(reference)}
    ranges: list[ByteRange] = []
    for band in selected:
        idx = positions.get(band.line_number)
        if idx is None:
            raise BandNotFound(band.line_number, source)
        start = reference[idx].byte_offset
        end = reference[idx + 1].byte_offset - 1 if idx + 1 < len(reference) else None
        ranges.append((start, end))
    return ranges


def subset(
    dataset: "BaseDataset",
    selected: Sequence[Band],
    *,
    transport: "Transport",
    store: "CacheStore | None" = None,
    output: Path | str | None = None,
    strict: bool = False,
) -> Path:
    """
    Download only ``selected`` bands of ``dataset`` into a single GRIB2 file.

    The output defaults to ``store.subset_path(dataset)``. An existing output is
    returned untouched. Ranges are fetched one after another and appended to a
    ``.part`` file that is renamed into place only once every range arrived.
    Empty ranges contribute no bytes and are not requested.
    """

    if not selected:
        raise EmptySelection(f"No bands selected for {dataset.url()}")
    if output is None:
        if store is None:
            raise ValueError("Either an output path or a cache store is required")
        out_path = store.subset_path(dataset)
    else:
        out_path = Path(output)
    if out_path.exists():
        LOGGER.info("Using cached subset %s", out_path.name)
        return out_path

    reference = fetch_bands(dataset, transport, strict=strict)
    url = dataset.url()
    ranges = byte_ranges(reference, selected, source=dataset.index_url())

    out_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = out_path.with_name(out_path.name + PARTIAL_SUFFIX)
    try:
        with part_path.open("wb") as handle:
            for band, (start, end) in zip(selected, ranges):
                if end is not None and end < start:
                    LOGGER.debug("Skipping %s: zero-length range at byte %d", band, start)
                    continue
                LOGGER.debug("Fetching %s bytes %s-%s", band, start, "" if end is None else end)
                handle.write(transport.get_range(url, start, end))
        part_path.replace(out_path)
    except BaseException:
        part_path.unlink(missing_ok=True)
        raise
    LOGGER.info("Wrote %d bands of %s to %s", len(ranges), dataset.model_name, out_path)
    return out_path
