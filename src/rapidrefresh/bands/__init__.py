"""Index parsing and byte-range subsetting of GRIB2 files."""

from __future__ import annotations

from .index import Band, bands_frame, fetch_bands, parse_index, search_bands
from .subset import byte_ranges, subset

__all__ = ["Band", "bands_frame", "byte_ranges", "fetch_bands", "parse_index", "search_bands", "subset"]
