"""Parsing of the ``.idx`` inventories published next to each GRIB2 file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

import pandas as pd

from rapidrefresh.exceptions import MalformedIndexLine

if TYPE_CHECKING:
    from rapidrefresh.backends.base import Transport
    from rapidrefresh.models.base import BaseDataset

LOGGER = logging.getLogger("rapidrefresh.bands")
INDEX_DELIMITER = ":"
MIN_INDEX_FIELDS = 6
BAND_COLUMNS = ["line_number", "byte_offset", "end_byte", "timestamp", "variable", "level", "forecast_type"]


@dataclass(frozen=True)
class Band:
    """One message of a GRIB2 file as listed in its index."""

    line_number: int
    byte_offset: int
    timestamp: str
    variable: str
    level: str
    forecast_type: str

    def __str__(self) -> str:
        return f"Band({self.line_number}: {self.variable} at {self.level})"

    @property
    def search_key(self) -> str:
        """wgrib2-style ``:VAR:LEVEL:TYPE:`` string used by :func:`search_bands`."""

        return f":{self.variable}:{self.level}:{self.forecast_type}:"


def parse_index_line(line: str, position: int) -> Band | None:
    """
    Parse a single index line.

    Returns ``None`` for lines with fewer than six fields; raises
    :class:`MalformedIndexLine` when the line or offset column is not an integer.
    """

    parts = line.split(INDEX_DELIMITER)
    if len(parts) < MIN_INDEX_FIELDS:
        return None
    try:
        line_number = int(parts[0])
        byte_offset = int(parts[1])
    except ValueError:
        raise MalformedIndexLine(position, line, "non-integer line number or byte offset") from None
    return Band(
        line_number=line_number,
        byte_offset=byte_offset,
        timestamp=parts[2],
        variable=parts[3],
        level=parts[4],
        forecast_type=parts[5],
    )


def parse_index(text: str, *, strict: bool = False) -> list[Band]:
    """
    Parse the text of an index file into bands, preserving file order.

    Blank lines are ignored. Lines with fewer than six colon-separated fields
    are dropped unless ``strict`` is set, in which case they raise
    :class:`MalformedIndexLine` like a non-numeric offset always does.
    """

    bands: list[Band] = []
    for position, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        band = parse_index_line(line, position)
        if band is None:
            if strict:
                raise MalformedIndexLine(position, line, f"fewer than {MIN_INDEX_FIELDS} fields")
            LOGGER.debug("Skipping short index line %s: %r", position, line)
            continue
        bands.append(band)
    return bands


def fetch_bands(dataset: "BaseDataset", transport: "Transport", *, strict: bool = False) -> list[Band]:
    """Download and parse the index companion of ``dataset``."""

    url = dataset.index_url()
    text = transport.get_text(url)
    bands = parse_index(text, strict=strict)
    LOGGER.debug("Parsed %d bands from %s", len(bands), url)
    return bands


def search_bands(bands: Iterable[Band], pattern: str) -> list[Band]:
    """
    Return the bands whose ``search_key`` matches the regular expression ``pattern``.

    Patterns follow the usual wgrib2 conventions, e.g. ``":TMP:2 m above ground:"``
    or ``":(UGRD|VGRD):10 m above ground:"``.
    """

    regex = re.compile(pattern)
    return [band for band in bands if regex.search(band.search_key)]


def bands_frame(bands: Sequence[Band]) -> pd.DataFrame:
    """
    Tabulate bands as an inventory DataFrame.

    ``end_byte`` is the inclusive last byte of each message, taken from the next
    row's offset; the final row is open-ended and holds ``<NA>``.
    """

    if not bands:
        return pd.DataFrame(columns=BAND_COLUMNS)
    df = pd.DataFrame(
        {
            "line_number": [band.line_number for band in bands],
            "byte_offset": [band.byte_offset for band in bands],
            "timestamp": [band.timestamp for band in bands],
            "variable": [band.variable for band in bands],
            "level": [band.level for band in bands],
            "forecast_type": [band.forecast_type for band in bands],
        }
    )
    df["end_byte"] = (df["byte_offset"].shift(-1) - 1).astype("Int64")
    return df[BAND_COLUMNS]
