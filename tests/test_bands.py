from datetime import date

import pandas as pd
import pytest

from rapidrefresh.bands import Band, bands_frame, fetch_bands, parse_index, search_bands
from rapidrefresh.exceptions import MalformedIndexLine
from rapidrefresh.models import HRRR

INDEX_TEXT = """\
1:0:d=2024011512:REFC:entire atmosphere:anl:
2:500:d=2024011512:TMP:2 m above ground:anl:
3:1200:d=2024011512:UGRD:10 m above ground:anl:
4:1900:d=2024011512:VGRD:10 m above ground:anl:

5:2600:d=2024011512:APCP:surface:0-0 day acc fcst:
"""


class DummyTransport:
    def __init__(self, text: str):
        self.text = text
        self.urls: list[str] = []

    def get_text(self, url: str) -> str:
        self.urls.append(url)
        return self.text


def test_parse_index_preserves_order():
    bands = parse_index(INDEX_TEXT)
    assert [b.line_number for b in bands] == [1, 2, 3, 4, 5]
    assert [b.byte_offset for b in bands] == [0, 500, 1200, 1900, 2600]
    assert bands[1] == Band(2, 500, "d=2024011512", "TMP", "2 m above ground", "anl")
    assert bands[4].forecast_type == "0-0 day acc fcst"


def test_short_trailing_line_is_dropped():
    bands = parse_index(INDEX_TEXT + "6:3300:d=2024011512\n")
    assert len(bands) == 5


def test_short_line_fails_in_strict_mode():
    with pytest.raises(MalformedIndexLine) as excinfo:
        parse_index(INDEX_TEXT + "6:3300:d=2024011512\n", strict=True)
    assert excinfo.value.position == 7


def test_non_integer_offset_is_fatal():
    text = INDEX_TEXT.replace("2:500:", "2:5x0:")
    with pytest.raises(MalformedIndexLine):
        parse_index(text)


def test_band_rendering():
    band = Band(1, 0, "d=2024011512", "TMP", "2 m above ground", "anl")
    assert str(band) == "Band(1: TMP at 2 m above ground)"
    assert band.search_key == ":TMP:2 m above ground:anl:"


def test_fetch_bands_uses_index_url():
    dset = HRRR(date=date(2024, 1, 15), cycle="12", forecast="f00")
    transport = DummyTransport(INDEX_TEXT)
    bands = fetch_bands(dset, transport)
    assert len(bands) == 5
    assert transport.urls == [
        "https://noaa-hrrr-bdp-pds.s3.amazonaws.com/hrrr.20240115/conus/hrrr.t12z.wrfsfcf00.grib2.idx"
    ]


def test_search_bands():
    bands = parse_index(INDEX_TEXT)
    winds = search_bands(bands, ":(UGRD|VGRD):10 m above ground:")
    assert [b.variable for b in winds] == ["UGRD", "VGRD"]
    assert search_bands(bands, ":DPT:") == []


def test_bands_frame_end_bytes():
    df = bands_frame(parse_index(INDEX_TEXT))
    assert list(df["line_number"]) == [1, 2, 3, 4, 5]
    assert df["end_byte"].iloc[0] == 499
    assert df["end_byte"].iloc[3] == 2599
    assert pd.isna(df["end_byte"].iloc[-1])
    assert bands_frame([]).empty
