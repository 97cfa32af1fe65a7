from datetime import date

import pytest

from rapidrefresh.exceptions import UnparsableCacheFilename
from rapidrefresh.models import GFS, HRRR, RAP, get_model_class


def test_defaults_follow_catalog():
    rap = RAP()
    assert rap.date == date.today()
    assert (rap.cycle, rap.grid, rap.product, rap.forecast) == ("t00z", "awp130", "pgrb", "f00")
    gfs = GFS(cycle="18", forecast="f012")
    assert (gfs.cycle, gfs.resolution, gfs.product, gfs.forecast) == ("18", "0p25", "atmos", "f012")
    hrrr = HRRR()
    assert (hrrr.cycle, hrrr.region, hrrr.product, hrrr.forecast) == ("00", "conus", "wrfsfc", "f00")


def test_descriptors_are_immutable_values():
    a = HRRR(date=date(2024, 1, 15), cycle="12")
    b = HRRR(date=date(2024, 1, 15), cycle="12")
    assert a == b
    assert hash(a) == hash(b)
    with pytest.raises(AttributeError):
        a.cycle = "13"


def test_hrrr_url_and_filename():
    dset = HRRR(date=date(2024, 1, 15), cycle="12", region="conus", product="wrfsfc", forecast="f06")
    assert dset.url() == "https://noaa-hrrr-bdp-pds.s3.amazonaws.com/hrrr.20240115/conus/hrrr.t12z.wrfsfcf06.grib2"
    assert dset.index_url() == dset.url() + ".idx"
    assert dset.filename() == "hrrr_20240115_12_conus_wrfsfc_f06.grib2"
    assert "20240115_12_conus_wrfsfc_f06" in dset.filename()


def test_rap_url():
    dset = RAP(date=date(2024, 12, 25), cycle="t12z", grid="awp252", forecast="f06")
    assert dset.url() == "https://noaa-rap-pds.s3.amazonaws.com/rap.20241225/rap.t12z.awp252pgrbf06.grib2"


def test_gfs_url():
    dset = GFS(date=date(2024, 12, 25), cycle="12", resolution="0p50", product="wave", forecast="f024")
    assert dset.url() == "https://noaa-gfs-bdp-pds.s3.amazonaws.com/gfs.20241225/12/wave/gfs.t12z.pgrb2.0p50.f024"


def test_url_does_not_depend_on_cache(tmp_path, monkeypatch):
    dset = GFS(date=date(2024, 3, 5))
    before = dset.url()
    monkeypatch.setenv("RAPIDREFRESH_CACHE_DIR", str(tmp_path))
    assert dset.url() == before
    assert str(tmp_path) not in before


@pytest.mark.parametrize(
    "dset",
    [
        RAP(date=date(2024, 1, 15)),
        RAP(date=date(2024, 3, 5), cycle="t18z", grid="awp236", product="bgrb", forecast="f21"),
        GFS(date=date(2023, 12, 31), cycle="06", resolution="1p00", product="wave", forecast="f384"),
        HRRR(date=date(2024, 2, 29), cycle="23", region="alaska", product="wrfprs", forecast="f48"),
    ],
)
def test_filename_round_trip(dset):
    assert type(dset).parse(dset.filename()) == dset
    assert type(dset).parse(f"/some/directory/{dset.filename()}") == dset


def test_parse_reads_basename_only():
    dset = GFS.parse("/tmp/gfs_cache/gfs_20240305_06_1p00_atmos_f012.grib2")
    assert dset == GFS(date=date(2024, 3, 5), cycle="06", resolution="1p00", product="atmos", forecast="f012")


@pytest.mark.parametrize(
    "name",
    [
        "hrrr_20240115_12_conus_wrfsfc_f06.nc",
        "hrrr_20240115_12_conus_wrfsfc.grib2",
        "rap_20240115_12_conus_wrfsfc_f06.grib2",
        "hrrr_2024011_12_conus_wrfsfc_f06.grib2",
        "hrrr_20241315_12_conus_wrfsfc_f06.grib2",
        "hrrr_20240115_12_conus__f06.grib2",
    ],
)
def test_parse_rejects_foreign_names(name):
    with pytest.raises(UnparsableCacheFilename):
        HRRR.parse(name)


def test_get_model_class():
    assert get_model_class("HRRR") is HRRR
    with pytest.raises(ValueError):
        get_model_class("nam")
