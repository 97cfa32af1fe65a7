from datetime import date

from click.testing import CliRunner

from rapidrefresh.backends.http import RequestsTransport
from rapidrefresh.cache import CacheStore
from rapidrefresh.cli import main
from rapidrefresh.models import HRRR

INDEX_TEXT = """\
1:0:d=2024011512:REFC:entire atmosphere:anl:
2:5:d=2024011512:TMP:2 m above ground:anl:
3:9:d=2024011512:UGRD:10 m above ground:anl:
"""


def _invoke(tmp_path, *args):
    runner = CliRunner()
    return runner.invoke(main, ["--cache-dir", str(tmp_path), *args])


def test_url_command(tmp_path):
    result = _invoke(tmp_path, "url", "hrrr", "--date", "20240115", "--cycle", "12", "--field", "forecast=f06")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == (
        "https://noaa-hrrr-bdp-pds.s3.amazonaws.com/hrrr.20240115/conus/hrrr.t12z.wrfsfcf06.grib2"
    )
    index = _invoke(tmp_path, "url", "hrrr", "--date", "2024-01-15", "--index")
    assert index.output.strip().endswith(".grib2.idx")


def test_unknown_field_is_rejected(tmp_path):
    result = _invoke(tmp_path, "url", "gfs", "--field", "region=conus")
    assert result.exit_code != 0
    assert "not a gfs field" in result.output


def test_next_cycle_command(tmp_path):
    result = _invoke(tmp_path, "next-cycle", "rap", "--date", "20241231", "--cycle", "t18z")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "rap_20250101_t00z_awp130_pgrb_f00.grib2"


def test_describe_command(tmp_path):
    result = _invoke(tmp_path, "describe", "gfs")
    assert result.exit_code == 0, result.output
    assert "resolution[0p25]" in result.output
    assert "noaa-gfs-bdp-pds" in result.output
    assert "cycles: every 6 h" in result.output


def test_list_rm_and_clear(tmp_path):
    store = CacheStore(tmp_path)
    dset = HRRR(date=date(2024, 1, 15), cycle="12")
    store.local_path(dset).parent.mkdir(parents=True)
    store.local_path(dset).write_text("data")

    listed = _invoke(tmp_path, "list", "hrrr")
    assert listed.output.strip() == dset.filename()

    removed = _invoke(tmp_path, "rm", "hrrr", "--date", "20240115", "--cycle", "12")
    assert removed.exit_code == 0, removed.output
    assert not store.local_path(dset).exists()

    store.local_path(dset).write_text("data")
    cleared = _invoke(tmp_path, "clear", "--all")
    assert cleared.exit_code == 0, cleared.output
    assert store.list(HRRR) == []
    assert _invoke(tmp_path, "clear").exit_code != 0


def test_list_warns_about_unparsable_files(tmp_path):
    store = CacheStore(tmp_path)
    store.clear("gfs")
    (store.directory("gfs") / "notes.txt").write_text("stray")

    result = _invoke(tmp_path, "list", "gfs")
    assert result.exit_code == 0, result.output
    assert "warning: skipped notes.txt" in result.output

    strict = _invoke(tmp_path, "list", "gfs", "--strict")
    assert strict.exit_code != 0


def test_bands_and_subset_commands(tmp_path, monkeypatch):
    payload = b"0123456789ABCDEF"
    monkeypatch.setattr(RequestsTransport, "get_text", lambda self, url: INDEX_TEXT)
    monkeypatch.setattr(
        RequestsTransport,
        "get_range",
        lambda self, url, start, end: payload[start:] if end is None else payload[start : end + 1],
    )

    inventory = _invoke(tmp_path, "bands", "hrrr", "--date", "20240115", "--search", ":TMP:")
    assert inventory.exit_code == 0, inventory.output
    assert "2 m above ground" in inventory.output
    assert "REFC" not in inventory.output

    out = tmp_path / "winds.grib2"
    result = _invoke(tmp_path, "subset", "hrrr", "--date", "20240115", "--search", ":(TMP|UGRD):", "--output", str(out))
    assert result.exit_code == 0, result.output
    assert out.read_bytes() == payload[5:]

    missing = _invoke(tmp_path, "subset", "hrrr", "--date", "20240115", "--search", ":DPT:")
    assert missing.exit_code != 0
    assert "No bands match" in missing.output
