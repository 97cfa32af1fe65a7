"""Example runner that wires together the rapidrefresh modules."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from rapidrefresh.bands import bands_frame, fetch_bands, search_bands
from rapidrefresh.cache import CacheStore
from rapidrefresh.models import HRRR


def run_example() -> None:
    """
    Pull 2 m temperature and 10 m winds from three consecutive HRRR runs.
    """

    store = CacheStore(Path("data/rapidrefresh_example"))
    dset = HRRR(date=date.today() - timedelta(days=1), cycle="12", forecast="f01")
    for _ in range(3):
        bands = fetch_bands(dset, store.transport)
        selected = search_bands(bands, r":(TMP:2 m|[UV]GRD:10 m) above ground:")
        print(bands_frame(selected))
        print(store.subset(dset, selected))
        dset = dset.next_cycle()


if __name__ == "__main__":
    run_example()
