"""Command-line entry point for rapidrefresh."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Callable, Sequence

import click

from rapidrefresh.bands import bands_frame, fetch_bands, search_bands
from rapidrefresh.cache import CacheStore
from rapidrefresh.config import get_log_level
from rapidrefresh.exceptions import RapidRefreshError, UnparsableCacheFilename
from rapidrefresh.models import MODEL_CLASSES, BaseDataset, advance, describe, get_model_class, validate

MODEL_CHOICE = click.Choice(sorted(MODEL_CLASSES), case_sensitive=False)


def _parse_date(value: str) -> dt.date:
    for fmt in ("%Y%m%d", "%Y-%m-%d"):
        try:
            return dt.datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise click.BadParameter(f"{value!r} is not a YYYYMMDD or YYYY-MM-DD date")


def build_dataset(model: str, date: str | None, cycle: str | None, fields: Sequence[str]) -> BaseDataset:
    """Build a descriptor from CLI options, leaving unspecified fields at their defaults."""

    model_cls = get_model_class(model)
    kwargs: dict[str, object] = {}
    if date:
        kwargs["date"] = _parse_date(date)
    if cycle:
        kwargs["cycle"] = cycle
    known = {spec.name for spec in model_cls.fields}
    for item in fields:
        if "=" not in item:
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint="--field")
        name, value = (part.strip() for part in item.split("=", 1))
        if name not in known or name == "date":
            raise click.BadParameter(f"{name!r} is not a {model} field", param_hint="--field")
        kwargs[name] = value
    dataset = model_cls(**kwargs)
    for problem in validate(dataset):
        click.echo(f"warning: {problem}", err=True)
    return dataset


def dataset_options(func: Callable) -> Callable:
    """Attach the options shared by every per-dataset command."""

    func = click.option(
        "--field",
        "fields",
        multiple=True,
        metavar="NAME=VALUE",
        help="Override a descriptor field, e.g. --field region=alaska.",
    )(func)
    func = click.option("--cycle", help="Cycle token, e.g. t12z (RAP) or 12 (GFS/HRRR).")(func)
    func = click.option("--date", help="Run date as YYYYMMDD or YYYY-MM-DD. Default: today.")(func)
    func = click.argument("model", type=MODEL_CHOICE)(func)
    return func


@click.group()
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Cache root. Default: $RAPIDREFRESH_CACHE_DIR or ~/.cache/rapidrefresh.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level. Default: $RAPIDREFRESH_LOG_LEVEL or INFO.",
)
@click.pass_context
def main(ctx: click.Context, cache_dir: Path | None, log_level: str | None) -> None:
    """Locate, download and subset RAP, GFS and HRRR GRIB2 files."""

    level = (log_level or get_log_level()).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(levelname)s:%(name)s:%(message)s")
    ctx.obj = CacheStore(cache_dir)


@main.command()
@dataset_options
@click.option("--index", is_flag=True, help="Print the .idx URL instead.")
def url(model: str, date: str | None, cycle: str | None, fields: Sequence[str], index: bool) -> None:
    """Print the remote URL of a dataset."""

    dataset = build_dataset(model, date, cycle, fields)
    click.echo(dataset.index_url() if index else dataset.url())


@main.command()
@dataset_options
@click.option("--overwrite", is_flag=True, help="Download even if a cached copy exists.")
@click.pass_obj
def fetch(store: CacheStore, model: str, date: str | None, cycle: str | None, fields: Sequence[str], overwrite: bool) -> None:
    """Download a full file into the cache and print its path."""

    dataset = build_dataset(model, date, cycle, fields)
    _run(lambda: click.echo(store.fetch(dataset, overwrite=overwrite)))


@main.command()
@dataset_options
@click.option("--search", "pattern", help="Regular expression matched against ':VAR:LEVEL:TYPE:'.")
@click.pass_obj
def bands(store: CacheStore, model: str, date: str | None, cycle: str | None, fields: Sequence[str], pattern: str | None) -> None:
    """Print the band inventory of a dataset."""

    dataset = build_dataset(model, date, cycle, fields)

    def show() -> None:
        inventory = fetch_bands(dataset, store.transport)
        if pattern:
            inventory = search_bands(inventory, pattern)
        click.echo(bands_frame(inventory).to_string(index=False))

    _run(show)


@main.command()
@dataset_options
@click.option("--search", "pattern", required=True, help="Regular expression selecting the bands to keep.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Output file.")
@click.pass_obj
def subset(
    store: CacheStore,
    model: str,
    date: str | None,
    cycle: str | None,
    fields: Sequence[str],
    pattern: str,
    output: Path | None,
) -> None:
    """Download the bands matching --search into one file and print its path."""

    dataset = build_dataset(model, date, cycle, fields)

    def run() -> None:
        selected = search_bands(fetch_bands(dataset, store.transport), pattern)
        if not selected:
            raise click.ClickException(f"No bands match {pattern!r}")
        click.echo(store.subset(dataset, selected, output=output))

    _run(run)


@main.command(name="list")
@click.argument("model", type=MODEL_CHOICE)
@click.option("--strict", is_flag=True, help="Fail on files that do not parse.")
@click.pass_obj
def list_(store: CacheStore, model: str, strict: bool) -> None:
    """List the cached datasets of one model family."""

    def show() -> None:
        def report(exc: UnparsableCacheFilename) -> None:
            click.echo(f"warning: skipped {exc.path}: {exc.reason}", err=True)

        for dataset in store.list(model, strict=strict, on_error=report):
            click.echo(dataset.filename())

    _run(show)


@main.command()
@dataset_options
@click.option("--subset", "with_subset", is_flag=True, help="Also remove the subset file.")
@click.pass_obj
def rm(store: CacheStore, model: str, date: str | None, cycle: str | None, fields: Sequence[str], with_subset: bool) -> None:
    """Remove a cached dataset."""

    store.remove(build_dataset(model, date, cycle, fields), subset=with_subset)


@main.command()
@click.argument("model", type=MODEL_CHOICE, required=False)
@click.option("--all", "clear_everything", is_flag=True, help="Clear every model family.")
@click.pass_obj
def clear(store: CacheStore, model: str | None, clear_everything: bool) -> None:
    """Delete cached files of one model family, or all of them with --all."""

    if clear_everything:
        store.clear_all()
    elif model:
        store.clear(model)
    else:
        raise click.UsageError("Give a MODEL or --all")


@main.command(name="next-cycle")
@dataset_options
@click.option("--steps", type=click.IntRange(min=0), default=1, show_default=True, help="Cycles to advance.")
def next_cycle_(model: str, date: str | None, cycle: str | None, fields: Sequence[str], steps: int) -> None:
    """Print the descriptor filename of a later cycle."""

    dataset = build_dataset(model, date, cycle, fields)
    try:
        click.echo(advance(dataset, steps).filename())
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command(name="describe")
@click.argument("model", type=MODEL_CHOICE)
def describe_(model: str) -> None:
    """Print the valid field values of a model family."""

    catalog = describe(model)
    click.echo(f"{catalog.key}: {catalog.description}")
    click.echo(f"  bucket: {catalog.bucket_url}")
    click.echo(f"  cycles: every {catalog.cycle_interval_hours} h")
    for name, values in catalog.fields.items():
        shown = ", ".join(values) if len(values) <= 8 else f"{values[0]} .. {values[-1]} ({len(values)} values)"
        click.echo(f"  {name}: {shown} (default {catalog.defaults[name]})")
    if isinstance(catalog.resolution_km, float):
        click.echo(f"  resolution: {catalog.resolution_km} km")
    else:
        for key, km in catalog.resolution_km.items():
            click.echo(f"  resolution[{key}]: {km} km")


def _run(action: Callable[[], None]) -> None:
    try:
        action()
    except RapidRefreshError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()
