"""Local cache of downloaded datasets, one directory per model family."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Sequence, TypeVar, Union

from rapidrefresh.backends.base import Transport
from rapidrefresh.backends.http import RequestsTransport
from rapidrefresh.bands.index import Band
from rapidrefresh.bands.subset import PARTIAL_SUFFIX, subset as _subset
from rapidrefresh.config import ensure_dir, get_cache_dir
from rapidrefresh.exceptions import UnparsableCacheFilename
from rapidrefresh.models import MODEL_CLASSES, BaseDataset, get_model_class
from rapidrefresh.models.base import GRIB_EXTENSION

LOGGER = logging.getLogger("rapidrefresh.cache")
SUBSET_MARKER = "_subset"

D = TypeVar("D", bound=BaseDataset)
ModelRef = Union[str, BaseDataset, "type[BaseDataset]"]
ErrorHandler = Callable[[UnparsableCacheFilename], None]


class CacheStore:
    """
    Map dataset descriptors to files under a cache root.

    Each model family lives in ``<root>/<model_key>`` and file names are a pure
    function of the descriptor, so the directory listing is the whole index.
    Path lookups never touch the filesystem; directories are created only when
    a file is about to be written. Two concurrent fetches of the same
    descriptor are not coordinated; callers that need that must serialize them.
    """

    def __init__(self, root: Path | str | None = None, *, transport: Transport | None = None) -> None:
        self.root = Path(root) if root is not None else get_cache_dir()
        self.transport = transport or RequestsTransport()

    def directory(self, model: ModelRef) -> Path:
        """Return the directory holding one model family."""

        return self.root / _model_key(model)

    def local_path(self, dataset: BaseDataset) -> Path:
        """Return where the full file of ``dataset`` is cached."""

        return self.directory(dataset) / dataset.filename()

    def subset_path(self, dataset: BaseDataset) -> Path:
        """Return the default output path of a band subset of ``dataset``."""

        return self.directory(dataset) / dataset.filename(SUBSET_MARKER)

    def is_cached(self, dataset: BaseDataset) -> bool:
        return self.local_path(dataset).exists()

    def fetch(self, dataset: BaseDataset, *, overwrite: bool = False) -> Path:
        """
        Return the local copy of ``dataset``, downloading it on first use.

        The body is streamed into a ``.part`` sibling and moved into place only
        after the transfer completes, so a failed download leaves nothing at the
        cache path.
        """

        path = self.local_path(dataset)
        if path.exists() and not overwrite:
            LOGGER.debug("Cache hit for %s", path.name)
            return path

        ensure_dir(path.parent)
        part_path = path.with_name(path.name + PARTIAL_SUFFIX)
        try:
            self.transport.download(dataset.url(), part_path)
            part_path.replace(path)
        except BaseException:
            part_path.unlink(missing_ok=True)
            raise
        LOGGER.info("Cached %s", path.name)
        return path

    def subset(self, dataset: BaseDataset, bands: Sequence[Band], *, output: Path | str | None = None) -> Path:
        """Download only ``bands`` of ``dataset``; see :func:`rapidrefresh.bands.subset`."""

        return _subset(dataset, bands, transport=self.transport, store=self, output=output)

    def list(
        self,
        model: "type[D] | str",
        *,
        strict: bool = False,
        on_error: Optional[ErrorHandler] = None,
    ) -> list[D]:
        """
        Return a descriptor for every cached full file of one model family.

        Subset outputs and unfinished ``.part`` files are not cache entries and
        are skipped. Other names that do not parse are logged and handed to
        ``on_error``, or raised when ``strict`` is set. A family with no
        directory yet lists as empty.
        """

        model_cls = get_model_class(model) if isinstance(model, str) else model
        directory = self.directory(model_cls)
        if not directory.is_dir():
            return []
        datasets: list[D] = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or _is_derived(path):
                continue
            try:
                datasets.append(model_cls.parse(path))
            except UnparsableCacheFilename as exc:
                if strict:
                    raise
                LOGGER.warning("Skipping unrecognised cache file %s: %s", path, exc.reason)
                if on_error is not None:
                    on_error(exc)
        return datasets

    def remove(self, dataset: BaseDataset, *, subset: bool = False) -> None:
        """Delete the cached file of ``dataset``; missing files are ignored."""

        paths = [self.local_path(dataset)]
        if subset:
            paths.append(self.subset_path(dataset))
        for path in paths:
            if path.exists():
                path.unlink()
                LOGGER.info("Removed %s", path)

    def clear(self, model: ModelRef) -> None:
        """Empty the directory of one model family."""

        directory = self.directory(model)
        if directory.exists():
            shutil.rmtree(directory)
        ensure_dir(directory)
        LOGGER.info("Cleared %s", directory)

    def clear_all(self) -> None:
        """Remove every cached file of every model family."""

        if self.root.exists():
            shutil.rmtree(self.root)
        ensure_dir(self.root)
        for model_key in MODEL_CLASSES:
            ensure_dir(self.root / model_key)
        LOGGER.info("Cleared cache root %s", self.root)


def _model_key(model: ModelRef) -> str:
    if isinstance(model, str):
        return get_model_class(model).model_key
    return model.model_key


def _is_derived(path: Path) -> bool:
    name = path.name
    if name.endswith(PARTIAL_SUFFIX):
        return True
    return name.endswith(SUBSET_MARKER + GRIB_EXTENSION)
