"""Abstract dataset-descriptor definitions."""

from __future__ import annotations

import os
from abc import ABC
from datetime import date, datetime
from pathlib import Path
from typing import Any, ClassVar, NamedTuple, TypeVar, Union

from rapidrefresh.backends.urls import build_index_url, build_url
from rapidrefresh.exceptions import UnparsableCacheFilename
from rapidrefresh.models.cycles import next_cycle as _next_cycle

GRIB_EXTENSION = ".grib2"
FILENAME_SEPARATOR = "_"
DATE_FORMAT = "%Y%m%d"

PathLike = Union[str, "os.PathLike[str]"]
D = TypeVar("D", bound="BaseDataset")


class FieldSpec(NamedTuple):
    """One named field of a descriptor and how it is written into filenames."""

    name: str
    kind: str = "string"

    def format(self, value: Any) -> str:
        if self.kind == "date":
            return value.strftime(DATE_FORMAT)
        return str(value)

    def parse(self, token: str) -> Any:
        if self.kind == "date":
            if len(token) != 8 or not token.isdigit():
                raise ValueError(f"expected YYYYMMDD for {self.name}, got {token!r}")
            return datetime.strptime(token, DATE_FORMAT).date()
        if not token:
            raise ValueError(f"empty value for {self.name}")
        return token


class BaseDataset(ABC):
    """
    Shared behaviour for immutable dataset descriptors.

    Subclasses are frozen dataclasses that declare ``model_key`` and the ordered
    ``fields`` tuple. The same tuple drives the filename serializer and
    :meth:`parse`, so ``cls.parse(d.filename()) == d`` holds for any value
    whose string fields contain no ``_``.
    """

    model_key: ClassVar[str]
    fields: ClassVar[tuple[FieldSpec, ...]]

    date: date
    cycle: str
    forecast: str

    @property
    def model_name(self) -> str:
        """Return the human-readable model name."""

        return self.model_key.upper()

    @property
    def file_prefix(self) -> str:
        return self.model_key

    def url(self) -> str:
        """Canonical remote location of the full file."""

        return build_url(self)

    def index_url(self) -> str:
        """Remote location of the ``.idx`` band inventory."""

        return build_index_url(self)

    def filename(self, suffix: str = "") -> str:
        """Build the cache filename, optionally with a marker before the extension."""

        tokens = [self.file_prefix]
        tokens.extend(spec.format(getattr(self, spec.name)) for spec in self.fields)
        return FILENAME_SEPARATOR.join(tokens) + suffix + GRIB_EXTENSION

    def next_cycle(self: D) -> D:
        """Return a copy advanced by one publication cycle."""

        return _next_cycle(self)

    @classmethod
    def parse(cls: type[D], path: PathLike) -> D:
        """Rebuild a descriptor from a cache filename or path."""

        name = Path(os.fspath(path)).name
        if not name.endswith(GRIB_EXTENSION):
            raise UnparsableCacheFilename(name, f"missing {GRIB_EXTENSION} extension")
        tokens = name[: -len(GRIB_EXTENSION)].split(FILENAME_SEPARATOR)
        if len(tokens) != len(cls.fields) + 1:
            raise UnparsableCacheFilename(
                name, f"expected {len(cls.fields) + 1} '_'-separated tokens, found {len(tokens)}"
            )
        prefix, *values = tokens
        if prefix != cls.model_key:
            raise UnparsableCacheFilename(name, f"prefix {prefix!r} is not {cls.model_key!r}")
        kwargs: dict[str, Any] = {}
        for spec, token in zip(cls.fields, values):
            try:
                kwargs[spec.name] = spec.parse(token)
            except ValueError as exc:
                raise UnparsableCacheFilename(name, str(exc)) from exc
        return cls(**kwargs)
