"""Dataset descriptors for the supported model families."""

from __future__ import annotations

from .base import BaseDataset, FieldSpec
from .catalog import DatasetCatalog, describe, resolution_of, validate
from .cycles import advance, cycles_between, next_cycle
from .gfs import GFS
from .hrrr import HRRR
from .rap import RAP

MODEL_CLASSES: dict[str, type[BaseDataset]] = {
    "rap": RAP,
    "gfs": GFS,
    "hrrr": HRRR,
}


def get_model_class(model_key: str) -> type[BaseDataset]:
    """Return the descriptor class registered for ``model_key``."""

    model_cls = MODEL_CLASSES.get(model_key.lower())
    if model_cls is None:
        raise ValueError(f"Unsupported model key: {model_key}")
    return model_cls


__all__ = [
    "BaseDataset",
    "DatasetCatalog",
    "FieldSpec",
    "GFS",
    "HRRR",
    "MODEL_CLASSES",
    "RAP",
    "advance",
    "cycles_between",
    "describe",
    "get_model_class",
    "next_cycle",
    "resolution_of",
    "validate",
]
