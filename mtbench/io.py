"""Input/output helpers for benchmark results."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import xarray as xr

LOGGER = logging.getLogger(__name__)

__all__ = ["load_metadata", "save_results"]


def load_metadata(path: str | Path) -> dict[str, Any]:
    """Read the JSON object stored at *path*.

    The object is embedded as attributes into every written dataset, so it
    must be a mapping at the top level.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Metadata file {path!s} not found")

    with path.open("r", encoding="utf-8") as handle:
        metadata = json.load(handle)
    if not isinstance(metadata, dict):
        raise ValueError(f"Metadata in {path!s} must be a JSON object")
    return metadata


def save_results(outputs: Mapping[str, xr.Dataset], output_dir: str | Path) -> list[Path]:
    """Persist datasets to NetCDF files.

    The *outputs* mapping should associate a relative file name with the
    :class:`xarray.Dataset` that is to be saved.  The written paths are
    returned in the order of *outputs*.
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for filename, dataset in outputs.items():
        path = output_dir / filename
        LOGGER.info("Writing %s", path)
        dataset.to_netcdf(path)
        written.append(path)
    return written
