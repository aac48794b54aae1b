"""
Data Loading for smoke plots.

Fields are stored as one zarr array per column under ``fields/`` in the run
artifacts.
"""

from pathlib import Path

import numpy as np
import pandas as pd
import zarr

FIELD_NAMES = ("x", "y", "u", "v", "density")


def save_fields_to_zarr(fields, directory: Path) -> list[Path]:
    """Write each field column as ``<name>.zarr`` into ``directory``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in FIELD_NAMES:
        zarr_path = directory / f"{name}.zarr"
        zarr.save(str(zarr_path), np.asarray(getattr(fields, name)))
        paths.append(zarr_path)
    return paths


def load_fields_from_zarr(artifact_dir: Path) -> dict:
    """Load solution fields from zarr artifacts."""
    fields_dir = Path(artifact_dir) / "fields"
    if not fields_dir.exists():
        raise FileNotFoundError(f"Fields directory not found: {fields_dir}")

    fields = {}
    for name in FIELD_NAMES:
        zarr_path = fields_dir / f"{name}.zarr"
        if not zarr_path.exists():
            raise FileNotFoundError(f"Field not found: {zarr_path}")
        fields[name] = np.asarray(zarr.load(str(zarr_path)))

    return fields


def fields_to_dataframe(fields: dict) -> pd.DataFrame:
    """Flattened fields dict to a DataFrame with one row per cell."""
    return pd.DataFrame({name: np.ravel(fields[name]) for name in FIELD_NAMES})
