"""
Reading value vectors and writing partition labels.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_TABLE_SEPARATORS = {".csv": ",", ".tsv": "\t"}


def _strip_compression(path: Path) -> str:
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    return suffixes[-1] if suffixes else ""


def load_vector(path: Union[str, Path], column: Optional[str] = None) -> np.ndarray:
    """
    Load a 1-D vector of values.

    Parameters
    ----------
    path : str or Path
        ``.npy`` array, whitespace separated ``.txt``, or a ``.csv``/``.tsv``
        table (optionally gzip compressed)
    column : str, optional
        Column to read from a table (name) or a 2-D ``.npy`` array (index).
        Defaults to the only column, or the first numeric column when a
        table has several.

    Returns
    -------
    np.ndarray
        float64 vector
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = _strip_compression(path)
    if suffix == ".npy":
        vector = np.load(path)
        if vector.ndim == 2:
            if column is None:
                raise ValueError(
                    f"{path} holds a {vector.shape} matrix; pass a column index to select one vector"
                )
            vector = vector[:, int(column)]
        elif vector.ndim != 1:
            raise ValueError(f"{path} holds an array of shape {vector.shape}, expected a vector")
        vector = np.asarray(vector, dtype=np.float64)
    elif suffix in _TABLE_SEPARATORS:
        df = pd.read_csv(path, sep=_TABLE_SEPARATORS[suffix])
        if column is None:
            numeric = df.select_dtypes(include="number")
            if numeric.shape[1] == 0:
                raise ValueError(f"No numeric column found in {path}")
            column = numeric.columns[0]
            if numeric.shape[1] > 1:
                logger.warning(f"{path.name} has {numeric.shape[1]} numeric columns, using '{column}'")
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not found in {path}. Available: {list(df.columns)}")
        vector = df[column].to_numpy(dtype=np.float64)
    else:
        df = pd.read_csv(path, sep=r"\s+", header=None)
        vector = df.to_numpy(dtype=np.float64).ravel()

    logger.info(f"Loaded {len(vector)} values from {path}")
    return vector


def save_labels(
    path: Union[str, Path],
    labels: np.ndarray,
    values: np.ndarray,
) -> pd.DataFrame:
    """
    Write one row per input position with its value and group label.

    The output is tab separated, gzip compressed when ``path`` ends in ``.gz``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(
        {
            "index": np.arange(len(labels)),
            "value": values,
            "group": labels,
        }
    )
    df.to_csv(path, sep="\t", index=False)
    logger.info(f"Saved labels for {len(df)} values to {path}")
    return df
