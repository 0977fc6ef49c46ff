"""Data reshaping utilities."""

import numpy as np
import pandas as pd

from .config import RESHAPE_DEFAULTS
from .errors import ShapeError

__all__ = ["reshape_longer_matrix"]


def _axis_labels(data):
    """Row labels, column labels, and axis names of a 2-D structure."""
    if isinstance(data, pd.DataFrame):
        return (data.index.to_numpy(), data.columns.to_numpy(),
                (data.index.name, data.columns.name))
    n_rows, n_cols = np.shape(data)
    return np.arange(1, n_rows + 1), np.arange(1, n_cols + 1), (None, None)


def reshape_longer_matrix(data, varnames=None, na_rm=False, value_name=None,
                          rev=False):
    """Flatten a labelled matrix into ``(row label, column label, value)`` rows.

    Cells are read column by column, so the row label varies fastest.

    Parameters
    ----------
    data : DataFrame or 2-D array-like
        Unlabelled axes are numbered from 1.
    varnames : pair of str, optional
        Names of the two label columns.  Falls back to the axis names of
        *data*, then to ``('Var1', 'Var2')``.
    na_rm : bool
        Drop cells holding NA.
    value_name : str, optional
        Name of the value column (default ``'value'``).
    rev : bool
        Swap which label lands in the first label column.  The iteration
        order of the cells is unchanged.

    Returns
    -------
    DataFrame
        Columns ``[*varnames*, *value_name*]``, one row per surviving cell.
    """
    if not isinstance(data, pd.DataFrame) and np.ndim(data) != 2:
        raise ShapeError("'data' must be a matrix, 2-D array, or DataFrame")

    if value_name is None:
        value_name = RESHAPE_DEFAULTS["value_name"]
    row_labels, col_labels, axis_names = _axis_labels(data)
    if varnames is None:
        prefix = RESHAPE_DEFAULTS["var_prefix"]
        varnames = [name if name is not None else f"{prefix}{i}"
                    for i, name in enumerate(axis_names, start=1)]
    if len(varnames) != 2:
        raise ShapeError(f"'varnames' must hold 2 names, got {len(varnames)}")

    values = np.asarray(data)
    n_rows, n_cols = values.shape
    labels = [np.tile(row_labels, n_cols), np.repeat(col_labels, n_rows)]
    if rev:
        labels = labels[::-1]

    long = pd.DataFrame({
        varnames[0]: labels[0],
        varnames[1]: labels[1],
        value_name: values.ravel(order="F"),
    })
    if na_rm:
        long = long.loc[long[value_name].notna()].reset_index(drop=True)
    return long
