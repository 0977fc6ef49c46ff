"""Extraction of long-format correlation data from journal-style matrices."""

import logging

import numpy as np
import pandas as pd

from .config import RESHAPE_DEFAULTS
from .errors import ShapeError
from .resolve import resolve_argument
from .utils import reshape_longer_matrix

__all__ = ["reshape_mat2dat"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input normalization
# ---------------------------------------------------------------------------

def _as_names(var_names):
    """Flatten *var_names* to a list of unique strings."""
    if isinstance(var_names, pd.DataFrame):
        values = var_names.to_numpy().ravel()
    else:
        values = np.atleast_1d(np.asarray(var_names, dtype=object)).ravel()
    names = [str(v) for v in values]
    if len(set(names)) != len(names):
        raise ShapeError(f"'var_names' must be unique, got {names}")
    return names


def _as_frame(obj, n_rows, default_name):
    """Coerce a scalar, vector, matrix, dict, or table to an *n_rows*-row DataFrame.

    Unnamed vectors become a single column called *default_name*; unnamed
    matrices get ``<default_name>1``, ``<default_name>2``, ...
    """
    if obj is None:
        return pd.DataFrame(index=pd.RangeIndex(n_rows))

    if isinstance(obj, pd.DataFrame):
        frame = obj.reset_index(drop=True)
    elif isinstance(obj, pd.Series):
        name = obj.name if obj.name is not None else default_name
        frame = obj.reset_index(drop=True).to_frame(name=name)
    elif isinstance(obj, dict):
        frame = pd.DataFrame({k: np.repeat(v, n_rows) if np.ndim(v) == 0 else v
                              for k, v in obj.items()})
    else:
        values = np.asarray(obj)
        if values.ndim == 0:
            values = np.repeat(values, n_rows)
        if values.ndim == 1:
            frame = pd.DataFrame({default_name: values})
        elif values.ndim == 2 and values.shape[1] == 1:
            frame = pd.DataFrame({default_name: values[:, 0]})
        elif values.ndim == 2:
            columns = [f"{default_name}{i}" for i in range(1, values.shape[1] + 1)]
            frame = pd.DataFrame(values, columns=columns)
        else:
            raise ShapeError(f"'{default_name}' must be a scalar, vector, or 2-D table")

    if len(frame) != n_rows:
        raise ShapeError(
            f"'{default_name}' has {len(frame)} rows but there are {n_rows} variables"
        )
    return frame


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def reshape_mat2dat(var_names, cor_data, common_data=None, unique_data=None,
                    diag_label=None, lower_tri=True, data=None):
    """Extract a long-format correlation table from a journal-style matrix.

    Published correlation tables list each variable on a row, with
    descriptive statistics in the leading columns and correlations in a
    triangle of the remaining ones.  Each populated off-diagonal cell
    becomes one output row.

    Parameters
    ----------
    var_names : sequence of str or ColumnRef
        Variable names, in matrix order.
    cor_data : array-like (n, n) or ColumnRef
        Correlation matrix.  Only the triangle selected by *lower_tri*
        is read.
    common_data : scalar, vector, table, or ColumnRef, optional
        Data shared by both variables of a pair (e.g. sample size).
    unique_data : vector, table, or ColumnRef, optional
        Per-variable data (e.g. mean, SD, reliability).  Copied to both
        sides of each pair with ``_x`` / ``_y`` suffixes.
    diag_label : str, optional
        If given, the diagonal of *cor_data* is added to *unique_data*
        under this name.
    lower_tri : bool
        ``True`` if correlations sit in the lower triangle, ``False`` for
        the upper triangle.
    data : DataFrame, optional
        Source table for ``ColumnRef`` arguments.

    Returns
    -------
    DataFrame
        Columns ``x_name, y_name, rxyi``, then common data, then unique
        data for x and for y.  Index runs from 1.
    """
    if data is not None:
        var_names = resolve_argument(var_names, data, arg_name="var_names")
        cor_data = resolve_argument(cor_data, data, arg_name="cor_data",
                                    as_array=True, allow_multiple=True)
        common_data = resolve_argument(common_data, data, arg_name="common_data",
                                       as_array=True, allow_multiple=True)
        unique_data = resolve_argument(unique_data, data, arg_name="unique_data",
                                       as_array=True, allow_multiple=True)

    names = _as_names(var_names)
    n_vars = len(names)
    common = _as_frame(common_data, n_vars, "common_data")
    unique = _as_frame(unique_data, n_vars, "unique_data")

    mat = np.array(cor_data, dtype=float)
    if mat.shape != (n_vars, n_vars):
        raise ShapeError(
            f"'cor_data' must be a {n_vars} x {n_vars} matrix, got shape {mat.shape}"
        )
    if not lower_tri:
        mat = mat.T

    if diag_label is not None:
        unique = unique.assign(**{diag_label: np.diag(mat).copy()})

    mat[np.triu_indices(n_vars)] = np.nan

    x_name, y_name = RESHAPE_DEFAULTS["x_name"], RESHAPE_DEFAULTS["y_name"]
    pairs = reshape_longer_matrix(
        pd.DataFrame(mat, index=names, columns=names),
        varnames=(x_name, y_name),
        na_rm=True,
        value_name=RESHAPE_DEFAULTS["es_name"],
        rev=True,
    )
    logger.debug("Extracted %d pairs from %d variables", len(pairs), n_vars)

    position = {name: i for i, name in enumerate(names)}
    x_pos = pairs[x_name].map(position).to_numpy(dtype=int)
    y_pos = pairs[y_name].map(position).to_numpy(dtype=int)

    out = pd.concat(
        [
            pairs,
            common.iloc[x_pos].reset_index(drop=True),
            unique.iloc[x_pos].reset_index(drop=True).add_suffix(RESHAPE_DEFAULTS["x_suffix"]),
            unique.iloc[y_pos].reset_index(drop=True).add_suffix(RESHAPE_DEFAULTS["y_suffix"]),
        ],
        axis=1,
    )
    out.index = pd.RangeIndex(1, len(out) + 1)
    return out
