"""Assembly of symmetric variance-covariance matrices from triangle vectors."""

import logging

import numpy as np
import pandas as pd

from .config import RESHAPE_DEFAULTS
from .errors import ConfigurationError, ShapeError

__all__ = [
    "triangle_indices",
    "infer_order",
    "reshape_vec2mat",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Triangle helpers
# ---------------------------------------------------------------------------

def triangle_indices(order, by_row=False, diag=False):
    """Lower-triangle ``(rows, cols)`` of an *order* x *order* matrix in fill order.

    ``by_row=False`` walks the lower triangle column by column
    ((2,1), (3,1), ..., (3,2), ...), ``by_row=True`` walks it row by row
    ((2,1), (3,1), (3,2), (4,1), ...).  Diagonal cells are included when
    *diag* is true.
    """
    k = 0 if diag else 1
    if by_row:
        rows, cols = np.tril_indices(order, -k)
    else:
        # Column-major lower triangle == row-major upper triangle, transposed
        cols, rows = np.triu_indices(order, k)
    return rows, cols


def infer_order(n_cells, diag=False):
    """Matrix order whose (strict, unless *diag*) lower triangle holds *n_cells*."""
    root = np.sqrt(8 * n_cells + 1)
    order = (root - 1) / 2 if diag else (root + 1) / 2
    if order != np.round(order):
        raise ShapeError(
            f"length of cov ({n_cells}) does not correspond to a valid number "
            f"of lower-triangle {'elements' if diag else 'correlations'}"
        )
    return int(np.round(order))


def _as_vector(x):
    return np.atleast_1d(np.asarray(x, dtype=float)).ravel()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def reshape_vec2mat(cov=None, var=None, order=None, var_names=None,
                    by_row=False, diag=False):
    """Assemble a symmetric variance-covariance matrix.

    Parameters
    ----------
    cov : float or array-like, optional
        Covariances for the lower triangle.  A scalar is repeated across
        the whole triangle.  Vectors are read column by column
        (``by_row=False``) or row by row (``by_row=True``).  When *diag*
        is true the values also cover the diagonal and supersede *var*.
    var : float or array-like, optional
        Diagonal values (default 1).
    order : int, optional
        Number of variables.  Inferred from *var* or *cov* when omitted.
    var_names : sequence of str, optional
        Labels for both axes.  Defaults to ``Var1, Var2, ...``.
    by_row : bool
    diag : bool

    Returns
    -------
    DataFrame
        Symmetric *order* x *order* matrix labelled by *var_names*.

    Examples
    --------
    >>> reshape_vec2mat(cov=[.3, .2, .4], var_names=["x", "y", "z"])
         x    y    z
    x  1.0  0.3  0.2
    y  0.3  1.0  0.4
    z  0.2  0.4  1.0
    """
    if cov is None and var is None and order is None:
        raise ConfigurationError("cov, var, and/or order must be specified")

    cov = None if cov is None else _as_vector(cov)
    var = None if var is None else _as_vector(var)

    if order is None:
        if var is not None and (var.size > 1 or cov is None):
            order = var.size
        else:
            order = infer_order(cov.size, diag=diag)
        logger.debug("Inferred matrix order %d", order)
    if order != np.round(order) or order < 1:
        raise ShapeError(f"order must be a positive integer, got {order}")
    order = int(np.round(order))

    if diag and cov is not None:
        var = np.zeros(order)
    elif var is None:
        var = np.ones(order)
    elif var.size == 1:
        var = np.repeat(var, order)
    elif var.size != order:
        raise ShapeError(
            f"order ({order}) does not match number of diagonal elements ({var.size})"
        )

    # Diagonal is halved here because symmetrizing doubles it
    mat = np.diag(var / 2)

    if cov is not None and cov.size > 0:
        n_cells = order * (order + 1) // 2 if diag else order * (order - 1) // 2
        if cov.size == 1:
            cov = np.repeat(cov, n_cells)
        if cov.size != n_cells:
            raise ShapeError(
                f"length of cov ({cov.size}) does not match elements in lower "
                f"triangle ({n_cells})"
            )
        rows, cols = triangle_indices(order, by_row=by_row, diag=diag)
        mat[rows, cols] = cov
        if diag:
            mat[np.diag_indices(order)] /= 2

    mat = mat + mat.T

    if var_names is None:
        prefix = RESHAPE_DEFAULTS["var_prefix"]
        var_names = [f"{prefix}{i}" for i in range(1, order + 1)]
    else:
        var_names = list(var_names)
        if len(var_names) != order:
            raise ShapeError(
                f"{len(var_names)} variable names supplied for a matrix of order {order}"
            )

    return pd.DataFrame(mat, index=var_names, columns=var_names)
