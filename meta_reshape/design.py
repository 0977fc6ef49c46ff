"""Design matrices: validation, reconciliation, and construction.

A design matrix names, for each variable (or pair of variables), the
column of a wide table that holds a statistic.  Cells without a column
are NA.
"""

import logging

import numpy as np
import pandas as pd

from .errors import ConfigurationError, ShapeError
from .matrix import triangle_indices

__all__ = [
    "check_square_design",
    "reconcile_designs",
    "design_references",
    "null_missing_references",
    "build_es_design",
    "build_other_design",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation & reconciliation
# ---------------------------------------------------------------------------

def check_square_design(design, name):
    """Require *design* to be a DataFrame with matching row and column labels.

    Label order may differ between the two axes.
    """
    if not isinstance(design, pd.DataFrame):
        raise ConfigurationError(
            f"'{name}' must be a matrix (a DataFrame labelled by variable names)"
        )
    if (design.index.has_duplicates or design.columns.has_duplicates
            or set(design.index) != set(design.columns)):
        raise ShapeError(
            f"Row names and column names of '{name}' must contain the same elements"
        )
    return design


def reconcile_designs(es_design, other_design, n_design=None):
    """Pad square and per-variable designs to a common set of variables.

    Variables missing from either design are added as all-NA rows (and
    columns, for the square designs).  The result follows the row order
    of *es_design*, followed by variables only *other_design* knows.

    Returns
    -------
    es_design, other_design, n_design, var_names
    """
    var_names = list(es_design.index)
    known = set(var_names)
    extra = [v for v in other_design.index if v not in known]
    absent = [v for v in var_names if v not in set(other_design.index)]
    if extra or absent:
        logger.debug("Padding es_design with %s and other_design with %s", extra, absent)
    var_names += extra

    es_design = es_design.reindex(index=var_names, columns=var_names)
    if n_design is not None:
        n_design = n_design.reindex(index=var_names, columns=var_names)
    other_design = other_design.reindex(index=var_names)
    return es_design, other_design, n_design, var_names


def design_references(*designs):
    """Distinct non-NA cells of *designs*, in order of first appearance."""
    refs = []
    for design in designs:
        if design is None:
            continue
        refs.extend(v for v in design.to_numpy().ravel(order="F") if not pd.isna(v))
    return list(dict.fromkeys(refs))


def null_missing_references(design, columns):
    """Copy of *design* with cells not naming one of *columns* set to NA."""
    if design is None:
        return None
    return design.where(design.isin(list(columns)))


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def build_es_design(var_names, columns, by_row=False):
    """Square design with *columns* in the lower triangle.

    *columns* are placed in the same order ``reshape_vec2mat`` fills
    covariances: column by column, or row by row when *by_row* is true.

    >>> build_es_design(["X", "Y", "Z"], ["r_XY", "r_XZ", "r_YZ"]).loc["Z", "Y"]
    'r_YZ'
    """
    var_names = list(var_names)
    order = len(var_names)
    rows, cols = triangle_indices(order, by_row=by_row)
    if len(columns) != len(rows):
        raise ShapeError(
            f"{len(columns)} columns supplied for {len(rows)} pairs of {order} variables"
        )
    cells = np.full((order, order), np.nan, dtype=object)
    cells[rows, cols] = np.asarray(list(columns), dtype=object)
    return pd.DataFrame(cells, index=var_names, columns=var_names)


def build_other_design(var_names, **prefixes):
    """Per-variable design whose column *stat* holds ``prefix + var_name``.

    >>> build_other_design(["X", "Y"], rxxi="rel_").loc["Y", "rxxi"]
    'rel_Y'
    """
    var_names = list(var_names)
    return pd.DataFrame(
        {stat: [f"{prefix}{v}" for v in var_names] for stat, prefix in prefixes.items()},
        index=var_names,
        dtype=object,
    )
