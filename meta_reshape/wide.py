"""Design-driven reshaping of wide-format databases to long format."""

import logging
import warnings

import numpy as np
import pandas as pd

from .config import MISSING_COL_ACTIONS, RESHAPE_DEFAULTS
from .design import (
    check_square_design,
    design_references,
    null_missing_references,
    reconcile_designs,
)
from .errors import (
    ConfigurationError,
    MissingColumnError,
    MissingColumnWarning,
    ShapeError,
)

__all__ = ["reshape_wide2long"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _is_scalar_design(design):
    return not isinstance(design, pd.DataFrame) and np.size(design) == 1


def _normalize_n_design(n_design, es_design):
    """Broadcast a single sample-size column, or validate a square n design."""
    if n_design is None:
        return None
    if _is_scalar_design(n_design):
        column = np.ravel(np.asarray(n_design, dtype=object))[0]
        if es_design is None:
            logger.debug("Ignoring n_design %r: no es_design to pair it with", column)
            return None
        return pd.DataFrame(column, index=es_design.index, columns=es_design.columns,
                            dtype=object)
    if not isinstance(n_design, pd.DataFrame):
        raise ConfigurationError("'n_design' must be a matrix if it has more than 1 element")
    check_square_design(n_design, "n_design")
    if es_design is None or set(n_design.index) != set(es_design.index):
        raise ShapeError(
            "Row and column names of 'es_design' and 'n_design' must contain the same elements"
        )
    return n_design


def _select_block(data, common_vars, selected):
    """Copy *common_vars* and the columns named in *selected* under new names.

    *selected* maps output names to source columns; NA sources give an
    all-NA output column.
    """
    block = pd.DataFrame({c: data[c].to_numpy() for c in common_vars},
                         index=pd.RangeIndex(len(data)))
    for out_name, source in selected.items():
        block[out_name] = np.nan if pd.isna(source) else data[source].to_numpy()
    return block


def _stack_blocks(blocks, columns):
    if blocks:
        out = pd.concat(blocks, ignore_index=True).reindex(columns=columns)
    else:
        out = pd.DataFrame(columns=columns)
    out.index = pd.RangeIndex(1, len(out) + 1)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def reshape_wide2long(data, common_vars=None, es_design=None, n_design=None,
                      other_design=None, es_name=None, missing_col_action=None):
    """Reshape a wide database (one column per construct pair) to long format.

    Parameters
    ----------
    data : DataFrame
        Wide-format database.
    common_vars : str or list of str, optional
        Columns copied verbatim into every output row (e.g. sample IDs).
    es_design : DataFrame, optional
        Square design, labelled by variable names on both axes, naming
        the effect-size column for each pair in its lower triangle
        (row = second variable, column = first variable).
    n_design : str or DataFrame, optional
        A single sample-size column used for every pair, or a square
        design laid out like *es_design*.
    other_design : DataFrame, optional
        Variables on the rows, long-format statistics on the columns,
        source column names in the cells.
    es_name : str, optional
        Output name of the effect size (default ``'rxyi'``).
    missing_col_action : {'warn', 'ignore', 'stop'}, optional
        What to do when a design cell names a column absent from *data*.
        Under ``'warn'`` and ``'ignore'`` such cells are treated as NA.

    Returns
    -------
    DataFrame
        Pairwise mode (with *es_design*): ``common_vars, n, <es_name>,
        <stat>_x..., <stat>_y..., x_name, y_name``, one row per wide row
        per designed pair.  Variable mode (without *es_design*):
        ``common_vars, <stat>..., x_name``.  Index runs from 1.
    """
    if es_name is None:
        es_name = RESHAPE_DEFAULTS["es_name"]
    if missing_col_action is None:
        missing_col_action = RESHAPE_DEFAULTS["missing_col_action"]
    if missing_col_action not in MISSING_COL_ACTIONS:
        raise ConfigurationError(
            f"missing_col_action must be one of {MISSING_COL_ACTIONS}, got {missing_col_action!r}"
        )
    if es_design is None and other_design is None:
        raise ConfigurationError("Either 'es_design' or 'other_design' must be provided")

    data = pd.DataFrame(data)
    if common_vars is None:
        common_vars = []
    elif isinstance(common_vars, str):
        common_vars = [common_vars]
    else:
        common_vars = list(common_vars)
    absent_common = [c for c in common_vars if c not in data.columns]
    if absent_common:
        raise ShapeError(f"'common_vars' not found in data: {absent_common}")

    if es_design is not None:
        check_square_design(es_design, "es_design")
    n_design = _normalize_n_design(n_design, es_design)
    if other_design is not None:
        if not isinstance(other_design, pd.DataFrame):
            raise ConfigurationError("'other_design' must be a matrix")
        if other_design.index.has_duplicates:
            raise ShapeError("Row names of 'other_design' must be unique")

    if es_design is not None and other_design is not None:
        es_design, other_design, n_design, var_names = reconcile_designs(
            es_design, other_design, n_design,
        )
    elif es_design is not None:
        var_names = list(es_design.index)
        other_design = pd.DataFrame(index=var_names, dtype=object)
    else:
        var_names = list(other_design.index)

    refs = design_references(es_design, n_design, other_design)
    missing = [r for r in refs if r not in data.columns]
    if missing:
        msg = (
            "One or more non-NA elements in 'es_design', 'n_design', or 'other_design' "
            f"are not valid columns in 'data': {missing}"
        )
        if missing_col_action == "stop":
            raise MissingColumnError(msg, missing)
        if missing_col_action == "warn":
            warnings.warn(f"{msg}. These cells have been dropped", MissingColumnWarning,
                          stacklevel=2)
        logger.info("Dropping design cells for missing columns: %s", missing)
        es_design = null_missing_references(es_design, data.columns)
        n_design = null_missing_references(n_design, data.columns)
        other_design = null_missing_references(other_design, data.columns)

    x_name, y_name = RESHAPE_DEFAULTS["x_name"], RESHAPE_DEFAULTS["y_name"]
    other_cols = list(other_design.columns)
    blocks = []

    if es_design is None:
        for x in var_names:
            cells = other_design.loc[x]
            if cells.isna().all():
                logger.debug("Skipping variable %s: no columns in other_design", x)
                continue
            block = _select_block(data, common_vars, {c: cells[c] for c in other_cols})
            block[x_name] = x
            blocks.append(block)
        return _stack_blocks(blocks, common_vars + other_cols + [x_name])

    n_name = RESHAPE_DEFAULTS["n_name"]
    x_stats = [f"{c}{RESHAPE_DEFAULTS['x_suffix']}" for c in other_cols]
    y_stats = [f"{c}{RESHAPE_DEFAULTS['y_suffix']}" for c in other_cols]

    for i, y in enumerate(var_names):
        for x in var_names[:i]:
            es_col = es_design.at[y, x]
            if pd.isna(es_col):
                logger.debug("Skipping pair (%s, %s): no effect-size column", x, y)
                continue
            selected = {}
            if n_design is not None:
                selected[n_name] = n_design.at[y, x]
            selected[es_name] = es_col
            selected.update(zip(x_stats, other_design.loc[x, other_cols]))
            selected.update(zip(y_stats, other_design.loc[y, other_cols]))

            block = _select_block(data, common_vars, selected)
            block[x_name] = x
            block[y_name] = y
            blocks.append(block)

    columns = (common_vars + ([n_name] if n_design is not None else []) + [es_name]
               + x_stats + y_stats + [x_name, y_name])
    return _stack_blocks(blocks, columns)
