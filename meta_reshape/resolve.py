"""Resolution of column references against a source table."""

from dataclasses import dataclass

import pandas as pd

from .errors import ConfigurationError, ShapeError

__all__ = ["ColumnRef", "resolve_argument"]


@dataclass(frozen=True)
class ColumnRef:
    """Names one or more columns of the ``data`` argument.

    Wrap a column name in ``ColumnRef`` to have it looked up in ``data``;
    any other value is used as-is.

    >>> ColumnRef(["mean", "sd"]).columns
    ('mean', 'sd')
    """

    columns: tuple

    def __init__(self, columns):
        if isinstance(columns, str):
            columns = (columns,)
        object.__setattr__(self, "columns", tuple(columns))
        if not self.columns:
            raise ConfigurationError("ColumnRef needs at least one column name")


def resolve_argument(arg, data=None, *, arg_name="argument", as_array=False,
                     allow_multiple=False):
    """Return *arg* itself, or the columns of *data* it references.

    Parameters
    ----------
    arg : ColumnRef or any literal
    data : DataFrame, optional
        Source table for ``ColumnRef`` arguments.
    arg_name : str
        Used in error messages.
    as_array : bool
        Return a single resolved column as a one-column DataFrame
        instead of a Series.
    allow_multiple : bool
        Permit references to more than one column.

    Returns
    -------
    object, Series, or DataFrame
    """
    if not isinstance(arg, ColumnRef):
        return arg
    if data is None:
        raise ConfigurationError(
            f"'{arg_name}' references columns {list(arg.columns)} but no data was supplied"
        )
    data = pd.DataFrame(data)
    if len(arg.columns) > 1 and not allow_multiple:
        raise ConfigurationError(f"'{arg_name}' must reference a single column")

    missing = [c for c in arg.columns if c not in data.columns]
    if missing:
        raise ShapeError(f"Columns referenced by '{arg_name}' not found in data: {missing}")

    if len(arg.columns) == 1 and not as_array:
        return data[arg.columns[0]]
    return data[list(arg.columns)]
