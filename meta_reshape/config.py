"""Output column names, suffixes, and reshaping defaults."""

__all__ = [
    "RESHAPE_DEFAULTS",
    "MISSING_COL_ACTIONS",
]

RESHAPE_DEFAULTS = {
    "es_name": "rxyi",
    "missing_col_action": "warn",
    "x_name": "x_name",
    "y_name": "y_name",
    "n_name": "n",
    "x_suffix": "_x",
    "y_suffix": "_y",
    "var_prefix": "Var",
    "value_name": "value",
}

# First entry is the default policy
MISSING_COL_ACTIONS = ("warn", "ignore", "stop")
