"""meta-reshape: convert correlation tables between journal, wide, and long layouts.

Usage::

    import meta_reshape as mr

    mat = mr.reshape_vec2mat(cov=[.3, .4, .5], var_names=["X", "Y", "Z"])
    long = mr.reshape_mat2dat(var_names=["X", "Y", "Z"], cor_data=mat,
                              common_data=100, unique_data={"rel": [.8, .7, .85]})
"""

__version__ = "0.1.0"

# -- Config --
from .config import (
    RESHAPE_DEFAULTS,
    MISSING_COL_ACTIONS,
)

# -- Errors --
from .errors import (
    ShapeError,
    ConfigurationError,
    MissingColumnError,
    MissingColumnWarning,
)

# -- Matrix assembly --
from .matrix import (
    triangle_indices,
    infer_order,
    reshape_vec2mat,
)

# -- Column resolution --
from .resolve import (
    ColumnRef,
    resolve_argument,
)

# -- Design matrices --
from .design import (
    check_square_design,
    reconcile_designs,
    design_references,
    null_missing_references,
    build_es_design,
    build_other_design,
)

# -- Reshaping --
from .extract import reshape_mat2dat
from .wide import reshape_wide2long

# -- Utilities --
from .utils import reshape_longer_matrix
