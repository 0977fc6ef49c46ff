"""Shared fixtures: a journal-style correlation table and a wide database."""

import numpy as np
import pandas as pd
import pytest

from meta_reshape import build_es_design, build_other_design, reshape_vec2mat

VAR_NAMES = ["X", "Y", "Z"]


@pytest.fixture
def journal_table():
    """Published layout: names, n, descriptives, then the correlation matrix."""
    mat = reshape_vec2mat(cov=[.3, .4, .5])
    table = pd.DataFrame({
        "var_names": VAR_NAMES,
        "n": [100, 100, 100],
        "mean": [4.0, 5.0, 3.0],
        "sd": [2.4, 2.6, 2.0],
        "rel": [.8, .7, .85],
    })
    return pd.concat([table, mat.reset_index(drop=True)], axis=1)


@pytest.fixture
def wide_data():
    """Two samples, three correlations, per-variable reliabilities."""
    return pd.DataFrame({
        "sample_id": [1, 2],
        "ni": [100, 200],
        "rxyi_X_Y": [.1, .2],
        "rxyi_X_Z": [.3, .4],
        "rxyi_Y_Z": [.5, .6],
        "rel_X": [.80, .81],
        "rel_Y": [.70, .71],
        "rel_Z": [.90, .91],
    })


@pytest.fixture
def es_design():
    return build_es_design(VAR_NAMES, ["rxyi_X_Y", "rxyi_X_Z", "rxyi_Y_Z"])


@pytest.fixture
def other_design():
    return build_other_design(VAR_NAMES, rxxi="rel_")


@pytest.fixture
def lower_triangle():
    """Strict lower triangle of a 4 x 4 matrix, column by column."""
    return np.array([.1, .2, .3, .4, .5, .6])
