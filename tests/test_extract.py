"""Tests for journal-matrix to long-format extraction."""

import numpy as np
import pandas as pd
import pytest

from meta_reshape import ColumnRef, ShapeError, reshape_mat2dat, reshape_vec2mat

COR_COLS = ["Var1", "Var2", "Var3"]


class TestReshapeMat2Dat:
    """Pairs, values, and attached variable data."""

    def test_lower_triangle_pairs(self):
        mat = reshape_vec2mat(cov=[.3, .4, .5])
        out = reshape_mat2dat(var_names=["X", "Y", "Z"], cor_data=mat)
        assert list(out.columns) == ["x_name", "y_name", "rxyi"]
        assert out["x_name"].tolist() == ["X", "X", "Y"]
        assert out["y_name"].tolist() == ["Y", "Z", "Z"]
        np.testing.assert_allclose(out["rxyi"], [.3, .4, .5])
        assert out.index.tolist() == [1, 2, 3]

    def test_column_references(self, journal_table):
        out = reshape_mat2dat(
            var_names=ColumnRef("var_names"),
            cor_data=ColumnRef(COR_COLS),
            common_data=ColumnRef("n"),
            unique_data=ColumnRef(["mean", "sd", "rel"]),
            data=journal_table,
        )
        assert list(out.columns) == [
            "x_name", "y_name", "rxyi", "n",
            "mean_x", "sd_x", "rel_x", "mean_y", "sd_y", "rel_y",
        ]
        assert out["n"].tolist() == [100, 100, 100]
        assert out["mean_x"].tolist() == [4.0, 4.0, 5.0]
        assert out["mean_y"].tolist() == [5.0, 3.0, 3.0]

    def test_literal_arguments_match_references(self, journal_table):
        by_ref = reshape_mat2dat(
            var_names=ColumnRef("var_names"),
            cor_data=ColumnRef(COR_COLS),
            common_data=ColumnRef("n"),
            unique_data=ColumnRef(["mean", "sd", "rel"]),
            data=journal_table,
        )
        literal = reshape_mat2dat(
            var_names=journal_table["var_names"],
            cor_data=journal_table[COR_COLS],
            common_data=journal_table["n"],
            unique_data=journal_table[["mean", "sd", "rel"]],
        )
        pd.testing.assert_frame_equal(by_ref, literal)

    def test_mixed_arguments(self, journal_table):
        out = reshape_mat2dat(
            var_names=journal_table["var_names"],
            cor_data=journal_table[COR_COLS].to_numpy(),
            common_data=ColumnRef("n"),
            unique_data=ColumnRef(["mean", "sd", "rel"]),
            data=journal_table,
        )
        assert len(out) == 3
        assert "rel_y" in out.columns

    def test_unnamed_vectors(self):
        out = reshape_mat2dat(
            var_names=["X", "Y", "Z"],
            cor_data=reshape_vec2mat(cov=[.3, .4, .5]),
            common_data=np.array([100, 100, 100]),
            unique_data=[.8, .7, .85],
        )
        assert list(out.columns[3:]) == ["common_data", "unique_data_x", "unique_data_y"]
        assert out["unique_data_y"].tolist() == [.7, .85, .85]

    def test_scalar_common_data(self):
        out = reshape_mat2dat(["X", "Y"], reshape_vec2mat(cov=.2), common_data=50)
        assert out["common_data"].tolist() == [50]

    def test_dict_of_scalars(self):
        out = reshape_mat2dat(["X", "Y", "Z"], reshape_vec2mat(cov=[.3, .4, .5]),
                              common_data={"n": 5, "study": "s1"},
                              unique_data={"rel": [.8, .7, .85]})
        assert out["n"].tolist() == [5, 5, 5]
        assert out["study"].tolist() == ["s1"] * 3
        assert out["rel_x"].tolist() == [.8, .8, .7]

    def test_upper_triangle(self):
        upper = np.array([[1.0, .3, .4],
                          [np.nan, 1.0, .5],
                          [np.nan, np.nan, 1.0]])
        out = reshape_mat2dat(["X", "Y", "Z"], upper, lower_tri=False)
        np.testing.assert_allclose(out["rxyi"], [.3, .4, .5])
        assert out["y_name"].tolist() == ["Y", "Z", "Z"]

    def test_transposed_source_is_commutative(self):
        mat = reshape_vec2mat(cov=[.3, .4, .5, .6, .7, .8]).to_numpy(copy=True)
        mat[np.triu_indices(4, 1)] = np.nan
        names = ["A", "B", "C", "D"]
        lower = reshape_mat2dat(names, mat)
        upper = reshape_mat2dat(names, mat.T, lower_tri=False)
        pd.testing.assert_frame_equal(lower, upper)

    def test_diag_label(self):
        mat = reshape_vec2mat(cov=[.3, .4, .5], var=[.8, .7, .9])
        out = reshape_mat2dat(["X", "Y", "Z"], mat,
                              unique_data=pd.DataFrame({"mean": [1, 2, 3]}),
                              diag_label="rxx")
        assert list(out.columns[3:]) == ["mean_x", "rxx_x", "mean_y", "rxx_y"]
        np.testing.assert_allclose(out["rxx_x"], [.8, .8, .7])
        np.testing.assert_allclose(out["rxx_y"], [.7, .9, .9])

    def test_missing_correlation_dropped(self):
        mat = reshape_vec2mat(cov=[.3, .4, .5]).to_numpy(copy=True)
        mat[2, 0] = np.nan
        out = reshape_mat2dat(["X", "Y", "Z"], mat)
        assert len(out) == 2
        assert list(zip(out["x_name"], out["y_name"])) == [("X", "Y"), ("Y", "Z")]

    def test_row_count(self):
        n = 6
        mat = reshape_vec2mat(cov=np.linspace(.1, .5, n * (n - 1) // 2))
        out = reshape_mat2dat([f"v{i}" for i in range(n)], mat)
        assert len(out) == n * (n - 1) // 2


class TestReshapeMat2DatErrors:
    """Shape validation."""

    def test_matrix_size_mismatch(self):
        with pytest.raises(ShapeError, match="3 x 3"):
            reshape_mat2dat(["X", "Y", "Z"], np.eye(2))

    def test_duplicate_names(self):
        with pytest.raises(ShapeError, match="unique"):
            reshape_mat2dat(["X", "X"], np.eye(2))

    def test_attribute_rows(self):
        with pytest.raises(ShapeError, match="rows"):
            reshape_mat2dat(["X", "Y"], np.eye(2), unique_data=[1, 2, 3])
