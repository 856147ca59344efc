"""
Tests for AnovaDesign construction, text parsing and shape validation.
"""

import numpy as np
import pytest

from pyfieldstat.core.exceptions import DimensionError, ValidationError
from pyfieldstat.anova import AnovaDesign, parse_matrix, validate_shape


# =====================================================================
# AnovaDesign.for_matrix
# =====================================================================


class TestForMatrix:

    def test_shape_fields(self, crd_matrix):
        d = AnovaDesign.for_matrix(crd_matrix, 'CRD')
        assert d.design == 'CRD'
        assert d.n_treatments == 4
        assert d.n_replications == 3
        assert d.n == 12
        assert d.columns is None

    def test_nested_list(self):
        d = AnovaDesign.for_matrix([[1, 2], [3, 4], [5, 6]], 'RBD')
        assert d.y.dtype == np.float64
        assert d.y.shape == (3, 2)

    def test_design_case_insensitive(self, crd_matrix):
        assert AnovaDesign.for_matrix(crd_matrix, ' rbd ').design == 'RBD'

    def test_default_design_is_crd(self, crd_matrix):
        assert AnovaDesign.for_matrix(crd_matrix).design == 'CRD'

    def test_y_is_read_only_copy(self, crd_matrix):
        d = AnovaDesign.for_matrix(crd_matrix, 'CRD')
        assert d.y is not crd_matrix
        assert not d.y.flags.writeable
        crd_matrix[0, 0] = 999.0
        assert d.y[0, 0] == 12.5

    def test_unknown_design(self, crd_matrix):
        with pytest.raises(ValidationError, match="design must be one of"):
            AnovaDesign.for_matrix(crd_matrix, 'SPLIT')

    def test_non_string_design(self, crd_matrix):
        with pytest.raises(ValidationError, match="design"):
            AnovaDesign.for_matrix(crd_matrix, 3)

    def test_unequal_replication(self):
        with pytest.raises(ValidationError, match="equal replication"):
            AnovaDesign.for_matrix([[1, 2, 3], [4, 5, 6], [7, 8]], 'CRD')

    def test_single_treatment(self):
        with pytest.raises(ValidationError, match="at least 2 groups"):
            AnovaDesign.for_matrix([[1.0, 2.0, 3.0]], 'CRD')

    def test_one_dimensional(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            AnovaDesign.for_matrix([1.0, 2.0, 3.0], 'CRD')

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            AnovaDesign.for_matrix([[1.0, np.nan], [2.0, 3.0]], 'CRD')

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            AnovaDesign.for_matrix([["a", "b"], ["c", "d"]], 'CRD')

    def test_single_replication_allowed(self):
        d = AnovaDesign.for_matrix([[1.0], [2.0], [3.0]], 'CRD')
        assert d.n_replications == 1


# =====================================================================
# Latin square layout
# =====================================================================


class TestLatinSquare:

    def test_not_square(self):
        with pytest.raises(ValidationError, match="square"):
            AnovaDesign.for_matrix(np.ones((3, 4)), 'LSD')

    def test_square_not_required_for_rbd(self):
        assert AnovaDesign.for_matrix(np.ones((3, 4)), 'RBD').n == 12

    def test_default_cyclic_layout(self, lsd_matrix):
        d = AnovaDesign.for_matrix(lsd_matrix, 'LSD')
        expected = np.array([[0, 1, 2], [1, 2, 0], [2, 0, 1]])
        np.testing.assert_array_equal(d.columns, expected)
        assert not d.columns.flags.writeable

    def test_explicit_layout(self, lsd_matrix):
        layout = [[2, 0, 1], [0, 1, 2], [1, 2, 0]]
        d = AnovaDesign.for_matrix(lsd_matrix, 'LSD', columns=layout)
        np.testing.assert_array_equal(d.columns, layout)

    def test_layout_wrong_shape(self, lsd_matrix):
        with pytest.raises(DimensionError, match="columns") as exc_info:
            AnovaDesign.for_matrix(lsd_matrix, 'LSD', columns=np.zeros((2, 2), dtype=int))
        assert exc_info.value.expected_shape == (3, 3)

    def test_layout_not_integer(self, lsd_matrix):
        with pytest.raises(ValidationError, match="integer"):
            AnovaDesign.for_matrix(lsd_matrix, 'LSD', columns=np.zeros((3, 3)))

    def test_layout_repeats_column_for_treatment(self, lsd_matrix):
        layout = [[0, 0, 1], [1, 2, 0], [2, 1, 2]]
        with pytest.raises(ValidationError, match="treatment T1"):
            AnovaDesign.for_matrix(lsd_matrix, 'LSD', columns=layout)

    def test_layout_repeats_column_in_replication(self, lsd_matrix):
        layout = [[0, 1, 2], [0, 1, 2], [0, 1, 2]]
        with pytest.raises(ValidationError, match="replication 1"):
            AnovaDesign.for_matrix(lsd_matrix, 'LSD', columns=layout)

    def test_layout_rejected_for_other_designs(self, crd_matrix):
        with pytest.raises(ValidationError, match="only used by the LSD"):
            AnovaDesign.for_matrix(crd_matrix, 'CRD', columns=np.zeros((4, 3), dtype=int))


# =====================================================================
# Text input
# =====================================================================


class TestParseMatrix:

    def test_mixed_separators(self):
        rows = parse_matrix("12.5 13.2, 14.1\n\n11.8\t12.4  13.0\n")
        assert rows == [[12.5, 13.2, 14.1], [11.8, 12.4, 13.0]]

    def test_negative_and_exponent(self):
        assert parse_matrix("-1.5 2e3") == [[-1.5, 2000.0]]

    @pytest.mark.parametrize("text", ["", "   \n\t\n"])
    def test_no_data(self, text):
        with pytest.raises(ValidationError, match="no data entered"):
            parse_matrix(text)

    def test_invalid_token(self):
        with pytest.raises(ValidationError, match="invalid number 'abc' at line 2"):
            parse_matrix("1 2\n3 abc")

    def test_separator_only_row(self):
        with pytest.raises(ValidationError, match="empty row detected at line 2"):
            parse_matrix("1 2\n,,\n3 4")

    def test_ragged_rows_returned(self):
        # Shape is checked by AnovaDesign, not by the parser
        assert parse_matrix("1 2 3\n4 5") == [[1.0, 2.0, 3.0], [4.0, 5.0]]


class TestFromText:

    def test_matches_array_input(self, crd_matrix):
        text = "\n".join(" ".join(str(v) for v in row) for row in crd_matrix)
        d = AnovaDesign.from_text(text, 'CRD')
        np.testing.assert_array_equal(d.y, crd_matrix)

    def test_ragged_text(self):
        with pytest.raises(ValidationError, match="equal replication"):
            AnovaDesign.from_text("1 2 3\n4 5 6\n7 8", 'CRD')


class TestValidateShape:

    def test_returns_dimensions(self, crd_matrix):
        assert validate_shape(crd_matrix, 'RBD') == (4, 3)

    def test_lsd_requires_square(self, crd_matrix):
        with pytest.raises(ValidationError, match="square"):
            validate_shape(crd_matrix, 'LSD')
