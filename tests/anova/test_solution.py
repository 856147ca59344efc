"""
Tests for the solution wrappers, report formatting and example datasets.
"""

import numpy as np
import pytest

from pyfieldstat.anova import analyze, posthoc, significance_stars
from pyfieldstat.anova.datasets import EXAMPLES, load_example
from pyfieldstat.anova.solution import format_p_value
from pyfieldstat.core.exceptions import ValidationError


class TestAnovaSummary:

    def test_crd_report(self, crd_matrix):
        text = analyze(crd_matrix, 'CRD').summary()
        assert "Completely Randomized Design (CRD)" in text
        assert "Treatments: 4" in text
        assert "Observations: 12" in text
        for term in ('Genotype', 'Error', 'Total'):
            assert term in text
        assert "Replication " not in text
        assert "Coefficient of Variation (CV): 4.59%" in text
        assert "Grand Mean" in text
        assert "T4" in text

    def test_rbd_report_with_warnings(self, rbd_matrix):
        text = analyze(rbd_matrix, 'RBD').summary()
        assert "Randomized Block Design (RBD)" in text
        assert "Replication" in text
        assert "Warnings:" in text
        assert "error mean square is 0" in text

    def test_lsd_report(self, lsd_matrix):
        text = analyze(lsd_matrix, 'LSD').summary()
        assert "Latin Square Design (LSD)" in text
        assert "Row+Column" in text

    def test_repr(self, crd_matrix):
        r = repr(analyze(crd_matrix, 'CRD'))
        assert r.startswith("AnovaSolution(design='CRD'")
        assert "treatments=4" in r


class TestPostHocSummary:

    def test_report(self, crd_matrix):
        tukey = posthoc(crd_matrix, analyze(crd_matrix, 'CRD'))
        text = tukey.summary()
        assert text.startswith("Tukey HSD")
        assert "T2 vs T3" in text
        assert "q critical = 3.6300" in text

    def test_repr(self, crd_matrix):
        tukey = posthoc(crd_matrix, analyze(crd_matrix, 'CRD'))
        assert repr(tukey) == (
            "PostHocSolution(method='tukey', n_comparisons=6, n_significant=3)"
        )


class TestSignificanceStars:

    @pytest.mark.parametrize("p,stars", [
        (0.0, '***'), (0.0009, '***'), (0.001, '**'), (0.009, '**'),
        (0.01, '*'), (0.049, '*'), (0.05, 'ns'), (1.0, 'ns'),
    ])
    def test_codes(self, p, stars):
        assert significance_stars(p) == stars

    def test_missing(self):
        assert significance_stars(None) == ""
        assert significance_stars(float('nan')) == ""

    def test_crd_example_is_highly_significant(self, crd_matrix):
        assert significance_stars(analyze(crd_matrix, 'CRD').p_treatment) == '**'


class TestFormatPValue:

    def test_small(self):
        assert format_p_value(1e-7) == "<0.0001"

    def test_regular(self):
        assert format_p_value(0.0123) == "0.012300"

    def test_none(self):
        assert format_p_value(None) == ""


class TestDatasets:

    @pytest.mark.parametrize("design", ['CRD', 'RBD', 'LSD'])
    def test_examples_analyse(self, design):
        result = analyze(load_example(design), design)
        assert result.design == design

    def test_returns_copy(self):
        m = load_example('crd')
        m[0, 0] = -1.0
        assert EXAMPLES['CRD'][0, 0] == 12.5

    def test_lsd_example_square(self):
        m = load_example('LSD')
        assert m.shape[0] == m.shape[1]
        assert np.all(np.isfinite(m))

    def test_unknown(self):
        with pytest.raises(ValidationError, match="design must be one of"):
            load_example('SPLIT')

    def test_non_string(self):
        with pytest.raises(ValidationError):
            load_example(None)
