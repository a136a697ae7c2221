"""
Unit tests for window functions.

Tests the closed-form Hamming and Exact Blackman weights at their boundary
values and the scipy-built lookup tables the detector indexes.
"""

import pytest
import numpy as np


class TestHamming:
    """Test the Hamming weight."""

    @pytest.mark.parametrize("n", [8, 200, 205])
    def test_boundary_values(self, n):
        """Verify w(0) = w(N) = 0.08 and w(N/2) = 1.0."""
        from goertzel_detector.detection.windows import hamming

        assert hamming(0, n) == pytest.approx(0.08)
        assert hamming(n, n) == pytest.approx(0.08)
        assert hamming(n / 2, n) == pytest.approx(1.0)

    def test_symmetry(self):
        """Verify w(i) = w(N - i)."""
        from goertzel_detector.detection.windows import hamming

        for i in range(1, 100):
            assert hamming(i, 200) == pytest.approx(hamming(200 - i, 200))

    def test_zero_length_rejected(self):
        """Verify N = 0 raises instead of dividing by zero."""
        from goertzel_detector.detection.windows import hamming

        with pytest.raises(ValueError):
            hamming(3, 0)


class TestExactBlackman:
    """Test the Exact Blackman weight."""

    @pytest.mark.parametrize("n", [8, 200, 205])
    def test_boundary_values(self, n):
        """Verify w(0) = w(N) = a0 - a1 + a2 and w(N/2) = a0 + a1 + a2 = 1."""
        from goertzel_detector.detection.windows import exact_blackman

        edge = 0.426591 - 0.496561 + 0.076848
        assert exact_blackman(0, n) == pytest.approx(edge)
        assert exact_blackman(n, n) == pytest.approx(edge)
        assert exact_blackman(n / 2, n) == pytest.approx(1.0)

    def test_edge_value(self):
        """Verify the edge weight is the small positive 0.006878."""
        from goertzel_detector.detection.windows import exact_blackman

        assert exact_blackman(0, 64) == pytest.approx(0.006878, abs=1e-9)

    def test_zero_length_rejected(self):
        """Verify N = 0 raises instead of dividing by zero."""
        from goertzel_detector.detection.windows import exact_blackman

        with pytest.raises(ValueError):
            exact_blackman(0, 0)


class TestWindowDispatch:
    """Test window_weight and window_table."""

    def test_none_is_unity(self):
        """Verify the rectangular window weighs every sample by 1."""
        from goertzel_detector.detection.windows import window_weight
        from goertzel_detector.interfaces.data_models import WindowMode

        assert window_weight(WindowMode.NONE, 5, 0) == 1.0
        assert window_weight(WindowMode.NONE, 5, 10) == 1.0

    def test_weight_dispatch(self):
        """Verify window_weight routes to the matching closed form."""
        from goertzel_detector.detection.windows import exact_blackman, hamming, window_weight
        from goertzel_detector.interfaces.data_models import WindowMode

        assert window_weight(WindowMode.HAMMING, 3, 16) == hamming(3, 16)
        assert window_weight(WindowMode.EXACT_BLACKMAN, 3, 16) == exact_blackman(3, 16)

    @pytest.mark.parametrize("mode", ["hamming", "exact_blackman"])
    @pytest.mark.parametrize("n", [8, 205])
    def test_table_matches_closed_form(self, mode, n):
        """Verify the scipy-built table equals the closed form at every index."""
        from goertzel_detector.detection.windows import window_table, window_weight
        from goertzel_detector.interfaces.data_models import WindowMode

        mode = WindowMode(mode)
        table = window_table(mode, n)
        expected = np.array([window_weight(mode, i, n) for i in range(n)])

        assert table.shape == (n,)
        np.testing.assert_allclose(table, expected, rtol=1e-12, atol=1e-12)

    def test_table_is_periodic_extension(self):
        """Verify table[i % N] equals the closed form beyond one block."""
        from goertzel_detector.detection.windows import hamming, window_table
        from goertzel_detector.interfaces.data_models import WindowMode

        n = 10
        table = window_table(WindowMode.HAMMING, n)

        for i in range(3 * n):
            assert table[i % n] == pytest.approx(hamming(i, n))

    def test_none_table_is_ones(self):
        """Verify the rectangular table is all ones."""
        from goertzel_detector.detection.windows import window_table
        from goertzel_detector.interfaces.data_models import WindowMode

        np.testing.assert_array_equal(window_table(WindowMode.NONE, 4), np.ones(4))

    def test_table_zero_length_rejected(self):
        """Verify an empty table is refused."""
        from goertzel_detector.detection.windows import window_table
        from goertzel_detector.interfaces.data_models import WindowMode

        with pytest.raises(ValueError):
            window_table(WindowMode.HAMMING, 0)
