"""
Tests for Transform Primitives
"""

import math

import numpy as np
import pytest
from lsgo_bench.core.errors import DimensionMismatchError
from lsgo_bench.data.layout import SubComponent, build_subcomponents
from lsgo_bench.functions.transforms import (
    shift, rotate, scale_and_rotate, ill_condition, asymmetry, oscillate,
    decompose, residual, assemble,
)


class TestShift:

    def test_shift(self):
        np.testing.assert_array_equal(
            shift(np.array([1.0, 2.0]), np.array([0.5, -1.0])),
            np.array([0.5, 3.0])
        )

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            shift(np.zeros(3), np.zeros(4))


class TestRotate:
    """Test matrix-vector rotation."""

    def test_identity(self):
        """Identity rotation returns x exactly."""
        x = np.random.RandomState(1).uniform(-100, 100, 50)
        np.testing.assert_array_equal(rotate(x, np.eye(50)), x)

    def test_known_matrix(self):
        m = np.array([[0.0, -1.0], [1.0, 0.0]])
        np.testing.assert_array_equal(rotate(np.array([1.0, 2.0]), m), [-2.0, 1.0])

    def test_matches_matmul(self):
        rng = np.random.RandomState(2)
        m = rng.normal(size=(25, 25))
        x = rng.normal(size=25)
        np.testing.assert_allclose(rotate(x, m), m @ x, rtol=1e-12, atol=1e-12)

    def test_accumulates_from_last_column(self):
        rng = np.random.RandomState(3)
        m = rng.normal(size=(10, 10)) * 1e8
        x = rng.normal(size=10)
        expected = []
        for i in range(10):
            acc = 0.0
            for j in range(9, -1, -1):
                acc += x[j] * m[i, j]
            expected.append(acc)
        np.testing.assert_array_equal(rotate(x, m), expected)

    def test_wrong_size(self):
        with pytest.raises(DimensionMismatchError):
            rotate(np.zeros(3), np.eye(4))

    def test_does_not_modify_input(self):
        x = np.ones(4)
        rotate(x, np.eye(4) * 2)
        np.testing.assert_array_equal(x, np.ones(4))


class TestConditioning:
    """Test ill_condition and scale_and_rotate."""

    def test_ill_condition_endpoints(self):
        out = ill_condition(np.ones(11), 10.0)
        assert out[0] == 1.0
        assert out[-1] == pytest.approx(math.sqrt(10.0))
        assert np.all(np.diff(out) > 0)

    def test_scale_and_rotate_identity(self):
        out = scale_and_rotate(np.ones(5), np.eye(5), 100.0)
        assert out[0] == 1.0
        assert out[-1] == pytest.approx(100.0)
        assert out[2] == pytest.approx(10.0)

    def test_scale_and_rotate_applies_rotation(self):
        m = np.array([[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_allclose(scale_and_rotate(np.array([1.0, 1.0]), m, 4.0), [4.0, 1.0])


class TestAsymmetry:

    def test_non_positive_unchanged(self):
        x = np.array([-3.0, 0.0, -0.5, 0.0])
        np.testing.assert_array_equal(asymmetry(x, 0.2), x)

    def test_first_entry_unchanged(self):
        """Exponent is 1 at index 0."""
        assert asymmetry(np.array([4.0, 1.0]), 0.2)[0] == 4.0

    def test_last_entry(self):
        out = asymmetry(np.array([1.0, 4.0]), 0.5)
        assert out[1] == pytest.approx(4.0 ** (1 + 0.5 * 2.0))

    def test_preserves_sign_and_length(self):
        x = np.random.RandomState(4).uniform(-5, 5, 100)
        out = asymmetry(x, 0.2)
        assert len(out) == len(x)
        np.testing.assert_array_equal(np.sign(out), np.sign(x))


class TestOscillate:

    def test_zero(self):
        assert oscillate(np.array([0.0]))[0] == 0.0

    def test_unit(self):
        """log|x| = 0 leaves +-1 unchanged."""
        np.testing.assert_array_equal(oscillate(np.array([1.0, -1.0])), [1.0, -1.0])

    def test_positive_constants(self):
        x = 3.0
        h = math.log(x)
        expected = math.exp(h + 0.049 * (math.sin(10.0 * h) + math.sin(7.9 * h)))
        assert oscillate(np.array([x]))[0] == expected

    def test_negative_constants(self):
        x = -3.0
        h = math.log(3.0)
        expected = -math.exp(h + 0.049 * (math.sin(5.5 * h) + math.sin(3.1 * h)))
        assert oscillate(np.array([x]))[0] == expected

    def test_sign_preserved(self):
        x = np.random.RandomState(5).uniform(-100, 100, 200)
        np.testing.assert_array_equal(np.sign(oscillate(x)), np.sign(x))


class TestDecompose:
    """Test permutation-based sub-component slicing."""

    def test_layout_without_overlap(self):
        comps = build_subcomponents([2, 3], [1.0, 0.5])
        assert comps == [SubComponent(0, 2, 1.0), SubComponent(2, 3, 0.5)]

    def test_layout_with_overlap(self):
        comps = build_subcomponents([4, 4, 4], [1.0, 1.0, 1.0], overlap=1)
        assert [c.start for c in comps] == [0, 3, 6]
        assert comps[-1].stop == 10

    def test_decompose(self):
        x = np.array([10.0, 11.0, 12.0, 13.0, 14.0])
        perm = np.array([4, 0, 3, 1, 2])
        parts = decompose(x, perm, build_subcomponents([2, 3], [1.0, 1.0]))
        np.testing.assert_array_equal(parts[0], [14.0, 10.0])
        np.testing.assert_array_equal(parts[1], [13.0, 11.0, 12.0])

    def test_overlapping_parts_share_entries(self):
        x = np.arange(7.0)
        perm = np.arange(7)
        parts = decompose(x, perm, build_subcomponents([4, 4], [1.0, 1.0], overlap=1))
        assert parts[0][-1] == parts[1][0]

    def test_round_trip(self):
        """decompose then assemble restores x for a non-overlapping layout."""
        rng = np.random.RandomState(6)
        x = rng.normal(size=100)
        perm = rng.permutation(100)
        comps = build_subcomponents([25, 50, 25], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(assemble(decompose(x, perm, comps), perm, comps, 100), x)

    def test_parts_are_copies(self):
        x = np.zeros(4)
        parts = decompose(x, np.arange(4), build_subcomponents([4], [1.0]))
        parts[0][0] = 9.0
        assert x[0] == 0.0

    def test_residual(self):
        x = np.array([10.0, 11.0, 12.0, 13.0])
        perm = np.array([3, 2, 1, 0])
        np.testing.assert_array_equal(residual(x, perm, 2), [11.0, 10.0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            decompose(np.zeros(5), np.arange(4), build_subcomponents([2], [1.0]))

    def test_assemble_wrong_part_size(self):
        comps = build_subcomponents([2, 2], [1.0, 1.0])
        with pytest.raises(DimensionMismatchError):
            assemble([np.zeros(2), np.zeros(3)], np.arange(4), comps, 4)
