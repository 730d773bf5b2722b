import math
import random

import pytest

from vivaldi_nc.core.euclidean_vector import EuclideanVector
from vivaldi_nc.exceptions import DimensionMismatchError


class TestEuclideanVectorConstruction:
    def test_components_are_wrapped_verbatim(self):
        vector = EuclideanVector([1.0, 2.0, 3.0])

        assert vector[0] == 1.0
        assert vector[1] == 2.0
        assert vector[2] == 3.0
        assert vector.dimensions == 3
        assert vector.components == (1.0, 2.0, 3.0)

    def test_non_finite_components_are_not_rejected(self):
        vector = EuclideanVector([math.inf, 2.0])

        assert vector[0] == math.inf
        assert vector.is_invalid()

    def test_zeros_is_the_default_vector(self):
        zeros = EuclideanVector.zeros(3)

        assert zeros == EuclideanVector([0.0, 0.0, 0.0])
        assert zeros == EuclideanVector([1.0, 1.0, 1.0]) * 0.0

    def test_empty_vector_is_rejected(self):
        with pytest.raises(DimensionMismatchError):
            EuclideanVector([])

        with pytest.raises(DimensionMismatchError):
            EuclideanVector.zeros(0)


class TestEuclideanVectorArithmetic:
    def test_add(self):
        result = EuclideanVector([1.0, 2.0, 3.0]) + EuclideanVector([3.0, 2.0, 1.0])

        assert result == EuclideanVector([4.0, 4.0, 4.0])

    def test_sub(self):
        result = EuclideanVector([1.0, 2.0, 3.0]) - EuclideanVector([3.0, 2.0, 1.0])

        assert result == EuclideanVector([-2.0, 0.0, 2.0])

    def test_mul_scalar(self):
        vector = EuclideanVector([1.0, 2.0, 3.0])

        assert vector * 10.0 == EuclideanVector([10.0, 20.0, 30.0])
        assert 10.0 * vector == EuclideanVector([10.0, 20.0, 30.0])

    def test_div_scalar(self):
        result = EuclideanVector([1.0, 2.0, 3.0]) / 10.0

        assert result[0] == pytest.approx(0.1)
        assert result[1] == pytest.approx(0.2)
        assert result[2] == pytest.approx(0.3)

    def test_div_by_zero_follows_ieee(self):
        result = EuclideanVector([1.0, -2.0, 0.0]) / 0.0

        assert result[0] == math.inf
        assert result[1] == -math.inf
        assert math.isnan(result[2])
        assert result.is_invalid()

    def test_operations_return_new_vectors(self):
        vector = EuclideanVector([1.0, 2.0])
        _ = vector + EuclideanVector([1.0, 1.0])
        _ = vector * 3.0

        assert vector == EuclideanVector([1.0, 2.0])

    def test_mismatched_dimensions_raise(self):
        with pytest.raises(DimensionMismatchError):
            EuclideanVector([1.0, 2.0]) + EuclideanVector([1.0, 2.0, 3.0])

        with pytest.raises(DimensionMismatchError):
            EuclideanVector([1.0, 2.0]) - EuclideanVector([1.0])

    def test_randomized_scaling_matches_componentwise(self):
        rng = random.Random(7)

        for _ in range(200):
            components = [rng.uniform(-1e6, 1e6) for _ in range(3)]
            scalar = rng.uniform(-1e3, 1e3)
            scaled = EuclideanVector(components) * scalar

            for index, component in enumerate(components):
                assert scaled[index] == component * scalar


class TestEuclideanVectorLength:
    def test_length(self):
        vector = EuclideanVector([1.0, 2.0, 3.0])

        assert vector.len() == pytest.approx(3.741_657, abs=1e-5)
        assert (vector * 10.0).len() == pytest.approx(37.416_57, abs=1e-4)

    def test_length_does_not_overflow_for_large_components(self):
        vector = EuclideanVector([1e200, 1e200])

        assert vector.len() == pytest.approx(math.sqrt(2.0) * 1e200)

    def test_length_of_zero_vector(self):
        assert EuclideanVector.zeros(4).len() == 0.0

    def test_validity(self):
        assert EuclideanVector([1.0, 2.0]).is_valid()
        assert EuclideanVector([math.nan, 2.0]).is_invalid()
        assert EuclideanVector([1.0, -math.inf]).is_invalid()
