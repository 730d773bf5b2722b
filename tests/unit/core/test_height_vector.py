import math
import random

import pytest

from vivaldi_nc.core.checked import ValidationStatus
from vivaldi_nc.core.euclidean_vector import EuclideanVector
from vivaldi_nc.core.height_vector import HeightVector
from vivaldi_nc.exceptions import DimensionMismatchError


def random_height_vector(rng: random.Random, dimensions: int = 2, scale: float = 1e6):
    return HeightVector.from_components(
        [rng.uniform(-scale, scale) for _ in range(dimensions)],
        rng.uniform(0.0, scale),
        rng=rng,
    )


# =============================================================================
# Construction
# =============================================================================


class TestHeightVectorConstruction:
    def test_from_components(self):
        vector = HeightVector.from_components([1.0, 2.0], 3.0)

        assert vector.position[0] == 1.0
        assert vector.position[1] == 2.0
        assert vector.height == 3.0

    def test_new_is_random_unit_vector(self, rng: random.Random):
        vector = HeightVector.new(3, rng=rng)

        assert vector.len() == pytest.approx(1.0)
        assert vector.is_valid()
        assert vector.height >= 0.0

    def test_random_components_are_symmetric_before_normalizing(self, rng: random.Random):
        for _ in range(100):
            vector = HeightVector.random(4, rng=rng)

            assert vector.len() == pytest.approx(1.0)
            assert all(-1.0 <= component <= 1.0 for component in vector.position)

    def test_random_is_deterministic_for_a_seeded_source(self):
        first = HeightVector.random(3, rng=random.Random(42))
        second = HeightVector.random(3, rng=random.Random(42))

        assert first == second

    def test_zero_has_zero_length(self):
        vector = HeightVector.zero(3)

        assert vector.len() == 0.0
        assert vector.is_valid()

    def test_zero_dimensions_rejected(self):
        with pytest.raises(DimensionMismatchError):
            HeightVector.random(0)

    def test_len_adds_height_to_euclidean_norm(self):
        vector = HeightVector.from_components([1.0, 2.0, 3.0], 4.0)

        assert vector.len() == pytest.approx(7.741_657, abs=1e-5)

    @pytest.mark.parametrize(
        "components,height",
        [
            ([math.nan, 1.0], 1.0),
            ([math.inf, 1.0], 1.0),
            ([1.0, -math.inf], 1.0),
            ([1.0, 1.0], math.nan),
            ([1.0, 1.0], math.inf),
            ([1.0, 1.0], -1.0),
        ],
    )
    def test_invalid_input_is_replaced_with_random_unit_vector(self, components, height):
        checked = HeightVector.checked(EuclideanVector(components), height)

        assert checked.status == ValidationStatus.REINITIALIZED
        assert checked.reinitialized
        assert checked.value.is_valid()
        assert checked.value.len() == pytest.approx(1.0)

        vector = HeightVector.from_components(components, height)
        assert vector.is_valid()
        assert vector.len() == pytest.approx(1.0)

    def test_valid_input_is_tagged_valid(self):
        checked = HeightVector.checked(EuclideanVector([1.0, 2.0]), 3.0)

        assert checked.status == ValidationStatus.VALID
        assert checked.reinitialized is False
        assert checked.value.height == 3.0


# =============================================================================
# Arithmetic
# =============================================================================


class TestHeightVectorArithmetic:
    def test_add(self):
        result = HeightVector.from_components([1.0, 2.0], 3.0) + HeightVector.from_components([3.0, 2.0], 1.0)

        assert result.position[0] == 4.0
        assert result.position[1] == 4.0
        assert result.height == 4.0

    def test_sub_sums_heights(self):
        result = HeightVector.from_components([1.0, 2.0], 3.0) - HeightVector.from_components([3.0, 2.0], 1.0)

        assert result.position[0] == -2.0
        assert result.position[1] == 0.0
        assert result.height == 4.0

    def test_mul_scalar(self):
        result = HeightVector.from_components([1.0, 2.0], 3.0) * 10.0

        assert result.position[0] == 10.0
        assert result.position[1] == 20.0
        assert result.height == 30.0

    def test_mul_negative_scalar_reinitializes(self, rng: random.Random):
        vector = HeightVector.from_components([1.0, 2.0], 3.0, rng=rng)

        checked = vector.checked_mul(-2.0)

        assert checked.reinitialized
        assert checked.value.len() == pytest.approx(1.0)

    def test_sub_with_invalid_operand_reinitializes(self):
        valid = HeightVector.from_components([1.0, 2.0], 3.0)
        invalid = HeightVector(EuclideanVector([1.0, 2.0]), math.inf)

        checked = valid.checked_sub(invalid)

        assert checked.reinitialized
        assert (valid - invalid).len() == pytest.approx(1.0)

    def test_add_with_invalid_operand_reinitializes(self):
        valid = HeightVector.from_components([1.0, 2.0], 3.0)
        invalid = HeightVector(EuclideanVector([math.inf, 2.0]), 3.0)

        result = valid + invalid

        assert result.is_valid()
        assert result.len() == pytest.approx(1.0)

    def test_overflowing_mul_reinitializes(self):
        vector = HeightVector.from_components([1e300, 1e300], 1e300)

        result = vector * 1e300

        assert result.is_valid()
        assert result.len() == pytest.approx(1.0)

    def test_distance_is_euclidean_plus_both_heights(self):
        first = HeightVector.from_components([1.5, 0.5, 2.0], 25.0)
        second = HeightVector.from_components([-1.5, -0.5, -2.0], 50.0)

        assert first.distance(second) == pytest.approx(math.sqrt(26.0) + 75.0)
        assert first.distance(second) == pytest.approx(second.distance(first))

    def test_mismatched_dimensions_raise(self):
        with pytest.raises(DimensionMismatchError):
            HeightVector.from_components([1.0, 2.0], 1.0) - HeightVector.from_components([1.0], 1.0)


# =============================================================================
# Normalization
# =============================================================================


class TestHeightVectorNormalization:
    def test_normalized_has_unit_length(self):
        vector = HeightVector.from_components([3.0, 4.0], 5.0)

        normalized = vector.normalized()

        assert normalized.len() == pytest.approx(1.0)
        assert normalized.position[0] == pytest.approx(0.3)
        assert normalized.position[1] == pytest.approx(0.4)
        assert normalized.height == pytest.approx(0.5)

    def test_zero_vector_normalizes_to_random_unit_vector(self):
        checked = HeightVector.zero(2).checked_normalized()

        assert checked.reinitialized
        assert checked.value.len() == pytest.approx(1.0)

    def test_infinite_length_normalizes_to_random_unit_vector(self):
        vector = HeightVector(EuclideanVector([1e308, 1e308]), 1e308)

        checked = vector.checked_normalized()

        assert checked.reinitialized
        assert checked.value.is_valid()


# =============================================================================
# Properties
# =============================================================================


class TestHeightVectorProperties:
    def test_validity_closure_over_finite_inputs(self, rng: random.Random):
        for _ in range(500):
            scale = 10.0 ** rng.randint(-3, 300)
            first = random_height_vector(rng, scale=scale)
            second = random_height_vector(rng, scale=scale)
            scalar = rng.uniform(-scale, scale)

            for result in (
                first,
                second,
                first + second,
                first - second,
                first * scalar,
                first.normalized(),
                (first - second).normalized(),
            ):
                assert result.is_valid()
                assert result.height >= 0.0
                assert not math.isnan(result.len())

    def test_validity_closure_with_non_finite_inputs(self, rng: random.Random):
        poison = [math.nan, math.inf, -math.inf]

        for _ in range(200):
            components = [rng.choice(poison + [rng.uniform(-10.0, 10.0)]) for _ in range(3)]
            height = rng.choice(poison + [rng.uniform(-10.0, 10.0)])

            vector = HeightVector.from_components(components, height, rng=rng)
            other = HeightVector.random(3, rng=rng)

            assert vector.is_valid()
            assert (vector + other).is_valid()
            assert (vector - other).is_valid()
            assert (vector * rng.choice(poison)).is_valid()

    def test_subtraction_sums_heights(self, rng: random.Random):
        for _ in range(500):
            first = random_height_vector(rng)
            second = random_height_vector(rng)

            assert (first - second).height == first.height + second.height
            assert (second - first).height == first.height + second.height

    def test_add_and_sub_match_componentwise(self, rng: random.Random):
        for _ in range(500):
            first = random_height_vector(rng)
            second = random_height_vector(rng)

            added = first + second
            subtracted = first - second

            for index in range(2):
                assert added.position[index] == first.position[index] + second.position[index]
                assert subtracted.position[index] == first.position[index] - second.position[index]

            assert added.height == first.height + second.height
