"""Tests for vector math helpers."""

import math

import pytest

from supabase_ai.utils import (
    cosine_similarity,
    dot_product,
    euclidean_distance,
    generate_id,
    magnitude,
    normalize,
)


class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    def test_identical_vectors_score_one(self):
        """A non-zero vector compared with itself should score ~1."""
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors_score_zero(self):
        """Orthogonal vectors should score 0."""
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors_score_minus_one(self):
        """Opposite vectors should score -1."""
        assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)

    def test_matches_dot_over_magnitudes(self):
        """Cosine should equal dot / (|a| * |b|)."""
        a = [0.3, -1.2, 4.0, 0.5]
        b = [2.0, 0.1, -0.7, 1.5]

        expected = dot_product(a, b) / (magnitude(a) * magnitude(b))

        assert cosine_similarity(a, b) == pytest.approx(expected)

    def test_zero_vector_gives_nan(self):
        """A zero vector should produce NaN rather than raise."""
        assert math.isnan(cosine_similarity([0.0, 0.0], [1.0, 2.0]))


class TestLengthMismatch:
    """Every comparison function should reject vectors of different length."""

    @pytest.mark.parametrize(
        "fn", [cosine_similarity, euclidean_distance, dot_product]
    )
    def test_raises_value_error(self, fn):
        """Unequal lengths are a contract violation."""
        with pytest.raises(ValueError, match="same length"):
            fn([1.0, 2.0], [1.0, 2.0, 3.0])


class TestDistanceAndProduct:
    """Tests for euclidean_distance, dot_product and magnitude."""

    def test_euclidean_distance(self):
        """3-4-5 triangle should give distance 5."""
        assert euclidean_distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(5.0)

    def test_euclidean_distance_to_self_is_zero(self):
        """Distance from a vector to itself should be 0."""
        assert euclidean_distance([1.5, -2.0], [1.5, -2.0]) == 0.0

    def test_dot_product(self):
        """Dot product should sum the elementwise products."""
        assert dot_product([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0

    def test_magnitude(self):
        """Magnitude should be the Euclidean norm."""
        assert magnitude([3.0, 4.0]) == 5.0

    def test_magnitude_of_empty_vector(self):
        """An empty vector has magnitude 0."""
        assert magnitude([]) == 0.0


class TestNormalize:
    """Tests for normalize."""

    def test_result_has_unit_magnitude(self):
        """Any non-zero vector should normalize to magnitude ~1."""
        assert magnitude(normalize([3.0, 4.0, 12.0])) == pytest.approx(1.0)

    def test_direction_is_preserved(self):
        """Normalizing should keep the direction."""
        assert normalize([3.0, 4.0]) == pytest.approx([0.6, 0.8])

    def test_zero_vector_is_returned_unchanged(self):
        """The zero vector should come back as the same object."""
        zero = [0.0, 0.0, 0.0]

        assert normalize(zero) is zero


class TestGenerateId:
    """Tests for generate_id."""

    def test_ids_are_unique_uuid_strings(self):
        """Generated ids should be distinct 36-character UUID strings."""
        ids = {generate_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(len(i) == 36 for i in ids)
