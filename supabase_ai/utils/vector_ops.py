"""Vector math over plain lists of floats."""

import math
from collections.abc import Sequence


def _check_lengths(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise ValueError("Vectors must have the same length")


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the dot product of two equal-length vectors."""
    _check_lengths(a, b)
    return sum(x * y for x, y in zip(a, b, strict=True))


def magnitude(vector: Sequence[float]) -> float:
    """Return the Euclidean norm of a vector."""
    return math.sqrt(sum(x * x for x in vector))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the cosine similarity of two equal-length vectors.

    A zero vector yields NaN rather than raising.

    Raises:
        ValueError: If the vectors differ in length.
    """
    _check_lengths(a, b)
    denominator = magnitude(a) * magnitude(b)
    if denominator == 0:
        return math.nan
    return dot_product(a, b) / denominator


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the Euclidean distance between two equal-length vectors."""
    _check_lengths(a, b)
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b, strict=True)))


def normalize(vector: Sequence[float]) -> Sequence[float]:
    """Scale a vector to unit length.

    The zero vector is returned unchanged (same object).
    """
    mag = magnitude(vector)
    if mag == 0:
        return vector
    return [x / mag for x in vector]
