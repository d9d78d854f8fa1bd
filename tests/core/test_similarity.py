"""
Test suite for cosine similarity scoring.
"""

import pytest

from support_rag.core.similarity import cosine_similarity


class TestCosineSimilarity:

    def test_vector_with_itself_should_score_one(self) -> None:
        v = [0.3, -1.2, 4.5, 0.01]

        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_score_should_be_symmetric(self) -> None:
        a, b = [1.0, 2.0, 3.0], [-0.5, 4.0, 0.25]

        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_orthogonal_vectors_should_score_zero(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 5.0]) == pytest.approx(0.0)

    def test_opposite_vectors_should_score_minus_one(self) -> None:
        assert cosine_similarity([1.0, 2.0], [-2.0, -4.0]) == pytest.approx(-1.0)

    def test_score_should_ignore_magnitude(self) -> None:
        assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)

    def test_zero_vector_should_score_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0

    def test_length_mismatch_should_raise(self) -> None:
        with pytest.raises(ValueError, match="length mismatch"):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_result_should_be_plain_float(self) -> None:
        assert isinstance(cosine_similarity([1, 2], [2, 1]), float)
