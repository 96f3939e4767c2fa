"""
Tests for cosine similarity and wardrobe ranking.
"""
import math

import pytest

from outfit_service.core.ranking import cosine_similarity, rank_items


class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    @pytest.mark.parametrize("a,b", [
        ([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]),
        ([1.0, 0.0], [-1.0, 0.0]),
        ([0.3, -0.7, 0.1, 2.5], [-1.2, 0.4, 0.9, -0.3]),
        ([1e-8, 3e-9], [5e6, -2e7]),
    ])
    def test_result_is_bounded(self, a, b):
        """Similarity always lies in [-1, 1]."""
        score = cosine_similarity(a, b)
        assert -1.0 <= score <= 1.0

    @pytest.mark.parametrize("a", [
        [1.0, 2.0, 3.0],
        [0.1] * 1536,
        [-4.0, 0.5],
    ])
    def test_self_similarity_is_one(self, a):
        """A vector is perfectly similar to itself."""
        assert math.isclose(cosine_similarity(a, a), 1.0, abs_tol=1e-9)

    def test_opposite_vectors(self):
        assert math.isclose(cosine_similarity([1.0, 1.0], [-1.0, -1.0]), -1.0, abs_tol=1e-9)

    def test_orthogonal_vectors(self):
        assert math.isclose(cosine_similarity([1.0, 0.0], [0.0, 1.0]), 0.0, abs_tol=1e-9)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


class TestRankItems:
    """Tests for rank_items."""

    def test_sorted_descending(self, make_item):
        items = [
            make_item("top", [0.0, 1.0]),
            make_item("top", [1.0, 0.0]),
            make_item("top", [1.0, 1.0]),
        ]

        ranked = rank_items(items, [1.0, 0.0])
        scores = [s.score for s in ranked]

        assert scores == sorted(scores, reverse=True)
        assert ranked[0].item is items[1]
        assert ranked[-1].item is items[0]

    def test_ties_keep_inventory_order(self, make_item):
        """Exactly equal scores stay in insertion order."""
        first = make_item("top", [2.0, 0.0], item_id="first")
        second = make_item("bottom", [1.0, 0.0], item_id="second")
        third = make_item("shoes", [3.0, 0.0], item_id="third")
        weaker = make_item("misc", [1.0, 1.0], item_id="weaker")

        ranked = rank_items([weaker, first, second, third], [1.0, 0.0])

        assert [s.item.item_id for s in ranked] == ["first", "second", "third", "weaker"]

    def test_skips_items_without_usable_vector(self, make_item):
        good = make_item("top", [1.0, 0.0])
        empty = make_item("top", [])
        wrong_dim = make_item("top", [1.0, 0.0, 0.0])

        ranked = rank_items([empty, good, wrong_dim], [1.0, 0.0])

        assert [s.item for s in ranked] == [good]

    def test_empty_inventory(self):
        assert rank_items([], [1.0, 0.0]) == []
