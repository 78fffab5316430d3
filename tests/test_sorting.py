# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""Tests for frequency sorting and flattening of clusters."""

import numpy as np
import pytest

from paletteswap.errors import InvalidInput
from paletteswap.quantize.sorting import flatten_colors, sort_by_frequency


def _cluster(value, size):
    return np.full((size, 3), float(value))


class TestSortByFrequency:

    def test_descending_sizes(self):
        clusters = [_cluster(1, 2), _cluster(2, 7), _cluster(3, 4)]
        result = sort_by_frequency(clusters)
        assert [len(c) for c in result.sorted_clusters] == [7, 4, 2]

    def test_stable_for_equal_sizes(self):
        clusters = [_cluster(0, 1), _cluster(1, 3), _cluster(2, 3), _cluster(3, 2)]
        result = sort_by_frequency(clusters)
        assert [c[0, 0] for c in result.sorted_clusters] == [1.0, 2.0, 3.0, 0.0]

    def test_centroids_follow_clusters(self):
        clusters = [_cluster(1, 2), _cluster(2, 7), _cluster(3, 4)]
        centroids = np.array([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]])
        result = sort_by_frequency(clusters, centroids)
        np.testing.assert_array_equal(
            result.sorted_centroids, [[2.0, 2.0, 2.0], [3.0, 3.0, 3.0], [1.0, 1.0, 1.0]]
        )
        for cluster, centroid in zip(result.sorted_clusters, result.sorted_centroids):
            np.testing.assert_array_equal(cluster[0], centroid)

    def test_no_centroids(self):
        assert sort_by_frequency([_cluster(1, 1)]).sorted_centroids is None

    def test_misaligned_centroids(self):
        with pytest.raises(InvalidInput):
            sort_by_frequency([_cluster(1, 1), _cluster(2, 2)], [[0.0, 0.0, 0.0]])

    def test_already_sorted_unchanged(self):
        clusters = [_cluster(1, 5), _cluster(2, 3), _cluster(3, 1)]
        result = sort_by_frequency(clusters)
        for original, ordered in zip(clusters, result.sorted_clusters):
            np.testing.assert_array_equal(original, ordered)


class TestFlattenColors:

    def test_concatenates_in_given_order(self):
        flat = flatten_colors([_cluster(1, 1), _cluster(2, 2)])
        np.testing.assert_array_equal(flat[:, 0], [1.0, 2.0, 2.0])

    def test_sorted(self):
        flat = flatten_colors([_cluster(1, 1), _cluster(2, 2)], sort_colors=True)
        np.testing.assert_array_equal(flat[:, 0], [2.0, 2.0, 1.0])

    def test_empty(self):
        assert flatten_colors([]).shape == (0, 3)
