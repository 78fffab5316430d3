# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""Tests for index-keyed palette correspondence and color substitution."""

import numpy as np
import pytest

from paletteswap.errors import InvalidInput, MappingMismatch
from paletteswap.quantize.distance import DistanceMetric
from paletteswap.quantize.kmeans import kmeans
from paletteswap.quantize.mapping import map_centroids, map_colors


def _gray(value):
    return [float(value)] * 3


def _two_entry_mapping():
    """Dark/light source palette mapped onto a 3-member and a 1-member cluster."""
    centroids_a = np.array([_gray(0), _gray(100)])
    centroids_b = np.array([_gray(1), _gray(2)])
    clusters_b = [
        np.array([_gray(10), _gray(11), _gray(12)]),
        np.array([_gray(20)]),
    ]
    return centroids_a, map_centroids(centroids_a, centroids_b, clusters_b)


class TestMapCentroids:

    def test_pairs_by_index(self):
        centroids_a, mapping = _two_entry_mapping()
        assert len(mapping) == 2
        np.testing.assert_array_equal(mapping[0].centroid, _gray(1))
        np.testing.assert_array_equal(mapping[1].cluster, [_gray(20)])
        assert all(entry.cursor == 0 for entry in mapping.entries)

    def test_size_mismatch(self):
        with pytest.raises(MappingMismatch):
            map_centroids([_gray(0), _gray(1)], [_gray(0)], [[_gray(0)]])

    def test_cluster_count_mismatch(self):
        with pytest.raises(MappingMismatch):
            map_centroids([_gray(0)], [_gray(0)], [[_gray(0)], [_gray(1)]])

    def test_equal_centroids_do_not_alias(self):
        # Two source entries with the same value still map independently
        mapping = map_centroids(
            [_gray(5), _gray(5)],
            [_gray(1), _gray(2)],
            [[_gray(1)], [_gray(2)]],
        )
        np.testing.assert_array_equal(mapping.resolve(0).centroid, _gray(1))
        np.testing.assert_array_equal(mapping.resolve(1).centroid, _gray(2))

    def test_resolve_out_of_range(self):
        _, mapping = _two_entry_mapping()
        with pytest.raises(MappingMismatch):
            mapping.resolve(2)


class TestMapColors:

    def test_centroid_mode(self):
        centroids_a, mapping = _two_entry_mapping()
        colors = np.array([_gray(3), _gray(97), _gray(40)])
        out = map_colors(colors, centroids_a, mapping, use_original_colors=False)
        np.testing.assert_array_equal(out, [_gray(1), _gray(2), _gray(1)])

    def test_round_robin(self):
        centroids_a, mapping = _two_entry_mapping()
        colors = np.array([_gray(0), _gray(0), _gray(100), _gray(0), _gray(0)])
        out = map_colors(colors, centroids_a, mapping, use_original_colors=True)
        np.testing.assert_array_equal(
            out[:, 0], [10.0, 11.0, 20.0, 12.0, 10.0]
        )
        assert mapping[0].cursor == 1
        assert mapping[1].cursor == 0

    def test_cursor_persists_across_calls(self):
        centroids_a, mapping = _two_entry_mapping()
        map_colors([_gray(0)], centroids_a, mapping)
        out = map_colors([_gray(0), _gray(0)], centroids_a, mapping)
        np.testing.assert_array_equal(out[:, 0], [11.0, 12.0])

    def test_reset_starts_new_session(self):
        centroids_a, mapping = _two_entry_mapping()
        map_colors([_gray(0), _gray(0)], centroids_a, mapping)
        mapping.reset()
        out = map_colors([_gray(0)], centroids_a, mapping)
        assert out[0, 0] == 10.0

    def test_preserves_length_and_order(self):
        rng = np.random.default_rng(0)
        colors = rng.uniform(0, 100, size=(57, 3))
        centroids_a, mapping = _two_entry_mapping()
        out = map_colors(colors, centroids_a, mapping, use_original_colors=False)
        assert out.shape == (57, 3)
        dark = np.linalg.norm(colors, axis=1) <= np.linalg.norm(colors - 100.0, axis=1)
        np.testing.assert_array_equal(out[dark, 0], 1.0)
        np.testing.assert_array_equal(out[~dark, 0], 2.0)

    def test_self_mapping_gives_centroids(self):
        rng = np.random.default_rng(5)
        colors = rng.integers(0, 256, size=(80, 3)).astype(np.float64)
        result = kmeans(colors, 4, seed=1)
        mapping = map_centroids(result.centroids, result.centroids, result.clusters)
        out = map_colors(colors, result.centroids, mapping, use_original_colors=False)
        np.testing.assert_array_equal(out, result.centroids[result.labels])

    def test_empty_input(self):
        centroids_a, mapping = _two_entry_mapping()
        out = map_colors(np.empty((0, 3)), centroids_a, mapping)
        assert out.shape == (0, 3)

    def test_empty_plain_list(self):
        centroids_a, mapping = _two_entry_mapping()
        out = map_colors([], centroids_a, mapping)
        assert out.shape == (0, 3)

    def test_ciede2000_metric(self):
        centroids_a = np.array([[30.0, 40.0, 20.0], [80.0, -20.0, -30.0]])
        mapping = map_centroids(centroids_a, [_gray(1), _gray(2)], [[_gray(1)], [_gray(2)]])
        colors = np.array([[32.0, 38.0, 21.0], [79.0, -18.0, -31.0]])
        out = map_colors(
            colors, centroids_a, mapping, DistanceMetric.CIEDE2000, use_original_colors=False
        )
        np.testing.assert_array_equal(out[:, 0], [1.0, 2.0])

    def test_mapping_length_mismatch(self):
        _, mapping = _two_entry_mapping()
        centroids_a = np.array([_gray(0), _gray(50), _gray(100)])
        with pytest.raises(MappingMismatch):
            map_colors([_gray(0)], centroids_a, mapping)

    def test_empty_palette(self):
        _, mapping = _two_entry_mapping()
        with pytest.raises(MappingMismatch):
            map_colors([_gray(0)], np.empty((0, 3)), mapping)

    def test_empty_target_cluster(self):
        mapping = map_centroids([_gray(0)], [_gray(1)], [np.empty((0, 3))])
        with pytest.raises(MappingMismatch):
            map_colors([_gray(0)], [_gray(0)], mapping, use_original_colors=True)

    def test_wrong_shape(self):
        centroids_a, mapping = _two_entry_mapping()
        with pytest.raises(InvalidInput):
            map_colors([0.0, 0.0, 0.0], centroids_a, mapping)
