# Copyright (c) 2026 Paletteswap
# SPDX-License-Identifier: MIT

"""Tests for Euclidean and CIEDE2000 distance metrics."""

import numpy as np
import pytest

from paletteswap.errors import InvalidInput
from paletteswap.quantize.colorspace import rgb_to_lab
from paletteswap.quantize.distance import (
    DistanceMetric,
    delta_e00_distance,
    distance_matrix,
    euclidean_distance,
    nearest_centroid,
    resolve_distance,
)


class TestEuclidean:

    def test_345(self):
        assert euclidean_distance([0, 0, 0], [3, 4, 0]) == pytest.approx(5.0)

    def test_identical_is_zero(self):
        assert euclidean_distance([12.5, 3.0, 9.0], [12.5, 3.0, 9.0]) == 0.0

    def test_dimension_mismatch_is_infinite(self):
        assert euclidean_distance([1, 2, 3], [1, 2]) == np.inf

    def test_dimension_mismatch_batch(self):
        d = euclidean_distance(np.zeros((4, 3)), np.zeros((4, 2)))
        assert d.shape == (4,)
        assert np.all(np.isinf(d))

    def test_dimension_mismatch_unbroadcastable(self):
        d = euclidean_distance(np.zeros((4, 3)), np.zeros((5, 2)))
        assert d == np.inf

    def test_broadcasts_to_matrix(self):
        colors = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        centroids = np.array([[0.0, 0.0, 0.0], [0.0, 2.0, 0.0], [1.0, 0.0, 0.0]])
        d = distance_matrix(colors, centroids, euclidean_distance)
        assert d.shape == (2, 3)
        np.testing.assert_allclose(d[0], [0.0, 2.0, 1.0])

    def test_works_for_any_dimension(self):
        assert euclidean_distance([0, 0], [6, 8]) == pytest.approx(10.0)


class TestCIEDE2000:
    """Reference pairs from Sharma, Wu & Dalal (2005)."""

    @pytest.mark.parametrize("lab1, lab2, expected", [
        ((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485), 2.0425),
        ((50.0, 3.1571, -77.2803), (50.0, 0.0, -82.7485), 2.8615),
        ((50.0, 2.8361, -74.0200), (50.0, 0.0, -82.7485), 3.4412),
        ((50.0, 0.0, 0.0), (50.0, -1.0, 2.0), 2.3669),
        ((50.0, 2.5, 0.0), (73.0, 25.0, -18.0), 27.1492),
        ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
    ])
    def test_reference_pairs(self, lab1, lab2, expected):
        assert delta_e00_distance(lab1, lab2) == pytest.approx(expected, abs=1e-4)

    def test_symmetric(self):
        a = (60.2574, -34.0099, 36.2677)
        b = (60.4626, -34.1751, 39.4387)
        assert delta_e00_distance(a, b) == pytest.approx(delta_e00_distance(b, a))

    def test_identical_is_exactly_zero(self):
        rng = np.random.default_rng(3)
        lab = np.column_stack([
            rng.uniform(0, 100, 200),
            rng.uniform(-100, 100, 200),
            rng.uniform(-100, 100, 200),
        ])
        d = delta_e00_distance(lab, lab)
        assert np.all(d == 0.0)

    def test_neutral_identical_is_zero(self):
        assert delta_e00_distance([50.0, 0.0, 0.0], [50.0, 0.0, 0.0]) == 0.0

    def test_non_negative(self):
        rng = np.random.default_rng(11)
        a = rgb_to_lab(rng.integers(0, 256, size=(300, 3)))
        b = rgb_to_lab(rng.integers(0, 256, size=(300, 3)))
        assert np.all(delta_e00_distance(a, b) >= 0.0)

    def test_hue_wraparound(self):
        # Hues just either side of 0°/360° are close, not 360° apart
        a = (50.0, 30.0, -1.0)
        b = (50.0, 30.0, 1.0)
        assert delta_e00_distance(a, b) < 2.0

    def test_batch_matrix(self):
        colors = rgb_to_lab([[255, 0, 0], [0, 0, 255], [250, 5, 5]])
        centroids = rgb_to_lab([[255, 0, 0], [0, 0, 255]])
        d = distance_matrix(colors, centroids, delta_e00_distance)
        assert d.shape == (3, 2)
        assert d[0, 0] == 0.0
        assert d[1, 1] == 0.0
        assert d[2, 0] < d[2, 1]

    def test_rejects_non_triples(self):
        with pytest.raises(InvalidInput):
            delta_e00_distance([1.0, 2.0], [1.0, 2.0])


class TestResolveDistance:

    def test_enum(self):
        assert resolve_distance(DistanceMetric.EUCLIDEAN) is euclidean_distance
        assert resolve_distance(DistanceMetric.CIEDE2000) is delta_e00_distance

    def test_string(self):
        assert resolve_distance("euclidean") is euclidean_distance
        assert resolve_distance("CIEDE2000") is delta_e00_distance

    def test_callable_passthrough(self):
        def manhattan(a, b):
            return np.sum(np.abs(np.asarray(b) - np.asarray(a)), axis=-1)

        assert resolve_distance(manhattan) is manhattan

    def test_unknown(self):
        with pytest.raises(InvalidInput):
            resolve_distance("cie76")
        with pytest.raises(InvalidInput):
            resolve_distance(42)


class TestNearestCentroid:

    def test_assigns_closest(self):
        colors = np.array([[0.0, 0.0, 0.0], [9.0, 0.0, 0.0], [4.0, 0.0, 0.0]])
        centroids = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]])
        np.testing.assert_array_equal(
            nearest_centroid(colors, centroids, euclidean_distance), [0, 1, 0]
        )

    def test_tie_goes_to_lowest_index(self):
        colors = np.array([[0.0, 0.0, 0.0]])
        centroids = np.array([[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
        assert nearest_centroid(colors, centroids, euclidean_distance)[0] == 0
