# -*- coding: utf-8 -*-
"""
Tests for the delay map recalculation cache.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import logging

import numpy as np
import pytest

from uwbrl.exceptions import InputDomainError
from uwbrl.imaging import (
    AntennaArray,
    DelayMapBuilder,
    DelayMapCache,
    VoxelGrid,
)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def grid():
    return VoxelGrid.from_extent((-0.2, 0.2), (0.0, 0.0), (1.0, 1.4), 0.1)


@pytest.fixture
def antennas():
    return AntennaArray(
        pos_tx=[[-0.1, 0.0, 0.0], [0.1, 0.0, 0.0]],
        pos_rx=[[0.0, 0.0, 0.0]],
    )


@pytest.fixture
def cache():
    return DelayMapCache()


# ── Hits and misses ─────────────────────────────────────────────────────


class TestCacheReuse:
    """Unchanged inputs reuse the stored map."""

    def test_first_get_builds(self, cache, grid, antennas):
        dmap = cache.get(grid, antennas, 4e9)
        assert dmap.shape == grid.shape + (2, 1)
        assert (cache.hits, cache.misses) == (0, 1)

    def test_same_inputs_hit(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        second = cache.get(grid, antennas, 4e9)
        assert second is first
        assert (cache.hits, cache.misses) == (1, 1)

    def test_equal_but_distinct_inputs_hit(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        grid_copy = VoxelGrid(grid.x.copy(), grid.y.copy(), grid.z.copy())
        ant_copy = AntennaArray(antennas.pos_tx.copy(), antennas.pos_rx.copy())
        assert cache.get(grid_copy, ant_copy, 4e9) is first


class TestCacheInvalidation:
    """Geometry, frequency, or an explicit invalidate force a rebuild."""

    def test_frequency_change(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        second = cache.get(grid, antennas, 5e9)
        assert second is not first
        assert second.frequency == 5e9
        assert cache.misses == 2

    def test_antenna_move(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        moved = AntennaArray(antennas.pos_tx + 0.01, antennas.pos_rx)
        second = cache.get(grid, moved, 4e9)
        assert second is not first
        assert not np.array_equal(second.delay, first.delay)

    def test_tx_rx_roles_swapped(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        second = cache.get(grid, antennas.swapped(), 4e9)
        assert second is not first
        assert second.shape == grid.shape + (1, 2)

    def test_grid_change(self, cache, grid, antennas):
        cache.get(grid, antennas, 4e9)
        finer = VoxelGrid.from_extent((-0.2, 0.2), (0.0, 0.0), (1.0, 1.4), 0.05)
        assert cache.is_dirty(finer, antennas, 4e9)

    def test_invalidate(self, cache, grid, antennas):
        first = cache.get(grid, antennas, 4e9)
        assert not cache.is_dirty(grid, antennas, 4e9)
        cache.invalidate()
        assert cache.is_dirty(grid, antennas, 4e9)
        second = cache.get(grid, antennas, 4e9)
        assert second is not first
        np.testing.assert_array_equal(second.delay, first.delay)
        assert not cache.is_dirty(grid, antennas, 4e9)

    def test_empty_cache_is_dirty(self, cache, grid, antennas):
        assert cache.is_dirty(grid, antennas, 4e9)


# ── Fingerprints ────────────────────────────────────────────────────────


class TestFingerprint:
    """Fingerprints identify build inputs."""

    def test_stable(self, cache, grid, antennas):
        assert (cache.fingerprint(grid, antennas, 4e9)
                == cache.fingerprint(grid, antennas, 4e9))

    def test_sensitive_to_builder_settings(self, grid, antennas):
        a = DelayMapCache(DelayMapBuilder())
        b = DelayMapCache(DelayMapBuilder(propagation_speed=2.0e8))
        assert (a.fingerprint(grid, antennas, 4e9)
                != b.fingerprint(grid, antennas, 4e9))

    def test_bad_frequency(self, cache, grid, antennas):
        with pytest.raises(InputDomainError, match="frequency"):
            cache.fingerprint(grid, antennas, -1.0)

    def test_builder_used(self, grid, antennas):
        builder = DelayMapBuilder(keep_channel_axes=True)
        pair = AntennaArray([[0.0, 0.0, 0.0]], [[0.1, 0.0, 0.0]])
        dmap = DelayMapCache(builder).get(grid, pair, 4e9)
        assert dmap.shape == grid.shape + (1, 1)
        assert DelayMapCache().get(grid, pair, 4e9).is_single_channel


# ── Logging ─────────────────────────────────────────────────────────────


class TestCacheLogging:

    def test_rebuild_logged(self, cache, grid, antennas, caplog):
        with caplog.at_level(logging.INFO, logger='uwbrl.imaging.cache'):
            cache.get(grid, antennas, 4e9)
            cache.get(grid, antennas, 4e9)
        rebuilds = [r for r in caplog.records if 'Rebuilding' in r.message]
        assert len(rebuilds) == 1
