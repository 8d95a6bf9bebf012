# -*- coding: utf-8 -*-
"""
Delay Map Cache - Rebuild delay maps only when geometry or frequency change.

A delay map depends only on the voxel grid, the antenna positions, the
carrier frequency and the builder settings. ``DelayMapCache`` keeps the
last map together with a SHA-1 fingerprint of those inputs and returns
it unchanged for as long as the fingerprint matches, so successive radar
frames can be beamformed without recomputing geometry.

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

# Standard library
import hashlib
import logging
from threading import RLock
from typing import Optional

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.imaging._validation import validate_positive_scalar
from uwbrl.imaging.delay_map import DelayMapBuilder
from uwbrl.imaging.grid import AntennaArray, DelayMap, VoxelGrid

logger = logging.getLogger(__name__)


class DelayMapCache:
    """Single-entry cache of the most recently built delay map.

    Parameters
    ----------
    builder : DelayMapBuilder, optional
        Builder used on a miss. A default ``DelayMapBuilder()`` is
        created when omitted.

    Examples
    --------
    >>> cache = DelayMapCache()
    >>> for frame in frames:
    ...     dmap = cache.get(grid, antennas, frequency=4e9)
    ...     image = beamformer.form_image(frame, t, dmap)
    """

    def __init__(self, builder: Optional[DelayMapBuilder] = None) -> None:
        self.builder = builder if builder is not None else DelayMapBuilder()
        self._lock = RLock()
        self._map: Optional[DelayMap] = None
        self._fingerprint: Optional[str] = None
        self._dirty = True
        self.hits = 0
        self.misses = 0

    def fingerprint(
        self,
        grid: VoxelGrid,
        antennas: AntennaArray,
        frequency: float,
    ) -> str:
        """Hex digest identifying the inputs of one delay map build."""
        frequency = validate_positive_scalar(frequency, 'frequency')
        h = hashlib.sha1()
        for arr in (grid.x, grid.y, grid.z,
                    antennas.pos_tx, antennas.pos_rx):
            arr = np.ascontiguousarray(arr, dtype=np.float64)
            h.update(str(arr.shape).encode())
            h.update(arr.tobytes())
        h.update(np.float64(frequency).tobytes())
        h.update(np.float64(self.builder.propagation_speed).tobytes())
        h.update(b'keep' if self.builder.keep_channel_axes else b'drop')
        return h.hexdigest()

    def is_dirty(
        self,
        grid: VoxelGrid,
        antennas: AntennaArray,
        frequency: float,
    ) -> bool:
        """Whether :meth:`get` would rebuild for these inputs."""
        with self._lock:
            if self._dirty or self._map is None:
                return True
            return self.fingerprint(grid, antennas, frequency) != self._fingerprint

    def get(
        self,
        grid: VoxelGrid,
        antennas: AntennaArray,
        frequency: float,
    ) -> DelayMap:
        """Return the cached map, rebuilding it if any input changed.

        Parameters
        ----------
        grid : VoxelGrid
            Imaging volume.
        antennas : AntennaArray
            Transmit and receive positions.
        frequency : float
            Carrier frequency in Hz.

        Returns
        -------
        DelayMap
        """
        key = self.fingerprint(grid, antennas, frequency)
        with self._lock:
            if not self._dirty and self._map is not None and key == self._fingerprint:
                self.hits += 1
                return self._map

            self.misses += 1
            logger.info(
                "Rebuilding delay map for grid %s, %d tx x %d rx, %.6g Hz",
                grid.shape, antennas.n_tx, antennas.n_rx, frequency,
            )
            self._map = self.builder.build(grid, antennas, frequency)
            self._fingerprint = key
            self._dirty = False
            return self._map

    def invalidate(self) -> None:
        """Force the next :meth:`get` to rebuild."""
        with self._lock:
            self._dirty = True
            logger.debug("Delay map cache invalidated")
