# -*- coding: utf-8 -*-
"""
Imaging - Delay-and-sum radar imaging over a 3-D voxel grid.

Provides the geometry containers, the delay map builder, the time
alignment search and the delay-and-sum beamformer.

Geometry:

- ``VoxelGrid`` — rectilinear imaging volume.
- ``AntennaArray`` — transmit and receive positions.
- ``DelayMap`` / ``MapIndex`` — delays and phase factors with a
  bounds-checked fixed-arity index.

Processing:

- ``build_delay_map`` / ``DelayMapBuilder`` — round-trip delays and
  delay-scaled phase factors.
- ``DelayMapCache`` — reuse a delay map across frames until the
  geometry or frequency changes.
- ``find_bracket`` / ``find_brackets`` — bracketing sample search.
- ``delay_and_sum`` / ``DelayAndSumBeamformer`` — coherent voxel
  accumulation into a real radar map.

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

from uwbrl.imaging.grid import AntennaArray, DelayMap, MapIndex, VoxelGrid
from uwbrl.imaging.time_alignment import (
    BEFORE_FIRST,
    TimeBracket,
    find_bracket,
    find_brackets,
)
from uwbrl.imaging.delay_map import (
    SPEED_OF_LIGHT,
    DelayMapBuilder,
    build_delay_map,
)
from uwbrl.imaging.das import (
    DelayAndSumBeamformer,
    delay_and_sum,
    lerp,
    project_sample,
)
from uwbrl.imaging.cache import DelayMapCache

__all__ = [
    'AntennaArray',
    'DelayMap',
    'MapIndex',
    'VoxelGrid',
    'BEFORE_FIRST',
    'TimeBracket',
    'find_bracket',
    'find_brackets',
    'SPEED_OF_LIGHT',
    'DelayMapBuilder',
    'build_delay_map',
    'DelayAndSumBeamformer',
    'delay_and_sum',
    'lerp',
    'project_sample',
    'DelayMapCache',
]
