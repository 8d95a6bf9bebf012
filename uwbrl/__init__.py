# -*- coding: utf-8 -*-
"""
UWBRL - Ultra-Wideband Radar imaging Library.

Delay-and-sum imaging of multistatic ultra-wideband radar frames over a
3-D voxel grid, with the signal-chain helpers needed to synthesize and
digitize the baseband frames it consumes.

Dependencies
------------
numpy
scipy
numba

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from uwbrl.exceptions import (
    UwbrlError,
    ValidationError,
    InputShapeError,
    InputDomainError,
    DimensionMismatchError,
    IndexBoundsError,
)
from uwbrl.imaging import (
    AntennaArray,
    DelayMap,
    DelayMapBuilder,
    DelayMapCache,
    DelayAndSumBeamformer,
    VoxelGrid,
    build_delay_map,
    delay_and_sum,
)

__all__ = [
    'UwbrlError',
    'ValidationError',
    'InputShapeError',
    'InputDomainError',
    'DimensionMismatchError',
    'IndexBoundsError',
    'AntennaArray',
    'DelayMap',
    'DelayMapBuilder',
    'DelayMapCache',
    'DelayAndSumBeamformer',
    'VoxelGrid',
    'build_delay_map',
    'delay_and_sum',
]
