# -*- coding: utf-8 -*-
"""
Delay Map Builder - Round-trip delays and phase factors over a voxel grid.

For every voxel ``v`` of a rectilinear grid and every transmitter ``t``
and receiver ``r`` the builder computes the round-trip propagation delay

    tau(v, t, r) = (|v - p_tx[t]| + |p_rx[r] - v|) / c

and the delay-scaled phase factor

    P(v, t, r) = tau * exp(1j * 2*pi * f * tau).

The two maps are shaped ``(nx, ny, nz, n_tx, n_rx)`` and indexed so that
axis 0 follows ``x``, axis 1 follows ``y`` and axis 2 follows ``z``. A
single transmit/receive pair yields the 3-D ``(nx, ny, nz)`` layout that
pairs with a 1-D baseband.

Dependencies
------------
scipy

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
import logging
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy import constants

# UWBRL internal
from uwbrl.base import RadarProcessor
from uwbrl.imaging._validation import (
    validate_positions,
    validate_positive_scalar,
    validate_real_vector,
)
from uwbrl.imaging.grid import AntennaArray, DelayMap, VoxelGrid
from uwbrl.params import Desc, Range
from uwbrl.versioning import processor_version

logger = logging.getLogger(__name__)


SPEED_OF_LIGHT = float(constants.c)
"""Free-space propagation speed in m/s."""


def _ranges(
    gx: np.ndarray,
    gy: np.ndarray,
    gz: np.ndarray,
    positions: np.ndarray,
) -> np.ndarray:
    """Euclidean distance from every voxel to every antenna.

    Returns
    -------
    np.ndarray
        Shape ``(nx, ny, nz, n_antennas)``.
    """
    out = np.empty(gx.shape + (positions.shape[0],), dtype=np.float64)
    for k, (px, py, pz) in enumerate(positions):
        dx = gx - px
        dy = gy - py
        dz = gz - pz
        out[..., k] = np.sqrt(dx * dx + dy * dy + dz * dz)
    return out


def build_delay_map(
    x: Any,
    y: Any,
    z: Any,
    frequency: float,
    pos_tx: Any,
    pos_rx: Any,
    *,
    propagation_speed: float = SPEED_OF_LIGHT,
    keep_channel_axes: bool = False,
) -> DelayMap:
    """Build the multistatic delay map and phase factor map.

    All inputs are validated before any numeric work starts.

    Parameters
    ----------
    x, y, z : array_like
        Real grid coordinate vectors in metres (row or column vectors
        accepted), lengths ``nx``, ``ny``, ``nz``.
    frequency : float
        Carrier frequency in Hz. Must be positive.
    pos_tx : array_like
        Transmitter positions, shape ``(n_tx, 3)``.
    pos_rx : array_like
        Receiver positions, shape ``(n_rx, 3)``.
    propagation_speed : float
        Wave speed in m/s. Default is the speed of light in vacuum.
    keep_channel_axes : bool
        Keep the singleton ``(1, 1)`` channel axes when there is exactly
        one transmitter and one receiver. Default False.

    Returns
    -------
    DelayMap
        Map of shape ``(nx, ny, nz, n_tx, n_rx)``, or ``(nx, ny, nz)``
        for a single transmit/receive pair unless *keep_channel_axes*.

    Raises
    ------
    InputShapeError
        If a coordinate array is not a vector or a position matrix is
        not ``n x 3``.
    InputDomainError
        If ``frequency`` or ``propagation_speed`` is not positive, or
        any input is complex or non-finite.
    """
    x = validate_real_vector(x, 'x')
    y = validate_real_vector(y, 'y')
    z = validate_real_vector(z, 'z')
    frequency = validate_positive_scalar(frequency, 'frequency')
    pos_tx = validate_positions(pos_tx, 'pos_tx')
    pos_rx = validate_positions(pos_rx, 'pos_rx')
    speed = validate_positive_scalar(propagation_speed, 'propagation_speed')

    gx, gy, gz = np.meshgrid(x, y, z, indexing='ij')
    d_tx = _ranges(gx, gy, gz, pos_tx)
    d_rx = _ranges(gx, gy, gz, pos_rx)

    delay = (d_tx[..., :, None] + d_rx[..., None, :]) / speed
    if delay.shape[3:] == (1, 1) and not keep_channel_axes:
        delay = delay[..., 0, 0]

    phase = 2.0 * np.pi * frequency * delay
    phase_factor = np.empty(delay.shape, dtype=np.complex128)
    phase_factor.real = delay * np.cos(phase)
    phase_factor.imag = delay * np.sin(phase)

    logger.debug(
        "Built delay map %s for %d tx x %d rx at %.6g Hz",
        delay.shape, pos_tx.shape[0], pos_rx.shape[0], frequency,
    )
    return DelayMap(
        delay=delay,
        phase_factor=phase_factor,
        frequency=frequency,
        propagation_speed=speed,
    )


@processor_version('1.0.0')
class DelayMapBuilder(RadarProcessor):
    """Configurable front end to :func:`build_delay_map`.

    Parameters
    ----------
    propagation_speed : float
        Wave speed in m/s. Default is the speed of light in vacuum.
    keep_channel_axes : bool
        Return a 5-D ``(..., 1, 1)`` map for a one-pair array, to pair
        with an ``(N, 1, 1)`` baseband. Default False.

    Examples
    --------
    >>> grid = VoxelGrid.from_extent((-1, 1), (0, 0), (1, 3), 0.05)
    >>> antennas = AntennaArray(pos_tx=[[0, 0, 0]], pos_rx=[[0.1, 0, 0]])
    >>> dmap = DelayMapBuilder().build(grid, antennas, frequency=4e9)
    >>> dmap.shape
    (41, 1, 41)
    """

    propagation_speed: Annotated[
        float, Range(min=0.0, exclusive_min=True, unit='m/s'),
        Desc('Propagation speed'),
    ] = SPEED_OF_LIGHT
    keep_channel_axes: Annotated[
        bool, Desc('Keep singleton tx/rx axes for one-pair arrays'),
    ] = False

    def build(
        self,
        grid: VoxelGrid,
        antennas: AntennaArray,
        frequency: float,
        **kwargs: Any,
    ) -> DelayMap:
        """Build the delay map of *antennas* over *grid*.

        Parameters
        ----------
        grid : VoxelGrid
            Imaging volume.
        antennas : AntennaArray
            Transmit and receive positions.
        frequency : float
            Carrier frequency in Hz.
        **kwargs
            Runtime overrides of the tunable parameters and an optional
            ``progress_callback``.

        Returns
        -------
        DelayMap
        """
        params = self._resolve_params(kwargs)
        dmap = build_delay_map(
            grid.x, grid.y, grid.z, frequency,
            antennas.pos_tx, antennas.pos_rx,
            propagation_speed=params['propagation_speed'],
            keep_channel_axes=params['keep_channel_axes'],
        )
        self._report_progress(kwargs, 1.0)
        return dmap
