# -*- coding: utf-8 -*-
"""
Imaging Geometry Containers - Voxel grids, antenna arrays, and delay maps.

Defines the data model shared by the delay map builder and the
delay-and-sum beamformer:

- ``VoxelGrid`` — rectilinear 3-D sampling volume given by three
  coordinate vectors (not necessarily uniform or sorted).
- ``AntennaArray`` — transmit and receive phase-centre positions.
- ``MapIndex`` — fixed-arity ``(ix, iy, iz, tx, rx)`` index into a
  delay map, bounds-checked against the map extents.
- ``DelayMap`` — round-trip delays paired with their delay-scaled phase
  factors, either single channel ``(nx, ny, nz)`` or multistatic
  ``(nx, ny, nz, n_tx, n_rx)``.

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
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import (
    DimensionMismatchError,
    IndexBoundsError,
    InputDomainError,
    InputShapeError,
)
from uwbrl.imaging._validation import (
    validate_positions,
    validate_positive_scalar,
    validate_real_vector,
)


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class VoxelGrid:
    """Rectilinear voxel grid.

    Parameters
    ----------
    x, y, z : array_like
        Real coordinate vectors in metres, lengths ``nx``, ``ny``,
        ``nz`` (each >= 1). Spacing may be non-uniform.
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray

    def __post_init__(self) -> None:
        for name in ('x', 'y', 'z'):
            arr = validate_real_vector(getattr(self, name), name)
            object.__setattr__(self, name, _read_only(arr))

    @classmethod
    def from_extent(
        cls,
        x_extent: Tuple[float, float],
        y_extent: Tuple[float, float],
        z_extent: Tuple[float, float],
        spacing: float,
    ) -> 'VoxelGrid':
        """Build a uniform grid covering the given extents.

        Each axis runs from its minimum to its maximum (inclusive, up to
        rounding) in steps of ``spacing``. A degenerate extent
        ``(a, a)`` yields a single-sample axis.

        Parameters
        ----------
        x_extent, y_extent, z_extent : tuple of float
            ``(min, max)`` in metres for each axis.
        spacing : float
            Grid spacing in metres. Must be positive.

        Returns
        -------
        VoxelGrid
        """
        spacing = validate_positive_scalar(spacing, 'spacing')
        axes = []
        for name, (lo, hi) in zip('xyz', (x_extent, y_extent, z_extent)):
            if hi < lo:
                raise InputDomainError(
                    f"{name}_extent must be (min, max), got ({lo}, {hi})"
                )
            n = int(np.floor((hi - lo) / spacing + 1e-9)) + 1
            axes.append(lo + spacing * np.arange(n))
        return cls(*axes)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Grid shape ``(nx, ny, nz)``."""
        return (self.x.size, self.y.size, self.z.size)

    @property
    def n_voxels(self) -> int:
        """Total number of voxels."""
        return self.x.size * self.y.size * self.z.size

    def coordinates(self, ix: int, iy: int, iz: int) -> np.ndarray:
        """Return the ``[x, y, z]`` position of one voxel.

        Raises
        ------
        IndexBoundsError
            If any index is outside the grid.
        """
        for axis, (i, n) in enumerate(zip((ix, iy, iz), self.shape)):
            if not 0 <= i < n:
                raise IndexBoundsError(
                    f"voxel index {i} out of range for axis {axis} "
                    f"of length {n}"
                )
        return np.array([self.x[ix], self.y[iy], self.z[iz]])


@dataclass(frozen=True, eq=False)
class AntennaArray:
    """Transmit and receive antenna phase-centre positions.

    Parameters
    ----------
    pos_tx : array_like
        Transmitter positions, shape ``(n_tx, 3)`` in metres.
    pos_rx : array_like
        Receiver positions, shape ``(n_rx, 3)`` in metres.
    """

    pos_tx: np.ndarray
    pos_rx: np.ndarray

    def __post_init__(self) -> None:
        for name in ('pos_tx', 'pos_rx'):
            arr = validate_positions(getattr(self, name), name)
            object.__setattr__(self, name, _read_only(arr))

    @property
    def n_tx(self) -> int:
        return self.pos_tx.shape[0]

    @property
    def n_rx(self) -> int:
        return self.pos_rx.shape[0]

    def swapped(self) -> 'AntennaArray':
        """Return the array with transmit and receive roles exchanged."""
        return AntennaArray(pos_tx=self.pos_rx, pos_rx=self.pos_tx)


class MapIndex(NamedTuple):
    """Fixed-arity index into a delay map.

    The spatial half ``(ix, iy, iz)`` and the channel half ``(tx, rx)``
    are named separately so the two halves of a 5-D map cannot be
    transposed by accident. ``tx`` and ``rx`` must be 0 for
    single-channel maps.
    """

    ix: int
    iy: int
    iz: int
    tx: int = 0
    rx: int = 0


@dataclass(frozen=True, eq=False)
class DelayMap:
    """Round-trip delays and delay-scaled phase factors over a voxel grid.

    ``phase_factor`` holds ``delay * exp(1j * 2*pi * frequency * delay)``:
    the delay magnitude is folded into the complex value so that the
    beamformer weights each contribution by its delay and applies the
    carrier phase correction in a single multiply.

    Parameters
    ----------
    delay : np.ndarray
        Real, finite, non-negative delays in seconds. Shape
        ``(nx, ny, nz)`` or ``(nx, ny, nz, n_tx, n_rx)``.
    phase_factor : np.ndarray
        Complex phase factors, same shape as ``delay``.
    frequency : float, optional
        Carrier frequency (Hz) the phase factors were built for.
    propagation_speed : float, optional
        Propagation speed (m/s) the delays were built for.

    Raises
    ------
    InputShapeError
        If ``delay`` is not 3-D or 5-D.
    DimensionMismatchError
        If ``phase_factor`` does not match ``delay`` in shape.
    InputDomainError
        If ``delay`` is complex, negative, or non-finite.
    """

    delay: np.ndarray
    phase_factor: np.ndarray
    frequency: Optional[float] = None
    propagation_speed: Optional[float] = field(default=None)

    def __post_init__(self) -> None:
        delay = np.asarray(self.delay)
        if np.iscomplexobj(delay):
            raise InputDomainError("delay map must be real")
        if delay.ndim not in (3, 5):
            raise InputShapeError(
                f"delay map must be 3-D or 5-D, got {delay.ndim}-D "
                f"with shape {delay.shape}"
            )
        phase_factor = np.asarray(self.phase_factor)
        if phase_factor.shape != delay.shape:
            raise DimensionMismatchError(
                f"phase factor shape {phase_factor.shape} is not "
                f"consistent with delay map shape {delay.shape}"
            )
        delay = delay.astype(np.float64)
        if not np.all(np.isfinite(delay)):
            raise InputDomainError("delay map must contain only finite values")
        if np.any(delay < 0.0):
            raise InputDomainError("delay map must not contain negative delays")
        object.__setattr__(self, 'delay', _read_only(delay))
        object.__setattr__(
            self, 'phase_factor',
            _read_only(phase_factor.astype(np.complex128)),
        )

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.delay.shape

    @property
    def grid_shape(self) -> Tuple[int, int, int]:
        """Spatial extents ``(nx, ny, nz)``."""
        return self.delay.shape[:3]

    @property
    def is_single_channel(self) -> bool:
        """``True`` for the 3-D single transmit/receive pair layout."""
        return self.delay.ndim == 3

    @property
    def n_tx(self) -> int:
        return 1 if self.is_single_channel else self.delay.shape[3]

    @property
    def n_rx(self) -> int:
        return 1 if self.is_single_channel else self.delay.shape[4]

    def _check_index(self, index: MapIndex) -> Tuple[int, ...]:
        extents = self.grid_shape + (self.n_tx, self.n_rx)
        for name, i, n in zip(MapIndex._fields, index, extents):
            if not 0 <= i < n:
                raise IndexBoundsError(
                    f"{name}={i} out of range for extent {n}"
                )
        if self.is_single_channel:
            return tuple(index[:3])
        return tuple(index)

    def at(self, index: MapIndex) -> Tuple[float, complex]:
        """Return ``(delay, phase_factor)`` at one bounds-checked index.

        Parameters
        ----------
        index : MapIndex
            Entry to read. A plain tuple of 3 or 5 ints is accepted.

        Raises
        ------
        IndexBoundsError
            If any component is outside the map extents.
        """
        key = self._check_index(MapIndex(*index))
        return float(self.delay[key]), complex(self.phase_factor[key])

    def channel(self, tx: int, rx: int) -> 'DelayMap':
        """Extract the single-channel map of one transmit/receive pair.

        Returns
        -------
        DelayMap
            3-D map for the pair ``(tx, rx)``.

        Raises
        ------
        IndexBoundsError
            If ``tx`` or ``rx`` is out of range.
        """
        self._check_index(MapIndex(0, 0, 0, tx, rx))
        if self.is_single_channel:
            return self
        return DelayMap(
            delay=self.delay[..., tx, rx],
            phase_factor=self.phase_factor[..., tx, rx],
            frequency=self.frequency,
            propagation_speed=self.propagation_speed,
        )

    def squeeze(self) -> 'DelayMap':
        """Drop singleton tx/rx axes of a one-pair multistatic map.

        Returns the map unchanged when it is already single channel or
        holds more than one transmit/receive pair.
        """
        if self.is_single_channel or (self.n_tx, self.n_rx) != (1, 1):
            return self
        return self.channel(0, 0)
