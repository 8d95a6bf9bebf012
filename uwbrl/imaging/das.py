# -*- coding: utf-8 -*-
"""
Delay-and-Sum Beamformer - Coherent voxel imaging from baseband samples.

For every voxel, the complex baseband sample at the voxel's round-trip
delay is interpolated for each transmit/receive pair, projected onto the
expected carrier phase, and summed over all pairs:

    out[v] = sum_{t, r} Re(s(tau[v, t, r]) * conj(P[v, t, r]))

where ``P`` is the delay-scaled phase factor from the delay map builder.
The projection is evaluated as ``Re(s) * Re(P) + Im(s) * Im(P)``.

Two layouts are supported:

- **single channel**: 1-D baseband of ``N`` samples with a 3-D map
  ``(nx, ny, nz)``. Samples are resampled through
  :class:`~uwbrl.interpolation.LinearInterpolator` with end clamping.
- **multistatic**: baseband ``(N, n_tx, n_rx)`` with a 5-D map
  ``(nx, ny, nz, n_tx, n_rx)``. Delays are bracketed with the
  time-alignment search; delays before the first sample use the first
  sample, delays after the last sample use the last sample.

The multistatic path has a vectorized numpy backend that works through
the voxels in chunks and a numba backend that distributes voxels across
threads. Both accumulate each voxel's pairs in ``(tx, rx)`` row-major
order, so repeated calls are bit-identical.

Dependencies
------------
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

# Standard library
import logging
from typing import Annotated, Any, Callable, Optional, Tuple

# Third-party
import numba as nb
import numpy as np

# UWBRL internal
from uwbrl.base import RadarProcessor
from uwbrl.exceptions import (
    DimensionMismatchError,
    InputDomainError,
    InputShapeError,
)
from uwbrl.imaging._validation import validate_time_support
from uwbrl.imaging.grid import DelayMap
from uwbrl.imaging.time_alignment import _brackets, _nb_find_bracket
from uwbrl.interpolation import LinearInterpolator
from uwbrl.params import Desc, Options, Range
from uwbrl.versioning import processor_version

logger = logging.getLogger(__name__)


BACKENDS = ('numba', 'numpy')
DEFAULT_CHUNK_SIZE = 65536


# ===================================================================
# Validation
# ===================================================================

def _validate_inputs(
    baseband: Any,
    time_support: Any,
    delay: Any,
    phase_factor: Any,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Check every shape and domain contract before any numeric work.

    Returns
    -------
    tuple of np.ndarray
        ``(baseband, time_support, delay, phase_factor)`` as
        ``complex128``, ``float64``, ``float64``, ``complex128``.
    """
    bb = np.asarray(baseband)
    if bb.dtype.kind not in 'biufc':
        raise InputDomainError(
            f"baseband must be numeric, got dtype {bb.dtype}"
        )
    if bb.ndim not in (1, 3):
        raise InputShapeError(
            f"baseband must be 1-D (N,) or 3-D (N, n_tx, n_rx), "
            f"got shape {bb.shape}"
        )
    if not np.all(np.isfinite(bb)):
        raise InputDomainError("baseband must contain only finite values")

    t = validate_time_support(time_support)
    if t.size != bb.shape[0]:
        raise InputShapeError(
            f"time_support has {t.size} samples but baseband has "
            f"{bb.shape[0]}"
        )

    d = np.asarray(delay)
    if np.iscomplexobj(d) or d.dtype.kind not in 'biuf':
        raise InputDomainError(
            f"delay map must be real, got dtype {d.dtype}"
        )
    if d.ndim not in (3, 5):
        raise InputShapeError(
            f"delay map must be 3-D or 5-D, got shape {d.shape}"
        )

    if bb.ndim == 1 and d.ndim != 3:
        raise DimensionMismatchError(
            f"single-channel baseband {bb.shape} requires a 3-D delay map, "
            f"got shape {d.shape}"
        )
    if bb.ndim == 3:
        if d.ndim != 5:
            raise DimensionMismatchError(
                f"multistatic baseband {bb.shape} requires a 5-D delay map "
                f"(nx, ny, nz, {bb.shape[1]}, {bb.shape[2]}), "
                f"got shape {d.shape}"
            )
        if d.shape[3:] != bb.shape[1:]:
            raise DimensionMismatchError(
                f"delay map tx/rx extents {d.shape[3:]} do not match "
                f"baseband tx/rx extents {bb.shape[1:]}"
            )

    pf = np.asarray(phase_factor)
    if pf.shape != d.shape:
        raise DimensionMismatchError(
            f"phase factor shape {pf.shape} is not consistent with "
            f"delay map shape {d.shape}"
        )

    d = d.astype(np.float64)
    if not np.all(np.isfinite(d)):
        raise InputDomainError("delay map must contain only finite values")
    if np.any(d < 0.0):
        raise InputDomainError("delay map must not contain negative delays")

    return (
        bb.astype(np.complex128),
        t,
        d,
        pf.astype(np.complex128),
    )


# ===================================================================
# Backends
# ===================================================================

def lerp(c0: Any, c1: Any, w: Any) -> Any:
    """Linear blend ``(1 - w) * c0 + w * c1``.

    Returns ``c0`` exactly for ``w == 0`` and ``c1`` exactly for
    ``w == 1``. Works elementwise on real or complex arrays.
    """
    return (1.0 - w) * c0 + w * c1


def project_sample(samples: Any, phase_factor: Any) -> Any:
    """``Re(samples * conj(phase_factor))`` without forming the product.

    Parameters
    ----------
    samples : complex or np.ndarray
        Interpolated baseband samples.
    phase_factor : complex or np.ndarray
        Delay-scaled phase factors, broadcastable against ``samples``.

    Returns
    -------
    float or np.ndarray
        ``Re(samples) * Re(phase_factor) + Im(samples) * Im(phase_factor)``.
    """
    samples = np.asarray(samples)
    phase_factor = np.asarray(phase_factor)
    return (samples.real * phase_factor.real
            + samples.imag * phase_factor.imag)


def _das_single_channel(
    baseband: np.ndarray,
    time: np.ndarray,
    delay: np.ndarray,
    phase_factor: np.ndarray,
    chunk_size: int,
    progress: Optional[Callable[[float], None]] = None,
) -> np.ndarray:
    interp = LinearInterpolator(extrapolation='clamp')
    d = delay.ravel()
    pf = phase_factor.ravel()
    out = np.empty(d.size, dtype=np.float64)
    for start in range(0, d.size, chunk_size):
        stop = min(start + chunk_size, d.size)
        samples = interp(time, baseband, d[start:stop])
        out[start:stop] = project_sample(samples, pf[start:stop])
        if progress is not None:
            progress(stop / d.size)
    return out.reshape(delay.shape)


def _das_multistatic_numpy(
    baseband: np.ndarray,
    time: np.ndarray,
    delay: np.ndarray,
    phase_factor: np.ndarray,
    chunk_size: int,
    progress: Optional[Callable[[float], None]] = None,
) -> np.ndarray:
    n = time.size
    grid_shape = delay.shape[:3]
    # Row-major flattening: voxel = (ix, iy, iz), pair = tx * n_rx + rx,
    # the same axis order as MapIndex
    n_pairs = delay.shape[3] * delay.shape[4]
    bb = baseband.reshape(n, n_pairs)
    d = delay.reshape(-1, n_pairs)
    pf = phase_factor.reshape(-1, n_pairs)
    cols = np.arange(n_pairs)[None, :]

    n_vox = d.shape[0]
    out = np.empty(n_vox, dtype=np.float64)
    for start in range(0, n_vox, chunk_size):
        stop = min(start + chunk_size, n_vox)
        dc = d[start:stop]
        t_lo, t_hi, idx = _brackets(time, dc)

        # Out-of-support brackets collapse to one sample with zero weight
        lo = np.clip(idx, 0, n - 1)
        hi = np.clip(idx + 1, 0, n - 1)
        span = t_hi - t_lo
        w = np.zeros_like(dc)
        np.divide(dc - t_lo, span, out=w, where=span > 0.0)

        s_lo = bb[lo, cols]
        s_hi = bb[hi, cols]
        samples = lerp(s_lo, s_hi, w)
        contrib = project_sample(samples, pf[start:stop])
        acc = np.zeros(stop - start, dtype=np.float64)
        for p in range(n_pairs):
            acc += contrib[:, p]
        out[start:stop] = acc
        if progress is not None:
            progress(stop / n_vox)
    return out.reshape(grid_shape)


@nb.njit(parallel=True, cache=True)
def _nb_das_multistatic(baseband, time, delay, phase_factor):
    """Accumulate every voxel over all channel pairs.

    Parameters
    ----------
    baseband : complex128, shape (N, n_pairs)
    time : float64, shape (N,)
    delay : float64, shape (n_voxels, n_pairs)
    phase_factor : complex128, shape (n_voxels, n_pairs)

    Returns
    -------
    float64, shape (n_voxels,)
    """
    n = time.shape[0]
    n_vox = delay.shape[0]
    n_pairs = delay.shape[1]
    out = np.zeros(n_vox, dtype=np.float64)

    for v in nb.prange(n_vox):
        acc = 0.0
        for p in range(n_pairs):
            tau = delay[v, p]
            t_lo, t_hi, i = _nb_find_bracket(time, tau)
            if i < 0:
                s_re = baseband[0, p].real
                s_im = baseband[0, p].imag
            elif i >= n - 1:
                s_re = baseband[n - 1, p].real
                s_im = baseband[n - 1, p].imag
            else:
                w = (tau - t_lo) / (t_hi - t_lo)
                s_re = ((1.0 - w) * baseband[i, p].real
                        + w * baseband[i + 1, p].real)
                s_im = ((1.0 - w) * baseband[i, p].imag
                        + w * baseband[i + 1, p].imag)
            acc += (s_re * phase_factor[v, p].real
                    + s_im * phase_factor[v, p].imag)
        out[v] = acc
    return out


def _das_multistatic_numba(
    baseband: np.ndarray,
    time: np.ndarray,
    delay: np.ndarray,
    phase_factor: np.ndarray,
) -> np.ndarray:
    # Same (voxel, pair) layout as _das_multistatic_numpy
    n_pairs = delay.shape[3] * delay.shape[4]
    out = _nb_das_multistatic(
        np.ascontiguousarray(baseband.reshape(time.size, n_pairs)),
        np.ascontiguousarray(time),
        np.ascontiguousarray(delay.reshape(-1, n_pairs)),
        np.ascontiguousarray(phase_factor.reshape(-1, n_pairs)),
    )
    return out.reshape(delay.shape[:3])


# ===================================================================
# Public API
# ===================================================================

def delay_and_sum(
    baseband: Any,
    time_support: Any,
    delay_map: Any,
    phase_factor: Any,
    *,
    backend: str = 'numba',
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: Optional[Callable[[float], None]] = None,
) -> np.ndarray:
    """Form a real-valued radar map by delay-and-sum beamforming.

    Parameters
    ----------
    baseband : array_like
        Complex baseband samples, shape ``(N,)`` or ``(N, n_tx, n_rx)``.
    time_support : array_like
        Strictly ascending sample times, shape ``(N,)``.
    delay_map : array_like
        Round-trip delays, shape ``(nx, ny, nz)`` for a 1-D baseband or
        ``(nx, ny, nz, n_tx, n_rx)`` for a 3-D baseband.
    phase_factor : array_like
        Complex phase factors, same shape as ``delay_map``.
    backend : str
        ``'numba'`` (default) or ``'numpy'`` for the multistatic path.
        The single-channel path always resamples through
        :class:`LinearInterpolator`.
    chunk_size : int
        Voxels processed per vectorized block. Default 65536.
    progress_callback : callable, optional
        Called with the completed fraction in ``[0, 1]``.

    Returns
    -------
    np.ndarray
        ``float64`` radar map of shape ``(nx, ny, nz)``.

    Raises
    ------
    InputShapeError
        If an array has the wrong rank or ``time_support`` does not
        match the baseband length.
    DimensionMismatchError
        If the baseband layout, delay map and phase factor map disagree.
    InputDomainError
        If delays are negative or non-finite, the time support is not
        strictly ascending, or data are non-numeric.
    """
    if backend not in BACKENDS:
        raise InputDomainError(
            f"backend must be one of {BACKENDS}, got {backend!r}"
        )
    if (isinstance(chunk_size, bool)
            or not isinstance(chunk_size, (int, np.integer))
            or chunk_size < 1):
        raise InputDomainError(
            f"chunk_size must be a positive integer, got {chunk_size!r}"
        )
    bb, t, d, pf = _validate_inputs(
        baseband, time_support, delay_map, phase_factor,
    )
    chunk_size = int(chunk_size)

    if bb.ndim == 1:
        logger.debug("Single-channel DAS over %s voxels", d.shape)
        out = _das_single_channel(bb, t, d, pf, chunk_size,
                                  progress_callback)
    elif backend == 'numpy':
        logger.debug("Multistatic DAS (numpy) over %s", d.shape)
        out = _das_multistatic_numpy(bb, t, d, pf, chunk_size,
                                     progress_callback)
    else:
        logger.debug("Multistatic DAS (numba) over %s", d.shape)
        out = _das_multistatic_numba(bb, t, d, pf)
        if progress_callback is not None:
            progress_callback(1.0)
    return out


@processor_version('1.0.0')
class DelayAndSumBeamformer(RadarProcessor):
    """Delay-and-sum imaging of a baseband frame against a delay map.

    The same :class:`~uwbrl.imaging.grid.DelayMap` can be reused for
    any number of frames while the geometry and carrier frequency are
    unchanged.

    Parameters
    ----------
    backend : str
        Multistatic accumulation backend, ``'numba'`` or ``'numpy'``.
        Default ``'numba'``.
    chunk_size : int
        Voxels per vectorized block. Default 65536.

    Examples
    --------
    >>> dmap = DelayMapBuilder().build(grid, antennas, frequency=4e9)
    >>> bf = DelayAndSumBeamformer(backend='numpy')
    >>> image = bf.form_image(frame, time_support, dmap)
    """

    backend: Annotated[str, Options(*BACKENDS),
                       Desc('Multistatic accumulation backend')] = 'numba'
    chunk_size: Annotated[int, Range(min=1, unit='voxels'),
                          Desc('Voxels per vectorized block')] = DEFAULT_CHUNK_SIZE

    def form_image(
        self,
        baseband: Any,
        time_support: Any,
        delay_map: DelayMap,
        **kwargs: Any,
    ) -> np.ndarray:
        """Beamform one frame.

        Parameters
        ----------
        baseband : array_like
            Complex samples, ``(N,)`` for a 3-D map or
            ``(N, n_tx, n_rx)`` for a 5-D map.
        time_support : array_like
            Sample times, shape ``(N,)``.
        delay_map : DelayMap
            Delays and phase factors from :class:`DelayMapBuilder`.
        **kwargs
            Runtime overrides of ``backend`` / ``chunk_size`` and an
            optional ``progress_callback``.

        Returns
        -------
        np.ndarray
            Real radar map of shape ``delay_map.grid_shape``.
        """
        if not isinstance(delay_map, DelayMap):
            raise TypeError(
                f"delay_map must be a DelayMap, got "
                f"{type(delay_map).__name__}"
            )
        params = self._resolve_params(kwargs)
        image = delay_and_sum(
            baseband, time_support,
            delay_map.delay, delay_map.phase_factor,
            backend=params['backend'],
            chunk_size=params['chunk_size'],
            progress_callback=kwargs.get('progress_callback'),
        )
        logger.info(
            "Formed %s radar map from %d tx x %d rx channels",
            image.shape, delay_map.n_tx, delay_map.n_rx,
        )
        return image
