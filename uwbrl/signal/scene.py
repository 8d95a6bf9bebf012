# -*- coding: utf-8 -*-
"""
Point Target Scene - Multistatic baseband echoes of ideal point scatterers.

Simulates the baseband frame a multistatic UWB radar records from a set
of isotropic point targets. For transmitter ``t``, receiver ``r`` and
target ``k`` at round-trip delay ``tau`` the echo is the baseband pulse
shifted by ``tau`` and rotated by the carrier phase accumulated over the
path:

    s[n, t, r] = sum_k a_k * p(time[n] - tau_k) * exp(1j * 2*pi * f * tau_k)

This is the phase convention the delay-and-sum beamformer compensates,
so the returned frames focus on the targets.

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
from typing import Any

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError, InputShapeError
from uwbrl.imaging._validation import (
    validate_positive_scalar,
    validate_real_vector,
    validate_time_support,
)
from uwbrl.imaging.delay_map import SPEED_OF_LIGHT
from uwbrl.imaging.grid import AntennaArray
from uwbrl.interpolation import LinearInterpolator

logger = logging.getLogger(__name__)


def _validate_targets(targets: Any) -> np.ndarray:
    """Return targets as ``(K, 4)`` rows of ``[x, y, z, amplitude]``."""
    arr = np.asarray(targets)
    if np.iscomplexobj(arr) or arr.dtype.kind not in 'biuf':
        raise InputDomainError("targets must be real")
    arr = arr.astype(np.float64)
    if arr.ndim == 1 and arr.size in (3, 4):
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4) or arr.shape[0] < 1:
        raise InputShapeError(
            f"targets must be K x 3 positions or K x 4 positions with "
            f"amplitude, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InputDomainError("targets must contain only finite values")
    if arr.shape[1] == 3:
        arr = np.hstack([arr, np.ones((arr.shape[0], 1))])
    return arr


def simulate_point_targets(
    targets: Any,
    antennas: AntennaArray,
    time_support: Any,
    frequency: float,
    pulse: Any,
    pulse_time: Any,
    propagation_speed: float = SPEED_OF_LIGHT,
) -> np.ndarray:
    """Simulate the multistatic baseband frame of point targets.

    Parameters
    ----------
    targets : array_like
        ``(K, 3)`` target positions in metres, or ``(K, 4)`` with a
        real amplitude in the last column (default amplitude 1).
    antennas : AntennaArray
        Transmit and receive positions.
    time_support : array_like
        Strictly ascending receive sample times, shape ``(N,)``.
    frequency : float
        Carrier frequency in Hz.
    pulse : array_like
        Real or complex baseband pulse samples.
    pulse_time : array_like
        Strictly ascending times of ``pulse``, relative to the pulse
        reference instant. The pulse is zero outside this support.
    propagation_speed : float
        Wave speed in m/s.

    Returns
    -------
    np.ndarray
        ``complex128`` baseband of shape ``(N, n_tx, n_rx)``.
    """
    tgt = _validate_targets(targets)
    t = validate_time_support(time_support)
    frequency = validate_positive_scalar(frequency, 'frequency')
    speed = validate_positive_scalar(propagation_speed, 'propagation_speed')
    p_time = validate_time_support(pulse_time, 'pulse_time')
    p = np.asarray(pulse)
    if p.dtype.kind not in 'biufc':
        raise InputDomainError(f"pulse must be numeric, got dtype {p.dtype}")
    if p.ndim != 1 or p.size != p_time.size:
        raise InputShapeError(
            f"pulse must be a vector matching pulse_time ({p_time.size} "
            f"samples), got shape {p.shape}"
        )
    if not np.iscomplexobj(p):
        p = validate_real_vector(p, 'pulse')

    interp = LinearInterpolator(extrapolation='zero')
    out = np.zeros((t.size, antennas.n_tx, antennas.n_rx), dtype=np.complex128)
    for x, y, z, amp in tgt:
        pos = np.array([x, y, z])
        r_tx = np.linalg.norm(antennas.pos_tx - pos, axis=1)
        r_rx = np.linalg.norm(antennas.pos_rx - pos, axis=1)
        for i_tx in range(antennas.n_tx):
            for i_rx in range(antennas.n_rx):
                tau = (r_tx[i_tx] + r_rx[i_rx]) / speed
                echo = interp(p_time, p, t - tau)
                out[:, i_tx, i_rx] += (
                    amp * echo * np.exp(1j * 2.0 * np.pi * frequency * tau)
                )

    logger.debug(
        "Simulated %d target(s) for %d tx x %d rx over %d samples",
        tgt.shape[0], antennas.n_tx, antennas.n_rx, t.size,
    )
    return out
