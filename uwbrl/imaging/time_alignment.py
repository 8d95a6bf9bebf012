# -*- coding: utf-8 -*-
"""
Time Alignment - Bracketing sample search on an ascending time axis.

Locates, for a query delay, the pair of time samples that brackets it so
the beamformer can linearly interpolate the baseband signal. The search
halves the candidate window at every step because it runs once per
(voxel, transmitter, receiver) triple.

Boundary policy:

- ``delay > t[N-1]`` returns ``(t[N-1], t[N-1], N-1)``; the caller clamps
  to the last sample.
- ``delay < t[0]`` returns ``(t[0], t[0], BEFORE_FIRST)``; the caller
  uses the first sample.
- otherwise ``t[i] <= delay <= t[i+1]`` with ``index_lo = i``. A delay
  equal to an interior sample ``t[k]`` brackets from ``k``; a delay equal
  to ``t[N-1]`` brackets from ``N-2``.

Three equivalent forms are provided: ``find_bracket`` (scalar, pure
Python), ``find_brackets`` (vectorized numpy) and a numba-compiled twin
used inside the compiled beamformer kernel.

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
from typing import Any, NamedTuple, Tuple

# Third-party
import numba as nb
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError
from uwbrl.imaging._validation import validate_time_support


BEFORE_FIRST = -1
"""Bracket index meaning "delay precedes the first sample"."""


class TimeBracket(NamedTuple):
    """Bracketing pair for one query delay."""

    t_lo: float
    t_hi: float
    index_lo: int


def _search(time_support: np.ndarray, delay: float) -> TimeBracket:
    i_min = 0
    i_max = time_support.size - 1
    t_min = float(time_support[i_min])
    t_max = float(time_support[i_max])

    if delay > t_max:
        return TimeBracket(t_max, t_max, i_max)
    if delay < t_min:
        return TimeBracket(t_min, t_min, BEFORE_FIRST)

    while i_max - i_min > 1:
        i_half = (i_max + i_min) >> 1
        t_half = float(time_support[i_half])
        if delay < t_half:
            i_max = i_half
            t_max = t_half
        else:
            i_min = i_half
            t_min = t_half

    return TimeBracket(t_min, t_max, i_min)


def find_bracket(time_support: Any, delay: float) -> TimeBracket:
    """Find the samples bracketing a single delay.

    Parameters
    ----------
    time_support : array_like
        Strictly ascending sample times, length ``N >= 2``.
    delay : float
        Query delay in seconds.

    Returns
    -------
    TimeBracket
        ``(t_lo, t_hi, index_lo)`` following the module boundary policy.

    Raises
    ------
    InputShapeError
        If ``time_support`` is not a vector of at least two samples.
    InputDomainError
        If ``time_support`` is not strictly ascending or ``delay`` is
        not finite.
    """
    t = validate_time_support(time_support)
    delay = float(delay)
    if not np.isfinite(delay):
        raise InputDomainError(f"delay must be finite, got {delay!r}")
    return _search(t, delay)


def find_brackets(
    time_support: Any,
    delays: Any,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized bracket search over an array of delays.

    Produces exactly the brackets ``find_bracket`` would return for each
    element of ``delays``.

    Parameters
    ----------
    time_support : array_like
        Strictly ascending sample times, length ``N >= 2``.
    delays : array_like
        Query delays, any shape.

    Returns
    -------
    t_lo, t_hi : np.ndarray
        Bracket times, shape of ``delays``.
    index_lo : np.ndarray
        ``int64`` lower indices, shape of ``delays``, with
        ``BEFORE_FIRST`` for delays preceding the first sample.
    """
    t = validate_time_support(time_support)
    d = np.asarray(delays, dtype=np.float64)
    if not np.all(np.isfinite(d)):
        raise InputDomainError("delays must contain only finite values")
    return _brackets(t, d)


def _brackets(
    t: np.ndarray,
    d: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Unvalidated core of :func:`find_brackets`."""
    n = t.size
    idx = np.searchsorted(t, d, side='right') - 1
    idx = np.clip(idx, 0, n - 2).astype(np.int64)
    t_lo = t[idx]
    t_hi = t[idx + 1]

    after = d > t[-1]
    before = d < t[0]
    idx = np.where(after, n - 1, idx)
    idx = np.where(before, BEFORE_FIRST, idx)
    t_lo = np.where(after, t[-1], np.where(before, t[0], t_lo))
    t_hi = np.where(after, t[-1], np.where(before, t[0], t_hi))
    return t_lo, t_hi, idx


# ==================================================================
# Numba-compiled twin
# ==================================================================

@nb.njit(cache=True, nogil=True)
def _nb_find_bracket(time_support, delay):
    """Compiled equivalent of :func:`_search`.

    Parameters
    ----------
    time_support : float64, shape (N,)
    delay : float64

    Returns
    -------
    (float64, float64, int64)
    """
    i_min = 0
    i_max = time_support.shape[0] - 1
    t_min = time_support[i_min]
    t_max = time_support[i_max]

    if delay > t_max:
        return t_max, t_max, i_max
    if delay < t_min:
        return t_min, t_min, BEFORE_FIRST

    while i_max - i_min > 1:
        i_half = (i_max + i_min) >> 1
        t_half = time_support[i_half]
        if delay < t_half:
            i_max = i_half
            t_max = t_half
        else:
            i_min = i_half
            t_min = t_half

    return t_min, t_max, i_min
