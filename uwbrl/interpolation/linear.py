# -*- coding: utf-8 -*-
"""
Linear Interpolation - Piecewise-linear resampling of real or complex samples.

Provides ``LinearInterpolator``, the generic 1-D interpolation primitive
used by the single-channel delay-and-sum beamformer and by the signal
helpers. Each output point is formed from its bracketing pair of input
samples as ``(1 - w) * y[i] + w * y[i + 1]``, which returns the input
sample exactly whenever ``x_new`` coincides with a sample coordinate.

Points outside the input support are either clamped to the end samples
(``extrapolation='clamp'``, the default) or set to zero
(``extrapolation='zero'``).

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

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError, InputShapeError
from uwbrl.interpolation.base import Interpolator


_EXTRAPOLATION_MODES = ('clamp', 'zero')


class LinearInterpolator(Interpolator):
    """Piecewise-linear interpolator for real or complex samples.

    Parameters
    ----------
    extrapolation : str
        Out-of-support policy. ``'clamp'`` repeats the first/last
        sample, ``'zero'`` fills with 0. Default ``'clamp'``.

    Examples
    --------
    >>> interp = LinearInterpolator()
    >>> y_new = interp(t, iq_samples, delays)
    """

    def __init__(self, extrapolation: str = 'clamp') -> None:
        if extrapolation not in _EXTRAPOLATION_MODES:
            raise ValueError(
                f"extrapolation must be one of {_EXTRAPOLATION_MODES}, "
                f"got {extrapolation!r}"
            )
        self.extrapolation = extrapolation

    def __call__(
        self,
        x_old: np.ndarray,
        y_old: np.ndarray,
        x_new: np.ndarray,
    ) -> np.ndarray:
        """Interpolate ``y_old`` at ``x_new``.

        Parameters
        ----------
        x_old : np.ndarray
            Strictly ascending sample coordinates, shape ``(N,)``,
            ``N >= 2``.
        y_old : np.ndarray
            Sample values (real or complex), shape ``(N,)``.
        x_new : np.ndarray
            Query coordinates, any shape.

        Returns
        -------
        np.ndarray
            Interpolated values with the shape of ``x_new`` and the
            dtype of ``y_old`` promoted to floating point.

        Raises
        ------
        InputShapeError
            If ``x_old`` and ``y_old`` are not matching vectors of at
            least two samples.
        InputDomainError
            If ``x_old`` is not strictly ascending.
        """
        x_old = np.asarray(x_old, dtype=np.float64)
        y_old = np.asarray(y_old)
        x_new = np.asarray(x_new, dtype=np.float64)

        if x_old.ndim != 1 or y_old.ndim != 1:
            raise InputShapeError(
                f"x_old and y_old must be 1-D, got shapes "
                f"{x_old.shape} and {y_old.shape}"
            )
        if x_old.size != y_old.size:
            raise InputShapeError(
                f"x_old has {x_old.size} samples but y_old has {y_old.size}"
            )
        n = x_old.size
        if n < 2:
            raise InputShapeError(
                f"at least 2 samples are required, got {n}"
            )
        if not np.all(np.diff(x_old) > 0):
            raise InputDomainError("x_old must be strictly ascending")

        # Lower bracket index: x_old[lo] <= x < x_old[lo + 1]
        lo = np.searchsorted(x_old, x_new, side='right') - 1
        lo = np.clip(lo, 0, n - 2)
        x_lo = x_old[lo]
        x_hi = x_old[lo + 1]
        w = np.clip((x_new - x_lo) / (x_hi - x_lo), 0.0, 1.0)

        result = (1.0 - w) * y_old[lo] + w * y_old[lo + 1]

        if self.extrapolation == 'zero':
            oob = (x_new < x_old[0]) | (x_new > x_old[-1])
            result = np.where(oob, 0.0, result)

        return result


def linear_interpolator(extrapolation: str = 'clamp') -> LinearInterpolator:
    """Create a linear interpolator.

    Convenience factory function. See :class:`LinearInterpolator`
    for full documentation.

    Parameters
    ----------
    extrapolation : str
        ``'clamp'`` (default) or ``'zero'``.

    Returns
    -------
    LinearInterpolator
        Callable with signature ``(x_old, y_old, x_new) -> y_new``.
    """
    return LinearInterpolator(extrapolation=extrapolation)
