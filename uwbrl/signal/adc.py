# -*- coding: utf-8 -*-
"""
ADC Conversion - Resample and quantize baseband signals.

Models an ideal analogue-to-digital converter in two steps:

1. **Sampling**: the input is linearly resampled at the converter's
   sampling instants, given either by a sampling frequency (uniform
   instants from the start of the time support) or by a clock waveform
   (instants at the rising crossings of its mid level).
2. **Quantization**: each value is replaced by the highest level at or
   below it. Real and imaginary parts are quantized independently.

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
from typing import Any, Tuple

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError, InputShapeError
from uwbrl.imaging._validation import (
    validate_positive_scalar,
    validate_real_vector,
    validate_time_support,
)
from uwbrl.interpolation import LinearInterpolator

logger = logging.getLogger(__name__)


def prepare_levels(levels: Any) -> np.ndarray:
    """Validate quantization levels and pad them to an odd count.

    An even number of levels gets one extra level extrapolated from the
    last step, ``2 * l[-1] - l[-2]``.

    Raises
    ------
    InputShapeError
        If fewer than two levels are given.
    InputDomainError
        If the levels are not strictly ascending.
    """
    lv = validate_real_vector(levels, 'levels')
    if lv.size < 2:
        raise InputShapeError(
            f"levels must contain at least 2 values, got {lv.size}"
        )
    if not np.all(np.diff(lv) > 0):
        raise InputDomainError("levels must be strictly ascending")
    if lv.size % 2 == 0:
        lv = np.append(lv, 2.0 * lv[-1] - lv[-2])
    return lv


def quantize(values: np.ndarray, levels: np.ndarray) -> np.ndarray:
    """Map each real value to the level at or below it.

    Values below ``levels[0]`` map to ``levels[0]``; values at or above
    ``levels[-2]`` map to ``levels[-2]``, so the top level is never
    produced.
    """
    idx = np.searchsorted(levels, values, side='right') - 1
    idx = np.clip(idx, 0, levels.size - 2)
    return levels[idx]


def sampling_instants(time_support: np.ndarray, sampling: Any) -> np.ndarray:
    """Sampling instants from a frequency or a clock waveform.

    Parameters
    ----------
    time_support : np.ndarray
        Validated time axis of the input signal.
    sampling : float or array_like
        Sampling frequency in Hz, or a clock waveform sampled on
        ``time_support``.

    Returns
    -------
    np.ndarray
        Ascending sampling times.

    Raises
    ------
    InputShapeError
        If a clock waveform does not match the time support length.
    InputDomainError
        If the frequency is not positive or the clock has no rising
        edges.
    """
    if np.size(sampling) == 1:
        fs = validate_positive_scalar(sampling, 'sampling')
        t0 = time_support.min()
        n = int(np.ceil((time_support.max() - t0) * fs))
        return t0 + np.arange(n) / fs

    ck = validate_real_vector(sampling, 'sampling')
    if ck.size != time_support.size:
        raise InputShapeError(
            f"sampling clock has {ck.size} samples but time_support "
            f"has {time_support.size}"
        )
    th = 0.5 * (ck.max() + ck.min())
    y0 = ck[:-1]
    y1 = ck[1:]
    rising = np.flatnonzero((y0 < th) & (y1 > th))
    if rising.size == 0:
        raise InputDomainError("sampling clock has no rising edges")
    t0 = time_support[rising]
    t1 = time_support[rising + 1]
    return t0 + (t1 - t0) * (th - y0[rising]) / (y1[rising] - y0[rising])


def adc_convert(
    signal: Any,
    time_support: Any,
    sampling: Any,
    levels: Any,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sample and quantize a real or complex signal.

    Parameters
    ----------
    signal : array_like
        Input samples, shape ``(N,)`` or ``(channels, N)``.
    time_support : array_like
        Strictly ascending sample times, shape ``(N,)``.
    sampling : float or array_like
        Sampling frequency in Hz, or a clock waveform of length ``N``
        sampled on its rising mid-level crossings.
    levels : array_like
        Strictly ascending quantization levels.

    Returns
    -------
    samples : np.ndarray
        Quantized samples, shape ``(M,)`` or ``(channels, M)``, real or
        complex following ``signal``.
    sample_times : np.ndarray
        Sampling instants, shape ``(M,)``.

    Raises
    ------
    InputShapeError
        If ``signal`` is not 1-D or 2-D, or its length disagrees with
        ``time_support``.
    InputDomainError
        If the sampling specification or the levels are invalid.
    """
    sig = np.asarray(signal)
    if sig.dtype.kind not in 'biufc':
        raise InputDomainError(
            f"signal must be numeric, got dtype {sig.dtype}"
        )
    if sig.ndim not in (1, 2):
        raise InputShapeError(
            f"signal must be a vector or a matrix, got shape {sig.shape}"
        )
    t = validate_time_support(time_support)
    if sig.shape[-1] != t.size:
        raise InputShapeError(
            f"signal has {sig.shape[-1]} samples per channel but "
            f"time_support has {t.size}"
        )
    lv = prepare_levels(levels)
    t_s = sampling_instants(t, sampling)

    interp = LinearInterpolator(extrapolation='clamp')
    rows = np.atleast_2d(sig)
    out = np.empty(
        (rows.shape[0], t_s.size),
        dtype=np.complex128 if np.iscomplexobj(sig) else np.float64,
    )
    for ch, row in enumerate(rows):
        resampled = interp(t, row, t_s)
        if np.iscomplexobj(resampled):
            out[ch] = (quantize(resampled.real, lv)
                       + 1j * quantize(resampled.imag, lv))
        else:
            out[ch] = quantize(resampled, lv)

    logger.debug(
        "ADC converted %d channel(s) to %d samples on %d levels",
        rows.shape[0], t_s.size, lv.size,
    )
    if sig.ndim == 1:
        return out[0], t_s
    return out, t_s
