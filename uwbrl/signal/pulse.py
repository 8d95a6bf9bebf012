# -*- coding: utf-8 -*-
"""
UWB Pulse Synthesis - Baseband trains of coded ultra-wideband pulses.

Builds the baseband time-domain waveform of a single UWB pulse or of a
ternary-coded pulse train. The ``'hydrogen'`` shape is a 5-point
triangular pulse spanning ``[-tp/2, tp/2]``; every code chip repeats the
pulse ``prt`` seconds after the previous one, scaled by the chip value.

The returned time support starts at ``-tp`` so the first pulse is
centred at ``t = 0``.

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
import warnings
from typing import Any, NamedTuple, Optional

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError
from uwbrl.imaging._validation import (
    validate_positive_scalar,
    validate_real_vector,
)
from uwbrl.interpolation import LinearInterpolator

logger = logging.getLogger(__name__)


PULSE_SHAPES = ('hydrogen',)


class PulseTrain(NamedTuple):
    """Sampled pulse train.

    Attributes
    ----------
    signal : np.ndarray
        Real baseband samples.
    time : np.ndarray
        Sample times in seconds, same length as ``signal``.
    t_offset : float
        Start of the first pulse relative to its centre.
    """

    signal: np.ndarray
    time: np.ndarray
    t_offset: float


def _hydrogen(tp: float):
    t = np.array([-tp / 2, -tp / 4, 0.0, tp / 4, tp / 2])
    v = np.array([0.0, 0.5, 1.0, 0.5, 0.0])
    return t, v


def uwb_pulse(
    shape: str,
    tp: float,
    tmax: float,
    ts: float,
    code: Optional[Any] = None,
    prt: Optional[float] = None,
) -> PulseTrain:
    """Synthesize a (optionally coded) UWB pulse train.

    Parameters
    ----------
    shape : str
        Pulse shape. Only ``'hydrogen'`` is available.
    tp : float
        Pulse length in seconds.
    tmax : float
        Length of the generated time support in seconds.
    ts : float
        Sampling interval in seconds.
    code : array_like, optional
        Chip values, normally ternary (-1, 0, 1). Other values are used
        as given after a ``UserWarning``. A single un-coded pulse is
        produced when omitted or empty.
    prt : float, optional
        Pulse repetition time in seconds. Required with ``code``.

    Returns
    -------
    PulseTrain
        ``floor(tmax / ts) + 1`` samples starting at ``-tp``.

    Raises
    ------
    InputDomainError
        If ``shape`` is unknown, a time parameter is not positive, or
        ``prt`` is missing when ``code`` is given.
    """
    if shape not in PULSE_SHAPES:
        raise InputDomainError(
            f"pulse shape must be one of {PULSE_SHAPES}, got {shape!r}"
        )
    tp = validate_positive_scalar(tp, 'tp')
    tmax = validate_positive_scalar(tmax, 'tmax')
    ts = validate_positive_scalar(ts, 'ts')

    chips = np.ones(1)
    if code is not None and np.size(code) > 0:
        chips = validate_real_vector(code, 'code')
        if not np.all(np.isin(chips, (-1.0, 0.0, 1.0))):
            warnings.warn(
                "pulse code contains non-ternary values",
                UserWarning,
                stacklevel=2,
            )
        if prt is None:
            raise InputDomainError("prt is required when a code is given")
        prt = validate_positive_scalar(prt, 'prt')

    n_samples = int(np.floor(tmax / ts)) + 1
    time = -tp + ts * np.arange(n_samples)

    t_pulse, v_pulse = _hydrogen(tp)
    interp = LinearInterpolator(extrapolation='zero')
    signal = np.zeros(n_samples)
    for k, chip in enumerate(chips):
        if chip == 0.0:
            continue
        shift = k * prt if k else 0.0
        signal += chip * interp(t_pulse + shift, v_pulse, time)

    logger.debug(
        "Built %s pulse train: %d chips, %d samples", shape,
        chips.size, n_samples,
    )
    return PulseTrain(signal=signal, time=time, t_offset=-tp / 2)
