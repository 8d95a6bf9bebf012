# -*- coding: utf-8 -*-
"""
Imaging Validation Helpers - Shared array checks for the imaging core.

Provides reusable validation functions for coordinate vectors, antenna
position matrices, scalar physical parameters, and time supports. Every
helper returns a normalized ``float64`` copy of its input or raises one
of the categorized ``ValidationError`` subclasses, so callers can run all
checks before starting any numeric work.

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
from typing import Any

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError, InputShapeError


def _as_real_array(value: Any, name: str) -> np.ndarray:
    """Convert *value* to a real ``float64`` array.

    Raises
    ------
    InputDomainError
        If *value* is complex or not numeric.
    """
    arr = np.asarray(value)
    if np.iscomplexobj(arr):
        raise InputDomainError(f"{name} must be real, got complex data")
    if arr.dtype.kind not in 'biuf':
        raise InputDomainError(
            f"{name} must be numeric, got dtype {arr.dtype}"
        )
    return arr.astype(np.float64)


def validate_real_vector(value: Any, name: str) -> np.ndarray:
    """Validate a real, finite, non-empty vector.

    Row vectors ``(1, n)`` and column vectors ``(n, 1)`` are accepted and
    flattened.

    Parameters
    ----------
    value : array_like
        Candidate vector.
    name : str
        Parameter name for error messages.

    Returns
    -------
    np.ndarray
        ``float64`` array of shape ``(n,)``.

    Raises
    ------
    InputShapeError
        If *value* is not a vector or is empty.
    InputDomainError
        If *value* is complex, non-numeric, or contains non-finite values.
    """
    arr = _as_real_array(value, name)
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.ravel()
    if arr.ndim != 1:
        raise InputShapeError(
            f"{name} must be a real vector, got shape {arr.shape}"
        )
    if arr.size == 0:
        raise InputShapeError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InputDomainError(f"{name} must contain only finite values")
    return arr


def validate_positions(value: Any, name: str) -> np.ndarray:
    """Validate an ``(n, 3)`` matrix of Cartesian antenna positions.

    Parameters
    ----------
    value : array_like
        Candidate position matrix. A single position of shape ``(3,)``
        is promoted to ``(1, 3)``.
    name : str
        Parameter name for error messages.

    Returns
    -------
    np.ndarray
        ``float64`` array of shape ``(n, 3)``.

    Raises
    ------
    InputShapeError
        If the matrix is not 2-D with exactly 3 columns and at least
        one row.
    InputDomainError
        If the matrix is complex, non-numeric, or non-finite.
    """
    arr = _as_real_array(value, name)
    if arr.ndim == 1 and arr.size == 3:
        arr = arr.reshape(1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InputShapeError(
            f"{name} must be an n by 3 real matrix, got shape {arr.shape}"
        )
    if arr.shape[0] < 1:
        raise InputShapeError(f"{name} must contain at least one position")
    if not np.all(np.isfinite(arr)):
        raise InputDomainError(f"{name} must contain only finite values")
    return arr


def validate_positive_scalar(value: Any, name: str) -> float:
    """Validate a single real, finite, strictly positive value.

    Raises
    ------
    InputDomainError
        If *value* is not a single positive finite real number.
    """
    arr = _as_real_array(value, name)
    if arr.size != 1:
        raise InputDomainError(
            f"{name} must be a single positive value, got {arr.size} values"
        )
    scalar = float(arr.ravel()[0])
    if not np.isfinite(scalar) or scalar <= 0.0:
        raise InputDomainError(
            f"{name} must be a single positive value, got {scalar!r}"
        )
    return scalar


def validate_time_support(value: Any, name: str = 'time_support') -> np.ndarray:
    """Validate a strictly ascending time axis with at least two samples.

    Returns
    -------
    np.ndarray
        ``float64`` array of shape ``(N,)``.

    Raises
    ------
    InputShapeError
        If *value* is not a vector of at least two samples.
    InputDomainError
        If *value* is complex, non-finite, or not strictly ascending.
    """
    arr = validate_real_vector(value, name)
    if arr.size < 2:
        raise InputShapeError(
            f"{name} must contain at least 2 samples, got {arr.size}"
        )
    if not np.all(np.diff(arr) > 0):
        raise InputDomainError(f"{name} must be strictly ascending")
    return arr
