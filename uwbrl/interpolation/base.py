# -*- coding: utf-8 -*-
"""
Interpolation Base Class - ABC for 1D interpolation.

Defines the ``Interpolator`` ABC (callable interface) shared by every
1-D resampling primitive in the library.

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
from abc import ABC, abstractmethod

# Third-party
import numpy as np


class Interpolator(ABC):
    """Abstract base class for 1D interpolation.

    All interpolators are callable with signature
    ``(x_old, y_old, x_new) -> y_new``.

    Parameters
    ----------
    x_old : np.ndarray
        Original sample coordinates, shape ``(N,)``.
    y_old : np.ndarray
        Original sample values (real or complex), shape ``(N,)``.
    x_new : np.ndarray
        Target sample coordinates, any shape.

    Returns
    -------
    np.ndarray
        Interpolated values at ``x_new``, same shape as ``x_new``.
    """

    @abstractmethod
    def __call__(
        self,
        x_old: np.ndarray,
        y_old: np.ndarray,
        x_new: np.ndarray,
    ) -> np.ndarray:
        """Interpolate ``y_old`` at ``x_new``."""
        ...
