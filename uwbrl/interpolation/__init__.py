# -*- coding: utf-8 -*-
"""
Interpolation - 1D resampling primitives for real and complex samples.

Provides interpolators with a uniform callable signature
``(x_old, y_old, x_new) -> y_new``.

Available interpolators:

- ``LinearInterpolator`` / ``linear_interpolator`` — piecewise linear,
  exact at sample points, clamp or zero extrapolation.

Base classes:

- ``Interpolator`` — ABC for all interpolators.

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

from uwbrl.interpolation.base import Interpolator
from uwbrl.interpolation.linear import LinearInterpolator, linear_interpolator

__all__ = [
    'Interpolator',
    'LinearInterpolator',
    'linear_interpolator',
]
