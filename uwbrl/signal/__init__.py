# -*- coding: utf-8 -*-
"""
Signal - Baseband signal-chain helpers feeding the imaging core.

- ``uwb_pulse`` / ``PulseTrain`` — coded UWB pulse train synthesis.
- ``adc_convert`` — resampling and quantization by frequency or clock.
- ``simulate_point_targets`` — multistatic baseband echoes of point
  targets.

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

from uwbrl.signal.pulse import PULSE_SHAPES, PulseTrain, uwb_pulse
from uwbrl.signal.adc import adc_convert, prepare_levels, quantize
from uwbrl.signal.scene import simulate_point_targets

__all__ = [
    'PULSE_SHAPES',
    'PulseTrain',
    'uwb_pulse',
    'adc_convert',
    'prepare_levels',
    'quantize',
    'simulate_point_targets',
]
