# -*- coding: utf-8 -*-
"""
UWBRL Exception Hierarchy - Domain-specific exceptions for UWBRL operations.

Provides a small exception hierarchy that lets callers catch UWBRL-specific
errors distinctly from Python built-in exceptions. All UWBRL exceptions
subclass both ``UwbrlError`` and the appropriate built-in exception, so
``except ValueError`` keeps working for input validation failures.

Author
------
Steven Siebert

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


class UwbrlError(Exception):
    """Base exception for all UWBRL errors."""


class ValidationError(UwbrlError, ValueError):
    """Invalid input data, parameters, or configuration.

    Base class of the categorized input errors below. Raised before any
    numeric work starts, so a failing call never produces partial output.
    """


class InputShapeError(ValidationError):
    """Wrong array rank, wrong column count, or mismatched paired extents.

    Raised for position matrices that are not ``(n, 3)``, coordinate
    arrays that are not vectors, and time supports whose length does not
    match the baseband samples.
    """


class InputDomainError(ValidationError):
    """Value outside the admissible domain.

    Raised for non-positive carrier frequency, complex data where real
    data is required, non-ascending time support, negative or non-finite
    delays, and tunable parameters outside their declared constraints.
    """


class DimensionMismatchError(InputShapeError):
    """Delay map, phase factor map, and baseband signal disagree.

    Raised when the delay map rank is inconsistent with the baseband
    channel layout, when tx/rx extents differ, or when the phase factor
    map shape differs from the delay map shape.
    """


class IndexBoundsError(UwbrlError, IndexError):
    """Map index outside the extents of the indexed map."""
