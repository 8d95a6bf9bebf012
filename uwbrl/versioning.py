# -*- coding: utf-8 -*-
"""
Processor Versioning - Version decorator for radar processors.

Provides the ``@processor_version`` class decorator for stamping semantic
version strings on radar processor classes (``DelayMapBuilder``,
``DelayAndSumBeamformer``, ...). The version identifies both the algorithm
revision and the layout of the arrays it produces.

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

# Standard library
from typing import Optional, Type, TypeVar
import importlib.metadata

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a processor version on a radar processor.

    Sets ``__processor_version__`` as a class attribute. If a version is
    not provided it is inferred from the installed ``uwbrl`` package
    metadata, or ``'unknown'`` when the package is not installed.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator that sets ``__processor_version__`` on the class.

    Examples
    --------
    >>> from uwbrl.versioning import processor_version
    >>> from uwbrl.base import RadarProcessor
    >>>
    >>> @processor_version('1.0.0')
    ... class MyProcessor(RadarProcessor):
    ...     pass
    >>>
    >>> MyProcessor.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('uwbrl')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator
