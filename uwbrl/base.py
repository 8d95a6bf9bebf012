# -*- coding: utf-8 -*-
"""
Radar Processor Base Class - Common interface for configurable processors.

Defines the ``RadarProcessor`` base class shared by the delay map builder
and the beamformer. ``RadarProcessor`` provides version checking at first
instantiation and ``typing.Annotated``-based tunable parameter
declarations with automatic ``__init__`` generation and runtime resolution
through ``**kwargs``.

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
from abc import ABC
from typing import Any, Dict, Tuple

# UWBRL internal
from uwbrl.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class RadarProcessor(ABC):
    """
    Common base class for all radar processors.

    Provides two cross-cutting capabilities:

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` will trigger a
    ``UserWarning`` at first instantiation.  The check uses ``__new__``
    rather than ``__init_subclass__`` so that decorators have been applied
    by the time the check runs.

    **Tunable parameter flow**: Subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using constraint markers from
    :mod:`uwbrl.params` (``Range``, ``Options``, ``Desc``).
    ``__init_subclass__`` collects these into ``__param_specs__`` and
    auto-generates an ``__init__`` (unless the subclass defines its own).
    At runtime, ``_resolve_params(kwargs)`` merges instance defaults with
    keyword-argument overrides and validates constraints.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    #: Tuple of :class:`~uwbrl.params.ParamSpec` built automatically by
    #: ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'RadarProcessor':
        if cls not in RadarProcessor._version_warned_classes:
            RadarProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    # -----------------------------------------------------------------
    # Tunable parameter resolution
    # -----------------------------------------------------------------
    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance defaults with runtime *kwargs* overrides.

        For each declared parameter in ``__param_specs__``, use the
        *kwargs* value when present, otherwise the instance attribute.
        Every resolved value is validated against its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments.  May contain non-param keys
            (e.g. ``progress_callback``); those are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        InputDomainError
            If a value violates range or choices constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional ``progress_callback`` kwarg."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))
