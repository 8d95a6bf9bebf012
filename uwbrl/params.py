# -*- coding: utf-8 -*-
"""
Processor Settings - Typed, bounded settings declared with typing.Annotated.

Radar processors declare their settings as annotated class attributes. The
metadata markers say what a valid value looks like:

- ``Range`` bounds a numeric setting and names its physical unit, so that
  a rejected propagation speed reads ``propagation_speed = 0.0 m/s must be
  above 0.0 m/s``.
- ``Options`` restricts a setting to a fixed set of values, e.g. the
  beamformer backend.
- ``Desc`` carries a one-line description.

``RadarProcessor.__init_subclass__`` turns the annotations into
``ParamSpec`` records and generates a keyword-only ``__init__``::

    class DelayMapBuilder(RadarProcessor):
        propagation_speed: Annotated[
            float, Range(min=0.0, exclusive_min=True, unit='m/s'),
            Desc('Propagation speed'),
        ] = SPEED_OF_LIGHT

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
import inspect
from dataclasses import dataclass
from typing import Annotated, Any, Optional, Tuple, get_origin, get_type_hints

# Third-party
import numpy as np

# UWBRL internal
from uwbrl.exceptions import InputDomainError


class ParamMeta:
    """Marks ``Annotated`` metadata that declares a processor setting."""


@dataclass(frozen=True)
class Range(ParamMeta):
    """Bounds on a numeric setting.

    Parameters
    ----------
    min, max : int or float, optional
        Inclusive bounds. ``None`` leaves the side open.
    exclusive_min : bool
        Make ``min`` a strict bound, for strictly positive quantities.
    unit : str
        Physical unit shown in error messages, e.g. ``'m/s'``.
    """

    min: Optional[float] = None
    max: Optional[float] = None
    exclusive_min: bool = False
    unit: str = ''


class Options(ParamMeta):
    """The complete set of accepted values for a setting."""

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices


@dataclass(frozen=True)
class Desc(ParamMeta):
    """One-line description of a setting."""

    text: str


_MISSING = object()


def _with_unit(value: Any, unit: str) -> str:
    return f"{value!r} {unit}" if unit else repr(value)


@dataclass(frozen=True)
class ParamSpec:
    """One declared processor setting.

    Attributes
    ----------
    name : str
        Attribute and keyword name.
    param_type : type
        ``float``, ``int``, ``str`` or ``bool``. ``float`` settings also
        accept ints, and numeric settings never accept bools.
    default : Any
        Default value, or ``_MISSING`` for a required setting.
    description : str
        Text from ``Desc``.
    bounds : Range, optional
        Numeric bounds.
    choices : tuple, optional
        Accepted values from ``Options``.
    """

    name: str
    param_type: type
    default: Any = _MISSING
    description: str = ''
    bounds: Optional[Range] = None
    choices: Optional[Tuple[Any, ...]] = None

    @property
    def required(self) -> bool:
        return self.default is _MISSING

    def _check_type(self, value: Any) -> None:
        numeric = self.param_type in (int, float)
        if numeric and isinstance(value, (bool, np.bool_)):
            raise TypeError(
                f"{self.name} must be {self.param_type.__name__}, got bool"
            )
        if self.param_type is float:
            accepted = (int, float, np.integer, np.floating)
        elif self.param_type is int:
            accepted = (int, np.integer)
        else:
            accepted = self.param_type
        if not isinstance(value, accepted):
            raise TypeError(
                f"{self.name} must be {self.param_type.__name__}, "
                f"got {type(value).__name__}"
            )

    def _check_bounds(self, value: Any) -> None:
        b = self.bounds
        if b is None:
            return
        shown = _with_unit(value, b.unit)
        if b.min is not None:
            if b.exclusive_min and not value > b.min:
                raise InputDomainError(
                    f"{self.name} = {shown} must be above "
                    f"{_with_unit(b.min, b.unit)}"
                )
            if value < b.min:
                raise InputDomainError(
                    f"{self.name} = {shown} must be at least "
                    f"{_with_unit(b.min, b.unit)}"
                )
        if b.max is not None and value > b.max:
            raise InputDomainError(
                f"{self.name} = {shown} must be at most "
                f"{_with_unit(b.max, b.unit)}"
            )

    def validate(self, value: Any) -> None:
        """Raise ``TypeError`` or ``InputDomainError`` for a bad *value*."""
        self._check_type(value)
        self._check_bounds(value)
        if self.choices is not None and value not in self.choices:
            raise InputDomainError(
                f"{self.name} = {value!r} is not in allowed choices "
                f"{self.choices!r}"
            )


def _spec_from_hint(cls: type, name: str, hint: Any) -> Optional[ParamSpec]:
    metas = [m for m in getattr(hint, '__metadata__', ())
             if isinstance(m, ParamMeta)]
    if not metas:
        return None
    bounds = next((m for m in metas if isinstance(m, Range)), None)
    options = next((m for m in metas if isinstance(m, Options)), None)
    desc = next((m for m in metas if isinstance(m, Desc)), None)
    if bounds is not None and options is not None:
        raise TypeError(
            f"{cls.__qualname__}.{name}: Range and Options are mutually "
            f"exclusive"
        )
    return ParamSpec(
        name=name,
        param_type=hint.__args__[0],
        default=getattr(cls, name, _MISSING),
        description=desc.text if desc else '',
        bounds=bounds,
        choices=options.choices if options else None,
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Collect the settings declared on *cls* and its bases.

    Base-class settings come first. A subclass may redeclare a setting
    to change its bounds or default.
    """
    hints = get_type_hints(cls, include_extras=True)
    names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in names:
                names.append(name)

    specs = []
    for name in names:
        hint = hints.get(name)
        if get_origin(hint) is not Annotated:
            continue
        spec = _spec_from_hint(cls, name, hint)
        if spec is not None:
            specs.append(spec)
    return tuple(specs)


def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Generate a keyword-only ``__init__`` that validates every setting."""
    by_name = {s.name: s for s in param_specs}

    def __init__(self, **kwargs):
        unknown = sorted(set(kwargs) - set(by_name))
        if unknown:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(unknown)}"
            )
        for name, spec in by_name.items():
            value = kwargs.get(name, spec.default)
            if value is _MISSING:
                raise TypeError(
                    f"{type(self).__name__}() missing required keyword "
                    f"argument: '{name}'"
                )
            spec.validate(value)
            setattr(self, name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [
            inspect.Parameter(
                s.name, inspect.Parameter.KEYWORD_ONLY,
                **({} if s.required else {'default': s.default}),
            )
            for s in param_specs
        ]
    )
    __init__.__qualname__ = '__init__'
    return __init__
