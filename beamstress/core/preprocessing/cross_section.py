from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, ClassVar, Mapping, Optional, Union


@dataclass(frozen=True)
class RectangularSection:
    r"""Solid rectangular cross-section.

    Parameters
    ----------
    width : :any:`float`, optional
        Section width :math:`b`.
    height : :any:`float`, optional
        Section height :math:`h`.

    Notes
    -----
    Missing dimensions are not an error. They are replaced by defaults when
    the section properties are computed, see
    :py:class:`SectionPropertyCalculator`.
    """

    section_type: ClassVar[str] = 'rectangular'

    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class CircularSection:
    r"""Solid circular cross-section.

    Parameters
    ----------
    diameter : :any:`float`, optional
        Section diameter :math:`d`.
    """

    section_type: ClassVar[str] = 'circular'

    diameter: Optional[float] = None


@dataclass(frozen=True)
class IBeamSection:
    r"""Doubly symmetric I-section built from two equal flanges and a web.

    Parameters
    ----------
    flange_width : :any:`float`, optional
        Flange width :math:`b_f`.
    flange_thickness : :any:`float`, optional
        Flange thickness :math:`t_f`.
    web_height : :any:`float`, optional
        Clear web height :math:`h_w` between the flanges.
    web_thickness : :any:`float`, optional
        Web thickness :math:`t_w`.
    """

    section_type: ClassVar[str] = 'i-beam'

    flange_width: Optional[float] = None
    flange_thickness: Optional[float] = None
    web_height: Optional[float] = None
    web_thickness: Optional[float] = None


@dataclass(frozen=True)
class TBeamSection:
    r"""T-section with the flange on top of the web.

    Parameters
    ----------
    flange_width : :any:`float`, optional
        Flange width :math:`b_f`.
    flange_thickness : :any:`float`, optional
        Flange thickness :math:`t_f`.
    web_height : :any:`float`, optional
        Web height :math:`h_w` below the flange.
    web_thickness : :any:`float`, optional
        Web thickness :math:`t_w`.
    """

    section_type: ClassVar[str] = 't-beam'

    flange_width: Optional[float] = None
    flange_thickness: Optional[float] = None
    web_height: Optional[float] = None
    web_thickness: Optional[float] = None


@dataclass(frozen=True)
class UnspecifiedSection:
    """Placeholder for a section without a known type.

    Evaluates to a fixed set of default properties.
    """

    section_type: ClassVar[str] = 'unspecified'


SectionDescriptor = Union[
    RectangularSection, CircularSection, IBeamSection, TBeamSection,
    UnspecifiedSection
]

_SECTION_CLASSES = {
    cls.section_type: cls for cls in (
        RectangularSection, CircularSection, IBeamSection, TBeamSection,
        UnspecifiedSection
    )
}

SECTION_TYPES = tuple(_SECTION_CLASSES)

# input forms deliver camelCase keys
_FIELD_ALIASES = {
    'flangeWidth': 'flange_width',
    'flangeThickness': 'flange_thickness',
    'webHeight': 'web_height',
    'webThickness': 'web_thickness',
}


def section_type_of(section: Any) -> str:
    """Returns the type tag of a descriptor or a tag string.

    Unknown tags and objects without a tag map to ``'unspecified'``.

    Examples
    --------
    >>> section_type_of(RectangularSection(0.2, 0.4))
    'rectangular'
    >>> section_type_of('t-beam')
    't-beam'
    >>> section_type_of('box')
    'unspecified'
    """
    tag = section if isinstance(section, str) else getattr(
        section, 'section_type', None)
    return tag if tag in _SECTION_CLASSES else 'unspecified'


def section_from_dict(data: Optional[Mapping[str, Any]]) -> SectionDescriptor:
    """Builds a section descriptor from a loosely typed mapping.

    Parameters
    ----------
    data : :any:`dict`, optional
        Mapping with a ``'type'`` key and the dimensions of the section.
        Keys may be written in camelCase (``'flangeWidth'``) or snake_case
        (``'flange_width'``). Unrelated keys are ignored.

    Returns
    -------
    SectionDescriptor
        The matching descriptor. ``None``, an empty mapping, a missing or an
        unknown type yield :py:class:`UnspecifiedSection`.

    Notes
    -----
    Values are handed over unchanged, even if they are not numeric. Invalid
    dimensions are resolved to defaults by the property calculator.

    Examples
    --------
    >>> section = section_from_dict({"type": "i-beam", "flangeWidth": 0.25})
    >>> section.flange_width, section.web_height
    (0.25, None)
    >>> section_from_dict(None)
    UnspecifiedSection()
    """
    if not data:
        return UnspecifiedSection()

    cls = _SECTION_CLASSES[section_type_of(data.get('type'))]
    names = {f.name for f in dataclass_fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = _FIELD_ALIASES.get(key, key)
        if name in names:
            kwargs[name] = value
    return cls(**kwargs)
