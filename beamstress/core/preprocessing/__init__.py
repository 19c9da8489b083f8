from beamstress.core.preprocessing.cross_section import (
    CircularSection,
    IBeamSection,
    RectangularSection,
    SECTION_TYPES,
    SectionDescriptor,
    TBeamSection,
    UnspecifiedSection,
    section_from_dict,
    section_type_of,
)
from beamstress.core.preprocessing.force_diagram import (
    ForceDiagram, ForceSample
)
from beamstress.core.preprocessing.section_properties import (
    SECTION_DEFAULTS,
    UNSPECIFIED_PROPERTIES,
    SectionProperties,
    SectionPropertyCalculator,
    compute_properties,
)


__all__ = [
    'CircularSection',
    'compute_properties',
    'ForceDiagram',
    'ForceSample',
    'IBeamSection',
    'RectangularSection',
    'SECTION_DEFAULTS',
    'SECTION_TYPES',
    'section_from_dict',
    'section_type_of',
    'SectionDescriptor',
    'SectionProperties',
    'SectionPropertyCalculator',
    'TBeamSection',
    'UNSPECIFIED_PROPERTIES',
    'UnspecifiedSection',
]
