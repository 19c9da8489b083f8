from beamstress.core import (
    CircularSection, CrossSectionStressDistribution, DegenerateSectionError,
    ForceDiagram, ForceSample, IBeamSection, PointStress, RectangularSection,
    SectionProperties, SectionPropertyCalculator, StressFieldEngine,
    StressSample, TBeamSection, TransverseStressPoint, UnspecifiedSection,
    compute_properties, compute_stress_profile, cross_section_distribution,
    section_from_dict, stress_at
)

__all__ = [
    'CircularSection',
    'compute_properties',
    'compute_stress_profile',
    'cross_section_distribution',
    'CrossSectionStressDistribution',
    'DegenerateSectionError',
    'ForceDiagram',
    'ForceSample',
    'IBeamSection',
    'PointStress',
    'RectangularSection',
    'section_from_dict',
    'SectionProperties',
    'SectionPropertyCalculator',
    'stress_at',
    'StressFieldEngine',
    'StressSample',
    'TBeamSection',
    'TransverseStressPoint',
    'UnspecifiedSection',
]
