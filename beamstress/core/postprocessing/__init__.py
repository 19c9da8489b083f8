from beamstress.core.postprocessing.stress_field import (
    PointStress,
    StressFieldEngine,
    StressSample,
    compute_stress_profile,
    stress_at,
)
from beamstress.core.postprocessing.cross_section_stress import (
    DEFAULT_N_DISC,
    CrossSectionStressDistribution,
    TransverseStressPoint,
    cross_section_distribution,
)


__all__ = [
    'compute_stress_profile',
    'cross_section_distribution',
    'CrossSectionStressDistribution',
    'DEFAULT_N_DISC',
    'PointStress',
    'stress_at',
    'StressFieldEngine',
    'StressSample',
    'TransverseStressPoint',
]
