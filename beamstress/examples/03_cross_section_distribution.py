"""
Example 03:
Stress distribution over the section height

The stresses at the analysis position are distributed across the height of
the section. The bending stress varies linearly with the distance from the
neutral axis. The shear stress is parabolic for rectangular sections and
approximated linearly for all other section types.
"""

import numpy as np

from beamstress.core.exceptions import DegenerateSectionError
from beamstress.core.preprocessing import (
    ForceDiagram, IBeamSection, RectangularSection, compute_properties
)
from beamstress.core.postprocessing import CrossSectionStressDistribution


# 1. Force diagram of a cantilever with a tip load F = 5 kN
x = np.linspace(0, 3, 7)
diagram = ForceDiagram(x, np.full_like(x, 5.0), -5.0 * (3 - x))

# 2. Distribution for a rectangle and an I-beam at the support
for section, mom_of_int in ((RectangularSection(0.2, 0.4), 1.0667e-3),
                            (IBeamSection(), 3.2e-4)):
    props = compute_properties(section, mom_of_int)
    dist = CrossSectionStressDistribution(
        props, diagram, section, position=0.0, n_disc=10, debug=True
    )
    y, sigma, tau = dist.stress_disc.T
    print(f"\n{section.section_type}: σ_max = {sigma.max():.2f}, "
          f"τ_max = {tau.max():.2f} at y = {y[np.argmax(tau)]:.3f}")

# 3. A zero moment of inertia is reported, not turned into NaN
props = compute_properties(RectangularSection(0.2, 0.4), 0.0)
try:
    CrossSectionStressDistribution(props, diagram, 'rectangular').distribution
except DegenerateSectionError as e:
    print(f"\n{e}")
