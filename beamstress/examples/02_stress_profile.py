"""
Example 02:
Bending and shear stresses along a simply supported beam

The force diagram of a 4 m beam under a uniform line load q = 10 kN/m is
sampled at 21 points. For every sample the maximum bending stress
σ = |M| c / I and shear stress τ = |V| Q / (I t) are evaluated.
"""

import numpy as np

from beamstress.core.preprocessing import (
    ForceDiagram, RectangularSection, compute_properties
)
from beamstress.core.postprocessing import StressFieldEngine


# 1. Section (rectangle 0.2 × 0.4) with I = b h³ / 12
b, h = 0.2, 0.4
props = compute_properties(RectangularSection(b, h), b * h ** 3 / 12)

# 2. Force diagram of the simply supported beam
q, length = 10.0, 4.0
x = np.linspace(0, length, 21)
shear = q * (length / 2 - x)
moment = q * x * (length - x) / 2
diagram = ForceDiagram(x, shear, moment)

# 3. Stress profile, debug=True prints the profile as table
engine = StressFieldEngine(props, diagram, debug=True)
profile = engine.stress_profile

print(f"Max. bending stress {engine.max_bending.bending_stress:.2f} at "
      f"x = {engine.max_bending.x:.2f}")
print(f"Max. shear stress   {engine.max_shear.shear_stress:.2f} at "
      f"x = {engine.max_shear.x:.2f}")

# 4. Point query: first sample at or after the position
point = engine.stress_at(1.1)
print(f"\nx = 1.1 -> M = {point.moment:.3f}, V = {point.shear_force:.3f}, "
      f"σ = {point.bending_stress:.2f}, τ = {point.shear_stress:.2f}")
