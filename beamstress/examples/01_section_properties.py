"""
Example 01:
Section properties of the supported section types

The moment of inertia is supplied from outside. The geometry only
determines area, centroid, extreme-fiber distance, thickness at the neutral
axis and first moment of area.
"""

from beamstress.core.preprocessing import (
    CircularSection, IBeamSection, RectangularSection, TBeamSection,
    UnspecifiedSection, compute_properties, section_from_dict
)


# 1. Define sections (dimensions in m)
sections = [
    RectangularSection(width=0.2, height=0.4),
    CircularSection(diameter=0.3),
    IBeamSection(flange_width=0.2, flange_thickness=0.02, web_height=0.4,
                 web_thickness=0.01),
    TBeamSection(flange_width=0.3, flange_thickness=0.05, web_height=0.4,
                 web_thickness=0.02),
    UnspecifiedSection(),
]

# 2. Sections can also be read from input form data, missing fields are
#    replaced by defaults
sections.append(section_from_dict({'type': 't-beam', 'flangeWidth': 0.5}))

# 3. Compute properties with an externally given moment of inertia
mom_of_int = 1.0667e-3

print("=== Section Properties ===")
for section in sections:
    p = compute_properties(section, mom_of_int)
    print(f"\n{section}")
    print(f"  A   = {p.area:.6f}")
    print(f"  z_s = {p.centroid_height:.6f}")
    print(f"  c   = {p.max_fiber_distance:.6f}")
    print(f"  t   = {p.thickness:.6f}")
    print(f"  Q   = {p.static_moment:.6f}")
