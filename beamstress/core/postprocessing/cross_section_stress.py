from dataclasses import dataclass
from functools import cached_property
from typing import List, NamedTuple, Optional, Union

import numpy as np

from beamstress.core.logger_mixin import LoggerMixin, table_distribution
from beamstress.core.postprocessing.stress_field import check_section
from beamstress.core.preprocessing import (
    ForceDiagram, SectionDescriptor, SectionProperties, section_type_of
)


DEFAULT_N_DISC = 50
""" Default number of segments across the section height. """


class TransverseStressPoint(NamedTuple):
    """Stresses at the fiber ``y`` measured from the neutral axis."""

    y: float
    bending_stress: float
    shear_stress: float


@dataclass(eq=False)
class CrossSectionStressDistribution(LoggerMixin):
    r"""Stress distribution over the height of a cross-section.

    The internal forces are taken from the force diagram sample selected
    for :py:attr:`position` (first sample with ``x >= position``, last
    sample if the position lies beyond the diagram). Their magnitudes
    :math:`|M|` and :math:`|V|` are distributed over ``n_disc + 1`` fibers
    from :math:`y = -c` to :math:`y = +c`.

    Parameters
    ----------
    properties : SectionProperties
        Section properties, see :py:func:`compute_properties`.
    force_diagram : ForceDiagram
        Internal forces along the beam.
    section_type : :any:`str` or SectionDescriptor, default='unspecified'
        Selects the shear stress model. A descriptor contributes its tag.
    position : :any:`float`, optional
        Analysis position along the beam. Defaults to
        :py:attr:`ForceDiagram.midspan`.
    n_disc : :any:`int`, default=50
        Number of segments across the height.
    debug : :any:`bool`, default=False
        Enables debug logging including a table of the distribution.

    Raises
    ------
    ValueError
        :py:attr:`n_disc` has to be greater than zero.

    Notes
    -----
    The bending stress varies linearly and independent of the section type

    .. math::
        \sigma_b(y) = \frac{|M| \, |y|}{I}.

    For rectangular sections the shear stress follows the parabola

    .. math::
        \tau(y) = \frac{3}{2} \frac{|V|}{A}
        \left(1 - \left(\frac{y}{h/2}\right)^2\right), \quad h = 2c,

    with its peak of 1.5 times the average shear stress at the neutral axis.
    All other section types use the linear approximation

    .. math::
        \tau(y) = \frac{|V|}{A} \left(1 - \frac{|y|}{c}\right),

    which is not an exact result for I-, T- or circular sections. Negative
    shear stresses are cut off at zero.

    Examples
    --------
    >>> from beamstress.core.preprocessing import (
    ...     ForceDiagram, RectangularSection, compute_properties)
    >>> props = compute_properties(RectangularSection(0.2, 0.4), 1e-3)
    >>> diagram = ForceDiagram([0, 1, 2, 3], [10, 20, 30, 40], [1, 2, 3, 4])
    >>> dist = CrossSectionStressDistribution(
    ...     props, diagram, "rectangular", position=1.5, n_disc=10)
    >>> dist.stress_disc.shape
    (11, 3)
    """

    properties: SectionProperties
    force_diagram: ForceDiagram
    section_type: Union[str, SectionDescriptor] = 'unspecified'
    position: Optional[float] = None
    n_disc: int = DEFAULT_N_DISC
    debug: bool = False

    def __post_init__(self):
        if self.n_disc < 1:
            raise ValueError('"n_disc" has to be greater than 0')
        self.section_type = section_type_of(self.section_type)
        if self.position is None:
            self.position = self.force_diagram.midspan
        self.logger.debug(
            f"Distribution for a '{self.section_type}' section at "
            f"x = {self.position} with {self.n_disc + 1} points.")

    @cached_property
    def forces(self):
        """Magnitudes ``(|M|, |V|)`` at :py:attr:`position`, zero for an
        empty diagram."""
        fd = self.force_diagram
        if fd.is_empty:
            return 0.0, 0.0
        sample = fd[fd.index_at(self.position)]
        return abs(sample.moment), abs(sample.shear)

    @cached_property
    def y(self) -> np.ndarray:
        """Fiber coordinates from :math:`-c` to :math:`+c`.

        ``y = 0`` is hit exactly for an even :py:attr:`n_disc`.
        """
        c = self.properties.max_fiber_distance
        return np.arange(self.n_disc + 1) / self.n_disc * (2 * c) - c

    @cached_property
    def stress_disc(self) -> np.ndarray:
        """Stresses over the section height.

        Returns
        -------
        :any:`numpy.ndarray`
            Array of shape (n_disc + 1, 3) where columns correspond to:
            0 → fiber coordinate y
            1 → bending stress σ_b(y)
            2 → shear stress τ(y)

        Raises
        ------
        DegenerateSectionError
            If ``mom_of_int``, ``area`` or ``max_fiber_distance`` is zero.
        """
        p = self.properties
        check_section(p, ('mom_of_int', 'area', 'max_fiber_distance'),
                      self.logger)
        moment, shear_force = self.forces
        y, c = self.y, p.max_fiber_distance

        sigma = np.abs(moment * y / p.mom_of_int)
        if self.section_type == 'rectangular':
            h = 2 * c
            tau = shear_force * (1 - (y / (h / 2)) ** 2) * 1.5 / p.area
        else:
            tau = shear_force * (1 - np.abs(y) / c) / p.area
        tau = np.maximum(0, tau)

        return np.column_stack((y, sigma, tau))

    @cached_property
    def distribution(self) -> List[TransverseStressPoint]:
        """Stresses as a list of :py:class:`TransverseStressPoint`."""
        points = [TransverseStressPoint(float(y), float(s), float(t))
                  for y, s, t in self.stress_disc]
        if self.debug:
            self.logger.debug(
                f"Distribution at x = {self.position}: \n"
                f"{table_distribution(points)}")
        return points


def cross_section_distribution(
        properties: SectionProperties, force_diagram: ForceDiagram,
        section_type: Union[str, SectionDescriptor] = 'unspecified',
        position: Optional[float] = None, n_disc: int = DEFAULT_N_DISC
) -> List[TransverseStressPoint]:
    """Returns the transverse stress distribution, see
    :py:class:`CrossSectionStressDistribution`."""
    return CrossSectionStressDistribution(
        properties, force_diagram, section_type, position, n_disc
    ).distribution
