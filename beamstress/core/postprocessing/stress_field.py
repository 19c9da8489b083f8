from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from beamstress.core.exceptions import DegenerateSectionError
from beamstress.core.logger_mixin import LoggerMixin, table_stress_profile
from beamstress.core.preprocessing import ForceDiagram, SectionProperties


class StressSample(NamedTuple):
    """Maximum stress magnitudes at one position along the beam."""

    x: float
    bending_stress: float
    shear_stress: float


class PointStress(NamedTuple):
    """Stresses and internal forces selected for an analysis position.

    All values are magnitudes.
    """

    bending_stress: float
    shear_stress: float
    moment: float
    shear_force: float


def check_section(properties: SectionProperties, names: Iterable[str],
                  logger=None):
    """Raises if a section property used as divisor is zero or not finite.

    Parameters
    ----------
    properties : SectionProperties
        The properties to check.
    names : iterable of str
        Attribute names of the properties a formula divides by.
    logger : logging.Logger, optional
        Receives an error message before the exception is raised.

    Raises
    ------
    DegenerateSectionError
        For the first offending property.
    """
    for name in names:
        value = getattr(properties, name)
        if value == 0 or not np.isfinite(value):
            if logger is not None:
                logger.error(f"Degenerate section: {name} = {value}.")
            raise DegenerateSectionError(name, value)


@dataclass(eq=False)
class StressFieldEngine(LoggerMixin):
    r"""Evaluates bending and shear stresses along a beam.

    For every sample of the force diagram the maximum stress magnitudes
    are computed:

    .. math::
        \sigma_b = \frac{|M| \, c}{I}, \qquad
        \tau = \frac{|V| \, Q}{I \, t}

    Parameters
    ----------
    properties : SectionProperties
        Section properties, see :py:func:`compute_properties`.
    force_diagram : ForceDiagram
        Internal forces along the beam.
    debug : :any:`bool`, default=False
        Enables debug logging including a table of the stress profile.

    Raises
    ------
    DegenerateSectionError
        When stresses are requested for a non-empty diagram and
        ``mom_of_int`` or ``thickness`` is zero. A single degenerate
        property affects every sample, so the whole evaluation fails.

    Examples
    --------
    >>> from beamstress.core.preprocessing import (
    ...     ForceDiagram, RectangularSection, compute_properties)
    >>> props = compute_properties(RectangularSection(0.2, 0.4),
    ...                            0.2 * 0.4 ** 3 / 12)
    >>> diagram = ForceDiagram([0], [1000], [500])
    >>> engine = StressFieldEngine(props, diagram)
    >>> sample = engine.stress_profile[0]
    >>> round(sample.bending_stress), round(sample.shear_stress)
    (93750, 18750)
    """

    properties: SectionProperties
    force_diagram: ForceDiagram
    debug: bool = False

    def __post_init__(self):
        self.logger.debug(
            f"Stress field for {len(self.force_diagram)} force samples.")

    @cached_property
    def stress_disc(self) -> np.ndarray:
        """Stresses at every sample of the force diagram.

        Returns
        -------
        :any:`numpy.ndarray`
            Array of shape (n, 3) where columns correspond to:
            0 → position x
            1 → bending stress σ_b
            2 → shear stress τ

            An empty diagram yields shape (0, 3).
        """
        fd = self.force_diagram
        if fd.is_empty:
            self.logger.info("Empty force diagram, no stresses evaluated.")
            return np.zeros((0, 3))

        check_section(self.properties, ('mom_of_int', 'thickness'),
                      self.logger)

        # magnitudes, also for negative section properties
        p = self.properties
        sigma = np.abs(fd.moment * p.max_fiber_distance / p.mom_of_int)
        tau = np.abs(fd.shear * p.static_moment / (
            p.mom_of_int * p.thickness))
        return np.column_stack((fd.x, sigma, tau))

    @cached_property
    def stress_profile(self) -> List[StressSample]:
        """Stresses as a list of :py:class:`StressSample`, one per force
        sample."""
        samples = [StressSample(float(x), float(s), float(t))
                   for x, s, t in self.stress_disc]
        if self.debug:
            self.logger.debug(
                f"Stress profile: \n{table_stress_profile(samples)}")
        return samples

    @cached_property
    def max_bending(self) -> Optional[StressSample]:
        """Sample with the largest bending stress, ``None`` if empty."""
        if not self.stress_profile:
            return None
        return self.stress_profile[int(np.argmax(self.stress_disc[:, 1]))]

    @cached_property
    def max_shear(self) -> Optional[StressSample]:
        """Sample with the largest shear stress, ``None`` if empty."""
        if not self.stress_profile:
            return None
        return self.stress_profile[int(np.argmax(self.stress_disc[:, 2]))]

    @property
    def max_stress(self) -> Tuple[Optional[StressSample],
                                  Optional[StressSample]]:
        """Stress envelope over the span as ``(max_bending, max_shear)``.

        Both entries are ``None`` for an empty force diagram.
        """
        return self.max_bending, self.max_shear

    def stress_at(self, position: Optional[float] = None) -> PointStress:
        """Stresses and internal forces for an analysis position.

        Parameters
        ----------
        position : :any:`float`, optional
            Position along the beam. Defaults to
            :py:attr:`ForceDiagram.midspan`.

        Returns
        -------
        PointStress
            Values of the first sample with ``x >= position``. Positions
            beyond the last sample select the last sample. An empty diagram
            returns zeros.

        Notes
        -----
        The sample is not interpolated and not the nearest one. For samples
        at ``x = [0, 1, 2, 3]`` a position of 1.5 selects ``x = 2``.
        """
        fd = self.force_diagram
        if fd.is_empty:
            return PointStress(0.0, 0.0, 0.0, 0.0)
        if position is None:
            position = fd.midspan

        i = fd.index_at(position)
        sample = fd[i]
        _, sigma, tau = self.stress_disc[i]
        self.logger.debug(
            f"Position {position} mapped to sample {i} at x = {sample.x}.")
        return PointStress(
            bending_stress=float(sigma),
            shear_stress=float(tau),
            moment=abs(sample.moment),
            shear_force=abs(sample.shear),
        )


def compute_stress_profile(
        properties: SectionProperties, force_diagram: ForceDiagram
) -> List[StressSample]:
    """Returns the longitudinal stress profile, see
    :py:attr:`StressFieldEngine.stress_profile`."""
    return StressFieldEngine(properties, force_diagram).stress_profile


def stress_at(
        properties: SectionProperties, force_diagram: ForceDiagram,
        position: Optional[float] = None
) -> PointStress:
    """Returns the point query result, see
    :py:meth:`StressFieldEngine.stress_at`."""
    return StressFieldEngine(properties, force_diagram).stress_at(position)
