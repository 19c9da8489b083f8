from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from beamstress.core.logger_mixin import LoggerMixin, table_properties
from beamstress.core.preprocessing.cross_section import (
    SectionDescriptor, section_from_dict, section_type_of
)


SECTION_DEFAULTS = {
    'rectangular': {'width': 0.3, 'height': 0.5},
    'circular': {'diameter': 0.4},
    'i-beam': {'flange_width': 0.2, 'flange_thickness': 0.02,
               'web_height': 0.4, 'web_thickness': 0.01},
    't-beam': {'flange_width': 0.3, 'flange_thickness': 0.05,
               'web_height': 0.4, 'web_thickness': 0.02},
}
""" Default dimensions per section type, used for missing or unusable
fields. """


@dataclass(frozen=True)
class SectionProperties:
    r"""Geometric properties of a cross-section relevant for stresses.

    Parameters
    ----------
    area : :any:`float`
        Cross-sectional area :math:`A`.
    mom_of_int : :any:`float`
        Moment of inertia :math:`I` about the neutral axis.
    centroid_height : :any:`float`
        Height of the centroid measured from the bottom fiber.
    max_fiber_distance : :any:`float`
        Distance :math:`c` from the neutral axis to the extreme fiber.
    thickness : :any:`float`
        Width :math:`t` of the section at the fiber governing the shear
        stress.
    static_moment : :any:`float`
        First moment of area :math:`Q` used in :math:`\tau = VQ/(It)`.
    """

    area: float
    mom_of_int: float
    centroid_height: float
    max_fiber_distance: float
    thickness: float
    static_moment: float


UNSPECIFIED_PROPERTIES = dict(
    area=0.15, centroid_height=0.25, max_fiber_distance=0.25, thickness=0.3,
    static_moment=0.01
)
""" Fixed properties of a section without a known type. """


def _resolve(value: Any, default: float) -> float:
    """Converts a raw dimension to float, falling back to ``default``.

    ``None``, non-numeric values, NaN and zero are replaced. Negative values
    are kept.
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    if np.isnan(value) or value == 0:
        return default
    return value


@dataclass(eq=False)
class SectionPropertyCalculator(LoggerMixin):
    r"""Computes the stress-relevant properties of a cross-section.

    The moment of inertia is not derived from the geometry. It is taken
    over unchanged from :py:attr:`mom_of_int`, which may come from a user
    override, a table or a separate geometric calculation. The geometry
    only drives area, centroid, extreme-fiber distance, thickness and first
    moment of area.

    Parameters
    ----------
    section : SectionDescriptor
        The cross-section. A mapping is converted with
        :py:func:`section_from_dict`.
    mom_of_int : :any:`float`
        Externally supplied moment of inertia.
    debug : :any:`bool`, default=False
        Enables debug logging.

    Attributes
    ----------
    section_type : :any:`str`
        Resolved type tag of :py:attr:`section`.
    properties : SectionProperties
        The computed properties.

    Notes
    -----
    The calculator never raises on geometry. Invalid dimensions fall back to
    :py:data:`SECTION_DEFAULTS`, degenerate inputs (e.g. negative
    dimensions) propagate into the result and are caught by the stress
    evaluation.

    Examples
    --------
    >>> from beamstress.core.preprocessing import RectangularSection
    >>> calc = SectionPropertyCalculator(RectangularSection(0.2, 0.4), 1e-3)
    >>> round(calc.properties.area, 6), round(calc.properties.static_moment, 6)
    (0.08, 0.004)
    """

    section: SectionDescriptor
    mom_of_int: float
    debug: bool = False

    def __post_init__(self):
        if isinstance(self.section, Mapping):
            self.section = section_from_dict(self.section)
        self.section_type = section_type_of(self.section)
        self.logger.debug(
            f"Computing properties of a '{self.section_type}' section.")

        compute = {
            'rectangular': self._rectangular,
            'circular': self._circular,
            'i-beam': self._i_beam,
            't-beam': self._t_beam,
        }.get(self.section_type, self._unspecified)

        self.properties = SectionProperties(
            mom_of_int=float(self.mom_of_int), **compute()
        )
        self.logger.debug(
            f"Section properties: \n{table_properties(self.properties)}")

    def _dim(self, name: str) -> float:
        default = SECTION_DEFAULTS[self.section_type][name]
        raw = getattr(self.section, name, None)
        value = _resolve(raw, default)
        if raw is not None and value == default and raw != default:
            self.logger.debug(
                f"{name}={raw!r} is not usable, using default {default}.")
        return value

    def _rectangular(self) -> dict:
        b, h = self._dim('width'), self._dim('height')
        return dict(
            area=b * h,
            centroid_height=h / 2,
            max_fiber_distance=h / 2,
            thickness=b,
            static_moment=b * h * h / 8,
        )

    def _circular(self) -> dict:
        d = self._dim('diameter')
        r = d / 2
        return dict(
            area=np.pi * r * r,
            centroid_height=r,
            max_fiber_distance=r,
            # full diameter at the neutral axis
            thickness=d,
            static_moment=2 * r ** 3 / 3,
        )

    def _i_beam(self) -> dict:
        bf, tf = self._dim('flange_width'), self._dim('flange_thickness')
        hw, tw = self._dim('web_height'), self._dim('web_thickness')
        h = hw + 2 * tf
        return dict(
            area=2 * bf * tf + tw * hw,
            centroid_height=h / 2,
            max_fiber_distance=h / 2,
            thickness=tw,
            static_moment=bf * tf * (h / 2 - tf / 2),
        )

    def _t_beam(self) -> dict:
        bf, tf = self._dim('flange_width'), self._dim('flange_thickness')
        hw, tw = self._dim('web_height'), self._dim('web_thickness')
        h = hw + tf

        a_flange, a_web = bf * tf, tw * hw
        z_flange, z_web = h - tf / 2, hw / 2
        area = a_flange + a_web

        if area == 0:
            self.logger.warning(
                "Flange and web areas cancel out, centroid set to 0.")
            z_s = 0.0
        else:
            z_s = (a_flange * z_flange + a_web * z_web) / area

        return dict(
            area=area,
            centroid_height=z_s,
            max_fiber_distance=max(z_s, h - z_s),
            thickness=tw,
            static_moment=a_flange * abs(z_flange - z_s),
        )

    def _unspecified(self) -> dict:
        return dict(UNSPECIFIED_PROPERTIES)


def compute_properties(
        section: SectionDescriptor, mom_of_int: float,
        debug: bool = False
) -> SectionProperties:
    """Returns the :py:class:`SectionProperties` of ``section``.

    Shortcut for
    ``SectionPropertyCalculator(section, mom_of_int).properties``.
    """
    calc = SectionPropertyCalculator(section, mom_of_int, debug=debug)
    return calc.properties
