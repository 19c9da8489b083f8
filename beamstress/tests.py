import doctest
import logging
from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose as numpy_allclose

from beamstress.core.exceptions import DegenerateSectionError
from beamstress.core.logger_mixin import (
    LoggerMixin, table_distribution, table_properties, table_stress_profile
)
from beamstress.core.preprocessing import (
    CircularSection, ForceDiagram, ForceSample, IBeamSection,
    RectangularSection, SectionProperties, SectionPropertyCalculator,
    TBeamSection, UnspecifiedSection, compute_properties, section_from_dict,
    section_type_of
)
from beamstress.core.postprocessing import (
    CrossSectionStressDistribution, PointStress, StressFieldEngine,
    compute_stress_profile, cross_section_distribution, stress_at
)
from beamstress.core.postprocessing import cross_section_stress, stress_field
from beamstress.core.preprocessing import (
    cross_section, force_diagram, section_properties
)


def assert_allclose(actual, desired, err_msg=''):
    numpy_allclose(actual, desired, err_msg=err_msg, atol=1e-10, rtol=1e-7)


def rectangle_inertia(b, h):
    return b * h ** 3 / 12


ALL_SECTIONS = (
    RectangularSection(0.2, 0.4), CircularSection(0.3),
    IBeamSection(0.2, 0.02, 0.4, 0.01), TBeamSection(0.3, 0.05, 0.4, 0.02),
    UnspecifiedSection()
)


class TestSectionDescriptor(TestCase):

    def test_section_type(self):
        self.assertEqual(RectangularSection().section_type, 'rectangular')
        self.assertEqual(section_type_of(IBeamSection()), 'i-beam')
        self.assertEqual(section_type_of('t-beam'), 't-beam')
        self.assertEqual(
            section_type_of('box'), 'unspecified',
            msg='Unknown tags must fall back to the unspecified section.'
        )
        self.assertEqual(section_type_of(None), 'unspecified')

    def test_from_dict(self):
        section = section_from_dict({
            'type': 'i-beam', 'flangeWidth': 0.25, 'web_height': '0.5',
            'color': 'red'
        })
        self.assertEqual(
            section, IBeamSection(flange_width=0.25, web_height='0.5'),
            msg='camelCase and snake_case keys must be mapped, unrelated '
            'keys ignored and values passed on unchanged.'
        )
        self.assertEqual(
            section_from_dict({'type': 'circular', 'diameter': 0.3}),
            CircularSection(0.3)
        )

    def test_from_dict_fallback(self):
        for data in (None, {}, {'width': 0.3}, {'type': 'box'}):
            self.assertIsInstance(
                section_from_dict(data), UnspecifiedSection,
                msg=f'{data!r} must create an unspecified section.'
            )


class TestSectionPropertyCalculator(TestCase):

    def test_rectangular(self):
        b, h = 0.2, 0.4
        p = compute_properties(RectangularSection(b, h), 1e-3)
        self.assertEqual(p.area, b * h)
        self.assertEqual(p.static_moment, b * h * h / 8)
        self.assertEqual(p.max_fiber_distance, h / 2)
        self.assertEqual(p.centroid_height, h / 2)
        self.assertEqual(p.thickness, b)

    def test_circular(self):
        d = 0.3
        p = compute_properties(CircularSection(d), 1e-3)
        assert_allclose(p.area, np.pi * (d / 2) ** 2)
        assert_allclose(p.static_moment, 2 * (d / 2) ** 3 / 3)
        self.assertEqual(p.max_fiber_distance, d / 2)
        self.assertEqual(
            p.thickness, d,
            msg='The thickness of a circle at the neutral axis is its '
            'diameter.'
        )

    def test_i_beam_defaults(self):
        p = compute_properties(IBeamSection(), 1e-3)
        assert_allclose(p.area, 2 * 0.2 * 0.02 + 0.01 * 0.4)
        assert_allclose(p.centroid_height, 0.22)
        assert_allclose(p.max_fiber_distance, 0.22)
        assert_allclose(p.thickness, 0.01)
        assert_allclose(p.static_moment, 0.2 * 0.02 * (0.22 - 0.01))

    def test_t_beam_defaults(self):
        p = compute_properties(TBeamSection(), 1e-3)
        a1, a2 = 0.3 * 0.05, 0.02 * 0.4
        y1, y2 = 0.45 - 0.025, 0.2
        y_bar = (a1 * y1 + a2 * y2) / (a1 + a2)
        assert_allclose(p.area, a1 + a2)
        assert_allclose(p.centroid_height, y_bar)
        assert_allclose(p.max_fiber_distance, max(y_bar, 0.45 - y_bar))
        assert_allclose(p.thickness, 0.02)
        assert_allclose(p.static_moment, a1 * abs(y1 - y_bar))

    def test_t_beam_centroid(self):
        dims = (
            (0.3, 0.05, 0.4, 0.02), (1.0, 0.01, 0.1, 0.5),
            (0.01, 2.0, 3.0, 0.01), (5, 5, 5, 5), (0.1, 0.9, 0.02, 0.7)
        )
        for bf, tf, hw, tw in dims:
            p = compute_properties(TBeamSection(bf, tf, hw, tw), 1.0)
            self.assertTrue(
                0 < p.centroid_height < hw + tf,
                msg=f'The centroid of T({bf}, {tf}, {hw}, {tw}) must lie '
                f'inside the section height.'
            )
            self.assertGreaterEqual(p.max_fiber_distance,
                                    (hw + tf) / 2 - 1e-12)

    def test_unspecified(self):
        p = compute_properties(UnspecifiedSection(), 2.0)
        self.assertEqual(
            p, SectionProperties(area=0.15, mom_of_int=2.0,
                                 centroid_height=0.25,
                                 max_fiber_distance=0.25, thickness=0.3,
                                 static_moment=0.01)
        )

    def test_mom_of_int_is_not_derived(self):
        p = compute_properties(RectangularSection(0.2, 0.4), 123.0)
        self.assertEqual(
            p.mom_of_int, 123.0,
            msg='The moment of inertia must be taken over unchanged.'
        )

    def test_invalid_fields_use_defaults(self):
        p = compute_properties(RectangularSection('abc', 0), 1.0)
        assert_allclose(p.area, 0.3 * 0.5)
        self.assertEqual(p.thickness, 0.3)
        p = compute_properties(RectangularSection(None, float('nan')), 1.0)
        self.assertEqual(p.max_fiber_distance, 0.25)
        p = compute_properties(RectangularSection('0.2', '0.4'), 1.0)
        self.assertEqual(p.thickness, 0.2)

    def test_negative_fields_propagate(self):
        p = compute_properties(RectangularSection(-0.2, 0.4), 1.0)
        self.assertEqual(p.thickness, -0.2)
        self.assertLess(p.area, 0)

    def test_negative_fields_give_magnitudes(self):
        diagram = ForceDiagram([0], [1000], [500])
        props = compute_properties(TBeamSection(web_thickness=-0.02), 1e-4)
        self.assertGreaterEqual(
            compute_stress_profile(props, diagram)[0].shear_stress, 0,
            msg='A negative web thickness must not flip the sign of the '
            'shear stress.'
        )
        props = compute_properties(RectangularSection(0.2, 0.4), -1e-3)
        result = stress_at(props, diagram, 0)
        assert_allclose(result.bending_stress, 100000.0)
        assert_allclose(result.shear_stress, 20000.0)
        dist = CrossSectionStressDistribution(props, diagram, 'rectangular')
        self.assertTrue(np.all(dist.stress_disc[:, 1] >= 0))
        assert_allclose(dist.stress_disc[-1, 1], 100000.0)

    def test_mapping_input(self):
        calc = SectionPropertyCalculator(
            {'type': 'rectangular', 'width': 0.2, 'height': 0.4}, 1.0)
        self.assertEqual(calc.section_type, 'rectangular')
        self.assertEqual(calc.section, RectangularSection(0.2, 0.4))
        self.assertEqual(calc.properties.thickness, 0.2)


class TestForceDiagram(TestCase):

    def test_construction(self):
        fd = ForceDiagram([0, 1, 2], [10, 0, -10], [0, 5, 0])
        self.assertEqual(len(fd), 3)
        self.assertEqual(fd[1], ForceSample(1.0, 0.0, 5.0))
        self.assertEqual(list(fd)[2], ForceSample(2.0, -10.0, 0.0))
        self.assertFalse(fd.is_empty)

    def test_validation(self):
        with self.assertRaises(
            ValueError, msg='Arrays of different length must raise a '
            'ValueError.'
        ):
            ForceDiagram([0, 1], [1, 2, 3], [1, 2])
        with self.assertRaises(
            ValueError, msg='Decreasing positions must raise a ValueError.'
        ):
            ForceDiagram([0, 2, 1], [0, 0, 0], [0, 0, 0])
        with self.assertRaises(ValueError):
            ForceDiagram([[0, 1]], [[0, 0]], [[0, 0]])

    def test_repeated_positions(self):
        fd = ForceDiagram([0, 1, 1, 2], [5, 5, -5, -5], [0, 5, 5, 0])
        self.assertEqual(
            fd.index_at(1), 1,
            msg='The first of several samples at the same position must be '
            'selected.'
        )

    def test_from_samples(self):
        fd = ForceDiagram.from_samples([
            {'x': 0, 'shear': 1000, 'moment': 500},
            (1, 800, 300),
            ForceSample(2, 0, 0),
        ])
        assert_allclose(fd.x, [0, 1, 2])
        assert_allclose(fd.shear, [1000, 800, 0])
        assert_allclose(fd.moment, [500, 300, 0])
        self.assertTrue(ForceDiagram.from_samples([]).is_empty)

    def test_from_results(self):
        fd = ForceDiagram.from_results(
            {'x': [0, 2, 4], 'y': [5, 0, -5]},
            {'x': [0, 2, 4], 'y': [0, 5, 0]}
        )
        assert_allclose(fd.shear, [5, 0, -5])
        assert_allclose(fd.moment, [0, 5, 0])

    def test_midspan(self):
        self.assertEqual(ForceDiagram([1, 2, 5], [0] * 3, [0] * 3).midspan,
                         3.0)
        self.assertEqual(ForceDiagram.empty().midspan, 0.0)

    def test_index_at_empty(self):
        with self.assertRaises(IndexError):
            ForceDiagram.empty().index_at(0)


class TestStressFieldEngine(TestCase):

    def setUp(self):
        self.props = compute_properties(RectangularSection(0.2, 0.4),
                                        rectangle_inertia(0.2, 0.4))
        self.diagram = ForceDiagram(
            [0, 1, 2, 3], [10, -20, 30, -40], [-1, 2, -3, 4])

    def test_single_sample(self):
        i = rectangle_inertia(0.2, 0.4)
        profile = compute_stress_profile(
            self.props, ForceDiagram([0], [1000], [500]))
        self.assertEqual(len(profile), 1)
        assert_allclose(profile[0].bending_stress, 500 * 0.2 / i)
        assert_allclose(profile[0].bending_stress, 93750)
        assert_allclose(profile[0].shear_stress,
                        1000 * (0.2 * 0.4 * 0.4 / 8) / (i * 0.2))
        assert_allclose(profile[0].shear_stress, 18750)

    def test_magnitudes(self):
        profile = compute_stress_profile(self.props, self.diagram)
        self.assertEqual([s.x for s in profile], [0, 1, 2, 3])
        for s in profile:
            self.assertGreater(s.bending_stress, 0)
            self.assertGreater(s.shear_stress, 0)
        assert_allclose(
            [s.bending_stress for s in profile],
            np.array([1, 2, 3, 4]) * 0.2 / self.props.mom_of_int
        )

    def test_bending_linear_in_moment(self):
        moment = np.array([100, -250, 400, 0])
        single = compute_stress_profile(
            self.props, ForceDiagram([0, 1, 2, 3], [0] * 4, moment))
        double = compute_stress_profile(
            self.props, ForceDiagram([0, 1, 2, 3], [0] * 4, 2 * moment))
        self.assertEqual(
            [2 * s.bending_stress for s in single],
            [s.bending_stress for s in double],
            msg='Doubling the moment must exactly double the bending '
            'stress.'
        )

    def test_stress_disc(self):
        disc = StressFieldEngine(self.props, self.diagram).stress_disc
        self.assertEqual(disc.shape, (4, 3))
        assert_allclose(disc[:, 0], [0, 1, 2, 3])

    def test_empty_diagram(self):
        degenerate = SectionProperties(0.1, 0.0, 0.1, 0.1, 0.0, 0.1)
        for props in (self.props, degenerate):
            self.assertEqual(
                compute_stress_profile(props, ForceDiagram.empty()), [])
            self.assertEqual(
                stress_at(props, ForceDiagram.empty(), 1.0),
                PointStress(0, 0, 0, 0)
            )
        engine = StressFieldEngine(self.props, ForceDiagram.empty())
        self.assertEqual(engine.stress_disc.shape, (0, 3))
        self.assertIsNone(engine.max_bending)

    def test_degenerate_mom_of_int(self):
        props = compute_properties(RectangularSection(0.2, 0.4), 0)
        with self.assertRaises(DegenerateSectionError) as ctx:
            compute_stress_profile(props, self.diagram)
        self.assertEqual(ctx.exception.quantity, 'mom_of_int')
        self.assertIsInstance(ctx.exception, ValueError)
        with self.assertRaises(DegenerateSectionError):
            stress_at(props, self.diagram, 1.0)

    def test_degenerate_thickness(self):
        props = SectionProperties(0.1, 1.0, 0.1, 0.1, 0.0, 0.1)
        with self.assertRaises(DegenerateSectionError) as ctx:
            compute_stress_profile(props, self.diagram)
        self.assertEqual(ctx.exception.quantity, 'thickness')

    def test_degenerate_is_logged(self):
        props = compute_properties(RectangularSection(0.2, 0.4), 0)
        name = ('beamstress.core.postprocessing.stress_field.'
                'StressFieldEngine')
        with self.assertLogs(name, level='ERROR'):
            with self.assertRaises(DegenerateSectionError):
                StressFieldEngine(props, self.diagram).stress_disc

    def test_stress_at_ceiling(self):
        self.assertEqual(stress_at(self.props, self.diagram, 1.5).shear_force,
                         30)
        self.assertEqual(
            stress_at(self.props, self.diagram, 10).shear_force, 40,
            msg='Positions beyond the diagram must select the last sample.'
        )
        self.assertEqual(stress_at(self.props, self.diagram, 1).shear_force,
                         20)
        self.assertEqual(stress_at(self.props, self.diagram, -5).shear_force,
                         10)

    def test_stress_at_values(self):
        engine = StressFieldEngine(self.props, self.diagram)
        point = engine.stress_at(1.5)
        self.assertEqual(point.moment, 3)
        self.assertEqual(point.bending_stress,
                         engine.stress_profile[2].bending_stress)
        self.assertEqual(point.shear_stress,
                         engine.stress_profile[2].shear_stress)

    def test_stress_at_default_position(self):
        engine = StressFieldEngine(self.props, self.diagram)
        self.assertEqual(engine.stress_at(), engine.stress_at(1.5))

    def test_max_stress(self):
        engine = StressFieldEngine(self.props, self.diagram)
        self.assertEqual(engine.max_bending.x, 3)
        self.assertEqual(engine.max_shear.x, 3)
        self.assertEqual(engine.max_stress,
                         (engine.max_bending, engine.max_shear))
        assert_allclose(engine.max_stress[0].bending_stress,
                        engine.stress_disc[:, 1].max())
        empty = StressFieldEngine(self.props, ForceDiagram.empty())
        self.assertEqual(empty.max_stress, (None, None))


class TestCrossSectionStressDistribution(TestCase):

    def setUp(self):
        self.diagram = ForceDiagram(
            [0, 1, 2, 3], [10, -20, 30, -40], [-1, 2, -3, 4])
        self.rect = compute_properties(RectangularSection(0.2, 0.4),
                                       rectangle_inertia(0.2, 0.4))

    def test_fibers(self):
        dist = CrossSectionStressDistribution(
            self.rect, self.diagram, 'rectangular', 1.5)
        self.assertEqual(len(dist.distribution), 51)
        self.assertEqual(dist.y[0], -0.2)
        self.assertEqual(dist.y[-1], 0.2)
        self.assertEqual(dist.y[25], 0.0)
        self.assertEqual(dist.stress_disc.shape, (51, 3))

    def test_bending_zero_at_neutral_axis(self):
        for section in ALL_SECTIONS:
            props = compute_properties(section, 1e-4)
            for position in (0, 1.5, 10):
                dist = cross_section_distribution(
                    props, self.diagram, section.section_type, position)
                self.assertEqual(
                    dist[25].bending_stress, 0.0,
                    msg=f'Bending stress at the neutral axis must be zero '
                    f'({section.section_type}, x = {position}).'
                )

    def test_bending_extreme_fiber(self):
        for section in ALL_SECTIONS:
            props = compute_properties(section, 1e-4)
            for position in (0, 1.5, 10):
                dist = cross_section_distribution(
                    props, self.diagram, section.section_type, position)
                point = stress_at(props, self.diagram, position)
                assert_allclose(dist[0].bending_stress, point.bending_stress)
                assert_allclose(dist[-1].bending_stress,
                                point.bending_stress)

    def test_rectangular_shear(self):
        dist = CrossSectionStressDistribution(
            self.rect, self.diagram, 'rectangular', 1.5).stress_disc
        tau = dist[:, 2]
        assert_allclose(tau, tau[::-1])
        self.assertEqual(int(np.argmax(tau)), 25)
        assert_allclose(tau[25], 1.5 * 30 / self.rect.area)
        assert_allclose([tau[0], tau[-1]], [0, 0])

    def test_descriptor_as_section_type(self):
        by_tag = cross_section_distribution(
            self.rect, self.diagram, 'rectangular', 2)
        by_descriptor = cross_section_distribution(
            self.rect, self.diagram, RectangularSection(0.2, 0.4), 2)
        self.assertEqual(by_tag, by_descriptor)

    def test_linear_shear(self):
        props = compute_properties(IBeamSection(), 1e-4)
        dist = CrossSectionStressDistribution(
            props, self.diagram, 'i-beam', 1.5, n_disc=4)
        c = props.max_fiber_distance
        tau = dist.stress_disc[:, 2]
        assert_allclose(tau, 30 * (1 - np.abs(dist.y) / c) / props.area)
        assert_allclose(tau[2], 30 / props.area)
        self.assertTrue(np.all(tau >= 0))

    def test_empty_diagram(self):
        dist = cross_section_distribution(
            self.rect, ForceDiagram.empty(), 'rectangular', 1.0, n_disc=10)
        self.assertEqual(len(dist), 11)
        for point in dist:
            self.assertEqual(point.bending_stress, 0)
            self.assertEqual(point.shear_stress, 0)

    def test_default_position(self):
        dist = CrossSectionStressDistribution(
            self.rect, self.diagram, 'rectangular')
        self.assertEqual(dist.position, 1.5)
        self.assertEqual(dist.forces, (3, 30))

    def test_n_disc_validation(self):
        with self.assertRaises(ValueError):
            CrossSectionStressDistribution(
                self.rect, self.diagram, 'rectangular', 1.0, n_disc=0)

    def test_degenerate(self):
        cases = (
            (SectionProperties(0.1, 0.0, 0.1, 0.1, 0.1, 0.1), 'mom_of_int'),
            (SectionProperties(0.0, 1.0, 0.1, 0.1, 0.1, 0.1), 'area'),
            (SectionProperties(0.1, 1.0, 0.0, 0.0, 0.1, 0.1),
             'max_fiber_distance'),
        )
        for props, quantity in cases:
            with self.assertRaises(DegenerateSectionError) as ctx:
                cross_section_distribution(props, self.diagram, 'circular', 1)
            self.assertEqual(ctx.exception.quantity, quantity)


class TestTables(TestCase):

    def test_tables(self):
        props = compute_properties(RectangularSection(0.2, 0.4), 1e-3)
        diagram = ForceDiagram([0, 1], [1, 2], [3, 4])
        self.assertIn('Q', table_properties(props))
        profile = compute_stress_profile(props, diagram)
        self.assertIn('σ_b', table_stress_profile(profile))
        dist = cross_section_distribution(props, diagram, 'rectangular',
                                          n_disc=2)
        self.assertIn('τ(y)', table_distribution(dist))

    def test_debug_logging(self):
        props = compute_properties(RectangularSection(0.2, 0.4), 1e-3)
        name = ('beamstress.core.postprocessing.stress_field.'
                'StressFieldEngine')
        with self.assertLogs(name, level='DEBUG') as logs:
            StressFieldEngine(props, ForceDiagram([0], [1], [1]),
                              debug=True).stress_profile
        self.assertTrue(any('Stress profile' in m for m in logs.output))

    def test_logger_mixin_only_takes_debug(self):
        mixin = LoggerMixin(debug=True)
        self.assertEqual(mixin.logger.level, logging.DEBUG)
        self.assertEqual(LoggerMixin().logger.level, logging.WARNING)
        with self.assertRaises(TypeError):
            LoggerMixin(False, 'extra')
        with self.assertRaises(TypeError):
            LoggerMixin(verbose=True)


class TestDocstringExamples(TestCase):

    def test_examples(self):
        for module in (cross_section, section_properties, force_diagram,
                       stress_field, cross_section_stress):
            failed, attempted = doctest.testmod(module)
            self.assertGreater(attempted, 0, msg=module.__name__)
            self.assertEqual(failed, 0, msg=module.__name__)
