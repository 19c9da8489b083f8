from dataclasses import dataclass
from typing import Any, Iterable, Mapping, NamedTuple

import numpy as np


class ForceSample(NamedTuple):
    """Internal forces at a single position along the beam."""

    x: float
    shear: float
    moment: float


@dataclass(eq=False)
class ForceDiagram:
    r"""Shear force and bending moment sampled along the beam axis.

    The diagram is produced by an upstream solver and is only read here.

    Parameters
    ----------
    x : :any:`numpy.ndarray`
        Sample positions, non-decreasing.
    shear : :any:`numpy.ndarray`
        Shear force :math:`V(x)` at each position.
    moment : :any:`numpy.ndarray`
        Bending moment :math:`M(x)` at each position.

    Raises
    ------
    ValueError
        :py:attr:`x`, :py:attr:`shear` and :py:attr:`moment` have to be
        one-dimensional and of equal length.
    ValueError
        :py:attr:`x` has to be non-decreasing.

    Examples
    --------
    >>> diagram = ForceDiagram([0, 1, 2], [10, 0, -10], [0, 5, 0])
    >>> len(diagram)
    3
    >>> diagram[1]
    ForceSample(x=1.0, shear=0.0, moment=5.0)
    """

    x: np.ndarray
    shear: np.ndarray
    moment: np.ndarray

    def __post_init__(self):
        self.x = np.asarray(self.x, dtype=float)
        self.shear = np.asarray(self.shear, dtype=float)
        self.moment = np.asarray(self.moment, dtype=float)

        for name in ('x', 'shear', 'moment'):
            if getattr(self, name).ndim != 1:
                raise ValueError(f'"{name}" must be one-dimensional.')
        if not len(self.x) == len(self.shear) == len(self.moment):
            raise ValueError(
                f'"x", "shear" and "moment" must have the same length, got '
                f'{len(self.x)}, {len(self.shear)} and {len(self.moment)}.'
            )
        if np.any(np.diff(self.x) < 0):
            raise ValueError('"x" has to be non-decreasing.')

    @classmethod
    def from_samples(cls, samples: Iterable[Any]):
        """Creates a diagram from single samples.

        Parameters
        ----------
        samples : iterable
            :py:class:`ForceSample` instances, ``(x, shear, moment)``
            tuples or mappings with the keys ``'x'``, ``'shear'`` and
            ``'moment'``.

        Examples
        --------
        >>> diagram = ForceDiagram.from_samples(
        ...     [{"x": 0, "shear": 1000, "moment": 500}, (1, 800, 300)])
        >>> diagram[1]
        ForceSample(x=1.0, shear=800.0, moment=300.0)
        """
        rows = []
        for s in samples:
            if isinstance(s, Mapping):
                rows.append((s['x'], s['shear'], s['moment']))
            else:
                rows.append(tuple(s))
        if not rows:
            return cls.empty()
        x, shear, moment = zip(*rows)
        return cls(x, shear, moment)

    @classmethod
    def from_results(cls, shear_force: Mapping[str, Any],
                     bending_moment: Mapping[str, Any]):
        """Creates a diagram from the solver result format.

        Parameters
        ----------
        shear_force : :any:`dict`
            ``{'x': [...], 'y': [...]}`` with the shear force values.
        bending_moment : :any:`dict`
            ``{'x': [...], 'y': [...]}`` with the bending moment values.
            Only the ``'y'`` values are used, the positions are taken from
            ``shear_force``.
        """
        return cls(shear_force['x'], shear_force['y'], bending_moment['y'])

    @classmethod
    def empty(cls):
        """Returns a diagram without samples."""
        return cls([], [], [])

    @property
    def is_empty(self) -> bool:
        return len(self.x) == 0

    @property
    def midspan(self) -> float:
        """Center of the sampled range, ``0.0`` for an empty diagram."""
        if self.is_empty:
            return 0.0
        return float(self.x[0] + self.x[-1]) / 2

    def index_at(self, position: float) -> int:
        """Returns the index of the sample used for ``position``.

        The first sample with ``x >= position`` is selected. If the position
        lies beyond the last sample, the last sample is used. No
        interpolation takes place.

        Raises
        ------
        IndexError
            If the diagram is empty.

        Examples
        --------
        >>> diagram = ForceDiagram([0, 1, 2, 3], [0, 0, 0, 0], [0, 0, 0, 0])
        >>> diagram.index_at(1.5)
        2
        >>> diagram.index_at(10)
        3
        """
        if self.is_empty:
            raise IndexError('The force diagram contains no samples.')
        i = int(np.searchsorted(self.x, position, side='left'))
        return min(i, len(self.x) - 1)

    def __len__(self):
        return len(self.x)

    def __getitem__(self, i: int) -> ForceSample:
        return ForceSample(
            float(self.x[i]), float(self.shear[i]), float(self.moment[i])
        )

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]
