import logging
from typing import Iterable

from tabulate import tabulate


class LoggerMixin:
    """
    Mixin that equips a component with its own logger.

    The logger is named after the module and class of the subclass. By
    default it stays silent (``NullHandler``, level ``WARNING``). Passing
    ``debug=True`` attaches a formatted stream handler and lowers the level
    to ``DEBUG``. Dataclasses declaring a ``debug`` field are hooked through
    their ``__post_init__``; plain classes through ``__init__``.

    Parameters
    ----------
    debug : bool, optional
        Enables debug-level logging output if True. Default is False.

    Attributes
    ----------
    logger : logging.Logger
        The logger configured for the subclass.
    """

    _formatter = logging.Formatter(
        fmt=(
            "%(asctime)s [%(levelname)s] %(name)s.%(funcName)s():%(lineno)d "
            "- %(message)s"
        ),
        datefmt="%H:%M:%S",
    )

    def __init__(self, debug: bool = False):
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        self._logger.propagate = False

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

        self._logger.setLevel(logging.WARNING)

        if debug:
            # one stream handler per logger, no matter how many instances
            if not any(isinstance(h, logging.StreamHandler)
                       for h in self._logger.handlers):
                sh = logging.StreamHandler()
                sh.setFormatter(self._formatter)
                self._logger.addHandler(sh)
            self._logger.setLevel(logging.DEBUG)

        self._logger.debug(
            "Instantiated %s(debug=%s)", self.__class__.__name__, debug
        )

    @property
    def logger(self) -> logging.Logger:
        """
        Returns the logger instance associated with this object.

        Returns
        -------
        logging.Logger
            The configured logger.
        """
        if not hasattr(self, "_logger"):
            LoggerMixin.__init__(self)
        return self._logger

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        has_debug = "debug" in getattr(cls, "__annotations__", {})

        # Dataclass: set up the logger right before the user __post_init__
        orig_post = getattr(cls, "__post_init__", None)
        if orig_post is not None and has_debug:
            def wrapped_post(self, *a, **k):
                LoggerMixin.__init__(self, debug=getattr(self, "debug", False))
                return orig_post(self, *a, **k)

            cls.__post_init__ = wrapped_post
            return

        # Plain class with its own __init__
        orig_init = getattr(cls, "__init__", None)
        if orig_init is not LoggerMixin.__init__:

            def wrapped_init(self, *a, **k):
                LoggerMixin.__init__(self, debug=k.get("debug", False))
                if orig_init is not None:
                    return orig_init(self, *a, **k)

            cls.__init__ = wrapped_init


def table_properties(properties, decimals: int = 6):
    """Render section properties as a two-column grid."""
    rows = [
        ["A", properties.area],
        ["I", properties.mom_of_int],
        ["z_s", properties.centroid_height],
        ["c", properties.max_fiber_distance],
        ["t", properties.thickness],
        ["Q", properties.static_moment],
    ]
    return tabulate(rows, headers=["Property", "Value"], tablefmt="grid",
                    floatfmt=f".{decimals}f")


def table_stress_profile(samples: Iterable, decimals: int = 6):
    """Render a longitudinal stress profile, one row per force sample."""
    data = [[i, s.x, s.bending_stress, s.shear_stress]
            for i, s in enumerate(samples)]
    return tabulate(data, headers=["Nr.", "x", "σ_b", "τ"],
                    tablefmt="grid", floatfmt=f".{decimals}f")


def table_distribution(points: Iterable, decimals: int = 6):
    """Render a transverse stress distribution, one row per fiber."""
    data = [[p.y, p.bending_stress, p.shear_stress] for p in points]
    return tabulate(data, headers=["y", "σ_b(y)", "τ(y)"],
                    tablefmt="grid", floatfmt=f".{decimals}f")
