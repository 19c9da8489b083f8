from beamstress.core import postprocessing, preprocessing
from beamstress.core.exceptions import DegenerateSectionError
from beamstress.core.postprocessing import *  # noqa: F401, F403
from beamstress.core.preprocessing import *  # noqa: F401, F403

__all__ = [
    'DegenerateSectionError',
    'postprocessing',
    'preprocessing',
]
