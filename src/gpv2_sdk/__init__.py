"""GPv2 settlement SDK."""

from .encoding import *  # noqa: F401,F403
from .encoding import __all__

__version__ = "0.1.0"
