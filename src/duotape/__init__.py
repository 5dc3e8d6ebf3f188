"""duotape - a two-tape, head-addressable micro-machine interpreter."""

from duotape.core import *  # noqa: F403
from duotape.core import __all__ as __all__
