"""Fracture simulation parameters.

Typed parameter record for crack simulations, populated from the
``<crack_params>`` stanza of an XML input file, with a fixed-order text dump.
The simulation itself is not part of this package.
"""

from .core.builder import BuildResult, ConfigBuilder, build, load_params, parse_params
from .core.errors import CrackParamsError, FatalConfigError, MarkupError, ParseError
from .core.params import CrackParams
from .core.render import render
from .core.schema import SCHEMA
from .core.verbosity import Verbosity

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "ConfigBuilder",
    "CrackParams",
    "CrackParamsError",
    "FatalConfigError",
    "MarkupError",
    "ParseError",
    "SCHEMA",
    "Verbosity",
    "build",
    "load_params",
    "parse_params",
    "render",
]
