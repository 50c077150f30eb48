from pyderiv.language import Language, empty, eps, char, cat, alt, rep, delta, reduction, letrec
from pyderiv.algorithms import nullable, derive, parse_forest, compact, node_count
from pyderiv.parser import Parser, recognize, parse, residual
from pyderiv.trees import draw_witness
from pyderiv._private.exceptions import PyDerivError, MalformedGrammar, InternalInvariantViolation

__author__     = "PyDeriv contributors"
__copyright__  = "Copyright 2026"
__credits__    = ["PyDeriv contributors"]
__license__    = "Apache"
__version__    = "0.1.0"
__maintainer__ = "PyDeriv contributors"
__status__     = "Prototype"
