class PyDerivError(Exception):
    """Base class for errors raised by pyderiv."""


class MalformedGrammar(PyDerivError):
    """A grammar was built in a way that cannot be evaluated, e.g. a letrec
       whose builder returns an atomic expression."""


class InternalInvariantViolation(PyDerivError):
    """An evaluator reached a state that well-formed construction rules out,
       such as an unknown node kind or a re-entrant force."""
